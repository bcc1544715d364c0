"""Review submission, deletion and listings."""
from __future__ import annotations

import logging

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session, selectinload

from porchlight.core.security import Identity
from porchlight.models import Answer, Question, Review
from porchlight.schemas.review import ReviewCreate
from porchlight.services.addresses import find_or_create_address
from porchlight.services.errors import InvalidRequestError, NotFoundError, PermissionDeniedError
from porchlight.services.scoring import (
    ReviewSummary,
    ScoredReview,
    score_review,
    summarize_address_reviews,
)
from porchlight.services.users import ensure_local_user

__all__ = [
    "create_review",
    "delete_review",
    "list_address_reviews",
    "list_recent_reviews",
    "list_review_page",
    "list_user_reviews",
]

logger = logging.getLogger(__name__)


def _reviews_query() -> Select[tuple[Review]]:
    return select(Review).options(
        selectinload(Review.address),
        selectinload(Review.answers).selectinload(Answer.question),
    )


def create_review(db: Session, payload: ReviewCreate, identity: Identity | None) -> Review:
    """Store a review and its answers in a single transaction.

    The address is created on first use. Signed-in callers get their local
    user record refreshed as part of the same transaction.

    Raises:
        InvalidRequestError: If an answer refers to an unknown question.
    """
    question_ids = set(payload.answers)
    if question_ids:
        known = set(db.scalars(select(Question.id).where(Question.id.in_(question_ids))))
        unknown = sorted(question_ids - known)
        if unknown:
            raise InvalidRequestError(f"Unknown question IDs: {unknown}")

    address = find_or_create_address(
        db,
        street_address=payload.street_address,
        city=payload.city,
        state=payload.state,
        zip_code=payload.zip_code,
    )
    review = Review(
        address=address,
        user_id=identity.user_id if identity else None,
        user_email=identity.email if identity else None,
        is_anonymous=payload.is_anonymous,
    )
    review.answers = [
        Answer(question_id=question_id, score=answer.score, notes=answer.notes)
        for question_id, answer in payload.answers.items()
    ]
    # Must be pending before ensure_local_user flushes the address collection.
    db.add(review)
    if identity is not None:
        ensure_local_user(db, identity)

    db.commit()
    db.refresh(review)
    logger.info(
        "Stored review %s for address %s with %d answers",
        review.id,
        address.id,
        len(review.answers),
    )
    return review


def _owns(review: Review, identity: Identity) -> bool:
    if review.user_id and review.user_id == identity.user_id:
        return True
    return bool(review.user_email and identity.email and review.user_email == identity.email)


def delete_review(db: Session, review_id: int, identity: Identity, *, is_admin: bool = False) -> None:
    """Delete a review and its answers.

    Raises:
        NotFoundError: If the review does not exist.
        PermissionDeniedError: If the caller neither owns it nor is an admin.
    """
    review = db.get(Review, review_id)
    if review is None:
        raise NotFoundError("Review not found")
    if not (is_admin or _owns(review, identity)):
        logger.warning("User %s tried to delete review %s", identity.user_id, review_id)
        raise PermissionDeniedError("You can only delete your own reviews")

    # The answers cascade is flushed before the review row itself.
    db.delete(review)
    db.commit()
    logger.info("Deleted review %s", review_id)


def list_address_reviews(db: Session, address_id: int) -> ReviewSummary:
    """Return the scored, deduplicated reviews of an address, newest first."""
    reviews = db.scalars(
        _reviews_query()
        .where(Review.address_id == address_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
    ).all()
    return summarize_address_reviews(reviews)


def list_recent_reviews(db: Session, limit: int) -> list[ScoredReview]:
    """Return the newest reviews across all addresses."""
    reviews = db.scalars(
        _reviews_query().order_by(Review.created_at.desc(), Review.id.desc()).limit(limit)
    ).all()
    return [score_review(review) for review in reviews]


def list_user_reviews(db: Session, email: str) -> list[ScoredReview]:
    """Return every review submitted under ``email``, newest first."""
    reviews = db.scalars(
        _reviews_query()
        .where(Review.user_email == email)
        .order_by(Review.created_at.desc(), Review.id.desc())
    ).all()
    return [score_review(review) for review in reviews]


def list_review_page(
    db: Session,
    *,
    limit: int,
    offset: int,
    address_id: int | None = None,
) -> tuple[list[ScoredReview], int]:
    """Return one page of reviews and the total matching count."""
    stmt = _reviews_query()
    count_stmt = select(func.count(Review.id))
    if address_id is not None:
        stmt = stmt.where(Review.address_id == address_id)
        count_stmt = count_stmt.where(Review.address_id == address_id)

    reviews = db.scalars(
        stmt.order_by(Review.created_at.desc(), Review.id.desc()).offset(offset).limit(limit)
    ).all()
    total = db.scalar(count_stmt) or 0
    return [score_review(review) for review in reviews], total
