"""Statistics for the admin dashboard."""
from __future__ import annotations

import calendar
import math
from datetime import datetime

from sqlalchemy import distinct, func, select
from sqlalchemy.orm import Session, selectinload

from porchlight.core.settings import settings
from porchlight.db.time import ensure_aware, utcnow
from porchlight.models import Address, Answer, Question, Review
from porchlight.schemas.admin import (
    DashboardResponse,
    DashboardStatistics,
    LatestReviewer,
    RecentActivity,
    TopAddress,
)
from porchlight.schemas.question import QuestionResponse
from porchlight.services.reviews import list_recent_reviews
from porchlight.services.scoring import round_score, summarize_address_reviews
from porchlight.services.serializers import to_review_response

# Month-over-month rating changes smaller than this are reported as stable.
RATING_TREND_TOLERANCE = 0.1


def shift_months(moment: datetime, months: int) -> datetime:
    """Move ``moment`` by whole calendar months, clamping the day of month."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def growth_rate(current: int, previous: int) -> int:
    """Return the rounded percent change, or 100 when there is no baseline."""
    if previous <= 0:
        return 100
    return math.floor((current - previous) / previous * 100 + 0.5)


def rating_trend(current: float, previous: float) -> str:
    """Classify the change between two average ratings."""
    diff = current - previous
    if abs(diff) < RATING_TREND_TOLERANCE:
        return "stable"
    return "up" if diff > 0 else "down"


def _count_reviews(db: Session, start: datetime | None = None, end: datetime | None = None) -> int:
    stmt = select(func.count(Review.id))
    if start is not None:
        stmt = stmt.where(Review.created_at >= start)
    if end is not None:
        stmt = stmt.where(Review.created_at < end)
    return db.scalar(stmt) or 0


def _count_reviewers(db: Session, start: datetime | None = None, end: datetime | None = None) -> int:
    stmt = select(func.count(distinct(Review.user_id))).where(Review.user_id.is_not(None))
    if start is not None:
        stmt = stmt.where(Review.created_at >= start)
    if end is not None:
        stmt = stmt.where(Review.created_at < end)
    return db.scalar(stmt) or 0


def _average_answer(db: Session, start: datetime | None = None, end: datetime | None = None) -> float:
    stmt = select(func.avg(Answer.score)).where(Answer.score > 0)
    if start is not None:
        stmt = stmt.where(Answer.created_at >= start)
    if end is not None:
        stmt = stmt.where(Answer.created_at < end)
    value = db.scalar(stmt)
    return float(value) if value is not None else 0.0


def _latest_reviewer(db: Session) -> LatestReviewer | None:
    review = db.scalars(
        select(Review).order_by(Review.created_at.desc(), Review.id.desc()).limit(1)
    ).first()
    if review is None:
        return None
    if review.is_anonymous or not review.user_id:
        user_id, label = "unknown", "Anonymous reviewer"
    else:
        user_id, label = review.user_id, f"User ID: {review.user_id[:8]}"
    return LatestReviewer(id=user_id, label=label, created_at=ensure_aware(review.created_at))


def _top_addresses(db: Session, limit: int) -> list[TopAddress]:
    """Rank reviewed addresses by their deduplicated rating.

    Ratings only exist after deduplication, so ranking cannot be pushed into
    SQL: every reviewed address is loaded with its reviews and answers, and
    the cost grows with the total number of answers.
    """
    addresses = db.scalars(
        select(Address)
        .where(Address.reviews.any())
        .options(selectinload(Address.reviews).selectinload(Review.answers))
    ).all()
    ranked: list[TopAddress] = []
    for address in addresses:
        summary = summarize_address_reviews(
            sorted(
                address.reviews,
                key=lambda review: (ensure_aware(review.created_at), review.id),
                reverse=True,
            )
        )
        if summary.review_count == 0:
            continue
        ranked.append(
            TopAddress(
                id=address.id,
                street_address=address.street_address,
                city=address.city,
                review_count=summary.review_count,
                average_rating=summary.average_rating,
            )
        )
    ranked.sort(key=lambda item: (-item.average_rating, -item.review_count, item.id))
    return ranked[:limit]


def build_dashboard(db: Session, now: datetime | None = None) -> DashboardResponse:
    """Assemble dashboard statistics, recent activity and top addresses.

    Args:
        db: Database session.
        now: Reference time; defaults to the current UTC time.
    """
    now = ensure_aware(now) if now is not None else utcnow()
    one_month_ago = shift_months(now, -1)
    two_months_ago = shift_months(one_month_ago, -1)

    reviews_last_month = _count_reviews(db, one_month_ago)
    reviews_month_before = _count_reviews(db, two_months_ago, one_month_ago)
    users_last_month = _count_reviewers(db, one_month_ago)
    users_month_before = _count_reviewers(db, two_months_ago, one_month_ago)

    statistics = DashboardStatistics(
        total_reviews=_count_reviews(db),
        review_growth_rate=growth_rate(reviews_last_month, reviews_month_before),
        total_users=_count_reviewers(db),
        user_growth_rate=growth_rate(users_last_month, users_month_before),
        average_rating=round_score(_average_answer(db)),
        rating_trend=rating_trend(
            _average_answer(db, one_month_ago),
            _average_answer(db, two_months_ago, one_month_ago),
        ),
        active_questions=db.scalar(
            select(func.count(Question.id)).where(Question.is_active.is_(True))
        ) or 0,
        new_questions_this_month=db.scalar(
            select(func.count(Question.id)).where(
                Question.is_active.is_(True),
                Question.created_at >= one_month_ago,
            )
        ) or 0,
    )

    latest_reviews = list_recent_reviews(db, 1)
    latest_question = db.scalars(
        select(Question).order_by(Question.updated_at.desc(), Question.id.desc()).limit(1)
    ).first()
    recent_activity = RecentActivity(
        latest_review=(
            to_review_response(latest_reviews[0], mask_anonymous=False, include_address=True)
            if latest_reviews
            else None
        ),
        latest_user=_latest_reviewer(db),
        latest_question=(
            QuestionResponse.model_validate(latest_question) if latest_question else None
        ),
    )

    return DashboardResponse(
        statistics=statistics,
        recent_activity=recent_activity,
        top_addresses=_top_addresses(db, settings.dashboard_top_addresses),
    )
