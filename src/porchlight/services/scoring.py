"""Review scoring, address rating and read-time review deduplication.

Every endpoint that reports scores goes through this module so that the
per-review average, the per-address rating and the duplicate filter are
computed the same way everywhere. All functions are pure: they read their
arguments, allocate new results and never touch the database.

Averages are rounded half-up to one decimal place (``3.666...`` becomes
``3.7`` and ``4.25`` becomes ``4.3``).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Protocol, TypeVar

from porchlight.db.time import ensure_aware

__all__ = [
    "ANONYMOUS_KEY",
    "AddressRating",
    "ReviewSummary",
    "ScoredReview",
    "compute_address_rating",
    "compute_review_score",
    "dedup_key",
    "deduplicate_reviews",
    "round_score",
    "score_review",
    "summarize_address_reviews",
]

ANONYMOUS_KEY = "anonymous"
_ONE_DECIMAL = Decimal("0.1")


class HasScore(Protocol):
    """Anything carrying an integer answer score."""

    @property
    def score(self) -> int: ...


class HasAverageScore(Protocol):
    """Anything carrying a derived review average."""

    @property
    def average_score(self) -> float: ...


class ReviewLike(Protocol):
    """Attributes of a review read by the deduplication key."""

    @property
    def created_at(self) -> datetime: ...

    @property
    def user_email(self) -> str | None: ...

    @property
    def answers(self) -> Sequence[Any]: ...


ReviewT = TypeVar("ReviewT", bound=ReviewLike)


@dataclass(frozen=True)
class ScoredReview:
    """A review paired with its derived average score."""

    review: Any
    average_score: float

    @property
    def answers(self) -> Sequence[Any]:
        return self.review.answers

    @property
    def created_at(self) -> datetime:
        return self.review.created_at

    @property
    def user_email(self) -> str | None:
        return self.review.user_email

    @property
    def is_anonymous(self) -> bool:
        return bool(getattr(self.review, "is_anonymous", False))


@dataclass(frozen=True)
class AddressRating:
    """Address-level rating derived from already-scored reviews."""

    average_rating: float
    review_count: int


@dataclass(frozen=True)
class ReviewSummary:
    """Scored, deduplicated reviews of one address and their rating."""

    reviews: list[ScoredReview]
    average_rating: float
    review_count: int


def round_score(value: Decimal | float) -> float:
    """Round a score half-up to one decimal place."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return float(value.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def _rounded_mean(values: Sequence[Decimal]) -> float:
    if not values:
        return 0.0
    return round_score(sum(values, Decimal(0)) / len(values))


def compute_review_score(answers: Iterable[HasScore]) -> float:
    """Return the mean of the rated answers, rounded to one decimal.

    Answers scored 0 mean "not rated" and are left out of both the sum and
    the count. A review with no rated answers scores 0.
    """
    return _rounded_mean([Decimal(answer.score) for answer in answers if answer.score > 0])


def compute_address_rating(reviews: Iterable[HasAverageScore]) -> AddressRating:
    """Return the address rating for an already-deduplicated set of reviews.

    ``review_count`` counts every review passed in. ``average_rating`` only
    averages reviews whose own average score is above 0.
    """
    reviews = list(reviews)
    rated = [
        Decimal(str(review.average_score))
        for review in reviews
        if review.average_score > 0
    ]
    return AddressRating(average_rating=_rounded_mean(rated), review_count=len(reviews))


def dedup_key(review: ReviewLike, tz: tzinfo | None = None) -> str:
    """Return the ``"<identity>-<YYYY-MM-DD>"`` key used to spot duplicates.

    The identity is the reviewer's email, or ``"anonymous"`` for anonymous
    reviews and reviews without an email. The day is the calendar date of
    ``created_at`` in ``tz`` (the local timezone when omitted); naive
    timestamps are read as UTC.
    """
    email = review.user_email
    if getattr(review, "is_anonymous", False) or not email:
        identity = ANONYMOUS_KEY
    else:
        identity = email
    day = ensure_aware(review.created_at).astimezone(tz).date()
    return f"{identity}-{day.isoformat()}"


def deduplicate_reviews(reviews: Iterable[ReviewT], tz: tzinfo | None = None) -> list[ReviewT]:
    """Collapse reviews that look like the same submission.

    Reviews sharing a :func:`dedup_key` are reduced to the one with the most
    answers; on a tie the first one seen wins. The result keeps the order in
    which each key was first seen, so running it twice changes nothing.
    """
    unique: dict[str, ReviewT] = {}
    for review in reviews:
        key = dedup_key(review, tz)
        kept = unique.get(key)
        if kept is None or len(review.answers) > len(kept.answers):
            unique[key] = review
    return list(unique.values())


def score_review(review: Any) -> ScoredReview:
    """Pair a review with its average score."""
    return ScoredReview(review=review, average_score=compute_review_score(review.answers))


def summarize_address_reviews(
    raw_reviews: Iterable[Any],
    tz: tzinfo | None = None,
) -> ReviewSummary:
    """Score, deduplicate and rate the reviews of one address.

    Steps always run in this order: score each review, drop duplicates among
    the scored reviews, then rate the survivors.
    """
    scored = [score_review(review) for review in raw_reviews]
    unique = deduplicate_reviews(scored, tz)
    rating = compute_address_rating(unique)
    return ReviewSummary(
        reviews=unique,
        average_rating=rating.average_rating,
        review_count=rating.review_count,
    )
