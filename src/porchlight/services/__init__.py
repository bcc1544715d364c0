"""Business logic services for the Porchlight application."""

from .scoring import (
    AddressRating,
    ReviewSummary,
    ScoredReview,
    compute_address_rating,
    compute_review_score,
    deduplicate_reviews,
    summarize_address_reviews,
)

__all__ = [
    "AddressRating",
    "ReviewSummary",
    "ScoredReview",
    "compute_address_rating",
    "compute_review_score",
    "deduplicate_reviews",
    "summarize_address_reviews",
]
