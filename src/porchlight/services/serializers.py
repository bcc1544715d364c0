"""Conversions from ORM rows and scoring results to API schemas."""
from __future__ import annotations

from porchlight.models import Address
from porchlight.schemas.address import AddressSummaryResponse
from porchlight.schemas.review import AnswerResponse, ReviewAddress, ReviewResponse
from porchlight.services.scoring import ReviewSummary, ScoredReview


def to_review_response(
    scored: ScoredReview,
    *,
    mask_anonymous: bool = True,
    include_address: bool = False,
) -> ReviewResponse:
    """Convert a scored review to its API schema.

    Anonymous reviews lose their user id and email unless ``mask_anonymous``
    is False (owner and admin views).
    """
    review = scored.review
    hide_identity = mask_anonymous and review.is_anonymous
    return ReviewResponse(
        id=review.id,
        address_id=review.address_id,
        user_id=None if hide_identity else review.user_id,
        user_email=None if hide_identity else review.user_email,
        is_anonymous=review.is_anonymous,
        created_at=review.created_at,
        average_score=scored.average_score,
        answers=[AnswerResponse.model_validate(answer) for answer in review.answers],
        address=ReviewAddress.model_validate(review.address) if include_address else None,
    )


def to_address_summary(address: Address, summary: ReviewSummary) -> AddressSummaryResponse:
    """Combine an address row with the summary of its reviews."""
    return AddressSummaryResponse(
        id=address.id,
        street_address=address.street_address,
        city=address.city,
        state=address.state,
        zip_code=address.zip_code,
        formatted_address=address.formatted_address,
        reviews=[to_review_response(scored) for scored in summary.reviews],
        review_count=summary.review_count,
        average_rating=summary.average_rating,
    )
