# src/porchlight/api/v1/endpoints/reviews.py
"""Review submission, listing and deletion endpoints."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from porchlight.core.settings import settings
from porchlight.schemas.common import MessageResponse
from porchlight.schemas.review import ReviewCreate, ReviewCreateResponse, ReviewResponse
from porchlight.services import reviews as review_service
from porchlight.services import users as user_service
from porchlight.services.errors import ServiceError
from porchlight.services.serializers import to_review_response

from ..dependencies import (
    AllowListDep,
    CurrentIdentityDep,
    OptionalIdentityDep,
    SessionDep,
    http_error,
)

router = APIRouter(prefix="/reviews", tags=["reviews"])

MAX_RECENT_REVIEWS = 50


@router.get("/", response_model=list[ReviewResponse])
async def list_reviews(
    address_id: int,
    db: SessionDep,
) -> list[ReviewResponse]:
    """List the deduplicated reviews of an address, newest first."""
    summary = review_service.list_address_reviews(db, address_id)
    return [to_review_response(scored, include_address=True) for scored in summary.reviews]


@router.post("/", response_model=ReviewCreateResponse, status_code=status.HTTP_201_CREATED)
async def submit_review(
    review_data: ReviewCreate,
    identity: OptionalIdentityDep,
    db: SessionDep,
) -> ReviewCreateResponse:
    """Submit a review; signing in is optional."""
    try:
        review = review_service.create_review(db, review_data, identity)
    except ServiceError as err:
        raise http_error(err) from err
    return ReviewCreateResponse(review_id=review.id, address_id=review.address_id)


@router.get("/recent", response_model=list[ReviewResponse])
async def recent_reviews(
    db: SessionDep,
    limit: Annotated[int | None, Query(ge=1, le=MAX_RECENT_REVIEWS)] = None,
) -> list[ReviewResponse]:
    """List the newest reviews across all addresses."""
    scored = review_service.list_recent_reviews(
        db,
        limit or settings.recent_reviews_default_limit,
    )
    return [to_review_response(item, include_address=True) for item in scored]


@router.get("/user", response_model=list[ReviewResponse])
async def my_reviews(identity: CurrentIdentityDep, db: SessionDep) -> list[ReviewResponse]:
    """List the caller's own reviews, including anonymous ones."""
    if not identity.email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User email not found",
        )
    scored = review_service.list_user_reviews(db, identity.email)
    return [
        to_review_response(item, mask_anonymous=False, include_address=True)
        for item in scored
    ]


@router.delete("/{review_id}", response_model=MessageResponse)
async def delete_review(
    review_id: int,
    identity: CurrentIdentityDep,
    db: SessionDep,
    allow_list: AllowListDep,
) -> MessageResponse:
    """Delete a review owned by the caller, or any review for admins."""
    try:
        review_service.delete_review(
            db,
            review_id,
            identity,
            is_admin=user_service.is_admin(db, identity, allow_list),
        )
    except ServiceError as err:
        raise http_error(err) from err
    return MessageResponse(message="Review and all associated answers have been deleted")

