# src/porchlight/api/v1/endpoints/admin.py
"""Administrator endpoints: question catalog, reviews, users and dashboard."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from porchlight.models import Question
from porchlight.schemas.admin import DashboardResponse
from porchlight.schemas.common import Pagination
from porchlight.schemas.question import (
    QuestionCreate,
    QuestionDeleteResponse,
    QuestionResponse,
    QuestionUpdate,
)
from porchlight.schemas.review import ReviewPage
from porchlight.schemas.user import LocalUserResponse, UserActionResponse, UserPage
from porchlight.services import dashboard as dashboard_service
from porchlight.services import questions as question_service
from porchlight.services import reviews as review_service
from porchlight.services import users as user_service
from porchlight.services.errors import ServiceError
from porchlight.services.serializers import to_review_response

from ..dependencies import AdminIdentityDep, SessionDep, http_error

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/questions", response_model=list[QuestionResponse])
async def list_questions(_admin: AdminIdentityDep, db: SessionDep) -> list[Question]:
    """List every question, grouped by category."""
    return list(question_service.list_questions_for_admin(db))


@router.post(
    "/questions",
    response_model=QuestionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_question(
    question_data: QuestionCreate,
    _admin: AdminIdentityDep,
    db: SessionDep,
) -> Question:
    """Add a question to the catalog."""
    return question_service.create_question(db, question_data)


@router.get("/questions/{question_id}", response_model=QuestionResponse)
async def get_question(question_id: int, _admin: AdminIdentityDep, db: SessionDep) -> Question:
    """Get a single question."""
    try:
        return question_service.get_question(db, question_id)
    except ServiceError as err:
        raise http_error(err) from err


@router.put("/questions/{question_id}", response_model=QuestionResponse)
async def update_question(
    question_id: int,
    question_data: QuestionUpdate,
    _admin: AdminIdentityDep,
    db: SessionDep,
) -> Question:
    """Replace a question's fields."""
    try:
        return question_service.update_question(db, question_id, question_data)
    except ServiceError as err:
        raise http_error(err) from err


@router.delete("/questions/{question_id}", response_model=QuestionDeleteResponse)
async def delete_question(
    question_id: int,
    _admin: AdminIdentityDep,
    db: SessionDep,
) -> QuestionDeleteResponse:
    """Delete a question, or deactivate it if it already has answers."""
    try:
        deactivated = question_service.delete_question(db, question_id)
    except ServiceError as err:
        raise http_error(err) from err

    if deactivated is not None:
        return QuestionDeleteResponse(
            deleted=False,
            message="Question has existing answers and was deactivated instead of deleted",
            question=QuestionResponse.model_validate(deactivated),
        )
    return QuestionDeleteResponse(deleted=True, message="Question deleted successfully")


@router.get("/reviews", response_model=ReviewPage)
async def list_reviews(
    _admin: AdminIdentityDep,
    db: SessionDep,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
    address_id: int | None = None,
) -> ReviewPage:
    """Page through all reviews, optionally for one address."""
    scored, total = review_service.list_review_page(
        db,
        limit=limit,
        offset=offset,
        address_id=address_id,
    )
    return ReviewPage(
        reviews=[
            to_review_response(item, mask_anonymous=False, include_address=True)
            for item in scored
        ],
        pagination=Pagination(total=total, limit=limit, offset=offset),
    )


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(_admin: AdminIdentityDep, db: SessionDep) -> DashboardResponse:
    """Return headline statistics, recent activity and top-rated addresses."""
    return dashboard_service.build_dashboard(db)


@router.get("/users", response_model=UserPage)
async def list_users(
    _admin: AdminIdentityDep,
    db: SessionDep,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> UserPage:
    """List local user records with their review counts."""
    rows, total = user_service.list_users(db, skip=offset, limit=limit)
    return UserPage(
        users=[
            LocalUserResponse(
                id=user.id,
                user_id=user.user_id,
                email=user.email,
                name=user.name,
                role=user.role,
                is_active=user.is_active,
                created_at=user.created_at,
                reviews=review_count,
            )
            for user, review_count in rows
        ],
        pagination=Pagination(total=total, limit=limit, offset=offset),
    )


@router.put("/users/{user_id}/make-admin", response_model=UserActionResponse)
async def make_admin(user_id: str, _admin: AdminIdentityDep, db: SessionDep) -> UserActionResponse:
    """Grant the admin role to a user."""
    user_service.make_admin(db, user_id)
    return UserActionResponse(message="User granted admin privileges", user_id=user_id)


@router.put("/users/{user_id}/deactivate", response_model=UserActionResponse)
async def deactivate_user(
    user_id: str,
    admin: AdminIdentityDep,
    db: SessionDep,
) -> UserActionResponse:
    """Deactivate a user's local record."""
    if user_id == admin.user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Administrators cannot deactivate themselves",
        )
    try:
        user_service.deactivate_user(db, user_id)
    except ServiceError as err:
        raise http_error(err) from err
    return UserActionResponse(message="User deactivated successfully", user_id=user_id)
