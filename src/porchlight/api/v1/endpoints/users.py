# src/porchlight/api/v1/endpoints/users.py
"""Endpoints describing the signed-in caller."""

from fastapi import APIRouter

from porchlight.schemas.user import UserInfoResponse
from porchlight.services import users as user_service

from ..dependencies import AllowListDep, CurrentIdentityDep, SessionDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserInfoResponse)
async def read_current_user(
    identity: CurrentIdentityDep,
    db: SessionDep,
    allow_list: AllowListDep,
) -> UserInfoResponse:
    """Return the caller's identity and whether they have admin access."""
    return UserInfoResponse(
        id=identity.user_id,
        email=identity.email,
        first_name=identity.first_name,
        last_name=identity.last_name,
        name=identity.display_name,
        image_url=identity.image_url,
        is_admin=user_service.is_admin(db, identity, allow_list),
    )
