"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from .common import Pagination


class UserInfoResponse(BaseModel):
    """The caller's identity as asserted by the identity provider."""

    id: str
    email: str | None
    first_name: str | None
    last_name: str | None
    name: str
    image_url: str | None
    is_admin: bool


class LocalUserResponse(BaseModel):
    """A local user record with its review count."""

    id: int
    user_id: str
    email: str | None
    name: str | None
    role: str
    is_active: bool
    created_at: datetime
    reviews: int

    model_config = ConfigDict(from_attributes=True)


class UserPage(BaseModel):
    """A page of local user records."""

    users: list[LocalUserResponse]
    pagination: Pagination


class UserActionResponse(BaseModel):
    """Acknowledgement of an administrative action on a user."""

    success: bool = True
    message: str
    user_id: str
