"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from porchlight.core.security import AdminAllowList, Identity, TokenError, decode_identity_token
from porchlight.db.session import get_db
from porchlight.services import users as user_service
from porchlight.services.errors import (
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
    ServiceError,
)

# Missing credentials are handled per endpoint so that anonymous access stays possible.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_admin_allow_list(request: Request) -> AdminAllowList:
    """Return the administrator allow-list configured at start-up."""
    allow_list: AdminAllowList = request.app.state.admin_allow_list
    return allow_list


AllowListDep = Annotated[AdminAllowList, Depends(get_admin_allow_list)]


def _identity_from_credentials(credentials: HTTPAuthorizationCredentials, db: Session) -> Identity:
    """Verify the bearer token and reject deactivated accounts.

    Raises:
        HTTPException: 401 for an invalid token, 403 for a deactivated account.
    """
    try:
        identity = decode_identity_token(credentials.credentials)
    except TokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from err

    local_user = user_service.get_local_user(db, identity.user_id)
    if local_user is not None and not local_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account has been deactivated",
        )
    return identity


def get_optional_identity(credentials: CredentialsDep, db: SessionDep) -> Identity | None:
    """Return the caller's identity, or None for anonymous requests."""
    if credentials is None:
        return None
    return _identity_from_credentials(credentials, db)


def get_current_identity(credentials: CredentialsDep, db: SessionDep) -> Identity:
    """Return the caller's identity, requiring authentication."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _identity_from_credentials(credentials, db)


OptionalIdentityDep = Annotated[Identity | None, Depends(get_optional_identity)]
CurrentIdentityDep = Annotated[Identity, Depends(get_current_identity)]


def get_admin_identity(
    identity: CurrentIdentityDep,
    db: SessionDep,
    allow_list: AllowListDep,
) -> Identity:
    """Return the caller's identity, requiring administrator access."""
    if not user_service.is_admin(db, identity, allow_list):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")
    return identity


AdminIdentityDep = Annotated[Identity, Depends(get_admin_identity)]

_STATUS_BY_ERROR: dict[type[ServiceError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    InvalidRequestError: status.HTTP_400_BAD_REQUEST,
}


def http_error(err: ServiceError) -> HTTPException:
    """Translate a service error into the matching HTTP exception."""
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(err, error_type):
            return HTTPException(status_code=status_code, detail=str(err))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(err))
