"""Bearer token verification and administrator access checks.

Tokens are issued by the external identity provider; this service only
verifies them and reads the identity claims it needs.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from porchlight.core.settings import settings


class TokenError(Exception):
    """Raised when a bearer token cannot be verified."""


@dataclass(frozen=True)
class Identity:
    """Claims describing the caller, as asserted by the identity provider."""

    user_id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    image_url: str | None = None

    @property
    def display_name(self) -> str:
        """Return a human-friendly name, falling back to the username."""
        full_name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return full_name or self.username or "Unknown User"


class AdminAllowList:
    """Static set of administrator emails injected at start-up."""

    def __init__(self, emails: Iterable[str]) -> None:
        self._emails = frozenset(email.strip().lower() for email in emails if email.strip())

    def __contains__(self, email: object) -> bool:
        return isinstance(email, str) and email.strip().lower() in self._emails

    @property
    def configured(self) -> bool:
        """Return True when at least one administrator email is configured."""
        return bool(self._emails)

    def is_admin_email(self, email: str | None) -> bool:
        """Return True if ``email`` is on the allow-list."""
        if not email:
            return False
        return email in self


def decode_identity_token(token: str) -> Identity:
    """Verify a bearer token and return the identity it carries.

    Args:
        token: Encoded JWT presented by the client.

    Returns:
        The identity described by the token claims.

    Raises:
        TokenError: If the signature, expiry or audience is invalid, or the
            token has no subject.
    """
    options = {"verify_aud": settings.jwt_audience is not None}
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options=options,
        )
    except JWTError as err:
        raise TokenError("Could not validate credentials") from err

    subject = payload.get("sub")
    if not subject:
        raise TokenError("Token has no subject")

    return Identity(
        user_id=str(subject),
        email=payload.get("email"),
        first_name=payload.get("given_name"),
        last_name=payload.get("family_name"),
        username=payload.get("preferred_username"),
        image_url=payload.get("picture"),
    )


def create_access_token(subject: str, extra_claims: dict[str, Any] | None = None) -> str:
    """Create a signed token in the identity provider's format.

    Used by local tooling and tests; production tokens come from the provider.
    """
    to_encode: dict[str, Any] = {"sub": subject}
    if extra_claims:
        to_encode.update(extra_claims)
    if settings.jwt_audience is not None:
        to_encode.setdefault("aud", settings.jwt_audience)
    to_encode["exp"] = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt
