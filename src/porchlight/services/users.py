"""CRUD-style helpers for local user records."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from porchlight.core.security import AdminAllowList, Identity
from porchlight.models import ROLE_ADMIN, Review, User
from porchlight.services.errors import NotFoundError

__all__ = [
    "deactivate_user",
    "ensure_local_user",
    "get_local_user",
    "is_admin",
    "list_users",
    "make_admin",
]

logger = logging.getLogger(__name__)


def get_local_user(db: Session, user_id: str) -> User | None:
    """Return the local record for an identity-provider subject."""
    return db.scalars(select(User).where(User.user_id == user_id)).first()


def ensure_local_user(db: Session, identity: Identity) -> User:
    """Create or refresh the local record for ``identity``.

    Changes are flushed, not committed.
    """
    user = get_local_user(db, identity.user_id)
    if user is None:
        user = User(user_id=identity.user_id)
        db.add(user)
    if identity.email:
        user.email = identity.email
    user.name = identity.display_name
    db.flush()
    return user


def is_admin(db: Session, identity: Identity, allow_list: AdminAllowList) -> bool:
    """Return True if the caller is on the allow-list or holds the admin role."""
    if allow_list.is_admin_email(identity.email):
        return True
    user = get_local_user(db, identity.user_id)
    return user is not None and user.is_active and user.is_admin


def list_users(db: Session, skip: int = 0, limit: int = 100) -> tuple[Sequence[tuple[User, int]], int]:
    """Return local users, newest first, with their review counts and the total."""
    review_counts = (
        select(Review.user_id, func.count(Review.id).label("review_count"))
        .where(Review.user_id.is_not(None))
        .group_by(Review.user_id)
        .subquery()
    )
    rows = db.execute(
        select(User, func.coalesce(review_counts.c.review_count, 0))
        .outerjoin(review_counts, review_counts.c.user_id == User.user_id)
        .order_by(User.created_at.desc(), User.id.desc())
        .offset(skip)
        .limit(limit)
    ).all()
    total = db.scalar(select(func.count(User.id))) or 0
    return [(user, int(count)) for user, count in rows], total


def make_admin(db: Session, user_id: str) -> User:
    """Grant the admin role, creating the local record when missing."""
    user = get_local_user(db, user_id)
    if user is None:
        user = User(user_id=user_id)
        db.add(user)
    user.role = ROLE_ADMIN
    db.commit()
    db.refresh(user)
    logger.info("Granted admin role to %s", user_id)
    return user


def deactivate_user(db: Session, user_id: str) -> User:
    """Mark a local user inactive so their tokens are refused.

    Raises:
        NotFoundError: If the user has no local record.
    """
    user = get_local_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    user.is_active = False
    db.commit()
    db.refresh(user)
    logger.info("Deactivated user %s", user_id)
    return user
