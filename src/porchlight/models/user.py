# src/porchlight/models/user.py
"""SQLAlchemy model for local records of identity-provider accounts."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from porchlight.db.session import Base
from porchlight.db.time import utcnow

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class User(Base):
    """Local mirror of an account managed by the identity provider.

    Rows are created on first review submission or when an administrator
    changes the account's role or status.
    """

    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=ROLE_USER)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    @property
    def is_admin(self) -> bool:
        """Return True if the local record grants the admin role."""
        return self.role == ROLE_ADMIN
