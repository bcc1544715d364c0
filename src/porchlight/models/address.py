# src/porchlight/models/address.py
"""SQLAlchemy model for reviewed addresses."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from porchlight.db.session import Base
from porchlight.db.time import utcnow

if TYPE_CHECKING:
    from .review import Review


class Address(Base):
    """A normalized location that reviews attach to.

    ``formatted_address`` is the natural key; two submissions that format to
    the same string share one row.
    """

    __tablename__ = "address"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    street_address: Mapped[str] = mapped_column(Text, nullable=False)
    city: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    state: Mapped[str] = mapped_column(String(64), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(16), nullable=False)
    formatted_address: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    reviews: Mapped[list[Review]] = relationship(
        "Review",
        back_populates="address",
        order_by="Review.created_at.desc()",
    )

    @property
    def display(self) -> str:
        """Return the address as entered, for suggestion lists."""
        return f"{self.street_address}, {self.city}, {self.state} {self.zip_code}"
