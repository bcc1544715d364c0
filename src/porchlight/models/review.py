# src/porchlight/models/review.py
"""Models for reviews and the per-question answers they contain."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from porchlight.db.session import Base
from porchlight.db.time import utcnow

from .question import Question

if TYPE_CHECKING:
    from .address import Address


class Review(Base):
    """One submission of ratings for an address.

    The review's average score is derived from its answers on read and is
    never stored.
    """

    __tablename__ = "review"
    __table_args__ = (
        Index("ix_review_address_created", "address_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    address_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("address.id"),
        nullable=False,
    )
    # Subject and email asserted by the identity provider at submission time.
    user_id: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    user_email: Mapped[str | None] = mapped_column(String(320), nullable=True, index=True)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    address: Mapped[Address] = relationship("Address", back_populates="reviews")
    answers: Mapped[list[Answer]] = relationship(
        "Answer",
        back_populates="review",
        cascade="all, delete-orphan",
        order_by="Answer.id",
    )


class Answer(Base):
    """A review's score and optional note for one question."""

    __tablename__ = "answer"
    __table_args__ = (
        CheckConstraint("score >= 0 AND score <= 5", name="ck_answer_score_range"),
        Index("ix_answer_review_id", "review_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    review_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("review.id", ondelete="CASCADE"),
        nullable=False,
    )
    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("question.id"),
        nullable=False,
        index=True,
    )
    # 0 = not rated, 1-5 = rating.
    score: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    review: Mapped[Review] = relationship("Review", back_populates="answers")
    question: Mapped[Question] = relationship("Question")
