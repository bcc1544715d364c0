"""Question catalog management."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from porchlight.models import Answer, Question
from porchlight.schemas.question import QuestionCreate, QuestionUpdate
from porchlight.services.errors import NotFoundError

logger = logging.getLogger(__name__)


def list_questions(db: Session, *, active_only: bool = False) -> Sequence[Question]:
    """Return the catalog in creation order."""
    stmt = select(Question).order_by(Question.id.asc())
    if active_only:
        stmt = stmt.where(Question.is_active.is_(True))
    return db.scalars(stmt).all()


def list_questions_for_admin(db: Session) -> Sequence[Question]:
    """Return the catalog grouped by category, newest first within each."""
    return db.scalars(
        select(Question).order_by(Question.category.asc(), Question.created_at.desc(), Question.id.desc())
    ).all()


def get_question(db: Session, question_id: int) -> Question:
    """Return a question by identifier.

    Raises:
        NotFoundError: If the question does not exist.
    """
    question = db.get(Question, question_id)
    if question is None:
        raise NotFoundError("Question not found")
    return question


def create_question(db: Session, payload: QuestionCreate) -> Question:
    """Add a question to the catalog."""
    question = Question(
        text=payload.text,
        description=payload.description or None,
        category=payload.category,
        is_active=payload.is_active,
    )
    db.add(question)
    db.commit()
    db.refresh(question)
    logger.info("Created question %s in category %s", question.id, question.category)
    return question


def update_question(db: Session, question_id: int, payload: QuestionUpdate) -> Question:
    """Replace a question's text, description, category and status."""
    question = get_question(db, question_id)
    question.text = payload.text
    question.description = payload.description or None
    question.category = payload.category
    question.is_active = payload.is_active
    db.commit()
    db.refresh(question)
    return question


def delete_question(db: Session, question_id: int) -> Question | None:
    """Delete a question, or deactivate it when answers reference it.

    Returns:
        The deactivated question, or None if the row was deleted.
    """
    question = get_question(db, question_id)
    answer_count = db.scalar(
        select(func.count(Answer.id)).where(Answer.question_id == question_id)
    ) or 0

    if answer_count > 0:
        question.is_active = False
        db.commit()
        db.refresh(question)
        logger.info(
            "Deactivated question %s instead of deleting it (%d answers)",
            question_id,
            answer_count,
        )
        return question

    db.delete(question)
    db.commit()
    logger.info("Deleted question %s", question_id)
    return None
