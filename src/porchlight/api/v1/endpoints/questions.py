# src/porchlight/api/v1/endpoints/questions.py
"""Public question catalog endpoint."""

from fastapi import APIRouter

from porchlight.models import Question
from porchlight.schemas.question import QuestionResponse
from porchlight.services import questions as question_service

from ..dependencies import SessionDep

router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("/", response_model=list[QuestionResponse])
async def list_questions(db: SessionDep, active_only: bool = False) -> list[Question]:
    """List catalog questions in creation order."""
    return list(question_service.list_questions(db, active_only=active_only))
