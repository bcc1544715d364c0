"""Review-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .common import Pagination
from .question import QuestionResponse


class AnswerInput(BaseModel):
    """A single question's rating inside a review submission."""

    score: int = Field(..., ge=0, le=5, description="0 = not rated, 1-5 = rating")
    notes: str | None = Field(None, max_length=2000)


class ReviewCreate(BaseModel):
    """Schema for submitting a review of an address."""

    model_config = ConfigDict(str_strip_whitespace=True)

    street_address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=128)
    state: str = Field(..., min_length=1, max_length=64)
    zip_code: str = Field(..., min_length=1, max_length=16)
    is_anonymous: bool = False
    answers: dict[int, AnswerInput] = Field(
        default_factory=dict,
        description="Answers keyed by question ID",
    )


class ReviewCreateResponse(BaseModel):
    """Identifiers of a newly stored review."""

    success: bool = True
    review_id: int
    address_id: int


class AnswerResponse(BaseModel):
    """Schema for an answer returned by the API."""

    id: int
    question_id: int
    score: int
    notes: str | None
    question: QuestionResponse | None = None

    model_config = ConfigDict(from_attributes=True)


class ReviewAddress(BaseModel):
    """Address fields embedded in review listings."""

    id: int
    street_address: str
    city: str
    state: str
    zip_code: str
    formatted_address: str

    model_config = ConfigDict(from_attributes=True)


class ReviewResponse(BaseModel):
    """Schema for a review with its derived average score."""

    id: int
    address_id: int
    user_id: str | None
    user_email: str | None
    is_anonymous: bool
    created_at: datetime
    average_score: float = Field(..., ge=0, le=5)
    answers: list[AnswerResponse] = Field(default_factory=list)
    address: ReviewAddress | None = None


class ReviewPage(BaseModel):
    """A page of reviews for administrative listings."""

    reviews: list[ReviewResponse]
    pagination: Pagination
