"""Question catalog Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class QuestionCreate(BaseModel):
    """Schema for creating or replacing a catalog question."""

    model_config = ConfigDict(str_strip_whitespace=True)

    text: str = Field(..., min_length=1, max_length=500, description="Prompt shown to reviewers")
    description: str | None = Field(None, max_length=2000)
    category: str = Field(..., min_length=1, max_length=64)
    is_active: bool = True


class QuestionUpdate(QuestionCreate):
    """Schema for updating a catalog question; same rules as creation."""


class QuestionResponse(BaseModel):
    """Schema for question information returned by the API."""

    id: int
    text: str
    description: str | None
    category: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class QuestionDeleteResponse(BaseModel):
    """Outcome of a delete request; questions with answers are deactivated."""

    success: bool = True
    deleted: bool
    message: str
    question: QuestionResponse | None = None
