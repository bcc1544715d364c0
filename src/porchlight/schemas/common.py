"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Offset-based pagination metadata returned by list endpoints."""

    total: int = Field(..., ge=0, description="Number of matching records")
    limit: int = Field(..., ge=1)
    offset: int = Field(..., ge=0)


class MessageResponse(BaseModel):
    """Generic success acknowledgement."""

    success: bool = True
    message: str
