"""Address-related Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .review import ReviewResponse


class AddressResponse(BaseModel):
    """Schema for the stored address fields."""

    id: int
    street_address: str
    city: str
    state: str
    zip_code: str
    formatted_address: str

    model_config = ConfigDict(from_attributes=True)


class AddressSummaryResponse(AddressResponse):
    """Address with its scored, deduplicated reviews and overall rating."""

    reviews: list[ReviewResponse] = Field(default_factory=list)
    review_count: int = Field(..., ge=0)
    average_rating: float = Field(..., ge=0, le=5)


class AddressSuggestion(BaseModel):
    """One autocomplete entry."""

    id: int
    display: str
    review_count: int


class AutocompleteResponse(BaseModel):
    """Autocomplete suggestions, most reviewed first."""

    suggestions: list[AddressSuggestion] = Field(default_factory=list)
