# src/porchlight/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .address import AddressResponse, AddressSuggestion, AddressSummaryResponse, AutocompleteResponse
from .admin import DashboardResponse
from .common import MessageResponse, Pagination
from .question import QuestionCreate, QuestionDeleteResponse, QuestionResponse, QuestionUpdate
from .review import (
    AnswerInput,
    ReviewCreate,
    ReviewCreateResponse,
    ReviewPage,
    ReviewResponse,
)
from .user import LocalUserResponse, UserActionResponse, UserInfoResponse, UserPage

__all__ = [
    "AddressResponse", "AddressSuggestion", "AddressSummaryResponse", "AutocompleteResponse",
    "DashboardResponse",
    "MessageResponse", "Pagination",
    "QuestionCreate", "QuestionDeleteResponse", "QuestionResponse", "QuestionUpdate",
    "AnswerInput", "ReviewCreate", "ReviewCreateResponse", "ReviewPage", "ReviewResponse",
    "LocalUserResponse", "UserActionResponse", "UserInfoResponse", "UserPage",
]
