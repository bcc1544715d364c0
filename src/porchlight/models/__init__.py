# src/porchlight/models/__init__.py
"""SQLAlchemy models for the Porchlight application."""

from .address import Address
from .question import Question
from .review import Answer, Review
from .user import ROLE_ADMIN, ROLE_USER, User

__all__ = [
    "Address",
    "Question",
    "Answer", "Review",
    "ROLE_ADMIN", "ROLE_USER", "User",
]
