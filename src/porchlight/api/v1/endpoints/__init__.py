# src/porchlight/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .addresses import router as addresses_router
from .admin import router as admin_router
from .questions import router as questions_router
from .reviews import router as reviews_router
from .users import router as users_router

__all__ = [
    "addresses_router",
    "admin_router",
    "questions_router",
    "reviews_router",
    "users_router",
]
