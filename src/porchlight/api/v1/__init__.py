# src/porchlight/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    addresses_router,
    admin_router,
    questions_router,
    reviews_router,
    users_router,
)

__all__ = [
    "addresses_router",
    "admin_router",
    "questions_router",
    "reviews_router",
    "users_router",
]
