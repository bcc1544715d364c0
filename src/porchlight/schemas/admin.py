"""Admin dashboard Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from .question import QuestionResponse
from .review import ReviewResponse


class DashboardStatistics(BaseModel):
    """Headline counters and month-over-month trends."""

    total_reviews: int
    review_growth_rate: int = Field(..., description="Percent change, last month vs the month before")
    total_users: int = Field(..., description="Distinct reviewer identities")
    user_growth_rate: int
    average_rating: float = Field(..., description="Mean of all rated answers")
    rating_trend: Literal["up", "down", "stable"]
    active_questions: int
    new_questions_this_month: int


class LatestReviewer(BaseModel):
    """The reviewer behind the most recent review."""

    id: str
    label: str
    created_at: datetime


class RecentActivity(BaseModel):
    """Latest items across the catalog."""

    latest_review: ReviewResponse | None = None
    latest_user: LatestReviewer | None = None
    latest_question: QuestionResponse | None = None


class TopAddress(BaseModel):
    """An address ranked by rating on the dashboard."""

    id: int
    street_address: str
    city: str
    review_count: int
    average_rating: float


class DashboardResponse(BaseModel):
    """Payload of the admin dashboard."""

    statistics: DashboardStatistics
    recent_activity: RecentActivity
    top_addresses: list[TopAddress]
