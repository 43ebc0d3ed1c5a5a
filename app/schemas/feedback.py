"""Feedback schemas."""
from datetime import datetime

from pydantic import StrictInt

from app.schemas.common import CamelModel


class FeedbackRequest(CamelModel):
    """Rating range is checked by the service so both endpoints share one rule."""

    rating: StrictInt
    message: str | None = None


class FeedbackView(CamelModel):
    rating: int
    message: str | None = None
    submitted_at: datetime
    updated_at: datetime


class FeedbackSubmitted(CamelModel):
    success: bool = True
    message: str
    feedback_id: int


class FeedbackStatus(CamelModel):
    has_submitted: bool
    feedback: FeedbackView | None = None


class FeedbackUpdated(CamelModel):
    success: bool = True
    message: str
    feedback: FeedbackView
