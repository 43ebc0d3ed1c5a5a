"""Public stats schemas."""
from datetime import datetime

from app.schemas.common import CamelModel


class PublicStats(CamelModel):
    total_users: int
    total_notes: int
    total_shared_links: int
    satisfaction_rate: int
    last_updated: datetime


class FeedbackSummary(CamelModel):
    total_feedback: int
    satisfaction_rate: float
    distribution: dict[int, int]
