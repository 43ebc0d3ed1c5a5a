"""Feedback service: one satisfaction rating per user."""
import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import (
    DuplicateResourceException,
    NotFoundException,
    ValidationException,
)
from app.models.feedback import UserFeedback
from app.models.user import User

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(rating: int | None) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationException(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    return rating


class FeedbackService:
    """Service for user feedback."""

    def __init__(self, db: AsyncSession, default_satisfaction_rate: float | None = None):
        self.db = db
        self.default_satisfaction_rate = (
            settings.default_satisfaction_rate
            if default_satisfaction_rate is None
            else default_satisfaction_rate
        )

    async def get_for_user(self, user: User) -> UserFeedback | None:
        result = await self.db.execute(select(UserFeedback).where(UserFeedback.user_id == user.id))
        return result.scalar_one_or_none()

    async def has_submitted(self, user: User) -> bool:
        result = await self.db.execute(
            select(func.count()).select_from(UserFeedback).where(UserFeedback.user_id == user.id)
        )
        return (result.scalar() or 0) > 0

    async def submit(self, user: User, rating: int, message: str | None) -> UserFeedback:
        """
        Record the user's first feedback.

        The unique constraint on ``user_id`` decides the winner when two
        submissions race; the loser gets DuplicateResourceException.
        """
        rating = validate_rating(rating)
        user_id = user.id

        feedback = UserFeedback(user_id=user_id, rating=rating, message=message)
        self.db.add(feedback)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateResourceException(
                "You have already submitted feedback. You can update your existing feedback."
            )
        await self.db.refresh(feedback)

        logger.info("Feedback %s saved for user %s, rating=%d", feedback.id, user_id, rating)
        return feedback

    async def update(self, user: User, rating: int, message: str | None) -> UserFeedback:
        rating = validate_rating(rating)

        feedback = await self.get_for_user(user)
        if feedback is None:
            raise NotFoundException("No existing feedback found to update")

        feedback.rating = rating
        feedback.message = message
        await self.db.commit()
        await self.db.refresh(feedback)

        logger.info("Feedback %s updated, rating=%d", feedback.id, rating)
        return feedback

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(UserFeedback))
        return result.scalar() or 0

    async def average_satisfaction_percent(self) -> float:
        """Mean rating mapped linearly from the 1-5 scale onto 0-100%."""
        result = await self.db.execute(select(func.avg(UserFeedback.rating)))
        average = result.scalar()
        if average is None:
            return self.default_satisfaction_rate
        return float(average) / MAX_RATING * 100

    async def rating_distribution(self) -> dict[int, int]:
        """Count of feedback rows per rating, zero-filled for 1..5."""
        result = await self.db.execute(
            select(UserFeedback.rating, func.count())
            .group_by(UserFeedback.rating)
            .order_by(UserFeedback.rating)
        )
        distribution = {rating: 0 for rating in range(MIN_RATING, MAX_RATING + 1)}
        for rating, count in result.all():
            distribution[rating] = count
        return distribution
