"""Public stats routes. These never return an error state."""
from fastapi import APIRouter

from app.core.deps import StatsServiceDep
from app.schemas.stats import FeedbackSummary, PublicStats

router = APIRouter()


@router.get("", response_model=PublicStats)
async def get_public_stats(stats: StatsServiceDep):
    return await stats.public_stats()


@router.get("/feedback", response_model=FeedbackSummary)
async def get_feedback_summary(stats: StatsServiceDep):
    return await stats.feedback_summary()
