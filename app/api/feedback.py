"""Feedback API routes."""
from fastapi import APIRouter

from app.core.deps import CurrentUserDep, FeedbackServiceDep
from app.models.feedback import UserFeedback
from app.schemas.feedback import (
    FeedbackRequest,
    FeedbackStatus,
    FeedbackSubmitted,
    FeedbackUpdated,
    FeedbackView,
)

router = APIRouter()


def _view(feedback: UserFeedback) -> FeedbackView:
    return FeedbackView(
        rating=feedback.rating,
        message=feedback.message,
        submitted_at=feedback.created_at,
        updated_at=feedback.updated_at,
    )


@router.post("/submit", response_model=FeedbackSubmitted)
async def submit_feedback(
    feedback_data: FeedbackRequest,
    current_user: CurrentUserDep,
    feedback: FeedbackServiceDep,
):
    """Submit the user's one feedback record."""
    saved = await feedback.submit(current_user, feedback_data.rating, feedback_data.message)
    return FeedbackSubmitted(message="Thank you for your feedback!", feedback_id=saved.id)


@router.get("/status", response_model=FeedbackStatus)
async def get_feedback_status(current_user: CurrentUserDep, feedback: FeedbackServiceDep):
    """Tell the client whether to show the submit or the update form."""
    existing = await feedback.get_for_user(current_user)
    return FeedbackStatus(
        has_submitted=existing is not None,
        feedback=_view(existing) if existing else None,
    )


@router.put("/update", response_model=FeedbackUpdated)
async def update_feedback(
    feedback_data: FeedbackRequest,
    current_user: CurrentUserDep,
    feedback: FeedbackServiceDep,
):
    updated = await feedback.update(current_user, feedback_data.rating, feedback_data.message)
    return FeedbackUpdated(message="Feedback updated successfully!", feedback=_view(updated))
