"""Pydantic schemas."""
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.feedback import (
    FeedbackRequest,
    FeedbackStatus,
    FeedbackSubmitted,
    FeedbackUpdated,
    FeedbackView,
)
from app.schemas.note import (
    ImageRemove,
    Note,
    NoteImages,
    NoteUpdate,
    SharedNote,
    SharedNoteUpdated,
)
from app.schemas.share import ShareCreate, ShareLink, ShareLinkCreated
from app.schemas.stats import FeedbackSummary, PublicStats
from app.schemas.user import LoginResponse, User, UserCreate, UserLogin

__all__ = [
    "ErrorResponse",
    "MessageResponse",
    "User",
    "UserCreate",
    "UserLogin",
    "LoginResponse",
    "Note",
    "NoteUpdate",
    "NoteImages",
    "ImageRemove",
    "SharedNote",
    "SharedNoteUpdated",
    "ShareCreate",
    "ShareLink",
    "ShareLinkCreated",
    "FeedbackRequest",
    "FeedbackView",
    "FeedbackSubmitted",
    "FeedbackStatus",
    "FeedbackUpdated",
    "PublicStats",
    "FeedbackSummary",
]
