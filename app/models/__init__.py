"""Database models."""
from app.models.feedback import UserFeedback
from app.models.note import Note, NoteImage
from app.models.share_link import AccessLevel, ShareLink
from app.models.user import User

__all__ = [
    "User",
    "Note",
    "NoteImage",
    "ShareLink",
    "AccessLevel",
    "UserFeedback",
]
