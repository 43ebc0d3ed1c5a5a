"""Services module."""
from app.services.account_service import AccountService
from app.services.feedback_service import FeedbackService
from app.services.media_uploader import (
    CloudinaryUploader,
    ImagePayload,
    LocalMediaUploader,
    MediaUploader,
    create_media_uploader,
    get_media_uploader,
)
from app.services.note_service import NoteService
from app.services.share_service import ShareService
from app.services.stats_service import StatsService

__all__ = [
    "AccountService",
    "NoteService",
    "ShareService",
    "FeedbackService",
    "StatsService",
    "MediaUploader",
    "CloudinaryUploader",
    "LocalMediaUploader",
    "ImagePayload",
    "create_media_uploader",
    "get_media_uploader",
]
