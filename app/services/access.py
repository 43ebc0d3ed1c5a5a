"""Ownership and share-level checks shared by the note and share services."""
from app.core.exceptions import ForbiddenException, InsufficientAccessException
from app.models.note import Note
from app.models.share_link import AccessLevel, ShareLink
from app.models.user import User


def is_owner(note: Note, requester: User) -> bool:
    """True when ``requester`` created ``note``."""
    return note.user_id == requester.id


def ensure_owner(note: Note, requester: User) -> None:
    if not is_owner(note, requester):
        raise ForbiddenException("Access denied")


def can_edit(link: ShareLink) -> bool:
    """Only EDITOR links may write; VIEWER links are read-only."""
    return link.access_level == AccessLevel.EDITOR


def ensure_can_edit(link: ShareLink) -> None:
    if not can_edit(link):
        raise InsufficientAccessException("No edit permission")
