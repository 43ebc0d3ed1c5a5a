"""Note schemas."""
from datetime import datetime

from pydantic import Field

from app.models.share_link import AccessLevel
from app.schemas.common import CamelModel


class NoteUpdate(CamelModel):
    """Title and content edit. Blank titles are rejected by the service."""

    title: str | None = None
    content: str | None = None


class Note(CamelModel):
    """Note response schema."""

    id: str
    title: str
    content: str
    image_urls: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class NoteImages(CamelModel):
    """Image list after an add or remove."""

    id: str
    image_urls: list[str]
    message: str


class ImageRemove(CamelModel):
    image_url: str | None = None


class SharedNote(CamelModel):
    """Note as seen through a share link."""

    id: str
    title: str
    content: str
    created_at: datetime
    image_urls: list[str]
    access_level: AccessLevel


class SharedNoteUpdated(CamelModel):
    id: str
    title: str
    content: str
    updated_at: datetime
