"""Note service: owner-scoped CRUD and image attachment."""
import logging
from datetime import datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import settings
from app.core.exceptions import (
    ImageNotInNoteException,
    MediaStorageError,
    NotFoundException,
    UpstreamFailureException,
    ValidationException,
)
from app.models.note import TITLE_MAX_LENGTH, Note
from app.models.user import User
from app.services.access import ensure_owner
from app.services.media_uploader import ImagePayload, MediaUploader

logger = logging.getLogger(__name__)


def validate_title(title: str | None) -> str:
    """Reject blank titles and titles over the column limit."""
    if title is None or not title.strip():
        raise ValidationException("Title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationException(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")
    return title


class NoteService:
    """Service for notes owned by the requesting user.

    The share service reuses the ``apply_*`` helpers so that token-scoped
    edits follow exactly the same rules as owner edits.
    """

    def __init__(
        self,
        db: AsyncSession,
        uploader: MediaUploader,
        max_upload_size: int | None = None,
    ):
        self.db = db
        self.uploader = uploader
        self.max_upload_size = max_upload_size or settings.max_upload_size

    async def get_note(self, note_id: str, *options) -> Note:
        result = await self.db.execute(select(Note).where(Note.id == note_id).options(*options))
        note = result.scalar_one_or_none()
        if note is None:
            raise NotFoundException("Note not found")
        return note

    async def get_owned_note(self, note_id: str, requester: User, *options) -> Note:
        note = await self.get_note(note_id, *options)
        ensure_owner(note, requester)
        return note

    async def list_for_user(self, user: User) -> Sequence[Note]:
        """Get the user's notes, newest first."""
        result = await self.db.execute(
            select(Note)
            .where(Note.user_id == user.id)
            .order_by(Note.created_at.desc())
        )
        return result.scalars().all()

    async def create(
        self,
        title: str,
        content: str | None,
        images: list[ImagePayload] | None,
        user: User,
    ) -> Note:
        """Create a note, uploading any attached images first."""
        title = validate_title(title)
        image_urls = await self._upload_images(images or [])

        note = Note(
            title=title,
            content=content or "",
            image_urls=image_urls,
            user_id=user.id,
        )
        self.db.add(note)
        await self.db.commit()
        await self.db.refresh(note)

        logger.info("Created note %s with %d image(s)", note.id, len(image_urls))
        return note

    async def update(self, note_id: str, title: str, content: str | None, requester: User) -> Note:
        """Update title and content. Images are left untouched."""
        note = await self.get_owned_note(note_id, requester)
        return await self.apply_edit(note, title, content)

    async def delete(self, note_id: str, requester: User) -> None:
        """Delete a note, its share links and legacy images."""
        note = await self.get_owned_note(
            note_id,
            requester,
            selectinload(Note.share_links),
            selectinload(Note.images),
        )

        for url in list(note.image_urls or []):
            await self.discard_remote(url)

        await self.db.delete(note)
        await self.db.commit()
        logger.info("Deleted note %s", note_id)

    async def add_images(self, note_id: str, images: list[ImagePayload], requester: User) -> Note:
        note = await self.get_owned_note(note_id, requester)
        return await self.apply_add_images(note, images)

    async def remove_image(self, note_id: str, image_url: str, requester: User) -> Note:
        note = await self.get_owned_note(note_id, requester)
        return await self.apply_remove_image(note, image_url)

    async def apply_edit(self, note: Note, title: str, content: str | None) -> Note:
        note.title = validate_title(title)
        note.content = content or ""
        note.updated_at = datetime.utcnow()
        await self.db.commit()
        return note

    async def apply_add_images(self, note: Note, images: list[ImagePayload]) -> Note:
        new_urls = await self._upload_images(images)
        if new_urls:
            note.image_urls = list(note.image_urls or []) + new_urls
            note.updated_at = datetime.utcnow()
            await self.db.commit()
            logger.info("Added %d image(s) to note %s", len(new_urls), note.id)
        return note

    async def apply_remove_image(self, note: Note, image_url: str | None) -> Note:
        urls = list(note.image_urls or [])
        if not image_url or image_url not in urls:
            raise ImageNotInNoteException("Image not found in this note")

        await self.discard_remote(image_url)

        urls.remove(image_url)
        note.image_urls = urls
        note.updated_at = datetime.utcnow()
        await self.db.commit()
        logger.info("Removed image from note %s, %d left", note.id, len(urls))
        return note

    async def discard_remote(self, url: str) -> None:
        """Best-effort deletion of a remote asset.

        A media host outage must never block note edits or deletion, so
        failures are logged and dropped.
        """
        try:
            await self.uploader.delete(url)
        except Exception as e:
            logger.warning("Failed to delete image %s from media host: %s", url, e)

    async def _upload_images(self, images: list[ImagePayload]) -> list[str]:
        payloads = [image for image in images if not image.is_empty]
        for image in payloads:
            if len(image.data) > self.max_upload_size:
                raise ValidationException(f"Image {image.filename} exceeds the upload size limit")

        urls: list[str] = []
        try:
            for image in payloads:
                urls.append(await self.uploader.upload(image.data, image.filename))
        except MediaStorageError as e:
            logger.error("Image upload failed after %d of %d: %s", len(urls), len(payloads), e.message)
            for url in urls:
                await self.discard_remote(url)
            raise UpstreamFailureException("Failed to upload images")
        return urls
