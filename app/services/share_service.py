"""Share link service.

Authenticated operations check the owner of the linked note. Token
operations need no login; writes through a token require an EDITOR link.
"""
import logging
import uuid
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.core.exceptions import NotFoundException
from app.models.note import Note
from app.models.share_link import AccessLevel, ShareLink
from app.models.user import User
from app.services.access import ensure_can_edit, ensure_owner
from app.services.media_uploader import ImagePayload
from app.services.note_service import NoteService

logger = logging.getLogger(__name__)


class ShareService:
    """Service for share links."""

    def __init__(self, notes: NoteService):
        self.notes = notes
        self.db = notes.db

    async def _get_link(self, share_id: str, missing: str = "Shared note not found") -> ShareLink:
        result = await self.db.execute(
            select(ShareLink)
            .where(ShareLink.share_id == share_id)
            .options(selectinload(ShareLink.note))
        )
        link = result.scalar_one_or_none()
        if link is None:
            raise NotFoundException(missing)
        return link

    async def create(self, note_id: str, access_level: AccessLevel, requester: User) -> ShareLink:
        note = await self.notes.get_owned_note(note_id, requester)

        link = ShareLink(
            share_id=str(uuid.uuid4()),
            access_level=AccessLevel(access_level),
            note_id=note.id,
        )
        self.db.add(link)
        await self.db.commit()
        await self.db.refresh(link)

        logger.info("Created %s share link for note %s", link.access_level.value, note.id)
        return link

    async def list_for_note(self, note_id: str, requester: User) -> Sequence[ShareLink]:
        note = await self.notes.get_owned_note(note_id, requester)
        result = await self.db.execute(
            select(ShareLink)
            .where(ShareLink.note_id == note.id)
            .order_by(ShareLink.created_at)
        )
        return result.scalars().all()

    async def delete(self, share_id: str, requester: User) -> None:
        link = await self._get_link(share_id, missing="Share link not found")
        ensure_owner(link.note, requester)

        await self.db.delete(link)
        await self.db.commit()
        logger.info("Deleted share link %s", share_id)

    async def resolve(self, share_id: str) -> tuple[Note, AccessLevel]:
        """Look up a token without authentication."""
        link = await self._get_link(share_id)
        return link.note, link.access_level

    async def update_via_share(self, share_id: str, title: str, content: str | None) -> Note:
        link = await self._get_link(share_id)
        ensure_can_edit(link)
        return await self.notes.apply_edit(link.note, title, content)

    async def add_images_via_share(self, share_id: str, images: list[ImagePayload]) -> Note:
        link = await self._get_link(share_id)
        ensure_can_edit(link)
        return await self.notes.apply_add_images(link.note, images)

    async def remove_image_via_share(self, share_id: str, image_url: str | None) -> Note:
        link = await self._get_link(share_id)
        ensure_can_edit(link)
        return await self.notes.apply_remove_image(link.note, image_url)
