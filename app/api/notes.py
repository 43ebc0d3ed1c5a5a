"""Notes API routes."""
import logging

from fastapi import APIRouter, Body, File, Form, Response, UploadFile, status

from app.config import settings
from app.core.deps import CurrentUserDep, NoteServiceDep, ShareServiceDep
from app.core.exceptions import ValidationException
from app.models.note import Note as NoteModel
from app.schemas.note import ImageRemove, Note, NoteImages, NoteUpdate
from app.schemas.share import ShareCreate, ShareLink, ShareLinkCreated
from app.services.media_uploader import ImagePayload

logger = logging.getLogger(__name__)

router = APIRouter()


async def read_images(
    files: list[UploadFile] | None,
    max_size: int | None = None,
) -> list[ImagePayload]:
    """Read multipart uploads into plain payloads for the services.

    Uploads whose declared size is over the limit are rejected before
    their bodies are read.
    """
    max_size = max_size or settings.max_upload_size
    for upload in files or []:
        if upload.size is not None and upload.size > max_size:
            raise ValidationException(f"Image {upload.filename} exceeds the upload size limit")

    payloads = []
    for upload in files or []:
        payloads.append(
            ImagePayload(
                filename=upload.filename or "image",
                content_type=upload.content_type,
                data=await upload.read(),
            )
        )
    return payloads


def images_response(note: NoteModel, message: str) -> NoteImages:
    return NoteImages(id=note.id, image_urls=list(note.image_urls or []), message=message)


@router.get("", response_model=list[Note])
async def list_notes(current_user: CurrentUserDep, notes: NoteServiceDep):
    """Get the user's notes, newest first."""
    return [Note.model_validate(n) for n in await notes.list_for_user(current_user)]


@router.post("", response_model=Note, status_code=status.HTTP_201_CREATED)
async def create_note(
    current_user: CurrentUserDep,
    notes: NoteServiceDep,
    title: str = Form(...),
    content: str = Form(""),
    images: list[UploadFile] | None = File(None),
):
    """Create a note with optional image attachments."""
    note = await notes.create(title, content, await read_images(images), current_user)
    return Note.model_validate(note)


@router.put("/{note_id}", response_model=Note)
async def update_note(
    note_id: str,
    note_update: NoteUpdate,
    current_user: CurrentUserDep,
    notes: NoteServiceDep,
):
    """Update a note's title and content."""
    note = await notes.update(note_id, note_update.title, note_update.content, current_user)
    return Note.model_validate(note)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(note_id: str, current_user: CurrentUserDep, notes: NoteServiceDep):
    """Delete a note together with its share links."""
    await notes.delete(note_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{note_id}/images", response_model=NoteImages)
async def add_images(
    note_id: str,
    current_user: CurrentUserDep,
    notes: NoteServiceDep,
    images: list[UploadFile] = File(...),
):
    """Append images to a note."""
    payloads = await read_images(images)
    logger.info("Adding %d image(s) to note %s", len(payloads), note_id)
    note = await notes.add_images(note_id, payloads, current_user)
    return images_response(note, "Images added successfully")


@router.delete("/{note_id}/images", response_model=NoteImages)
async def remove_image(
    note_id: str,
    current_user: CurrentUserDep,
    notes: NoteServiceDep,
    request: ImageRemove = Body(...),
):
    """Detach one image from a note."""
    note = await notes.remove_image(note_id, request.image_url, current_user)
    return images_response(note, "Image deleted successfully")


@router.post("/{note_id}/share", response_model=ShareLinkCreated)
async def create_share_link(
    note_id: str,
    share_data: ShareCreate,
    current_user: CurrentUserDep,
    shares: ShareServiceDep,
):
    """Create a VIEWER or EDITOR share link."""
    link = await shares.create(note_id, share_data.access_level, current_user)
    return ShareLinkCreated(
        shareable_link=f"{settings.share_path_prefix}{link.share_id}",
        access_level=link.access_level,
        share_id=link.share_id,
    )


@router.get("/{note_id}/shares", response_model=list[ShareLink])
async def list_share_links(note_id: str, current_user: CurrentUserDep, shares: ShareServiceDep):
    """List a note's share links. Owner only."""
    return [ShareLink.model_validate(link) for link in await shares.list_for_note(note_id, current_user)]
