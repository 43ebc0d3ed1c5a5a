"""Unauthenticated routes addressed by share token."""
from fastapi import APIRouter, Body, File, UploadFile

from app.api.notes import images_response, read_images
from app.core.deps import ShareServiceDep
from app.schemas.note import ImageRemove, NoteImages, NoteUpdate, SharedNote, SharedNoteUpdated

router = APIRouter()


@router.get("/{share_id}", response_model=SharedNote)
async def get_shared_note(share_id: str, shares: ShareServiceDep):
    """Read a note through a VIEWER or EDITOR link."""
    note, access_level = await shares.resolve(share_id)
    return SharedNote(
        id=note.id,
        title=note.title,
        content=note.content,
        created_at=note.created_at,
        image_urls=list(note.image_urls or []),
        access_level=access_level,
    )


@router.put("/{share_id}", response_model=SharedNoteUpdated)
async def update_shared_note(share_id: str, note_update: NoteUpdate, shares: ShareServiceDep):
    """Edit a note through an EDITOR link."""
    note = await shares.update_via_share(share_id, note_update.title, note_update.content)
    return SharedNoteUpdated(
        id=note.id,
        title=note.title,
        content=note.content,
        updated_at=note.updated_at,
    )


@router.post("/{share_id}/images", response_model=NoteImages)
async def add_images_to_shared_note(
    share_id: str,
    shares: ShareServiceDep,
    images: list[UploadFile] = File(...),
):
    note = await shares.add_images_via_share(share_id, await read_images(images))
    return images_response(note, "Images added successfully")


@router.delete("/{share_id}/images", response_model=NoteImages)
async def remove_image_from_shared_note(
    share_id: str,
    shares: ShareServiceDep,
    request: ImageRemove = Body(...),
):
    note = await shares.remove_image_via_share(share_id, request.image_url)
    return images_response(note, "Image deleted successfully")
