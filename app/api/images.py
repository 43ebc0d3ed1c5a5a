"""Legacy database-backed image route."""
from urllib.parse import quote

from fastapi import APIRouter, Response
from sqlalchemy import select

from app.core.deps import DbDep
from app.core.exceptions import NotFoundException
from app.models.note import NoteImage

router = APIRouter()


def inline_disposition(filename: str) -> str:
    """Build an inline Content-Disposition that survives latin-1 header encoding."""
    quoted = quote(filename)
    if quoted != filename:
        return f"inline; filename*=utf-8''{quoted}"
    return f'inline; filename="{filename}"'


@router.get("/{image_id}")
async def get_image(image_id: int, db: DbDep):
    """Serve an image stored inline before uploads moved to the media host."""
    result = await db.execute(select(NoteImage).where(NoteImage.id == image_id))
    image = result.scalar_one_or_none()
    if image is None:
        raise NotFoundException("Image not found")

    return Response(
        content=image.image_data,
        media_type=image.image_type,
        headers={"Content-Disposition": inline_disposition(image.image_name)},
    )
