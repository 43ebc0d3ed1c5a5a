"""Share link schemas."""
from datetime import datetime

from app.models.share_link import AccessLevel
from app.schemas.common import CamelModel


class ShareCreate(CamelModel):
    access_level: AccessLevel


class ShareLinkCreated(CamelModel):
    shareable_link: str
    access_level: AccessLevel
    share_id: str


class ShareLink(CamelModel):
    """Share link response schema."""

    id: str
    share_id: str
    access_level: AccessLevel
    created_at: datetime
