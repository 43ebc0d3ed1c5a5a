"""Share link model."""
import enum
import uuid
from datetime import datetime

from sqlalchemy import Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class AccessLevel(str, enum.Enum):
    """Access granted by a share link."""
    VIEWER = "VIEWER"
    EDITOR = "EDITOR"


class ShareLink(Base):
    """Unauthenticated access token scoped to one note."""

    __tablename__ = "share_links"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    share_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        unique=True,
        index=True,
        default=lambda: str(uuid.uuid4()),
    )
    access_level: Mapped[AccessLevel] = mapped_column(
        Enum(AccessLevel, native_enum=False, length=10),
        nullable=False,
    )
    note_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("notes.id"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)

    note = relationship("Note", back_populates="share_links")

    def __repr__(self) -> str:
        return f"<ShareLink {self.share_id} {self.access_level.value}>"
