"""Note and legacy note image models."""
import uuid
from datetime import datetime

from sqlalchemy import JSON, ForeignKey, Index, LargeBinary, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

TITLE_MAX_LENGTH = 255


class Note(Base):
    """Note owned by exactly one user."""

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Ordered image URLs; always reassigned as a new list so the change is tracked
    image_urls: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    # Relationships
    owner = relationship("User", back_populates="notes")
    images = relationship("NoteImage", back_populates="note", cascade="all, delete-orphan")
    share_links = relationship("ShareLink", back_populates="note", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_note_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Note {self.title[:30]}>"


class NoteImage(Base):
    """Image stored inline in the database.

    New uploads go through the media uploader; rows here are only served
    back for notes created before that switch.
    """

    __tablename__ = "note_images"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    note_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("notes.id"),
        nullable=False,
        index=True,
    )
    image_name: Mapped[str] = mapped_column(String(255), nullable=False)
    image_type: Mapped[str] = mapped_column(String(100), nullable=False)
    image_data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)

    note = relationship("Note", back_populates="images")

    def __repr__(self) -> str:
        return f"<NoteImage {self.image_name}>"
