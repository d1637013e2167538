"""
Notes API — Note SQLAlchemy Model
==================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from SQLAlchemy's DeclarativeBase; init_database() creates the
       table from this definition at startup.
Who:   Used by NoteService for CRUD operations.

Table Design:
    - id: integer identity assigned by the store, never reused
    - title: required, up to 255 chars
    - content: free text; the API always writes '' rather than NULL
    - created_at / updated_at: filled by the store (CURRENT_TIMESTAMP), so
      every timestamp comes from the database clock, not the app servers

    Index on created_at DESC serves the newest-first listing.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from notes_api.database import Base


class Note(Base):
    """
    A note: title/content pair with creation and update timestamps.

    Lifecycle:
        1. INSERT sets id, created_at and updated_at (all store-assigned)
        2. UPDATE replaces title and content and refreshes updated_at
        3. DELETE removes the row for good (no soft delete)
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    content: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_notes_created_at", created_at.desc()),
        # SQLite only: AUTOINCREMENT stops rowid reuse after deletes
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, created_at='{self.created_at}')>"
