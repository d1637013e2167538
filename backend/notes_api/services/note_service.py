"""
Notes API — Note Service (Business Logic)
==========================================

What:  List/create/get/update/delete over the `notes` table.
Why:   Keeps the rules (title required, content defaulted, not-found handling,
       store-error translation) independent of HTTP concerns.
How:   Each method receives the request's AsyncSession and issues exactly one
       parameterized statement. Writes use RETURNING so the affected row comes
       back from the same statement, then commit immediately.
Who:   Called by route handlers.

Error Translation:
    missing title          → ValidationError (raised before touching the store)
    no matching row        → NotFoundError
    anything from the store (refused connection, pool timeout, failed
    statement or commit)   → DatabaseError, logged, never retried

Design Decision:
    NoteService is stateless; the session is passed in per call. The session
    dependency owns the connection and returns it to the pool on every exit
    path, so a failed request cannot leak a connection.
"""

import logging
from typing import List

from sqlalchemy import delete, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.exceptions import DatabaseError, NotFoundError, ValidationError
from notes_api.models.note import Note
from notes_api.schemas.note import NotePayload, NoteResponse

logger = logging.getLogger(__name__)

# `notes.id` is a 32-bit integer column; ids outside this range cannot exist.
_MIN_NOTE_ID = 1
_MAX_NOTE_ID = 2_147_483_647


def _require_title(payload: NotePayload) -> str:
    # Empty string counts as missing; whitespace-only titles are accepted.
    if not payload.title:
        raise ValidationError(message="Title is required", field="title")
    return payload.title


def _check_note_id(note_id: int) -> None:
    if not _MIN_NOTE_ID <= note_id <= _MAX_NOTE_ID:
        raise NotFoundError(resource="Note", resource_id=note_id)


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes():  every note, newest first
        - create_note(): insert with store-assigned id and timestamps
        - get_note():    single note retrieval with not-found handling
        - update_note(): replace title/content, refresh updated_at
        - delete_note(): hard delete with not-found handling
    """

    async def list_notes(self, db: AsyncSession) -> List[NoteResponse]:
        """
        Return all notes ordered by created_at descending.

        Query plan:
            SELECT ... FROM notes ORDER BY created_at DESC, id DESC

        Notes created within the same clock tick share created_at; id DESC
        breaks the tie so the newest insert still comes first and the order
        is identical across repeated calls.

        Raises:
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Note).order_by(desc(Note.created_at), desc(Note.id))
            )
            notes = result.scalars().all()
        except Exception as e:
            logger.error("Error fetching notes: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "list", "error_type": type(e).__name__})

        return [NoteResponse.model_validate(note) for note in notes]

    async def create_note(self, db: AsyncSession, payload: NotePayload) -> NoteResponse:
        """
        Insert a new note.

        Query plan:
            INSERT INTO notes (title, content) VALUES (:title, :content) RETURNING *

        id, created_at and updated_at come from the store defaults, so
        created_at == updated_at for a fresh note.

        Raises:
            ValidationError: Title missing or empty (→ 400, no store call)
            DatabaseError: Insert or commit failed (→ 500)
        """
        title = _require_title(payload)

        try:
            result = await db.execute(
                insert(Note).values(title=title, content=payload.content).returning(Note)
            )
            note = result.scalar_one()
            await db.commit()
        except Exception as e:
            logger.error("Error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "create", "error_type": type(e).__name__})

        logger.info("Note %s created", note.id)
        return NoteResponse.model_validate(note)

    async def get_note(self, db: AsyncSession, note_id: int) -> NoteResponse:
        """
        Retrieve a single note by ID.

        Query plan:
            SELECT ... FROM notes WHERE id = :id   (primary key lookup)

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        _check_note_id(note_id)

        try:
            result = await db.execute(select(Note).where(Note.id == note_id))
            note = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Error fetching note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(context={"operation": "get", "note_id": note_id})

        if note is None:
            raise NotFoundError(resource="Note", resource_id=note_id)

        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        db: AsyncSession,
        note_id: int,
        payload: NotePayload,
    ) -> NoteResponse:
        """
        Replace a note's title and content and refresh updated_at.

        Query plan:
            UPDATE notes SET title = :title, content = :content,
                             updated_at = CURRENT_TIMESTAMP
            WHERE id = :id RETURNING *

        id and created_at are never written. An empty RETURNING set means the
        row does not exist.

        Raises:
            ValidationError: Title missing or empty (→ 400, no store call)
            NotFoundError: Note with given ID does not exist (→ 404)
            DatabaseError: Update or commit failed (→ 500)
        """
        title = _require_title(payload)
        _check_note_id(note_id)

        try:
            result = await db.execute(
                update(Note)
                .where(Note.id == note_id)
                .values(title=title, content=payload.content, updated_at=func.now())
                .returning(Note)
                .execution_options(synchronize_session=False)
            )
            note = result.scalar_one_or_none()
            await db.commit()
        except Exception as e:
            logger.error("Error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(context={"operation": "update", "note_id": note_id})

        if note is None:
            raise NotFoundError(resource="Note", resource_id=note_id)

        logger.info("Note %s updated", note_id)
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, note_id: int) -> None:
        """
        Permanently remove a note.

        Query plan:
            DELETE FROM notes WHERE id = :id RETURNING id

        Deleting the same id twice succeeds once and then raises NotFoundError.

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
            DatabaseError: Delete or commit failed (→ 500)
        """
        _check_note_id(note_id)

        try:
            result = await db.execute(
                delete(Note)
                .where(Note.id == note_id)
                .returning(Note.id)
                .execution_options(synchronize_session=False)
            )
            deleted_id = result.scalar_one_or_none()
            await db.commit()
        except Exception as e:
            logger.error("Error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(context={"operation": "delete", "note_id": note_id})

        if deleted_id is None:
            raise NotFoundError(resource="Note", resource_id=note_id)

        logger.info("Note %s deleted", note_id)


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
