"""
Notes API — Notes Route Handlers
=================================

What:  CRUD endpoints over /notes.
How:   Extracts path/body data, delegates to NoteService, returns JSON.
Who:   Called by the notes frontend (form + list).

Routes are thin: status codes and response models live here; validation and
store access live in NoteService. Errors raised by the service are turned
into `{"error": ...}` responses by the handlers registered in main.py.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.database import get_db_session
from notes_api.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NotePayload,
    NoteResponse,
)
from notes_api.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all notes, newest first",
)
async def list_notes(
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_notes(db)


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Title missing", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: Optional[NotePayload] = None,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Create a note from `{title, content?}`.

    A request without a body is treated as `{}` and rejected for the
    missing title, the same as an explicit empty object.
    """
    return await note_service.create_note(db, payload or NotePayload())


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.get_note(db, note_id)


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Title missing", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Replace a note's title and content",
)
async def update_note(
    note_id: int,
    payload: Optional[NotePayload] = None,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Rewrite title and content (content defaults to '').

    id and created_at are preserved; updated_at is set by the store.
    """
    return await note_service.update_note(db, note_id, payload or NotePayload())


@router.delete(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await note_service.delete_note(db, note_id)
    return MessageResponse(message="Note deleted successfully")
