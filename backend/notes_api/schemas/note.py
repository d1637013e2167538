"""
Notes API — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the API contract between frontend and backend.
Why:   Input normalization, automatic serialization, and OpenAPI doc generation.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the OpenAPI document.

Design Decision:
    `title` is optional at the schema level on purpose: a missing title must
    produce 400 `{"error": "Title is required"}` from the service, not
    FastAPI's generic 422 field report.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NotePayload(BaseModel):
    """
    What:  Body of POST /notes and PUT /notes/{id}.
    How:   `content` absent or null becomes '' here, at the input boundary,
           so the service and the store only ever see a string.
    """
    title: Optional[str] = Field(default=None, description="Note title (required, non-empty)")
    content: str = Field(default="", description="Note body; defaults to an empty string")

    @field_validator("content", mode="before")
    @classmethod
    def default_content(cls, v):
        return "" if v is None else v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  Full representation of a note.
    Who:   Returned by every /notes endpoint except DELETE.
    """
    id: int = Field(description="Store-assigned note identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body ('' when empty)")
    created_at: datetime = Field(description="When the note was created (ISO 8601)")
    updated_at: datetime = Field(description="When the note was last updated (ISO 8601)")

    model_config = {"from_attributes": True}

    @field_validator("content", mode="before")
    @classmethod
    def null_content(cls, v):
        # Rows written outside the API may carry NULL content
        return "" if v is None else v


class MessageResponse(BaseModel):
    """Confirmation body, e.g. for DELETE /notes/{id}."""
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by all failure responses.

    Example:
        {"error": "Note not found"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """
    What:  Liveness response for GET /health.

    `status` is always "OK" while the process answers; `database` reports the
    result of a SELECT 1 probe for operators.
    """
    status: str = Field(default="OK", description="Always 'OK' when the service responds")
    message: str = Field(default="Backend is running", description="Human-readable status")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
