"""
Notes API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the three failure classes of the API.
Why:   Services raise them without knowing about HTTP; global handlers in
       main.py turn each into a status code and a `{"error": ...}` body.
How:   Each exception carries a client-safe message and an optional context
       dict. Context is logged server-side and never returned to the client.

Exception Hierarchy:
    NotesAPIError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class NotesAPIError(Exception):
    """
    Base exception for all Notes API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesAPIError):
    """
    Raised when client input fails validation.

    When:    POST/PUT /notes without a non-empty title.
    HTTP:    400 Bad Request

    Raised before any store interaction, so invalid input never has side effects.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NotesAPIError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE /notes/{id} where no row matches.
    HTTP:    404 Not Found

    SQLAlchemy reports a missing row as None (or an empty RETURNING set);
    the service converts that into this exception.
    """

    def __init__(
        self,
        resource: str = "Note",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource_id = resource_id


class DatabaseError(NotesAPIError):
    """
    Raised when talking to the store fails.

    When:    Connection refused, pool acquire timed out, statement or commit failed.
    HTTP:    500 Internal Server Error

    The client always gets a generic message; the original error type and
    operation are kept in context for the server log. Not retried.
    """

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
