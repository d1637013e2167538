"""
Notes API — Request Logging Middleware
=======================================

What:  One access-log line per notes request, named by operation.
How:   Maps method + path onto the CRUD operation it triggers
       (list/create/get/update/delete) and, for /notes/{id}, the note id,
       then logs outcome and duration on the `notes_api.access` logger.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Example:
    update note=42 -> 404 (3.1ms) [a1b2c3d4]

Store failures (500) log at ERROR, client errors at WARNING, the rest at
INFO. Request bodies are never logged (note content is user data).
"""

import logging
import re
import time
from typing import Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notes_api.middleware.request_id import request_id_var

logger = logging.getLogger("notes_api.access")

_NOTE_PATH = re.compile(r"^/notes/([^/]+)/?$")

_COLLECTION_OPERATIONS = {"GET": "list", "POST": "create"}
_ITEM_OPERATIONS = {"GET": "get", "PUT": "update", "DELETE": "delete"}


def describe_request(method: str, path: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Returns (operation, note_id) for a notes request, (None, None) otherwise.

    The id is taken verbatim from the path, so malformed ids show up in the
    log as sent.
    """
    if path.rstrip("/") == "/notes":
        return _COLLECTION_OPERATIONS.get(method), None
    match = _NOTE_PATH.match(path)
    if match:
        return _ITEM_OPERATIONS.get(method), match.group(1)
    return None, None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per notes operation; other paths (health, docs, preflight) are skipped."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        operation, note_id = describe_request(request.method, request.url.path)
        if operation is None:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        target = f" note={note_id}" if note_id is not None else ""
        logger.log(
            level,
            "%s%s -> %d (%.1fms) [%s]",
            operation,
            target,
            response.status_code,
            elapsed_ms,
            request_id_var.get(""),
        )
        return response
