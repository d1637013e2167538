"""
Notes API — Unhandled Error Middleware
=======================================

What:  Turns any exception that escapes the routes and the registered
       exception handlers into 500 {"error": "Internal server error"}.
Why:   Starlette hands `exception_handler(Exception)` to its outermost
       ServerErrorMiddleware, which answers outside the CORS and request-ID
       middleware. A browser could not read such a 500. Catching here, inside
       CORS, keeps the CORS and X-Request-ID headers on the error response.
When:  Innermost user middleware (registered first in create_app).
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from notes_api.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Last-resort 500 for exceptions no handler claimed; stack trace goes to the log only."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                request_id_var.get(""),
                request.method,
                request.url.path,
                str(exc),
                exc_info=True,
            )
            return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})
