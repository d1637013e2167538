"""
Notes API — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes app configuration, middleware registration, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn notes_api.main:app, or the `notes-api` script).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌────────┐ ┌─────────┐ ┌────────┐ ┌──────────┐     │
    │  │ Req ID │→│ Logging │→│  CORS  │→│  Errors  │     │
    │  └────────┘ └─────────┘ └────────┘ └──────────┘     │
    │                                                     │
    │  Routes:                                            │
    │  ┌─────────────────────────────┐ ┌───────────────┐  │
    │  │ /notes  /notes/{id}  (CRUD) │ │ GET /health   │  │
    │  └─────────────────────────────┘ └───────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Database→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create the notes table if missing
    Shutdown: dispose the database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from notes_api import __version__
from notes_api.config import settings
from notes_api.database import dispose_engine, init_database
from notes_api.exceptions import (
    DatabaseError,
    NotesAPIError,
    NotFoundError,
    ValidationError,
)
from notes_api.middleware.errors import INTERNAL_ERROR_MESSAGE, UnhandledErrorMiddleware
from notes_api.middleware.logging import RequestLoggingMiddleware
from notes_api.middleware.request_id import RequestIDMiddleware, request_id_var
from notes_api.routes import health, notes

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (captured by the container runtime)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request noise is covered by RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle: startup and shutdown procedures.

    A database that is down at startup is logged, not fatal: the API comes
    up, /health answers, and store-backed requests return 500 until the
    database is reachable. The table is created on the first startup that
    reaches it.
    """
    setup_logging()
    logger.info("Notes API %s starting up...", __version__)

    await init_database()

    logger.info("Server is running on port %d", settings.port)

    yield

    logger.info("Notes API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 {"error": "Title is required"}
        RequestValidationError  → 400 {"error": "Invalid request"}
        NotFoundError           → 404 {"error": "Note not found"}
        DatabaseError           → 500 {"error": "Internal server error"}
        NotesAPIError (base)    → 500
        anything else           → 500 via UnhandledErrorMiddleware

    Every body has the single key `error`. Internal details (SQL, driver
    messages, stack traces) are logged server-side only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Client omitted a required field."""
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Malformed JSON, non-integer id, or wrongly typed fields."""
        logger.warning(
            "[%s] Request validation failed: %s", request_id_var.get(""), exc.errors()
        )
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        """Requested note doesn't exist."""
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Store failure: generic message to the client, context to the log."""
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})

    @app.exception_handler(NotesAPIError)
    async def handle_app_error(request: Request, exc: NotesAPIError):
        logger.error(
            "[%s] Application error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Notes API",
        description="Create, list, read, update and delete notes.",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # added Errors → CORS → Logging → RequestID,
    # runs RequestID → Logging → CORS → Errors.

    # Innermost, so last-resort 500s still pass through CORS and RequestID
    app.add_middleware(UnhandledErrorMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


# uvicorn expects `notes_api.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve the app on the configured host and port."""
    uvicorn.run(
        "notes_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
