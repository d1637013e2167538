"""
Notes API — Application Package Initializer
============================================

What: Marks the `notes_api` directory as a Python package.
Why:  Enables module imports like `from notes_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, store calls
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes translate HTTP into service calls, services own the rules
    (title required, content defaulted) and the single statement each
    operation issues, and the database layer owns the connection pool.
"""

__version__ = "1.0.0"
