"""
WordTally Backend — Application Package Initializer
===================================================

What: Marks the `wordtally` directory as a Python package.
Why:  Enables module imports like `from wordtally.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend keeps a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, auth guard
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← URL pipeline, accounts
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch the page fetcher or the token codec directly; they
    hand a session and a verified user id to a service and shape the result.
"""

__version__ = "1.0.0"
