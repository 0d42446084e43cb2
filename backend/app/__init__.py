"""
Trainer API Backend: Application Package Initializer
=====================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend is a thin layered service over a MongoDB collection:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, JSON envelopes
    ├─────────────────────────────────────┤
    │      Repository (Data Access)       │  ← Owns the collection handle
    ├─────────────────────────────────────┤
    │          Schemas (Data)             │  ← Pydantic Trainer + envelopes
    ├─────────────────────────────────────┤
    │        Database (Connection)        │  ← Async MongoDB client
    └─────────────────────────────────────┘

    Routes receive the repository through FastAPI's dependency injection,
    so tests can swap in a repository over an in-memory collection.
"""

__version__ = "1.0.0"
