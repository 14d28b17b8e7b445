"""
Graph API Backend — Application Package Initializer
====================================================

What: Marks the `api` directory as a Python package.
Who:  Imported by uvicorn (`api.main:app`), the `graph-api` console script and pytest.

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Schemas (API contracts)        │  ← Pydantic response models
    ├─────────────────────────────────────┤
    │     Graph (embedded KuzuDB)         │  ← One owned connection per app
    └─────────────────────────────────────┘

    Routes receive the graph database through FastAPI's dependency injection
    (see `api.dependencies`), never through module-level state.
"""

__version__ = "0.1.0"
