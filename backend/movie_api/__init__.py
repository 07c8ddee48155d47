"""
Movie API Backend — Application Package Initializer
===================================================

What: Marks the `movie_api` directory as a Python package.
Why:  Enables module imports like `from movie_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend keeps a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Query pipeline, links, CRUD rules
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Collection definitions + Pydantic
    ├─────────────────────────────────────┤
    │   Repository / Database (Storage)   │  ← Motor (async MongoDB driver)
    └─────────────────────────────────────┘

    The query-feature pipeline and the HATEOAS linker are shared by the
    movies, actors and ratings resources; everything else is per-resource
    plumbing around them.
"""

__version__ = "1.0.0"
