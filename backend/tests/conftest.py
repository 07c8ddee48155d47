"""
Movie API Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (in-memory MongoDB, API client,
       authenticated user, seed data).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── mongo_db:      in-memory MongoDB database (mongomock-motor)
    ├── test_client:   HTTPX AsyncClient wired to the app, get_database overridden
    ├── user:          a stored user document
    ├── auth_headers:  Authorization header carrying a token for `user`
    └── seed_movies:   factory inserting N movies
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["MONGO_URI"] = "mongodb://localhost:27017"
os.environ["MONGO_DB_NAME"] = "movie_api_test"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_LEVEL"] = "WARNING"
# The app instance (and its rate limiter state) is shared by every test
os.environ["RATE_LIMIT_REQUESTS"] = "100000"

from datetime import datetime, timezone
from typing import Any, Dict, List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from movie_api.database import get_database
from movie_api.security import create_access_token, hash_password

GENRE_CYCLE = ("Drama", "Comedy", "Action", "Thriller", "Sci-Fi")


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mongo_db():
    """
    Provides an empty in-memory MongoDB database.

    What:    mongomock-motor database with Motor's async API.
    Why:     Repository and endpoint tests exercise real query documents
             (filters, sorts, projections) without a MongoDB server.
    """
    return AsyncMongoMockClient()["movie_api_test"]


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(mongo_db):
    """
    Provides an async HTTP test client for endpoint testing.

    How:     ASGITransport routes requests directly to the app; the
             get_database dependency is overridden with `mongo_db`.
             The lifespan (MongoDB ping, indexes) is not run.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from movie_api.main import app

    async def override_get_database():
        return mongo_db

    app.dependency_overrides[get_database] = override_get_database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# ══════════════════════════════════════════════════════════════════════════
# Authentication
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def user(mongo_db) -> Dict[str, Any]:
    """A stored user; `password` is the plain-text password, for login tests."""
    document = {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "password": hash_password("correct-horse"),
        "createdAt": datetime.now(timezone.utc),
    }
    result = await mongo_db["users"].insert_one(document)
    return {"id": str(result.inserted_id), "name": "Ada Lovelace", "email": "ada@example.com", "password": "correct-horse"}


@pytest.fixture
def auth_headers(user) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user['id'])}"}


# ══════════════════════════════════════════════════════════════════════════
# Seed Data
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def seed_movies(mongo_db):
    """
    Factory inserting `count` movies titled "Movie 01", "Movie 02", ...
    released 1991, 1992, ... and returns their ids as strings, in order.

    Usage:
        ids = await seed_movies(25)
    """

    async def _seed(count: int) -> List[str]:
        documents = [
            {
                "title": f"Movie {i:02d}",
                "releaseYear": 1990 + i,
                "genre": GENRE_CYCLE[i % len(GENRE_CYCLE)],
                "description": f"Description of movie {i}",
                "actors": [],
                "createdAt": datetime.now(timezone.utc),
            }
            for i in range(1, count + 1)
        ]
        if not documents:
            return []
        result = await mongo_db["movies"].insert_many(documents)
        return [str(oid) for oid in result.inserted_ids]

    return _seed
