"""
Movie API Backend — Database Client Management
================================================

What:  Async MongoDB client, database dependency, startup ping and index bootstrap.
Why:   Centralizes all database connection logic in one place.
How:   A single Motor client per process owns the connection pool; every request
       receives the same `AsyncIOMotorDatabase` handle through a FastAPI dependency.
Who:   Used by route handlers via FastAPI's dependency injection system and by
       the application lifespan.
When:  The client is created lazily on first use; closed at shutdown.

Connection Pooling Strategy:
    maxPoolSize=100:               Concurrent operations per process
    serverSelectionTimeoutMS=5000: A request whose storage never answers fails
                                   after this instead of hanging forever
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from movie_api.config import settings

logger = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None


# ── Client ────────────────────────────────────────────────────────────────
def get_client() -> AsyncIOMotorClient:
    """
    Return the process-wide Motor client, creating it on first call.

    Why lazy: Creating the client at import time would bind it before the
    event loop exists and would make importing the app require a reachable
    MongoDB configuration.
    """
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(
            settings.mongo_uri,
            maxPoolSize=settings.mongo_max_pool_size,
            serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
            tz_aware=True,
        )
    return _client


# ── Database Dependency ───────────────────────────────────────────────────
async def get_database() -> AsyncIOMotorDatabase:
    """
    FastAPI dependency that provides the application database handle.

    Example usage in a route:
        @router.get("/movies")
        async def list_movies(db: AsyncIOMotorDatabase = Depends(get_database)):
            ...

    Tests override this dependency with an in-memory database.
    """
    return get_client()[settings.mongo_db_name]


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def ping_database() -> None:
    """
    What:  Confirms MongoDB is reachable, retrying with exponential backoff.
    When:  Called during application startup (lifespan).
    Raises:
        ConnectionFailure once all attempts are exhausted.
    """
    async for attempt in AsyncRetrying(
        retry=retry_if_exception_type((ConnectionFailure, ServerSelectionTimeoutError)),
        stop=stop_after_attempt(settings.retry_max_attempts),
        wait=wait_exponential_jitter(
            initial=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    ):
        with attempt:
            await get_client().admin.command("ping")
    logger.info("MongoDB reachable at database '%s'", settings.mongo_db_name)


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """
    What:  Creates the indexes the API relies on (idempotent).
    Why:   Unique user emails are enforced by the database; the other indexes
           back the most common filters (ratings by movie, movies by year/actor).
    """
    await db["users"].create_index([("email", ASCENDING)], unique=True)
    await db["ratings"].create_index([("movie", ASCENDING)])
    await db["movies"].create_index([("releaseYear", ASCENDING)])
    await db["movies"].create_index([("actors", ASCENDING)])
    logger.info("MongoDB indexes ensured")


async def close_client() -> None:
    """
    What:  Closes all pooled connections.
    When:  Called during application shutdown (lifespan).
    """
    global _client
    if _client is not None:
        _client.close()
        _client = None
