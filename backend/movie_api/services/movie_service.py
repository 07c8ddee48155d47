"""
Movie API Backend — Movie Service
===================================

What:  Business logic for the movie resource: paginated listing, CRUD and the
       per-movie ratings list.
Who:   Called by the /api/v1/movies route handlers.

Design Decision:
    MovieService is stateless. It receives the database handle on each call
    and builds a repository from it, so tests can hand it an in-memory
    database and no state is shared between requests.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from movie_api.exceptions import NotFoundError
from movie_api.models import MOVIE, RATING, parse_object_id
from movie_api.repository import MongoRepository
from movie_api.schemas.common import LinkedRecord, PageEnvelope, RecordListResponse
from movie_api.schemas.movie import MovieCreate, MovieUpdate
from movie_api.services.hateoas import link_record
from movie_api.services.listing import list_resources

logger = logging.getLogger(__name__)


class MovieService:
    """
    Responsibilities:
        - list_movies():        query pipeline + envelope
        - get/create/update/delete_movie(): single-record operations
        - list_movie_ratings(): every rating of one movie, without pagination
    """

    async def list_movies(
        self,
        db: AsyncIOMotorDatabase,
        *,
        path: str,
        query_string: str,
        base_url: str,
    ) -> PageEnvelope:
        return await list_resources(
            MongoRepository(db, MOVIE),
            path=path,
            query_string=query_string,
            base_url=base_url,
        )

    async def get_movie(self, db: AsyncIOMotorDatabase, movie_id: str, base_url: str) -> LinkedRecord:
        """
        Raises:
            InvalidIdentifierError: malformed id (→ 400)
            NotFoundError: no such movie (→ 404)
        """
        movie = await MongoRepository(db, MOVIE).get(movie_id)
        if movie is None:
            raise NotFoundError(resource="movie", resource_id=movie_id)
        return link_record(movie, "movie", base_url)

    async def create_movie(self, db: AsyncIOMotorDatabase, payload: MovieCreate, base_url: str) -> LinkedRecord:
        movie = await MongoRepository(db, MOVIE).insert(payload.to_document())
        logger.info("Movie created: %s (%s)", movie["_id"], movie["title"])
        return link_record(movie, "movie", base_url)

    async def update_movie(
        self,
        db: AsyncIOMotorDatabase,
        movie_id: str,
        payload: MovieUpdate,
        base_url: str,
    ) -> LinkedRecord:
        movie = await MongoRepository(db, MOVIE).update(movie_id, payload.to_changes())
        if movie is None:
            raise NotFoundError(resource="movie", resource_id=movie_id)
        logger.info("Movie updated: %s", movie_id)
        return link_record(movie, "movie", base_url)

    async def delete_movie(self, db: AsyncIOMotorDatabase, movie_id: str) -> None:
        deleted = await MongoRepository(db, MOVIE).delete(movie_id)
        if not deleted:
            raise NotFoundError(resource="movie", resource_id=movie_id)
        logger.info("Movie deleted: %s", movie_id)

    async def list_movie_ratings(
        self,
        db: AsyncIOMotorDatabase,
        movie_id: str,
        base_url: str,
    ) -> RecordListResponse:
        """
        All ratings of one movie. The query pipeline is not applied here:
        no filtering, sorting, projection or pagination.
        """
        oid = parse_object_id(movie_id)
        if not await MongoRepository(db, MOVIE).exists(oid):
            raise NotFoundError(resource="movie", resource_id=movie_id)

        ratings = await MongoRepository(db, RATING).find_all({"movie": oid}, expand=RATING.expansions)
        records = [link_record(rating, "rating", base_url) for rating in ratings]
        return RecordListResponse(results=len(records), data={"ratings": records})


# ── Singleton Instance ────────────────────────────────────────────────────
movie_service = MovieService()
