"""
Movie API Backend — Rating Service
====================================

What:  Business logic for the rating resource.
Who:   Called by the /api/v1/ratings route handlers.

Creation rules (checked in this order):
    1. `movie` and `value` present       else 400 "Please provide movie and rating value"
    2. `value` within 1 … 10              else 400
    3. `movie` is a well-formed ObjectId  else 400 "Invalid movie: <value>."
    4. the movie exists                   else 404 "No movie found with that ID"

The same user may rate the same movie more than once; every rating is kept.

Reads expand `movie` into `{id, title, releaseYear}` and `user` into `{id, name}`.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase

from movie_api.exceptions import NotFoundError, ValidationError
from movie_api.models import MOVIE, RATING, parse_object_id
from movie_api.models.rating import MAX_RATING, MIN_RATING
from movie_api.repository import MongoRepository
from movie_api.schemas.common import LinkedRecord, PageEnvelope
from movie_api.schemas.rating import RatingCreate
from movie_api.services.hateoas import link_record
from movie_api.services.listing import list_resources

logger = logging.getLogger(__name__)


class RatingService:
    async def list_ratings(
        self,
        db: AsyncIOMotorDatabase,
        *,
        path: str,
        query_string: str,
        base_url: str,
    ) -> PageEnvelope:
        return await list_resources(
            MongoRepository(db, RATING),
            path=path,
            query_string=query_string,
            base_url=base_url,
            expand=RATING.expansions,
        )

    async def get_rating(self, db: AsyncIOMotorDatabase, rating_id: str, base_url: str) -> LinkedRecord:
        rating = await MongoRepository(db, RATING).get(rating_id, expand=RATING.expansions)
        if rating is None:
            raise NotFoundError(resource="rating", resource_id=rating_id)
        return link_record(rating, "rating", base_url)

    async def create_rating(
        self,
        db: AsyncIOMotorDatabase,
        payload: RatingCreate,
        user: Dict[str, Any],
        base_url: str,
    ) -> LinkedRecord:
        """
        Store a rating by `user` (the authenticated caller).

        Raises:
            ValidationError: missing movie/value or value out of range (→ 400)
            InvalidIdentifierError: malformed movie id (→ 400)
            NotFoundError: the movie does not exist (→ 404)
        """
        if not payload.movie or not payload.value:
            raise ValidationError(message="Please provide movie and rating value")
        if payload.value < MIN_RATING:
            raise ValidationError(message="Rating must be above 1.0", field="value")
        if payload.value > MAX_RATING:
            raise ValidationError(message="Rating must be below 10.0", field="value")

        movie_id = parse_object_id(payload.movie, "movie")
        if not await MongoRepository(db, MOVIE).exists(movie_id):
            raise NotFoundError(resource="movie", resource_id=payload.movie)

        repository = MongoRepository(db, RATING)
        created = await repository.insert({
            "movie": movie_id,
            "user": parse_object_id(user["_id"], "user"),
            "value": payload.value,
            "review": payload.review or "",
            "createdAt": datetime.now(timezone.utc),
        })
        logger.info(
            "Rating created: %s (movie=%s, user=%s, value=%s)",
            created["_id"], created["movie"], created["user"], created["value"],
        )

        rating = await repository.get(created["_id"], expand=RATING.expansions)
        return link_record(rating or created, "rating", base_url)


# ── Singleton Instance ────────────────────────────────────────────────────
rating_service = RatingService()
