"""
Movie API Backend — Actor Service
===================================

What:  Business logic for the actor resource.
How:   Reads expand `moviesPlayed` into `{id, title, releaseYear}` summaries;
       writes store bare movie ObjectIds.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from movie_api.exceptions import NotFoundError
from movie_api.models import ACTOR
from movie_api.repository import MongoRepository
from movie_api.schemas.actor import ActorCreate, ActorUpdate
from movie_api.schemas.common import LinkedRecord, PageEnvelope
from movie_api.services.hateoas import link_record
from movie_api.services.listing import list_resources

logger = logging.getLogger(__name__)


class ActorService:
    async def list_actors(
        self,
        db: AsyncIOMotorDatabase,
        *,
        path: str,
        query_string: str,
        base_url: str,
    ) -> PageEnvelope:
        return await list_resources(
            MongoRepository(db, ACTOR),
            path=path,
            query_string=query_string,
            base_url=base_url,
            expand=ACTOR.expansions,
        )

    async def get_actor(self, db: AsyncIOMotorDatabase, actor_id: str, base_url: str) -> LinkedRecord:
        actor = await MongoRepository(db, ACTOR).get(actor_id, expand=ACTOR.expansions)
        if actor is None:
            raise NotFoundError(resource="actor", resource_id=actor_id)
        return link_record(actor, "actor", base_url)

    async def create_actor(self, db: AsyncIOMotorDatabase, payload: ActorCreate, base_url: str) -> LinkedRecord:
        repository = MongoRepository(db, ACTOR)
        created = await repository.insert(payload.to_document())
        logger.info("Actor created: %s (%s)", created["_id"], created["name"])
        # Re-read so the response carries expanded movie summaries like every other read
        actor = await repository.get(created["_id"], expand=ACTOR.expansions)
        return link_record(actor or created, "actor", base_url)

    async def update_actor(
        self,
        db: AsyncIOMotorDatabase,
        actor_id: str,
        payload: ActorUpdate,
        base_url: str,
    ) -> LinkedRecord:
        repository = MongoRepository(db, ACTOR)
        updated = await repository.update(actor_id, payload.to_changes())
        if updated is None:
            raise NotFoundError(resource="actor", resource_id=actor_id)
        logger.info("Actor updated: %s", actor_id)
        actor = await repository.get(actor_id, expand=ACTOR.expansions)
        return link_record(actor or updated, "actor", base_url)

    async def delete_actor(self, db: AsyncIOMotorDatabase, actor_id: str) -> None:
        if not await MongoRepository(db, ACTOR).delete(actor_id):
            raise NotFoundError(resource="actor", resource_id=actor_id)
        logger.info("Actor deleted: %s", actor_id)


# ── Singleton Instance ────────────────────────────────────────────────────
actor_service = ActorService()
