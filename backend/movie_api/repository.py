"""
Movie API Backend — MongoDB Repository (Storage Abstraction)
==============================================================

What:  The single place that turns a `QuerySpec` into MongoDB operations.
Why:   Services describe WHAT they want (a QuerySpec, an expansion list);
       the repository decides HOW to ask the driver for it.
How:   One repository per collection, built from a `CollectionModel`.

Operations:
    find(spec, expand)         matching + orderBy + select + skip + take
    find_all(predicate, ...)   matching without a window
    count(predicate)           total matches, ignoring the window
    get / exists               lookup by ObjectId
    find_one(predicate)        first match of an arbitrary predicate
    insert / update / delete   single-document writes
    insert_many / delete_many  bulk writes (seeding)
    expand(docs, expansions)   association expansion (explicit, opt-in)

Output documents are plain dicts with every ObjectId converted to `str`, so
they can be serialized as JSON without further work.

Error translation:
    DuplicateKeyError  → DuplicateFieldError (400)
    other PyMongoError → DatabaseError (500, generic message to the client)
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from movie_api.exceptions import DatabaseError, DuplicateFieldError
from movie_api.models.base import CollectionModel, Expansion, parse_object_id
from movie_api.services.query_features import QuerySpec

logger = logging.getLogger(__name__)


def to_plain(value: Any) -> Any:
    """Recursively convert ObjectIds into strings."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [to_plain(item) for item in value]
    return value


def _reference_ids(value: Any) -> List[ObjectId]:
    """ObjectIds held by a reference field (single or list)."""
    if isinstance(value, ObjectId):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, ObjectId)]
    return []


def _duplicate_value(exc: DuplicateKeyError) -> str:
    key_value = (exc.details or {}).get("keyValue") or {}
    if key_value:
        return ", ".join(f'"{value}"' for value in key_value.values())
    return "(unknown)"


class MongoRepository:
    """
    Generic repository over one MongoDB collection.

    Stateless apart from the collection handle; construct one per request.
    """

    def __init__(self, db: AsyncIOMotorDatabase, model: CollectionModel):
        self.db = db
        self.model = model
        self.collection = db[model.collection]

    # ── Error translation ─────────────────────────────────────────────────
    @contextmanager
    def _storage_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except DuplicateKeyError as e:
            key_value = (e.details or {}).get("keyValue") or {}
            raise DuplicateFieldError(
                _duplicate_value(e),
                field=next(iter(key_value), None),
            ) from e
        except PyMongoError as e:
            logger.error(
                "MongoDB %s on '%s' failed: %s",
                operation, self.model.collection, str(e), exc_info=True,
            )
            raise DatabaseError(
                context={"operation": operation, "collection": self.model.collection},
            ) from e

    # ── Reads ─────────────────────────────────────────────────────────────
    async def find(
        self,
        spec: QuerySpec,
        expand: Sequence[Expansion] = (),
    ) -> List[Dict[str, Any]]:
        """Execute one page of a QuerySpec."""
        with self._storage_errors("find"):
            cursor = self.collection.find(spec.predicate, spec.projection)
            if spec.sort_keys:
                cursor = cursor.sort(list(spec.sort_keys))
            cursor = cursor.skip(spec.skip).limit(spec.limit)
            documents = await cursor.to_list(length=spec.limit)
            documents = await self.expand(documents, expand)
        return [to_plain(document) for document in documents]

    async def find_all(
        self,
        predicate: Mapping[str, Any],
        expand: Sequence[Expansion] = (),
    ) -> List[Dict[str, Any]]:
        """Every matching document, in storage order."""
        with self._storage_errors("find"):
            documents = await self.collection.find(dict(predicate)).to_list(length=None)
            documents = await self.expand(documents, expand)
        return [to_plain(document) for document in documents]

    async def count(self, predicate: Mapping[str, Any]) -> int:
        """Number of documents matching `predicate`, ignoring any page window."""
        with self._storage_errors("count"):
            return await self.collection.count_documents(dict(predicate))

    async def get(
        self,
        record_id: Any,
        expand: Sequence[Expansion] = (),
    ) -> Optional[Dict[str, Any]]:
        """One document by id, or None. Malformed ids raise InvalidIdentifierError."""
        oid = parse_object_id(record_id)
        with self._storage_errors("find_one"):
            document = await self.collection.find_one({"_id": oid})
            if document is None:
                return None
            [document] = await self.expand([document], expand)
        return to_plain(document)

    async def find_one(self, predicate: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """First document matching `predicate`, or None."""
        with self._storage_errors("find_one"):
            document = await self.collection.find_one(dict(predicate))
        return to_plain(document) if document is not None else None

    async def exists(self, record_id: Any, field_name: str = "_id") -> bool:
        oid = parse_object_id(record_id, field_name)
        with self._storage_errors("find_one"):
            return await self.collection.find_one({"_id": oid}, {"_id": 1}) is not None

    # ── Writes ────────────────────────────────────────────────────────────
    async def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Insert and return the stored document (with its new `_id`)."""
        stored = dict(document)
        with self._storage_errors("insert_one"):
            result = await self.collection.insert_one(stored)
        stored["_id"] = result.inserted_id
        return to_plain(stored)

    async def insert_many(self, documents: Sequence[Dict[str, Any]]) -> List[str]:
        """Bulk insert; returns the new ids as strings, in input order."""
        if not documents:
            return []
        with self._storage_errors("insert_many"):
            result = await self.collection.insert_many([dict(document) for document in documents])
        return [str(oid) for oid in result.inserted_ids]

    async def update(
        self,
        record_id: Any,
        changes: Mapping[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """Apply `$set` and return the updated document, or None if absent."""
        oid = parse_object_id(record_id)
        if not changes:
            return await self.get(oid)
        with self._storage_errors("find_one_and_update"):
            document = await self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": dict(changes)},
                return_document=ReturnDocument.AFTER,
            )
        return to_plain(document) if document is not None else None

    async def delete(self, record_id: Any) -> bool:
        """Delete by id. Returns False when nothing matched."""
        oid = parse_object_id(record_id)
        with self._storage_errors("delete_one"):
            result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def delete_many(self, predicate: Mapping[str, Any]) -> int:
        with self._storage_errors("delete_many"):
            result = await self.collection.delete_many(dict(predicate))
        return result.deleted_count

    # ── Association expansion ─────────────────────────────────────────────
    async def expand(
        self,
        documents: List[Dict[str, Any]],
        expansions: Sequence[Expansion],
    ) -> List[Dict[str, Any]]:
        """
        Replace reference ids with `{id, <fields>}` summaries, in place.

        One `$in` query per expansion, whatever the number of documents.
        Fields removed by a projection are left alone. A dangling single
        reference becomes None; dangling ids inside a list are dropped.
        Values that are already expanded are kept as they are.
        """
        for expansion in expansions:
            wanted = {
                oid
                for document in documents
                if expansion.path in document
                for oid in _reference_ids(document[expansion.path])
            }
            if not wanted:
                continue

            projection = dict.fromkeys(expansion.fields, 1)
            cursor = self.db[expansion.collection].find({"_id": {"$in": list(wanted)}}, projection)
            targets = {}
            for target in await cursor.to_list(length=None):
                summary = {"id": target["_id"]}
                summary.update((name, target.get(name)) for name in expansion.fields)
                targets[target["_id"]] = summary

            for document in documents:
                value = document.get(expansion.path)
                if isinstance(value, ObjectId):
                    document[expansion.path] = targets.get(value)
                elif isinstance(value, list):
                    document[expansion.path] = [
                        targets[item] if isinstance(item, ObjectId) else item
                        for item in value
                        if not isinstance(item, ObjectId) or item in targets
                    ]
        return documents
