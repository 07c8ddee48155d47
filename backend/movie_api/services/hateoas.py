"""
Movie API Backend — Resource Linker (HATEOAS)
===============================================

What:  Decorates a stored record with hypermedia links to related resources.
Why:   Clients navigate from a movie to its ratings, from a rating to its movie
       and from an actor to their movies without hard-coding URL structure.
How:   The record's identifier is normalized into one `id` field, `_id` is
       dropped, and a fixed `links` mapping is computed from the resource type.

Relations per resource type:
    movie   → self, ratings  ({base}/movies/{id}/ratings)
    rating  → self, movie    ({base}/movies/{movieId})
    actor   → self, movies   ({base}/movies?actors={id})

Failure:
    A record without an identifier, or an unknown type tag, raises
    LinkResolutionError. Emitting `/movies/None` would be worse than failing.
"""

from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import BaseModel

from movie_api.exceptions import LinkResolutionError
from movie_api.schemas.common import Link, LinkedRecord

# Resource type tag → collection path segment
RESOURCE_PATHS: Dict[str, str] = {
    "movie": "movies",
    "actor": "actors",
    "rating": "ratings",
}


def resolve_identifier(value: Any) -> Optional[str]:
    """
    Extract an identifier from a bare id or an expanded object.

    Accepts an ObjectId, a string, or a mapping carrying `id` or `_id`.
    Returns None when nothing usable is present.
    """
    if isinstance(value, Mapping):
        value = value.get("id") if value.get("id") is not None else value.get("_id")
    if value is None or value == "":
        return None
    return str(value)


def _movie_links(data: Mapping[str, Any], record_id: str, base_url: str) -> Dict[str, Link]:
    return {"ratings": Link(href=f"{base_url}/movies/{record_id}/ratings")}


def _rating_links(data: Mapping[str, Any], record_id: str, base_url: str) -> Dict[str, Link]:
    # The movie reference may have been projected away or point at a deleted movie
    movie_id = resolve_identifier(data.get("movie"))
    if movie_id is None:
        return {}
    return {"movie": Link(href=f"{base_url}/movies/{movie_id}")}


def _actor_links(data: Mapping[str, Any], record_id: str, base_url: str) -> Dict[str, Link]:
    # `actors` is the movie field holding actor ids, so the link is a plain equality filter
    return {"movies": Link(href=f"{base_url}/movies?actors={record_id}")}


_RELATIONS: Dict[str, Callable[[Mapping[str, Any], str, str], Dict[str, Link]]] = {
    "movie": _movie_links,
    "rating": _rating_links,
    "actor": _actor_links,
}


def link_record(record: Any, resource_type: str, base_url: str) -> LinkedRecord:
    """
    Normalize the identifier of `record` and merge its hypermedia links.

    Args:
        record:        plain document (already projected) or a LinkedRecord
        resource_type: "movie", "actor" or "rating"
        base_url:      absolute versioned API root, e.g. "http://host/api/v1"

    Returns:
        LinkedRecord with a single `id` and a fresh `links` mapping.
        Decorating an already-decorated record yields an equal record.

    Raises:
        LinkResolutionError: unknown type tag or no resolvable identifier
    """
    relations = _RELATIONS.get(resource_type)
    if relations is None:
        raise LinkResolutionError(f"Unknown resource type '{resource_type}'")

    data = record.model_dump() if isinstance(record, BaseModel) else dict(record)
    data.pop("links", None)
    storage_id = data.pop("_id", None)
    alias_id = data.pop("id", None)
    record_id = resolve_identifier(storage_id if storage_id is not None else alias_id)
    if record_id is None:
        raise LinkResolutionError(f"{resource_type} record has no identifier: keys={sorted(data)}")

    base_url = base_url.rstrip("/")
    links = {"self": Link(href=f"{base_url}/{RESOURCE_PATHS[resource_type]}/{record_id}")}
    links.update(relations(data, record_id, base_url))
    return LinkedRecord(id=record_id, links=links, **data)
