"""
Movie API Backend — Collection Model Primitives
=================================================

What:  The small vocabulary every collection declaration is written in.
Why:   Keeps the repository and the query pipeline generic: they only ever see
       a `CollectionModel`, never a movie- or rating-specific class.

    CollectionModel
        resource_type: tag used by the HATEOAS linker ("movie", "actor", "rating")
        collection:    MongoDB collection name
        field_types:   field → Python type, used to cast query-string values
        expansions:    references that list/detail reads resolve inline

    Expansion
        path:          document field holding an ObjectId (or a list of them)
        collection:    collection the ids point into
        fields:        summary fields copied from the referenced document
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Tuple

from bson import ObjectId
from bson.errors import InvalidId

from movie_api.exceptions import InvalidIdentifierError

# Types a field may be declared with. Anything else is treated as a string.
FieldType = type


@dataclass(frozen=True)
class Expansion:
    """An explicit, opt-in reference resolution (association expansion)."""

    path: str
    collection: str
    fields: Tuple[str, ...]


@dataclass(frozen=True)
class CollectionModel:
    """Declaration of one MongoDB collection served by the API."""

    resource_type: str
    collection: str
    field_types: Mapping[str, FieldType] = field(default_factory=dict)
    expansions: Tuple[Expansion, ...] = ()


# Fields present on every document.
COMMON_FIELD_TYPES: Mapping[str, FieldType] = {
    "_id": ObjectId,
    "createdAt": datetime,
}


def parse_object_id(value: Any, field_name: str = "_id") -> ObjectId:
    """
    Convert a client-supplied identifier into an ObjectId.

    Raises:
        InvalidIdentifierError: value is not a 24-character hex ObjectId (→ 400)
    """
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        raise InvalidIdentifierError(field_name, value)
