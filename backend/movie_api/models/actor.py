"""
Movie API Backend — Actor Collection
======================================

Document shape (collection `actors`):
    {
        "_id":          ObjectId,
        "name":         str (≤ 100 chars),
        "moviesPlayed": [ObjectId → movies],
        "createdAt":    datetime (UTC)
    }

Reads expand `moviesPlayed` into `{id, title, releaseYear}` summaries.
"""

from bson import ObjectId

from movie_api.models.base import COMMON_FIELD_TYPES, CollectionModel, Expansion

ACTOR = CollectionModel(
    resource_type="actor",
    collection="actors",
    field_types={
        **COMMON_FIELD_TYPES,
        "name": str,
        "moviesPlayed": ObjectId,
    },
    expansions=(
        Expansion(path="moviesPlayed", collection="movies", fields=("title", "releaseYear")),
    ),
)
