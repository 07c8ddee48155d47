"""
Movie API Backend — Rating Collection
=======================================

Document shape (collection `ratings`):
    {
        "_id":       ObjectId,
        "movie":     ObjectId → movies,
        "user":      ObjectId → users,
        "value":     number (1 … 10),
        "review":    str (≤ 500 chars),
        "createdAt": datetime (UTC)
    }

Reads expand `movie` into `{id, title, releaseYear}` and `user` into `{id, name}`.
"""

from bson import ObjectId

from movie_api.models.base import COMMON_FIELD_TYPES, CollectionModel, Expansion

MIN_RATING = 1
MAX_RATING = 10

RATING = CollectionModel(
    resource_type="rating",
    collection="ratings",
    field_types={
        **COMMON_FIELD_TYPES,
        "movie": ObjectId,
        "user": ObjectId,
        "value": float,
        "review": str,
    },
    expansions=(
        Expansion(path="movie", collection="movies", fields=("title", "releaseYear")),
        Expansion(path="user", collection="users", fields=("name",)),
    ),
)
