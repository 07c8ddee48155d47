"""
Movie API Backend — Movie Collection
======================================

Document shape (collection `movies`):
    {
        "_id":         ObjectId,
        "title":       str (≤ 100 chars),
        "releaseYear": int (1888 … current year),
        "genre":       one of GENRES,
        "description": str (≤ 1000 chars, optional),
        "actors":      [ObjectId → actors],
        "createdAt":   datetime (UTC)
    }

`actors` lets `GET /movies?actors=<actorId>` list an actor's movies, which is
the target of an actor's `movies` hypermedia link.
"""

from bson import ObjectId

from movie_api.models.base import COMMON_FIELD_TYPES, CollectionModel

GENRES = (
    "Action",
    "Adventure",
    "Animation",
    "Comedy",
    "Crime",
    "Documentary",
    "Drama",
    "Fantasy",
    "Horror",
    "Mystery",
    "Romance",
    "Sci-Fi",
    "Thriller",
)

# Release years before the first motion picture are rejected
EARLIEST_RELEASE_YEAR = 1888

MOVIE = CollectionModel(
    resource_type="movie",
    collection="movies",
    field_types={
        **COMMON_FIELD_TYPES,
        "title": str,
        "releaseYear": int,
        "genre": str,
        "description": str,
        "actors": ObjectId,
    },
)
