"""
Movie API Backend — Collection Models
=======================================

What:  Declarations of the MongoDB collections the API serves.
Why:   MongoDB is schemaless; the field types declared here drive query-string
       casting, and the expansions declared here drive reference resolution.
"""

from movie_api.models.actor import ACTOR
from movie_api.models.base import CollectionModel, Expansion, parse_object_id
from movie_api.models.movie import GENRES, MOVIE
from movie_api.models.rating import RATING
from movie_api.models.user import USER

__all__ = [
    "ACTOR",
    "CollectionModel",
    "Expansion",
    "GENRES",
    "MOVIE",
    "RATING",
    "USER",
    "parse_object_id",
]
