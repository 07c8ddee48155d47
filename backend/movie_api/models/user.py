"""
Movie API Backend — User Collection
=====================================

Document shape (collection `users`):
    {
        "_id":       ObjectId,
        "name":      str,
        "email":     str (unique, lower-cased),
        "password":  str (passlib hash, never returned),
        "createdAt": datetime (UTC)
    }
"""

from movie_api.models.base import COMMON_FIELD_TYPES, CollectionModel

USER = CollectionModel(
    resource_type="user",
    collection="users",
    field_types={
        **COMMON_FIELD_TYPES,
        "name": str,
        "email": str,
    },
)
