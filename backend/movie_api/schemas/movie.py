"""
Movie API Backend — Movie Request Schemas
===========================================

What:  Bodies accepted by POST/PUT /api/v1/movies.
Why:   Validation rules live next to the wire names clients use
       (`releaseYear`), while Python code keeps snake_case attributes.
How:   `to_document()` / `to_changes()` produce the MongoDB representation,
       converting actor ids into ObjectIds.

Validation rules:
    title        required on create, trimmed, ≤ 100 characters
    releaseYear  1888 … current year
    genre        one of GENRES
    description  trimmed, ≤ 1000 characters
    actors       list of actor ObjectIds (hex strings)
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, List, Optional

from bson import ObjectId
from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from movie_api.models.movie import EARLIEST_RELEASE_YEAR, GENRES

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000


def _check_title(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("A movie must have a title")
    if len(v) > TITLE_MAX_LENGTH:
        raise ValueError("A movie title must have less or equal than 100 characters")
    return v


def _check_release_year(v: int) -> int:
    if v < EARLIEST_RELEASE_YEAR:
        raise ValueError("Release year must be after 1888")
    if v > datetime.now(timezone.utc).year:
        raise ValueError("Release year cannot be in the future")
    return v


def _check_genre(v: str) -> str:
    v = v.strip()
    if v not in GENRES:
        raise ValueError(f"Genre is either: {', '.join(GENRES)}")
    return v


def _check_description(v: str) -> str:
    v = v.strip()
    if len(v) > DESCRIPTION_MAX_LENGTH:
        raise ValueError("Description must be less or equal than 1000 characters")
    return v


def _check_actor_ids(v: List[str]) -> List[str]:
    for actor_id in v:
        if not ObjectId.is_valid(actor_id):
            raise ValueError(f"Invalid actors: {actor_id}.")
    return v


MovieTitle = Annotated[str, AfterValidator(_check_title)]
ReleaseYear = Annotated[int, AfterValidator(_check_release_year)]
Genre = Annotated[str, AfterValidator(_check_genre)]
Description = Annotated[str, AfterValidator(_check_description)]
ActorIds = Annotated[List[str], AfterValidator(_check_actor_ids)]


class MovieCreate(BaseModel):
    """Body of POST /api/v1/movies."""

    model_config = ConfigDict(populate_by_name=True)

    title: MovieTitle = Field(description="Movie title")
    release_year: ReleaseYear = Field(alias="releaseYear", description="Year of release")
    genre: Genre = Field(description=f"One of: {', '.join(GENRES)}")
    description: Optional[Description] = Field(default=None)
    actors: ActorIds = Field(default_factory=list, description="Actor ids")

    def to_document(self) -> Dict[str, Any]:
        document = self.model_dump(by_alias=True, exclude_none=True)
        document["actors"] = [ObjectId(actor_id) for actor_id in self.actors]
        document["createdAt"] = datetime.now(timezone.utc)
        return document


class MovieUpdate(BaseModel):
    """Body of PUT /api/v1/movies/{id}; only the fields sent are changed."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[MovieTitle] = None
    release_year: Optional[ReleaseYear] = Field(default=None, alias="releaseYear")
    genre: Optional[Genre] = None
    description: Optional[Description] = None
    actors: Optional[ActorIds] = None

    def to_changes(self) -> Dict[str, Any]:
        changes = self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
        if "actors" in changes:
            changes["actors"] = [ObjectId(actor_id) for actor_id in changes["actors"]]
        return changes
