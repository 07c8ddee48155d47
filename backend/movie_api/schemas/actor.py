"""
Movie API Backend — Actor Request Schemas
===========================================

What:  Bodies accepted by POST/PUT /api/v1/actors.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, List, Optional

from bson import ObjectId
from pydantic import AfterValidator, BaseModel, ConfigDict, Field

NAME_MAX_LENGTH = 100


def _check_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("An actor must have a name")
    if len(v) > NAME_MAX_LENGTH:
        raise ValueError("An actor name must have less or equal than 100 characters")
    return v


def _check_movie_ids(v: List[str]) -> List[str]:
    for movie_id in v:
        if not ObjectId.is_valid(movie_id):
            raise ValueError(f"Invalid moviesPlayed: {movie_id}.")
    return v


ActorName = Annotated[str, AfterValidator(_check_name)]
MovieIds = Annotated[List[str], AfterValidator(_check_movie_ids)]


class ActorCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: ActorName
    movies_played: MovieIds = Field(default_factory=list, alias="moviesPlayed")

    def to_document(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "moviesPlayed": [ObjectId(movie_id) for movie_id in self.movies_played],
            "createdAt": datetime.now(timezone.utc),
        }


class ActorUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[ActorName] = None
    movies_played: Optional[MovieIds] = Field(default=None, alias="moviesPlayed")

    def to_changes(self) -> Dict[str, Any]:
        changes: Dict[str, Any] = {}
        if self.name is not None:
            changes["name"] = self.name
        if self.movies_played is not None:
            changes["moviesPlayed"] = [ObjectId(movie_id) for movie_id in self.movies_played]
        return changes
