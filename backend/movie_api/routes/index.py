"""
Movie API Backend — API Index Route
=====================================

What:  GET / returns the API name and a map of its top-level endpoints.
"""

from typing import Dict

from fastapi import APIRouter
from pydantic import BaseModel

from movie_api.config import settings

router = APIRouter(tags=["Index"])


class IndexResponse(BaseModel):
    message: str
    endpoints: Dict[str, str]


@router.get("/", response_model=IndexResponse, summary="API endpoint map")
async def index() -> IndexResponse:
    return IndexResponse(
        message="Movie API",
        endpoints={
            "movies": f"{settings.api_prefix}/movies",
            "actors": f"{settings.api_prefix}/actors",
            "ratings": f"{settings.api_prefix}/ratings",
            "auth": f"{settings.api_prefix}/auth",
            "documentation": "/docs",
        },
    )
