"""
Movie API Backend — Route Helpers
===================================

What:  Small request-derived values shared by the resource routers.
"""

from fastapi import Request

from movie_api.config import settings


def api_base_url(request: Request) -> str:
    """Absolute versioned API root, e.g. "http://host:3000/api/v1"."""
    return str(request.base_url).rstrip("/") + settings.api_prefix
