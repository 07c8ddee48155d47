"""
Movie API Backend — Shared Response Schemas
=============================================

What:  Pydantic models shared by every resource: hypermedia links, the
       decorated record, the paginated envelope, and error/health bodies.
Why:   The three resources answer list requests with exactly the same shape;
       one definition keeps the OpenAPI document and the serializer in sync.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Link(BaseModel):
    """A single hypermedia reference."""

    href: str = Field(description="URL of the related resource")


class LinkedRecord(BaseModel):
    """
    What:  A stored record (movie, actor or rating) decorated with links.
    How:   `id` and `links` are fixed fields; the record's data fields are
           carried as extra attributes and serialized next to them.

    Example:
        {
            "id": "65f0c2...",
            "links": {
                "self":    {"href": "http://host/api/v1/movies/65f0c2..."},
                "ratings": {"href": "http://host/api/v1/movies/65f0c2.../ratings"}
            },
            "title": "Heat",
            "releaseYear": 1995
        }
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(description="Canonical record identifier")
    links: Dict[str, Link] = Field(description="Relation name → link")


class PageLinks(BaseModel):
    """
    Navigation links of a paginated list.

    `prev` and `next` are always present in the JSON and are null when the
    page is out of range.
    """

    model_config = ConfigDict(populate_by_name=True)

    self_: Link = Field(alias="self")
    first: Link
    prev: Optional[Link] = None
    next: Optional[Link] = None
    last: Link


class PageEnvelope(BaseModel):
    """
    What:  The outer shape of every list response.

    Fields:
        status:  always "success" for this model (errors use ErrorResponse)
        results: number of records in this page (not the total)
        data:    decorated records, in storage order
        links:   self/first/prev/next/last navigation
    """

    status: str = Field(default="success")
    results: int = Field(ge=0, description="Number of records in this page")
    data: List[LinkedRecord] = Field(default_factory=list)
    links: PageLinks


class RecordResponse(BaseModel):
    """
    Body of single-record endpoints, keyed by resource name.

    Example: {"status": "success", "data": {"movie": {...}}}
    """

    status: str = Field(default="success")
    data: Dict[str, LinkedRecord]


class RecordListResponse(BaseModel):
    """
    Unpaginated list keyed by resource name (GET /movies/{id}/ratings).

    Example: {"status": "success", "results": 2, "data": {"ratings": [...]}}
    """

    status: str = Field(default="success")
    results: int = Field(ge=0)
    data: Dict[str, List[LinkedRecord]]


class MessageResponse(BaseModel):
    """Body of delete endpoints."""

    status: str = Field(default="success")
    message: str
    data: None = None


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "status": "fail",
            "error": "not_found",
            "message": "No movie found with that ID",
            "request_id": "a1b2c3d4"
        }
    """

    status: str = Field(description="'fail' for client errors, 'error' for server errors")
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
