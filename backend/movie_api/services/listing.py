"""
Movie API Backend — List Envelope Assembly
============================================

What:  Runs one list request end to end: query pipeline, page fetch and total
       count, link decoration, navigation links.
Why:   Movies, actors and ratings share the exact same list behavior; only the
       collection model and the expansions differ.

Flow:
    query string ──▶ build_query_spec ──▶ ┬─ repository.find(spec)       ─┐
                                           └─ repository.count(predicate) ─┴─▶ PageEnvelope

The fetch and the count run concurrently. Either failing aborts the whole
request; a partial envelope is never returned.
"""

import asyncio
import dataclasses
import logging
from typing import Sequence
from urllib.parse import parse_qsl

from movie_api.config import settings
from movie_api.models.base import Expansion
from movie_api.repository import MongoRepository
from movie_api.schemas.common import PageEnvelope
from movie_api.services.hateoas import link_record
from movie_api.services.pagination import build_page_links
from movie_api.services.query_features import QuerySpec, build_query_spec, parse_query_params

logger = logging.getLogger(__name__)


def spec_from_query_string(query_string: str, repository: MongoRepository) -> QuerySpec:
    """Parse a raw query string against the repository's field types."""
    params = parse_query_params(parse_qsl(query_string, keep_blank_values=True))
    spec = build_query_spec(
        params,
        field_types=repository.model.field_types,
        default_limit=settings.default_page_limit,
    )
    if settings.max_page_limit is not None and spec.limit > settings.max_page_limit:
        spec = dataclasses.replace(spec, limit=settings.max_page_limit)
    return spec


async def list_resources(
    repository: MongoRepository,
    *,
    path: str,
    query_string: str,
    base_url: str,
    expand: Sequence[Expansion] = (),
) -> PageEnvelope:
    """
    Build the paginated, link-decorated envelope for one collection.

    Args:
        repository:   repository of the listed collection
        path:         request path, reused for navigation links
        query_string: raw query string as received
        base_url:     absolute versioned API root for per-record links
        expand:       references to resolve inline
    """
    spec = spec_from_query_string(query_string, repository)

    documents, total = await asyncio.gather(
        repository.find(spec, expand=expand),
        repository.count(spec.predicate),
    )

    resource_type = repository.model.resource_type
    records = [link_record(document, resource_type, base_url) for document in documents]
    logger.debug(
        "Listed %d/%d %s records (page=%d, limit=%d)",
        len(records), total, resource_type, spec.page, spec.limit,
    )

    return PageEnvelope(
        results=len(records),
        data=records,
        links=build_page_links(path, query_string, spec.page, spec.limit, total),
    )
