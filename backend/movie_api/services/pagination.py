"""
Movie API Backend — Pagination Envelope Math
==============================================

What:  Page counting and navigation-link construction for list responses.
Why:   The same arithmetic serves movies, actors and ratings; it lives apart
       from I/O so its invariants can be checked exhaustively.

Invariants:
    total_pages = ceil(total / limit)         (0 when total is 0)
    prev is set  ⇔ page > 1
    next is set  ⇔ page < total_pages
    first/last never point below page 1

Link construction:
    self  = the literal incoming path and query string
    other = the same path and query parameters with only page/limit replaced
"""

from typing import List, Tuple
from urllib.parse import parse_qsl, urlencode

from movie_api.schemas.common import Link, PageLinks

# Characters left readable in generated query strings (field[op]=, a,b)
_SAFE_QUERY_CHARS = "[],"


def total_pages(total: int, limit: int) -> int:
    """Ceiling division; a non-positive limit is a caller bug."""
    if limit < 1:
        raise ValueError(f"limit must be >= 1 (got {limit})")
    if total <= 0:
        return 0
    return -(-total // limit)


def page_href(path: str, query_items: List[Tuple[str, str]], page: int, limit: int) -> str:
    """Rebuild `path?...` with `page` and `limit` swapped, other parameters kept in order."""
    kept = [(key, value) for key, value in query_items if key not in ("page", "limit")]
    items = [("page", str(page)), ("limit", str(limit))] + kept
    return f"{path}?{urlencode(items, safe=_SAFE_QUERY_CHARS)}"


def build_page_links(
    path: str,
    query_string: str,
    page: int,
    limit: int,
    total: int,
) -> PageLinks:
    """
    Compute self/first/prev/next/last for one page of a list.

    Args:
        path:         request path, e.g. "/api/v1/movies"
        query_string: raw query string as received (without "?")
        page, limit:  the window actually served
        total:        number of records matching the filter, ignoring the window
    """
    pages = total_pages(total, limit)
    query_items = parse_qsl(query_string, keep_blank_values=True)
    self_href = f"{path}?{query_string}" if query_string else path

    return PageLinks(
        self_=Link(href=self_href),
        first=Link(href=page_href(path, query_items, 1, limit)),
        prev=Link(href=page_href(path, query_items, page - 1, limit)) if page > 1 else None,
        next=Link(href=page_href(path, query_items, page + 1, limit)) if page < pages else None,
        last=Link(href=page_href(path, query_items, max(pages, 1), limit)),
    )
