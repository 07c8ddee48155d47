"""
Movie API Backend — Query Feature Pipeline
============================================

What:  Turns an arbitrary HTTP query string into one immutable `QuerySpec`:
       a filter predicate, a sort specification, a projection and a page window.
Why:   Every list endpoint (movies, actors, ratings) supports the same query
       language; keeping it in pure functions makes each stage testable on its own.
How:   Four stages, always applied in this order:

    raw params ──▶ filter ──▶ sort ──▶ project ──▶ paginate ──▶ QuerySpec
                     │
                     └── predicate (also used alone for the total count)

Query language:
    ?genre=Drama                      equality
    ?releaseYear[gte]=2000            comparison (gte, gt, lte, lt → $gte, $gt, $lte, $lt)
    ?sort=-releaseYear,title          descending year, then ascending title
    ?fields=title,genre               inclusion projection (id is always returned)
    ?fields=-description              exclusion projection
    ?page=2&limit=10                  skip 10, take 10

Known limits (kept on purpose, not validated):
    - Operator names other than gte/gt/lte/lt are passed through without the
      `$` marker, so they become literal sub-document equality and match nothing.
    - A field repeated inside `sort` is sent to MongoDB as given; the driver keeps
      the last direction at the position of the first occurrence.
    - A repeated query parameter collapses to its last value.
    - An integer literal outside the int64 range stays a string, and a page or
      limit above MAX_WINDOW_VALUE falls back to its default.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING

from movie_api.exceptions import ValidationError

logger = logging.getLogger(__name__)

RESERVED_PARAMS = frozenset({"page", "sort", "limit", "fields"})
COMPARISON_OPERATORS = frozenset({"gte", "gt", "lte", "lt"})

# MongoDB marks query operators with a leading dollar sign
OPERATOR_MARKER = "$"

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

# BSON integers are signed 64-bit
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# page and limit each stay below 2**31 so the skip (page - 1) * limit fits in int64
MAX_WINDOW_VALUE = 2 ** 31 - 1

_BRACKET_KEY = re.compile(r"^([^\[\]]+)\[([^\[\]]*)\]$")
_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")

SortKeys = Tuple[Tuple[str, int], ...]


@dataclass(frozen=True)
class QuerySpec:
    """
    Parsed, validated representation of a client's list request.

    Constructed fresh per request, used once, discarded.

    Attributes:
        filters:    field → equality literal, or field → {"$op": literal}
        sort_keys:  ordered (field, ASCENDING | DESCENDING) pairs; empty = storage order
        projection: field → 1 (include) / 0 (exclude); None = full documents
        page:       1-based page number
        limit:      page size
    """

    filters: Mapping[str, Any] = field(default_factory=dict)
    sort_keys: SortKeys = ()
    projection: Optional[Mapping[str, int]] = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if self.page < 1 or self.limit < 1:
            raise ValueError(f"page and limit must be >= 1 (got page={self.page}, limit={self.limit})")

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def predicate(self) -> Dict[str, Any]:
        """The filter document alone, without the page window."""
        return dict(self.filters)


# ══════════════════════════════════════════════════════════════════════════
# Raw parameter parsing
# ══════════════════════════════════════════════════════════════════════════

def _is_safe_key(key: str) -> bool:
    """Keys that could smuggle MongoDB operators or dotted paths are dropped."""
    return bool(key) and not key.startswith(OPERATOR_MARKER) and "." not in key


def _last(value: Any) -> Any:
    """Collapse a repeated parameter (list of values) to its last value."""
    if isinstance(value, (list, tuple)):
        return value[-1] if value else None
    return value


def parse_query_params(items: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
    """
    Build a parameter mapping from raw (key, value) query-string pairs.

    `releaseYear[gte]=2000` becomes {"releaseYear": {"gte": "2000"}}.
    Keys starting with `$` or containing `.` are discarded, in the keys and in
    the bracketed operator names alike.
    """
    params: Dict[str, Any] = {}
    for key, value in items:
        match = _BRACKET_KEY.match(key)
        if match is None:
            if not _is_safe_key(key):
                logger.debug("Dropping unsafe query parameter %r", key)
                continue
            params[key] = value
            continue

        name, operator = match.groups()
        if not _is_safe_key(name):
            logger.debug("Dropping unsafe query parameter %r", key)
            continue
        if not operator:
            # `genre[]=Drama` is treated like `genre=Drama`
            params[name] = value
            continue
        if not _is_safe_key(operator):
            logger.debug("Dropping unsafe operator in query parameter %r", key)
            continue
        nested = params.get(name)
        if not isinstance(nested, dict):
            nested = {}
            params[name] = nested
        nested[operator] = value
    return params


# ══════════════════════════════════════════════════════════════════════════
# Stage 1: Filter
# ══════════════════════════════════════════════════════════════════════════

def coerce_value(raw: Any, field_type: Optional[type]) -> Any:
    """
    Cast a query-string literal to the declared type of its field.

    Values that fail coercion are returned unchanged, so they become string
    equality predicates. Integers outside the BSON int64 range count as a
    failed coercion. Undeclared fields are never cast.
    """
    if not isinstance(raw, str) or field_type is None or field_type is str:
        return raw
    text = raw.strip()
    try:
        if field_type in (int, float):
            try:
                number = int(text)
            except ValueError:
                return float(text)
            return number if INT64_MIN <= number <= INT64_MAX else raw
        if field_type is ObjectId:
            return ObjectId(text)
        if field_type is datetime:
            return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except (ValueError, TypeError, InvalidId):
        return raw
    return raw


def rewrite_operator(operator: str) -> str:
    """`gte` → `$gte`; unknown names pass through unchanged."""
    if operator in COMPARISON_OPERATORS:
        return f"{OPERATOR_MARKER}{operator}"
    return operator


def build_filter(
    params: Mapping[str, Any],
    field_types: Optional[Mapping[str, type]] = None,
) -> Dict[str, Any]:
    """
    Translate non-reserved parameters into one MongoDB filter document.

    Every field contributes one predicate; the document as a whole is their
    logical AND.
    """
    field_types = field_types or {}
    predicate: Dict[str, Any] = {}
    for key, raw in params.items():
        if key in RESERVED_PARAMS:
            continue
        field_type = field_types.get(key)
        if isinstance(raw, Mapping):
            predicate[key] = {
                rewrite_operator(operator): coerce_value(_last(value), field_type)
                for operator, value in raw.items()
            }
        else:
            predicate[key] = coerce_value(_last(raw), field_type)
    return predicate


# ══════════════════════════════════════════════════════════════════════════
# Stage 2: Sort
# ══════════════════════════════════════════════════════════════════════════

def _split_tokens(raw: Any) -> Tuple[str, ...]:
    text = _last(raw)
    if not isinstance(text, str):
        return ()
    return tuple(token.strip() for token in text.split(",") if token.strip())


def parse_sort(raw: Any) -> SortKeys:
    """
    `-releaseYear,title` → (("releaseYear", DESCENDING), ("title", ASCENDING)).

    Returns an empty tuple when `sort` is absent so the storage default applies.
    """
    keys = []
    for token in _split_tokens(raw):
        direction = ASCENDING
        if token.startswith("-"):
            direction = DESCENDING
            token = token[1:].strip()
        if not _is_safe_key(token):
            continue
        keys.append((token, direction))
    return tuple(keys)


# ══════════════════════════════════════════════════════════════════════════
# Stage 3: Field projection
# ══════════════════════════════════════════════════════════════════════════

def parse_fields(raw: Any) -> Optional[Dict[str, int]]:
    """
    `title,genre` → {"title": 1, "genre": 1}; `-description` → {"description": 0}.

    The identifier is implicit: `id`/`_id` tokens are ignored and MongoDB
    always returns `_id`.

    Raises:
        ValidationError: included and excluded fields are mixed (→ 400)
    """
    included: Dict[str, int] = {}
    excluded: Dict[str, int] = {}
    for token in _split_tokens(raw):
        target = included
        if token.startswith("-"):
            target = excluded
            token = token[1:].strip()
        if token in ("id", "_id") or not _is_safe_key(token):
            continue
        target[token] = 1 if target is included else 0

    if included and excluded:
        raise ValidationError(
            message="Field selection cannot mix included and excluded fields",
            field="fields",
        )
    return included or excluded or None


# ══════════════════════════════════════════════════════════════════════════
# Stage 4: Paginate
# ══════════════════════════════════════════════════════════════════════════

def _parse_positive_int(raw: Any, default: int) -> int:
    """parseInt-style: leading integer prefix; anything below 1 or above MAX_WINDOW_VALUE falls back."""
    raw = _last(raw)
    if isinstance(raw, int):
        value = raw
    else:
        match = _LEADING_INTEGER.match(str(raw)) if raw is not None else None
        if match is None:
            return default
        value = int(match.group(1))
    return value if 1 <= value <= MAX_WINDOW_VALUE else default


def parse_pagination(
    params: Mapping[str, Any],
    default_limit: int = DEFAULT_LIMIT,
) -> Tuple[int, int]:
    """Return (page, limit). No upper bound is applied here."""
    page = _parse_positive_int(params.get("page"), DEFAULT_PAGE)
    limit = _parse_positive_int(params.get("limit"), default_limit)
    return page, limit


# ══════════════════════════════════════════════════════════════════════════
# Pipeline
# ══════════════════════════════════════════════════════════════════════════

def build_query_spec(
    params: Mapping[str, Any],
    field_types: Optional[Mapping[str, type]] = None,
    default_limit: int = DEFAULT_LIMIT,
) -> QuerySpec:
    """Run filter → sort → project → paginate and freeze the result."""
    filters = build_filter(params, field_types)
    sort_keys = parse_sort(params.get("sort"))
    projection = parse_fields(params.get("fields"))
    page, limit = parse_pagination(params, default_limit)

    spec = QuerySpec(
        filters=filters,
        sort_keys=sort_keys,
        projection=projection,
        page=page,
        limit=limit,
    )
    logger.debug(
        "Query spec: filter=%s sort=%s projection=%s page=%d limit=%d",
        spec.filters, spec.sort_keys, spec.projection, spec.page, spec.limit,
    )
    return spec
