"""
Path and query-string builders for OSM endpoints.

All functions are pure string transforms.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping
from urllib.parse import urlencode

from osmgest.domains.osm.models import (
    BoundingBox,
    ChangesetQuery,
    NoteSearchTerms,
    ReturnFormat,
    StrOrInt,
    TimeRange,
)

# Commas separate bbox edges and id lists; colons appear in ISO timestamps.
_QUERY_SAFE = ",:"

NOTE_SEARCH_KEYS: tuple[str, ...] = (
    "limit",
    "closed",
    "display_name",
    "user",
    "from",
    "to",
    "sort",
    "order",
)


def json_path(path: str, fmt: ReturnFormat | str = ReturnFormat.JSON) -> str:
    """Append `.json` for the JSON format, leave the path unchanged for XML."""
    if ReturnFormat(fmt) is ReturnFormat.JSON:
        return f"{path}.json"
    return path


def format_value(value: Any) -> str:
    """Stringify a query value the way the API spells it. None becomes the empty string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def query_string(params: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> str:
    """URL-encode params in order, leaving commas and colons literal."""
    items = params.items() if isinstance(params, Mapping) else params
    return urlencode([(k, format_value(v)) for k, v in items], safe=_QUERY_SAFE)


def with_query(path: str, params: Mapping[str, Any] | Iterable[tuple[str, Any]] | None) -> str:
    """Append a query string to path. Nothing is appended for empty params."""
    qs = query_string(params) if params else ""
    if not qs:
        return path
    sep = "&" if "?" in path else "?"
    return f"{path}{sep}{qs}"


def bbox_value(box: BoundingBox) -> str:
    """left,bottom,right,top"""
    return f"{box.left},{box.bottom},{box.right},{box.top}"


def id_list(ids: str | Iterable[StrOrInt]) -> str:
    """Comma-join ids. A pre-joined string passes through unchanged."""
    if isinstance(ids, str):
        return ids
    return ",".join(str(i) for i in ids)


# --- Changeset query ---

def _populated(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, dict, set)):
        return len(value) > 0
    return True


def _flag(value: Any) -> bool:
    return value is True


def _time_clause(value: StrOrInt | TimeRange) -> str:
    if isinstance(value, TimeRange):
        return query_string({"time": f"{value.start},{value.end}"})
    return query_string({"time": value})


# First matching rule wins; later fields are ignored even when populated.
_CHANGESET_RULES: list[tuple[str, Callable[[Any], bool], Callable[[Any], str]]] = [
    (
        "box",
        _populated,
        lambda b: query_string({"bbox": f"{b.min_lon},{b.min_lat},{b.max_lon},{b.max_lat}"}),
    ),
    ("user", _populated, lambda v: query_string({"user": v})),
    ("display_name", _populated, lambda v: query_string({"display_name": v})),
    ("time", _populated, _time_clause),
    ("open", _flag, lambda v: query_string({"open": True})),
    ("closed", _flag, lambda v: query_string({"closed": True})),
    ("changesets", _populated, lambda v: query_string({"changesets": id_list(v)})),
    ("limit", _populated, lambda v: query_string({"limit": v})),
]


def changeset_query_clause(query: ChangesetQuery) -> str:
    """
    Pick the single filter clause for a changeset query.

    Fields are checked in the order box, user, display_name, time, open, closed,
    changesets, limit; the first populated one produces the clause. Returns "" when
    nothing is populated.
    """
    for field, predicate, build in _CHANGESET_RULES:
        value = getattr(query, field)
        if predicate(value):
            return build(value)
    return ""


# --- Note search ---

def note_search_params(terms: NoteSearchTerms) -> list[tuple[str, str]]:
    """
    Query pairs for notes/search.

    All eight filter keys are always present, in fixed order, with missing values
    as the empty string. The free-text `q` leads when given.
    """
    values = {
        "limit": terms.limit,
        "closed": terms.closed,
        "display_name": terms.display_name,
        "user": terms.user,
        "from": terms.from_,
        "to": terms.to,
        "sort": terms.sort,
        "order": terms.order,
    }
    pairs: list[tuple[str, str]] = []
    if terms.q:
        pairs.append(("q", terms.q))
    pairs.extend((key, format_value(values[key])) for key in NOTE_SEARCH_KEYS)
    return pairs
