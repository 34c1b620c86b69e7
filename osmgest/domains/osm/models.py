"""
Request records for the OSM v0.6 API.

These are transient values built per call. Nothing is validated beyond what the
query builders need; the API itself rejects bad combinations.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

StrOrInt = Union[str, int]
Coordinate = Union[str, int, float]


class ReturnFormat(str, Enum):
    """Which representation to ask for. JSON appends `.json` to the resource path."""

    JSON = "json"
    XML = "xml"


class ElementType(str, Enum):
    NODE = "node"
    WAY = "way"
    RELATION = "relation"

    @property
    def plural(self) -> str:
        return f"{self.value}s"


@dataclass(frozen=True)
class BoundingBox:
    """West/south/east/north edges of a geographic query region."""

    left: Coordinate
    bottom: Coordinate
    right: Coordinate
    top: Coordinate


@dataclass(frozen=True)
class ChangesetBox:
    min_lon: Coordinate
    min_lat: Coordinate
    max_lon: Coordinate
    max_lat: Coordinate


@dataclass(frozen=True)
class TimeRange:
    """Changesets closed after `start` and created before `end`."""

    start: StrOrInt
    end: StrOrInt


@dataclass
class ChangesetQuery:
    """
    Filters for GET /changesets.

    Only one filter is sent per request: the first populated field in
    declaration order wins (see `query.changeset_query_clause`).
    """

    box: ChangesetBox | None = None
    user: StrOrInt | None = None
    display_name: str | None = None
    time: StrOrInt | TimeRange | None = None
    open: bool | None = None
    closed: bool | None = None
    changesets: str | list[StrOrInt] | None = None
    limit: StrOrInt | None = None


@dataclass
class NoteBody:
    lat: float
    lon: float
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"lat": self.lat, "lon": self.lon, "text": self.text}


@dataclass
class NoteSearchTerms:
    """
    Filters for GET /notes/search. `from` is a keyword, hence `from_`.

    sort is "created_at" or "updated_at"; order is "oldest" or "newest".
    """

    q: str | None = None
    limit: int | None = None
    closed: int | None = None
    display_name: str | None = None
    user: StrOrInt | None = None
    from_: str | None = None
    to: str | None = None
    sort: str | None = None
    order: str | None = None
