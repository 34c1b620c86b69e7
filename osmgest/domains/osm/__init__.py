"""OSM v0.6 request records, builders and endpoint table."""

from osmgest.domains.osm.models import (
    BoundingBox,
    ChangesetBox,
    ChangesetQuery,
    ElementType,
    NoteBody,
    NoteSearchTerms,
    ReturnFormat,
    TimeRange,
)

__all__ = [
    "BoundingBox",
    "ChangesetBox",
    "ChangesetQuery",
    "ElementType",
    "NoteBody",
    "NoteSearchTerms",
    "ReturnFormat",
    "TimeRange",
]
