"""osmgest: a client for the OpenStreetMap v0.6 HTTP API."""

__version__ = "0.1.0"

from osmgest.domains.osm.models import (  # noqa: E402
    BoundingBox,
    ChangesetBox,
    ChangesetQuery,
    ElementType,
    NoteBody,
    NoteSearchTerms,
    ReturnFormat,
    TimeRange,
)
from osmgest.infrastructure.http.dispatcher import MissingContentTypeError, OsmGestError  # noqa: E402
from osmgest.infrastructure.osm_client import OsmApiClient  # noqa: E402

__all__ = [
    "BoundingBox",
    "ChangesetBox",
    "ChangesetQuery",
    "ElementType",
    "MissingContentTypeError",
    "NoteBody",
    "NoteSearchTerms",
    "OsmApiClient",
    "OsmGestError",
    "ReturnFormat",
    "TimeRange",
    "__version__",
]
