"""HTTP request dispatch."""

from osmgest.infrastructure.http.dispatcher import (
    MissingContentTypeError,
    OsmGestError,
    ResponseKind,
    classify_content_type,
    fetch,
    join_url,
)

__all__ = [
    "MissingContentTypeError",
    "OsmGestError",
    "ResponseKind",
    "classify_content_type",
    "fetch",
    "join_url",
]
