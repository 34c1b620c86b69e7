"""
Single-request dispatcher for the OSM API.

Builds the final URL, issues exactly one request and decodes the body according
to the response's declared Content-Type. No retries; transport errors and HTTP
error statuses propagate as `requests` produces them.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

import requests

from osmgest.domains.osm.query import query_string
from osmgest.utils.logger import get_logger

logger = get_logger()

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")


class OsmGestError(RuntimeError):
    """Base class for errors raised by osmgest itself."""


class MissingContentTypeError(OsmGestError):
    """Raised when a response carries no Content-Type header."""

    def __init__(self, message: str, response: requests.Response | None = None) -> None:
        super().__init__(message)
        self.response = response


class ResponseKind(str, Enum):
    STRUCTURED = "structured"  # JSON
    MARKUP = "markup"  # XML, returned as text
    OPAQUE = "opaque"  # anything else, returned as the raw response


def classify_content_type(content_type: str | None) -> ResponseKind | None:
    """Map a Content-Type header value to a ResponseKind. None when the header is absent."""
    if not content_type:
        return None
    ct = content_type.lower()
    if "application/json" in ct:
        return ResponseKind.STRUCTURED
    if "application/xml" in ct or "text/xml" in ct:
        return ResponseKind.MARKUP
    return ResponseKind.OPAQUE


def _decode(kind: ResponseKind, response: requests.Response) -> Any:
    if kind is ResponseKind.STRUCTURED:
        return response.json()
    if kind is ResponseKind.MARKUP:
        return response.text
    return response


def join_url(base: str, *parts: str) -> str:
    """Join URL parts with single slashes between them. Empty parts are skipped."""
    url = base.rstrip("/")
    for part in parts:
        part = str(part).strip("/")
        if part:
            url = f"{url}/{part}"
    return url


def _with_query(url: str, params: Mapping[str, Any] | None) -> str:
    if not params:
        return url
    sep = "&" if "?" in url else "?"
    return f"{url}{sep}{query_string(params)}"


def fetch(
    url: str,
    path: str = "",
    *,
    method: str,
    params: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
    body: Any = None,
    files: Mapping[str, Any] | None = None,
    timeout: float | None = None,
    session: requests.Session | None = None,
) -> Any:
    """
    Issue one request and return the decoded body.

    Args:
        url: Base URL (origin plus any version segment).
        path: Relative path, may already carry a query string.
        method: GET, POST, PUT or DELETE.
        params: Optional flat mapping serialized into the query string, insertion order
            kept, with the same rules as `query_string` (literal commas, lowercase booleans).
        headers: Optional request headers.
        body: Optional request payload (str, bytes or a form mapping).
        files: Optional multipart file fields; requests then sets the multipart Content-Type.
        timeout: Optional timeout in seconds; None leaves the requests default.
        session: Optional requests.Session to send through.

    Returns:
        Parsed JSON for application/json, text for XML, otherwise the raw
        `requests.Response`.

    Raises:
        ValueError: If method is not one of the supported verbs.
        MissingContentTypeError: If the response has no Content-Type header.
    """
    verb = (method or "").upper()
    if verb not in HTTP_METHODS:
        raise ValueError(f"Unsupported HTTP method: {method!r}")

    final_url = _with_query(join_url(url, path), params)
    logger.debug("OSM %s %s", verb, final_url)

    sender = session.request if session is not None else requests.request
    response = sender(
        verb,
        final_url,
        headers=dict(headers) if headers else None,
        data=body,
        files=files,
        timeout=timeout,
    )

    content_type = response.headers.get("Content-Type")
    kind = classify_content_type(content_type)
    logger.debug(
        "OSM %s %s -> %s (%s)",
        verb,
        final_url,
        getattr(response, "status_code", None),
        kind.value if kind else "no content type",
    )
    if kind is None:
        raise MissingContentTypeError(
            f"Content-Type header not found in response to {verb} {final_url}",
            response=response,
        )
    return _decode(kind, response)
