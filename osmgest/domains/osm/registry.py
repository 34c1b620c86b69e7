"""
Endpoint table for the OSM v0.6 API.

Each row describes one operation: HTTP verb, path template relative to the
versioned base URL, how the request body is encoded, and whether the caller
may pick JSON or XML. `OsmApiClient.invoke` turns a row plus arguments into a
request; the named client methods only supply path variables, query and body.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BodyEncoding(str, Enum):
    NONE = "none"
    XML = "xml"
    FORM = "form"
    MULTIPART = "multipart"
    TEXT = "text"
    JSON = "json"


# Content-Type sent for each body encoding. Multipart bodies get theirs, with the
# boundary, from requests.
CONTENT_TYPES: dict[BodyEncoding, str] = {
    BodyEncoding.XML: "application/xml",
    BodyEncoding.FORM: "application/x-www-form-urlencoded",
    BodyEncoding.MULTIPART: "multipart/form-data",
    BodyEncoding.TEXT: "text/plain",
    BodyEncoding.JSON: "application/json",
}


@dataclass(frozen=True)
class EndpointSpec:
    name: str
    method: str
    path: str
    encoding: BodyEncoding = BodyEncoding.NONE
    format_aware: bool = False
    versioned: bool = True
    description: str = ""


def _get(name: str, path: str, *, format_aware: bool = False, versioned: bool = True, description: str = "") -> EndpointSpec:
    return EndpointSpec(name, "GET", path, BodyEncoding.NONE, format_aware, versioned, description)


ENDPOINTS: list[EndpointSpec] = [
    # Miscellaneous
    _get("versions", "versions", format_aware=True, versioned=False,
         description="API versions supported by this instance."),
    _get("capabilities", "capabilities", format_aware=True, versioned=False,
         description="Capabilities and limits of the API."),
    _get("map", "map", description="Map data inside a bounding box."),
    _get("permissions", "permissions", format_aware=True,
         description="Permissions granted to the current client."),
    # Changesets
    EndpointSpec("changeset_create", "PUT", "changeset/create", BodyEncoding.XML,
                 description="Open a changeset; returns its id."),
    _get("changeset_get", "changeset/{id}", format_aware=True,
         description="Changeset metadata, optionally with its discussion."),
    EndpointSpec("changeset_update", "PUT", "changeset/{id}", BodyEncoding.XML,
                 description="Replace the tags of an open changeset."),
    EndpointSpec("changeset_close", "PUT", "changeset/{id}/close"),
    _get("changeset_download", "changeset/{id}/download", description="osmChange document of a changeset."),
    _get("changeset_query", "changesets", description="Changesets matching one filter."),
    EndpointSpec("changeset_diff_upload", "POST", "changeset/{id}/upload", BodyEncoding.XML,
                 description="Upload an osmChange diff into an open changeset."),
    EndpointSpec("changeset_comment", "POST", "changeset/{id}/comment", BodyEncoding.FORM),
    EndpointSpec("changeset_subscribe", "POST", "changeset/{id}/subscribe", BodyEncoding.FORM),
    EndpointSpec("changeset_unsubscribe", "POST", "changeset/{id}/unsubscribe", BodyEncoding.FORM),
    EndpointSpec("changeset_hide_comment", "POST", "changeset/comment/{id}/hide"),
    EndpointSpec("changeset_unhide_comment", "POST", "changeset/comment/{id}/unhide"),
    # Elements; {element} is node, way or relation
    EndpointSpec("element_create", "PUT", "{element}/create", BodyEncoding.XML),
    _get("element_get", "{element}/{id}", format_aware=True),
    EndpointSpec("element_update", "PUT", "{element}/{id}", BodyEncoding.XML),
    EndpointSpec("element_delete", "DELETE", "{element}/{id}", BodyEncoding.XML),
    _get("element_history", "{element}/{id}/history"),
    _get("element_version", "{element}/{id}/{version}"),
    _get("elements_multi", "{elements}", description="Several elements of one kind by id."),
    _get("element_relations", "{element}/{id}/relations", description="Relations referencing an element."),
    _get("node_ways", "node/{id}/ways", description="Ways referencing a node."),
    _get("element_full", "{element}/{id}/full", description="A way or relation with everything it references."),
    EndpointSpec("element_redact", "POST", "{element}/{id}/{version}/redact",
                 description="Moderator only: hide an element version behind a redaction."),
    # GPS traces
    _get("trackpoints", "trackpoints", description="One page of public GPS points in a bounding box."),
    EndpointSpec("gpx_create", "POST", "gpx/create", BodyEncoding.MULTIPART),
    EndpointSpec("gpx_update", "PUT", "gpx/{id}", BodyEncoding.XML),
    EndpointSpec("gpx_delete", "DELETE", "gpx/{id}"),
    _get("gpx_details", "gpx/{id}/details"),
    _get("gpx_data", "gpx/{id}/data"),
    _get("gpx_list", "user/gpx_files", description="Traces of the authenticated user."),
    # Users
    _get("user_get", "user/{id}", format_aware=True),
    _get("users_get", "users", format_aware=True),
    _get("user_details", "user/details", format_aware=True, description="The authenticated user."),
    _get("preferences_get", "user/preferences", format_aware=True),
    EndpointSpec("preferences_upload", "PUT", "user/preferences", BodyEncoding.TEXT,
                 description="Replace all preferences with an XML preferences document."),
    _get("preference_get", "user/preferences/{key}"),
    EndpointSpec("preference_set", "PUT", "user/preferences/{key}", BodyEncoding.TEXT),
    EndpointSpec("preference_delete", "DELETE", "user/preferences/{key}"),
    # Notes
    _get("notes_bbox", "notes", format_aware=True, description="Notes inside a bounding box."),
    _get("notes_all", "notes", format_aware=True),
    _get("note_get", "notes/{id}", format_aware=True),
    EndpointSpec("note_create", "POST", "notes"),
    EndpointSpec("note_create_json", "POST", "notes.json", BodyEncoding.JSON),
    EndpointSpec("note_comment", "POST", "notes/{id}/comment"),
    EndpointSpec("note_close", "POST", "notes/{id}/close"),
    EndpointSpec("note_reopen", "POST", "notes/{id}/reopen"),
    EndpointSpec("note_hide", "DELETE", "notes/{id}", description="Moderator only."),
    _get("notes_search", "notes/search"),
    _get("notes_feed", "notes/feed", description="RSS feed of note activity."),
]


def get_endpoint_definitions() -> list[EndpointSpec]:
    """Return all endpoint rows, in table order."""
    return list(ENDPOINTS)


def get_endpoint_registry() -> dict[str, EndpointSpec]:
    """Map endpoint name -> row."""
    return {e.name: e for e in ENDPOINTS}


def get_endpoint(name: str) -> EndpointSpec:
    """
    Look up one endpoint row.

    Raises:
        ValueError: If no endpoint has that name.
    """
    try:
        return get_endpoint_registry()[name]
    except KeyError:
        raise ValueError(f"Unknown OSM endpoint: {name!r}") from None
