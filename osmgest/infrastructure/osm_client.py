"""
OpenStreetMap v0.6 API client.

One method per documented operation. Every method resolves to a row of the
endpoint table (`osmgest.domains.osm.registry`) and goes through `invoke`,
which renders the path, picks headers and body encoding, and hands off to the
dispatcher. Calls are independent: the client only holds read-only settings.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping
from urllib.parse import quote

import requests

from osmgest.domains.osm.models import (
    BoundingBox,
    ChangesetQuery,
    ElementType,
    NoteBody,
    NoteSearchTerms,
    ReturnFormat,
    StrOrInt,
)
from osmgest.domains.osm.query import (
    bbox_value,
    changeset_query_clause,
    format_value,
    id_list,
    json_path,
    note_search_params,
    with_query,
)
from osmgest.domains.osm.registry import CONTENT_TYPES, BodyEncoding, get_endpoint
from osmgest.infrastructure.http.dispatcher import fetch, join_url
from osmgest.utils.config import (
    osm_access_token,
    osm_api_url,
    osm_api_version,
    osm_http_timeout,
    osm_user_agent,
)
from osmgest.utils.logger import get_logger

logger = get_logger()

Fmt = ReturnFormat | str


class OsmApiClient:
    """
    Client for the OSM v0.6 HTTP API.

    Responses are decoded by Content-Type: JSON to Python objects, XML to text,
    anything else is returned as the `requests.Response`. HTTP error statuses are
    not raised; inspect the returned value.

    Settings not passed explicitly come from the environment (see
    `osmgest.utils.config`).
    """

    def __init__(
        self,
        api_url: str | None = None,
        api_version: str | None = None,
        access_token: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._api_url = api_url or osm_api_url()
        self._api_version = api_version or osm_api_version()
        self._access_token = access_token if access_token is not None else osm_access_token()
        self._user_agent = user_agent or osm_user_agent()
        self._timeout = timeout if timeout is not None else osm_http_timeout()
        self._session = session

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def api_version(self) -> str:
        return self._api_version

    @property
    def base_url(self) -> str:
        """Versioned base URL, e.g. https://api.openstreetmap.org/api/0.6"""
        return join_url(self._api_url, self._api_version)

    def _headers(self, encoding: BodyEncoding) -> dict[str, str]:
        headers = {"User-Agent": self._user_agent}
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        # requests writes the multipart header itself so the boundary is included.
        if encoding not in (BodyEncoding.NONE, BodyEncoding.MULTIPART):
            headers["Content-Type"] = CONTENT_TYPES[encoding]
        return headers

    @staticmethod
    def _encode_body(encoding: BodyEncoding, body: Any) -> Any:
        if body is None:
            return None
        if encoding is BodyEncoding.JSON and not isinstance(body, (str, bytes)):
            if isinstance(body, NoteBody):
                body = body.to_dict()
            return json.dumps(body)
        return body

    def invoke(
        self,
        name: str,
        *,
        fmt: Fmt | None = None,
        path_vars: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | Iterable[tuple[str, Any]] | str | None = None,
        body: Any = None,
        files: Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Call an endpoint by its table name.

        Args:
            name: Endpoint name, e.g. "element_get".
            fmt: JSON or XML for format-aware endpoints; JSON when omitted.
            path_vars: Values for the path template placeholders.
            query: Query params (mapping or pairs) or a pre-built query string.
            body: Request payload, encoded per the endpoint's body encoding.
            files: Multipart file fields, for multipart endpoints.

        Raises:
            ValueError: If the endpoint name is unknown.
            KeyError: If a path placeholder has no value.
        """
        spec = get_endpoint(name)
        path = spec.path.format(
            **{k: quote(format_value(v), safe="") for k, v in (path_vars or {}).items()}
        )
        if spec.format_aware:
            path = json_path(path, fmt or ReturnFormat.JSON)
        if isinstance(query, str):
            if query:
                path = f"{path}?{query}"
        else:
            path = with_query(path, query)

        base = self.base_url if spec.versioned else self._api_url
        return fetch(
            base,
            path,
            method=spec.method,
            headers=self._headers(spec.encoding),
            body=self._encode_body(spec.encoding, body),
            files=files,
            timeout=self._timeout,
            session=self._session,
        )

    # --- Miscellaneous ---

    def versions(self, fmt: Fmt = ReturnFormat.JSON) -> Any:
        """API versions supported by this instance (GET /api/versions)."""
        return self.invoke("versions", fmt=fmt)

    def capabilities(self, fmt: Fmt = ReturnFormat.JSON) -> Any:
        """Capabilities and limitations of the current API (GET /api/capabilities)."""
        return self.invoke("capabilities", fmt=fmt)

    def map(self, box: BoundingBox) -> Any:
        """
        All map data inside a bounding box (GET /api/0.6/map).

        Returns nodes inside the box, ways referencing them (with their other
        nodes), and relations referencing any of those. The API only answers in XML.
        """
        return self.invoke("map", query={"bbox": bbox_value(box)})

    def permissions(self, fmt: Fmt = ReturnFormat.JSON) -> Any:
        """Permissions of the current client. Empty when unauthenticated."""
        return self.invoke("permissions", fmt=fmt)

    # --- Changesets ---

    def changeset_create(self, xml_body: str | bytes) -> Any:
        return self.invoke("changeset_create", body=xml_body)

    def changeset_get(
        self,
        changeset_id: StrOrInt,
        include_discussion: bool = True,
        fmt: Fmt = ReturnFormat.JSON,
    ) -> Any:
        return self.invoke(
            "changeset_get",
            fmt=fmt,
            path_vars={"id": changeset_id},
            query={"include_discussion": True} if include_discussion else None,
        )

    def changeset_update(self, changeset_id: StrOrInt, xml_body: str | bytes) -> Any:
        return self.invoke("changeset_update", path_vars={"id": changeset_id}, body=xml_body)

    def changeset_close(self, changeset_id: StrOrInt) -> Any:
        return self.invoke("changeset_close", path_vars={"id": changeset_id})

    def changeset_download(self, changeset_id: StrOrInt) -> Any:
        return self.invoke("changeset_download", path_vars={"id": changeset_id})

    def changeset_query(self, query: ChangesetQuery) -> Any:
        """
        Search changesets. Only one filter is sent: the first populated field of
        `query` in the order box, user, display_name, time, open, closed,
        changesets, limit.
        """
        clause = changeset_query_clause(query)
        if not clause:
            logger.debug("Changeset query has no populated filter; sending none")
        return self.invoke("changeset_query", query=clause)

    def changeset_diff_upload(self, changeset_id: StrOrInt, xml_body: str | bytes) -> Any:
        """Upload an osmChange document into an open changeset."""
        return self.invoke("changeset_diff_upload", path_vars={"id": changeset_id}, body=xml_body)

    def changeset_comment(self, changeset_id: StrOrInt, text: str) -> Any:
        return self.invoke("changeset_comment", path_vars={"id": changeset_id}, body={"text": text})

    def changeset_subscribe(self, changeset_id: StrOrInt) -> Any:
        return self.invoke("changeset_subscribe", path_vars={"id": changeset_id})

    def changeset_unsubscribe(self, changeset_id: StrOrInt) -> Any:
        return self.invoke("changeset_unsubscribe", path_vars={"id": changeset_id})

    def changeset_hide_comment(self, comment_id: StrOrInt) -> Any:
        return self.invoke("changeset_hide_comment", path_vars={"id": comment_id})

    def changeset_unhide_comment(self, comment_id: StrOrInt) -> Any:
        return self.invoke("changeset_unhide_comment", path_vars={"id": comment_id})

    # --- Elements, by kind ---

    def create_element(self, kind: ElementType | str, xml_body: str | bytes) -> Any:
        return self.invoke("element_create", path_vars={"element": ElementType(kind).value}, body=xml_body)

    def get_element(self, kind: ElementType | str, element_id: StrOrInt, fmt: Fmt = ReturnFormat.JSON) -> Any:
        return self.invoke(
            "element_get", fmt=fmt, path_vars={"element": ElementType(kind).value, "id": element_id}
        )

    def update_element(self, kind: ElementType | str, element_id: StrOrInt, xml_body: str | bytes) -> Any:
        """The body must be the full element at its current version."""
        return self.invoke(
            "element_update",
            path_vars={"element": ElementType(kind).value, "id": element_id},
            body=xml_body,
        )

    def delete_element(self, kind: ElementType | str, element_id: StrOrInt, xml_body: str | bytes) -> Any:
        return self.invoke(
            "element_delete",
            path_vars={"element": ElementType(kind).value, "id": element_id},
            body=xml_body,
        )

    def element_history(self, kind: ElementType | str, element_id: StrOrInt) -> Any:
        return self.invoke("element_history", path_vars={"element": ElementType(kind).value, "id": element_id})

    def element_version(self, kind: ElementType | str, element_id: StrOrInt, version: StrOrInt) -> Any:
        return self.invoke(
            "element_version",
            path_vars={"element": ElementType(kind).value, "id": element_id, "version": version},
        )

    def get_elements(self, kind: ElementType | str, ids: str | Iterable[StrOrInt]) -> Any:
        """Several elements of one kind, e.g. GET nodes?nodes=1,2,3"""
        plural = ElementType(kind).plural
        return self.invoke("elements_multi", path_vars={"elements": plural}, query={plural: id_list(ids)})

    def element_relations(self, kind: ElementType | str, element_id: StrOrInt) -> Any:
        return self.invoke("element_relations", path_vars={"element": ElementType(kind).value, "id": element_id})

    def redact_element(
        self,
        kind: ElementType | str,
        element_id: StrOrInt,
        version: StrOrInt,
        redaction_id: StrOrInt,
    ) -> Any:
        return self.invoke(
            "element_redact",
            path_vars={"element": ElementType(kind).value, "id": element_id, "version": version},
            query={"redaction": redaction_id},
        )

    # --- Elements, named ---

    def create_node(self, xml_body: str | bytes) -> Any:
        return self.create_element(ElementType.NODE, xml_body)

    def create_way(self, xml_body: str | bytes) -> Any:
        return self.create_element(ElementType.WAY, xml_body)

    def create_relation(self, xml_body: str | bytes) -> Any:
        return self.create_element(ElementType.RELATION, xml_body)

    def get_node(self, node_id: StrOrInt, fmt: Fmt = ReturnFormat.JSON) -> Any:
        return self.get_element(ElementType.NODE, node_id, fmt)

    def get_way(self, way_id: StrOrInt, fmt: Fmt = ReturnFormat.JSON) -> Any:
        return self.get_element(ElementType.WAY, way_id, fmt)

    def get_relation(self, relation_id: StrOrInt, fmt: Fmt = ReturnFormat.JSON) -> Any:
        return self.get_element(ElementType.RELATION, relation_id, fmt)

    def update_node(self, node_id: StrOrInt, xml_body: str | bytes) -> Any:
        return self.update_element(ElementType.NODE, node_id, xml_body)

    def update_way(self, way_id: StrOrInt, xml_body: str | bytes) -> Any:
        return self.update_element(ElementType.WAY, way_id, xml_body)

    def update_relation(self, relation_id: StrOrInt, xml_body: str | bytes) -> Any:
        return self.update_element(ElementType.RELATION, relation_id, xml_body)

    def delete_node(self, node_id: StrOrInt, xml_body: str | bytes) -> Any:
        return self.delete_element(ElementType.NODE, node_id, xml_body)

    def delete_way(self, way_id: StrOrInt, xml_body: str | bytes) -> Any:
        return self.delete_element(ElementType.WAY, way_id, xml_body)

    def delete_relation(self, relation_id: StrOrInt, xml_body: str | bytes) -> Any:
        return self.delete_element(ElementType.RELATION, relation_id, xml_body)

    def get_node_history(self, node_id: StrOrInt) -> Any:
        return self.element_history(ElementType.NODE, node_id)

    def get_way_history(self, way_id: StrOrInt) -> Any:
        return self.element_history(ElementType.WAY, way_id)

    def get_relation_history(self, relation_id: StrOrInt) -> Any:
        return self.element_history(ElementType.RELATION, relation_id)

    def get_node_version(self, node_id: StrOrInt, version: StrOrInt) -> Any:
        return self.element_version(ElementType.NODE, node_id, version)

    def get_way_version(self, way_id: StrOrInt, version: StrOrInt) -> Any:
        return self.element_version(ElementType.WAY, way_id, version)

    def get_relation_version(self, relation_id: StrOrInt, version: StrOrInt) -> Any:
        return self.element_version(ElementType.RELATION, relation_id, version)

    def get_nodes(self, ids: str | Iterable[StrOrInt]) -> Any:
        return self.get_elements(ElementType.NODE, ids)

    def get_ways(self, ids: str | Iterable[StrOrInt]) -> Any:
        return self.get_elements(ElementType.WAY, ids)

    def get_relations(self, ids: str | Iterable[StrOrInt]) -> Any:
        return self.get_elements(ElementType.RELATION, ids)

    def get_relations_for_node(self, node_id: StrOrInt) -> Any:
        return self.element_relations(ElementType.NODE, node_id)

    def get_relations_for_way(self, way_id: StrOrInt) -> Any:
        return self.element_relations(ElementType.WAY, way_id)

    def get_relations_for_relation(self, relation_id: StrOrInt) -> Any:
        return self.element_relations(ElementType.RELATION, relation_id)

    def get_ways_for_node(self, node_id: StrOrInt) -> Any:
        return self.invoke("node_ways", path_vars={"id": node_id})

    def full_way(self, way_id: StrOrInt) -> Any:
        """The way plus all nodes it references."""
        return self.invoke("element_full", path_vars={"element": ElementType.WAY.value, "id": way_id})

    def full_relation(self, relation_id: StrOrInt) -> Any:
        """The relation plus its members, and the nodes of member ways."""
        return self.invoke("element_full", path_vars={"element": ElementType.RELATION.value, "id": relation_id})

    def redact_node(self, node_id: StrOrInt, version: StrOrInt, redaction_id: StrOrInt) -> Any:
        return self.redact_element(ElementType.NODE, node_id, version, redaction_id)

    def redact_way(self, way_id: StrOrInt, version: StrOrInt, redaction_id: StrOrInt) -> Any:
        return self.redact_element(ElementType.WAY, way_id, version, redaction_id)

    def redact_relation(self, relation_id: StrOrInt, version: StrOrInt, redaction_id: StrOrInt) -> Any:
        return self.redact_element(ElementType.RELATION, relation_id, version, redaction_id)

    # --- GPS traces ---

    def get_gps_points(self, box: BoundingBox, page: StrOrInt = 0) -> Any:
        """One page of public GPS points inside the box. Pages start at 0."""
        return self.invoke("trackpoints", query={"bbox": bbox_value(box), "page": page})

    def create_gpx(
        self,
        file: Any,
        description: str,
        tags: str | Iterable[str] = "",
        visibility: str = "private",
        filename: str = "trace.gpx",
    ) -> Any:
        """
        Upload a GPX trace as multipart/form-data.

        Args:
            file: GPX content (bytes, str or an open binary file).
            description: Trace description, required by the API.
            tags: Comma-separated string or iterable of tags.
            visibility: private, public, trackable or identifiable.
            filename: File name reported in the upload.
        """
        tag_value = tags if isinstance(tags, str) else ",".join(tags)
        return self.invoke(
            "gpx_create",
            body={"description": description, "tags": tag_value, "visibility": visibility},
            files={"file": (filename, file, "application/gpx+xml")},
        )

    def update_gpx(self, trace_id: StrOrInt, xml_body: str | bytes) -> Any:
        return self.invoke("gpx_update", path_vars={"id": trace_id}, body=xml_body)

    def delete_gpx(self, trace_id: StrOrInt) -> Any:
        return self.invoke("gpx_delete", path_vars={"id": trace_id})

    def gpx_details(self, trace_id: StrOrInt) -> Any:
        return self.invoke("gpx_details", path_vars={"id": trace_id})

    def gpx_data(self, trace_id: StrOrInt) -> Any:
        """Raw uploaded file; usually returned as the response object."""
        return self.invoke("gpx_data", path_vars={"id": trace_id})

    def list_gpx_files(self) -> Any:
        return self.invoke("gpx_list")

    # --- Users ---

    def get_user(self, user_id: StrOrInt, fmt: Fmt = ReturnFormat.JSON) -> Any:
        return self.invoke("user_get", fmt=fmt, path_vars={"id": user_id})

    def get_users(self, ids: str | Iterable[StrOrInt], fmt: Fmt = ReturnFormat.JSON) -> Any:
        return self.invoke("users_get", fmt=fmt, query={"users": id_list(ids)})

    def get_current_user(self, fmt: Fmt = ReturnFormat.JSON) -> Any:
        return self.invoke("user_details", fmt=fmt)

    def get_preferences(self, fmt: Fmt = ReturnFormat.JSON) -> Any:
        return self.invoke("preferences_get", fmt=fmt)

    def upload_preferences(self, body: str | bytes) -> Any:
        """Replace every preference of the authenticated user."""
        return self.invoke("preferences_upload", body=body)

    def get_preference(self, key: StrOrInt) -> Any:
        return self.invoke("preference_get", path_vars={"key": key})

    def set_preference(self, key: StrOrInt, value: str) -> Any:
        return self.invoke("preference_set", path_vars={"key": key}, body=value)

    def delete_preference(self, key: StrOrInt) -> Any:
        return self.invoke("preference_delete", path_vars={"key": key})

    # --- Notes ---

    def get_notes(self, box: BoundingBox, fmt: Fmt = ReturnFormat.JSON) -> Any:
        return self.invoke("notes_bbox", fmt=fmt, query={"bbox": bbox_value(box)})

    def get_all_notes(self, fmt: Fmt = ReturnFormat.JSON) -> Any:
        return self.invoke("notes_all", fmt=fmt)

    def get_note(self, note_id: StrOrInt, fmt: Fmt = ReturnFormat.JSON) -> Any:
        return self.invoke("note_get", fmt=fmt, path_vars={"id": note_id})

    def create_note_xml(self, text: str, lat: StrOrInt | float, lon: StrOrInt | float) -> Any:
        """Create a note with query parameters; the answer is XML."""
        return self.invoke("note_create", query={"lat": lat, "lon": lon, "text": text})

    def create_note_json(self, body: NoteBody | Mapping[str, Any]) -> Any:
        return self.invoke("note_create_json", body=body)

    def comment_note(self, note_id: StrOrInt, text: str) -> Any:
        return self.invoke("note_comment", path_vars={"id": note_id}, query={"text": text})

    def close_note(self, note_id: StrOrInt, text: str) -> Any:
        return self.invoke("note_close", path_vars={"id": note_id}, query={"text": text})

    def reopen_note(self, note_id: StrOrInt, text: str) -> Any:
        return self.invoke("note_reopen", path_vars={"id": note_id}, query={"text": text})

    def hide_note(self, note_id: StrOrInt, text: str) -> Any:
        return self.invoke("note_hide", path_vars={"id": note_id}, query={"text": text})

    def search_notes(self, terms: NoteSearchTerms) -> Any:
        """
        Search notes. All eight filter keys are always sent; unset ones are empty.
        """
        return self.invoke("notes_search", query=note_search_params(terms))

    def notes_feed(self) -> Any:
        return self.invoke("notes_feed")
