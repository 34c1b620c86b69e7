"""
Tests for the endpoint table.
"""

from __future__ import annotations

import pytest

from osmgest.domains.osm.registry import (
    CONTENT_TYPES,
    BodyEncoding,
    get_endpoint,
    get_endpoint_definitions,
    get_endpoint_registry,
)


def test_endpoint_names_are_unique() -> None:
    names = [e.name for e in get_endpoint_definitions()]
    assert len(names) == len(set(names))
    assert set(names) == set(get_endpoint_registry())


def test_endpoint_methods_are_valid() -> None:
    for e in get_endpoint_definitions():
        assert e.method in ("GET", "POST", "PUT", "DELETE"), e.name
        assert not e.path.startswith("/"), e.name


def test_get_endpoints_have_no_body() -> None:
    for e in get_endpoint_definitions():
        if e.method == "GET":
            assert e.encoding is BodyEncoding.NONE, e.name


def test_every_encoding_has_a_content_type() -> None:
    for enc in BodyEncoding:
        if enc is not BodyEncoding.NONE:
            assert enc in CONTENT_TYPES


def test_unversioned_endpoints() -> None:
    unversioned = {e.name for e in get_endpoint_definitions() if not e.versioned}
    assert unversioned == {"versions", "capabilities"}


def test_get_endpoint() -> None:
    e = get_endpoint("changeset_comment")
    assert e.method == "POST"
    assert e.path == "changeset/{id}/comment"
    assert e.encoding is BodyEncoding.FORM


def test_get_endpoint_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown OSM endpoint"):
        get_endpoint("does_not_exist")
