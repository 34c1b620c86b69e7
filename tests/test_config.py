"""
Tests for environment-driven configuration.
"""

from __future__ import annotations

import pytest

from osmgest import __version__
from osmgest.infrastructure.osm_client import OsmApiClient
from osmgest.utils import config


def test_defaults() -> None:
    assert config.osm_api_url() == config.OSM_DEV_URL
    assert config.osm_api_version() == "0.6"
    assert config.osm_access_token() is None
    assert config.osm_user_agent() == f"osmgest/{__version__}"
    assert config.osm_http_timeout() == 30.0


def test_main_server(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OSM_API_ENV", "main")
    assert config.osm_api_url() == config.OSM_MAIN_URL


def test_explicit_url_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OSM_API_ENV", "main")
    monkeypatch.setenv("OSM_API_URL", "http://localhost:3000/api")
    assert config.osm_api_url() == "http://localhost:3000/api"


def test_invalid_timeout_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OSM_HTTP_TIMEOUT", "soon")
    assert config.osm_http_timeout() == 30.0
    monkeypatch.setenv("OSM_HTTP_TIMEOUT", "2.5")
    assert config.osm_http_timeout() == 2.5


def test_get_optional_int(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OSM_TEST_INT", "12")
    assert config.get_optional_int("OSM_TEST_INT", 1) == 12
    monkeypatch.setenv("OSM_TEST_INT", "x")
    assert config.get_optional_int("OSM_TEST_INT", 1) == 1


def test_get_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OSM_TEST_REQUIRED", raising=False)
    with pytest.raises(ValueError, match="OSM_TEST_REQUIRED"):
        config.get_required("OSM_TEST_REQUIRED")
    monkeypatch.setenv("OSM_TEST_REQUIRED", " value ")
    assert config.get_required("OSM_TEST_REQUIRED") == "value"


def test_client_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OSM_API_URL", "https://env.test/api")
    monkeypatch.setenv("OSM_API_VERSION", "0.7")
    client = OsmApiClient()
    assert client.api_url == "https://env.test/api"
    assert client.base_url == "https://env.test/api/0.7"


def test_client_arguments_override_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OSM_API_URL", "https://env.test/api")
    client = OsmApiClient(api_url="https://arg.test/api", api_version="0.6")
    assert client.base_url == "https://arg.test/api/0.6"
