"""
Shared fixtures: a clean OSM environment and fake `requests` responses.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from osmgest.infrastructure.osm_client import OsmApiClient

_OSM_ENV_VARS = (
    "OSM_API_ENV",
    "OSM_API_URL",
    "OSM_API_VERSION",
    "OSM_ACCESS_TOKEN",
    "OSM_USER_AGENT",
    "OSM_HTTP_TIMEOUT",
)

BASE = "https://osm.test/api"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _OSM_ENV_VARS:
        monkeypatch.delenv(key, raising=False)


def _make_response(content_type: str | None, *, json_data: Any = None, text: str = "", status_code: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.headers = {} if content_type is None else {"Content-Type": content_type}
    resp.json.return_value = json_data
    resp.text = text
    return resp


@pytest.fixture
def json_response() -> MagicMock:
    return _make_response("application/json; charset=utf-8", json_data={"ok": True})


@pytest.fixture
def client() -> OsmApiClient:
    return OsmApiClient(api_url=BASE, api_version="0.6", user_agent="osmgest-tests", timeout=5)


@pytest.fixture
def make_response():
    """Factory for fake responses: make_response(content_type, json_data=..., text=..., status_code=...)."""
    return _make_response
