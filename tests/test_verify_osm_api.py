"""
Tests for the setup verification script, with a mocked client.
"""

from __future__ import annotations

import logging
from unittest.mock import MagicMock, patch

import pytest
import requests

from verify_osm_api import check_env_vars, check_token, check_versions, main


def test_check_env_vars_defaults() -> None:
    ok, msgs = check_env_vars()
    assert ok
    assert any("OSM_ACCESS_TOKEN is not set" in m for m in msgs)


def test_check_env_vars_bad_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OSM_API_URL", "osm.test/api")
    ok, msgs = check_env_vars()
    assert not ok
    assert msgs[0].startswith("[X]")


def test_check_versions_supported() -> None:
    client = MagicMock(api_version="0.6")
    client.versions.return_value = {"api": {"versions": ["0.6"]}}
    ok, msg = check_versions(client)
    assert ok
    assert "0.6" in msg


def test_check_versions_unsupported() -> None:
    client = MagicMock(api_version="0.7")
    client.versions.return_value = {"api": {"versions": ["0.6"]}}
    ok, _ = check_versions(client)
    assert not ok


def test_check_versions_connection_error() -> None:
    client = MagicMock(api_version="0.6")
    client.versions.side_effect = requests.ConnectionError("down")
    ok, msg = check_versions(client)
    assert not ok
    assert "Error connecting" in msg


def test_check_token_skipped_without_token() -> None:
    ok, msg = check_token(MagicMock())
    assert not ok
    assert "Skipping" in msg


def test_check_token_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OSM_ACCESS_TOKEN", "tok")
    client = MagicMock()
    client.get_current_user.return_value = {"user": {"display_name": "mapper"}}
    ok, msg = check_token(client)
    assert ok
    assert "mapper" in msg


def test_main_verbose_enables_debug_logging() -> None:
    client = MagicMock(api_version="0.6")
    client.versions.return_value = {"api": {"versions": ["0.6"]}}
    with patch("verify_osm_api.setup_logger") as mock_setup, patch("verify_osm_api.OsmApiClient", return_value=client):
        code = main(["-v"])

    assert code == 0
    mock_setup.assert_called_once_with(level=logging.DEBUG)


def test_main_default_logging_level() -> None:
    client = MagicMock(api_version="0.6")
    client.versions.return_value = {"api": {"versions": ["0.6"]}}
    with patch("verify_osm_api.setup_logger") as mock_setup, patch("verify_osm_api.OsmApiClient", return_value=client):
        main([])

    mock_setup.assert_called_once_with(level=logging.WARNING)
