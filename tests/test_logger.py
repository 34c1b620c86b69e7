"""
Tests for logging setup.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from osmgest.utils.logger import get_logger, setup_logger


@pytest.fixture
def logger_name(request: pytest.FixtureRequest):
    name = f"osmgest.tests.{request.node.name}"
    yield name
    log = logging.getLogger(name)
    for h in list(log.handlers):
        h.close()
        log.removeHandler(h)


def test_setup_logger_handlers_and_format(logger_name: str, tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "osm.log"
    log = setup_logger(logger_name, level=logging.DEBUG, log_file=log_file)

    assert log.level == logging.DEBUG
    assert len(log.handlers) == 2
    assert isinstance(log.handlers[0], logging.StreamHandler)
    assert isinstance(log.handlers[1], logging.FileHandler)
    for h in log.handlers:
        assert h.formatter._fmt == "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    log.debug("GET %s", "https://osm.test/api/0.6/map")
    log.handlers[1].flush()
    assert "| DEBUG | " in log_file.read_text(encoding="utf-8")


def test_setup_logger_is_idempotent_but_updates_level(logger_name: str) -> None:
    log = setup_logger(logger_name, level=logging.WARNING)
    again = setup_logger(logger_name, level=logging.DEBUG)

    assert again is log
    assert len(log.handlers) == 1
    assert log.level == logging.DEBUG


def test_get_logger_default_name() -> None:
    assert get_logger().name == "osmgest"
