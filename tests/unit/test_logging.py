"""Tests for logging setup."""

import logging
from collections.abc import Iterator

import pytest
import structlog

from flaresolverr import Settings
from flaresolverr.utils.logging import PACKAGE_LOGGER, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Leave structlog and the package logger unconfigured for other tests."""
    yield
    structlog.reset_defaults()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.NOTSET)
    package_logger.handlers.clear()


def test_setup_logging_quiets_http_stack() -> None:
    """Test that httpx chatter is raised to WARNING."""
    setup_logging(Settings(log_level="debug"))

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING


def test_setup_logging_sets_package_level() -> None:
    """Test that the configured level applies to the package logger only."""
    root_level = logging.getLogger().level

    setup_logging(Settings(log_level="debug"))

    assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG
    assert logging.getLogger().level == root_level


def test_setup_logging_is_repeatable() -> None:
    """Test that a second call does not stack handlers."""
    setup_logging(Settings())
    setup_logging(Settings())

    assert len(logging.getLogger(PACKAGE_LOGGER).handlers) <= 1


def test_get_logger_renders_json(caplog: pytest.LogCaptureFixture) -> None:
    """Test that a configured logger emits JSON events."""
    setup_logging(Settings(log_level="INFO"))
    caplog.set_level(logging.INFO)

    get_logger("flaresolverr.test").info("hello", answer=42)

    assert '"event": "hello"' in caplog.text
    assert '"answer": 42' in caplog.text
