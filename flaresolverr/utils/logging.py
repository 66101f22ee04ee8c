"""Structured logging setup."""

import logging
import sys
from typing import cast

import structlog

from flaresolverr.config import Settings, settings

PACKAGE_LOGGER = "flaresolverr"

# Third-party loggers kept at WARNING so request traces stay readable
NOISY_LOGGERS = ("httpx", "httpcore", "hpack")


def _renderer(config: Settings) -> structlog.typing.Processor:
    if config.debug:
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging(config: Settings | None = None) -> None:
    """
    Route client log events through structlog.

    Events are rendered by structlog and handed to the stdlib
    ``flaresolverr`` logger, which gets a stdout handler unless the root
    logger already has one. Calling this again replaces the earlier setup.

    Args:
        config: Settings to read level and renderer from. Defaults to the
            environment-driven settings.
    """
    config = config or settings
    log_level = getattr(logging, config.log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            _renderer(config),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(log_level)
    package_logger.handlers.clear()
    if not logging.getLogger().handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance for the given name."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
