"""Logging setup for the JusticeAlly API."""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER = "justiceally"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Configure the ``justiceally`` logger hierarchy once per process.

    Args:
        level: Log level name; defaults to ``LOG_LEVEL`` from the config.
    """
    global _configured
    if _configured:
        return

    if level is None:
        from api.config import get_config

        level = get_config().log_level

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.addHandler(handler)
    root.propagate = False

    # Third-party clients are chatty at INFO.
    for name in ("httpx", "httpcore", "anthropic"):
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
    root.debug(f"Logging configured at {level}")


def get_request_logger() -> logging.Logger:
    """HTTP request/response log lines."""
    return logging.getLogger(f"{ROOT_LOGGER}.request")


def get_audit_logger() -> logging.Logger:
    """Security-relevant events: rejected payloads, rate limits."""
    return logging.getLogger(f"{ROOT_LOGGER}.audit")


def get_performance_logger() -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.performance")
