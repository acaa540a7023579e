"""Logging setup for the API process."""

from __future__ import annotations

import logging
import logging.config
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

REQUEST_LOGGER = "claims.api.requests"
PERFORMANCE_LOGGER = "claims.api.performance"
AUDIT_LOGGER = "claims.api.audit"


def configure_logging(level: str | None = None) -> None:
    """Configure the ``claims`` logger hierarchy.

    The level comes from ``level`` or ``LOG_LEVEL`` (default ``INFO``). Noisy
    client libraries are held at WARNING.
    """
    resolved = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    if resolved not in logging.getLevelNamesMapping():
        resolved = "INFO"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"standard": {"format": LOG_FORMAT}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stderr",
                }
            },
            "loggers": {
                "claims": {"handlers": ["console"], "level": resolved, "propagate": False},
                "httpx": {"level": "WARNING"},
                "anthropic": {"level": "WARNING"},
            },
        }
    )


def get_request_logger() -> logging.Logger:
    return logging.getLogger(REQUEST_LOGGER)


def get_performance_logger() -> logging.Logger:
    return logging.getLogger(PERFORMANCE_LOGGER)


def get_audit_logger() -> logging.Logger:
    return logging.getLogger(AUDIT_LOGGER)
