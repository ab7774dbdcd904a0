"""Logging setup shared by the API and its services."""

from __future__ import annotations

import logging
import sys

LOGGER_NAMESPACE = "gateway_credentials"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure the namespace logger once. Later calls only adjust the level."""
    global _configured
    root = logging.getLogger(LOGGER_NAMESPACE)
    root.setLevel(level.upper())
    if _configured:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a child logger of the service namespace."""
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
