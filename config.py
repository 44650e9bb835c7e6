"""Centralized configuration for environment variables."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

BASE_URL_ENV = "MLB_STATS_API_BASE_URL"
TIMEOUT_ENV = "MLB_STATS_API_TIMEOUT"
LOG_LEVEL_ENV = "MLB_STATS_LOG_LEVEL"

DEFAULT_BASE_URL = "https://statsapi.mlb.com/api"
DEFAULT_TIMEOUT = 10.0  # seconds
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_base_url() -> str:
    """Return the Stats API base URL without a trailing slash."""
    value = os.environ.get(BASE_URL_ENV, "").strip()
    if not value:
        return DEFAULT_BASE_URL
    if not value.startswith(("http://", "https://")):
        logger.warning("Ignoring %s=%r: not an http(s) URL", BASE_URL_ENV, value)
        return DEFAULT_BASE_URL
    return value.rstrip("/")


def get_timeout() -> float:
    """Return the request timeout in seconds."""
    raw = os.environ.get(TIMEOUT_ENV, "").strip()
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", TIMEOUT_ENV, raw)
        return DEFAULT_TIMEOUT
    if timeout <= 0:
        logger.warning("Ignoring %s=%r: must be positive", TIMEOUT_ENV, raw)
        return DEFAULT_TIMEOUT
    return timeout


def get_log_level() -> str:
    """Return the logging level name for CLI entry points."""
    raw = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not raw:
        return DEFAULT_LOG_LEVEL
    if raw not in _LOG_LEVELS:
        logger.warning("Ignoring %s=%r: expected one of %s", LOG_LEVEL_ENV, raw,
                       ", ".join(_LOG_LEVELS))
        return DEFAULT_LOG_LEVEL
    return raw
