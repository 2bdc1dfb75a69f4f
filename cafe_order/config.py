"""Runtime configuration defaults for the backend API and debug logging."""

from __future__ import annotations

import os

API_BASE_URL = "http://localhost:3000"
HTTP_TIMEOUT_SECONDS = 15.0
DEBUG_LOG_PATH = "/tmp/cafe-order-debug.log"

# Shown when the backend answers without an order identifier.
PLACEHOLDER_ORDER_ID = "unknown"

_API_BASE_URL_ENV = "CAFE_API_BASE_URL"
_HTTP_TIMEOUT_ENV = "CAFE_HTTP_TIMEOUT_SECONDS"
_DEBUG_LOG_PATH_ENV = "CAFE_DEBUG_LOG_PATH"


def resolve_api_base_url() -> str:
    """
    Resolve the backend base URL.

    Resolution order:
    1. CAFE_API_BASE_URL (if set)
    2. API_BASE_URL
    """
    env_override = os.environ.get(_API_BASE_URL_ENV, "").strip()
    return (env_override or API_BASE_URL).rstrip("/")


def resolve_http_timeout() -> float:
    """Resolve the HTTP timeout, ignoring unparsable or non-positive overrides."""
    raw = os.environ.get(_HTTP_TIMEOUT_ENV, "").strip()
    if not raw:
        return HTTP_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        return HTTP_TIMEOUT_SECONDS
    if value <= 0:
        return HTTP_TIMEOUT_SECONDS
    return value


def resolve_debug_log_path() -> str:
    return os.environ.get(_DEBUG_LOG_PATH_ENV, "").strip() or DEBUG_LOG_PATH
