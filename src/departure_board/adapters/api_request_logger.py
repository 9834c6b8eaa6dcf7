"""Utility for logging API requests when BOARD_LOG_REQUESTS is enabled."""

import logging
import os
from typing import Any

logger = logging.getLogger(__name__)


def should_log_requests() -> bool:
    """Check if request logging is enabled via BOARD_LOG_REQUESTS environment variable."""
    return os.getenv("BOARD_LOG_REQUESTS", "").lower() == "true"


def build_url_with_params(url: str, params: dict[str, Any] | None) -> str:
    """Build full URL with query parameters, in a stable order."""
    if not params:
        return url
    param_str = "&".join(f"{k}={v}" for k, v in sorted(params.items()))
    return f"{url}?{param_str}" if "?" not in url else f"{url}&{param_str}"


def log_api_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    timeout_seconds: float | None = None,
) -> None:
    """Log API request details if BOARD_LOG_REQUESTS is enabled.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Request URL.
        params: Query parameters (optional).
        timeout_seconds: Timeout applied to the request (optional).
    """
    if not should_log_requests():
        return

    message = f"API Request: {method} {build_url_with_params(url, params)}"
    if timeout_seconds is not None:
        message += f" (timeout {timeout_seconds:g}s)"
    logger.info(message)
