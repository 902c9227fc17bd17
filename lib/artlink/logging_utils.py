"""
Logging utilities for safe, structured logging.

Provides functions to mask identifying data (tag serials, cookies, tokens)
before logging pairing state, and a consistent summary format for
operation results.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)

# Key substrings whose values are masked in logs.
# Substring matching: "serial" matches "tag_serial" and "serial_id".
DEFAULT_SENSITIVE_KEYS = frozenset(
    {
        "serial",  # Physical tag identifiers
        "token",  # Auth tokens
        "cookie",  # Session cookies forwarded to the storefront
        "password",
        "secret",
        "authorization",
    }
)


def mask_value(key: str, value: Any, sensitive_keys: frozenset[str] | None = None) -> Any:
    """
    Mask a value if the key indicates it contains sensitive data.

    Args:
        key: The dictionary key or field name
        value: The value to potentially mask
        sensitive_keys: Set of key substrings to treat as sensitive

    Returns:
        Masked value if sensitive, original value otherwise
    """
    if sensitive_keys is None:
        sensitive_keys = DEFAULT_SENSITIVE_KEYS

    key_lower = key.lower()

    if any(s in key_lower for s in sensitive_keys):
        if value is None:
            return None
        if isinstance(value, str):
            # Keep the tail of long identifiers so log lines can still be correlated
            if len(value) > 8:
                return f"***{value[-4:]}"
            return "***"
        if isinstance(value, (list, dict)):
            return f"[{type(value).__name__}: masked]"
        return "***"

    if isinstance(value, dict):
        return {k: mask_value(k, v, sensitive_keys) for k, v in value.items()}

    if isinstance(value, list):
        return [mask_value(key, item, sensitive_keys) for item in value]

    return value


def safe_log_event(
    event: dict[str, Any],
    sensitive_keys: frozenset[str] | None = None,
) -> dict[str, Any]:
    """
    Return event with sensitive data masked for safe logging.

    Args:
        event: Dictionary to sanitize (e.g. a pairing state snapshot)
        sensitive_keys: Optional set of key substrings to treat as sensitive

    Returns:
        A copy of the event with sensitive values masked

    Example:
        ```python
        logger.info(f"Pairing state: {safe_log_event(state.to_dict())}")
        # Logs: {"phase": "Encoding", "tag_serial": "***a1b2", ...}
        ```
    """
    if not isinstance(event, dict):
        return {"_raw": str(event)[:100]}

    if sensitive_keys is None:
        sensitive_keys = DEFAULT_SENSITIVE_KEYS

    try:
        return {k: mask_value(k, v, sensitive_keys) for k, v in event.items()}
    except RecursionError:
        logger.warning("Failed to mask event: structure too deep")
        return {"_error": "Could not safely serialize event", "_keys": list(event.keys())[:10]}


def log_summary(
    operation: str,
    *,
    success: bool = True,
    duration_ms: float | None = None,
    item_count: int | None = None,
    error: str | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """
    Create a structured log summary for an operation.

    Args:
        operation: Name of the operation (e.g., "fetch_listing", "pairing")
        success: Whether the operation succeeded
        duration_ms: Optional duration in milliseconds
        item_count: Optional count of items processed
        error: Optional error message (will be truncated)
        **kwargs: Additional safe fields to include

    Returns:
        Dictionary suitable for structured logging

    Example:
        ```python
        logger.info(log_summary("extract_listing", item_count=12, duration_ms=8.4))
        ```
    """
    summary: dict[str, Any] = {
        "operation": operation,
        "success": success,
    }

    if duration_ms is not None:
        summary["duration_ms"] = round(duration_ms, 2)

    if item_count is not None:
        summary["item_count"] = item_count

    if error:
        summary["error"] = error[:500] if len(error) > 500 else error

    for key, value in kwargs.items():
        # Only primitives go in directly; sequences are reduced to a count
        if isinstance(value, (str, int, float, bool)):
            summary[key] = value
        elif isinstance(value, (list, tuple)):
            summary[key] = len(value)

    return summary
