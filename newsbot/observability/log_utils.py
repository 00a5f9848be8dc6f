"""
Helpers for structured logging with untrusted values.

User text and upstream payloads end up in log context; these helpers keep
them bounded and printable.

Dependencies: logging (stdlib), newsbot.observability.correlation
System role: Logging helper functions
"""

import logging
from typing import Any

from newsbot.observability.correlation import get_correlation_id


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Render a value for log context.

    Collections are summarised by size; long strings are truncated.

    Args:
        value: Value to render
        max_length: Maximum length before truncating

    Returns:
        str: Bounded string representation
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple, set)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"
    try:
        text = value if isinstance(value, str) else str(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"
    if len(text) > max_length:
        return text[:max_length] + f"... (truncated, {len(text)} total)"
    return text


def _context(context: dict[str, Any]) -> dict[str, str]:
    safe = {key: safe_log_value(val) for key, val in context.items()}
    correlation_id = get_correlation_id()
    if correlation_id:
        safe.setdefault("request_id", correlation_id)
    return safe


def log_with_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """Log ``message`` at ``level`` with sanitised ``extra`` context."""
    logger.log(level, message, extra=_context(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log an exception with traceback and sanitised context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception being handled
        **context: Additional context values
    """
    safe = _context(context)
    safe.update({"error_type": type(exc).__name__, "error_msg": safe_log_value(exc)})
    logger.error(message, exc_info=exc, extra=safe)
