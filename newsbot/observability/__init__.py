"""
Observability module.

Provides logging configuration, structured logging helpers, correlation ID
tracking and HTTP request logging middleware.
"""

from newsbot.observability.correlation import get_correlation_id, set_correlation_id
from newsbot.observability.logger import configure_logging

__all__ = ["configure_logging", "get_correlation_id", "set_correlation_id"]
