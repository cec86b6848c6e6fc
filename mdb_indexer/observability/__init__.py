"""
Observability components.

Provides contextual logging for index creation runs.
"""

from .logging import (
    ContextualLoggerAdapter,
    get_correlation_id,
    get_logger,
    get_logging_context,
    indexing_context,
    log_operation,
    set_correlation_id,
)

__all__ = [
    "get_correlation_id",
    "set_correlation_id",
    "indexing_context",
    "get_logging_context",
    "ContextualLoggerAdapter",
    "get_logger",
    "log_operation",
]
