"""
Contextual logging for index creation.

Every ``create_indexes`` run executes inside ``indexing_context``: its log
records carry the collection name, the record type and a correlation ID,
whichever module (indexer or gateway) emits them.
"""

import contextvars
import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)

# Collection and record of the run in progress
_index_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "index_context", default=None
)


def get_correlation_id() -> str | None:
    """Get the current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Set a correlation ID in the current context.

    A correlation ID set before ``create_indexes`` is reused by the run
    instead of generating a new one.

    Args:
        correlation_id: Optional correlation ID (generates new one if None)

    Returns:
        The correlation ID that was set
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
    _correlation_id.set(correlation_id)
    return correlation_id


@contextmanager
def indexing_context(
    collection_name: str | None,
    record_name: str,
    correlation_id: str | None = None,
) -> Iterator[str]:
    """
    Scope log context to one index creation run.

    Args:
        collection_name: Collection receiving the indexes (if known)
        record_name: Name of the record type being indexed
        correlation_id: Explicit correlation ID; defaults to the one already
            in context, or a new one

    Yields:
        The correlation ID of the run
    """
    correlation_id = correlation_id or get_correlation_id() or str(uuid.uuid4())
    id_token = _correlation_id.set(correlation_id)
    context_token = _index_context.set(
        {"collection_name": collection_name, "record": record_name}
    )
    try:
        yield correlation_id
    finally:
        _index_context.reset(context_token)
        _correlation_id.reset(id_token)


def get_logging_context() -> dict[str, Any]:
    """
    Get current logging context (correlation ID and index context).

    Returns:
        Dictionary with context information
    """
    context: dict[str, Any] = {"timestamp": datetime.now().isoformat()}

    correlation_id = get_correlation_id()
    if correlation_id:
        context["correlation_id"] = correlation_id

    index_context = _index_context.get()
    if index_context:
        context.update(index_context)

    return context


class ContextualLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that stamps the current index context on each record."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        context = get_logging_context()
        extra = kwargs.get("extra")
        if extra:
            context.update(extra)
        kwargs["extra"] = context
        return msg, kwargs


def get_logger(name: str) -> ContextualLoggerAdapter:
    """
    Get a contextual logger for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        ContextualLoggerAdapter instance
    """
    return ContextualLoggerAdapter(logging.getLogger(name), {})


def log_operation(
    logger: logging.Logger | logging.LoggerAdapter,
    operation: str,
    level: int = logging.INFO,
    success: bool = True,
    duration_ms: float | None = None,
    **context: Any,
) -> None:
    """
    Log the outcome of an operation as one structured record.

    Args:
        logger: Logger or contextual adapter
        operation: Operation name
        level: Log level
        success: Whether operation succeeded
        duration_ms: Operation duration in milliseconds
        **context: Additional fields (stage, index_count, ...)
    """
    fields: dict[str, Any] = {"operation": operation, "success": success, **context}
    if duration_ms is not None:
        fields["duration_ms"] = round(duration_ms, 2)

    message = f"Operation: {operation}" if success else f"Operation failed: {operation}"
    if duration_ms is not None:
        message += f" (duration: {duration_ms:.2f}ms)"

    logger.log(level, message, extra=fields)
