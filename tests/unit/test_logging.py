"""
Unit tests for contextual logging helpers.
"""

import logging

import pytest

from mdb_indexer.observability.logging import (
    ContextualLoggerAdapter,
    get_correlation_id,
    get_logger,
    get_logging_context,
    indexing_context,
    log_operation,
    set_correlation_id,
)


@pytest.mark.unit
class TestLoggingContext:
    """Test correlation ID and indexing context."""

    def test_generated_correlation_id(self):
        correlation_id = set_correlation_id()
        assert correlation_id
        assert get_correlation_id() == correlation_id

    def test_explicit_correlation_id(self):
        set_correlation_id("abc-123")
        assert get_logging_context()["correlation_id"] == "abc-123"

    def test_indexing_context_sets_and_resets(self):
        assert "collection_name" not in get_logging_context()

        with indexing_context("users", "User") as correlation_id:
            context = get_logging_context()
            assert context["collection_name"] == "users"
            assert context["record"] == "User"
            assert context["correlation_id"] == correlation_id

        context = get_logging_context()
        assert "collection_name" not in context
        assert "record" not in context
        assert get_correlation_id() is None

    def test_indexing_context_reuses_preset_correlation_id(self):
        set_correlation_id("request-7")

        with indexing_context("users", "User") as correlation_id:
            assert correlation_id == "request-7"

        assert get_correlation_id() == "request-7"

    def test_indexing_context_explicit_id_wins(self):
        set_correlation_id("request-7")

        with indexing_context("users", "User", correlation_id="run-1") as correlation_id:
            assert correlation_id == "run-1"
            assert get_correlation_id() == "run-1"

        assert get_correlation_id() == "request-7"

    def test_nested_contexts_restore_outer(self):
        with indexing_context("users", "User"):
            with indexing_context("sessions", "Session"):
                assert get_logging_context()["collection_name"] == "sessions"
            assert get_logging_context()["collection_name"] == "users"

    def test_context_reset_on_error(self):
        with pytest.raises(RuntimeError):
            with indexing_context("users", "User"):
                raise RuntimeError("boom")

        assert "record" not in get_logging_context()


@pytest.mark.unit
class TestLoggers:
    """Test logger helpers."""

    def test_get_logger_returns_adapter(self):
        assert isinstance(get_logger("mdb_indexer.test"), ContextualLoggerAdapter)

    def test_adapter_adds_context(self, caplog):
        adapter = get_logger("mdb_indexer.test")

        with caplog.at_level(logging.INFO, logger="mdb_indexer.test"):
            with indexing_context("users", "User", correlation_id="corr-1"):
                adapter.info("hello", extra={"field": "email"})

        record = caplog.records[-1]
        assert record.correlation_id == "corr-1"
        assert record.collection_name == "users"
        assert record.record == "User"
        assert record.field == "email"

    def test_log_operation_failure(self, caplog):
        logger = logging.getLogger("mdb_indexer.test")

        with caplog.at_level(logging.ERROR, logger="mdb_indexer.test"):
            log_operation(
                logger, "create_indexes", level=logging.ERROR, success=False, duration_ms=1.234
            )

        record = caplog.records[-1]
        assert record.getMessage() == "Operation failed: create_indexes (duration: 1.23ms)"
        assert record.duration_ms == 1.23
        assert record.success is False
