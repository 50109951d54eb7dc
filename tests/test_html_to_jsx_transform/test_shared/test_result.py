"""Tests for diagnostic and metric result types."""

import logging

import pytest

from html_to_jsx_transform.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    ResourceExhaustedError,
    ConversionError,
    get_logger,
)


class TestDiagnosticEntry:
    """Test DiagnosticEntry validation and serialization."""

    def test_valid_entry(self):
        """Test creating a diagnostic with context."""
        entry = DiagnosticEntry(
            severity=DiagnosticSeverity.WARNING,
            message="Closed <p> at end of input",
            component="html_tree_builder",
            position={"line": 1, "column": 1, "offset": 0},
            details={"repair_type": "unclosed_element"},
            correlation_id="abc",
        )
        data = entry.to_dict()
        assert data["severity"] == "WARNING"
        assert data["component"] == "html_tree_builder"
        assert data["position"]["line"] == 1
        assert data["details"]["repair_type"] == "unclosed_element"

    def test_to_dict_omits_empty_context(self):
        """Test that position and details are only present when set."""
        entry = DiagnosticEntry(DiagnosticSeverity.INFO, "note", "api")
        assert set(entry.to_dict()) == {"severity", "message", "component"}

    def test_empty_message_rejected(self):
        """Test that a diagnostic needs a message."""
        with pytest.raises(ValueError, match="message"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "", "api")

    def test_empty_component_rejected(self):
        """Test that a diagnostic needs a component."""
        with pytest.raises(ValueError, match="component"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "note", "")


class TestPerformanceMetrics:
    """Test derived performance figures."""

    def test_rates(self):
        """Test per-second and per-character figures."""
        metrics = PerformanceMetrics(
            processing_time_ms=500.0,
            memory_used_bytes=2000,
            characters_processed=1000,
            tokens_generated=100,
        )
        assert metrics.characters_per_second == 2000.0
        assert metrics.tokens_per_second == 200.0
        assert metrics.memory_per_character == 2.0

    def test_zero_division_guards(self):
        """Test that empty metrics report zero rates."""
        metrics = PerformanceMetrics()
        assert metrics.characters_per_second == 0.0
        assert metrics.tokens_per_second == 0.0
        assert metrics.memory_per_character == 0.0

    def test_to_dict(self):
        """Test serialization keys."""
        data = PerformanceMetrics(output_characters=5).to_dict()
        assert data["output_characters"] == 5
        assert "memory_used_bytes" in data


class TestErrors:
    """Test engine error types."""

    def test_resource_exhausted_details(self):
        """Test that the exhausted resource and its limit are recorded."""
        error = ResourceExhaustedError("too deep", resource="nesting_depth", limit=3, observed=4)
        assert isinstance(error, ConversionError)
        assert error.resource == "nesting_depth"
        assert error.limit == 3
        assert error.observed == 4
        assert str(error) == "too deep"


class TestCorrelationLogger:
    """Test correlation-aware logging."""

    def test_records_carry_correlation_info(self, caplog):
        """Test that component and correlation ID are attached to records."""
        logger = get_logger("html_to_jsx_transform.test", "corr-1", "tester")

        with caplog.at_level(logging.DEBUG, logger="html_to_jsx_transform.test"):
            logger.info("hello", extra={"count": 2})

        record = caplog.records[-1]
        assert record.component == "tester"
        assert record.correlation_id == "corr-1"
        assert record.count == 2

    def test_logger_methods(self, caplog):
        """Test the levels the package logs at."""
        logger = get_logger("html_to_jsx_transform.test", "corr-2")

        with caplog.at_level(logging.DEBUG, logger="html_to_jsx_transform.test"):
            logger.debug("d")
            logger.info("i")
            logger.warning("w", extra={"limit": 3})

        assert [record.levelname for record in caplog.records] == ["DEBUG", "INFO", "WARNING"]
        assert caplog.records[-1].limit == 3

    def test_default_component_from_name(self):
        """Test that the component defaults to the last name segment."""
        logger = get_logger("html_to_jsx_transform.jsx.renderer")
        assert logger.component == "renderer"
