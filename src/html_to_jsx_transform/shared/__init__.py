"""Shared utilities for HTML to JSX conversion.

This module provides the configuration objects, result and diagnostic types,
error types and logging helpers used across all processing layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    ConverterConfig,
    ParserConfig,
    RendererConfig,
)
from .errors import (
    ConversionError,
    ResourceExhaustedError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "ConverterConfig",
    "ParserConfig",
    "RendererConfig",
    "ConversionError",
    "ResourceExhaustedError",
    "CorrelationLogger",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
]
