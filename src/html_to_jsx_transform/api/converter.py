"""Conversion API with progressive disclosure.

Level 1 functions cover the common cases:

* :func:`html_to_jsx` converts markup to JSX text;
* :func:`parse` and :func:`render` expose the two halves separately.

Level 2 is :class:`HTMLToJSXConverter`, which applies a
:class:`ConverterConfig` and returns a :class:`ConversionResult` with
diagnostics and performance metrics. :func:`convert` is its module-level
shortcut.
"""

import os
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import psutil

from html_to_jsx_transform.jsx import JSXRenderer
from html_to_jsx_transform.shared import (
    ConverterConfig,
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    RendererConfig,
    ResourceExhaustedError,
    get_logger,
)
from html_to_jsx_transform.tokenization import HTMLTokenizer
from html_to_jsx_transform.tree import HTMLTreeBuilder, Node, ParseResult

PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000.0


def _current_rss() -> int:
    return psutil.Process(os.getpid()).memory_info().rss


def _preview(html: str) -> str:
    if len(html) > PREVIEW_LENGTH:
        return html[:PREVIEW_LENGTH] + "..."
    return html


def _build_tree(
    html: str, config: ConverterConfig, correlation_id: Optional[str]
) -> ParseResult:
    tokenizer = HTMLTokenizer(
        correlation_id=correlation_id,
        max_input_length=config.parser.max_input_length,
    )
    builder = HTMLTreeBuilder(
        correlation_id=correlation_id,
        max_nesting_depth=config.parser.max_nesting_depth,
    )
    try:
        return builder.build(tokenizer.tokenize(html))
    except MemoryError as e:
        raise ResourceExhaustedError(
            "Ran out of memory while parsing markup",
            resource="memory",
            observed=len(html),
        ) from e


def parse(html: str, config: Optional[ConverterConfig] = None) -> List[Node]:
    """Parse an HTML fragment into nodes.

    Args:
        html: Markup fragment, possibly malformed
        config: Optional configuration; only the parser section is used

    Returns:
        Top-level nodes in document order

    Raises:
        ResourceExhaustedError: If the input exceeds a configured limit

    Examples:
        >>> nodes = parse('<p class="x">Hi</p>')
        >>> nodes[0].tag
        'p'
        >>> parse("")
        []
    """
    return _build_tree(html, config or ConverterConfig(), None).nodes


def render(nodes: Sequence[Node], config: Optional[ConverterConfig] = None) -> str:
    """Render parsed nodes as JSX.

    Args:
        nodes: Nodes as returned by :func:`parse`
        config: Optional configuration; only the renderer section is used

    Returns:
        JSX text
    """
    renderer_config = config.renderer if config else RendererConfig()
    try:
        return JSXRenderer(renderer_config).render(nodes)
    except MemoryError as e:
        raise ResourceExhaustedError(
            "Ran out of memory while rendering JSX", resource="memory"
        ) from e


def html_to_jsx(html: str, config: Optional[ConverterConfig] = None) -> str:
    """Convert an HTML fragment to a JSX fragment.

    Examples:
        >>> html_to_jsx('<label for="a" class="b">x</label>')
        '<label htmlFor="a" className="b">x</label>'
        >>> html_to_jsx("<br>")
        '<br />'
    """
    return render(parse(html, config), config)


@dataclass
class ConversionResult:
    """Result of a configured conversion."""

    jsx: str = ""
    nodes: List[Node] = field(default_factory=list)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    repair_count: int = 0
    correlation_id: Optional[str] = None

    @property
    def has_repairs(self) -> bool:
        """Check if the input markup needed any repair."""
        return self.repair_count > 0

    def get_diagnostics_by_severity(
        self, severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def summary(self) -> Dict[str, Any]:
        """Get a JSON-friendly summary of the conversion."""
        return {
            "correlation_id": self.correlation_id,
            "top_level_nodes": len(self.nodes),
            "repair_count": self.repair_count,
            "diagnostic_count": len(self.diagnostics),
            "warnings": len(self.get_diagnostics_by_severity(DiagnosticSeverity.WARNING)),
            "output_characters": len(self.jsx),
            "performance": self.performance.to_dict(),
        }


class HTMLToJSXConverter:
    """Configured HTML to JSX converter.

    A converter holds only its configuration and usage statistics; every
    :meth:`convert` call builds a fresh tokenizer, tree builder and renderer.

    Attributes:
        config: Configuration applied to every conversion
        correlation_id: Correlation ID attached to logs and diagnostics

    Examples:
        >>> converter = HTMLToJSXConverter(ConverterConfig().override(renderer__indent_size=4))
        >>> result = converter.convert("<ul><li>a</li><li>b</li></ul>")
        >>> print(result.jsx)
        <ul>
            <li>a</li>
            <li>b</li>
        </ul>
    """

    def __init__(
        self,
        config: Optional[ConverterConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ConverterConfig()
        self.correlation_id = correlation_id or str(uuid.uuid4())
        self.logger = get_logger(__name__, self.correlation_id, "html_to_jsx_converter")

        self._conversion_count = 0
        self._total_processing_time = 0.0

    def convert(self, html: str) -> ConversionResult:
        """Convert markup and collect diagnostics and metrics.

        Args:
            html: Markup fragment, possibly malformed

        Returns:
            ConversionResult with JSX text, nodes, diagnostics and metrics

        Raises:
            ResourceExhaustedError: If the input exceeds a configured limit
        """
        start_time = time.perf_counter()
        start_rss = _current_rss()

        self.logger.info(
            "Starting conversion",
            extra={"content_length": len(html), "preview": _preview(html)}
        )

        try:
            parse_result = _build_tree(html, self.config, self.correlation_id)
            renderer = JSXRenderer(self.config.renderer, self.correlation_id)
            try:
                jsx = renderer.render(parse_result.nodes)
            except MemoryError as e:
                raise ResourceExhaustedError(
                    "Ran out of memory while rendering JSX", resource="memory"
                ) from e
        except ResourceExhaustedError as e:
            self.logger.warning(
                "Conversion aborted",
                extra={"resource": e.resource, "limit": e.limit}
            )
            raise

        processing_time = (time.perf_counter() - start_time) * MS_PER_SECOND
        tokenization = parse_result.tokenization_result

        result = ConversionResult(
            jsx=jsx,
            nodes=parse_result.nodes,
            diagnostics=parse_result.diagnostics + renderer.diagnostics,
            repair_count=parse_result.repair_count,
            correlation_id=self.correlation_id,
            performance=PerformanceMetrics(
                processing_time_ms=processing_time,
                memory_used_bytes=max(0, _current_rss() - start_rss),
                characters_processed=len(html),
                tokens_generated=tokenization.token_count if tokenization else 0,
                nodes_created=parse_result.node_count,
                repairs_applied=parse_result.repair_count,
                output_characters=len(jsx),
            ),
        )

        self._conversion_count += 1
        self._total_processing_time += processing_time

        self.logger.info(
            "Conversion completed",
            extra={
                "processing_time_ms": processing_time,
                "repair_count": result.repair_count,
                "output_characters": len(jsx),
            }
        )
        return result

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get converter usage statistics."""
        return {
            "total_conversions": self._conversion_count,
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._conversion_count
                if self._conversion_count > 0 else 0.0
            ),
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset converter usage statistics."""
        self._conversion_count = 0
        self._total_processing_time = 0.0


def convert(
    html: str,
    config: Optional[ConverterConfig] = None,
    correlation_id: Optional[str] = None
) -> ConversionResult:
    """Convert markup with a one-off :class:`HTMLToJSXConverter`."""
    return HTMLToJSXConverter(config, correlation_id).convert(html)
