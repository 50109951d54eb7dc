"""Tree building from HTML tokens with deterministic recovery.

This module converts the tokenizer's flat token stream into a sequence of
immutable nodes. Malformed structure never raises; each rule below is applied
and recorded as a :class:`StructureRepair` plus a diagnostic:

* an element still open at end of input is closed there;
* an end tag closes the nearest open element with the same name, closing
  every element opened after it;
* an end tag that matches no open element is ignored;
* an end tag for a void element is ignored;
* a repeated attribute on one tag is dropped (the first occurrence wins).

``<!DOCTYPE>`` declarations are dropped with an informational diagnostic.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from html_to_jsx_transform.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ResourceExhaustedError,
    get_logger,
)
from html_to_jsx_transform.shared.config import DEFAULT_MAX_NESTING_DEPTH
from html_to_jsx_transform.tokenization import (
    Token,
    TokenizationResult,
    TokenPosition,
    TokenType,
)

from .nodes import (
    Attribute,
    Comment,
    Element,
    Node,
    NodeKind,
    Text,
    is_void_element,
    iter_nodes,
    max_depth,
)

_MS_PER_SECOND = 1000.0


@dataclass
class StructureRepair:
    """Information about a structural repair made while building the tree."""

    repair_type: str
    description: str
    tag: Optional[str] = None
    position: Optional[TokenPosition] = None

    def __post_init__(self) -> None:
        """Validate repair information."""
        if not self.repair_type:
            raise ValueError("Repair type cannot be empty")
        if not self.description:
            raise ValueError("Repair description cannot be empty")


@dataclass
class ParseResult:
    """Result of building a node tree, with repairs and diagnostics."""

    nodes: List[Node] = field(default_factory=list)
    repairs: List[StructureRepair] = field(default_factory=list)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    tokenization_result: Optional[TokenizationResult] = None
    correlation_id: Optional[str] = None
    processing_time_ms: float = 0.0

    @property
    def element_count(self) -> int:
        """Get total number of elements in the tree."""
        return sum(1 for node in iter_nodes(self.nodes) if node.kind is NodeKind.ELEMENT)

    @property
    def node_count(self) -> int:
        """Get total number of nodes in the tree."""
        return sum(1 for _ in iter_nodes(self.nodes))

    @property
    def max_depth(self) -> int:
        """Get the deepest element nesting level."""
        return max_depth(self.nodes)

    @property
    def repair_count(self) -> int:
        """Get total number of repairs from tokenization and tree building."""
        token_repairs = (
            self.tokenization_result.repair_count if self.tokenization_result else 0
        )
        return len(self.repairs) + token_repairs

    @property
    def has_repairs(self) -> bool:
        """Check if any repair was needed to build the tree."""
        return self.repair_count > 0

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            position=position,
            details=details,
            correlation_id=self.correlation_id,
        ))

    def get_diagnostics_by_severity(
        self, severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def get_repair_summary(self) -> Dict[str, int]:
        """Count repairs by type."""
        summary: Dict[str, int] = {}
        for repair in self.repairs:
            summary[repair.repair_type] = summary.get(repair.repair_type, 0) + 1
        if self.tokenization_result:
            for token_repair in self.tokenization_result.repairs:
                summary[token_repair.repair_type] = (
                    summary.get(token_repair.repair_type, 0) + 1
                )
        return summary


@dataclass
class _OpenElement:
    """Element still accepting children on the builder's stack."""

    tag: str
    attributes: List[Attribute]
    position: TokenPosition
    children: List[Node] = field(default_factory=list)

    def freeze(self) -> Element:
        return Element(
            tag=self.tag,
            attributes=tuple(self.attributes),
            children=tuple(self.children),
        )


@dataclass
class _PendingTag:
    """Tag whose tokens are being collected until its TAG_END."""

    is_end_tag: bool
    position: TokenPosition
    name: str = ""
    attributes: List[Attribute] = field(default_factory=list)


class HTMLTreeBuilder:
    """Builds node sequences from token streams.

    The builder keeps open elements on an explicit stack, so nesting depth is
    bounded by ``max_nesting_depth`` rather than by the interpreter's
    recursion limit.
    """

    def __init__(
        self,
        correlation_id: Optional[str] = None,
        max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    ) -> None:
        """Initialize tree builder.

        Args:
            correlation_id: Optional correlation ID for conversion tracking
            max_nesting_depth: Open-element depth that raises ResourceExhaustedError
        """
        self.correlation_id = correlation_id
        self.max_nesting_depth = max_nesting_depth
        self.logger = get_logger(__name__, correlation_id, "html_tree_builder")
        self._reset_state()

    def _reset_state(self) -> None:
        self._roots: List[Node] = []
        self._stack: List[_OpenElement] = []
        self._text_buffer: List[str] = []
        self._pending: Optional[_PendingTag] = None
        self._result = ParseResult(correlation_id=self.correlation_id)

    def build(self, tokens: Union[TokenizationResult, List[Token]]) -> ParseResult:
        """Build a node sequence from a token stream.

        Args:
            tokens: Either a TokenizationResult or a list of tokens

        Returns:
            ParseResult with nodes, repairs and diagnostics

        Raises:
            ResourceExhaustedError: If nesting exceeds ``max_nesting_depth``
        """
        start_time = time.perf_counter()
        self._reset_state()
        result = self._result

        if isinstance(tokens, TokenizationResult):
            token_list = tokens.tokens
            result.tokenization_result = tokens
            self._report_token_repairs(tokens)
        else:
            token_list = tokens

        self.logger.debug(
            "Starting tree building",
            extra={"token_count": len(token_list)}
        )

        if not token_list:
            result.add_diagnostic(
                DiagnosticSeverity.INFO,
                "No tokens provided - empty fragment created",
                "html_tree_builder",
                details={"input_type": "empty"}
            )

        for token in token_list:
            self._process_token(token)

        self._flush_text()
        self._close_unclosed_elements()

        result.nodes = self._roots
        result.processing_time_ms = (time.perf_counter() - start_time) * _MS_PER_SECOND

        self.logger.debug(
            "Tree building completed",
            extra={
                "top_level_nodes": len(result.nodes),
                "repair_count": result.repair_count,
            }
        )

        return result

    def _report_token_repairs(self, tokenization: TokenizationResult) -> None:
        for repair in tokenization.repairs:
            self._result.add_diagnostic(
                DiagnosticSeverity.WARNING,
                repair.description,
                "html_tokenizer",
                position=repair.position.to_dict() if repair.position else None,
                details={"repair_type": repair.repair_type},
            )

    def _process_token(self, token: Token) -> None:
        token_type = token.type

        if token_type in (TokenType.TEXT, TokenType.CDATA):
            self._text_buffer.append(token.value)
        elif token_type == TokenType.TAG_START:
            self._flush_text()
            self._pending = _PendingTag(
                is_end_tag=token.value == "</", position=token.position
            )
        elif token_type == TokenType.TAG_NAME:
            if self._pending is not None:
                self._pending.name = token.value
        elif token_type == TokenType.ATTR_NAME:
            if self._pending is not None:
                self._pending.attributes.append(Attribute(name=token.value))
        elif token_type == TokenType.ATTR_VALUE:
            if self._pending is not None and self._pending.attributes:
                last = self._pending.attributes[-1]
                self._pending.attributes[-1] = Attribute(name=last.name, value=token.value)
        elif token_type == TokenType.TAG_END:
            self._finish_tag(token.value == "/>")
        elif token_type == TokenType.COMMENT:
            self._flush_text()
            self._append_node(Comment(content=token.value))
        elif token_type == TokenType.DOCTYPE:
            self._flush_text()
            self._result.add_diagnostic(
                DiagnosticSeverity.INFO,
                "Dropped DOCTYPE declaration",
                "html_tree_builder",
                position=token.position.to_dict(),
                details={"doctype": token.value},
            )

    def _append_node(self, node: Node) -> None:
        if self._stack:
            self._stack[-1].children.append(node)
        else:
            self._roots.append(node)

    def _flush_text(self) -> None:
        if self._text_buffer:
            self._append_node(Text(content="".join(self._text_buffer)))
            self._text_buffer = []

    def _finish_tag(self, self_closing: bool) -> None:
        pending = self._pending
        self._pending = None
        if pending is None or not pending.name:
            return

        if pending.is_end_tag:
            self._handle_end_tag(pending)
        else:
            self._handle_start_tag(pending, self_closing)

    def _handle_start_tag(self, pending: _PendingTag, self_closing: bool) -> None:
        attributes = self._dedupe_attributes(pending)

        if is_void_element(pending.name):
            self._append_node(Element(
                tag=pending.name,
                attributes=tuple(attributes),
                void=True,
                self_closing=self_closing,
            ))
            return

        if self_closing:
            self._append_node(Element(
                tag=pending.name,
                attributes=tuple(attributes),
                self_closing=True,
            ))
            return

        if len(self._stack) >= self.max_nesting_depth:
            self.logger.warning(
                "Nesting depth limit exceeded",
                extra={"limit": self.max_nesting_depth, "tag": pending.name}
            )
            raise ResourceExhaustedError(
                f"Element nesting exceeds the limit of {self.max_nesting_depth}",
                resource="nesting_depth",
                limit=self.max_nesting_depth,
                observed=len(self._stack) + 1,
            )

        self._stack.append(_OpenElement(
            tag=pending.name, attributes=attributes, position=pending.position
        ))

    def _dedupe_attributes(self, pending: _PendingTag) -> List[Attribute]:
        seen = set()
        attributes: List[Attribute] = []
        for attribute in pending.attributes:
            key = attribute.name.lower()
            if key in seen:
                self._add_repair(
                    "duplicate_attribute",
                    f"Dropped repeated attribute '{attribute.name}' on <{pending.name}>",
                    pending.name,
                    pending.position,
                )
                continue
            seen.add(key)
            attributes.append(attribute)
        return attributes

    def _handle_end_tag(self, pending: _PendingTag) -> None:
        name = pending.name.lower()

        if is_void_element(name):
            self._add_repair(
                "void_end_tag",
                f"Ignored end tag for void element </{pending.name}>",
                pending.name,
                pending.position,
            )
            return

        match_index = -1
        for index in range(len(self._stack) - 1, -1, -1):
            if self._stack[index].tag.lower() == name:
                match_index = index
                break

        if match_index < 0:
            self._add_repair(
                "unmatched_end_tag",
                f"Ignored end tag </{pending.name}> with no open element",
                pending.name,
                pending.position,
            )
            return

        while len(self._stack) > match_index + 1:
            implicit = self._stack[-1]
            self._add_repair(
                "implicitly_closed",
                f"Closed <{implicit.tag}> implicitly at </{pending.name}>",
                implicit.tag,
                implicit.position,
            )
            self._pop_element()

        self._pop_element()

    def _pop_element(self) -> None:
        element = self._stack.pop().freeze()
        self._append_node(element)

    def _close_unclosed_elements(self) -> None:
        while self._stack:
            unclosed = self._stack[-1]
            self._add_repair(
                "unclosed_element",
                f"Closed <{unclosed.tag}> at end of input",
                unclosed.tag,
                unclosed.position,
            )
            self._pop_element()

    def _add_repair(
        self,
        repair_type: str,
        description: str,
        tag: Optional[str],
        position: Optional[TokenPosition]
    ) -> None:
        self._result.repairs.append(StructureRepair(
            repair_type=repair_type,
            description=description,
            tag=tag,
            position=position,
        ))
        self._result.add_diagnostic(
            DiagnosticSeverity.WARNING,
            description,
            "html_tree_builder",
            position=position.to_dict() if position else None,
            details={"repair_type": repair_type},
        )
