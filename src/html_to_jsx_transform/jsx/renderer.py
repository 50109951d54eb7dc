"""JSX serialization of parsed HTML nodes.

The renderer walks the node tree with an explicit work stack and produces one
output line per rendered piece:

* an element with no rendered children is written self-closing;
* an element whose only rendered child is text is written on one line;
* every other element gets its children one indent level deeper.

More than one top-level piece is wrapped in a ``<>``/``</>`` fragment.
"""

import html
import json
import re
import time
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from html_to_jsx_transform.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    RendererConfig,
    get_logger,
)
from html_to_jsx_transform.tokenization import RAW_TEXT_ELEMENTS
from html_to_jsx_transform.tree import Element, Node, NodeKind, Text

from .style import convert_style
from .tables import PREFORMATTED_ELEMENTS, translate_attribute_name

_WHITESPACE_RUN = re.compile(r"\s+")
# JSX attribute names: an identifier that may contain "-", optionally namespaced
_JSX_NAME_PART = r"(?:[^\W\d]|\$)[\w$-]*"
_JSX_ATTRIBUTE_NAME = re.compile(_JSX_NAME_PART + r"(?::" + _JSX_NAME_PART + r")?")
_TEXT_SPECIAL_CHARS = re.compile(r"[{}<>]")
_TEXT_REPLACEMENTS = {
    "{": '{"{"}',
    "}": '{"}"}',
    "<": "&lt;",
    ">": "&gt;",
}
JSX_SPACE = '{" "}'
FRAGMENT_OPEN = "<>"
FRAGMENT_CLOSE = "</>"
_MS_PER_SECOND = 1000.0

# Work stack entries: a finished line, or a node still to be rendered.
_LineItem = Tuple[str, int]
_NodeItem = Tuple[Node, int, bool]
_WorkItem = Union[_LineItem, _NodeItem]


def escape_text(text: str) -> str:
    """Escape characters that JSX text cannot contain literally.

    >>> escape_text("if (a) { b < c }")
    'if (a) {"{"} b &lt; c {"}"}'
    """
    return _TEXT_SPECIAL_CHARS.sub(lambda match: _TEXT_REPLACEMENTS[match.group(0)], text)


def quote_attribute_value(value: str) -> str:
    """Quote an attribute value for JSX.

    Double quotes are used unless the value contains a double quote and no
    single quote. A value containing both gets ``&quot;`` for each ``"``.
    """
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    return '"' + value.replace('"', "&quot;") + '"'


def comment_to_jsx(content: str) -> str:
    """Render a comment body as a JSX comment expression."""
    body = content.strip().replace("*/", "* /")
    if not body:
        return "{/* */}"
    return f"{{/* {body} */}}"


def string_expression(text: str) -> str:
    """Render text as a JSX string expression with entities decoded."""
    return "{" + json.dumps(html.unescape(text), ensure_ascii=False) + "}"


def template_literal_expression(text: str) -> str:
    """Render raw text as a JSX template literal expression."""
    escaped = text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")
    return "{`" + escaped + "`}"


def jsx_tag_name(tag: str) -> str:
    """Tag name for JSX output.

    Fully uppercase names (``DIV``) are lowercased so JSX does not read them
    as components; mixed-case names such as ``linearGradient`` are kept.
    """
    if tag.upper() == tag:
        return tag.lower()
    return tag


class JSXRenderer:
    """Serializes node sequences to JSX text.

    Args:
        config: Layout options, defaults to ``RendererConfig()``
        correlation_id: Optional correlation ID for log records and diagnostics

    Diagnostics about best-effort conversions (such as skipped style
    declarations) from the most recent :meth:`render` call are available in
    :attr:`diagnostics`.
    """

    def __init__(
        self,
        config: Optional[RendererConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or RendererConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "jsx_renderer")
        self.diagnostics: List[DiagnosticEntry] = []
        self.processing_time_ms = 0.0

    def render(self, nodes: Sequence[Node]) -> str:
        """Render nodes as a JSX fragment.

        Args:
            nodes: Top-level nodes as produced by the parser

        Returns:
            JSX text, or an empty string if nothing significant remains
        """
        start_time = time.perf_counter()
        self.diagnostics = []

        pieces = self._sibling_pieces(nodes, depth=0, preformatted=False, nested=False)
        if len(pieces) > 1:
            items: List[_WorkItem] = [(FRAGMENT_OPEN, 0)]
            items.extend(self._shift(pieces))
            items.append((FRAGMENT_CLOSE, 0))
        else:
            items = list(pieces)

        lines = self._run(items)
        output = "\n".join(lines)

        self.processing_time_ms = (time.perf_counter() - start_time) * _MS_PER_SECOND
        self.logger.debug(
            "Rendering completed",
            extra={
                "top_level_pieces": len(pieces),
                "line_count": len(lines),
                "output_characters": len(output),
            }
        )
        return output

    @staticmethod
    def _shift(items: List[_WorkItem]) -> List[_WorkItem]:
        shifted: List[_WorkItem] = []
        for item in items:
            if len(item) == 2:
                shifted.append((item[0], item[1] + 1))
            else:
                shifted.append((item[0], item[1] + 1, item[2]))
        return shifted

    def _run(self, items: List[_WorkItem]) -> List[str]:
        lines: List[str] = []
        indent_unit = self.config.indent_unit
        stack = list(reversed(items))

        while stack:
            item = stack.pop()
            if len(item) == 2:
                text, depth = item
                lines.append(indent_unit * depth + text)
                continue

            node, depth, preformatted = item
            if node.kind is NodeKind.ELEMENT:
                stack.extend(reversed(self._element_items(node, depth, preformatted)))
            else:
                lines.append(indent_unit * depth + comment_to_jsx(node.content))

        return lines

    def _element_items(
        self, element: Element, depth: int, preformatted: bool
    ) -> List[_WorkItem]:
        tag = jsx_tag_name(element.tag)
        attributes = self._render_attributes(element)
        open_tag = f"<{tag}{attributes}>"
        close_tag = f"</{tag}>"
        self_closing = f"<{tag}{attributes} />"

        if element.void:
            return [(self_closing, depth)]

        if element.local_name in RAW_TEXT_ELEMENTS:
            content = element.text_content
            if not content:
                return [(self_closing, depth)]
            return [(open_tag + template_literal_expression(content) + close_tag, depth)]

        child_preformatted = preformatted or element.local_name in PREFORMATTED_ELEMENTS
        pieces = self._sibling_pieces(
            element.children, depth + 1, child_preformatted, nested=True
        )

        if not pieces:
            return [(self_closing, depth)]

        # Text is already rendered to a line; elements and comments are nodes.
        if len(pieces) == 1 and len(pieces[0]) == 2:
            return [(open_tag + pieces[0][0] + close_tag, depth)]

        items: List[_WorkItem] = [(open_tag, depth)]
        items.extend(pieces)
        items.append((close_tag, depth))
        return items

    def _sibling_pieces(
        self, children: Sequence[Node], depth: int, preformatted: bool, nested: bool
    ) -> List[_WorkItem]:
        """Turn a list of siblings into work items at ``depth``.

        Text is normalized here: whitespace runs collapse, whitespace-only
        text is dropped or kept as ``{" "}``, and spaces at the edges of text
        next to a sibling become ``{" "}``. A lone space inside an element
        (``nested``) is kept as ``{" "}`` too.
        """
        siblings = self._significant_siblings(children)
        pieces: List[_WorkItem] = []
        last_index = len(siblings) - 1

        for index, child in enumerate(siblings):
            if child.kind is not NodeKind.TEXT:
                pieces.append((child, depth, preformatted))
                continue

            if preformatted:
                pieces.append((string_expression(child.content), depth))
                continue

            content = child.content
            has_previous = index > 0
            has_next = index < last_index

            if child.is_whitespace:
                is_lone = nested and not has_previous and not has_next
                if "\n" not in content and (is_lone or (has_previous and has_next)):
                    pieces.append((JSX_SPACE, depth))
                continue

            collapsed = _WHITESPACE_RUN.sub(" ", content)
            stripped = collapsed.strip()
            leading = content[:len(content) - len(content.lstrip())]
            trailing = content[len(content.rstrip()):]

            if has_previous and leading and "\n" not in leading:
                pieces.append((JSX_SPACE, depth))
            pieces.append((escape_text(stripped), depth))
            if has_next and trailing and "\n" not in trailing:
                pieces.append((JSX_SPACE, depth))

        return pieces

    def _significant_siblings(self, children: Sequence[Node]) -> List[Node]:
        """Drop comments when they are not preserved and merge adjacent text."""
        siblings: List[Node] = []
        text_run: List[str] = []
        for child in children:
            if child.kind is NodeKind.COMMENT and not self.config.preserve_comments:
                continue
            if child.kind is NodeKind.TEXT:
                text_run.append(child.content)
                continue
            if text_run:
                siblings.append(Text(content="".join(text_run)))
                text_run = []
            siblings.append(child)
        if text_run:
            siblings.append(Text(content="".join(text_run)))
        return siblings

    def _render_attributes(self, element: Element) -> str:
        rendered: List[str] = []
        for attribute in element.attributes:
            name = translate_attribute_name(attribute.name)
            value = attribute.value

            if not _JSX_ATTRIBUTE_NAME.fullmatch(name):
                self._add_diagnostic(
                    DiagnosticSeverity.WARNING,
                    f"Dropped attribute on <{element.tag}> with a name JSX cannot express",
                    details={"attribute": attribute.name},
                )
            elif value is None:
                rendered.append(name)
            elif attribute.name.lower() == "style":
                rendered.append(self._render_style(element, value))
            else:
                rendered.append(f"{name}={quote_attribute_value(value)}")

        if not rendered:
            return ""
        return " " + " ".join(rendered)

    def _render_style(self, element: Element, value: str) -> str:
        conversion = convert_style(value)

        for declaration in conversion.skipped:
            self._add_diagnostic(
                DiagnosticSeverity.WARNING,
                f"Skipped invalid style declaration on <{element.tag}>",
                details={"declaration": declaration},
            )

        if conversion.succeeded:
            return f"style={conversion.expression}"

        self._add_diagnostic(
            DiagnosticSeverity.WARNING,
            f"Kept style attribute on <{element.tag}> as a string",
            details={"style": value},
        )
        return f"style={quote_attribute_value(value)}"

    def _add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.logger.debug(message, extra=details)
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component="jsx_renderer",
            details=details,
            correlation_id=self.correlation_id,
        ))


def render(nodes: Sequence[Node], config: Optional[RendererConfig] = None) -> str:
    """Render nodes as JSX with an optional layout configuration."""
    return JSXRenderer(config).render(nodes)
