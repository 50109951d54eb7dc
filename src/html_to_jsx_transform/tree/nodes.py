"""Immutable node types for parsed HTML fragments.

A parsed fragment is a sequence of nodes. Each node is one of three frozen
dataclasses tagged with a :class:`NodeKind` discriminant, so consumers switch
on ``node.kind`` rather than on class hierarchy.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple, Union

# Elements that never have content and are never explicitly closed
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})


def is_void_element(tag: str) -> bool:
    """Check whether ``tag`` names a void element (case-insensitive)."""
    return tag.lower() in VOID_ELEMENTS


class NodeKind(Enum):
    """Discriminant for the node variants."""

    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"


@dataclass(frozen=True)
class Attribute:
    """Attribute as written in the source.

    ``value`` is ``None`` when the attribute had no value at all
    (``<input disabled>``), and ``""`` when it had an empty one
    (``<input disabled="">``).
    """

    name: str
    value: Optional[str] = None

    @property
    def has_value(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class Text:
    """Character data. Entity references are kept exactly as written."""

    content: str
    kind: NodeKind = field(default=NodeKind.TEXT, init=False)

    @property
    def is_whitespace(self) -> bool:
        """Check if the text consists only of whitespace."""
        return not self.content.strip()


@dataclass(frozen=True)
class Comment:
    """Comment body without the ``<!--`` and ``-->`` delimiters."""

    content: str
    kind: NodeKind = field(default=NodeKind.COMMENT, init=False)


@dataclass(frozen=True)
class Element:
    """Element with ordered attributes and children."""

    tag: str
    attributes: Tuple[Attribute, ...] = ()
    children: Tuple["Node", ...] = ()
    void: bool = False
    self_closing: bool = False
    kind: NodeKind = field(default=NodeKind.ELEMENT, init=False)

    def __post_init__(self) -> None:
        """Validate element values."""
        if not self.tag:
            raise ValueError("Element tag cannot be empty")
        if self.void and self.children:
            raise ValueError("Void elements cannot have children")

    @property
    def local_name(self) -> str:
        """Lowercased tag name used for table lookups."""
        return self.tag.lower()

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the value of the first attribute named ``name`` (case-insensitive)."""
        lowered = name.lower()
        for attribute in self.attributes:
            if attribute.name.lower() == lowered:
                return attribute.value
        return default

    def has_attribute(self, name: str) -> bool:
        """Check if element has a specific attribute (case-insensitive)."""
        lowered = name.lower()
        return any(attribute.name.lower() == lowered for attribute in self.attributes)

    @property
    def element_children(self) -> List["Element"]:
        """Direct children that are elements."""
        return [child for child in self.children if child.kind is NodeKind.ELEMENT]

    @property
    def text_content(self) -> str:
        """Concatenated text of all descendant text nodes in document order."""
        return "".join(
            node.content for node in iter_nodes([self]) if node.kind is NodeKind.TEXT
        )


Node = Union[Element, Text, Comment]


def iter_nodes(nodes: Sequence[Node]) -> Iterator[Node]:
    """Yield every node in document order without recursion."""
    stack: List[Node] = list(reversed(nodes))
    while stack:
        node = stack.pop()
        yield node
        if node.kind is NodeKind.ELEMENT:
            stack.extend(reversed(node.children))


def max_depth(nodes: Sequence[Node]) -> int:
    """Compute the deepest element nesting level (top-level elements are 1)."""
    deepest = 0
    stack: List[Tuple[Node, int]] = [(node, 1) for node in nodes]
    while stack:
        node, depth = stack.pop()
        if node.kind is not NodeKind.ELEMENT:
            continue
        deepest = max(deepest, depth)
        stack.extend((child, depth + 1) for child in node.children)
    return deepest
