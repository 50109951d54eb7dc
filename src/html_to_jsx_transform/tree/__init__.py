"""Node model and tree building for HTML to JSX conversion.

Key Components:
    Element, Text, Comment: Immutable node variants tagged by NodeKind
    HTMLTreeBuilder: Builds node sequences from token streams with recovery
    ParseResult: Nodes plus repairs and diagnostics
"""

from .builder import (
    HTMLTreeBuilder,
    ParseResult,
    StructureRepair,
)
from .nodes import (
    VOID_ELEMENTS,
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

__all__ = [
    "HTMLTreeBuilder",
    "ParseResult",
    "StructureRepair",
    "VOID_ELEMENTS",
    "Attribute",
    "Comment",
    "Element",
    "Node",
    "NodeKind",
    "Text",
    "is_void_element",
    "iter_nodes",
    "max_depth",
]
