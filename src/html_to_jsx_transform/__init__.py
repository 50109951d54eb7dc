"""HTML to JSX Transform.

Converts HTML markup fragments into equivalent JSX fragments: attributes are
renamed, inline styles become style objects, comments become JSX comments and
void elements are self-closed. Malformed markup is repaired, never rejected.

Progressive API Disclosure:
- Level 1: Simple functions - html_to_jsx(), parse(), render()
- Level 2: Configured converter - HTMLToJSXConverter class and convert()
"""

__version__ = "0.1.0"
__author__ = "HTML to JSX Transform Team"

# Progressive API disclosure - Level 1: Simple functions
# Progressive API disclosure - Level 2: Configured converter
from .api import (
    ConversionResult,
    HTMLToJSXConverter,
    convert,
    html_to_jsx,
    parse,
    render,
)

# Configuration and error types for advanced usage
from .shared import (
    ConfigError,
    ConfigValidationError,
    ConversionError,
    ConverterConfig,
    ParserConfig,
    RendererConfig,
    ResourceExhaustedError,
)

# Node model returned by parse()
from .tree import Attribute, Comment, Element, Node, NodeKind, Text

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple conversion functions
    "html_to_jsx",
    "parse",
    "render",

    # Level 2: Configured converter
    "HTMLToJSXConverter",
    "ConversionResult",
    "convert",

    # Configuration and errors
    "ConverterConfig",
    "ParserConfig",
    "RendererConfig",
    "ConfigError",
    "ConfigValidationError",
    "ConversionError",
    "ResourceExhaustedError",

    # Node model
    "Attribute",
    "Comment",
    "Element",
    "Node",
    "NodeKind",
    "Text",
]
