"""JSX rendering of parsed HTML nodes.

Key Components:
    JSXRenderer: Serializes node sequences to indented JSX text
    convert_style: Converts inline CSS into a JSX style object
    translate_attribute_name: Maps HTML attribute names to their JSX spelling
"""

from .renderer import (
    JSXRenderer,
    comment_to_jsx,
    escape_text,
    quote_attribute_value,
    render,
)
from .style import (
    StyleConversion,
    convert_style,
    css_property_to_camel_case,
    split_declarations,
)
from .tables import (
    ATTRIBUTE_NAME_MAP,
    EVENT_HANDLER_MAP,
    PREFORMATTED_ELEMENTS,
    translate_attribute_name,
)

__all__ = [
    "JSXRenderer",
    "comment_to_jsx",
    "escape_text",
    "quote_attribute_value",
    "render",
    "StyleConversion",
    "convert_style",
    "css_property_to_camel_case",
    "split_declarations",
    "ATTRIBUTE_NAME_MAP",
    "EVENT_HANDLER_MAP",
    "PREFORMATTED_ELEMENTS",
    "translate_attribute_name",
]
