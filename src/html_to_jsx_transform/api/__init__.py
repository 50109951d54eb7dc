"""Public conversion API.

Progressive API Disclosure:
- Level 1: Simple functions - html_to_jsx(), parse(), render()
- Level 2: Configured converter - HTMLToJSXConverter class and convert()
"""

from .converter import (
    ConversionResult,
    HTMLToJSXConverter,
    convert,
    html_to_jsx,
    parse,
    render,
)

__all__ = [
    "ConversionResult",
    "HTMLToJSXConverter",
    "convert",
    "html_to_jsx",
    "parse",
    "render",
]
