"""Conversion of inline CSS into JSX style objects.

``style="color: red; font-size: 12px"`` becomes
``{{color: "red", fontSize: "12px"}}``. Each declaration is converted on its
own; a declaration without a colon, a valid property name or a value is
skipped and reported, and the remaining declarations are still converted.
"""

import json
import re
from dataclasses import dataclass, field
from typing import List, Tuple

_PROPERTY_NAME_PATTERN = re.compile(r"^(?:--|-)?[A-Za-z_][A-Za-z0-9_-]*$")
_JS_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_MS_VENDOR_PREFIX = "-ms-"


def split_declarations(style: str) -> List[str]:
    """Split a style string on ``;`` outside quotes and parentheses.

    >>> split_declarations('background: url("a;b.png"); color: red')
    ['background: url("a;b.png")', ' color: red']
    """
    declarations: List[str] = []
    current: List[str] = []
    quote_char = None
    paren_depth = 0

    for char in style:
        if quote_char:
            if char == quote_char:
                quote_char = None
        elif char in ("'", '"'):
            quote_char = char
        elif char == "(":
            paren_depth += 1
        elif char == ")" and paren_depth > 0:
            paren_depth -= 1
        elif char == ";" and paren_depth == 0:
            declarations.append("".join(current))
            current = []
            continue
        current.append(char)

    declarations.append("".join(current))
    return declarations


def css_property_to_camel_case(name: str) -> str:
    """Convert a CSS property name to its JSX style key.

    Custom properties keep their name. ``-ms-`` becomes a lowercase ``ms``
    prefix, other vendor prefixes are capitalized.

    >>> css_property_to_camel_case("font-size")
    'fontSize'
    >>> css_property_to_camel_case("-webkit-transition")
    'WebkitTransition'
    >>> css_property_to_camel_case("-ms-transform")
    'msTransform'
    """
    name = name.strip()
    if name.startswith("--"):
        return name

    lowered = name.lower()
    if lowered.startswith(_MS_VENDOR_PREFIX):
        lowered = lowered[1:]

    parts = lowered.split("-")
    if parts[0] == "":
        return "".join(part[:1].upper() + part[1:] for part in parts[1:] if part)
    return parts[0] + "".join(part[:1].upper() + part[1:] for part in parts[1:] if part)


def _format_key(key: str) -> str:
    if _JS_IDENTIFIER_PATTERN.match(key):
        return key
    return json.dumps(key, ensure_ascii=False)


@dataclass
class StyleConversion:
    """Result of converting one style attribute value."""

    source: str
    declarations: List[Tuple[str, str]] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def is_empty_source(self) -> bool:
        """Check if the style attribute had no declarations at all."""
        return not self.source.strip(" \t\n\r\f;")

    @property
    def succeeded(self) -> bool:
        """Check if the value can be emitted as a style object.

        An empty style converts to an empty object. A non-empty style needs
        at least one valid declaration; otherwise it is passed through.
        """
        return bool(self.declarations) or self.is_empty_source

    @property
    def expression(self) -> str:
        """JSX expression container holding the style object."""
        entries = ", ".join(
            f"{_format_key(key)}: {json.dumps(value, ensure_ascii=False)}"
            for key, value in self.declarations
        )
        return "{{" + entries + "}}"


def convert_style(style: str) -> StyleConversion:
    """Convert an inline style string into a JSX style object.

    Args:
        style: Value of an HTML ``style`` attribute

    Returns:
        StyleConversion with the converted declarations and the skipped ones

    Examples:
        >>> convert_style("color: red; font-size: 12px").expression
        '{{color: "red", fontSize: "12px"}}'
        >>> convert_style("color red; margin: 0").skipped
        ['color red']
    """
    conversion = StyleConversion(source=style)

    for raw_declaration in split_declarations(style):
        declaration = raw_declaration.strip()
        if not declaration:
            continue

        name, colon, value = declaration.partition(":")
        name = name.strip()
        value = value.strip()
        if not colon or not value or not _PROPERTY_NAME_PATTERN.match(name):
            conversion.skipped.append(declaration)
            continue

        conversion.declarations.append((css_property_to_camel_case(name), value))

    return conversion
