"""Tests for inline style conversion and attribute name tables."""

import pytest

from html_to_jsx_transform.jsx import (
    ATTRIBUTE_NAME_MAP,
    EVENT_HANDLER_MAP,
    convert_style,
    css_property_to_camel_case,
    split_declarations,
    translate_attribute_name,
)


class TestSplitDeclarations:
    """Tests for splitting style strings."""

    def test_simple(self):
        """Test splitting on semicolons."""
        assert split_declarations("a: 1; b: 2") == ["a: 1", " b: 2"]

    def test_semicolon_in_quotes_and_parentheses(self):
        """Test that quoted and parenthesized semicolons do not split."""
        style = "background: url(data:image/png;base64,xx); content: ';'"
        assert split_declarations(style) == [
            "background: url(data:image/png;base64,xx)",
            " content: ';'",
        ]


class TestPropertyNames:
    """Tests for CSS property name conversion."""

    @pytest.mark.parametrize("name, expected", [
        ("color", "color"),
        ("font-size", "fontSize"),
        ("border-top-left-radius", "borderTopLeftRadius"),
        ("FONT-SIZE", "fontSize"),
        ("-webkit-transition", "WebkitTransition"),
        ("-moz-user-select", "MozUserSelect"),
        ("-ms-transform", "msTransform"),
        ("--main-color", "--main-color"),
    ])
    def test_camel_case(self, name, expected):
        """Test camelCase keys, vendor prefixes and custom properties."""
        assert css_property_to_camel_case(name) == expected


class TestConvertStyle:
    """Tests for complete style conversion."""

    def test_basic_declarations(self):
        """Test the common case."""
        conversion = convert_style("color: red; font-size: 12px")
        assert conversion.succeeded
        assert conversion.expression == '{{color: "red", fontSize: "12px"}}'

    def test_trailing_semicolon_and_whitespace(self):
        """Test that empty declarations are ignored."""
        conversion = convert_style("  color : red ;; ")
        assert conversion.expression == '{{color: "red"}}'
        assert conversion.skipped == []

    def test_value_with_colon(self):
        """Test that the value is everything after the first colon."""
        conversion = convert_style("background: url(http://x/a.png)")
        assert conversion.declarations == [("background", "url(http://x/a.png)")]

    def test_value_with_double_quotes(self):
        """Test that values are written as escaped JSON strings."""
        conversion = convert_style('font-family: "Helvetica Neue", sans-serif')
        assert conversion.expression == (
            '{{fontFamily: "\\"Helvetica Neue\\", sans-serif"}}'
        )

    def test_custom_property_key_is_quoted(self):
        """Test that custom properties keep their name as a string key."""
        conversion = convert_style("--gap: 4px")
        assert conversion.expression == '{{"--gap": "4px"}}'

    def test_invalid_declarations_skipped(self):
        """Test that broken declarations are skipped but others kept."""
        conversion = convert_style("color red; margin: 0; : 1px; padding:")
        assert conversion.declarations == [("margin", "0")]
        assert conversion.skipped == ["color red", ": 1px", "padding:"]
        assert conversion.succeeded

    def test_empty_style(self):
        """Test that an empty style becomes an empty object."""
        conversion = convert_style("  ")
        assert conversion.succeeded
        assert conversion.expression == "{{}}"

    def test_nothing_valid(self):
        """Test that a style without a valid declaration does not succeed."""
        conversion = convert_style("not css at all")
        assert not conversion.succeeded
        assert conversion.skipped == ["not css at all"]


class TestAttributeNames:
    """Tests for the fixed attribute translation tables."""

    @pytest.mark.parametrize("name, expected", [
        ("class", "className"),
        ("for", "htmlFor"),
        ("tabindex", "tabIndex"),
        ("TABINDEX", "tabIndex"),
        ("readonly", "readOnly"),
        ("maxlength", "maxLength"),
        ("onclick", "onClick"),
        ("ondblclick", "onDoubleClick"),
        ("onChange", "onChange"),
        ("stroke-width", "strokeWidth"),
        ("xlink:href", "xlinkHref"),
        ("viewBox", "viewBox"),
        ("data-user-id", "data-user-id"),
        ("aria-label", "aria-label"),
        ("x-custom", "x-custom"),
    ])
    def test_translate(self, name, expected):
        """Test table lookups and pass-through."""
        assert translate_attribute_name(name) == expected

    def test_tables_are_keyed_lowercase(self):
        """Test that every lookup key is lowercase."""
        for key in list(ATTRIBUTE_NAME_MAP) + list(EVENT_HANDLER_MAP):
            assert key == key.lower()

    def test_event_handlers_are_camel_case(self):
        """Test that every handler name starts with 'on' and an uppercase letter."""
        for value in EVENT_HANDLER_MAP.values():
            assert value.startswith("on")
            assert value[2].isupper()
