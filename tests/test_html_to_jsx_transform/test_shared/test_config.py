"""Tests for the configuration system."""

import json

import pytest

from html_to_jsx_transform.shared.config import (
    DEFAULT_INDENT_SIZE,
    DEFAULT_MAX_NESTING_DEPTH,
    ConfigError,
    ConfigValidationError,
    ConverterConfig,
    ParserConfig,
    RendererConfig,
)


class TestParserConfig:
    """Test suite for ParserConfig."""

    def test_default_configuration(self):
        """Test default parser configuration values."""
        config = ParserConfig()
        assert config.max_nesting_depth == DEFAULT_MAX_NESTING_DEPTH
        assert config.max_input_length is None

    def test_invalid_nesting_depth(self):
        """Test that a non-positive depth limit is rejected."""
        with pytest.raises(ConfigValidationError) as exc_info:
            ParserConfig(max_nesting_depth=0)
        assert exc_info.value.field_name == "max_nesting_depth"

    def test_invalid_input_length(self):
        """Test that a non-positive input limit is rejected with a suggestion."""
        with pytest.raises(ConfigValidationError) as exc_info:
            ParserConfig(max_input_length=-1)
        assert exc_info.value.field_name == "max_input_length"
        assert exc_info.value.suggestions

    def test_is_immutable(self):
        """Test that configuration cannot be modified after creation."""
        config = ParserConfig()
        with pytest.raises(AttributeError):
            config.max_nesting_depth = 5


class TestRendererConfig:
    """Test suite for RendererConfig."""

    def test_default_configuration(self):
        """Test default renderer configuration values."""
        config = RendererConfig()
        assert config.indent_size == DEFAULT_INDENT_SIZE
        assert config.use_tabs is False
        assert config.preserve_comments is True
        assert config.indent_unit == "  "

    def test_tab_indent_unit(self):
        """Test that tabs replace spaces when requested."""
        assert RendererConfig(use_tabs=True).indent_unit == "\t"

    def test_zero_indent(self):
        """Test that indentation can be disabled."""
        assert RendererConfig(indent_size=0).indent_unit == ""

    @pytest.mark.parametrize("indent_size", [-1, 17])
    def test_invalid_indent_size(self, indent_size):
        """Test indent size bounds."""
        with pytest.raises(ConfigValidationError, match="indent_size"):
            RendererConfig(indent_size=indent_size)


class TestConverterConfig:
    """Test suite for ConverterConfig."""

    def test_default_sections(self):
        """Test that defaults are built for both sections."""
        config = ConverterConfig()
        assert config.parser == ParserConfig()
        assert config.renderer == RendererConfig()

    def test_from_dict(self):
        """Test building a configuration from nested dictionaries."""
        config = ConverterConfig.from_dict({
            "parser": {"max_nesting_depth": 50},
            "renderer": {"indent_size": 4, "preserve_comments": False},
        })
        assert config.parser.max_nesting_depth == 50
        assert config.renderer.indent_size == 4
        assert config.renderer.preserve_comments is False

    def test_from_dict_partial(self):
        """Test that missing sections keep their defaults."""
        config = ConverterConfig.from_dict({"renderer": {"use_tabs": True}})
        assert config.parser == ParserConfig()
        assert config.renderer.use_tabs is True

    def test_from_dict_unknown_section(self):
        """Test that unknown sections are rejected."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration sections"):
            ConverterConfig.from_dict({"formatter": {}})

    def test_from_dict_unknown_field(self):
        """Test that unknown fields become validation errors."""
        with pytest.raises(ConfigValidationError, match="Invalid configuration field"):
            ConverterConfig.from_dict({"renderer": {"indent": 4}})

    def test_from_dict_not_a_mapping(self):
        """Test that non-object configuration is rejected."""
        with pytest.raises(ConfigValidationError):
            ConverterConfig.from_dict([1, 2])

    def test_from_json_invalid(self):
        """Test that malformed JSON is reported as a validation error."""
        with pytest.raises(ConfigValidationError, match="Invalid JSON"):
            ConverterConfig.from_json("{not json")

    def test_from_file(self, tmp_path):
        """Test loading configuration from a JSON file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"renderer": {"indent_size": 3}}), encoding="utf-8")

        config = ConverterConfig.from_file(path)
        assert config.renderer.indent_size == 3

    def test_from_missing_file(self, tmp_path):
        """Test that an unreadable file raises ConfigError."""
        with pytest.raises(ConfigError, match="Could not read config file"):
            ConverterConfig.from_file(tmp_path / "missing.json")

    def test_override(self):
        """Test creating a modified copy with section__field keys."""
        base = ConverterConfig()
        config = base.override(renderer__indent_size=4, parser__max_nesting_depth=10)
        assert config.renderer.indent_size == 4
        assert config.parser.max_nesting_depth == 10
        assert base.renderer.indent_size == DEFAULT_INDENT_SIZE

    def test_override_invalid_key(self):
        """Test that override keys must name a section and a field."""
        with pytest.raises(ConfigValidationError, match="Invalid override key"):
            ConverterConfig().override(indent_size=4)

    def test_override_invalid_value(self):
        """Test that overrides are validated."""
        with pytest.raises(ConfigValidationError):
            ConverterConfig().override(renderer__indent_size=99)

    def test_to_dict_and_json(self):
        """Test dumping configuration."""
        data = ConverterConfig().to_dict()
        assert data["parser"]["max_nesting_depth"] == DEFAULT_MAX_NESTING_DEPTH
        assert data["renderer"]["indent_size"] == DEFAULT_INDENT_SIZE
        assert json.loads(ConverterConfig().to_json()) == data
