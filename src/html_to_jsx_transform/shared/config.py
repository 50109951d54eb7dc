"""Configuration classes for HTML to JSX conversion.

The translation tables (attribute names, event handlers, void elements) are
fixed constants of the engine. Configuration only covers resource limits and
output layout, and every default reproduces the engine's documented behavior.
"""

import json
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

DEFAULT_MAX_NESTING_DEPTH = 10000
DEFAULT_INDENT_SIZE = 2
MAX_INDENT_SIZE = 16


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Limits applied while tokenizing and building the node tree."""

    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    max_input_length: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if self.max_nesting_depth <= 0:
            raise ConfigValidationError(
                "max_nesting_depth must be > 0",
                field_name="max_nesting_depth",
            )
        if self.max_input_length is not None and self.max_input_length <= 0:
            raise ConfigValidationError(
                "max_input_length must be > 0 or None",
                field_name="max_input_length",
                suggestions=["Use None to disable the input length limit"],
            )


@dataclass(frozen=True)
class RendererConfig:
    """Layout options for the JSX renderer."""

    indent_size: int = DEFAULT_INDENT_SIZE
    use_tabs: bool = False
    preserve_comments: bool = True

    def __post_init__(self) -> None:
        """Validate renderer configuration."""
        if not (0 <= self.indent_size <= MAX_INDENT_SIZE):
            raise ConfigValidationError(
                f"indent_size must be between 0 and {MAX_INDENT_SIZE}",
                field_name="indent_size",
            )

    @property
    def indent_unit(self) -> str:
        """String inserted once per nesting level."""
        if self.use_tabs:
            return "\t"
        return " " * self.indent_size


@dataclass(frozen=True)
class ConverterConfig:
    """Complete configuration for a conversion.

    Immutable, so a single instance can be shared between converters.
    """

    parser: ParserConfig = field(default_factory=ParserConfig)
    renderer: RendererConfig = field(default_factory=RendererConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConverterConfig":
        """Build a configuration from a nested dictionary.

        Args:
            data: Mapping with optional ``parser`` and ``renderer`` sections

        Returns:
            Validated ConverterConfig

        Raises:
            ConfigValidationError: If a section or field is unknown or invalid
        """
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration must be a JSON object")

        unknown = set(data) - {"parser", "renderer"}
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration sections: {', '.join(sorted(unknown))}",
                suggestions=["Valid sections are 'parser' and 'renderer'"],
            )

        try:
            parser = ParserConfig(**data.get("parser", {}))
            renderer = RendererConfig(**data.get("renderer", {}))
        except TypeError as e:
            raise ConfigValidationError(f"Invalid configuration field: {e}") from e

        return cls(parser=parser, renderer=renderer)

    @classmethod
    def from_json(cls, text: str) -> "ConverterConfig":
        """Build a configuration from a JSON document."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON configuration: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "ConverterConfig":
        """Load configuration from a JSON file.

        Raises:
            ConfigError: If the file cannot be read
            ConfigValidationError: If its content is invalid
        """
        path = Path(config_path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config file {path}: {e}") from e
        return cls.from_json(text)

    def override(self, **kwargs: Any) -> "ConverterConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ConverterConfig().override(renderer__indent_size=4)
            >>> config.renderer.indent_size
            4
        """
        sections: Dict[str, Dict[str, Any]] = {"parser": {}, "renderer": {}}
        for key, value in kwargs.items():
            section, _, field_name = key.partition("__")
            if section not in sections or not field_name:
                raise ConfigValidationError(
                    f"Invalid override key: {key}",
                    suggestions=["Use 'parser__<field>' or 'renderer__<field>'"],
                )
            sections[section][field_name] = value

        try:
            return replace(
                self,
                parser=replace(self.parser, **sections["parser"]),
                renderer=replace(self.renderer, **sections["renderer"]),
            )
        except TypeError as e:
            raise ConfigValidationError(f"Invalid configuration field: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)
