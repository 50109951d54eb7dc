"""Main CLI entry point for the html-to-jsx-transform command-line tool.

Reads HTML from positional arguments, a file or stdin and writes the JSX
conversion to stdout or a file.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from html_to_jsx_transform import __version__
from html_to_jsx_transform.api import HTMLToJSXConverter
from html_to_jsx_transform.shared import (
    ConfigError,
    ConversionError,
    ConverterConfig,
    get_logger,
)

PROG = "html-to-jsx-transform"

EPILOG = """examples:
  html-to-jsx-transform "<h1>Hello</h1>"
  html-to-jsx-transform --input input.html --output output.jsx
  cat input.html | html-to-jsx-transform --stdin
"""


class CLIUsageError(Exception):
    """Raised for invalid command-line usage."""


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise CLIUsageError(message)


class _SingleValueAction(argparse.Action):
    """Store an option value, rejecting a repeated option."""

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest) is not None:
            raise argparse.ArgumentError(
                self, f"Only one --{self.dest} value is allowed."
            )
        setattr(namespace, self.dest, values)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = _ArgumentParser(
        prog=PROG,
        description="Convert an HTML fragment into a JSX fragment",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )

    parser.add_argument(
        "html",
        nargs="*",
        help="HTML to convert; multiple words are joined with spaces"
    )
    parser.add_argument(
        "--input", "-i",
        type=Path,
        action=_SingleValueAction,
        help="Read HTML from a file"
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        action=_SingleValueAction,
        help="Write JSX to a file (default: stdout)"
    )
    parser.add_argument(
        "--stdin",
        action="store_true",
        help="Read HTML from stdin"
    )
    parser.add_argument(
        "--indent",
        type=int,
        help="Spaces per indentation level"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="JSON configuration file"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log errors"
    )
    parser.add_argument(
        "--help", "-h",
        action="store_true",
        help="Show this help message"
    )
    parser.add_argument(
        "--version", "-v",
        action="store_true",
        help="Show the current version"
    )

    return parser


def build_config(args: argparse.Namespace) -> ConverterConfig:
    """Build the converter configuration from ``--config`` and ``--indent``."""
    config = ConverterConfig.from_file(args.config) if args.config else ConverterConfig()
    if args.indent is not None:
        config = config.override(renderer__indent_size=args.indent)
    return config


def read_input(args: argparse.Namespace) -> Optional[str]:
    """Read the HTML to convert, or return None if no input was given.

    Raises:
        CLIUsageError: If input sources are combined
        OSError: If the input file cannot be read
        UnicodeDecodeError: If the input file is not UTF-8
    """
    has_positional = bool(args.html)

    if args.stdin and (args.input or has_positional):
        raise CLIUsageError(
            "--stdin cannot be combined with --input or a positional HTML value."
        )
    if args.input and has_positional:
        raise CLIUsageError("Provide either --input or a positional HTML value, not both.")

    if args.input:
        return args.input.read_text(encoding="utf-8")
    if has_positional:
        return " ".join(args.html)
    if args.stdin or not sys.stdin.isatty():
        return sys.stdin.read()
    return None


def write_output(jsx: str, output: Optional[Path]) -> None:
    """Write JSX to ``output``, or to stdout when no file is given."""
    if output:
        output.write_text(jsx, encoding="utf-8")
    else:
        print(jsx)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    logger = get_logger(__name__, None, "cli")

    try:
        args = parser.parse_args(argv)
    except CLIUsageError as e:
        print(e, file=sys.stderr)
        return 1

    if args.help:
        parser.print_help()
        return 0

    if args.version:
        print(__version__)
        return 0

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    try:
        config = build_config(args)
        html = read_input(args)
        if html is None:
            parser.print_help()
            print("No input provided.", file=sys.stderr)
            return 1

        result = HTMLToJSXConverter(config).convert(html)
        logger.debug("Conversion summary", extra={"summary": result.summary()})
        write_output(result.jsx, args.output)

    except (CLIUsageError, ConfigError, ConversionError) as e:
        print(e, file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
