"""Tests for the CLI main module."""

import io
import json
from unittest.mock import patch

import pytest

from html_to_jsx_transform.cli.main import (
    CLIUsageError,
    build_config,
    create_argument_parser,
    main,
)


class _TTYInput(io.StringIO):
    """Stand-in for an interactive terminal on stdin."""

    def isatty(self):
        return True


class TestArgumentParser:
    """Test argument parsing."""

    def test_defaults(self):
        """Test default option values."""
        args = create_argument_parser().parse_args([])
        assert args.html == []
        assert args.input is None
        assert args.output is None
        assert args.stdin is False
        assert args.indent is None

    def test_unknown_option(self):
        """Test that unknown options raise a usage error instead of exiting."""
        with pytest.raises(CLIUsageError):
            create_argument_parser().parse_args(["--bogus"])

    def test_build_config_indent(self):
        """Test that --indent overrides the renderer indent."""
        args = create_argument_parser().parse_args(["--indent", "4"])
        assert build_config(args).renderer.indent_size == 4

    def test_repeated_input_rejected(self):
        """Test that --input may only be given once."""
        with pytest.raises(CLIUsageError, match="Only one --input value is allowed."):
            create_argument_parser().parse_args(["-i", "a.html", "--input", "b.html"])


class TestMain:
    """Test the main entry point."""

    def test_positional_html(self, capsys):
        """Test converting a positional argument."""
        assert main(["<h1 class='t'>Hello</h1>"]) == 0
        assert capsys.readouterr().out == '<h1 className="t">Hello</h1>\n'

    def test_positional_words_joined(self, capsys):
        """Test that several positional words are joined with spaces."""
        assert main(["<p>a", "b</p>"]) == 0
        assert capsys.readouterr().out == "<p>a b</p>\n"

    def test_input_and_output_files(self, tmp_path, capsys):
        """Test reading and writing files."""
        source = tmp_path / "input.html"
        target = tmp_path / "output.jsx"
        source.write_text("<label for=x>X</label>", encoding="utf-8")

        assert main(["--input", str(source), "--output", str(target)]) == 0
        assert target.read_text(encoding="utf-8") == '<label htmlFor="x">X</label>'
        assert capsys.readouterr().out == ""

    def test_stdin_flag(self, capsys):
        """Test reading from stdin with --stdin."""
        with patch("sys.stdin", io.StringIO("<br>")):
            assert main(["--stdin"]) == 0
        assert capsys.readouterr().out == "<br />\n"

    def test_piped_stdin(self, capsys):
        """Test that a non-interactive stdin is read without --stdin."""
        with patch("sys.stdin", io.StringIO("<p>piped</p>")):
            assert main([]) == 0
        assert capsys.readouterr().out == "<p>piped</p>\n"

    def test_no_input_on_terminal(self, capsys):
        """Test that help is shown when nothing is provided."""
        with patch("sys.stdin", _TTYInput()):
            assert main([]) == 1
        captured = capsys.readouterr()
        assert "usage:" in captured.out
        assert "No input provided." in captured.err

    def test_stdin_with_positional(self, capsys):
        """Test that --stdin cannot be combined with other input."""
        assert main(["--stdin", "<p>x</p>"]) == 1
        assert "--stdin cannot be combined" in capsys.readouterr().err

    def test_input_with_positional(self, tmp_path, capsys):
        """Test that --input and positional HTML are exclusive."""
        source = tmp_path / "a.html"
        source.write_text("<p>x</p>", encoding="utf-8")
        assert main(["--input", str(source), "<p>y</p>"]) == 1
        assert "not both" in capsys.readouterr().err

    def test_missing_input_file(self, tmp_path, capsys):
        """Test that an unreadable input file is reported."""
        assert main(["--input", str(tmp_path / "missing.html")]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_input_not_utf8(self, tmp_path, capsys):
        """Test that undecodable input is reported instead of raising."""
        source = tmp_path / "latin1.html"
        source.write_bytes(b"<p>\xff\xfe</p>")
        assert main(["--input", str(source)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("Error:")
        assert "utf-8" in captured.err

    @pytest.mark.parametrize("option", ["--input", "-i", "--output", "-o"])
    def test_repeated_file_option(self, tmp_path, capsys, option):
        """Test that a file option given twice is a usage error."""
        first = str(tmp_path / "a.html")
        second = str(tmp_path / "b.html")
        assert main([option, first, option, second]) == 1
        name = "input" if option in ("--input", "-i") else "output"
        assert f"Only one --{name} value is allowed." in capsys.readouterr().err

    def test_unknown_option(self, capsys):
        """Test that unknown options exit with status 1."""
        assert main(["--bogus"]) == 1
        assert "unrecognized arguments" in capsys.readouterr().err

    def test_help(self, capsys):
        """Test --help."""
        assert main(["--help"]) == 0
        out = capsys.readouterr().out
        assert "html-to-jsx-transform" in out
        assert "--input" in out

    def test_version(self, capsys):
        """Test -v and --version."""
        assert main(["-v"]) == 0
        assert capsys.readouterr().out == "0.1.0\n"
        assert main(["--version"]) == 0
        assert capsys.readouterr().out == "0.1.0\n"

    def test_indent_option(self, capsys):
        """Test --indent."""
        assert main(["--indent", "4", "<ul><li>a</li></ul>"]) == 0
        assert capsys.readouterr().out == "<ul>\n    <li>a</li>\n</ul>\n"

    def test_invalid_indent(self, capsys):
        """Test that an out-of-range indent is a configuration error."""
        assert main(["--indent", "99", "<p>x</p>"]) == 1
        assert "indent_size" in capsys.readouterr().err

    def test_config_file(self, tmp_path, capsys):
        """Test loading options from a JSON configuration file."""
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps({"renderer": {"preserve_comments": False}}), encoding="utf-8"
        )
        assert main(["--config", str(config_path), "<div><!-- c --></div>"]) == 0
        assert capsys.readouterr().out == "<div />\n"

    def test_resource_exhaustion(self, tmp_path, capsys):
        """Test that resource errors are reported with status 1."""
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps({"parser": {"max_nesting_depth": 2}}), encoding="utf-8"
        )
        assert main(["--config", str(config_path), "<a><b><c></c></b></a>"]) == 1
        assert "nesting exceeds" in capsys.readouterr().err

    @patch("logging.basicConfig")
    def test_verbose_configures_logging(self, mock_basic_config, capsys):
        """Test that --verbose enables debug logging."""
        assert main(["--verbose", "<p>x</p>"]) == 0
        mock_basic_config.assert_called_once()
