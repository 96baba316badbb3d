"""Tests for the console output formatter."""

import json

from pyssync.output import OutputFormatter


class TestOutputFormatter:
    """Test OutputFormatter modes."""

    def test_info_and_paths(self, capsys):
        """Messages and path lists go to stdout."""
        out = OutputFormatter()

        out.info("Label: docs")
        out.print_paths("New in /b:", ["a", "a/b"])

        captured = capsys.readouterr()
        assert "Label: docs" in captured.out
        assert "New in /b:" in captured.out
        assert "  a/b" in captured.out

    def test_undecodable_name_printable(self, capsys):
        """A name with undecodable bytes is printed with a replacement mark."""
        out = OutputFormatter()

        out.print_paths("New in /b:", ["caf\udce9.txt"])

        assert "caf\ufffd.txt" in capsys.readouterr().out

    def test_warning_and_error_on_stderr(self, capsys):
        """Warnings and errors go to stderr."""
        out = OutputFormatter()

        out.warning("careful")
        out.error("broken")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "careful" in captured.err
        assert "Error: broken" in captured.err

    def test_quiet_keeps_errors(self, capsys):
        """Quiet mode hides information but not errors."""
        out = OutputFormatter(quiet=True)

        out.info("hidden")
        out.success("hidden")
        out.error("shown")

        captured = capsys.readouterr()
        assert "hidden" not in captured.out
        assert "Error: shown" in captured.err

    def test_json_output(self, capsys):
        """JSON mode prints only the data."""
        out = OutputFormatter(json_output=True)

        out.info("hidden")
        out.output_json({"label": "docs", "copied": 2})

        assert json.loads(capsys.readouterr().out) == {"label": "docs", "copied": 2}
