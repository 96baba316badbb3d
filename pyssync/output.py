"""Console output for the pyssync CLI and sync engine."""

import json
from typing import Any, Iterable

import click
from rich.console import Console


class OutputFormatter:
    """Formats messages for the terminal.

    Informational messages go to stdout, warnings and errors to stderr.
    In quiet mode only warnings and errors are shown.
    """

    def __init__(self, json_output: bool = False, quiet: bool = False):
        """Initialize output formatter.

        Args:
            json_output: Emit machine-readable JSON instead of text
            quiet: Suppress non-essential output
        """
        self.json_output = json_output
        self.quiet = quiet
        self.console = Console(highlight=False, soft_wrap=True)
        self.err_console = Console(stderr=True, highlight=False, soft_wrap=True)

    def print(self, message: str = "") -> None:
        if self.quiet or self.json_output:
            return
        self.console.print(message, markup=False)

    def info(self, message: str) -> None:
        if self.quiet or self.json_output:
            return
        self.console.print(message, markup=False)

    def success(self, message: str) -> None:
        if self.quiet or self.json_output:
            return
        self.console.print(message, style="green", markup=False)

    def warning(self, message: str) -> None:
        self.err_console.print(message, style="yellow", markup=False)

    def error(self, message: str) -> None:
        self.err_console.print(f"Error: {message}", style="bold red", markup=False)

    def print_paths(self, title: str, paths: Iterable[str]) -> None:
        """Print a heading followed by one indented path per line."""
        if self.quiet or self.json_output:
            return
        self.console.print(title, style="bold", markup=False)
        for path in paths:
            self.console.print(f"  {_displayable(path)}", markup=False)

    def output_json(self, data: Any) -> None:
        """Print data as indented JSON."""
        click.echo(json.dumps(data, indent=2, default=str))


def _displayable(path: str) -> str:
    """Replace undecodable bytes in a file name so it can be printed."""
    return path.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
