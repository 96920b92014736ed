"""Unified CLI handler for standardized error handling and output."""

from __future__ import annotations

import typer
from rich.console import Console

from scenepartner.cli.formatters.json_formatter import JsonFormatter
from scenepartner.config import get_logger
from scenepartner.exceptions import ScenePartnerError

logger = get_logger(__name__)


class CLIHandler:
    """Unified handler for CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler.

        Args:
            console: Rich console for output
        """
        self.console = console or Console()
        self.json_formatter = JsonFormatter()

    def handle_error(
        self, error: Exception, json_output: bool = False, exit_code: int = 1
    ) -> None:
        """Display an error consistently and exit.

        Args:
            error: Exception to handle
            json_output: Whether to output JSON
            exit_code: Exit code to use

        Raises:
            typer.Exit: Always
        """
        message = error.message if isinstance(error, ScenePartnerError) else str(error)
        logger.error("Command failed", error=message)

        if json_output:
            print(self.json_formatter.format_error_response(message, exit_code))
        else:
            self.console.print(f"[red]Error:[/red] {message}", style="bold")
            if isinstance(error, ScenePartnerError) and error.hint:
                self.console.print(f"[yellow]Hint:[/yellow] {error.hint}")

        raise typer.Exit(exit_code)
