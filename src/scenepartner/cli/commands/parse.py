"""CLI command for scenepartner parse."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scenepartner.cli.formatters import JsonFormatter, ScriptFormatter
from scenepartner.cli.utils import CLIHandler, load_script
from scenepartner.config import get_logger

logger = get_logger(__name__)
console = Console()


def parse_command(
    path: Annotated[
        Path,
        typer.Argument(help="Screenplay document (PDF or plain text)"),
    ],
    pages: Annotated[
        int | None,
        typer.Option(
            "--pages",
            "-p",
            min=1,
            help="Override the page count used for the duration estimate",
        ),
    ] = None,
    show_elements: Annotated[
        bool,
        typer.Option("--elements", "-e", help="List every parsed element"),
    ] = False,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Parse a screenplay into scenes, cues, dialogue and action.

    Prints a summary of the detected structure and how confident the
    heuristics are in it.
    """
    handler = CLIHandler(console)
    try:
        script = load_script(path, pages)
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    if json_output:
        print(JsonFormatter().format(script))
        return

    formatter = ScriptFormatter(console)
    formatter.print_summary(script)
    if show_elements:
        formatter.print_elements(script.elements)
