"""CLI command for scenepartner context."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scenepartner.cli.formatters import JsonFormatter, ScriptFormatter
from scenepartner.cli.utils import CLIHandler, load_script, resolve_roles
from scenepartner.config import get_settings
from scenepartner.exceptions import ValidationError
from scenepartner.rehearsal import build_context_window, resolve_next_speaker

console = Console()


def context_command(
    path: Annotated[
        Path,
        typer.Argument(help="Screenplay document (PDF or plain text)"),
    ],
    character: Annotated[
        str,
        typer.Option("--character", "-u", help="Character the user rehearses"),
    ],
    cursor: Annotated[
        int,
        typer.Option("--cursor", "-n", min=0, help="Element index of the cursor"),
    ] = 0,
    ai_characters: Annotated[
        list[str] | None,
        typer.Option(
            "--ai",
            help="Character voiced by the AI (repeatable, default: all others)",
        ),
    ] = None,
    lookback: Annotated[
        int | None,
        typer.Option("--lookback", min=0, help="Elements shown before the cursor"),
    ] = None,
    lookahead: Annotated[
        int | None,
        typer.Option("--lookahead", min=1, help="Elements shown from the cursor"),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show the context window and next speaker at a cursor position."""
    handler = CLIHandler(console)
    settings = get_settings()
    try:
        script = load_script(path)
        user, voiced = resolve_roles(script, character, ai_characters)
        last_index = max(len(script.elements) - 1, 0)
        if cursor > last_index:
            raise ValidationError(
                message=f"Cursor {cursor} is outside the script",
                hint=f"Use a cursor between 0 and {last_index}",
                details={"total_elements": len(script.elements)},
            )
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    window = build_context_window(
        script.elements,
        cursor,
        lookback=settings.context_lookback if lookback is None else lookback,
        lookahead=settings.context_lookahead if lookahead is None else lookahead,
    )
    speaker = resolve_next_speaker(script.elements, cursor, user, voiced)

    if json_output:
        print(
            JsonFormatter().format(
                {
                    "user_character": user,
                    "ai_characters": voiced,
                    "next_speaker": speaker.to_dict(),
                    "current_window": window.to_dict(),
                }
            )
        )
        return

    ScriptFormatter(console).print_window(window, speaker)
