"""CLI command for scenepartner rehearse."""

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from scenepartner.cli.formatters import JsonFormatter
from scenepartner.cli.utils import CLIHandler, load_script, resolve_roles
from scenepartner.rehearsal import RehearsalController, SessionUpdate
from scenepartner.rehearsal.turns import SpeakerType

console = Console()


def rehearse_command(
    path: Annotated[
        Path,
        typer.Argument(help="Screenplay document (PDF or plain text)"),
    ],
    character: Annotated[
        str,
        typer.Option("--character", "-u", help="Character the user rehearses"),
    ],
    steps: Annotated[
        int,
        typer.Option("--steps", "-s", min=1, help="Number of cursor advances"),
    ] = 10,
    start: Annotated[
        int,
        typer.Option("--start", min=0, help="Element index to start from"),
    ] = 0,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Step a rehearsal session through the script, showing each turn.

    Advances the cursor one element at a time and reports who would speak
    next at every position, then completes the session.
    """
    handler = CLIHandler(console)
    updates: list[SessionUpdate] = []

    try:
        script = load_script(path)
        user, voiced = resolve_roles(script, character, None)
        controller = RehearsalController.start(
            script.elements, user, voiced, listener=updates.append
        )
        if start:
            controller.move_to(start)
        else:
            updates.append(controller.snapshot())
        for _ in range(steps):
            before = controller.session.current_line_index
            controller.advance()
            if controller.session.current_line_index == before:
                break
        final = controller.complete()
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    if json_output:
        payload: dict[str, Any] = {
            "positions": [
                {
                    "current_line_index": update.session.current_line_index,
                    "next_speaker": update.next_speaker.to_dict(),
                }
                for update in updates
            ],
            "session": final.to_dict(),
        }
        print(JsonFormatter().format(payload))
        return

    for update in updates:
        speaker = update.next_speaker
        cursor = update.session.current_line_index
        element = script.elements[cursor] if script.elements else None
        label = element.element_type.value if element else "-"
        turn = "YOUR LINE" if speaker.type is SpeakerType.USER else speaker.type.value
        console.print(
            f"[dim]{cursor:>4}[/dim] {label:<14} next: {speaker.character} ({turn})"
        )
    console.print(
        f"[green]Session {final.status.value}[/green] at line "
        f"{final.current_line_index} of {final.total_elements}"
    )
