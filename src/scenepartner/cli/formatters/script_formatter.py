"""Rich table rendering for parse results and rehearsal positions."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from scenepartner.parser.models import Confidence, Element, ElementType, ParsedScript
from scenepartner.rehearsal.context import ContextWindow
from scenepartner.rehearsal.turns import NextSpeaker, SpeakerType

CONFIDENCE_STYLES = {
    Confidence.HIGH: "green",
    Confidence.MEDIUM: "yellow",
    Confidence.LOW: "red",
}

SPEAKER_STYLES = {
    SpeakerType.USER: "bold green",
    SpeakerType.AI: "bold cyan",
    SpeakerType.UNKNOWN: "dim",
}


def _element_text(element: Element) -> str:
    if element.element_type is ElementType.CHARACTER_CUE and element.parenthetical:
        return f"{element.content} ({element.parenthetical})"
    return element.content


class ScriptFormatter:
    """Print parse results and context windows to a rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def print_summary(self, script: ParsedScript) -> None:
        table = Table(title=script.title, show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")

        style = CONFIDENCE_STYLES[script.confidence]
        table.add_row("Scenes", str(script.scene_count))
        table.add_row("Elements", str(len(script.elements)))
        table.add_row("Dialogue lines", str(script.total_dialogue_lines))
        table.add_row("Speaking characters", ", ".join(script.speaking_characters) or "-")
        table.add_row(
            "Non-speaking characters", ", ".join(script.non_speaking_characters) or "-"
        )
        table.add_row("Estimated duration", str(script.estimated_duration))
        table.add_row("Confidence", f"[{style}]{script.confidence.value}[/{style}]")
        self.console.print(table)

    def print_elements(
        self, elements: tuple[Element, ...], cursor: int | None = None
    ) -> None:
        table = Table(show_lines=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Scene", justify="right")
        table.add_column("Type", style="magenta")
        table.add_column("Character", style="cyan")
        table.add_column("Text", no_wrap=False)

        for element in elements:
            marker = "> " if element.element_index == cursor else ""
            table.add_row(
                f"{marker}{element.element_index}",
                str(element.scene_number),
                element.element_type.value,
                element.character_name or "",
                _element_text(element),
                style="reverse" if element.element_index == cursor else None,
            )
        self.console.print(table)

    def print_next_speaker(self, speaker: NextSpeaker) -> None:
        style = SPEAKER_STYLES[speaker.type]
        self.console.print(
            f"Next speaker: [{style}]{speaker.character}[/{style}] "
            f"({speaker.type.value})"
        )

    def print_window(self, window: ContextWindow, speaker: NextSpeaker) -> None:
        self.console.print(
            f"[bold]Lines {window.start}-{window.end} of {window.total}[/bold] "
            f"(cursor {window.cursor})"
        )
        self.print_elements(window.elements, cursor=window.cursor)
        self.print_next_speaker(speaker)
