"""Shared helpers for commands that load a screenplay from disk."""

from __future__ import annotations

from pathlib import Path

from scenepartner.config import get_settings
from scenepartner.exceptions import ValidationError
from scenepartner.parser import DocumentExtractor, ParsedScript, ScreenplayParser


def load_script(path: Path, pages: int | None = None) -> ParsedScript:
    """Extract and parse ``path``, optionally overriding its page count."""
    settings = get_settings()
    document = DocumentExtractor(lines_per_page=settings.text_lines_per_page).extract(
        path
    )
    parser = ScreenplayParser(settings=settings)
    return parser.parse_text(document.text, pages or document.page_count)


def resolve_roles(
    script: ParsedScript, user_character: str, ai_characters: list[str] | None
) -> tuple[str, list[str]]:
    """Match the user role case-insensitively and default the AI roles.

    Without explicit AI roles every other speaking character is voiced.
    """
    by_upper = {name.upper(): name for name in script.characters}
    user = by_upper.get(user_character.strip().upper())
    if user is None:
        raise ValidationError(
            message=f"Character '{user_character}' does not appear in the script",
            hint="Run 'scenepartner parse' to list the detected characters",
            details={"characters": list(script.characters)},
        )

    if ai_characters:
        voiced = [by_upper.get(name.strip().upper(), name) for name in ai_characters]
        return user, [name for name in voiced if name != user]
    return user, [name for name in script.speaking_characters if name != user]
