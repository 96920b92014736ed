"""Resolve who speaks next from the rehearsal cursor."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from scenepartner.parser.models import Element

UNKNOWN_CHARACTER = "unknown"


class SpeakerType(str, Enum):
    """Which side of the rehearsal owns the next line."""

    USER = "user"
    AI = "ai"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class NextSpeaker:
    """The next dialogue owner and how it is voiced."""

    character: str
    type: SpeakerType
    element_index: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"character": self.character, "type": self.type.value}


def resolve_next_speaker(
    elements: Sequence[Element],
    cursor: int,
    user_character: str,
    ai_characters: Collection[str],
) -> NextSpeaker:
    """Find the first named dialogue element at or after ``cursor``.

    A character in neither the user role nor the AI set, such as one left
    out of the session, resolves to ``unknown``.
    """
    for position in range(max(0, cursor), len(elements)):
        element = elements[position]
        if not element.is_dialogue:
            continue
        name = element.character_name or ""
        if name == user_character:
            kind = SpeakerType.USER
        elif name in ai_characters:
            kind = SpeakerType.AI
        else:
            kind = SpeakerType.UNKNOWN
        return NextSpeaker(character=name, type=kind, element_index=position)

    return NextSpeaker(character=UNKNOWN_CHARACTER, type=SpeakerType.UNKNOWN)
