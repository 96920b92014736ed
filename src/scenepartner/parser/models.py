"""Data models for parsed screenplays."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ElementType(str, Enum):
    """Structural element types emitted by the assembler."""

    SCENE_HEADING = "scene_heading"
    TRANSITION = "transition"
    CHARACTER_CUE = "character_cue"
    DIALOGUE = "dialogue"
    ACTION = "action"


class Confidence(str, Enum):
    """Heuristic quality grade of a parse result."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Element:
    """One structural unit of a screenplay, in reading order."""

    line_id: str
    scene_number: int
    element_index: int
    element_type: ElementType
    content: str
    character_name: str | None = None
    dialogue: str | None = None
    parenthetical: str | None = None

    @property
    def is_dialogue(self) -> bool:
        """Whether this element carries spoken text for a named character."""
        return self.element_type is ElementType.DIALOGUE and bool(self.character_name)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-ready mapping, omitting unset optional fields."""
        data: dict[str, Any] = {
            "line_id": self.line_id,
            "scene_number": self.scene_number,
            "element_index": self.element_index,
            "element_type": self.element_type.value,
            "content": self.content,
        }
        for key in ("character_name", "dialogue", "parenthetical"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class DurationEstimate:
    """Inclusive estimated running time band, in minutes."""

    low: int
    high: int

    def __str__(self) -> str:
        return f"{self.low}-{self.high} min"


@dataclass(frozen=True)
class ParsedScript:
    """Result of parsing a screenplay.

    Character collections are tuples in first-seen order so that parsing the
    same input twice yields equal values.
    """

    title: str
    characters: tuple[str, ...]
    speaking_characters: tuple[str, ...]
    non_speaking_characters: tuple[str, ...]
    scene_count: int
    total_dialogue_lines: int
    estimated_duration: DurationEstimate
    confidence: Confidence
    elements: tuple[Element, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.elements)

    def scene(self, scene_number: int) -> tuple[Element, ...]:
        """Return the contiguous run of elements belonging to one scene."""
        return tuple(e for e in self.elements if e.scene_number == scene_number)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the mapping handed to the persistence collaborator."""
        return {
            "title": self.title,
            "characters": list(self.characters),
            "speaking_characters": list(self.speaking_characters),
            "non_speaking_characters": list(self.non_speaking_characters),
            "scene_count": self.scene_count,
            "total_dialogue_lines": self.total_dialogue_lines,
            "estimated_duration": str(self.estimated_duration),
            "confidence": self.confidence.value,
            "elements": [element.to_dict() for element in self.elements],
        }
