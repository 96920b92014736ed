"""Single-pass assembly of classified lines into screenplay elements."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from scenepartner.parser.classifier import (
    HeuristicLineClassifier,
    LineClassifier,
    LineTag,
)
from scenepartner.parser.models import Element, ElementType


@dataclass
class AssemblyState:
    """Accumulator threaded through the assembly fold.

    A fresh state is created for every ``assemble`` call and each step
    returns it, so no counters live outside a single pass.
    """

    position: int = 0
    scene_number: int = 0
    element_index: int = 0
    elements: list[Element] = field(default_factory=list)
    # dicts keep first-seen order, which keeps output deterministic
    characters: dict[str, None] = field(default_factory=dict)
    speaking_characters: dict[str, None] = field(default_factory=dict)

    def emit(
        self,
        kind: str,
        element_type: ElementType,
        content: str,
        **extra: str | None,
    ) -> None:
        """Append an element with the next index and the current scene."""
        self.elements.append(
            Element(
                line_id=self._line_id(kind),
                scene_number=self.scene_number,
                element_index=self.element_index,
                element_type=element_type,
                content=content,
                **extra,
            )
        )
        self.element_index += 1

    def _line_id(self, kind: str) -> str:
        if kind == "heading":
            return f"scene_{self.scene_number}_heading"
        return f"scene_{self.scene_number}_{kind}_{self.element_index}"


@dataclass(frozen=True)
class AssemblyResult:
    """Raw output of the assembler, before scoring."""

    elements: tuple[Element, ...]
    scene_count: int
    characters: tuple[str, ...]
    speaking_characters: tuple[str, ...]

    @property
    def non_speaking_characters(self) -> tuple[str, ...]:
        speaking = set(self.speaking_characters)
        return tuple(c for c in self.characters if c not in speaking)

    @property
    def total_dialogue_lines(self) -> int:
        return sum(1 for e in self.elements if e.element_type is ElementType.DIALOGUE)


class ScreenplayAssembler:
    """Fold a normalized line list into an ordered element sequence."""

    def __init__(self, classifier: LineClassifier | None = None) -> None:
        """Initialize the assembler.

        Args:
            classifier: Line classification strategy, heuristic by default
        """
        self.classifier = classifier or HeuristicLineClassifier()

    def assemble(self, lines: Sequence[str]) -> AssemblyResult:
        """Run the scan over ``lines`` and collect the result."""
        state = AssemblyState()
        while state.position < len(lines):
            state = self.step(lines, state)

        return AssemblyResult(
            elements=tuple(state.elements),
            scene_count=state.scene_number,
            characters=tuple(state.characters),
            speaking_characters=tuple(state.speaking_characters),
        )

    def step(self, lines: Sequence[str], state: AssemblyState) -> AssemblyState:
        """Consume one or more lines starting at ``state.position``."""
        i = state.position
        line = lines[i]
        tag = self.classifier.classify(lines, i)

        if tag is LineTag.SCENE_HEADING:
            state.scene_number += 1
            state.emit("heading", ElementType.SCENE_HEADING, line)
            state.position = i + 1
            return state

        if tag is LineTag.TRANSITION:
            state.emit("trans", ElementType.TRANSITION, line)
            state.position = i + 1
            return state

        if tag is LineTag.CHARACTER_CUE and self._take_dialogue(lines, state):
            return state

        if self.classifier.is_parenthetical(line):
            state.position = i + 1
            return state

        if state.scene_number > 0 and line.strip():
            state.emit("action", ElementType.ACTION, line)
        state.position = i + 1
        return state

    def _take_dialogue(self, lines: Sequence[str], state: AssemblyState) -> bool:
        """Consume a cue and its dialogue block.

        Returns False, leaving the position untouched, when no dialogue
        follows the cue so the line can be re-read as action.
        """
        i = state.position
        cue_line = lines[i]
        name = cue_line.strip()
        state.characters.setdefault(name, None)

        parenthetical: str | None = None
        cursor = i + 1
        if cursor < len(lines) and self.classifier.is_parenthetical(lines[cursor]):
            parenthetical = lines[cursor].replace("(", "").replace(")", "").strip()
            cursor += 1

        spoken: list[str] = []
        while cursor < len(lines) and not self._is_boundary(lines, cursor):
            text = lines[cursor].strip()
            if text and not self.classifier.is_parenthetical(text):
                spoken.append(text)
            cursor += 1

        if not spoken:
            return False

        dialogue = " ".join(spoken)
        state.speaking_characters.setdefault(name, None)
        state.emit(
            "char",
            ElementType.CHARACTER_CUE,
            cue_line,
            character_name=name,
            dialogue=dialogue,
            parenthetical=parenthetical,
        )
        state.emit(
            "dialog",
            ElementType.DIALOGUE,
            dialogue,
            character_name=name,
            dialogue=dialogue,
        )
        state.position = cursor
        return True

    def _is_boundary(self, lines: Sequence[str], index: int) -> bool:
        line = lines[index]
        return (
            self.classifier.is_scene_heading(line)
            or self.classifier.is_character_cue(lines, index)
            or self.classifier.is_transition(line)
        )
