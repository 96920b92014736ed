"""Heuristic line classification for extracted screenplay text.

Classification is a pure function of a line and its neighbours. The
assembler only depends on the ``LineClassifier`` protocol, so stricter
casing rules or format-specific dialects can be dropped in without touching
the scan itself.

Known false positive: an all-caps action line directly followed by short
text is read as a character cue. Nothing here tries to disambiguate it.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from enum import Enum
from typing import Protocol, runtime_checkable


class LineTag(str, Enum):
    """Structural tag assigned to a single normalized line."""

    SCENE_HEADING = "scene_heading"
    TRANSITION = "transition"
    CHARACTER_CUE = "character_cue"
    PARENTHETICAL = "parenthetical"
    ACTION = "action"


SCENE_HEADING_PATTERN = re.compile(
    r"^(INT|EXT|INT\.?/EXT|EXT\.?/INT|I/E|E/I)[.\s]", re.IGNORECASE
)
TITLE_CASE_PATTERN = re.compile(r"^[A-Z][a-z]+(\s+[A-Z][a-z]+)*$")

TRANSITION_KEYWORDS: tuple[str, ...] = (
    "CUT TO:",
    "FADE TO:",
    "FADE IN:",
    "FADE OUT:",
    "DISSOLVE TO:",
    "SMASH CUT TO:",
    "MATCH CUT TO:",
    "JUMP CUT TO:",
)


@runtime_checkable
class LineClassifier(Protocol):
    """Capability interface used by the screenplay assembler."""

    def is_scene_heading(self, line: str) -> bool: ...

    def is_transition(self, line: str) -> bool: ...

    def is_parenthetical(self, line: str) -> bool: ...

    def is_character_cue(self, lines: Sequence[str], index: int) -> bool: ...

    def classify(self, lines: Sequence[str], index: int) -> LineTag: ...


class HeuristicLineClassifier:
    """Classify lines by casing, keywords and one line of lookahead."""

    def __init__(self, max_cue_length: int = 40, max_cue_words: int = 4) -> None:
        """Initialize the classifier.

        Args:
            max_cue_length: Longest line still considered a character cue
            max_cue_words: Most words a character cue may contain
        """
        self.max_cue_length = max_cue_length
        self.max_cue_words = max_cue_words

    def is_scene_heading(self, line: str) -> bool:
        return bool(SCENE_HEADING_PATTERN.match(line.strip()))

    def is_transition(self, line: str) -> bool:
        upper = line.upper()
        return any(keyword in upper for keyword in TRANSITION_KEYWORDS)

    def is_parenthetical(self, line: str) -> bool:
        stripped = line.strip()
        return stripped.startswith("(") and stripped.endswith(")")

    def is_character_cue(self, lines: Sequence[str], index: int) -> bool:
        """Check whether ``lines[index]`` introduces a block of dialogue.

        A cue is short, uppercase or Title Case, and must be followed by a
        parenthetical or by a line that is neither a heading nor a transition.
        """
        text = lines[index].strip()
        if not text or len(text) > self.max_cue_length:
            return False
        if len(text.split()) > self.max_cue_words:
            return False
        if text != text.upper() and not TITLE_CASE_PATTERN.match(text):
            return False

        if index + 1 >= len(lines):
            return False
        following = lines[index + 1].strip()
        if self.is_parenthetical(following):
            return True
        return bool(following) and not (
            self.is_scene_heading(following) or self.is_transition(following)
        )

    def classify(self, lines: Sequence[str], index: int) -> LineTag:
        """Tag ``lines[index]``; the first matching rule wins."""
        line = lines[index]
        if self.is_scene_heading(line):
            return LineTag.SCENE_HEADING
        if self.is_transition(line):
            return LineTag.TRANSITION
        if self.is_character_cue(lines, index):
            return LineTag.CHARACTER_CUE
        if self.is_parenthetical(line):
            return LineTag.PARENTHETICAL
        return LineTag.ACTION
