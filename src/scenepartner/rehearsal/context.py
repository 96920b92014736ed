"""Sliding context window around the rehearsal cursor."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from scenepartner.parser.models import Element

DEFAULT_LOOKBACK = 8
DEFAULT_LOOKAHEAD = 20


@dataclass(frozen=True)
class ContextWindow:
    """Contiguous slice ``elements[start:end]`` around ``cursor``."""

    start: int
    end: int
    cursor: int
    total: int
    elements: tuple[Element, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_index": self.start,
            "end_index": self.end,
            "current_line_index": self.cursor,
            "total_lines": self.total,
            "window_elements": [element.to_dict() for element in self.elements],
        }


def window_bounds(
    total: int,
    cursor: int,
    lookback: int = DEFAULT_LOOKBACK,
    lookahead: int = DEFAULT_LOOKAHEAD,
) -> tuple[int, int]:
    """Compute ``(start, end)`` of the window, both clamped to ``[0, total]``."""
    start = min(max(0, cursor - lookback), total)
    end = max(start, min(total, cursor + lookahead))
    return start, end


def build_context_window(
    elements: Sequence[Element],
    cursor: int,
    lookback: int = DEFAULT_LOOKBACK,
    lookahead: int = DEFAULT_LOOKAHEAD,
) -> ContextWindow:
    """Build the context window for ``cursor``.

    Recomputed on every call; the window is a pure function of the element
    sequence and the cursor.

    Args:
        elements: Full element sequence in reading order
        cursor: Current rehearsal position
        lookback: Elements kept before the cursor
        lookahead: Elements kept from the cursor onward

    Returns:
        The bounded window
    """
    start, end = window_bounds(len(elements), cursor, lookback, lookahead)
    return ContextWindow(
        start=start,
        end=end,
        cursor=cursor,
        total=len(elements),
        elements=tuple(elements[start:end]),
    )
