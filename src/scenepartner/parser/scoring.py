"""Title, running time and confidence derived from a parse result."""

from __future__ import annotations

import math
import re
from collections.abc import Sequence

from scenepartner.parser.models import Confidence, DurationEstimate

UNTITLED = "Untitled Script"

TITLE_SKIP_PATTERN = re.compile(
    r"^(written by|created by|episode|draft|revision|date|page)", re.IGNORECASE
)

# Rough screenplay rule of thumb: a page runs about a minute.
DURATION_LOW_FACTOR = 0.8
DURATION_HIGH_FACTOR = 1.2


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def extract_title(lines: Sequence[str], scan_lines: int = 20) -> str:
    """Guess the script title from the leading lines.

    Credits, draft and page markers are skipped. The first remaining line
    between 3 and 99 characters with no double-space run wins.

    Args:
        lines: Normalized screenplay lines
        scan_lines: How many leading lines to inspect

    Returns:
        The detected title, or ``"Untitled Script"``
    """
    for line in lines[:scan_lines]:
        candidate = line.strip()
        if TITLE_SKIP_PATTERN.match(candidate):
            continue
        if 2 < len(candidate) < 100 and "  " not in candidate:
            return candidate
    return UNTITLED


def estimate_duration(page_count: int) -> DurationEstimate:
    """Estimate running time in minutes from the page count."""
    pages = max(0, page_count)
    return DurationEstimate(
        low=max(1, _round_half_up(pages * DURATION_LOW_FACTOR)),
        high=_round_half_up(pages * DURATION_HIGH_FACTOR),
    )


def grade_confidence(scene_count: int, speaking_count: int) -> Confidence:
    """Grade how much a parse result can be trusted."""
    if scene_count > 0 and speaking_count >= 2:
        return Confidence.HIGH
    if scene_count > 0:
        return Confidence.MEDIUM
    return Confidence.LOW
