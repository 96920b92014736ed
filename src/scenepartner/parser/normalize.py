"""Turn extracted document text into the parser's normalized line list."""

from __future__ import annotations


def normalize_lines(text: str) -> list[str]:
    """Split text into trimmed lines, dropping blank ones."""
    lines = (line.strip() for line in text.splitlines())
    return [line for line in lines if line]
