"""Heuristic screenplay parser for ScenePartner."""

from __future__ import annotations

from .assembler import AssemblyResult, ScreenplayAssembler
from .classifier import HeuristicLineClassifier, LineClassifier, LineTag
from .document import DocumentExtractor, ExtractedDocument
from .models import Confidence, DurationEstimate, Element, ElementType, ParsedScript
from .normalize import normalize_lines
from .screenplay_parser import ScreenplayParser

__all__ = [
    "AssemblyResult",
    "Confidence",
    "DocumentExtractor",
    "DurationEstimate",
    "Element",
    "ElementType",
    "ExtractedDocument",
    "HeuristicLineClassifier",
    "LineClassifier",
    "LineTag",
    "ParsedScript",
    "ScreenplayAssembler",
    "ScreenplayParser",
    "normalize_lines",
]
