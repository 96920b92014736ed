"""Screenplay parser turning extracted text into a ParsedScript."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from scenepartner.config import ScenePartnerSettings, get_logger, get_settings
from scenepartner.parser.assembler import ScreenplayAssembler
from scenepartner.parser.classifier import HeuristicLineClassifier, LineClassifier
from scenepartner.parser.document import DocumentExtractor
from scenepartner.parser.models import ParsedScript
from scenepartner.parser.normalize import normalize_lines
from scenepartner.parser.scoring import (
    estimate_duration,
    extract_title,
    grade_confidence,
)

logger = get_logger(__name__)


class ScreenplayParser:
    """Parse unstructured screenplay text into ordered structural elements.

    Parsing never fails on malformed input. Text with no scene headings
    yields an empty element sequence graded ``low``.
    """

    def __init__(
        self,
        classifier: LineClassifier | None = None,
        settings: ScenePartnerSettings | None = None,
    ) -> None:
        """Initialize the parser.

        Args:
            classifier: Line classification strategy (heuristic by default)
            settings: Configuration settings, global settings if not provided
        """
        self.settings = settings or get_settings()
        self.classifier = classifier or HeuristicLineClassifier(
            max_cue_length=self.settings.character_cue_max_length,
            max_cue_words=self.settings.character_cue_max_words,
        )
        self.assembler = ScreenplayAssembler(self.classifier)

    def parse_lines(self, lines: Sequence[str], page_count: int) -> ParsedScript:
        """Parse an already normalized line list.

        Args:
            lines: Trimmed, non-empty lines in reading order
            page_count: Number of pages in the source document

        Returns:
            Immutable parse result
        """
        result = self.assembler.assemble(lines)

        script = ParsedScript(
            title=extract_title(lines, self.settings.title_scan_lines),
            characters=result.characters,
            speaking_characters=result.speaking_characters,
            non_speaking_characters=result.non_speaking_characters,
            scene_count=result.scene_count,
            total_dialogue_lines=result.total_dialogue_lines,
            estimated_duration=estimate_duration(page_count),
            confidence=grade_confidence(
                result.scene_count, len(result.speaking_characters)
            ),
            elements=result.elements,
        )

        logger.info(
            "Parsed screenplay",
            title=script.title,
            scenes=script.scene_count,
            characters=len(script.characters),
            dialogue_lines=script.total_dialogue_lines,
            confidence=script.confidence.value,
        )
        return script

    def parse_text(self, text: str, page_count: int) -> ParsedScript:
        """Normalize raw document text and parse it."""
        return self.parse_lines(normalize_lines(text), page_count)

    def parse_file(self, path: Path | str) -> ParsedScript:
        """Extract text from a PDF or text file and parse it.

        Raises:
            DocumentDecodeError: If the document cannot be read
        """
        extractor = DocumentExtractor(lines_per_page=self.settings.text_lines_per_page)
        document = extractor.extract(path)
        logger.debug(
            "Extracted document", source=document.source, pages=document.page_count
        )
        return self.parse_text(document.text, document.page_count)
