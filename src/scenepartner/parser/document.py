"""Text extraction from screenplay documents (PDF or plain text)."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pdfplumber

from scenepartner.config import get_logger
from scenepartner.exceptions import DocumentDecodeError

logger = get_logger(__name__)

TEXT_SUFFIXES = frozenset({".txt", ".fountain", ".text", ".md"})


@dataclass(frozen=True)
class ExtractedDocument:
    """Raw text and page count pulled from a source document."""

    text: str
    page_count: int
    source: str


class DocumentExtractor:
    """Read screenplay documents into text plus a page count."""

    def __init__(
        self,
        lines_per_page: int = 55,
        pdf_open: Callable[..., Any] = pdfplumber.open,
    ) -> None:
        """Initialize the extractor.

        Args:
            lines_per_page: Used to estimate the page count of plain text
            pdf_open: Callable opening a PDF, ``pdfplumber.open`` by default
        """
        self.lines_per_page = lines_per_page
        self._pdf_open = pdf_open

    def extract(self, path: Path | str) -> ExtractedDocument:
        """Extract text from ``path`` based on its suffix.

        Raises:
            DocumentDecodeError: If the file is missing or cannot be decoded
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise DocumentDecodeError(
                message=f"Document not found: {file_path}",
                hint="Check the path and try again.",
                details={"file": str(file_path)},
            )

        if file_path.suffix.lower() == ".pdf":
            return self._extract_pdf(file_path)
        if file_path.suffix.lower() in TEXT_SUFFIXES or not file_path.suffix:
            return self._extract_text(file_path)

        raise DocumentDecodeError(
            message=f"Unsupported document type: {file_path.suffix}",
            hint="Use a PDF or a plain text screenplay.",
            details={
                "file": str(file_path),
                "supported_formats": [".pdf", *sorted(TEXT_SUFFIXES)],
            },
        )

    def _extract_pdf(self, file_path: Path) -> ExtractedDocument:
        logger.debug("Extracting PDF text", file=str(file_path))
        try:
            with self._pdf_open(file_path) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as e:  # pdfminer raises a wide range of types
            logger.error("PDF extraction failed", file=str(file_path), error=str(e))
            raise DocumentDecodeError(
                message=f"Failed to read PDF: {file_path}",
                hint="Make sure the file is a text-based, unencrypted PDF.",
                details={"file": str(file_path), "reader_error": str(e)},
            ) from e

        return ExtractedDocument(
            text="\n".join(pages),
            page_count=len(pages),
            source=str(file_path),
        )

    def _extract_text(self, file_path: Path) -> ExtractedDocument:
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentDecodeError(
                message=f"Failed to read text document: {file_path}",
                hint="Text screenplays must be UTF-8 encoded.",
                details={"file": str(file_path), "reader_error": str(e)},
            ) from e

        line_count = len(text.splitlines())
        return ExtractedDocument(
            text=text,
            page_count=max(1, math.ceil(line_count / self.lines_per_page)),
            source=str(file_path),
        )
