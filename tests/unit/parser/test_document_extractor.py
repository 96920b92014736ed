"""Unit tests for DocumentExtractor and line normalization."""

from unittest.mock import MagicMock

import pytest

from scenepartner.exceptions import DocumentDecodeError
from scenepartner.parser import DocumentExtractor, ScreenplayParser, normalize_lines


def _fake_pdf(pages):
    """Build a context manager mimicking a pdfplumber document."""
    pdf = MagicMock()
    pdf.__enter__.return_value = pdf
    pdf.__exit__.return_value = False
    pdf.pages = []
    for text in pages:
        page = MagicMock()
        page.extract_text.return_value = text
        pdf.pages.append(page)
    return pdf


class TestNormalizeLines:
    """Test normalize_lines."""

    def test_trims_and_drops_blank(self):
        """Test trimming and blank line removal."""
        assert normalize_lines("  A  \n\n\t\nB\r\n  C") == ["A", "B", "C"]

    def test_empty(self):
        """Test empty text."""
        assert normalize_lines("") == []


class TestTextExtraction:
    """Test plain text documents."""

    def test_page_count_estimate(self, tmp_path):
        """Test that page count is derived from line count."""
        path = tmp_path / "script.txt"
        path.write_text("\n".join(["line"] * 120), encoding="utf-8")

        document = DocumentExtractor(lines_per_page=55).extract(path)

        assert document.page_count == 3
        assert document.source == str(path)

    def test_empty_text_is_one_page(self, tmp_path):
        """Test the minimum page count."""
        path = tmp_path / "empty.fountain"
        path.write_text("", encoding="utf-8")
        assert DocumentExtractor().extract(path).page_count == 1

    def test_invalid_encoding(self, tmp_path):
        """Test that undecodable text raises DocumentDecodeError."""
        path = tmp_path / "latin.txt"
        path.write_bytes(b"\xff\xfe\xfa not utf-8")

        with pytest.raises(DocumentDecodeError, match="Failed to read text document"):
            DocumentExtractor().extract(path)


class TestPdfExtraction:
    """Test PDF documents through an injected opener."""

    def test_pages_joined(self, tmp_path):
        """Test text from each page and the page count."""
        path = tmp_path / "script.pdf"
        path.write_bytes(b"%PDF-1.4")
        opener = MagicMock(return_value=_fake_pdf(["INT. A - DAY", None, "JOHN\nHi."]))

        document = DocumentExtractor(pdf_open=opener).extract(path)

        opener.assert_called_once_with(path)
        assert document.page_count == 3
        assert document.text == "INT. A - DAY\n\nJOHN\nHi."

    def test_reader_failure(self, tmp_path):
        """Test that reader errors become DocumentDecodeError."""
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"not a pdf")
        opener = MagicMock(side_effect=ValueError("No /Root object"))

        with pytest.raises(DocumentDecodeError) as exc_info:
            DocumentExtractor(pdf_open=opener).extract(path)

        assert exc_info.value.details["reader_error"] == "No /Root object"
        assert isinstance(exc_info.value.__cause__, ValueError)


class TestUnreadableDocuments:
    """Test missing and unsupported files."""

    def test_missing_file(self, tmp_path):
        """Test a path that does not exist."""
        with pytest.raises(DocumentDecodeError, match="Document not found"):
            DocumentExtractor().extract(tmp_path / "nope.pdf")

    def test_unsupported_suffix(self, tmp_path):
        """Test a binary format we do not read."""
        path = tmp_path / "script.docx"
        path.write_bytes(b"PK")
        with pytest.raises(DocumentDecodeError, match="Unsupported document type"):
            DocumentExtractor().extract(path)

    def test_parser_propagates_decode_error(self, tmp_path):
        """Test that parse_file surfaces the extraction error."""
        with pytest.raises(DocumentDecodeError):
            ScreenplayParser().parse_file(tmp_path / "missing.txt")
