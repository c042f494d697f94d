"""Tests for text extraction."""

import io

import docx
import pypdf
import pytest

from scholarai.exceptions import ExtractionError, UnsupportedFileTypeError
from scholarai.rag import UploadedFile, extract_text

DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def docx_bytes(*paragraphs: str) -> bytes:
    document = docx.Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def blank_pdf_bytes(pages: int = 2) -> bytes:
    writer = pypdf.PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=200, height=200)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class TestExtractText:
    """Tests for extract_text dispatch."""

    def test_plain_text(self):
        file = UploadedFile(filename="notes.txt", content_type="text/plain", data="héllo".encode())
        assert extract_text(file) == "héllo"

    def test_markdown_by_extension(self):
        file = UploadedFile(filename="README.md", content_type="application/octet-stream", data=b"# Title")
        assert extract_text(file) == "# Title"

    def test_invalid_utf8_is_replaced(self):
        file = UploadedFile(filename="bad.txt", content_type="text/plain", data=b"ok \xff end")
        assert extract_text(file) == "ok � end"

    def test_docx(self):
        file = UploadedFile(
            filename="essay.docx",
            content_type=DOCX_TYPE,
            data=docx_bytes("First paragraph.", "Second paragraph."),
        )
        assert extract_text(file) == "First paragraph.\nSecond paragraph."

    def test_docx_table_cells(self):
        """Test that table text is kept, in document order."""
        document = docx.Document()
        document.add_paragraph("Intro")
        table = document.add_table(rows=2, cols=2)
        for row, label in enumerate("12"):
            for col, letter in enumerate("AB"):
                table.cell(row, col).text = f"{letter}{label}"
        document.add_paragraph("Outro")
        buffer = io.BytesIO()
        document.save(buffer)

        file = UploadedFile(filename="table.docx", content_type=DOCX_TYPE, data=buffer.getvalue())

        assert extract_text(file) == "Intro\nA1\nB1\nA2\nB2\nOutro"

    def test_docx_merged_cells_once(self):
        document = docx.Document()
        table = document.add_table(rows=1, cols=2)
        merged = table.cell(0, 0).merge(table.cell(0, 1))
        merged.text = "Spanning"
        buffer = io.BytesIO()
        document.save(buffer)

        file = UploadedFile(filename="merged.docx", content_type=DOCX_TYPE, data=buffer.getvalue())

        assert extract_text(file) == "Spanning"

    def test_docx_by_extension(self):
        file = UploadedFile(filename="essay.docx", content_type=None, data=docx_bytes("Body"))
        assert extract_text(file) == "Body"

    def test_blank_pdf(self):
        """Test that a PDF without text yields only page separators."""
        file = UploadedFile(filename="scan.pdf", content_type="application/pdf", data=blank_pdf_bytes(2))
        assert extract_text(file).strip() == ""

    def test_corrupt_pdf(self):
        file = UploadedFile(filename="broken.pdf", content_type="application/pdf", data=b"not a pdf")

        with pytest.raises(ExtractionError) as exc_info:
            extract_text(file)

        assert exc_info.value.filename == "broken.pdf"

    def test_corrupt_docx(self):
        file = UploadedFile(filename="broken.docx", content_type=DOCX_TYPE, data=b"not a zip")

        with pytest.raises(ExtractionError):
            extract_text(file)

    def test_unsupported_type(self):
        file = UploadedFile(filename="photo.png", content_type="image/png", data=b"\x89PNG")

        with pytest.raises(UnsupportedFileTypeError) as exc_info:
            extract_text(file)

        assert exc_info.value.message == "Unsupported file type: image/png (photo.png)"

    def test_unknown_type_without_extension(self):
        file = UploadedFile(filename="blob", content_type=None, data=b"data")

        with pytest.raises(UnsupportedFileTypeError) as exc_info:
            extract_text(file)

        assert "unknown" in exc_info.value.message
