"""Text extraction from uploaded files.

Supports:
- PDF: page text via pypdf
- DOCX: paragraph and table text via python-docx
- Plain text / Markdown: UTF-8 decode
"""

import io
import logging
from pathlib import PurePath
from typing import Iterator

import pypdf
from docx import Document as DocxDocument
from docx.table import Table

from scholarai.exceptions import ExtractionError, UnsupportedFileTypeError

from .document import UploadedFile

logger = logging.getLogger(__name__)

PDF_TYPES = {"application/pdf", "application/x-pdf"}
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
GENERIC_TYPES = {"", "application/octet-stream"}
TEXT_SUFFIXES = {".txt", ".md"}


def _suffix(filename: str) -> str:
    return PurePath(filename or "").suffix.lower()


def _is_pdf(content_type: str, suffix: str) -> bool:
    return content_type in PDF_TYPES or (content_type in GENERIC_TYPES and suffix == ".pdf")


def _is_docx(content_type: str, suffix: str) -> bool:
    return content_type == DOCX_TYPE or (content_type in GENERIC_TYPES and suffix == ".docx")


def _is_text(content_type: str, suffix: str) -> bool:
    return content_type.startswith("text/") or suffix in TEXT_SUFFIXES


def extract_pdf(data: bytes) -> str:
    """Concatenate the text of every PDF page, one line break between pages."""
    reader = pypdf.PdfReader(io.BytesIO(data))
    text = ""
    for page in reader.pages:
        text += (page.extract_text() or "") + "\n"
    return text


def _docx_lines(container) -> Iterator[str]:
    """Yield paragraph text in document order, descending into table cells."""
    for block in container.iter_inner_content():
        if isinstance(block, Table):
            for row in block.rows:
                # Merged cells repeat in row.cells
                seen = set()
                for cell in row.cells:
                    if id(cell._tc) in seen:
                        continue
                    seen.add(id(cell._tc))
                    yield from _docx_lines(cell)
        else:
            yield block.text


def extract_docx(data: bytes) -> str:
    """Return the raw text of a DOCX file, table cells included."""
    doc = DocxDocument(io.BytesIO(data))
    return "\n".join(_docx_lines(doc))


def extract_plain(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def extract_text(file: UploadedFile) -> str:
    """
    Extract text from an uploaded file.

    The extractor is chosen from the declared content type, falling back
    to the filename extension for generic types.

    Args:
        file: Uploaded file

    Returns:
        Extracted text (may be empty)

    Raises:
        UnsupportedFileTypeError: If no extractor handles the file
        ExtractionError: If the file cannot be parsed
    """
    content_type = (file.content_type or "").lower()
    suffix = _suffix(file.filename)

    if _is_pdf(content_type, suffix):
        extractor = extract_pdf
    elif _is_docx(content_type, suffix):
        extractor = extract_docx
    elif _is_text(content_type, suffix):
        extractor = extract_plain
    else:
        raise UnsupportedFileTypeError(file.filename, file.content_type)

    try:
        text = extractor(file.data)
    except Exception as e:
        raise ExtractionError(file.filename, str(e)) from e

    logger.debug(f"Extracted {len(text)} characters from {file.filename} ({extractor.__name__})")
    return text
