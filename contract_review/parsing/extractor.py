"""Attachment text extraction.

Classifies each upload by mime-type and filename suffix using an ordered
rule table, then hands the bytes to the matching backend.
"""

import csv
import io
import logging
from collections.abc import Callable
from enum import Enum

import pytesseract
from docx import Document
from docx.table import Table
from openpyxl import load_workbook
from PIL import Image

from contract_review.models.schemas import UploadedFile

logger = logging.getLogger(__name__)

# Sentinels
PDF_UNSUPPORTED = "[PDF extraction unsupported]"
UNSUPPORTED_FILE_TYPE = "[unsupported file type]"
EXTRACTION_ERROR_TEMPLATE = "[extraction error: {message}]"

OCR_LANGUAGES = "jpn+eng"

WORD_MIME_TYPES = frozenset(
    {
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/msword",
    }
)
SPREADSHEET_MIME_TYPES = frozenset(
    {
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.ms-excel",
    }
)


class FileKind(str, Enum):
    """Extraction route chosen for an upload."""

    PDF = "pdf"
    WORD = "word"
    SPREADSHEET = "spreadsheet"
    IMAGE = "image"
    UNSUPPORTED = "unsupported"


def _matches(mime_types: frozenset[str], suffixes: tuple[str, ...]) -> Callable[[str, str], bool]:
    def predicate(mime: str, name: str) -> bool:
        return mime in mime_types or name.endswith(suffixes)

    return predicate


# First match wins.
_RULES: list[tuple[FileKind, Callable[[str, str], bool]]] = [
    (FileKind.PDF, _matches(frozenset({"application/pdf"}), (".pdf",))),
    (FileKind.WORD, _matches(WORD_MIME_TYPES, (".docx", ".doc"))),
    (FileKind.SPREADSHEET, _matches(SPREADSHEET_MIME_TYPES, (".xlsx", ".xls"))),
    (FileKind.IMAGE, lambda mime, name: mime.startswith("image/")),
]


def classify(file: UploadedFile) -> FileKind:
    """Pick the extraction route for an upload.

    Args:
        file: The uploaded attachment.

    Returns:
        The first FileKind whose rule matches, or UNSUPPORTED.
    """
    mime = (file.content_type or "").lower()
    name = (file.filename or "").lower()
    for kind, predicate in _RULES:
        if predicate(mime, name):
            return kind
    return FileKind.UNSUPPORTED


def _table_lines(table: Table) -> list[str]:
    # One line per row, cells tab-separated
    return ["\t".join(cell.text for cell in row.cells) for row in table.rows]


def _extract_word(content: bytes) -> str:
    """Body paragraphs and table rows, in document order."""
    document = Document(io.BytesIO(content))
    lines = []
    for block in document.iter_inner_content():
        if isinstance(block, Table):
            lines.extend(_table_lines(block))
        else:
            lines.append(block.text)
    return "\n".join(lines)


def _sheet_to_csv(rows) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for row in rows:
        values = ["" if value is None else value for value in row]
        if any(value != "" for value in values):
            writer.writerow(values)
        else:
            # csv would quote a lone empty field
            buffer.write("," * (len(values) - 1) + "\n")
    return buffer.getvalue().removesuffix("\n")


def _extract_spreadsheet(content: bytes) -> str:
    """Serialize every worksheet to CSV, one block per sheet in workbook order."""
    workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    try:
        text = ""
        for sheet in workbook.worksheets:
            text += _sheet_to_csv(sheet.iter_rows(values_only=True)) + "\n"
        return text
    finally:
        workbook.close()


def _extract_image(content: bytes) -> str:
    with Image.open(io.BytesIO(content)) as image:
        return pytesseract.image_to_string(image, lang=OCR_LANGUAGES)


_BACKENDS: dict[FileKind, Callable[[bytes], str]] = {
    FileKind.WORD: _extract_word,
    FileKind.SPREADSHEET: _extract_spreadsheet,
    FileKind.IMAGE: _extract_image,
}


def extract_text(file: UploadedFile) -> str:
    """Extract plain text from an uploaded attachment.

    PDFs and unrecognized types yield fixed sentinels without touching
    the bytes. Backend failures are converted to an error sentinel
    carrying the exception message.

    Args:
        file: The uploaded attachment.

    Returns:
        Extracted text or a sentinel string.
    """
    kind = classify(file)

    if kind is FileKind.PDF:
        logger.info(f"Skipping PDF extraction for {file.filename!r}")
        return PDF_UNSUPPORTED
    if kind is FileKind.UNSUPPORTED:
        logger.info(f"Unsupported file type for {file.filename!r} ({file.content_type!r})")
        return UNSUPPORTED_FILE_TYPE

    try:
        text = _BACKENDS[kind](file.content)
    except Exception as e:
        logger.warning(f"{kind.value} extraction failed for {file.filename!r}: {e}")
        return EXTRACTION_ERROR_TEMPLATE.format(message=e)

    logger.info(f"Extracted {len(text)} chars from {file.filename!r} via {kind.value}")
    return text
