"""Text extraction for uploaded attachments.

Turns each attachment into plain text for prompt assembly.

Responsibilities:
    - Word documents via python-docx
    - Excel workbooks via openpyxl, one CSV block per sheet
    - Images via Tesseract OCR (Japanese + English)
    - Placeholder sentinels for PDFs, unknown types and backend failures

Extraction never raises; the sentinel text is the error channel.
"""

from contract_review.parsing.extractor import (
    EXTRACTION_ERROR_TEMPLATE,
    PDF_UNSUPPORTED,
    UNSUPPORTED_FILE_TYPE,
    FileKind,
    classify,
    extract_text,
)

__all__ = [
    "EXTRACTION_ERROR_TEMPLATE",
    "PDF_UNSUPPORTED",
    "UNSUPPORTED_FILE_TYPE",
    "FileKind",
    "classify",
    "extract_text",
]
