import io
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ("pdf", "docx")


class ExtractionError(Exception):
    """Base class for document text extraction failures."""


class UnsupportedFileType(ExtractionError):
    pass


class EmptyExtraction(ExtractionError):
    pass


class UnreadableDocument(ExtractionError):
    pass


# ---------------------------
# File type handling
# ---------------------------
def normalize_extension(file_name: Optional[str], file_type: Optional[str] = None) -> str:
    """
    Extension from the file name (text after the last dot), lowercased.
    Falls back to the declared file type when the name carries no extension.
    """
    name = (file_name or "").strip()
    if "." in name:
        suffix = name.rsplit(".", 1)[1].strip().lower()
        if suffix:
            return suffix
    return (file_type or "").strip().lstrip(".").lower()


def ensure_supported(extension: Optional[str]) -> str:
    ext = (extension or "").strip().lstrip(".").lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileType(
            f"Unsupported file type {ext or '(none)'!r}. Please upload a PDF or DOCX resume."
        )
    return ext


# ---------------------------
# Text extraction
# ---------------------------
def extract_text_from_pdf_bytes(data: bytes) -> str:
    import pdfplumber

    pages: List[str] = []
    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            for page in pdf.pages:
                pages.append(page.extract_text() or "")
    except Exception as e:
        raise UnreadableDocument(f"Could not read PDF document: {e}") from e
    return "\n".join(pages)


def extract_text_from_docx_bytes(data: bytes) -> str:
    from docx import Document

    try:
        doc = Document(io.BytesIO(data))
    except Exception as e:
        raise UnreadableDocument(f"Could not read DOCX document: {e}") from e

    lines = [p.text for p in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            cells = [c.text.strip() for c in row.cells if c.text and c.text.strip()]
            if cells:
                lines.append(" | ".join(cells))
    return "\n".join(lines)


_EXTRACTORS = {
    "pdf": extract_text_from_pdf_bytes,
    "docx": extract_text_from_docx_bytes,
}


def extract_text(data: bytes, extension: str) -> str:
    """Plain text of a PDF or DOCX document given as raw bytes."""
    ext = ensure_supported(extension)
    text = _EXTRACTORS[ext](data)
    if not text.strip():
        raise EmptyExtraction("Could not extract text from resume")
    logger.debug("Extracted %d chars from %s document", len(text), ext)
    return text
