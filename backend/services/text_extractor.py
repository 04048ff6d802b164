"""Plain-text extraction from uploaded PDF and DOCX resumes."""

import io
import logging
from pathlib import PurePath

import pdfplumber
from docx import Document

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".pdf", ".docx")


class UnsupportedFileTypeError(ValueError):
    """The upload is not a PDF or DOCX file."""


class ExtractionError(RuntimeError):
    """The document could not be parsed."""


def file_suffix(filename: str | None) -> str:
    if not filename:
        return ""
    return PurePath(filename).suffix.lower()


def is_supported(filename: str | None) -> bool:
    return file_suffix(filename) in SUPPORTED_SUFFIXES


def extract_text_pdf(pdf_bytes: bytes) -> str:
    """Extract all text from a PDF file."""
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages).strip()


def extract_text_docx(docx_bytes: bytes) -> str:
    """Extract all paragraph text from a DOCX file."""
    doc = Document(io.BytesIO(docx_bytes))
    return "\n".join(p.text for p in doc.paragraphs).strip()


def extract_text(data: bytes, filename: str | None) -> str:
    """Dispatch on the filename suffix and return the document's plain text.

    Raises UnsupportedFileTypeError for anything but .pdf/.docx and
    ExtractionError when the parser itself fails.
    """
    suffix = file_suffix(filename)
    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedFileTypeError(
            f"Unsupported file type: {filename or '<none>'}. Only PDF and DOCX files are accepted."
        )

    logger.info("Extracting text from %s (%d bytes)", filename, len(data))
    try:
        if suffix == ".pdf":
            text = extract_text_pdf(data)
        else:
            text = extract_text_docx(data)
    except Exception as e:
        logger.error("Failed to extract text from %s: %s", filename, e)
        raise ExtractionError(f"Failed to extract text from {filename}: {e}") from e

    logger.info("Extracted %d characters from %s", len(text), filename)
    return text
