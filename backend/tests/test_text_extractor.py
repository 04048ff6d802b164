import pytest

from conftest import SAMPLE_RESUME, make_docx, make_pdf
from services.text_extractor import (
    ExtractionError,
    UnsupportedFileTypeError,
    extract_text,
    file_suffix,
    is_supported,
)


def test_extract_pdf():
    text = extract_text(make_pdf("Priya Sharma\nPython developer"), "resume.pdf")
    assert "Priya Sharma" in text
    assert "Python developer" in text


def test_extract_docx():
    text = extract_text(make_docx(SAMPLE_RESUME), "Resume.DOCX")
    assert text.startswith("Priya Sharma")
    assert "Work Experience" in text


def test_unsupported_suffix():
    with pytest.raises(UnsupportedFileTypeError):
        extract_text(b"plain text", "resume.txt")


def test_missing_filename():
    with pytest.raises(UnsupportedFileTypeError):
        extract_text(b"%PDF-1.4", None)


def test_corrupt_pdf():
    with pytest.raises(ExtractionError):
        extract_text(b"this is not a pdf", "resume.pdf")


def test_corrupt_docx():
    with pytest.raises(ExtractionError):
        extract_text(b"this is not a docx", "resume.docx")


def test_suffix_helpers():
    assert file_suffix("a/b/CV.Pdf") == ".pdf"
    assert file_suffix("") == ""
    assert is_supported("cv.docx")
    assert not is_supported("cv.doc")
