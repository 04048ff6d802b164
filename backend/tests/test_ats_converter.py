import io

import pdfplumber

from services.ats_converter import (
    clean_text,
    convert_to_ats_pdf,
    convert_to_ats_text,
    converted_filename,
    linearize,
    standard_heading,
)


class TestCleanText:
    def test_table_rows_removed(self):
        assert clean_text("Name | Age | City | Country\nPython developer") == "Python developer"

    def test_decorative_bullets_normalized(self):
        assert clean_text("● Built APIs\n▪ Led team") == "- Built APIs\n- Led team"

    def test_markup_and_images_removed(self):
        assert clean_text("<b>Bold</b> text [image: logo]") == "Bold text"

    def test_column_gap_becomes_newline(self):
        assert clean_text("Python\t\tJava") == "Python\nJava"


class TestHeadings:
    def test_aliases(self):
        assert standard_heading("Work History:") == "WORK EXPERIENCE"
        assert standard_heading("--- Skills ---") == "SKILLS"
        assert standard_heading("Career Objective") == "PROFESSIONAL SUMMARY"
        assert standard_heading("Honors") == "AWARDS & ACHIEVEMENTS"

    def test_prose_is_not_a_heading(self):
        assert standard_heading("Experience building systems at scale") is None
        assert standard_heading("") is None


def test_linearize():
    assert linearize("  a  \n\n\n\n b\n") == "a\n\nb"


def test_convert_to_ats_text():
    raw = "Jane Doe\n\n\n\nsummary\nBackend dev\n   \nexperience\nAcme"
    assert convert_to_ats_text(raw) == (
        "Jane Doe\n\nPROFESSIONAL SUMMARY\n\nBackend dev\n\nWORK EXPERIENCE\n\nAcme"
    )


def test_convert_to_ats_pdf(sample_resume):
    data = convert_to_ats_pdf(sample_resume)
    assert data.startswith(b"%PDF")
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        text = "\n".join(page.extract_text() or "" for page in pdf.pages)
    assert "WORK EXPERIENCE" in text
    assert "Priya Sharma" in text


def test_converted_filename():
    assert converted_filename("My Resume.docx") == "My Resume_ATS_Friendly.pdf"
    assert converted_filename("cv.pdf") == "cv_ATS_Friendly.pdf"
    assert converted_filename(None) == "resume_ATS_Friendly.pdf"
