import io

import pdfplumber

from models.resume import PersonalInfo, ResumeModel
from services.pdf_renderer import (
    PdfRenderer,
    RenderSettings,
    enhanced_filename,
    get_render_settings,
    render_resume_pdf,
    resume_filename,
)
from services.section_parser import parse_resume


def pdf_text(data: bytes) -> str:
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        return "\n".join(page.extract_text() or "" for page in pdf.pages)


def test_settings_loaded_from_config():
    settings = get_render_settings()
    assert settings.page_size == "A4"
    assert settings.heading("skills") == "TECHNICAL SKILLS"
    assert settings.section_order(True)[:2] == ("summary", "education")
    assert settings.size("candidateName") == 18


def test_settings_defaults():
    settings = RenderSettings.from_dict({})
    assert settings.heading("projects") == "PROJECTS"
    assert settings.margins["left"] == 42


def test_render_experienced_order(sample_resume):
    data = render_resume_pdf(parse_resume(sample_resume), is_fresher=False)
    assert data.startswith(b"%PDF")
    text = pdf_text(data)
    assert "Priya Sharma" in text
    assert text.index("TECHNICAL SKILLS") < text.index("WORK EXPERIENCE") < text.index("EDUCATION")


def test_render_fresher_order(sample_resume):
    text = pdf_text(render_resume_pdf(parse_resume(sample_resume), is_fresher=True))
    assert text.index("EDUCATION") < text.index("TECHNICAL SKILLS") < text.index("WORK EXPERIENCE")


def test_empty_sections_skipped():
    model = ResumeModel(personal_info=PersonalInfo(full_name="Jane Doe"), summary="Backend developer.")
    text = pdf_text(PdfRenderer().render(model, is_fresher=True))
    assert "PROFESSIONAL SUMMARY" in text
    assert "WORK EXPERIENCE" not in text
    assert "ACHIEVEMENTS" not in text


def test_empty_model_still_renders():
    assert PdfRenderer().render(ResumeModel(), is_fresher=True).startswith(b"%PDF")


def test_render_text_escapes_markup():
    data = PdfRenderer().render_text(["SKILLS", "", "Python & Go <fast>"], headings={"SKILLS"})
    text = pdf_text(data)
    assert "SKILLS" in text
    assert "Python & Go <fast>" in text


class TestFilenames:
    def test_first_and_last(self):
        assert resume_filename("Priya Sharma") == "Priya_Sharma_Resume.pdf"
        assert resume_filename("Mary Ann O'Neil") == "Mary_ONeil_Resume.pdf"

    def test_single_name(self):
        assert resume_filename("Cher") == "Cher_Resume.pdf"

    def test_no_name(self):
        assert resume_filename("") == "Candidate_Resume.pdf"

    def test_enhanced(self):
        assert enhanced_filename("Priya  Sharma") == "Priya_Sharma_Enhanced_Resume.pdf"
        assert enhanced_filename("") == "User_Enhanced_Resume.pdf"
