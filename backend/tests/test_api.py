from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from config import settings
from conftest import SAMPLE_JD, SAMPLE_RESUME, make_docx, make_pdf
from main import app
from services.gemini_client import GeneratorError

client = TestClient(app)

DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _docx_upload(name: str = "resume.docx") -> dict:
    return {"resume": (name, make_docx(SAMPLE_RESUME), DOCX_TYPE)}


def test_health():
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "UP"
    assert data["message"]
    assert data["timestamp"]


def test_test_score_camel_case():
    response = client.post(
        "/api/v1/resume/test-score",
        json={"resumeText": SAMPLE_RESUME, "jobDescription": SAMPLE_JD},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    for key in ("overallScore", "keywordMatchScore", "formattingScore", "sectionCompletenessScore"):
        assert key in data
    assert "sectionCompleteness" in data["sectionBreakdown"]


def test_enhance_with_docx():
    response = client.post("/api/v1/resume/enhance", files=_docx_upload(), data={"jobDescription": SAMPLE_JD})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert "Python" in data["matchedKeywords"]
    assert "Kubernetes" in data["missingKeywords"]
    assert data["suggestions"]
    assert set(data["sectionAnalysis"]) == {"skills", "experience", "formatting", "sectionCompleteness"}


def test_ats_score_without_job_description():
    response = client.post("/api/v1/resume/ats-score", files=_docx_upload())
    assert response.status_code == 200
    assert response.json()["keywordMatchScore"] == 0.0


def test_unsupported_file_type():
    response = client.post(
        "/api/v1/resume/enhance",
        files={"resume": ("resume.txt", b"plain text", "text/plain")},
        data={"jobDescription": SAMPLE_JD},
    )
    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["error"]["code"] == "INVALID_FILE_TYPE"


def test_missing_resume():
    response = client.post("/api/v1/resume/enhance", data={"jobDescription": SAMPLE_JD})
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "MISSING_PARAMETER"
    assert error["message"] == "Required parameter 'resume' is missing. Please upload a resume file."


def test_missing_job_description():
    response = client.post("/api/v1/resume/enhance", files=_docx_upload())
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Required parameter 'jobDescription' is missing."


def test_file_too_large():
    with patch.object(settings, "max_upload_size_mb", 0):
        response = client.post("/api/v1/resume/ats-score", files=_docx_upload())
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "FILE_TOO_LARGE"
    assert error["message"] == "File size exceeds the maximum allowed limit of 0MB."


def test_corrupt_pdf_is_processing_error():
    response = client.post(
        "/api/v1/resume/ats-score",
        files={"resume": ("resume.pdf", b"not really a pdf", "application/pdf")},
    )
    assert response.status_code == 500
    assert response.json()["error"]["code"] == "PROCESSING_ERROR"


def test_ats_convert():
    response = client.post(
        "/api/v1/resume/ats-convert",
        files={"resume": ("resume.pdf", make_pdf(SAMPLE_RESUME), "application/pdf")},
    )
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="resume_ATS_Friendly.pdf"' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_enhance_pdf():
    with patch.object(settings, "ai_enhancement_enabled", False):
        response = client.post(
            "/api/v1/resume/enhance-pdf", files=_docx_upload(), data={"jobDescription": SAMPLE_JD}
        )
    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")
    assert 'filename="Priya_Sharma_Enhanced_Resume.pdf"' in response.headers["content-disposition"]


def test_enhance_pdf_with_non_latin1_name():
    resume = SAMPLE_RESUME.replace("Priya Sharma\n", "Priya Śharma\n", 1)
    files = {"resume": ("resume.docx", make_docx(resume), DOCX_TYPE)}
    with patch.object(settings, "ai_enhancement_enabled", False):
        response = client.post("/api/v1/resume/enhance-pdf", files=files, data={"jobDescription": SAMPLE_JD})
    assert response.status_code == 200
    disposition = response.headers["content-disposition"]
    assert 'filename="Priya_Sharma_Enhanced_Resume.pdf"' in disposition
    assert "filename*=utf-8''Priya_%C5%9Aharma_Enhanced_Resume.pdf" in disposition


def test_ats_convert_with_non_latin1_filename():
    response = client.post(
        "/api/v1/resume/ats-convert",
        files={"resume": ("résumé–final.pdf", make_pdf(SAMPLE_RESUME), "application/pdf")},
    )
    assert response.status_code == 200
    disposition = response.headers["content-disposition"]
    assert 'filename="resumefinal_ATS_Friendly.pdf"' in disposition
    assert "filename*=utf-8''r%C3%A9sum%C3%A9%E2%80%93final_ATS_Friendly.pdf" in disposition


class TestCoverLetter:
    def test_template_letter(self):
        response = client.post(
            "/api/v1/cover-letter/generate", files=_docx_upload(), data={"jobDescription": SAMPLE_JD}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["error"] is None
        assert data["data"]["candidateName"] == "Priya Sharma"
        assert data["data"]["companyName"] == "Finlytics"
        assert "Dear Hiring Manager," in data["data"]["coverLetterText"]

    def test_generator_text(self):
        generated = AsyncMock(return_value="Dear Hiring Manager,\nGenerated.")
        with patch("services.cover_letter.generate_cover_letter_text", new=generated):
            response = client.post(
                "/api/v1/cover-letter/generate",
                files=_docx_upload(),
                data={"jobDescription": SAMPLE_JD, "useGenerator": "true"},
            )
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Dear Hiring Manager,\nGenerated."

    def test_generator_unavailable_falls_back(self):
        with patch.object(settings, "gemini_api_key", ""):
            response = client.post(
                "/api/v1/cover-letter/generate",
                files=_docx_upload(),
                data={"jobDescription": SAMPLE_JD, "useGenerator": "true"},
            )
        assert response.status_code == 200
        data = response.json()
        assert data["error"].startswith("AI cover letter unavailable:")
        assert data["data"]["candidateName"] == "Priya Sharma"

    def test_generator_timeout_falls_back(self):
        timeout = AsyncMock(side_effect=GeneratorError(None, "timed out"))
        with patch("services.cover_letter.generate_cover_letter_text", new=timeout):
            response = client.post(
                "/api/v1/cover-letter/generate",
                files=_docx_upload(),
                data={"jobDescription": SAMPLE_JD, "useGenerator": "true"},
            )
        assert response.status_code == 200
        data = response.json()
        assert data["error"] == "AI cover letter unavailable: timed out"
        assert data["data"]["companyName"] == "Finlytics"


def test_parse_endpoint():
    response = client.post("/api/v1/test/parse", content=SAMPLE_RESUME.encode("utf-8"))
    assert response.status_code == 200
    data = response.json()
    assert data["personalInfo"]["fullName"] == "Priya Sharma"
    assert data["experience"][0]["company"] == "Acme Technologies"


def test_industry_endpoint():
    response = client.get("/api/v1/test/industry", params={"jd": "Figma wireframe prototype"})
    assert response.status_code == 200
    assert response.json() == {"jobDescription": "Figma wireframe prototype", "detectedIndustry": "UI_UX_Design"}
