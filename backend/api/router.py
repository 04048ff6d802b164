import unicodedata
from datetime import datetime, timezone
from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import PlainTextResponse, Response

from api.dependencies import UploadedResume, uploaded_resume
from models.requests import TextScoreRequest
from models.responses import AtsScoreResponse, CoverLetterResponse, EnhanceResponse, HealthResponse
from services import cover_letter, resume_analyzer
from services.ats_converter import convert_to_ats_pdf, converted_filename
from services.gemini_client import GeneratorError
from services.industry_detector import detect_industry
from services.section_parser import parse_resume

router = APIRouter(prefix="/api/v1")


def _content_disposition(filename: str) -> str:
    fallback = unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    fallback = fallback.replace('"', "_").replace("\\", "_") or "resume.pdf"
    return f"attachment; filename=\"{fallback}\"; filename*=utf-8''{quote(filename, safe='')}"


def _pdf_response(pdf: bytes, filename: str) -> Response:
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": _content_disposition(filename)},
    )


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="UP",
        message="ATS Resume Studio backend is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.post("/resume/enhance", response_model=EnhanceResponse)
async def enhance(
    upload: UploadedResume = Depends(uploaded_resume),
    job_description: str = Form(..., alias="jobDescription"),
):
    return resume_analyzer.analyze(upload.text, job_description)


@router.post("/resume/ats-score", response_model=AtsScoreResponse)
async def ats_score(
    upload: UploadedResume = Depends(uploaded_resume),
    job_description: str = Form("", alias="jobDescription"),
):
    return resume_analyzer.score(upload.text, job_description)


@router.post("/resume/test-score", response_model=AtsScoreResponse)
async def test_score(body: TextScoreRequest):
    return resume_analyzer.score(body.resume_text, body.job_description)


@router.post("/resume/ats-convert")
async def ats_convert(upload: UploadedResume = Depends(uploaded_resume)):
    return _pdf_response(convert_to_ats_pdf(upload.text), converted_filename(upload.filename))


@router.post("/resume/enhance-pdf")
async def enhance_pdf(
    upload: UploadedResume = Depends(uploaded_resume),
    job_description: str = Form(..., alias="jobDescription"),
):
    pdf, filename = await resume_analyzer.enhance_to_pdf(upload.text, job_description)
    return _pdf_response(pdf, filename)


@router.post("/test/parse")
async def test_parse(request: Request):
    """Developer endpoint: raw resume text in the body, structured model out."""
    text = (await request.body()).decode("utf-8", errors="replace")
    return parse_resume(text).model_dump(by_alias=True)


@router.get("/test/industry")
async def test_industry(jd: str):
    return {"jobDescription": jd, "detectedIndustry": detect_industry(jd)}


@router.post("/cover-letter/generate", response_model=None)
async def generate_cover_letter(
    upload: UploadedResume = Depends(uploaded_resume),
    job_description: str = Form(..., alias="jobDescription"),
    use_generator: bool = Form(False, alias="useGenerator"),
) -> CoverLetterResponse | PlainTextResponse:
    if use_generator:
        try:
            text = await cover_letter.generate_cover_letter_text(upload.text, job_description)
            return PlainTextResponse(text)
        except GeneratorError as e:
            result = cover_letter.write_cover_letter(upload.text, job_description)
            return CoverLetterResponse(data=result, error=f"AI cover letter unavailable: {e.body}")

    return CoverLetterResponse(data=cover_letter.write_cover_letter(upload.text, job_description))
