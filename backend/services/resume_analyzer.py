"""Orchestrator: resume analysis and rewrite pipeline.

Pipeline (per request, strictly sequential):
1. Keyword match of the resume against the job description
2. Deterministic ATS score (keywords + formatting + sections)
3. Section parsing into a structured resume model
4. Optional Gemini rewrite of the structured model
5. Deterministic rewrite (keywords, summary, bullets, cleanup)
6. PDF rendering
"""

import logging

from pydantic import ValidationError

from config import settings
from models.responses import AtsScoreResponse, EnhanceResponse
from models.resume import ResumeModel
from services import gemini_client, prompt_builder
from services.ats_scorer import score_resume
from services.content_library import get_content_library
from services.industry_detector import detect_industry
from services.keyword_matcher import match_keywords
from services.pdf_renderer import enhanced_filename, render_resume_pdf
from services.resume_rewriter import enhance_resume, is_fresher
from services.section_parser import parse_resume

logger = logging.getLogger(__name__)

AI_UNAVAILABLE = "AI enhancement temporarily unavailable. Original resume data used."
TAILORING_THRESHOLD = 3


def build_suggestions(missing: list[str]) -> list[str]:
    if not missing:
        return ["Excellent keyword alignment! Your resume matches the job description well."]
    suggestions = [f'Add "{keyword}" to your skills or experience section' for keyword in missing]
    if len(missing) > TAILORING_THRESHOLD:
        suggestions.append(
            "Consider tailoring your resume more closely to the job description - "
            f"{len(missing)} key skills are missing"
        )
    return suggestions


def analyze(resume_text: str, job_description: str) -> EnhanceResponse:
    """Keyword match + ATS score with actionable suggestions."""
    report = score_resume(resume_text, job_description)
    skills = report.breakdown.skills
    return EnhanceResponse(
        ats_score=report.overall_score,
        matched_keywords=skills.matched,
        missing_keywords=skills.missing,
        suggestions=build_suggestions(skills.missing),
        section_analysis=report.breakdown,
    )


def score(resume_text: str, job_description: str = "") -> AtsScoreResponse:
    report = score_resume(resume_text, job_description or "")
    return AtsScoreResponse(
        overall_score=report.overall_score,
        keyword_match_score=report.keyword_match_score,
        formatting_score=report.formatting_score,
        section_completeness_score=report.section_completeness_score,
        section_breakdown=report.breakdown,
    )


async def _generator_rewrite(
    model: ResumeModel,
    job_description: str,
    matched: list[str],
    missing: list[str],
) -> ResumeModel:
    """Ask Gemini for a rewritten model. Raises GeneratorError or ValidationError."""
    library = get_content_library()
    industry = detect_industry(job_description)
    fresher = is_fresher(model)

    system_prompt = prompt_builder.build_enhancement_system_prompt(
        industry,
        fresher,
        library.action_verbs(industry),
        library.banned_bullet_starters(),
        library.summary_start_words(),
        library.culturally_specific_fields(),
        library.certifications(industry),
    )
    user_prompt = prompt_builder.build_enhancement_user_prompt(
        model.model_dump_json(
            by_alias=True,
            indent=2,
            exclude={"suggested_certifications", "is_fresher", "enhancement_error"},
        ),
        job_description,
        matched,
        missing,
    )
    raw = await gemini_client.generate_json(system_prompt, user_prompt)
    return ResumeModel.model_validate_json(raw)


async def enhance(resume_text: str, job_description: str) -> ResumeModel:
    """Structured, ATS-optimized rewrite of the resume for the job description."""
    parsed = parse_resume(resume_text)
    match = match_keywords(resume_text, job_description)

    model = parsed
    generator_error = None
    if settings.ai_enhancement_enabled and gemini_client.is_configured():
        try:
            model = await _generator_rewrite(parsed, job_description, match.matched, match.missing)
            logger.info("Gemini rewrite accepted")
        except (gemini_client.GeneratorError, ValidationError) as e:
            logger.warning("Gemini rewrite failed, using parsed resume: %s", e)
            generator_error = AI_UNAVAILABLE

    enhanced = enhance_resume(model, match, job_description)
    if generator_error and not enhanced.enhancement_error:
        enhanced.enhancement_error = generator_error
    return enhanced


async def enhance_to_pdf(resume_text: str, job_description: str) -> tuple[bytes, str]:
    """Enhanced resume rendered as a PDF, with its download filename."""
    enhanced = await enhance(resume_text, job_description)
    pdf = render_resume_pdf(enhanced, enhanced.is_fresher)
    return pdf, enhanced_filename(enhanced.personal_info.full_name)
