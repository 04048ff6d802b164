"""Deterministic ATS scoring.

overall = 0.50 * keyword match + 0.25 * formatting + 0.25 * section completeness,
rounded half-up and clamped to 0-100.
"""

import logging
import re

from models.responses import (
    ExperienceBreakdown,
    FormattingBreakdown,
    ScoreBreakdown,
    ScoreReport,
    SectionCompletenessBreakdown,
    SkillsBreakdown,
)
from services.keyword_catalog import KeywordCatalog, get_catalog
from services.keyword_matcher import match_keywords, round_half_up

logger = logging.getLogger(__name__)

W_KEYWORD = 0.50
W_FORMATTING = 0.25
W_SECTIONS = 0.25

EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}")
PHONE_RE = re.compile(r"(\+?\d{1,3}[\s\-]?)?(\(?\d{2,4}\)?[\s\-]?)?\d{3,5}[\s\-]?\d{3,5}")

COLUMN_CHARS = frozenset("║│┃─┌┐└┘├┤┬┴┼╔╗╚╝╠╣╦╩╬")
TABLE_MARKERS = ("<table", "\\begin{tabular", "\t\t\t")
IMAGE_MARKERS = ("<img", "<image", "[image", ".png", ".jpg", ".jpeg")
MIN_WORDS = 100

SCORED_SECTIONS = ("contact", "summary", "experience", "education", "skills", "certifications", "projects")

# Points per section; contact is split 5/5/5 across header, email and phone
SECTION_POINTS = {
    "Summary": 15,
    "Experience": 25,
    "Education": 20,
    "Skills": 20,
}
BONUS_POINTS = 5


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _to_int(value: float) -> int:
    return int(round_half_up(value, 0))


def _has_table(lower: str) -> bool:
    return any(marker in lower for marker in TABLE_MARKERS)


def _has_column_chars(text: str) -> bool:
    return any(ch in COLUMN_CHARS for ch in text)


def _has_images(lower: str) -> bool:
    return any(marker in lower for marker in IMAGE_MARKERS)


def word_count(text: str) -> int:
    return len(text.split())


def compute_formatting_score(resume_text: str) -> float:
    lower = resume_text.lower()
    score = 100.0
    if _has_table(lower):
        score -= 20
    if _has_column_chars(resume_text):
        score -= 15
    if _has_images(lower):
        score -= 15
    if word_count(resume_text) < MIN_WORDS:
        score -= 20
    return _clamp(score)


def detect_formatting_issues(resume_text: str) -> list[str]:
    lower = resume_text.lower()
    issues = []
    if _has_table(lower):
        issues.append("Table-based layout detected — most ATS parsers cannot read tables")
    if _has_column_chars(resume_text):
        issues.append("Column or box-drawing characters found — indicates multi-column layout")
    if _has_images(lower):
        issues.append("Image references found — ATS cannot parse images")
    words = word_count(resume_text)
    if words < MIN_WORDS:
        issues.append(f"Resume is very short ({words} words) — aim for at least 200–400 words")
    return issues


def formatting_feedback(issues: list[str], score: float) -> str:
    if not issues:
        return "Clean, ATS-friendly formatting"
    if score >= 80:
        return "Minor formatting concerns detected"
    if score >= 50:
        return f"Formatting needs improvement — {len(issues)} issue(s) found"
    return "Significant formatting problems — remove tables, images, and complex layouts"


def _line_is_header(line: str, alias: str) -> bool:
    if line in (alias, alias + ":", alias + " :"):
        return True
    return line.startswith(alias) and len(line) > len(alias) and not line[len(alias)].isalnum()


def detect_sections(resume_text: str, catalog: KeywordCatalog | None = None) -> dict[str, bool]:
    """Line-based section presence, keyed by display name ("Contact", "Skills", ...).

    Contact also counts as present when an email or phone number appears anywhere.
    """
    catalog = catalog or get_catalog()
    headers = catalog.section_headers()
    lines = [line.strip() for line in re.split(r"\r?\n", resume_text.lower())]
    lines = [line for line in lines if line]

    presence: dict[str, bool] = {}
    for section in SCORED_SECTIONS:
        aliases = headers.get(section, ())
        found = any(_line_is_header(line, alias) for line in lines for alias in aliases)
        if section == "contact" and not found:
            found = bool(EMAIL_RE.search(resume_text) or PHONE_RE.search(resume_text))
        presence[section.capitalize()] = found
    return presence


def compute_section_score(resume_text: str, presence: dict[str, bool]) -> float:
    has_contact = presence.get("Contact", False)
    has_email = EMAIL_RE.search(resume_text) is not None
    has_phone = PHONE_RE.search(resume_text) is not None

    score = 0.0
    if has_contact:
        score += 5
    if has_email:
        score += 5
    if has_phone:
        score += 5
    for section, points in SECTION_POINTS.items():
        if presence.get(section, False):
            score += points
    if presence.get("Certifications", False) or presence.get("Projects", False):
        score += BONUS_POINTS
    return _clamp(score)


def section_feedback(resume_text: str, presence: dict[str, bool]) -> str:
    missing = []
    contact_ok = (
        presence.get("Contact", False)
        or EMAIL_RE.search(resume_text) is not None
        or PHONE_RE.search(resume_text) is not None
    )
    if not contact_ok:
        missing.append("Contact Info")
    if not presence.get("Summary", False):
        missing.append("Summary/Objective")
    for section in ("Experience", "Education", "Skills"):
        if not presence.get(section, False):
            missing.append(section)
    if not missing:
        return "All essential sections present"
    return "Missing sections: " + ", ".join(missing)


def score_resume(
    resume_text: str,
    job_description: str,
    catalog: KeywordCatalog | None = None,
) -> ScoreReport:
    """Score resume text against a job description."""
    catalog = catalog or get_catalog()

    match = match_keywords(resume_text, job_description, catalog)
    keyword_score = match.match_percentage

    formatting_score = compute_formatting_score(resume_text)
    issues = detect_formatting_issues(resume_text)

    presence = detect_sections(resume_text, catalog)
    section_score = compute_section_score(resume_text, presence)

    raw = W_KEYWORD * keyword_score + W_FORMATTING * formatting_score + W_SECTIONS * section_score
    overall = int(_clamp(_to_int(raw)))

    has_experience = presence.get("Experience", False)
    breakdown = ScoreBreakdown(
        skills=SkillsBreakdown(
            score=_to_int(keyword_score),
            matched=match.matched,
            missing=match.missing,
            feedback=(
                "Great keyword alignment with the job description"
                if not match.missing
                else f"Missing {len(match.missing)} key skill(s) from the job description"
            ),
        ),
        experience=ExperienceBreakdown(
            score=max(60, _to_int(keyword_score * 0.9)) if has_experience else 20,
            feedback=(
                "Experience section detected"
                if has_experience
                else "Experience section missing — this is critical for ATS"
            ),
        ),
        formatting=FormattingBreakdown(
            score=_to_int(formatting_score),
            issues=issues,
            feedback=formatting_feedback(issues, formatting_score),
        ),
        section_completeness=SectionCompletenessBreakdown(
            score=_to_int(section_score),
            sections=presence,
            feedback=section_feedback(resume_text, presence),
        ),
    )

    logger.info(
        "ATS score %d (keywords=%.1f, formatting=%.1f, sections=%.1f)",
        overall, keyword_score, formatting_score, section_score,
    )
    return ScoreReport(
        overall_score=overall,
        keyword_match_score=round_half_up(keyword_score),
        formatting_score=round_half_up(formatting_score),
        section_completeness_score=round_half_up(section_score),
        breakdown=breakdown,
    )
