"""Convert an arbitrary resume into a plain, single-column ATS-friendly PDF.

No rewriting happens here: the extracted text is cleaned of layout artifacts,
section headers are mapped to standard names, and the result is re-rendered.
"""

import logging
import re
from pathlib import PurePath

from services.pdf_renderer import PdfRenderer

logger = logging.getLogger(__name__)

STANDARD_HEADINGS: dict[str, tuple[str, ...]] = {
    "PROFESSIONAL SUMMARY": (
        "summary", "objective", "profile", "about me", "professional summary", "career objective",
    ),
    "WORK EXPERIENCE": (
        "experience", "work experience", "employment", "professional experience", "work history",
    ),
    "EDUCATION": ("education", "academic", "qualifications", "academic background"),
    "SKILLS": ("skills", "technical skills", "core competencies", "key skills", "proficiencies"),
    "CERTIFICATIONS": ("certifications", "certificates", "licenses", "credentials"),
    "PROJECTS": ("projects", "key projects", "notable projects"),
    "AWARDS & ACHIEVEMENTS": ("awards", "honors", "achievements", "accomplishments"),
    "LANGUAGES": ("languages", "language proficiency"),
    "REFERENCES": ("references",),
}
HEADINGS = frozenset(STANDARD_HEADINGS)

TABLE_ROW_RE = re.compile(r"^.*\|.*\|.*\|.*$", re.MULTILINE)
COLUMN_GAP_RE = re.compile(r"\t{2,}|\s{4,}(?=\S+\s{4,}\S+)")
DECORATIVE_BULLET_RE = re.compile("[•●○▪▫‣⁃]")
IMAGE_REF_RE = re.compile(r"\[image[^\]]*\]|<img[^>]*>", re.IGNORECASE)
HTML_TAG_RE = re.compile(r"<[^>]+>")
BLANK_RUN_RE = re.compile(r"\n{3,}")
HEADER_DECORATION_RE = re.compile(r"^[\-=_*#:]+|[\-=_*#:]+$")


def clean_text(text: str) -> str:
    """Remove table rows, column gaps, decorative bullets, images and markup."""
    text = TABLE_ROW_RE.sub("", text)
    text = COLUMN_GAP_RE.sub("\n", text)
    text = DECORATIVE_BULLET_RE.sub("-", text)
    text = IMAGE_REF_RE.sub("", text)
    text = HTML_TAG_RE.sub("", text)
    text = text.replace("\t", " ")
    text = re.sub(r" {2,}", " ", text)
    text = BLANK_RUN_RE.sub("\n\n", text)
    return text.strip()


def standard_heading(line: str) -> str | None:
    cleaned = HEADER_DECORATION_RE.sub("", line.strip()).strip()
    if not cleaned or len(cleaned) > 50:
        return None
    lower = cleaned.lower()
    for heading, aliases in STANDARD_HEADINGS.items():
        for alias in aliases:
            if lower == alias or lower.startswith(alias + ":"):
                return heading
    return None


def normalize_section_headers(text: str) -> str:
    lines = []
    for line in text.split("\n"):
        heading = standard_heading(line)
        if heading:
            lines += ["", heading, ""]
        else:
            lines.append(line)
    return "\n".join(lines).strip()


def linearize(text: str) -> str:
    """Trim every line and keep at most one blank line between blocks."""
    lines: list[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if stripped:
            lines.append(stripped)
        elif lines and lines[-1]:
            lines.append("")
    return "\n".join(lines).strip()


def convert_to_ats_text(raw_text: str) -> str:
    return linearize(normalize_section_headers(clean_text(raw_text)))


def convert_to_ats_pdf(raw_text: str, renderer: PdfRenderer | None = None) -> bytes:
    text = convert_to_ats_text(raw_text)
    logger.info("Converted resume to ATS text (%d chars)", len(text))
    return (renderer or PdfRenderer()).render_text(text.split("\n"), headings=HEADINGS)


def converted_filename(original: str | None) -> str:
    """``resume.docx`` -> ``resume_ATS_Friendly.pdf``."""
    base = PurePath(original or "").stem or "resume"
    return f"{base}_ATS_Friendly.pdf"
