"""Catalog-driven keyword matching between a resume and a job description.

Keywords are extracted from the job description in two passes (greedy
multi-word aliases first, then single tokens), resolved to canonical skills,
and looked up in the resume with whole-word boundaries so that "java" never
matches inside "javascript".
"""

import logging
import math
import re
from functools import lru_cache

from models.responses import MatchResult
from services.keyword_catalog import KeywordCatalog, get_catalog

logger = logging.getLogger(__name__)

STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "is", "are", "was", "were", "be", "been",
    "being", "have", "has", "had", "do", "does", "did", "will", "would",
    "could", "should", "may", "might", "shall", "can", "need", "must",
    "we", "you", "he", "she", "it", "they", "i", "me", "my", "your",
    "our", "their", "this", "that", "these", "those", "not", "no",
    "if", "then", "than", "so", "as", "up", "out", "about", "into",
    "over", "after", "before", "between", "through", "during", "above",
    "below", "such", "each", "every", "all", "any", "both", "few",
    "more", "most", "other", "some", "only", "own", "same", "also",
    "just", "very", "well", "how", "what", "which", "who", "whom",
    "when", "where", "why", "able", "etc",
    "experience", "years", "year", "work", "working", "role", "team",
    "strong", "good", "excellent", "preferred", "required", "minimum",
    "plus", "including", "using", "knowledge", "understanding",
    "ability", "skills", "skill", "proficiency", "proficient",
    "familiar", "familiarity", "exposure",
    "looking", "seeking", "hiring", "join", "ideal", "candidate",
    "responsible", "responsibilities", "opportunity", "position",
    "company", "organization", "department", "apply", "application",
    "benefits", "salary", "compensation", "remote", "hybrid",
    "onsite", "full-time", "part-time", "contract", "description",
    "qualification", "qualifications", "requirement", "requirements",
    "deadline", "location", "based", "environment",
    "junior", "senior", "lead", "principal", "staff", "intern",
    "manager", "director", "associate", "analyst", "specialist",
    "engineer", "developer", "architect", "consultant", "coordinator",
    "officer", "executive", "administrator", "supervisor",
})

_TOKEN_SPLIT_RE = re.compile(r"[\s,;|()\[\]{}]+")
_EDGE_NOISE_RE = re.compile(r"^[^A-Za-z0-9.#+\-/]+|[^A-Za-z0-9.#+\-/]+$")


@lru_cache(maxsize=None)
def _boundary_pattern(form: str) -> re.Pattern:
    return re.compile(rf"(?<![a-zA-Z0-9]){re.escape(form)}(?![a-zA-Z0-9])", re.IGNORECASE)


def contains_whole_word(text: str, form: str) -> bool:
    """True if ``form`` occurs in ``text`` bracketed by non-alphanumerics.

    Works for forms containing symbols such as "c++", "c#", "ci/cd", ".net".
    """
    if not form or form.lower() not in text.lower():
        return False
    return _boundary_pattern(form.lower()).search(text) is not None


def clean_token(word: str) -> str:
    cleaned = _EDGE_NOISE_RE.sub("", word).strip()
    if cleaned.endswith("."):
        cleaned = cleaned[:-1]
    return cleaned


def choose_display_name(canonical: str, source_alias: str, catalog: KeywordCatalog) -> str:
    """Prefer the registered casing of the matched alias when it is not longer
    than the canonical name ("aws" -> "AWS", "kafka" -> "Kafka")."""
    registered = catalog.display_form_of(source_alias)
    if registered is not None and len(registered) <= len(canonical):
        return registered
    return canonical


def extract_keywords(text: str, catalog: KeywordCatalog | None = None) -> dict[str, str]:
    """Return recognized skills in ``text`` as an ordered canonical -> display map."""
    catalog = catalog or get_catalog()
    keywords: dict[str, str] = {}
    consumed: list[str] = []
    text_lower = text.lower()

    # Pass 1: greedy multi-word aliases, longest first
    for alias in catalog.multi_word_skills():
        if alias not in text_lower:
            continue
        canonical = catalog.canonical_of(alias)
        if canonical is not None and canonical not in keywords:
            keywords[canonical] = choose_display_name(canonical, alias, catalog)
            consumed.append(alias)

    # Pass 2: single tokens
    for word in _TOKEN_SPLIT_RE.split(text):
        cleaned = clean_token(word)
        lower = cleaned.lower()
        if len(cleaned) < 2 or lower in STOP_WORDS:
            continue
        if not catalog.is_known_skill(cleaned):
            continue
        canonical = catalog.canonical_of(cleaned)
        if canonical is None or canonical in keywords:
            continue
        if any(lower in alias for alias in consumed):
            continue
        keywords[canonical] = choose_display_name(canonical, cleaned, catalog)

    return keywords


def is_keyword_in_resume(canonical: str, resume_lower: str, catalog: KeywordCatalog | None = None) -> bool:
    catalog = catalog or get_catalog()
    forms = set(catalog.all_forms_of(canonical))
    forms.add(canonical.lower())
    return any(contains_whole_word(resume_lower, form) for form in forms)


def round_half_up(value: float, digits: int = 1) -> float:
    """Round half away from zero for non-negative values (0.05 -> 0.1)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def match_keywords(
    resume_text: str,
    job_description: str,
    catalog: KeywordCatalog | None = None,
) -> MatchResult:
    """Compare the skills a job description asks for against a resume."""
    catalog = catalog or get_catalog()
    jd_keywords = extract_keywords(job_description, catalog)
    resume_lower = resume_text.lower()

    matched: list[str] = []
    missing: list[str] = []
    for canonical, display in jd_keywords.items():
        if is_keyword_in_resume(canonical, resume_lower, catalog):
            matched.append(display)
        else:
            missing.append(display)

    percentage = 0.0
    if jd_keywords:
        percentage = round_half_up(len(matched) / len(jd_keywords) * 100.0)

    logger.debug("Keyword match: %d matched, %d missing", len(matched), len(missing))
    return MatchResult(matched=matched, missing=missing, match_percentage=percentage)
