"""Deterministic resume rewrite.

Takes a parsed resume plus the keyword match for a job description and
returns an improved copy:

1. detect the industry of the job description
2. classify the candidate as fresher (< 2 years) or experienced
3. add missing hard-skill keywords to the skills section
4. clean up or synthesize the summary
5. rewrite bullets to open with an action verb
6. strip culturally-specific personal fields and the declaration
7. make sure the essential sections exist
8. suggest certifications when none are listed

The input model is never mutated. If a step fails, the last good version is
returned with ``enhancement_error`` set.
"""

import datetime
import logging
import re

from models.responses import MatchResult
from models.resume import EducationEntry, PersonalInfo, ResumeModel
from services.content_library import ContentLibrary, get_content_library
from services.industry_detector import detect_industry
from services.keyword_catalog import KeywordCatalog, get_catalog
from services.section_parser import OPEN_ENDED, YEAR_RANGE_RE

logger = logging.getLogger(__name__)

FRESHER_MAX_YEARS = 2
SUMMARY_MAX_WORDS = 60
BULLET_MAX_CHARS = 120
MAX_SUGGESTED_CERTIFICATIONS = 3
FALLBACK_CATEGORY = "Additional Skills"
SYNTHESIZED_CATEGORY = "Technical Skills"
ENHANCEMENT_FAILED = "Resume enhancement partially failed. Best available version returned."

SOFT_SKILLS = frozenset({
    "communication", "communication skills", "leadership", "teamwork", "team work",
    "team player", "problem solving", "problem-solving", "time management",
    "critical thinking", "collaboration", "adaptability", "interpersonal skills",
    "creativity", "work ethic", "attention to detail", "self-motivated",
    "multitasking", "presentation skills", "negotiation", "decision making",
})

CATEGORY_HINTS: tuple[tuple[str, frozenset[str]], ...] = (
    ("Programming Languages", frozenset({
        "java", "python", "javascript", "typescript", "c++", "c#", "golang", "rust",
        "kotlin", "swift", "php", "ruby", "scala", "matlab", "perl", "dart", "sql",
        "bash", "powershell", "objective-c", "vb.net",
    })),
    ("Frameworks", frozenset({
        "react", "angular", "vue.js", "next.js", "node.js", "express.js", "django",
        "flask", "fastapi", "spring boot", "spring mvc", "hibernate", ".net", "asp.net",
        "laravel", "ruby on rails", "flutter", "react native", "jquery", "bootstrap",
        "tailwind css", "redux", "graphql", "tensorflow", "pytorch", "keras", "scikit-learn",
    })),
    ("Databases", frozenset({
        "mysql", "postgresql", "mongodb", "oracle", "sql server", "microsoft sql server",
        "sqlite", "redis", "cassandra", "dynamodb", "elasticsearch", "firebase",
        "mariadb", "snowflake",
    })),
    ("Cloud & DevOps", frozenset({
        "aws", "amazon web services", "azure", "microsoft azure", "gcp",
        "google cloud platform", "docker", "kubernetes", "jenkins", "terraform",
        "ansible", "ci/cd", "continuous deployment", "github actions", "gitlab ci",
        "linux", "nginx", "microservices", "serverless", "helm", "prometheus",
        "grafana", "openshift",
    })),
    ("Tools", frozenset({
        "git", "github", "gitlab", "bitbucket", "jira", "confluence", "postman",
        "maven", "gradle", "webpack", "selenium", "junit", "pytest", "jest", "figma",
        "photoshop", "illustrator", "autocad", "solidworks", "catia", "ansys",
        "staad pro", "revit", "tableau", "power bi", "excel", "airflow",
    })),
)

CULTURALLY_SPECIFIC_FIELDS = frozenset({
    "dateOfBirth", "dob", "date_of_birth", "gender", "sex", "maritalStatus",
    "marital_status", "fatherName", "father_name", "fathersName", "nationality",
    "passportNumber", "passport", "photo", "photograph", "declaration",
})

_SENIORITY = r"(?:senior|junior|lead|principal|staff|associate|sr\.?|jr\.?)"
_AREA = (
    r"(?:full[\s-]?stack|front[\s-]?end|back[\s-]?end|software|data|web|mobile|cloud|devops|"
    r"machine\s+learning|ml|ai|java|python|react|node(?:\.js)?|\.net|qa|test|automation|"
    r"mechanical|civil|structural|site|electrical|electronics|embedded|firmware|hardware|"
    r"ui/ux|ux|ui|product|graphic|visual|motion|digital\s+marketing|marketing|seo|content|"
    r"clinical|quality|research|business|systems?|network|security|platform|site\s+reliability)"
)
_TITLE = (
    r"(?:engineer|developer|architect|analyst|designer|scientist|manager|consultant|"
    r"specialist|administrator|executive|programmer|pharmacist|artist|animator|strategist|marketer)"
)
ROLE_PATTERNS = (
    re.compile(rf"\b((?:{_SENIORITY}\s+)?(?:{_AREA}\s+){{1,2}}{_TITLE})\b", re.IGNORECASE),
    re.compile(rf"\b((?:{_SENIORITY}\s+)?{_TITLE})\b", re.IGNORECASE),
    re.compile(r"\b(pharmacist|data scientist|intern)\b", re.IGNORECASE),
)

_PLACEHOLDER_RE = re.compile(r"\{[^{}]*\}")
_WORD_RE = re.compile(r"[A-Za-z][A-Za-z'\-]*")
_LEADING_NOISE_RE = re.compile(r"^[\s,;:.\-–—•*]+")


# --- classification ---


def experience_years(model: ResumeModel, current_year: int | None = None) -> int:
    """Sum of (end year - start year) over experience entries with a date range."""
    current_year = current_year or datetime.date.today().year
    total = 0
    for job in model.experience or []:
        match = YEAR_RANGE_RE.search(job.dates or "")
        if not match:
            continue
        start = int(match.group(1))
        end_raw = match.group(2).lower()
        end = current_year if " ".join(end_raw.split()) in OPEN_ENDED else int(end_raw)
        total += max(0, end - start)
    return total


def is_fresher(model: ResumeModel, current_year: int | None = None) -> bool:
    if not model.experience:
        return True
    return experience_years(model, current_year) < FRESHER_MAX_YEARS


# --- skills ---


def _split_skills(values: str) -> list[str]:
    return [v.strip() for v in values.split(",") if v.strip()]


def _category_words(name: str) -> set[str]:
    return {w for w in re.split(r"[^a-z0-9+#]+", name.lower()) if w and w != "and"}


def categories_similar(a: str, b: str) -> bool:
    a_lower, b_lower = a.lower().strip(), b.lower().strip()
    if not a_lower or not b_lower:
        return False
    if a_lower in b_lower or b_lower in a_lower:
        return True
    return bool(_category_words(a_lower) & _category_words(b_lower))


def hinted_category(keyword: str, catalog: KeywordCatalog) -> str | None:
    candidates = {keyword.lower()}
    canonical = catalog.canonical_of(keyword)
    if canonical:
        candidates.add(canonical.lower())
    for category, members in CATEGORY_HINTS:
        if candidates & members:
            return category
    return None


def target_category(keyword: str, skills: dict[str, str], catalog: KeywordCatalog) -> str:
    hint = hinted_category(keyword, catalog)
    if hint:
        for existing in skills:
            if categories_similar(hint, existing):
                return existing
    return FALLBACK_CATEGORY


def skill_present(keyword: str, skills: dict[str, str]) -> bool:
    lower = keyword.lower()
    return any(lower == item.lower() for values in skills.values() for item in _split_skills(values))


def insert_missing_keywords(model: ResumeModel, missing: list[str], catalog: KeywordCatalog) -> list[str]:
    """Add missing hard skills to the skills map. Returns the keywords added."""
    added = []
    for keyword in missing:
        if keyword.lower() in SOFT_SKILLS or skill_present(keyword, model.skills):
            continue
        category = target_category(keyword, model.skills, catalog)
        existing = model.skills.get(category, "")
        model.skills[category] = f"{existing}, {keyword}" if existing.strip() else keyword
        added.append(keyword)
    return added


# --- summary ---


def extract_target_role(job_description: str) -> str:
    for pattern in ROLE_PATTERNS:
        match = pattern.search(job_description)
        if match:
            words = match.group(1).split()
            return " ".join(w if any(c.isupper() for c in w[1:]) else w[:1].upper() + w[1:] for w in words)
    return ""


def _tidy(text: str) -> str:
    text = " ".join(text.split())
    text = re.sub(r"\s+([,.;!?])", r"\1", text)
    return re.sub(r",(?=[,.])", "", text).strip()


def _finish_sentence(text: str) -> str:
    words = text.split()
    if len(words) > SUMMARY_MAX_WORDS:
        text = " ".join(words[:SUMMARY_MAX_WORDS])
    text = text.rstrip(" ,;:")
    if text and text[-1] not in ".!?":
        text += "."
    return text


def clean_summary(summary: str, banned_phrases: tuple[str, ...]) -> str:
    for phrase in banned_phrases:
        pattern = rf"(?<![A-Za-z0-9]){re.escape(phrase)}(?![A-Za-z0-9])"
        summary = re.sub(pattern, "", summary, flags=re.IGNORECASE)
    return _finish_sentence(_tidy(summary))


def fill_summary_template(
    template: str,
    target_role: str,
    skills: list[str],
    degree: str,
    years: int,
) -> str:
    values = {"targetRole": target_role, "degree": degree, "years": str(years)}
    for i, skill in enumerate(skills, start=1):
        values[f"skill{i}"] = skill

    def replace(match: re.Match) -> str:
        return values.get(match.group(0)[1:-1], "") or ""

    return _finish_sentence(_tidy(_PLACEHOLDER_RE.sub(replace, template)))


def _summary_skills(model: ResumeModel, match: MatchResult) -> list[str]:
    skills = list(match.matched)
    for values in model.skills.values():
        for item in _split_skills(values):
            if item not in skills:
                skills.append(item)
    return [s for s in skills if s.lower() not in SOFT_SKILLS]


def enhance_summary(
    model: ResumeModel,
    match: MatchResult,
    job_description: str,
    industry: str,
    fresher: bool,
    years: int,
    library: ContentLibrary,
) -> str:
    if model.summary.strip():
        return clean_summary(model.summary, library.banned_summary_phrases())

    templates = library.summary_templates(industry, fresher)
    if not templates:
        return ""
    degree = next((e.degree for e in model.education if e.degree), "")
    return fill_summary_template(
        templates[0],
        extract_target_role(job_description),
        _summary_skills(model, match),
        degree,
        years,
    )


# --- bullets ---


def _strip_banned_starter(text: str, banned: list[str]) -> str:
    lower = text.lower()
    for starter in banned:
        if lower.startswith(starter) and (len(lower) == len(starter) or not lower[len(starter)].isalnum()):
            return text[len(starter):]
    return text


def repair_bullet(bullet: str, banned: list[str], verbs: tuple[str, ...], verb_set: set[str], counter: list[int]) -> str:
    """Rewrite one bullet; ``counter`` holds the running verb index."""
    text = _LEADING_NOISE_RE.sub("", _strip_banned_starter(bullet.strip(), banned))
    if not text:
        return ""

    first = _WORD_RE.match(text)
    if verbs and (first is None or first.group(0).lower() not in verb_set):
        verb = verbs[counter[0] % len(verbs)]
        counter[0] += 1
        # keep acronyms such as "AWS" intact
        if not (len(text) > 1 and text[1].isupper()):
            text = text[0].lower() + text[1:]
        text = f"{verb} {text}"

    text = text[0].upper() + text[1:]
    if len(text) > BULLET_MAX_CHARS:
        text = text[:BULLET_MAX_CHARS - 3] + "..."
    return text


def repair_bullets(model: ResumeModel, industry: str, library: ContentLibrary) -> None:
    banned = sorted(library.banned_bullet_starters(), key=len, reverse=True)
    verbs = library.action_verbs(industry)
    verb_set = {v.lower() for v in verbs}
    counter = [0]

    for job in model.experience or []:
        job.bullets = [b for b in (repair_bullet(x, banned, verbs, verb_set, counter) for x in job.bullets) if b]
    for project in model.projects or []:
        project.bullets = [b for b in (repair_bullet(x, banned, verbs, verb_set, counter) for x in project.bullets) if b]


# --- personal info / sections ---


def strip_personal_fields(model: ResumeModel, library: ContentLibrary) -> list[str]:
    """Drop culturally-specific personal fields and the declaration. Returns removed keys."""
    strip = {k.lower() for k in CULTURALLY_SPECIFIC_FIELDS}
    strip.update(k.lower() for k in library.culturally_specific_fields())

    data = model.personal_info.model_dump(by_alias=True)
    removed = [key for key in data if key.lower() in strip]
    if removed:
        model.personal_info = PersonalInfo.model_validate({k: v for k, v in data.items() if k not in removed})
    model.declaration = None
    return removed


def ensure_sections(model: ResumeModel, match: MatchResult, fresher: bool) -> None:
    if not model.skills and match.matched:
        model.skills = {SYNTHESIZED_CATEGORY: ", ".join(match.matched)}
    if not model.experience and fresher:
        model.experience = None
    if not model.projects:
        model.projects = None
    if not model.education:
        model.education = [EducationEntry()]


def suggest_certifications(model: ResumeModel, industry: str, library: ContentLibrary) -> None:
    if not model.certifications:
        model.suggested_certifications = list(library.certifications(industry)[:MAX_SUGGESTED_CERTIFICATIONS])


# --- entry point ---


def enhance_resume(
    model: ResumeModel,
    match: MatchResult,
    job_description: str,
    catalog: KeywordCatalog | None = None,
    library: ContentLibrary | None = None,
    current_year: int | None = None,
) -> ResumeModel:
    """Return an enhanced deep copy of ``model``. Never raises."""
    catalog = catalog or get_catalog()
    library = library or get_content_library()

    working = model.model_copy(deep=True)
    best = model.model_copy(deep=True)
    fresher: bool | None = None

    def checkpoint() -> None:
        nonlocal best
        best = working.model_copy(deep=True)

    try:
        industry = detect_industry(job_description)

        years = experience_years(working, current_year)
        fresher = is_fresher(working, current_year)
        working.is_fresher = fresher
        checkpoint()
        logger.info("Enhancing resume: industry=%s fresher=%s years=%d", industry, fresher, years)

        added = insert_missing_keywords(working, match.missing, catalog)
        checkpoint()
        if added:
            logger.info("Added %d missing keyword(s) to skills", len(added))

        working.summary = enhance_summary(working, match, job_description, industry, fresher, years, library)
        checkpoint()

        repair_bullets(working, industry, library)
        checkpoint()

        removed = strip_personal_fields(working, library)
        checkpoint()
        if removed:
            logger.info("Removed personal fields: %s", ", ".join(removed))

        ensure_sections(working, match, fresher)
        checkpoint()

        suggest_certifications(working, industry, library)
        checkpoint()
    except Exception as e:
        logger.exception("Resume enhancement step failed: %s", e)
        best.is_fresher = fresher if fresher is not None else True
        best.enhancement_error = ENHANCEMENT_FAILED
        return best

    return working
