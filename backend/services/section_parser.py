"""Resume segmentation: header detection, contact extraction and per-section
parsing into structured records.

``parse_resume`` is total. Whatever text it is given, it returns a fully
shaped ``ResumeModel``; on any internal error the model is empty rather than
partially filled.
"""

import logging
import re

from models.resume import EducationEntry, ExperienceEntry, PersonalInfo, ProjectEntry, ResumeModel
from services.keyword_catalog import KeywordCatalog, get_catalog

logger = logging.getLogger(__name__)

# Contact info patterns
EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}")
PHONE_RE = re.compile(r"(\+?\d{1,3}[\-.\s]?)?\(?\d{3}\)?[\-.\s]?\d{3}[\-.\s]?\d{4}")
LINKEDIN_RE = re.compile(r"(?:https?://)?(?:www\.)?linkedin\.com/in/[a-zA-Z0-9\-_%]+/?", re.IGNORECASE)
LOCATION_RE = re.compile(r"([A-Z][a-z]+(?:\s[A-Z][a-z]+)?),\s*([A-Z][a-z]+(?:\s[A-Z][a-z]+)?)")

_MONTHS = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|"
    r"Jul(?:y)?|Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
OPEN_ENDED = ("present", "current", "ongoing", "now", "till date")

# "2019 - 2023", "Jun 2023 – Aug 2023", "2021 - Present"
YEAR_RANGE_RE = re.compile(
    rf"(?:\b{_MONTHS}\.?,?\s*)?(\d{{4}})\s*(?:[-–—]|\bto\b)\s*"
    rf"(?:{_MONTHS}\.?,?\s*)?(\d{{4}}|present|current|till\s+date|ongoing|now\b)",
    re.IGNORECASE,
)
SINGLE_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
CGPA_RE = re.compile(r"(?:CGPA|GPA|CPI)\s*[:\-]?\s*\d+\.?\d*\s*/\s*\d+", re.IGNORECASE)
PERCENTAGE_RE = re.compile(r"\d{2,3}\.?\d*\s*%")
_FOUR_DIGITS_RE = re.compile(r"\d{4}")

DEGREE_RE = re.compile(
    r"\b(B\.?\s?Tech|M\.?\s?Tech|B\.?\s?E|M\.?\s?E|B\.?\s?Sc|M\.?\s?Sc|"
    r"BCA|MCA|B\.?\s?Com|M\.?\s?Com|BBA|MBA|B\.?\s?Pharm|M\.?\s?Pharm|"
    r"B\.?\s?Arch|M\.?\s?Arch|B\.?\s?Des|M\.?\s?Des|"
    r"Bachelor|Master|Ph\.?\s?D|Diploma|"
    r"Bachelor of Technology|Bachelor of Engineering|Bachelor of Science|"
    r"Master of Technology|Master of Engineering|Master of Science|"
    r"Bachelor of Computer Applications|Master of Computer Applications|"
    r"Bachelor of Business Administration|Master of Business Administration|"
    r"Bachelor of Commerce|Master of Commerce)\b",
    re.IGNORECASE,
)

JOB_TITLE_KEYWORDS = (
    "engineer", "developer", "analyst", "manager", "intern", "lead", "architect",
    "designer", "consultant", "specialist", "administrator", "coordinator", "executive",
    "associate", "trainee", "officer", "head", "director", "vp", "president",
    "senior", "junior", "sr.", "jr.", "full stack", "frontend", "backend",
    "software", "data", "project", "product", "quality", "devops", "sre",
    "pharmacist", "technician", "supervisor", "assistant",
)

_HEADER_TRAILER_RE = re.compile(r"[:\-_=]+$")
_HEADER_LEADER_RE = re.compile(r"^[\d.•\-*]+\s*")
_BULLET_RE = re.compile(r"^[•\-*]\s*")
_NUMBERED_RE = re.compile(r"^\d+\.\s")
_NUMBER_PREFIX_RE = re.compile(r"^\d+\.\s*")
_TRAILING_SEPARATORS_RE = re.compile(r"[,|\-–—]+$")
_TECH_PREFIX_RE = re.compile(r"^(tech\s*stack|technologies|built\s*with|tools used)\s*[:\-]?\s*", re.IGNORECASE)
_TECH_STARTERS = ("tech", "technologies", "built with", "tools")

# Section names some catalogs use that fold into a standard section
_STANDARD_SECTIONS = {
    "objective": "summary",
    "profile": "summary",
    "technical skills": "skills",
    "core competencies": "skills",
    "work experience": "experience",
    "employment": "experience",
    "academic projects": "projects",
    "licenses": "certifications",
    "awards": "achievements",
    "honors": "achievements",
}

# "Personal Details" labels -> PersonalInfo extra keys
PERSONAL_FIELD_KEYS = {
    "date of birth": "dateOfBirth",
    "dob": "dateOfBirth",
    "d.o.b": "dateOfBirth",
    "birth date": "dateOfBirth",
    "gender": "gender",
    "sex": "sex",
    "marital status": "maritalStatus",
    "father's name": "fatherName",
    "fathers name": "fatherName",
    "father name": "fatherName",
    "mother's name": "motherName",
    "mother name": "motherName",
    "nationality": "nationality",
    "passport": "passportNumber",
    "passport no": "passportNumber",
    "passport number": "passportNumber",
    "religion": "religion",
    "caste": "caste",
    "languages known": "languagesKnown",
    "languages": "languagesKnown",
    "hobbies": "hobbies",
    "interests": "hobbies",
    "address": "address",
    "permanent address": "address",
    "place": "place",
}
_PERSONAL_LINE_RE = re.compile(r"^([A-Za-z][A-Za-z.' ]{1,30}?)\s*[:\-–]\s*(.+)$")


def _split_lines(text: str) -> list[str]:
    return re.split(r"\r?\n", text)


def _strip_bullet(line: str) -> str:
    return _NUMBER_PREFIX_RE.sub("", _BULLET_RE.sub("", line)).strip()


def _is_bullet(line: str) -> bool:
    return line.startswith(("•", "-", "*")) or bool(_NUMBERED_RE.match(line))


# --- section headers ---


def build_header_lookup(catalog: KeywordCatalog) -> dict[str, str]:
    """Reverse map: lowercased header variation -> standard section name."""
    lookup: dict[str, str] = {}
    for section, variations in catalog.section_headers().items():
        for variation in variations:
            lookup[variation.strip().lower()] = section
    return lookup


def detect_section_header(line: str, header_lookup: dict[str, str]) -> str | None:
    """Return the section a header line introduces, or None for content lines."""
    cleaned = _HEADER_TRAILER_RE.sub("", line).strip().lower()
    cleaned = _HEADER_LEADER_RE.sub("", cleaned).strip()

    if cleaned in header_lookup:
        return header_lookup[cleaned]

    if len(line) < 50:
        for alias, section in header_lookup.items():
            if cleaned == alias or cleaned.startswith(alias + " ") or cleaned.startswith(alias + ":"):
                return section
    return None


def is_section_header(line: str, catalog: KeywordCatalog | None = None) -> bool:
    """Strict check used for name detection: the whole line is a header alias."""
    if len(line) > 50:
        return False
    catalog = catalog or get_catalog()
    cleaned = _HEADER_TRAILER_RE.sub("", line).strip().lower()
    return any(cleaned in variations for variations in catalog.section_headers().values())


def split_sections(text: str, catalog: KeywordCatalog | None = None) -> dict[str, str]:
    """Split resume text into standard section name -> section content.

    Content before the first header is not assigned to any section. A section
    that appears more than once is concatenated.
    """
    catalog = catalog or get_catalog()
    lookup = build_header_lookup(catalog)
    lines = _split_lines(text)

    boundaries: list[tuple[int, str]] = []
    for i, line in enumerate(lines):
        stripped = line.strip()
        if not stripped:
            continue
        section = detect_section_header(stripped, lookup)
        if section is not None:
            boundaries.append((i, section))

    sections: dict[str, str] = {}
    for n, (start, section) in enumerate(boundaries):
        end = boundaries[n + 1][0] if n + 1 < len(boundaries) else len(lines)
        content = "\n".join(lines[start + 1:end]).strip()
        name = _STANDARD_SECTIONS.get(section.lower(), section.lower())
        if name in sections:
            sections[name] = sections[name] + "\n" + content
        else:
            sections[name] = content
    return sections


# --- personal info ---


def extract_personal_info(text: str, catalog: KeywordCatalog | None = None) -> PersonalInfo:
    catalog = catalog or get_catalog()
    lines = _split_lines(text)

    name = ""
    for line in lines:
        stripped = line.strip()
        if not stripped:
            continue
        if EMAIL_RE.search(stripped) or PHONE_RE.search(stripped) or LINKEDIN_RE.search(stripped):
            continue
        if is_section_header(stripped, catalog):
            continue
        name = stripped
        break

    email = EMAIL_RE.search(text)
    phone = PHONE_RE.search(text)
    linkedin = LINKEDIN_RE.search(text)

    location = ""
    for line in lines[:10]:
        match = LOCATION_RE.search(line.strip())
        if match:
            location = match.group()
            break

    return PersonalInfo(
        full_name=name,
        email=email.group() if email else "",
        phone=phone.group() if phone else "",
        linkedin=linkedin.group() if linkedin else "",
        location=location,
    )


def _camel_key(label: str) -> str:
    words = re.findall(r"[A-Za-z]+", label)
    if not words:
        return ""
    return words[0].lower() + "".join(w.capitalize() for w in words[1:])


def parse_personal_details(content: str) -> dict[str, str]:
    """Parse "Label: value" lines of a personal details block into extra
    PersonalInfo keys (dateOfBirth, maritalStatus, ...)."""
    details: dict[str, str] = {}
    for line in _split_lines(content):
        stripped = _strip_bullet(line.strip())
        if not stripped:
            continue
        match = _PERSONAL_LINE_RE.match(stripped)
        if not match:
            continue
        label = match.group(1).strip().lower()
        value = match.group(2).strip()
        key = PERSONAL_FIELD_KEYS.get(label) or _camel_key(label)
        if key and value and key not in details:
            details[key] = value
    return details


# --- section parsers ---


def parse_summary(content: str) -> str:
    return " ".join(content.split())


def parse_education(content: str) -> list[EducationEntry]:
    entries: list[EducationEntry] = []
    current: EducationEntry | None = None

    for line in _split_lines(content):
        stripped = line.strip()
        if not stripped:
            continue

        if DEGREE_RE.search(stripped):
            if current is not None:
                entries.append(current)
            current = EducationEntry(degree=stripped)
            continue

        if current is None:
            # Institution listed before the degree
            current = EducationEntry(institution=stripped)
            continue

        filled = False
        cgpa = CGPA_RE.search(stripped)
        if cgpa:
            current.score = cgpa.group()
            filled = True
        else:
            pct = PERCENTAGE_RE.search(stripped)
            if pct:
                current.score = pct.group() + " (Percentage)"
                filled = True

        year_range = YEAR_RANGE_RE.search(stripped)
        if year_range:
            current.year = year_range.group()
            filled = True
        elif not current.year:
            single = SINGLE_YEAR_RE.search(stripped)
            if single:
                current.year = single.group()
                filled = True

        # A line already used for score or year does not also become the institution
        if not filled and not current.institution and not _FOUR_DIGITS_RE.search(stripped):
            current.institution = stripped

    if current is not None:
        entries.append(current)
    return entries


def parse_skills(content: str) -> dict[str, str]:
    skills: dict[str, str] = {}
    for line in _split_lines(content):
        stripped = line.strip()
        if not stripped:
            continue

        colon = stripped.find(":")
        if 0 < colon < 40:
            category = _BULLET_RE.sub("", stripped[:colon].strip()).strip()
            values = stripped[colon + 1:].strip()
            if category and values:
                skills[category] = values
                continue

        if "|" in stripped:
            parts = stripped.split("|")
            category = _BULLET_RE.sub("", parts[0].strip()).strip()
            if category:
                skills[category] = ", ".join(p.strip() for p in parts[1:])
                continue

        cleaned = _BULLET_RE.sub("", stripped).strip()
        if cleaned:
            skills["Skills"] = f"{skills['Skills']}, {cleaned}" if "Skills" in skills else cleaned
    return skills


def looks_like_job_title(line: str) -> bool:
    if line.startswith(("•", "-", "*")):
        return False
    if len(line) > 80:
        return False
    lower = line.lower()
    return any(keyword in lower for keyword in JOB_TITLE_KEYWORDS)


def parse_experience(content: str) -> list[ExperienceEntry]:
    jobs: list[ExperienceEntry] = []
    current: ExperienceEntry | None = None

    for line in _split_lines(content):
        stripped = line.strip()
        if not stripped:
            continue

        if looks_like_job_title(stripped) or current is None:
            if current is not None:
                jobs.append(current)
            current = ExperienceEntry(title=stripped)
            continue

        date_range = YEAR_RANGE_RE.search(stripped)
        if date_range and not current.dates:
            current.dates = stripped
            if not current.company:
                before = _TRAILING_SEPARATORS_RE.sub("", stripped[:date_range.start()].strip()).strip()
                if before:
                    current.company = before
                    current.dates = date_range.group()
            continue

        if _is_bullet(stripped):
            bullet = _strip_bullet(stripped)
            if bullet:
                current.bullets.append(bullet)
            continue

        if not current.company:
            location = LOCATION_RE.search(stripped)
            if location:
                current.location = location.group()
                company = _TRAILING_SEPARATORS_RE.sub("", stripped[:location.start()].strip()).strip()
                if company:
                    current.company = company
            else:
                current.company = stripped
            continue

        if len(stripped) > 20:
            current.bullets.append(stripped)

    if current is not None:
        jobs.append(current)
    return jobs


def parse_projects(content: str) -> list[ProjectEntry]:
    projects: list[ProjectEntry] = []
    current: ProjectEntry | None = None

    for line in _split_lines(content):
        stripped = line.strip()
        if not stripped:
            continue

        bullet = _is_bullet(stripped)
        if bullet and current is not None:
            text = _strip_bullet(stripped)
            if text:
                current.bullets.append(text)
            continue

        if current is not None and not current.tech_stack:
            lower = stripped.lower()
            if lower.startswith(_TECH_STARTERS) or "|" in stripped:
                current.tech_stack = _TECH_PREFIX_RE.sub("", stripped).strip()
                continue

        if not bullet:
            if current is not None:
                projects.append(current)
            if "|" in stripped:
                name, tech = stripped.split("|", 1)
                current = ProjectEntry(name=name.strip(), tech_stack=tech.strip())
            else:
                current = ProjectEntry(name=stripped)

    if current is not None:
        projects.append(current)
    return projects


def parse_simple_list(content: str) -> list[str]:
    items = []
    for line in _split_lines(content):
        cleaned = _strip_bullet(line.strip())
        if cleaned:
            items.append(cleaned)
    return items


def parse_resume(text: str | None, catalog: KeywordCatalog | None = None) -> ResumeModel:
    """Parse raw resume text into a ResumeModel. Never raises."""
    if not text or not text.strip():
        return ResumeModel()

    try:
        catalog = catalog or get_catalog()
        info = extract_personal_info(text, catalog)
        sections = split_sections(text, catalog)

        details = parse_personal_details(sections.get("personal_details", ""))
        known = info.model_dump(by_alias=True)
        details = {k: v for k, v in details.items() if k not in known}
        if details:
            info = PersonalInfo.model_validate({**known, **details})

        declaration = sections.get("declaration")
        return ResumeModel(
            personal_info=info,
            summary=parse_summary(sections.get("summary", "")),
            education=parse_education(sections.get("education", "")),
            skills=parse_skills(sections.get("skills", "")),
            experience=parse_experience(sections.get("experience", "")),
            projects=parse_projects(sections.get("projects", "")),
            certifications=parse_simple_list(sections.get("certifications", "")),
            achievements=parse_simple_list(sections.get("achievements", "")),
            declaration=" ".join(declaration.split()) if declaration is not None else None,
        )
    except Exception as e:
        logger.warning("Resume parsing failed, returning empty model: %s", e)
        return ResumeModel()
