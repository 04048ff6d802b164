"""Cover letter drafting.

The default path is fully deterministic: a handful of regexes pull the
candidate's name, skills and experience from the resume, and the company,
role and requirements from the job description, then fill a fixed letter.
``generate_cover_letter_text`` asks Gemini instead.
"""

import datetime
import logging
import re

from models.responses import CoverLetterResult
from services import gemini_client
from services.keyword_matcher import contains_whole_word
from services.prompt_builder import COVER_LETTER_SYSTEM_PROMPT, build_cover_letter_prompt

logger = logging.getLogger(__name__)

DEFAULT_NAME = "[Your Name]"
DEFAULT_COMPANY = "[Company Name]"
DEFAULT_ROLE = "[Position Title]"
MAX_SKILLS = 8
MAX_REQUIREMENTS = 6

COMMON_SKILLS = (
    "Java", "Python", "JavaScript", "TypeScript", "React", "Angular", "Vue",
    "Spring Boot", "Node.js", "SQL", "AWS", "Azure", "Docker", "Kubernetes",
    "Git", "REST API", "Machine Learning", "Data Analysis", "Agile", "Scrum",
    "HTML", "CSS", "C++", "C#", ".NET", "MongoDB", "PostgreSQL", "MySQL",
    "Communication", "Leadership", "Project Management", "Problem Solving",
)

TECH_TERMS = (
    "Java", "Python", "JavaScript", "TypeScript", "React", "Angular", "Vue",
    "Spring Boot", "Node.js", "SQL", "AWS", "Azure", "Docker", "Kubernetes",
    "CI/CD", "microservices", "REST API", "Machine Learning", "DevOps",
    "Agile", "Scrum", "Git", "cloud", "containerization", "data analysis",
    "C++", "C#", ".NET", "Go", "Kotlin", "Swift", "GraphQL", "Redis",
    "Kafka", "Terraform", "Jenkins", "HTML", "CSS", "MongoDB", "PostgreSQL",
)

NAME_SKIP_RE = re.compile(r"summary|experience|education|skills|objective|phone|email|address|http|@", re.IGNORECASE)

SKILLS_BLOCK_RE = re.compile(
    r"^[ \t]*(?:technical skills|core competencies|key skills|skills)[ \t:]*\n"
    r"(.*?)"
    r"(?=\n[ \t]*(?:experience|education|projects|certifications|awards|references)\b|\n[ \t]*\n|\Z)",
    re.IGNORECASE | re.MULTILINE | re.DOTALL,
)
SKILL_SPLIT_RE = re.compile(r"[,|\n•]+|\s-\s")
CATEGORY_PREFIX_RE = re.compile(r"^[^:\n]{1,40}:\s*", re.MULTILINE)

YEARS_RE = re.compile(r"(\d+)\+?\s*(?:years?|yrs?)\s*(?:of)?\s*(?:experience|exp)", re.IGNORECASE)
DATE_RANGE_RE = re.compile(r"(20\d{2}|19\d{2})\s*[-–]\s*(20\d{2}|19\d{2}|present|current)", re.IGNORECASE)

COMPANY_PATTERNS = (
    re.compile(r"(?:\b[Aa]t|\b[Jj]oin|\b[Aa]bout)\s+([A-Z][A-Za-z0-9&'. ]{1,30}?)\s*(?:\b(?:is|are|we)\b|[,.\n]|$)", re.MULTILINE),
    re.compile(r"company\s*[:=]\s*(.+?)\s*$", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^([A-Z][A-Za-z0-9&'. ]{2,25})\s*$", re.MULTILINE),
)

_ROLE_NOUNS = (
    r"engineer|developer|manager|analyst|designer|architect|scientist|specialist|"
    r"coordinator|consultant|lead|director|intern"
)
ROLE_PATTERNS = (
    re.compile(r"(?:job title|position|role)\s*[:=]\s*(.+?)\s*$", re.IGNORECASE | re.MULTILINE),
    re.compile(
        r"(?:hiring|looking for|seeking)\s+(?:an?\s+)?(.+?)(?:\s+(?:proficient|with|who|at|for|in|to)\b|[.,\n]|$)",
        re.IGNORECASE | re.MULTILINE,
    ),
    re.compile(rf"^(.+?(?:{_ROLE_NOUNS}))\s*$", re.IGNORECASE | re.MULTILINE),
)
ROLE_TRAILER_RE = re.compile(r"\s+(?:a|an|the|who|with|at|for|in|to)$", re.IGNORECASE)

REQUIREMENTS_BLOCK_RE = re.compile(
    r"^[ \t]*(?:requirements|qualifications|what we.re looking for|must have|you.ll need)[ \t:]*\n"
    r"(.*?)"
    r"(?=\n[ \t]*(?:benefits|perks|about|how to|application)\b|\n[ \t]*\n|\Z)",
    re.IGNORECASE | re.MULTILINE | re.DOTALL,
)


# --- resume side ---


def extract_name(resume_text: str) -> str:
    for line in resume_text.splitlines():
        line = line.strip()
        if not line or NAME_SKIP_RE.search(line):
            continue
        if len(line.split()) <= 5 and len(line) < 40:
            return line
    return DEFAULT_NAME


def extract_skills(resume_text: str) -> list[str]:
    skills: list[str] = []
    match = SKILLS_BLOCK_RE.search(resume_text)
    if match:
        block = CATEGORY_PREFIX_RE.sub("", match.group(1))
        for token in SKILL_SPLIT_RE.split(block):
            token = token.strip(" -\t")
            if token and len(token) < 40 and token not in skills:
                skills.append(token)

    if not skills:
        skills = [s for s in COMMON_SKILLS if contains_whole_word(resume_text, s)]
    return skills[:MAX_SKILLS]


def extract_experience_summary(resume_text: str) -> str:
    match = YEARS_RE.search(resume_text)
    if match:
        return f"{match.group(1)}+ years of professional experience"

    roles = len(DATE_RANGE_RE.findall(resume_text))
    if roles:
        return f"experience across {roles} professional role{'s' if roles > 1 else ''}"
    return "relevant professional experience"


# --- job description side ---


def extract_company_name(job_description: str) -> str:
    for pattern in COMPANY_PATTERNS:
        match = pattern.search(job_description)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return DEFAULT_COMPANY


def extract_role_name(job_description: str) -> str:
    for pattern in ROLE_PATTERNS:
        match = pattern.search(job_description)
        if match:
            role = ROLE_TRAILER_RE.sub("", match.group(1).strip()).strip()
            if 3 <= len(role) < 60:
                return role
    return DEFAULT_ROLE


def extract_requirements(job_description: str) -> list[str]:
    requirements: list[str] = []
    match = REQUIREMENTS_BLOCK_RE.search(job_description)
    if match:
        for line in match.group(1).splitlines():
            line = re.sub(r"^[\-•*>]+", "", line).strip()
            if 5 < len(line) < 100:
                requirements.append(line)

    if not requirements:
        for term in TECH_TERMS:
            if contains_whole_word(job_description, term):
                requirements.append(f"proficiency in {term}")
                if len(requirements) >= MAX_REQUIREMENTS:
                    break
    return requirements[:MAX_REQUIREMENTS]


def find_relevant_skills(skills: list[str], requirements: list[str]) -> list[str]:
    """Skills mentioned by the requirements, or the top four when none overlap."""
    text = " ".join(requirements).lower()
    relevant = [s for s in skills if s.lower() in text]
    return relevant or skills[:4]


# --- letter ---


def _join_naturally(items: list[str]) -> str:
    if len(items) <= 2:
        return " and ".join(items)
    return ", ".join(items[:-1]) + ", and " + items[-1]


def format_date(day: datetime.date) -> str:
    return f"{day:%B} {day.day}, {day.year}"


def build_cover_letter(
    name: str,
    company: str,
    role: str,
    relevant_skills: list[str],
    experience: str,
    requirements: list[str],
    today: datetime.date | None = None,
) -> str:
    today = today or datetime.date.today()
    paragraphs = [
        f"{name}\n{format_date(today)}",
        "Dear Hiring Manager,",
        f"I am writing to express my strong interest in the {role} position at {company}. "
        f"With {experience}, I am confident that my background and skills make me an excellent fit for this role.",
    ]

    if relevant_skills:
        paragraphs.append(
            f"Throughout my career, I have developed strong expertise in {', '.join(relevant_skills)}. "
            "These skills directly align with the requirements outlined in your job description "
            "and would allow me to make an immediate and meaningful contribution to your team."
        )

    if len(requirements) >= 2:
        areas = [re.sub(r"(?i)^proficiency in\s+", "", r).strip() for r in requirements[:3]]
        paragraphs.append(
            "I am particularly drawn to this opportunity because it requires expertise in areas "
            f"where I have proven results. My experience includes {_join_naturally(areas)}, "
            "which I believe are critical to succeeding in this position."
        )

    paragraphs += [
        f"I am excited about the opportunity to bring my unique blend of skills and experience to {company}. "
        "I am eager to contribute to your team's success and am confident that my proactive approach "
        "and dedication to excellence would be a valuable asset.",
        "Thank you for considering my application. I would welcome the opportunity to discuss how my "
        "qualifications align with your needs. I look forward to hearing from you.",
        f"Sincerely,\n{name}",
    ]
    return "\n\n".join(paragraphs)


def write_cover_letter(
    resume_text: str,
    job_description: str,
    today: datetime.date | None = None,
) -> CoverLetterResult:
    """Deterministic cover letter from resume text and a job description."""
    name = extract_name(resume_text)
    skills = extract_skills(resume_text)
    experience = extract_experience_summary(resume_text)

    company = extract_company_name(job_description)
    role = extract_role_name(job_description)
    requirements = extract_requirements(job_description)

    relevant = find_relevant_skills(skills, requirements)
    logger.info("Cover letter for %s: role=%s company=%s skills=%d", name, role, company, len(relevant))

    return CoverLetterResult(
        cover_letter_text=build_cover_letter(name, company, role, relevant, experience, requirements, today),
        candidate_name=name,
        target_role=role,
        company_name=company,
    )


async def generate_cover_letter_text(resume_text: str, job_description: str) -> str:
    """Gemini-written cover letter. Raises GeneratorError on provider failure."""
    prompt = build_cover_letter_prompt(
        resume_text,
        job_description,
        candidate_name=extract_name(resume_text),
        company_name=extract_company_name(job_description),
        target_role=extract_role_name(job_description),
        today=format_date(datetime.date.today()),
    )
    text = await gemini_client.generate(COVER_LETTER_SYSTEM_PROMPT, prompt)
    return text.strip()
