"""Structured resume records shared by the parser, rewriter and renderer."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonalInfo(_Record):
    """Contact block. Extra keys (dateOfBirth, gender, ...) are carried through
    so the rewriter can strip them."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    full_name: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    location: str = ""

    def extra_fields(self) -> dict[str, object]:
        return dict(self.model_extra or {})


class EducationEntry(_Record):
    degree: str = ""
    institution: str = ""
    year: str = ""
    score: str = ""


class ExperienceEntry(_Record):
    title: str = ""
    company: str = ""
    location: str = ""
    dates: str = ""
    bullets: list[str] = Field(default_factory=list)


class ProjectEntry(_Record):
    name: str = ""
    tech_stack: str = ""
    bullets: list[str] = Field(default_factory=list)


class ResumeModel(_Record):
    """A parsed (or rewritten) resume.

    ``experience`` and ``projects`` are ``None`` when the rewriter dropped the
    section entirely; an empty list means the section was present but empty.
    """

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: str = ""
    education: list[EducationEntry] = Field(default_factory=list)
    skills: dict[str, str] = Field(default_factory=dict)
    experience: list[ExperienceEntry] | None = Field(default_factory=list)
    projects: list[ProjectEntry] | None = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)
    declaration: str | None = None
    suggested_certifications: list[str] = Field(default_factory=list)
    is_fresher: bool = False
    enhancement_error: str | None = None

    def to_text(self) -> str:
        """Render the model back into plain resume text with standard headers."""
        info = self.personal_info
        lines: list[str] = []
        if info.full_name:
            lines.append(info.full_name)
        contact = " | ".join(v for v in (info.email, info.phone, info.linkedin, info.location) if v)
        if contact:
            lines.append(contact)

        if self.summary:
            lines += ["", "Summary", self.summary]

        if self.skills:
            lines += ["", "Skills"]
            lines += [f"{category}: {values}" for category, values in self.skills.items()]

        if self.experience:
            lines += ["", "Experience"]
            for job in self.experience:
                lines.append(job.title)
                company_line = ", ".join(v for v in (job.company, job.location) if v)
                if job.dates:
                    company_line = f"{company_line} | {job.dates}" if company_line else job.dates
                if company_line:
                    lines.append(company_line)
                lines += [f"• {b}" for b in job.bullets]

        if self.projects:
            lines += ["", "Projects"]
            for project in self.projects:
                lines.append(f"{project.name} | {project.tech_stack}" if project.tech_stack else project.name)
                lines += [f"• {b}" for b in project.bullets]

        if any(e.degree or e.institution for e in self.education):
            lines += ["", "Education"]
            for entry in self.education:
                lines += [v for v in (entry.degree, entry.institution, entry.year, entry.score) if v]

        if self.certifications:
            lines += ["", "Certifications"]
            lines += [f"• {c}" for c in self.certifications]

        if self.achievements:
            lines += ["", "Achievements"]
            lines += [f"• {a}" for a in self.achievements]

        return "\n".join(lines).strip()
