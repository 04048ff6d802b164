"""Render a structured resume (or plain linear text) to an ATS-safe PDF.

Single column, standard Type 1 fonts, no images. Layout values come from
resources/ats_resume_config.json.
"""

import io
import json
import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4, LETTER
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from models.resume import ResumeModel

logger = logging.getLogger(__name__)

RENDER_CONFIG_PATH = Path(__file__).parent / "resources" / "ats_resume_config.json"

PAGE_SIZES = {"A4": A4, "LETTER": LETTER}

DEFAULT_FRESHER_ORDER = ("summary", "education", "skills", "projects", "experience", "certifications", "achievements")
DEFAULT_EXPERIENCED_ORDER = ("summary", "skills", "experience", "projects", "education", "certifications", "achievements")


@dataclass(frozen=True)
class RenderSettings:
    page_size: str = "A4"
    margins: dict[str, float] = field(default_factory=lambda: {"top": 36, "bottom": 36, "left": 42, "right": 42})
    font: str = "Helvetica"
    bold_font: str = "Helvetica-Bold"
    text_color: str = "#000000"
    accent_color: str = "#1F3864"
    line_color: str = "#444444"
    font_sizes: dict[str, float] = field(default_factory=dict)
    spacing: dict[str, float] = field(default_factory=dict)
    fresher_order: tuple[str, ...] = DEFAULT_FRESHER_ORDER
    experienced_order: tuple[str, ...] = DEFAULT_EXPERIENCED_ORDER
    headings: dict[str, str] = field(default_factory=dict)
    bullet_symbol: str = "•"
    bullet_indent: float = 12
    file_pattern: str = "{FirstName}_{LastName}_Resume.pdf"

    @classmethod
    def from_dict(cls, data: dict) -> "RenderSettings":
        pdf = data.get("pdfSettings", {})
        order = data.get("sectionOrder", {})
        bullets = data.get("bulletPointFormat", {})
        return cls(
            page_size=pdf.get("pageSize", "A4"),
            margins={**cls().margins, **pdf.get("margins", {})},
            font=pdf.get("fontFamily", "Helvetica"),
            bold_font=pdf.get("boldFontFamily", "Helvetica-Bold"),
            text_color=pdf.get("textColor", "#000000"),
            accent_color=pdf.get("headingAccentColor", "#1F3864"),
            line_color=pdf.get("lineColor", "#444444"),
            font_sizes={k: v.get("size", 10) for k, v in data.get("fontSizes", {}).items()},
            spacing=dict(data.get("spacing", {})),
            fresher_order=tuple(order.get("fresher", DEFAULT_FRESHER_ORDER)),
            experienced_order=tuple(order.get("experienced", DEFAULT_EXPERIENCED_ORDER)),
            headings=dict(data.get("sectionHeadings", {})),
            bullet_symbol=bullets.get("symbol", "•"),
            bullet_indent=bullets.get("indentation", 12),
            file_pattern=data.get("fileNaming", {}).get("pattern", "{FirstName}_{LastName}_Resume.pdf"),
        )

    def size(self, key: str, default: float = 10) -> float:
        return self.font_sizes.get(key, default)

    def space(self, key: str, default: float = 4) -> float:
        return self.spacing.get(key, default)

    def section_order(self, is_fresher: bool) -> tuple[str, ...]:
        return self.fresher_order if is_fresher else self.experienced_order

    def heading(self, section: str) -> str:
        return self.headings.get(section, section.upper())


@lru_cache(maxsize=1)
def get_render_settings() -> RenderSettings:
    with open(RENDER_CONFIG_PATH, encoding="utf-8") as f:
        return RenderSettings.from_dict(json.load(f))


def _clean(text: str | None) -> str:
    """Single-line, markup-escaped text for a Paragraph."""
    return escape(" ".join((text or "").split()))


def _strip_bullet(text: str) -> str:
    return re.sub(r"^[\-•*▪●◦]\s*", "", text.strip())


class _Styles:
    def __init__(self, settings: RenderSettings):
        line_spacing = settings.space("lineSpacing", 1.2)
        text_color = HexColor(settings.text_color)

        def style(name: str, size: float, bold: bool = False, **kwargs) -> ParagraphStyle:
            return ParagraphStyle(
                name=name,
                fontName=settings.bold_font if bold else settings.font,
                fontSize=size,
                leading=size * line_spacing,
                textColor=kwargs.pop("textColor", text_color),
                spaceBefore=kwargs.pop("spaceBefore", 0),
                spaceAfter=kwargs.pop("spaceAfter", 0),
                alignment=kwargs.pop("alignment", TA_LEFT),
                **kwargs,
            )

        self.name = style(
            "Name", settings.size("candidateName", 18), bold=True,
            alignment=TA_CENTER, spaceAfter=settings.space("afterCandidateName", 4),
        )
        self.contact = style(
            "Contact", settings.size("contactInfo", 9.5),
            alignment=TA_CENTER, spaceAfter=settings.space("afterContactInfo", 6),
        )
        self.heading = style(
            "Heading", settings.size("sectionHeading", 11.5), bold=True,
            textColor=HexColor(settings.accent_color),
            spaceBefore=settings.space("beforeSectionHeading", 10),
        )
        self.body = style("Body", settings.size("bodyText", 10))
        self.entry_title = style("EntryTitle", settings.size("jobTitle", 10.5), bold=True)
        self.date = style("Date", settings.size("dateRange", 9.5), alignment=TA_RIGHT)
        self.skill = style("Skill", settings.size("skillValues", 10))
        self.bullet = style(
            "Bullet", settings.size("bodyText", 10),
            leftIndent=settings.bullet_indent, bulletIndent=0,
            spaceBefore=settings.space("betweenBulletPoints", 1.5),
        )


class PdfRenderer:
    """Turns a ResumeModel into PDF bytes using reportlab platypus."""

    def __init__(self, settings: RenderSettings | None = None):
        self.settings = settings or get_render_settings()
        self.styles = _Styles(self.settings)

    def _doc(self, buffer: io.BytesIO, title: str) -> SimpleDocTemplate:
        m = self.settings.margins
        return SimpleDocTemplate(
            buffer,
            pagesize=PAGE_SIZES.get(self.settings.page_size.upper(), A4),
            topMargin=m["top"], bottomMargin=m["bottom"],
            leftMargin=m["left"], rightMargin=m["right"],
            title=title,
        )

    def _rule(self) -> HRFlowable:
        return HRFlowable(
            width="100%", thickness=0.6, color=HexColor(self.settings.line_color),
            spaceBefore=1, spaceAfter=self.settings.space("afterSectionHeading", 4),
        )

    def _heading(self, section: str) -> list:
        return [Paragraph(escape(self.settings.heading(section)), self.styles.heading), self._rule()]

    def _bullets(self, bullets: list[str]) -> list:
        return [
            Paragraph(_clean(_strip_bullet(b)), self.styles.bullet, bulletText=self.settings.bullet_symbol)
            for b in bullets
            if b.strip()
        ]

    def _row(self, left: str, right: str, width: float) -> Table:
        """Left-aligned title with a right-aligned date on the same line."""
        table = Table(
            [[Paragraph(left, self.styles.entry_title), Paragraph(_clean(right), self.styles.date)]],
            colWidths=[width * 0.72, width * 0.28],
        )
        table.setStyle(TableStyle([
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), 0),
            ("RIGHTPADDING", (0, 0), (-1, -1), 0),
            ("TOPPADDING", (0, 0), (-1, -1), 0),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 1),
        ]))
        return table

    # --- sections ---

    def _header(self, model: ResumeModel) -> list:
        info = model.personal_info
        flowables = []
        if info.full_name.strip():
            flowables.append(Paragraph(_clean(info.full_name), self.styles.name))
        contact = [v for v in (info.email, info.phone, info.linkedin, info.location) if v and v.strip()]
        if contact:
            flowables.append(Paragraph(" | ".join(_clean(v) for v in contact), self.styles.contact))
        if flowables:
            flowables.append(self._rule())
        return flowables

    def _summary(self, model: ResumeModel, width: float) -> list:
        if not model.summary.strip():
            return []
        return [*self._heading("summary"), Paragraph(_clean(model.summary), self.styles.body)]

    def _skills(self, model: ResumeModel, width: float) -> list:
        rows = [(k, v) for k, v in model.skills.items() if v and v.strip()]
        if not rows:
            return []
        flowables = self._heading("skills")
        for category, values in rows:
            flowables.append(Paragraph(f"<b>{_clean(category)}:</b> {_clean(values)}", self.styles.skill))
        return flowables

    def _experience(self, model: ResumeModel, width: float) -> list:
        jobs = [j for j in model.experience or [] if j.title or j.company or j.bullets]
        if not jobs:
            return []
        flowables = self._heading("experience")
        for i, job in enumerate(jobs):
            title = _clean(job.title)
            company = ", ".join(_clean(v) for v in (job.company, job.location) if v and v.strip())
            left = f"{title} | {company}" if title and company else title or company
            flowables.append(self._row(left, job.dates, width))
            flowables.extend(self._bullets(job.bullets))
            if i < len(jobs) - 1:
                flowables.append(Spacer(1, self.settings.space("betweenJobEntries", 6)))
        return flowables

    def _projects(self, model: ResumeModel, width: float) -> list:
        projects = [p for p in model.projects or [] if p.name or p.bullets]
        if not projects:
            return []
        flowables = self._heading("projects")
        for i, project in enumerate(projects):
            line = f"<b>{_clean(project.name)}</b>"
            if project.tech_stack.strip():
                line += f" | <i>{_clean(project.tech_stack)}</i>"
            flowables.append(Paragraph(line, self.styles.body))
            flowables.extend(self._bullets(project.bullets))
            if i < len(projects) - 1:
                flowables.append(Spacer(1, self.settings.space("betweenProjectEntries", 5)))
        return flowables

    def _education(self, model: ResumeModel, width: float) -> list:
        entries = [e for e in model.education if e.degree or e.institution or e.year or e.score]
        if not entries:
            return []
        flowables = self._heading("education")
        for entry in entries:
            flowables.append(self._row(_clean(entry.degree or entry.institution), entry.year, width))
            detail = [v for v in (entry.institution if entry.degree else "", entry.score) if v and v.strip()]
            if detail:
                flowables.append(Paragraph(" | ".join(_clean(v) for v in detail), self.styles.body))
        return flowables

    def _list_section(self, section: str, items: list[str]) -> list:
        items = [i for i in items if i.strip()]
        if not items:
            return []
        return [*self._heading(section), *self._bullets(items)]

    def _certifications(self, model: ResumeModel, width: float) -> list:
        return self._list_section("certifications", model.certifications)

    def _achievements(self, model: ResumeModel, width: float) -> list:
        return self._list_section("achievements", model.achievements)

    # --- entry points ---

    def render(self, model: ResumeModel, is_fresher: bool) -> bytes:
        buffer = io.BytesIO()
        doc = self._doc(buffer, f"{model.personal_info.full_name or 'Resume'}".strip())
        width = doc.width

        builders = {
            "summary": self._summary,
            "skills": self._skills,
            "experience": self._experience,
            "projects": self._projects,
            "education": self._education,
            "certifications": self._certifications,
            "achievements": self._achievements,
        }
        flowables = self._header(model)
        for section in self.settings.section_order(is_fresher):
            builder = builders.get(section)
            if builder is not None:
                flowables.extend(builder(model, width))

        if not flowables:
            flowables.append(Paragraph("", self.styles.body))
        doc.build(flowables)
        logger.info("Rendered resume PDF (%d bytes, fresher=%s)", buffer.tell(), is_fresher)
        return buffer.getvalue()

    def render_text(self, lines: list[str], headings: frozenset[str] | set[str] = frozenset()) -> bytes:
        """Render linear text; lines found in ``headings`` are set bold, blank lines become gaps."""
        buffer = io.BytesIO()
        doc = self._doc(buffer, "Resume")
        flowables = []
        for line in lines:
            stripped = line.strip()
            if not stripped:
                flowables.append(Spacer(1, self.settings.space("afterSectionHeading", 4)))
            elif stripped in headings:
                flowables.extend([Paragraph(escape(stripped), self.styles.heading), self._rule()])
            else:
                flowables.append(Paragraph(_clean(stripped), self.styles.body))

        if not flowables:
            flowables.append(Paragraph("", self.styles.body))
        doc.build(flowables)
        logger.info("Rendered text PDF (%d lines, %d bytes)", len(lines), buffer.tell())
        return buffer.getvalue()


def render_resume_pdf(model: ResumeModel, is_fresher: bool) -> bytes:
    return PdfRenderer().render(model, is_fresher)


def resume_filename(full_name: str, settings: RenderSettings | None = None) -> str:
    """Apply the configured ``{FirstName}_{LastName}_Resume.pdf`` pattern."""
    settings = settings or get_render_settings()
    parts = [re.sub(r"[^\w\-]", "", p) for p in full_name.split()]
    parts = [p for p in parts if p]
    first = parts[0] if parts else "Candidate"
    last = parts[-1] if len(parts) > 1 else ""
    name = settings.file_pattern.replace("{FirstName}", first).replace("{LastName}", last)
    return re.sub(r"_{2,}", "_", name)


def enhanced_filename(full_name: str) -> str:
    """``<FullName>_Enhanced_Resume.pdf`` with whitespace replaced by underscores."""
    name = "_".join(full_name.split()) or "User"
    return f"{name}_Enhanced_Resume.pdf"
