"""
Canonical Document Model

Converts a TailoredResume plus its SourceLayout into the ordered paragraph
sequence that both the PDF and DOCX outputs print. The sequence is rebuilt
from scratch on every edit; paragraphs are never mutated.

Every emitted string is sanitized (dashes collapsed, whitespace collapsed,
trimmed) and null-like strings are dropped, so no empty paragraph is emitted.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from tailorfit.contexts.modeling.config_resolver import ParagraphStyleTable, load_style_table
from tailorfit.contexts.modeling.logger import log_document_model_built
from tailorfit.contexts.modeling.resume_data_structure import (
    BulletPoint,
    SourceLayout,
    TailoredResume,
)
from tailorfit.contexts.modeling.resume_layout import RenderSection, build_render_sections
from tailorfit.contexts.modeling.skills import normalize_skill_lines
from tailorfit.contexts.modeling.text import is_null_like, sanitize_text

BULLET_GLYPH = "•"
SKILLS_LINE_ROLE = "skillsLine"
CONTACT_SEPARATOR = " | "


@dataclass(frozen=True)
class Paragraph:
    """
    One typed block of text.

    Attributes:
        style: Archetype name (name, contact, sectionHeading, body, entryHeader, bullet)
        text: Sanitized text; bullet paragraphs carry a leading "• "
        semantic_role: "skillsLine" for label/value skill lines, else None
    """

    style: str
    text: str
    semantic_role: Optional[str] = None


@dataclass(frozen=True)
class DocumentModel:
    """Ordered paragraphs plus the style table they are resolved against."""

    paragraphs: Tuple[Paragraph, ...]
    style_table: ParagraphStyleTable


class _ParagraphCollector:
    def __init__(self):
        self.paragraphs: List[Paragraph] = []

    def push(self, style: str, text: Optional[str], semantic_role: Optional[str] = None) -> None:
        sanitized = sanitize_text(text)
        if is_null_like(sanitized):
            return
        self.paragraphs.append(Paragraph(style=style, text=sanitized, semantic_role=semantic_role))

    def push_lines(self, style: str, lines: Iterable[str]) -> None:
        for line in lines:
            self.push(style, line)

    def push_bullets(self, bullets: Iterable[BulletPoint]) -> None:
        for bullet in bullets:
            if is_null_like(bullet.text):
                continue
            self.push("bullet", f"{BULLET_GLYPH} {bullet.text}")


def build_contact_line(resume: TailoredResume) -> str:
    """Join the printable contact fields with " | "; empty when none remain."""
    fields = (resume.email, resume.phone, resume.linkedin, resume.github, resume.website)
    parts = [sanitize_text(value) for value in fields if not is_null_like(value)]
    return CONTACT_SEPARATOR.join(part for part in parts if not is_null_like(part))


def _skill_lines_for(resume: TailoredResume, section: RenderSection) -> Tuple[str, ...]:
    lines = tuple(
        line
        for line in (sanitize_text(raw) for raw in normalize_skill_lines(resume.skills))
        if not is_null_like(line)
    )
    if lines:
        return lines
    fallback = normalize_skill_lines(section.source_lines)
    return fallback if fallback else section.source_lines


def _emit_section(collector: _ParagraphCollector, resume: TailoredResume, section: RenderSection) -> None:
    collector.push("sectionHeading", section.heading)

    if section.kind == "summary":
        if not is_null_like(resume.summary):
            collector.push("body", resume.summary)
        else:
            collector.push_lines("body", section.source_lines)

    elif section.kind == "skills":
        for line in _skill_lines_for(resume, section):
            collector.push("body", line, SKILLS_LINE_ROLE)

    elif section.kind == "experience":
        if not resume.experience:
            collector.push_lines("body", section.source_lines)
        for entry in resume.experience:
            location = "" if is_null_like(entry.location) else f" ({sanitize_text(entry.location)})"
            collector.push(
                "entryHeader", f"{entry.title}, {entry.company}{location}  {entry.date_range}"
            )
            collector.push_bullets(entry.bullets)

    elif section.kind == "education":
        if not resume.education:
            collector.push_lines("body", section.source_lines)
        detail_blocks = section.education_detail_blocks or ()
        for i, entry in enumerate(resume.education):
            collector.push("entryHeader", f"{entry.degree}, {entry.institution} - {entry.date_range}")
            if not is_null_like(entry.gpa):
                collector.push("body", f"GPA: {sanitize_text(entry.gpa)}")
            if not is_null_like(entry.honors):
                collector.push("body", entry.honors)
            if i < len(detail_blocks):
                collector.push_lines("body", detail_blocks[i])

    elif section.kind == "projects":
        if not resume.projects:
            collector.push_lines("body", section.source_lines)
        for project in resume.projects or ():
            if is_null_like(project.technologies):
                header = project.name
            else:
                header = f"{project.name}: {project.technologies}"
            collector.push("entryHeader", header)
            collector.push_bullets(project.bullets)

    else:
        # Custom sections print verbatim from the source document
        collector.push_lines("body", section.source_lines)


def build_document_model(
    resume: TailoredResume,
    source_layout: SourceLayout,
    style_table: Optional[ParagraphStyleTable] = None,
) -> DocumentModel:
    """
    Build the canonical paragraph sequence for a resume.

    Args:
        resume: Tailored resume snapshot
        source_layout: Section map of the original document
        style_table: Style table to carry (defaults to load_style_table())

    Returns:
        DocumentModel with paragraphs in print order
    """
    if style_table is None:
        style_table = load_style_table()

    collector = _ParagraphCollector()
    collector.push("name", resume.name)

    contact_line = build_contact_line(resume)
    if contact_line:
        collector.push("contact", contact_line)

    for section in build_render_sections(resume, source_layout):
        _emit_section(collector, resume, section)

    log_document_model_built(sanitize_text(resume.name), collector.paragraphs)
    return DocumentModel(paragraphs=tuple(collector.paragraphs), style_table=style_table)
