"""
Section ordering for the canonical document.

The source layout decides which sections print, in which order and under which
heading. Known sections that the layout omits but the resume has content for
are appended in KNOWN_SECTION_ORDER.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from tailorfit.contexts.modeling.resume_data_structure import (
    SourceLayout,
    SourceSection,
    TailoredResume,
)
from tailorfit.contexts.modeling.skills import normalize_skill_lines

KNOWN_SECTION_ORDER = ("summary", "experience", "skills", "education", "projects")

DEFAULT_HEADINGS = {
    "summary": "Summary",
    "skills": "Skills",
    "experience": "Experience",
    "education": "Education",
    "projects": "Projects",
    "custom": "Section",
}


@dataclass(frozen=True)
class RenderSection:
    """A section selected for printing, with its display heading and raw source lines."""

    kind: str
    heading: str
    source_lines: Tuple[str, ...] = ()
    education_detail_blocks: Optional[Tuple[Tuple[str, ...], ...]] = None


def has_content(
    kind: str, resume: TailoredResume, source_section: Optional[SourceSection] = None
) -> bool:
    """True if the resume or the source section has anything to print for this kind."""
    has_source_lines = source_section is not None and len(source_section.lines) > 0

    if kind == "summary":
        return bool(resume.summary) or has_source_lines
    if kind == "skills":
        return len(normalize_skill_lines(resume.skills)) > 0 or has_source_lines
    if kind == "experience":
        return len(resume.experience) > 0 or has_source_lines
    if kind == "education":
        return len(resume.education) > 0 or has_source_lines
    if kind == "projects":
        return bool(resume.projects) or has_source_lines
    if kind == "custom":
        return has_source_lines
    return False


def build_render_sections(resume: TailoredResume, source_layout: SourceLayout) -> List[RenderSection]:
    """
    Resolve the ordered list of sections to print.

    Layout sections come first, in layout order. A known kind is printed once
    (later duplicates are skipped); custom sections are always kept. Missing
    known kinds with resume content follow in KNOWN_SECTION_ORDER under their
    default headings.
    """
    sections: List[RenderSection] = []
    emitted_kinds = set()

    for section in source_layout.sections:
        if not has_content(section.kind, resume, section):
            continue

        if section.kind != "custom":
            if section.kind in emitted_kinds:
                continue
            emitted_kinds.add(section.kind)

        sections.append(
            RenderSection(
                kind=section.kind,
                heading=section.heading or DEFAULT_HEADINGS[section.kind],
                source_lines=section.lines,
                education_detail_blocks=section.education_detail_blocks,
            )
        )

    for kind in KNOWN_SECTION_ORDER:
        if kind in emitted_kinds or not has_content(kind, resume):
            continue
        sections.append(RenderSection(kind=kind, heading=DEFAULT_HEADINGS[kind]))

    return sections
