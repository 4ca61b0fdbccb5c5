"""
Cheap line-count estimate of a printed resume.

Counts characters instead of measuring glyphs, so compaction can re-estimate
after every single trim. The estimate can disagree with exact pagination near
the budget; the export pipeline verifies with a real plan afterwards.
"""

import math
from typing import Optional

from tailorfit.contexts.modeling.resume_data_structure import SourceLayout, TailoredResume
from tailorfit.contexts.modeling.resume_layout import build_render_sections
from tailorfit.contexts.modeling.skills import normalize_skill_lines

CHARS_PER_LINE = 95
BULLET_CHARS_PER_LINE = 110

# Name and contact rows
HEADER_LINES = 2


def estimate_wrapped_lines(text: Optional[str], chars_per_line: int = CHARS_PER_LINE) -> int:
    """Lines a text is expected to wrap to: 0 when blank, else at least 1."""
    normalized = (text or "").strip()
    if not normalized:
        return 0
    return max(1, math.ceil(len(normalized) / chars_per_line))


def _estimate_lines(lines) -> int:
    return sum(estimate_wrapped_lines(line) for line in lines)


def estimate_resume_lines(resume: TailoredResume, source_layout: SourceLayout) -> int:
    """
    Estimate printed lines: header rows, plus per section a heading, its content and a spacer.

    Args:
        resume: Tailored resume
        source_layout: Section map of the original document

    Returns:
        Estimated line count
    """
    lines = HEADER_LINES
    skill_lines = normalize_skill_lines(resume.skills)

    for section in build_render_sections(resume, source_layout):
        lines += 1

        if section.kind == "summary":
            if resume.summary:
                lines += estimate_wrapped_lines(resume.summary)
            else:
                lines += _estimate_lines(section.source_lines)

        elif section.kind == "skills":
            fallback = normalize_skill_lines(section.source_lines)
            lines += _estimate_lines(skill_lines or fallback or section.source_lines)

        elif section.kind == "experience":
            if not resume.experience:
                lines += _estimate_lines(section.source_lines)
            for entry in resume.experience:
                lines += 1
                for bullet in entry.bullets:
                    lines += estimate_wrapped_lines(bullet.text, BULLET_CHARS_PER_LINE)

        elif section.kind == "education":
            if not resume.education:
                lines += _estimate_lines(section.source_lines)
            detail_blocks = section.education_detail_blocks or ()
            for i, entry in enumerate(resume.education):
                lines += 1
                if i < len(detail_blocks):
                    lines += _estimate_lines(detail_blocks[i])
                if entry.gpa:
                    lines += estimate_wrapped_lines(f"GPA: {entry.gpa}")
                if entry.honors:
                    lines += estimate_wrapped_lines(entry.honors)

        elif section.kind == "projects":
            if not resume.projects:
                lines += _estimate_lines(section.source_lines)
            for project in resume.projects or ():
                lines += 1
                for bullet in project.bullets:
                    lines += estimate_wrapped_lines(bullet.text, BULLET_CHARS_PER_LINE)

        else:
            lines += _estimate_lines(section.source_lines)

        lines += 1

    return lines
