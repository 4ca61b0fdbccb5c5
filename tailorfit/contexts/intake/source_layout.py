"""
Source layout extraction from raw resume text.

Finds section headings in the text extracted from the uploaded document and
records, per section, its kind, heading and raw lines. Headings are either
known section names ("Work Experience", "Technical Skills", ...) or, once the
first heading has been seen, short all-caps lines.

Education sections are further split into per-entry detail blocks: a line
that shares at least two 4+ character tokens with an entry's institution and
degree starts that entry's block, and following lines are assigned to it.
"""

import re
from typing import List, Optional, Sequence, Set

from tailorfit.contexts.intake.logger import log_source_layout
from tailorfit.contexts.modeling.resume_data_structure import (
    EducationEntry,
    SourceLayout,
    SourceSection,
    TailoredResume,
)

HEADING_WITH_KEYWORD_PATTERN = re.compile(
    r"^(work experience|professional experience|experience|skills|technical skills|core skills"
    r"|skills & technologies|core competencies|education|project experience|projects"
    r"|project work|summary|achievements|awards|certifications|publications|leadership"
    r"|volunteer experience)$",
    re.IGNORECASE,
)
GENERIC_HEADING_PATTERN = re.compile(r"^[A-Z][A-Z0-9\s&/+.-]{2,40}$")
ARTIFACT_LINES = {"top of form", "bottom of form"}

TOKEN_PATTERN = re.compile(r"[a-z0-9]+")
MIN_TOKEN_LENGTH = 4
MIN_EDUCATION_MATCH_SCORE = 2


def normalize_line(line: str) -> str:
    return re.sub(r"\s+", " ", line).strip()


def classify_heading(heading: str) -> str:
    """Map a heading to a section kind; unrecognized headings are custom."""
    lowered = heading.lower()
    if "summary" in lowered:
        return "summary"
    if "skill" in lowered or "competenc" in lowered:
        return "skills"
    if "education" in lowered:
        return "education"
    if "project" in lowered:
        return "projects"
    if "experience" in lowered:
        return "experience"
    return "custom"


def is_keyword_heading(line: str) -> bool:
    return HEADING_WITH_KEYWORD_PATTERN.match(line) is not None


def is_generic_heading(line: str) -> bool:
    """Short all-caps line without contact details, digits or list punctuation."""
    if not GENERIC_HEADING_PATTERN.match(line):
        return False
    if "@" in line or re.search(r"\d", line) or re.search(r"[,;:]", line):
        return False
    return True


def is_artifact(line: str) -> bool:
    return line.lower() in ARTIFACT_LINES


def tokenize(text: str) -> List[str]:
    return [token for token in TOKEN_PATTERN.findall(text.lower()) if len(token) >= MIN_TOKEN_LENGTH]


def find_education_index(line: str, token_sets: Sequence[Set[str]]) -> int:
    """Index of the education entry a line names, or -1 when no entry scores at least 2."""
    tokens = tokenize(line)
    if not tokens:
        return -1

    best_index = -1
    best_score = 0
    for i, token_set in enumerate(token_sets):
        score = sum(1 for token in tokens if token in token_set)
        if score > best_score:
            best_score = score
            best_index = i

    return best_index if best_score >= MIN_EDUCATION_MATCH_SCORE else -1


def build_education_detail_blocks(
    lines: Sequence[str], education: Sequence[EducationEntry]
) -> tuple:
    """Assign the lines following each entry's own line to that entry."""
    token_sets = [set(tokenize(f"{entry.institution} {entry.degree}")) for entry in education]
    blocks: List[List[str]] = [[] for _ in education]
    active_index = -1

    for line in lines:
        matched = find_education_index(line, token_sets)
        if matched != -1:
            active_index = matched
            continue
        if active_index == -1:
            continue
        blocks[active_index].append(line)

    return tuple(tuple(block) for block in blocks)


def build_default_layout(parsed: TailoredResume) -> SourceLayout:
    sections = [
        SourceSection(kind="experience", heading="Experience"),
        SourceSection(kind="skills", heading="Skills"),
        SourceSection(kind="education", heading="Education"),
    ]
    if parsed.projects:
        sections.append(SourceSection(kind="projects", heading="Projects"))
    return SourceLayout(sections=tuple(sections))


def extract_source_layout(raw_text: str, parsed: TailoredResume) -> SourceLayout:
    """
    Extract the section layout of an uploaded resume.

    Args:
        raw_text: Text extracted from the uploaded document
        parsed: Structured resume parsed from the same text

    Returns:
        SourceLayout; the default layout (experience, skills, education,
        projects if any) when no heading is found
    """
    sections: List[dict] = []
    started = False
    current: Optional[dict] = None

    for raw_line in re.split(r"\r?\n", raw_text):
        line = normalize_line(raw_line)
        if not line or is_artifact(line):
            continue

        if is_keyword_heading(line) or (started and is_generic_heading(line)):
            started = True
            current = {"kind": classify_heading(line), "heading": line, "lines": []}
            sections.append(current)
            continue

        if current is not None:
            current["lines"].append(line)

    if not sections:
        layout = build_default_layout(parsed)
        log_source_layout(layout, used_default=True)
        return layout

    layout = SourceLayout(
        sections=tuple(
            SourceSection(
                kind=section["kind"],
                heading=section["heading"],
                lines=tuple(section["lines"]),
                education_detail_blocks=(
                    build_education_detail_blocks(section["lines"], parsed.education)
                    if section["kind"] == "education" and parsed.education
                    else None
                ),
            )
            for section in sections
        )
    )
    log_source_layout(layout, used_default=False)
    return layout
