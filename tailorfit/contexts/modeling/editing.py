"""
Immutable resume edits.

Each update returns a new TailoredResume, or the same object when the edit
changes nothing, so callers can skip recomputing plans and exports by identity.
Out-of-range indices are ignored (the resume is returned unchanged).
"""

from dataclasses import replace
from typing import Optional

from tailorfit.contexts.modeling.resume_data_structure import BulletPoint, TailoredResume
from tailorfit.contexts.modeling.skills import parse_skills_editor_input

CONTACT_FIELDS = ("name", "email", "phone", "linkedin", "github", "website")
NULLABLE_CONTACT_FIELDS = ("linkedin", "github", "website")
EXPERIENCE_FIELDS = ("company", "title", "location", "date_range")
EDUCATION_FIELDS = ("institution", "degree", "date_range", "gpa", "honors")
NULLABLE_EDUCATION_FIELDS = ("gpa", "honors")
PROJECT_FIELDS = ("name", "technologies")


def _to_nullable_text(value: str) -> Optional[str]:
    trimmed = value.strip()
    return trimmed or None


def _check_field(field: str, allowed: tuple, kind: str) -> None:
    if field not in allowed:
        raise ValueError(f"Unknown {kind} field '{field}'. Expected one of {list(allowed)}")


def update_contact_field(resume: TailoredResume, field: str, value: str) -> TailoredResume:
    """Set a contact field; blank linkedin/github/website become None."""
    _check_field(field, CONTACT_FIELDS, "contact")
    next_value = _to_nullable_text(value) if field in NULLABLE_CONTACT_FIELDS else value
    if getattr(resume, field) == next_value:
        return resume
    return replace(resume, **{field: next_value})


def update_summary(resume: TailoredResume, value: str) -> TailoredResume:
    next_summary = _to_nullable_text(value)
    if resume.summary == next_summary:
        return resume
    return replace(resume, summary=next_summary)


def update_skills_from_editor_input(resume: TailoredResume, editor_value: str) -> TailoredResume:
    """Replace the skill lines with the parsed free-text editor value."""
    parsed = parse_skills_editor_input(editor_value)
    if resume.skills == parsed:
        return resume
    return replace(resume, skills=parsed)


def update_experience_field(
    resume: TailoredResume, entry_index: int, field: str, value: str
) -> TailoredResume:
    _check_field(field, EXPERIENCE_FIELDS, "experience")
    if not 0 <= entry_index < len(resume.experience):
        return resume
    current = resume.experience[entry_index]
    if getattr(current, field) == value:
        return resume

    experience = list(resume.experience)
    experience[entry_index] = replace(current, **{field: value})
    return replace(resume, experience=tuple(experience))


def update_experience_bullet(
    resume: TailoredResume, entry_index: int, bullet_index: int, text: str
) -> TailoredResume:
    if not 0 <= entry_index < len(resume.experience):
        return resume
    entry = resume.experience[entry_index]
    if not 0 <= bullet_index < len(entry.bullets) or entry.bullets[bullet_index].text == text:
        return resume

    bullets = list(entry.bullets)
    bullets[bullet_index] = BulletPoint(text=text)
    experience = list(resume.experience)
    experience[entry_index] = replace(entry, bullets=tuple(bullets))
    return replace(resume, experience=tuple(experience))


def update_education_field(
    resume: TailoredResume, entry_index: int, field: str, value: str
) -> TailoredResume:
    """Set an education field; blank gpa/honors become None."""
    _check_field(field, EDUCATION_FIELDS, "education")
    if not 0 <= entry_index < len(resume.education):
        return resume
    current = resume.education[entry_index]
    next_value = _to_nullable_text(value) if field in NULLABLE_EDUCATION_FIELDS else value
    if getattr(current, field) == next_value:
        return resume

    education = list(resume.education)
    education[entry_index] = replace(current, **{field: next_value})
    return replace(resume, education=tuple(education))


def update_project_field(
    resume: TailoredResume, entry_index: int, field: str, value: str
) -> TailoredResume:
    _check_field(field, PROJECT_FIELDS, "project")
    if not resume.projects or not 0 <= entry_index < len(resume.projects):
        return resume
    current = resume.projects[entry_index]
    if getattr(current, field) == value:
        return resume

    projects = list(resume.projects)
    projects[entry_index] = replace(current, **{field: value})
    return replace(resume, projects=tuple(projects))


def update_project_bullet(
    resume: TailoredResume, entry_index: int, bullet_index: int, text: str
) -> TailoredResume:
    if not resume.projects or not 0 <= entry_index < len(resume.projects):
        return resume
    entry = resume.projects[entry_index]
    if not 0 <= bullet_index < len(entry.bullets) or entry.bullets[bullet_index].text == text:
        return resume

    bullets = list(entry.bullets)
    bullets[bullet_index] = BulletPoint(text=text)
    projects = list(resume.projects)
    projects[entry_index] = replace(entry, bullets=tuple(bullets))
    return replace(resume, projects=tuple(projects))
