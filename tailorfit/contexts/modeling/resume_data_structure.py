"""
Resume Data Structures

Defines the tailored resume and the source layout as immutable values.

A TailoredResume is the structured, editable resume produced by the AI
rewriting step. A SourceLayout is the read-only section map of the original
uploaded document: it supplies section order and headings and keeps custom
content the structured resume cannot represent.

Both values round-trip through the wire shape used by the tailoring service
(camelCase keys, bullets as {"text": ...} objects).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from tailorfit.contexts.modeling.exceptions import InvalidResumeDataError

SECTION_KINDS = ("summary", "skills", "experience", "education", "projects", "custom")


def _require_str(data: Dict[str, Any], key: str, path: str) -> str:
    if key not in data:
        raise InvalidResumeDataError(f"Missing required field '{key}'", path)
    value = data[key]
    if not isinstance(value, str):
        raise InvalidResumeDataError(
            f"Field '{key}' must be a string, got {type(value).__name__}", f"{path}.{key}"
        )
    return value


def _optional_str(data: Dict[str, Any], key: str, path: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidResumeDataError(
            f"Field '{key}' must be a string or null, got {type(value).__name__}",
            f"{path}.{key}",
        )
    return value


def _require_list(data: Dict[str, Any], key: str, path: str) -> List[Any]:
    value = data.get(key)
    if not isinstance(value, (list, tuple)):
        raise InvalidResumeDataError(f"Field '{key}' must be a list", f"{path}.{key}")
    return list(value)


def _require_mapping(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise InvalidResumeDataError(f"Expected an object, got {type(value).__name__}", path)
    return value


@dataclass(frozen=True)
class BulletPoint:
    """A single resume bullet."""

    text: str

    @classmethod
    def from_dict(cls, data: Any, path: str = "bullet") -> "BulletPoint":
        if isinstance(data, str):
            return cls(text=data)
        data = _require_mapping(data, path)
        return cls(text=_require_str(data, "text", path))

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text}


def _bullets_from_list(items: List[Any], path: str) -> Tuple[BulletPoint, ...]:
    return tuple(
        BulletPoint.from_dict(item, f"{path}.bullets[{i}]") for i, item in enumerate(items)
    )


@dataclass(frozen=True)
class ExperienceEntry:
    """
    One role in the experience section.

    Attributes:
        company: Employer name
        title: Job title
        location: Location text (may be blank)
        date_range: Free-form date range (e.g., "Jan 2022 - Present")
        bullets: Ordered bullets, most important first
    """

    company: str
    title: str
    location: str
    date_range: str
    bullets: Tuple[BulletPoint, ...] = ()

    @classmethod
    def from_dict(cls, data: Any, path: str = "experience") -> "ExperienceEntry":
        data = _require_mapping(data, path)
        return cls(
            company=_require_str(data, "company", path),
            title=_require_str(data, "title", path),
            location=_optional_str(data, "location", path) or "",
            date_range=_require_str(data, "dateRange", path),
            bullets=_bullets_from_list(_require_list(data, "bullets", path), path),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "company": self.company,
            "title": self.title,
            "location": self.location,
            "dateRange": self.date_range,
            "bullets": [bullet.to_dict() for bullet in self.bullets],
        }


@dataclass(frozen=True)
class EducationEntry:
    """One degree in the education section."""

    institution: str
    degree: str
    date_range: str
    gpa: Optional[str] = None
    honors: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, path: str = "education") -> "EducationEntry":
        data = _require_mapping(data, path)
        return cls(
            institution=_require_str(data, "institution", path),
            degree=_require_str(data, "degree", path),
            date_range=_require_str(data, "dateRange", path),
            gpa=_optional_str(data, "gpa", path),
            honors=_optional_str(data, "honors", path),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "institution": self.institution,
            "degree": self.degree,
            "dateRange": self.date_range,
            "gpa": self.gpa,
            "honors": self.honors,
        }


@dataclass(frozen=True)
class ProjectEntry:
    """One project in the projects section."""

    name: str
    technologies: str
    bullets: Tuple[BulletPoint, ...] = ()

    @classmethod
    def from_dict(cls, data: Any, path: str = "projects") -> "ProjectEntry":
        data = _require_mapping(data, path)
        return cls(
            name=_require_str(data, "name", path),
            technologies=_optional_str(data, "technologies", path) or "",
            bullets=_bullets_from_list(_require_list(data, "bullets", path), path),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "technologies": self.technologies,
            "bullets": [bullet.to_dict() for bullet in self.bullets],
        }


@dataclass(frozen=True)
class TailoredResume:
    """
    Structured, editable resume.

    Every edit produces a new value (see modeling.editing), so pagination plans
    and exports can be recomputed deterministically from a single snapshot.

    Attributes:
        name: Candidate name
        email: Email address
        phone: Phone number
        linkedin: Optional LinkedIn URL
        github: Optional GitHub URL
        website: Optional personal website
        summary: Optional summary paragraph
        skills: Flat skill lines ("Languages: Python, Go" or pipe-joined groups)
        experience: Experience entries, most recent first
        education: Education entries
        projects: Optional project entries (None when the resume has no projects)
    """

    name: str
    email: str
    phone: str
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None
    summary: Optional[str] = None
    skills: Tuple[str, ...] = ()
    experience: Tuple[ExperienceEntry, ...] = ()
    education: Tuple[EducationEntry, ...] = ()
    projects: Optional[Tuple[ProjectEntry, ...]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "TailoredResume":
        """
        Build a resume from its wire shape.

        Raises:
            InvalidResumeDataError: If a required field is missing or has the wrong type
        """
        data = _require_mapping(data, "resume")

        skills = _require_list(data, "skills", "resume")
        for i, skill in enumerate(skills):
            if not isinstance(skill, str):
                raise InvalidResumeDataError("Skill lines must be strings", f"resume.skills[{i}]")

        projects = data.get("projects")
        if projects is not None:
            if not isinstance(projects, (list, tuple)):
                raise InvalidResumeDataError("Field 'projects' must be a list or null", "resume.projects")
            projects = tuple(
                ProjectEntry.from_dict(item, f"resume.projects[{i}]")
                for i, item in enumerate(projects)
            )

        return cls(
            name=_require_str(data, "name", "resume"),
            email=_optional_str(data, "email", "resume") or "",
            phone=_optional_str(data, "phone", "resume") or "",
            linkedin=_optional_str(data, "linkedin", "resume"),
            github=_optional_str(data, "github", "resume"),
            website=_optional_str(data, "website", "resume"),
            summary=_optional_str(data, "summary", "resume"),
            skills=tuple(skills),
            experience=tuple(
                ExperienceEntry.from_dict(item, f"resume.experience[{i}]")
                for i, item in enumerate(_require_list(data, "experience", "resume"))
            ),
            education=tuple(
                EducationEntry.from_dict(item, f"resume.education[{i}]")
                for i, item in enumerate(_require_list(data, "education", "resume"))
            ),
            projects=projects,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "linkedin": self.linkedin,
            "github": self.github,
            "website": self.website,
            "summary": self.summary,
            "skills": list(self.skills),
            "experience": [entry.to_dict() for entry in self.experience],
            "education": [entry.to_dict() for entry in self.education],
            "projects": (
                None if self.projects is None else [entry.to_dict() for entry in self.projects]
            ),
        }


@dataclass(frozen=True)
class SourceSection:
    """
    One section of the original uploaded document.

    Attributes:
        kind: One of SECTION_KINDS
        heading: Heading text as it appeared in the source
        lines: Raw content lines under the heading
        education_detail_blocks: Per-education-entry freeform lines (education only)
    """

    kind: str
    heading: str
    lines: Tuple[str, ...] = ()
    education_detail_blocks: Optional[Tuple[Tuple[str, ...], ...]] = None

    @classmethod
    def from_dict(cls, data: Any, path: str = "sourceLayout.sections") -> "SourceSection":
        data = _require_mapping(data, path)
        kind = _require_str(data, "kind", path)
        if kind not in SECTION_KINDS:
            raise InvalidResumeDataError(
                f"Unknown section kind '{kind}'. Expected one of {list(SECTION_KINDS)}",
                f"{path}.kind",
            )

        lines = _require_list(data, "lines", path)
        if not all(isinstance(line, str) for line in lines):
            raise InvalidResumeDataError("Section lines must be strings", f"{path}.lines")

        blocks = data.get("educationDetailBlocks")
        if blocks is not None:
            if not isinstance(blocks, (list, tuple)) or not all(
                isinstance(block, (list, tuple)) and all(isinstance(line, str) for line in block)
                for block in blocks
            ):
                raise InvalidResumeDataError(
                    "educationDetailBlocks must be a list of string lists",
                    f"{path}.educationDetailBlocks",
                )
            blocks = tuple(tuple(block) for block in blocks)

        return cls(
            kind=kind,
            heading=_optional_str(data, "heading", path) or "",
            lines=tuple(lines),
            education_detail_blocks=blocks,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "kind": self.kind,
            "heading": self.heading,
            "lines": list(self.lines),
        }
        if self.education_detail_blocks is not None:
            data["educationDetailBlocks"] = [list(block) for block in self.education_detail_blocks]
        return data


@dataclass(frozen=True)
class SourceLayout:
    """Ordered section map of the original document."""

    sections: Tuple[SourceSection, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Any) -> "SourceLayout":
        data = _require_mapping(data, "sourceLayout")
        return cls(
            sections=tuple(
                SourceSection.from_dict(item, f"sourceLayout.sections[{i}]")
                for i, item in enumerate(_require_list(data, "sections", "sourceLayout"))
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"sections": [section.to_dict() for section in self.sections]}


def load_payload(data: Any) -> Tuple[TailoredResume, SourceLayout]:
    """
    Split an export payload ({"resume": ..., "sourceLayout": ...}) into values.

    A missing sourceLayout yields an empty layout (default section order applies).
    """
    data = _require_mapping(data, "payload")
    if "resume" not in data:
        raise InvalidResumeDataError("Missing required field 'resume'", "payload")
    resume = TailoredResume.from_dict(data["resume"])
    layout_data = data.get("sourceLayout")
    layout = SourceLayout() if layout_data is None else SourceLayout.from_dict(layout_data)
    return resume, layout
