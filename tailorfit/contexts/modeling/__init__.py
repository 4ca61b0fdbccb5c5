"""
Modeling Context

Responsibilities:
- Represents the tailored resume and source layout as immutable values
- Validates wire data into those values
- Sanitizes text and normalizes skill lines
- Builds the canonical paragraph sequence printed by every output format
- Resolves the paragraph style table (defaults + YAML overrides)
- Applies editor updates and fingerprints export inputs

Owns: Resume values, canonical document model, style table
Never: Measures text or decides line/page breaks
"""

from tailorfit.contexts.modeling.config_resolver import (
    ParagraphStyleOptions,
    ParagraphStyleTable,
    build_style_table,
    load_style_table,
)
from tailorfit.contexts.modeling.document_model import (
    DocumentModel,
    Paragraph,
    build_document_model,
)
from tailorfit.contexts.modeling.exceptions import (
    FontResourceError,
    InvalidResumeDataError,
    OnePageFitConflictError,
    RenderParityError,
)
from tailorfit.contexts.modeling.resume_data_structure import (
    BulletPoint,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    SourceLayout,
    SourceSection,
    TailoredResume,
    load_payload,
)
from tailorfit.contexts.modeling.revision import compute_export_revision

__all__ = [
    # Resume values
    "BulletPoint",
    "ExperienceEntry",
    "EducationEntry",
    "ProjectEntry",
    "TailoredResume",
    "SourceSection",
    "SourceLayout",
    "load_payload",
    # Canonical document model
    "Paragraph",
    "DocumentModel",
    "build_document_model",
    # Style table
    "ParagraphStyleOptions",
    "ParagraphStyleTable",
    "build_style_table",
    "load_style_table",
    # Fingerprinting
    "compute_export_revision",
    # Exceptions
    "InvalidResumeDataError",
    "FontResourceError",
    "RenderParityError",
    "OnePageFitConflictError",
]
