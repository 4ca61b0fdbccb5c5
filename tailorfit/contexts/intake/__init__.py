"""
Intake Context

Responsibilities:
- Extracts the section layout (order, headings, raw lines) of an uploaded resume
- Defines the interface to the AI parsing/rewriting service
- Validates service responses into resume values

Owns: Source layout extraction, tailoring orchestration
Never: Lays out or renders documents
"""

from tailorfit.contexts.intake.source_layout import extract_source_layout
from tailorfit.contexts.intake.tailoring import (
    ResumeTailor,
    TailoringResult,
    tailor_resume_from_text,
)

__all__ = [
    "extract_source_layout",
    "ResumeTailor",
    "TailoringResult",
    "tailor_resume_from_text",
]
