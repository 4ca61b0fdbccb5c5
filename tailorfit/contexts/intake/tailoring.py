"""
Interface to the AI resume rewriting service.

The service itself (prompts, model calls, retries) lives outside this package.
Implementations of ResumeTailor return plain wire dictionaries; this module
validates them into resume values and pairs them with the source layout.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict

from tailorfit.contexts.intake.logger import _log_debug, _log_error, _log_info
from tailorfit.contexts.intake.source_layout import extract_source_layout
from tailorfit.contexts.modeling.exceptions import InvalidResumeDataError
from tailorfit.contexts.modeling.resume_data_structure import SourceLayout, TailoredResume


class ResumeTailor(ABC):
    """
    Abstract rewriting service.

    Both methods may be slow or fail; failures propagate to the caller.
    """

    @abstractmethod
    def parse_resume(self, raw_text: str) -> Dict[str, Any]:
        """Parse raw resume text into the resume wire shape."""
        pass

    @abstractmethod
    def tailor_resume(self, parsed: Dict[str, Any], job_description: str) -> Dict[str, Any]:
        """Rewrite a parsed resume (wire shape) for a job description."""
        pass


@dataclass
class TailoringResult:
    """
    Tailored resume plus the layout of the document it came from.

    Attributes:
        parsed: Resume as parsed from the upload, before rewriting
        resume: Rewritten resume
        source_layout: Section layout of the uploaded document
    """

    parsed: TailoredResume
    resume: TailoredResume
    source_layout: SourceLayout


def tailor_resume_from_text(raw_text: str, job_description: str, tailor: ResumeTailor) -> TailoringResult:
    """
    Parse, extract the layout of, and rewrite an uploaded resume.

    Args:
        raw_text: Text extracted from the uploaded document
        job_description: Target job description
        tailor: Rewriting service

    Returns:
        TailoringResult

    Raises:
        InvalidResumeDataError: If the service returns data that does not match the resume shape
    """
    _log_info("Parsing uploaded resume")
    parsed_wire = tailor.parse_resume(raw_text)
    try:
        parsed = TailoredResume.from_dict(parsed_wire)
    except InvalidResumeDataError as e:
        _log_error(f"Parsed resume is malformed: {e}")
        raise

    source_layout = extract_source_layout(raw_text, parsed)

    _log_info("Tailoring resume to job description")
    tailored_wire = tailor.tailor_resume(parsed.to_dict(), job_description)
    try:
        resume = TailoredResume.from_dict(tailored_wire)
    except InvalidResumeDataError as e:
        _log_error(f"Tailored resume is malformed: {e}")
        raise

    _log_debug(
        f"Tailored resume: {len(resume.experience)} roles, {len(resume.skills)} skill lines"
    )
    return TailoringResult(parsed=parsed, resume=resume, source_layout=source_layout)
