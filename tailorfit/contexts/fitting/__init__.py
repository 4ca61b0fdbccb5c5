"""
Fitting Context

Responsibilities:
- Estimates printed line counts from character counts
- Trims bullets and skill items until a resume fits one page
- Reports a user-facing reason when a one-page fit is impossible

Owns: Line estimation, compaction order, page budget
Never: Removes custom sections or measures glyphs
"""

from tailorfit.contexts.fitting.compaction import (
    ONE_PAGE_CONFLICT_REASON,
    CompactionDiagnostics,
    CompactionResult,
    compact_resume_for_one_page,
)
from tailorfit.contexts.fitting.estimator import estimate_resume_lines, estimate_wrapped_lines

__all__ = [
    "compact_resume_for_one_page",
    "CompactionResult",
    "CompactionDiagnostics",
    "ONE_PAGE_CONFLICT_REASON",
    "estimate_resume_lines",
    "estimate_wrapped_lines",
]
