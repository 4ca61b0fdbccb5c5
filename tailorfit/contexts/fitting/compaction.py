"""
One-page compaction.

Reduces a resume until its estimated line count fits the page budget. Each
trim produces a new immutable snapshot; the estimate is re-checked after
every trim and compaction stops as soon as it fits.

Reduction order:
    1. Normalize skill lines
    2. Trim experience bullets (last entry first, never below one per entry)
    3. Trim project bullets (same rule)
    4. Remove skill items, lowest-value categories first

Custom sections are never touched, so a resume whose custom content alone
overflows the page cannot fit; that case is reported with fits=False.
"""

import os
from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple

from dotenv import load_dotenv

from tailorfit.contexts.fitting.estimator import estimate_resume_lines
from tailorfit.contexts.fitting.logger import log_compaction_result, log_compaction_step
from tailorfit.contexts.modeling.resume_data_structure import SourceLayout, TailoredResume
from tailorfit.contexts.modeling.skills import normalize_skill_lines, remove_one_skill_item

load_dotenv()

DEFAULT_MAX_ESTIMATED_LINES = int(os.getenv("TAILORFIT_MAX_ESTIMATED_LINES", "58"))

ONE_PAGE_CONFLICT_REASON = (
    "Strict one-page fit conflicts with preserving all source content. "
    "Reduce section content manually."
)


@dataclass(frozen=True)
class CompactionDiagnostics:
    """
    What compaction did.

    Attributes:
        max_estimated_lines: Budget used
        initial_estimated_lines: Estimate before any trim (after skill normalization)
        final_estimated_lines: Estimate of the returned resume
        removed_experience_bullets: Bullets trimmed from experience entries
        removed_project_bullets: Bullets trimmed from project entries
        removed_skill_items: Skill items (or whole skill lines) removed
    """

    max_estimated_lines: int
    initial_estimated_lines: int
    final_estimated_lines: int
    removed_experience_bullets: int = 0
    removed_project_bullets: int = 0
    removed_skill_items: int = 0


@dataclass(frozen=True)
class CompactionResult:
    """
    Result of one-page compaction.

    Attributes:
        resume: Reduced resume (best effort when fits is False)
        source_layout: Source layout (returned unchanged)
        estimated_lines: Final estimate
        fits: Whether the estimate is within budget
        reason: User-facing explanation when fits is False
        diagnostics: Per-step counts
    """

    resume: TailoredResume
    source_layout: SourceLayout
    estimated_lines: int
    fits: bool
    reason: Optional[str]
    diagnostics: CompactionDiagnostics


def _trim_last_bullets(
    entries: Tuple, fits: Callable[[Tuple], bool]
) -> Tuple[Tuple, int]:
    """
    Remove trailing bullets, last entry first, until fits() holds.

    Stops early when every entry is down to one bullet.

    Returns:
        (entries, removed_count)
    """
    removed = 0
    while not fits(entries):
        removed_this_round = False
        for index in range(len(entries) - 1, -1, -1):
            entry = entries[index]
            if len(entry.bullets) <= 1:
                continue
            entries = (
                entries[:index] + (replace(entry, bullets=entry.bullets[:-1]),) + entries[index + 1 :]
            )
            removed += 1
            removed_this_round = True
            if fits(entries):
                break
        if not removed_this_round:
            break
    return entries, removed


def compact_resume_for_one_page(
    resume: TailoredResume,
    source_layout: SourceLayout,
    max_estimated_lines: Optional[int] = None,
) -> CompactionResult:
    """
    Trim a resume until its estimated line count fits the budget.

    Args:
        resume: Resume snapshot (never modified)
        source_layout: Source layout (never modified)
        max_estimated_lines: Line budget (default: TAILORFIT_MAX_ESTIMATED_LINES or 58)

    Returns:
        CompactionResult; fits=False with a reason when every step is exhausted
    """
    if max_estimated_lines is None:
        max_estimated_lines = DEFAULT_MAX_ESTIMATED_LINES
    max_estimated_lines = max(1, max_estimated_lines)

    def estimate(candidate: TailoredResume) -> int:
        return estimate_resume_lines(candidate, source_layout)

    working = replace(resume, skills=normalize_skill_lines(resume.skills))
    estimated_lines = estimate(working)
    initial_estimated_lines = estimated_lines
    removed_experience_bullets = 0
    removed_project_bullets = 0
    removed_skill_items = 0

    if estimated_lines > max_estimated_lines:
        experience, removed_experience_bullets = _trim_last_bullets(
            working.experience,
            lambda entries: estimate(replace(working, experience=entries)) <= max_estimated_lines,
        )
        working = replace(working, experience=experience)
        estimated_lines = estimate(working)
        log_compaction_step("experience bullets", estimated_lines)

    if estimated_lines > max_estimated_lines and working.projects:
        projects, removed_project_bullets = _trim_last_bullets(
            working.projects,
            lambda entries: estimate(replace(working, projects=entries)) <= max_estimated_lines,
        )
        working = replace(working, projects=projects)
        estimated_lines = estimate(working)
        log_compaction_step("project bullets", estimated_lines)

    while estimated_lines > max_estimated_lines and working.skills:
        next_skills, operation = remove_one_skill_item(working.skills)
        if operation is None or next_skills == working.skills:
            break
        working = replace(working, skills=next_skills)
        removed_skill_items += 1
        estimated_lines = estimate(working)
    if removed_skill_items:
        log_compaction_step("skill items", estimated_lines)

    fits = estimated_lines <= max_estimated_lines
    result = CompactionResult(
        resume=working,
        source_layout=source_layout,
        estimated_lines=estimated_lines,
        fits=fits,
        reason=None if fits else ONE_PAGE_CONFLICT_REASON,
        diagnostics=CompactionDiagnostics(
            max_estimated_lines=max_estimated_lines,
            initial_estimated_lines=initial_estimated_lines,
            final_estimated_lines=estimated_lines,
            removed_experience_bullets=removed_experience_bullets,
            removed_project_bullets=removed_project_bullets,
            removed_skill_items=removed_skill_items,
        ),
    )
    log_compaction_result(resume.name, result)
    return result
