"""
Fitting context logger.

Provides logging interface for fitting context with automatic [fit] prefix.
All fitting modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from tailorfit.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[fit]"


def setup_fitting_logger(log_dir: Path, max_estimated_lines: int) -> Path:
    """
    Setup logger for fitting context.

    Args:
        log_dir: Directory for this fitting session
        max_estimated_lines: Line budget, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="fit",
        log_dir=log_dir,
        extra_provenance={"Line budget": max_estimated_lines},
    )


# Wrapper functions with automatic [fit] prefix


def _log_success(message: str) -> None:
    """Log success message with [fit] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [fit] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [fit] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level fitting-specific logging helpers


def log_compaction_step(step: str, estimated_lines: int) -> None:
    _log_debug(f"  after {step}: {estimated_lines} lines")


def log_compaction_result(resume_name: str, result) -> None:
    """
    Log a compaction result.

    Args:
        resume_name: Candidate name
        result: CompactionResult from compact_resume_for_one_page()
    """
    diagnostics = result.diagnostics
    summary = (
        f"{resume_name}: {diagnostics.initial_estimated_lines} -> "
        f"{diagnostics.final_estimated_lines} estimated lines "
        f"(budget {diagnostics.max_estimated_lines})"
    )
    if result.fits:
        _log_success(f"Fits one page. {summary}")
    else:
        _log_warning(f"Does not fit one page. {summary}")
        _log_warning(f"  {result.reason}")

    _log_debug(f"  Experience bullets removed: {diagnostics.removed_experience_bullets}")
    _log_debug(f"  Project bullets removed: {diagnostics.removed_project_bullets}")
    _log_debug(f"  Skill items removed: {diagnostics.removed_skill_items}")
