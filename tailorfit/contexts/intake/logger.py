"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from tailorfit.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(log_dir: Path) -> Path:
    """
    Setup logger for intake context.

    Args:
        log_dir: Directory for this intake session

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="intake", log_dir=log_dir)


# Wrapper functions with automatic [intake] prefix


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [intake] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level intake-specific logging helpers


def log_source_layout(layout, used_default: bool) -> None:
    """Log the sections found in a source document."""
    if used_default:
        _log_warning("No section headings found; using default section layout")
        return
    _log_info(f"Source layout: {len(layout.sections)} sections")
    for section in layout.sections:
        _log_debug(f"  {section.kind}: '{section.heading}' ({len(section.lines)} lines)")
