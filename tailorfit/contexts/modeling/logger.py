"""
Modeling context logger.

Provides logging interface for modeling context with automatic [model] prefix.
All modeling modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from tailorfit.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[model]"


def setup_modeling_logger(log_dir: Path) -> Path:
    """
    Setup logger for modeling context.

    Args:
        log_dir: Directory for this session

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="model", log_dir=log_dir)


# Wrapper functions with automatic [model] prefix


def _log_info(message: str) -> None:
    """Log info message with [model] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [model] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level modeling-specific logging helpers


def log_document_model_built(resume_name: str, paragraphs) -> None:
    """Log paragraph counts per style for a freshly built document model."""
    counts = {}
    for paragraph in paragraphs:
        counts[paragraph.style] = counts.get(paragraph.style, 0) + 1
    _log_debug(f"Built document model for {resume_name}: {len(paragraphs)} paragraphs")
    for style, count in sorted(counts.items()):
        _log_debug(f"  {style}: {count}")


def log_style_overrides(config_path: Path, overrides: dict) -> None:
    """Log paragraph style overrides loaded from YAML."""
    _log_info(f"Loaded paragraph style overrides from {config_path}")
    for style, options in overrides.items():
        _log_debug(f"  {style}: {options}")
