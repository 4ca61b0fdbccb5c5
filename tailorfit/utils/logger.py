"""
Session logging for tailorfit contexts.

Each CLI command opens one session directory holding a single log file. The
file records the run's provenance (command line, interpreter, rendering
library versions and the style configuration in effect) before any context
message, so an exported document can be traced back to the exact setup that
produced it.

Context modules never call this directly; they go through
contexts/{context}/logger.py, which adds the context prefix.
"""

import os
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

# Distributions whose versions change rendered output
RENDERING_DISTRIBUTIONS = ("tailorfit", "reportlab", "python-docx")


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
) -> Path:
    """
    Open a logging session for one context.

    Replaces any existing sinks with a DEBUG file sink at
    log_dir/{context_name}.log and an INFO console sink, then writes the
    provenance header.

    Args:
        context_name: Context identifier ("model", "render", "fit", "intake")
        log_dir: Session directory, created if missing
        extra_provenance: Context-specific header fields (e.g. {"Line budget": 58})

    Returns:
        Path to log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.level("WARNING", color="<yellow>")
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    log_provenance(context_name, extra_provenance)

    return log_file


def _distribution_version(name: str) -> str:
    try:
        return version(name)
    except PackageNotFoundError:
        return "not installed"


def log_provenance(context_name: str, extra_context: dict = None) -> None:
    """Write the session header: command, interpreter, library versions, style config."""
    logger.info("=" * 80)
    logger.info(f"tailorfit session: {context_name}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")
    versions = ", ".join(f"{name} {_distribution_version(name)}" for name in RENDERING_DISTRIBUTIONS)
    logger.info(f"Libraries: {versions}")
    logger.info(f"Style config: {os.getenv('TAILORFIT_STYLE_CONFIG') or 'built-in defaults'}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
