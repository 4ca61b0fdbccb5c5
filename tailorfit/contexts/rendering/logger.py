"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from tailorfit.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, output_format: str = "pdf") -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this rendering session
        output_format: Output format for provenance ("pdf", "docx" or "bundle")

    Returns:
        Path to log file

    Example:
        from tailorfit.contexts.rendering.logger import setup_rendering_logger

        log_file = setup_rendering_logger(log_dir, output_format="docx")
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Output format": output_format},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_plan_built(plan) -> None:
    """Log page and line totals for a pagination plan."""
    line_count = sum(len(paragraph.lines) for paragraph in plan.paragraphs)
    _log_debug(
        f"Pagination plan: {len(plan.paragraphs)} paragraphs, "
        f"{line_count} lines, {plan.page_count} page(s)"
    )


def log_render_result(renderer: str, byte_count: int, page_count: int) -> None:
    _log_debug(f"{renderer} rendered {byte_count} bytes, {page_count} page(s)")


def log_export_result(
    output_format: str,
    result,  # ExportResult
    elapsed_time: float,
) -> None:
    """
    Log an export with its fitting diagnostics.

    Args:
        output_format: "pdf" or "docx"
        result: ExportResult from the export pipeline
        elapsed_time: Time taken to export
    """
    if result.page_count == 1:
        _log_success(
            f"{output_format.upper()} export: 1 page, {len(result.content)} bytes ({elapsed_time:.2f}s)"
        )
    else:
        _log_warning(
            f"{output_format.upper()} export: {result.page_count} pages, "
            f"{len(result.content)} bytes ({elapsed_time:.2f}s)"
        )
    _log_debug(f"  Revision: {result.revision}")
    _log_debug(f"  Estimated lines: {result.estimated_lines}")
    if result.compaction is not None:
        diagnostics = result.compaction.diagnostics
        _log_debug(
            f"  Compaction: {diagnostics.initial_estimated_lines} -> "
            f"{diagnostics.final_estimated_lines} lines, "
            f"{diagnostics.removed_experience_bullets + diagnostics.removed_project_bullets} bullets "
            f"and {diagnostics.removed_skill_items} skill items removed"
        )


def log_parity_result(result) -> None:
    """Log a renderer parity check (ParityResult)."""
    if result.consistent:
        _log_success(f"Renderer parity OK: {result.plan_pages} page(s)")
    else:
        _log_error(
            f"Renderer parity mismatch: plan={result.plan_pages}, "
            f"pdf={result.pdf_pages}, docx={result.docx_pages}"
        )
