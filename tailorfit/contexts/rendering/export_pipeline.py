"""
Export pipeline.

Orchestrates compaction, the document model, pagination and the renderers:

    resume + layout
        -> compact_resume_for_one_page (estimate-based)
        -> build_document_model -> build_pagination_plan (exact metrics)
        -> exact verification: tighten the budget while the plan spills over
        -> render_pdf / render_docx

A resume that cannot fit one page is refused with OnePageFitConflictError
unless allow_multi_page is set.
"""

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from tailorfit.contexts.fitting.compaction import (
    DEFAULT_MAX_ESTIMATED_LINES,
    ONE_PAGE_CONFLICT_REASON,
    CompactionResult,
    compact_resume_for_one_page,
)
from tailorfit.contexts.fitting.estimator import estimate_resume_lines
from tailorfit.contexts.modeling.config_resolver import ParagraphStyleTable, load_style_table
from tailorfit.contexts.modeling.document_model import DocumentModel, build_document_model
from tailorfit.contexts.modeling.exceptions import OnePageFitConflictError, RenderParityError
from tailorfit.contexts.modeling.resume_data_structure import SourceLayout, TailoredResume
from tailorfit.contexts.modeling.revision import compute_export_revision
from tailorfit.contexts.rendering.docx_renderer import render_docx
from tailorfit.contexts.rendering.logger import _log_debug, _log_info, log_export_result
from tailorfit.contexts.rendering.measurement import ReportLabTextMeasure, TextMeasure
from tailorfit.contexts.rendering.pagination import PaginationPlan, build_pagination_plan
from tailorfit.contexts.rendering.pdf_renderer import render_pdf
from tailorfit.contexts.rendering.validator import ParityResult, check_renderer_parity

# Lowest budget the exact verification pass may tighten to
MIN_VERIFICATION_BUDGET = 1


@dataclass
class PreparedExport:
    """
    Everything needed to render, computed once for both formats.

    Attributes:
        resume: Resume actually printed (after compaction)
        source_layout: Source layout
        model: Canonical document model of the printed resume
        plan: Pagination plan of the model
        compaction: Final compaction result (None when compaction was skipped)
        revision: Fingerprint of the input (pre-compaction) resume and layout
        estimated_lines: Line estimate of the printed resume
    """

    resume: TailoredResume
    source_layout: SourceLayout
    model: DocumentModel
    plan: PaginationPlan
    compaction: Optional[CompactionResult]
    revision: str
    estimated_lines: int


@dataclass
class ExportResult:
    """
    A rendered export.

    Attributes:
        output_format: "pdf" or "docx"
        content: Rendered bytes
        page_count: Realized (PDF) or implied (DOCX) page count
        estimated_lines: Line estimate of the printed resume
        revision: Fingerprint of the input resume and layout
        compaction: Compaction result (None when compaction was skipped)
        plan: Pagination plan the bytes were rendered from
    """

    output_format: str
    content: bytes
    page_count: int
    estimated_lines: int
    revision: str
    compaction: Optional[CompactionResult]
    plan: PaginationPlan


@dataclass
class ExportBundle:
    """PDF and DOCX rendered from one plan, with their parity check."""

    pdf: ExportResult
    docx: ExportResult
    parity: ParityResult


def _refuse(compaction: CompactionResult, page_count: Optional[int] = None):
    raise OnePageFitConflictError(
        compaction.reason or ONE_PAGE_CONFLICT_REASON,
        compaction.estimated_lines,
        page_count,
    )


def prepare_export(
    resume: TailoredResume,
    source_layout: SourceLayout,
    measure: Optional[TextMeasure] = None,
    compact: bool = True,
    verify_exact: bool = True,
    allow_multi_page: bool = False,
    max_estimated_lines: Optional[int] = None,
    style_table: Optional[ParagraphStyleTable] = None,
) -> PreparedExport:
    """
    Compact, model and paginate a resume.

    Args:
        resume: Resume snapshot
        source_layout: Source layout
        measure: Text measurer (defaults to ReportLabTextMeasure)
        compact: Run one-page compaction first
        verify_exact: After compaction, tighten the budget one line at a time
            while the exact plan still spans more than one page
        allow_multi_page: Export even when one page cannot be reached
        max_estimated_lines: Initial compaction budget
        style_table: Style table (defaults to load_style_table())

    Returns:
        PreparedExport

    Raises:
        OnePageFitConflictError: If one page cannot be reached and allow_multi_page is False
    """
    if measure is None:
        measure = ReportLabTextMeasure()
    if style_table is None:
        style_table = load_style_table()
    budget = DEFAULT_MAX_ESTIMATED_LINES if max_estimated_lines is None else max_estimated_lines

    compaction = None
    printed = resume
    if compact:
        compaction = compact_resume_for_one_page(resume, source_layout, budget)
        if not compaction.fits and not allow_multi_page:
            _refuse(compaction)
        printed = compaction.resume

    model = build_document_model(printed, source_layout, style_table)
    plan = build_pagination_plan(model, measure)

    if compact and verify_exact:
        while plan.page_count > 1 and compaction.fits and budget > MIN_VERIFICATION_BUDGET:
            budget -= 1
            _log_debug(f"Exact plan spans {plan.page_count} pages; retrying with budget {budget}")
            compaction = compact_resume_for_one_page(resume, source_layout, budget)
            printed = compaction.resume
            model = build_document_model(printed, source_layout, style_table)
            plan = build_pagination_plan(model, measure)

        if plan.page_count > 1 and not allow_multi_page:
            _refuse(compaction, plan.page_count)

    if compaction is not None:
        estimated_lines = compaction.estimated_lines
    else:
        estimated_lines = estimate_resume_lines(printed, source_layout)

    return PreparedExport(
        resume=printed,
        source_layout=source_layout,
        model=model,
        plan=plan,
        compaction=compaction,
        revision=compute_export_revision(resume, source_layout),
        estimated_lines=estimated_lines,
    )


def _pdf_result(prepared: PreparedExport) -> ExportResult:
    rendered = render_pdf(prepared.plan, author=prepared.resume.name)
    return ExportResult(
        output_format="pdf",
        content=rendered.pdf_bytes,
        page_count=rendered.page_count,
        estimated_lines=prepared.estimated_lines,
        revision=prepared.revision,
        compaction=prepared.compaction,
        plan=prepared.plan,
    )


def _docx_result(prepared: PreparedExport, generated_at: Optional[datetime]) -> ExportResult:
    rendered = render_docx(
        prepared.plan,
        author=prepared.resume.name,
        generated_at=generated_at,
    )
    return ExportResult(
        output_format="docx",
        content=rendered.docx_bytes,
        page_count=rendered.page_count,
        estimated_lines=prepared.estimated_lines,
        revision=prepared.revision,
        compaction=prepared.compaction,
        plan=prepared.plan,
    )


def build_pdf_export(
    resume: TailoredResume,
    source_layout: SourceLayout,
    measure: Optional[TextMeasure] = None,
    compact: bool = True,
    verify_exact: bool = True,
    allow_multi_page: bool = False,
    max_estimated_lines: Optional[int] = None,
    style_table: Optional[ParagraphStyleTable] = None,
) -> ExportResult:
    """
    Export a resume as PDF. See prepare_export for the arguments.

    Raises:
        OnePageFitConflictError: If one page cannot be reached and allow_multi_page is False
        RenderParityError: If the PDF page count differs from the plan
    """
    start = time.time()
    prepared = prepare_export(
        resume,
        source_layout,
        measure=measure,
        compact=compact,
        verify_exact=verify_exact,
        allow_multi_page=allow_multi_page,
        max_estimated_lines=max_estimated_lines,
        style_table=style_table,
    )
    result = _pdf_result(prepared)
    log_export_result("pdf", result, time.time() - start)
    return result


def build_docx_export(
    resume: TailoredResume,
    source_layout: SourceLayout,
    measure: Optional[TextMeasure] = None,
    compact: bool = True,
    verify_exact: bool = True,
    allow_multi_page: bool = False,
    max_estimated_lines: Optional[int] = None,
    style_table: Optional[ParagraphStyleTable] = None,
    generated_at: Optional[datetime] = None,
) -> ExportResult:
    """
    Export a resume as DOCX. See prepare_export for the arguments.

    Args:
        generated_at: Core property timestamp; fix it for reproducible bytes

    Raises:
        OnePageFitConflictError: If one page cannot be reached and allow_multi_page is False
        RenderParityError: If the implied page count differs from the plan
    """
    start = time.time()
    prepared = prepare_export(
        resume,
        source_layout,
        measure=measure,
        compact=compact,
        verify_exact=verify_exact,
        allow_multi_page=allow_multi_page,
        max_estimated_lines=max_estimated_lines,
        style_table=style_table,
    )
    result = _docx_result(prepared, generated_at)
    log_export_result("docx", result, time.time() - start)
    return result


def build_export_bundle(
    resume: TailoredResume,
    source_layout: SourceLayout,
    measure: Optional[TextMeasure] = None,
    compact: bool = True,
    verify_exact: bool = True,
    allow_multi_page: bool = False,
    max_estimated_lines: Optional[int] = None,
    style_table: Optional[ParagraphStyleTable] = None,
    generated_at: Optional[datetime] = None,
    check_text: bool = False,
) -> ExportBundle:
    """
    Render PDF and DOCX from a single plan and verify they agree.

    Args:
        check_text: Also verify every planned line appears in the PDF text

    Raises:
        OnePageFitConflictError: If one page cannot be reached and allow_multi_page is False
        RenderParityError: If either output disagrees with the plan
    """
    start = time.time()
    prepared = prepare_export(
        resume,
        source_layout,
        measure=measure,
        compact=compact,
        verify_exact=verify_exact,
        allow_multi_page=allow_multi_page,
        max_estimated_lines=max_estimated_lines,
        style_table=style_table,
    )
    pdf = _pdf_result(prepared)
    docx = _docx_result(prepared, generated_at)

    parity = check_renderer_parity(prepared.plan, pdf.content, docx.content, check_text=check_text)
    if parity.pdf_pages != parity.plan_pages:
        raise RenderParityError("pdf", parity.plan_pages, parity.pdf_pages or 0)
    if parity.docx_pages != parity.plan_pages:
        raise RenderParityError("docx", parity.plan_pages, parity.docx_pages)

    elapsed = time.time() - start
    log_export_result("pdf", pdf, elapsed)
    log_export_result("docx", docx, elapsed)
    _log_info(f"Bundle revision {prepared.revision}")
    return ExportBundle(pdf=pdf, docx=docx, parity=parity)
