"""
Rendering Context

Responsibilities:
- Measures text with the same font metrics the PDF is drawn with
- Wraps paragraphs and assigns line/page breaks (pagination plan)
- Renders one plan to PDF (absolute placement) and DOCX (flow with explicit breaks)
- Checks that both outputs agree with the plan
- Orchestrates compaction, planning and rendering for exports

Owns: Page geometry, pagination plan, PDF/DOCX output
Never: Edits resume content (trimming belongs to the fitting context)
"""

from tailorfit.contexts.rendering.docx_renderer import (
    DocxRenderResult,
    render_docx,
    resolve_docx_paragraph_format,
)
from tailorfit.contexts.rendering.export_pipeline import (
    ExportBundle,
    ExportResult,
    build_docx_export,
    build_export_bundle,
    build_pdf_export,
    prepare_export,
)
from tailorfit.contexts.rendering.measurement import (
    ApproximateTextMeasure,
    ReportLabTextMeasure,
    TextMeasure,
)
from tailorfit.contexts.rendering.pagination import (
    LineBreak,
    PaginationPlan,
    PlannedLine,
    PlannedParagraph,
    build_pagination_plan,
)
from tailorfit.contexts.rendering.pdf_renderer import PdfRenderResult, render_pdf
from tailorfit.contexts.rendering.validator import ParityResult, check_renderer_parity

__all__ = [
    # Measurement
    "TextMeasure",
    "ReportLabTextMeasure",
    "ApproximateTextMeasure",
    # Pagination
    "LineBreak",
    "PlannedLine",
    "PlannedParagraph",
    "PaginationPlan",
    "build_pagination_plan",
    # Renderers
    "render_pdf",
    "PdfRenderResult",
    "render_docx",
    "DocxRenderResult",
    "resolve_docx_paragraph_format",
    # Validation
    "check_renderer_parity",
    "ParityResult",
    # Export orchestration
    "prepare_export",
    "build_pdf_export",
    "build_docx_export",
    "build_export_bundle",
    "ExportResult",
    "ExportBundle",
]
