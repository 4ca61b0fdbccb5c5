"""
PDF renderer.

Draws a PaginationPlan onto US letter pages with a ReportLab canvas, placing
every line at absolute coordinates. Line and page breaks come from the plan
only; nothing is re-wrapped here.
"""

from dataclasses import dataclass
from io import BytesIO

from reportlab.pdfgen import canvas as pdf_canvas

from tailorfit.contexts.modeling.defaults import DOCUMENT_TITLE
from tailorfit.contexts.modeling.exceptions import RenderParityError
from tailorfit.contexts.rendering.logger import log_render_result
from tailorfit.contexts.rendering.measurement import FONT_NAMES
from tailorfit.contexts.rendering.pagination import (
    BOTTOM_MARGIN,
    CONTENT_WIDTH,
    LEFT_MARGIN,
    LETTER_HEIGHT_POINTS,
    LETTER_WIDTH_POINTS,
    RIGHT_MARGIN,
    TOP_MARGIN,
    LineBreak,
    PaginationPlan,
    PlannedParagraph,
)

BULLET_GLYPH = "•"
DIVIDER_THICKNESS = 0.8
PAGE_TOP_Y = LETTER_HEIGHT_POINTS - TOP_MARGIN


@dataclass
class PdfRenderResult:
    """
    Rendered PDF.

    Attributes:
        pdf_bytes: Complete PDF document
        page_count: Pages actually emitted (equals the plan's page count)
    """

    pdf_bytes: bytes
    page_count: int


class _PdfPageWriter:
    """Canvas plus the vertical cursor of the page being drawn."""

    def __init__(self, canvas: pdf_canvas.Canvas):
        self.canvas = canvas
        self.y = PAGE_TOP_Y

    def new_page(self) -> None:
        self.canvas.showPage()
        self.y = PAGE_TOP_Y

    def draw_text(self, text: str, x: float, font_key: str, font_size: float) -> None:
        if not text:
            return
        self.canvas.setFont(FONT_NAMES[font_key], font_size)
        self.canvas.drawString(x, self.y - font_size, text)

    def text_width(self, text: str, font_key: str, font_size: float) -> float:
        return self.canvas.stringWidth(text, FONT_NAMES[font_key], font_size)

    def draw_divider(self, spacing_after: float) -> None:
        divider_y = self.y + max(1, spacing_after * 0.5)
        if divider_y < BOTTOM_MARGIN:
            return
        self.canvas.setLineWidth(DIVIDER_THICKNESS)
        self.canvas.line(LEFT_MARGIN, divider_y, LETTER_WIDTH_POINTS - RIGHT_MARGIN, divider_y)


def _draw_paragraph(writer: _PdfPageWriter, planned: PlannedParagraph) -> None:
    style = planned.style
    is_bullet = any(line.bullet_marker for line in planned.lines)

    writer.y -= style.spacing_before

    for index, line in enumerate(planned.lines):
        if line.break_before == LineBreak.PAGE:
            writer.new_page()

        if line.skills_label is not None:
            if line.skills_label:
                writer.draw_text(line.skills_label, style.base_x, "bold", style.font_size)
                label_width = writer.text_width(line.skills_label, "bold", style.font_size)
                writer.draw_text(line.text, style.base_x + label_width, "regular", style.font_size)
            else:
                writer.draw_text(line.text, style.base_x, "regular", style.font_size)
            writer.y -= style.line_height
            continue

        if style.center:
            line_width = writer.text_width(line.text, style.font_key, style.font_size)
            x = LEFT_MARGIN + max(0, (CONTENT_WIDTH - line_width) / 2)
        elif is_bullet or index > 0:
            x = style.base_x
        else:
            x = style.first_line_x

        if line.bullet_marker:
            writer.draw_text(BULLET_GLYPH, style.bullet_x, style.font_key, style.font_size)

        writer.draw_text(line.text, x, style.font_key, style.font_size)
        writer.y -= style.line_height

    if style.section_divider:
        writer.draw_divider(style.spacing_after)

    writer.y -= style.spacing_after


def render_pdf(plan: PaginationPlan, author: str = "") -> PdfRenderResult:
    """
    Draw a pagination plan as a PDF.

    The canvas runs in invariant mode, so the same plan always yields the same
    bytes.

    Args:
        plan: Pagination plan to draw
        author: Author metadata (typically the candidate name)

    Returns:
        PdfRenderResult with bytes and realized page count

    Raises:
        RenderParityError: If the realized page count differs from plan.page_count
    """
    buffer = BytesIO()
    canvas = pdf_canvas.Canvas(
        buffer, pagesize=(LETTER_WIDTH_POINTS, LETTER_HEIGHT_POINTS), invariant=1
    )
    canvas.setTitle(DOCUMENT_TITLE)
    canvas.setAuthor(author)
    canvas.setCreator("tailorfit")

    writer = _PdfPageWriter(canvas)
    for planned in plan.paragraphs:
        _draw_paragraph(writer, planned)

    page_count = canvas.getPageNumber()
    canvas.showPage()
    canvas.save()

    if page_count != plan.page_count:
        raise RenderParityError("pdf", plan.page_count, page_count)

    pdf_bytes = buffer.getvalue()
    log_render_result("PDF", len(pdf_bytes), page_count)
    return PdfRenderResult(pdf_bytes=pdf_bytes, page_count=page_count)
