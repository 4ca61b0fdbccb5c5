"""
DOCX renderer.

Writes a PaginationPlan as a Word document with python-docx: one paragraph per
planned paragraph, with explicit line and page break markers between runs so
Word reproduces the planned lines and pages instead of reflowing freely.

Paragraph formatting is resolved here from the archetype options in Word's
native units (twips, half-points) rather than taken from the plan's point
values; resolve_docx_paragraph_format is that mapping.
"""

from dataclasses import dataclass
from datetime import datetime
from io import BytesIO
from typing import List, Optional

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_BREAK, WD_LINE_SPACING
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, Twips

from tailorfit.contexts.modeling.config_resolver import ParagraphStyleOptions
from tailorfit.contexts.modeling.defaults import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE_HALF_POINTS,
    DOCUMENT_TITLE,
)
from tailorfit.contexts.modeling.exceptions import RenderParityError
from tailorfit.contexts.rendering.logger import log_render_result
from tailorfit.contexts.rendering.pagination import (
    LINE_HEIGHT_FACTOR,
    MIN_LINE_HEIGHT,
    LineBreak,
    PaginationPlan,
    PlannedParagraph,
)

PAGE_WIDTH_TWIPS = 12240
PAGE_HEIGHT_TWIPS = 15840
MARGIN_LEFT_RIGHT_TWIPS = 640
MARGIN_TOP_BOTTOM_TWIPS = 680
HEADER_FOOTER_TWIPS = 720

BULLET_GLYPH = "•"
# Bottom border width in eighths of a point (0.75pt)
DIVIDER_BORDER_SIZE = 6

# w:pPr children that must follow w:pBdr (CT_PPr sequence order)
PPR_SUCCESSORS_OF_BORDER = (
    "w:shd",
    "w:tabs",
    "w:suppressAutoHyphens",
    "w:kinsoku",
    "w:wordWrap",
    "w:overflowPunct",
    "w:topLinePunct",
    "w:autoSpaceDE",
    "w:autoSpaceDN",
    "w:bidi",
    "w:adjustRightInd",
    "w:snapToGrid",
    "w:spacing",
    "w:ind",
    "w:contextualSpacing",
    "w:mirrorIndents",
    "w:suppressOverlap",
    "w:jc",
    "w:textDirection",
    "w:textAlignment",
    "w:textboxTightWrap",
    "w:outlineLvl",
    "w:divId",
    "w:cnfStyle",
    "w:rPr",
    "w:sectPr",
    "w:pPrChange",
)


@dataclass(frozen=True)
class DocxParagraphFormat:
    """
    Paragraph and run formatting in Word units.

    Attributes:
        center: Center alignment
        spacing_before: Twips above the paragraph
        spacing_after: Twips below the paragraph
        line_spacing: Exact line pitch in twips
        indent_left: Left indent in twips
        hanging: Hanging indent in twips
        bold: Bold runs
        italic: Italic runs
        font_size_half_points: Run size in half-points
        bottom_border: Draw a bottom border (section divider)
    """

    center: bool
    spacing_before: int
    spacing_after: int
    line_spacing: int
    indent_left: int
    hanging: int
    bold: bool
    italic: bool
    font_size_half_points: int
    bottom_border: bool


@dataclass
class DocxRenderResult:
    """
    Rendered DOCX.

    Attributes:
        docx_bytes: Complete .docx package
        page_count: Implied pages (page break markers + 1)
    """

    docx_bytes: bytes
    page_count: int


def resolve_docx_paragraph_format(options: ParagraphStyleOptions) -> DocxParagraphFormat:
    """Map archetype options to Word-native units."""
    font_size = options.font_size_half_points / 2
    line_height = max(MIN_LINE_HEIGHT, font_size * LINE_HEIGHT_FACTOR)
    return DocxParagraphFormat(
        center=options.center,
        spacing_before=options.spacing_before,
        spacing_after=options.spacing_after,
        line_spacing=round(line_height * 20),
        indent_left=options.indent_left,
        hanging=options.hanging,
        bold=options.bold,
        italic=options.italic,
        font_size_half_points=options.font_size_half_points,
        bottom_border=options.section_divider,
    )


def _apply_paragraph_format(paragraph, fmt: DocxParagraphFormat) -> None:
    pf = paragraph.paragraph_format
    if fmt.center:
        pf.alignment = WD_ALIGN_PARAGRAPH.CENTER
    pf.space_before = Twips(fmt.spacing_before)
    pf.space_after = Twips(fmt.spacing_after)
    pf.line_spacing = Twips(fmt.line_spacing)
    pf.line_spacing_rule = WD_LINE_SPACING.EXACTLY
    if fmt.indent_left:
        pf.left_indent = Twips(fmt.indent_left)
    if fmt.hanging:
        # Negative first-line indent is written as w:hanging
        pf.first_line_indent = Twips(-fmt.hanging)

    if fmt.bottom_border:
        p_pr = paragraph._p.get_or_add_pPr()
        p_bdr = OxmlElement("w:pBdr")
        bottom = OxmlElement("w:bottom")
        bottom.set(qn("w:val"), "single")
        bottom.set(qn("w:sz"), str(DIVIDER_BORDER_SIZE))
        bottom.set(qn("w:space"), "1")
        bottom.set(qn("w:color"), "auto")
        p_bdr.append(bottom)
        p_pr.insert_element_before(p_bdr, *PPR_SUCCESSORS_OF_BORDER)


class _RunWriter:
    """Adds formatted runs and break markers to one paragraph."""

    def __init__(self, paragraph, fmt: DocxParagraphFormat):
        self.paragraph = paragraph
        self.fmt = fmt
        self.page_breaks = 0

    def text(self, text: str, bold: Optional[bool] = None):
        run = self.paragraph.add_run(text)
        run.bold = self.fmt.bold if bold is None else bold
        run.italic = self.fmt.italic
        run.font.size = Pt(self.fmt.font_size_half_points / 2)
        return run

    def line_break(self) -> None:
        self.paragraph.add_run().add_break(WD_BREAK.LINE)

    def page_break(self) -> None:
        self.paragraph.add_run().add_break(WD_BREAK.PAGE)
        self.page_breaks += 1

    def break_before(self, break_kind: LineBreak) -> None:
        if break_kind == LineBreak.PAGE:
            self.page_break()
        elif break_kind == LineBreak.LINE:
            self.line_break()


def _write_bullet_runs(writer: _RunWriter, planned: PlannedParagraph) -> None:
    # Word wraps the bullet text itself; only page breaks stay explicit
    pending: List[str] = []
    for index, line in enumerate(planned.lines):
        if line.break_before == LineBreak.PAGE:
            if pending:
                writer.text(" ".join(pending))
                pending = []
            writer.page_break()
        if line.bullet_marker:
            glyph_run = writer.text(BULLET_GLYPH)
            glyph_run.add_tab()
        if line.text:
            pending.append(line.text)

    if pending:
        writer.text(" ".join(pending))


def _write_runs(writer: _RunWriter, planned: PlannedParagraph) -> None:
    if any(line.bullet_marker for line in planned.lines):
        _write_bullet_runs(writer, planned)
        return

    for line in planned.lines:
        writer.break_before(line.break_before)
        if line.skills_label:
            writer.text(line.skills_label, bold=True)
            if line.text:
                writer.text(line.text, bold=False)
        elif line.skills_label is not None:
            writer.text(line.text, bold=False)
        elif line.text:
            writer.text(line.text)


def _configure_document(document, author: str, generated_at: Optional[datetime]) -> None:
    section = document.sections[0]
    section.page_width = Twips(PAGE_WIDTH_TWIPS)
    section.page_height = Twips(PAGE_HEIGHT_TWIPS)
    section.left_margin = Twips(MARGIN_LEFT_RIGHT_TWIPS)
    section.right_margin = Twips(MARGIN_LEFT_RIGHT_TWIPS)
    section.top_margin = Twips(MARGIN_TOP_BOTTOM_TWIPS)
    section.bottom_margin = Twips(MARGIN_TOP_BOTTOM_TWIPS)
    section.header_distance = Twips(HEADER_FOOTER_TWIPS)
    section.footer_distance = Twips(HEADER_FOOTER_TWIPS)

    normal = document.styles["Normal"]
    normal.font.name = DEFAULT_FONT_FAMILY
    normal.font.size = Pt(DEFAULT_FONT_SIZE_HALF_POINTS / 2)

    timestamp = generated_at or datetime.now()
    properties = document.core_properties
    properties.title = DOCUMENT_TITLE
    properties.author = author
    properties.last_modified_by = author
    properties.created = timestamp
    properties.modified = timestamp


def render_docx(
    plan: PaginationPlan,
    author: str = "",
    generated_at: Optional[datetime] = None,
) -> DocxRenderResult:
    """
    Write a pagination plan as a .docx package.

    Args:
        plan: Pagination plan to write
        author: Core property author (typically the candidate name)
        generated_at: Created/modified timestamp; fix it for reproducible output

    Returns:
        DocxRenderResult with bytes and implied page count

    Raises:
        RenderParityError: If the implied page count differs from plan.page_count
    """
    document = Document()
    _configure_document(document, author, generated_at)

    page_breaks = 0
    for planned in plan.paragraphs:
        options = plan.style_table.options_for(planned.paragraph.style)
        fmt = resolve_docx_paragraph_format(options)
        paragraph = document.add_paragraph()
        _apply_paragraph_format(paragraph, fmt)

        writer = _RunWriter(paragraph, fmt)
        _write_runs(writer, planned)
        page_breaks += writer.page_breaks

    page_count = page_breaks + 1
    if page_count != plan.page_count:
        raise RenderParityError("docx", plan.page_count, page_count)

    buffer = BytesIO()
    document.save(buffer)
    docx_bytes = buffer.getvalue()
    log_render_result("DOCX", len(docx_bytes), page_count)
    return DocxRenderResult(docx_bytes=docx_bytes, page_count=page_count)


def count_page_breaks(docx_bytes: bytes) -> int:
    """Count explicit page break markers (w:br w:type="page") in a .docx package."""
    document = Document(BytesIO(docx_bytes))
    return sum(
        1
        for br in document.element.body.iter(qn("w:br"))
        if br.get(qn("w:type")) == "page"
    )
