"""
Pagination Planner

Walks the canonical paragraph sequence once, wraps every paragraph with exact
font metrics and assigns line and page breaks against a fixed US letter page.
The resulting PaginationPlan is the only input of both renderers, so the PDF
and DOCX outputs break lines and pages at the same places.

Units: the style table is in twips and half-points; everything in the plan is
in points, with y measured from the bottom of the page (PDF convention).
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from tailorfit.contexts.modeling.config_resolver import ParagraphStyleOptions, ParagraphStyleTable
from tailorfit.contexts.modeling.document_model import SKILLS_LINE_ROLE, DocumentModel, Paragraph
from tailorfit.contexts.rendering.line_wrapping import (
    BOTTOM_MARGIN,
    CONTENT_WIDTH,
    LEFT_MARGIN,
    LETTER_HEIGHT_POINTS,
    LETTER_WIDTH_POINTS,
    MIN_LINE_WIDTH,
    RIGHT_MARGIN,
    TOP_MARGIN,
    TWIPS_PER_POINT,
    WrappedLine,
    wrap_bullet,
    wrap_skills_line,
    wrap_text,
)
from tailorfit.contexts.rendering.logger import log_plan_built
from tailorfit.contexts.rendering.measurement import TextMeasure, resolve_font_key

__all__ = [
    "LETTER_WIDTH_POINTS",
    "LETTER_HEIGHT_POINTS",
    "TWIPS_PER_POINT",
    "LEFT_MARGIN",
    "RIGHT_MARGIN",
    "TOP_MARGIN",
    "BOTTOM_MARGIN",
    "CONTENT_WIDTH",
    "MIN_LINE_HEIGHT",
    "LINE_HEIGHT_FACTOR",
    "LineBreak",
    "PlannedLine",
    "PlannedParagraphStyle",
    "PlannedParagraph",
    "PaginationPlan",
    "resolve_planned_style",
    "plan_paragraph_lines",
    "build_pagination_plan",
]

MIN_LINE_HEIGHT = 12
LINE_HEIGHT_FACTOR = 1.24
PAGE_TOP_Y = LETTER_HEIGHT_POINTS - TOP_MARGIN


class LineBreak(str, Enum):
    """Break that precedes a planned line."""

    NONE = "none"
    LINE = "line"
    PAGE = "page"


@dataclass(frozen=True)
class PlannedLine:
    """
    A visual line with the break that precedes it.

    Attributes:
        break_before: NONE for a paragraph's first line, LINE for later lines,
            PAGE when the line starts a new page
        text: Text to draw
        skills_label: Bold label (skills lines only; "" on continuation lines)
        bullet_marker: Draw the bullet glyph before this line
    """

    break_before: LineBreak
    text: str
    skills_label: Optional[str] = None
    bullet_marker: bool = False


@dataclass(frozen=True)
class PlannedParagraphStyle:
    """Paragraph style resolved to points and absolute x positions."""

    font_key: str
    font_size: float
    line_height: float
    spacing_before: float
    spacing_after: float
    indent_left: float
    hanging: float
    center: bool
    section_divider: bool
    max_width: float
    base_x: float
    first_line_x: float
    bullet_x: float


@dataclass(frozen=True)
class PlannedParagraph:
    paragraph: Paragraph
    style: PlannedParagraphStyle
    lines: Tuple[PlannedLine, ...]


@dataclass(frozen=True)
class PaginationPlan:
    """
    Renderer-agnostic layout of a whole document.

    Attributes:
        paragraphs: Planned paragraphs in print order
        page_count: Pages the plan occupies (1 + number of PAGE breaks)
        style_table: Archetype table the plan was measured with; renderers
            resolve paragraph formatting from it
    """

    paragraphs: Tuple[PlannedParagraph, ...]
    page_count: int
    style_table: ParagraphStyleTable

    def lines(self) -> List[PlannedLine]:
        """All planned lines in print order."""
        return [line for paragraph in self.paragraphs for line in paragraph.lines]

    def page_break_count(self) -> int:
        return sum(1 for line in self.lines() if line.break_before == LineBreak.PAGE)


def resolve_planned_style(options: ParagraphStyleOptions) -> PlannedParagraphStyle:
    """Convert archetype options (twips, half-points) to points and x positions."""
    font_size = options.font_size_half_points / 2
    indent_left = options.indent_left / TWIPS_PER_POINT
    hanging = options.hanging / TWIPS_PER_POINT
    base_x = LEFT_MARGIN + indent_left

    return PlannedParagraphStyle(
        font_key=resolve_font_key(options.bold, options.italic),
        font_size=font_size,
        line_height=max(MIN_LINE_HEIGHT, font_size * LINE_HEIGHT_FACTOR),
        spacing_before=options.spacing_before / TWIPS_PER_POINT,
        spacing_after=options.spacing_after / TWIPS_PER_POINT,
        indent_left=indent_left,
        hanging=hanging,
        center=options.center,
        section_divider=options.section_divider,
        max_width=max(MIN_LINE_WIDTH, CONTENT_WIDTH - indent_left),
        base_x=base_x,
        first_line_x=base_x - hanging,
        bullet_x=base_x - hanging,
    )


def plan_paragraph_lines(
    paragraph: Paragraph, style: PlannedParagraphStyle, measure: TextMeasure
) -> List[WrappedLine]:
    """Wrap one paragraph into visual lines (no break assignment)."""
    if paragraph.semantic_role == SKILLS_LINE_ROLE:
        skills_lines = wrap_skills_line(paragraph.text, style.max_width, measure, style.font_size)
        if skills_lines is not None:
            return skills_lines

    if paragraph.style == "bullet":
        return wrap_bullet(paragraph.text, style.max_width, measure, style.font_key, style.font_size)

    return [
        WrappedLine(text=line)
        for line in wrap_text(paragraph.text, style.max_width, measure, style.font_key, style.font_size)
    ]


def build_pagination_plan(model: DocumentModel, measure: TextMeasure) -> PaginationPlan:
    """
    Assign line and page breaks to every paragraph of a document model.

    A line that would cross the bottom margin starts a new page. Content is
    never dropped: a paragraph that cannot fit a single line still places it,
    on the next page.

    Args:
        model: Canonical document model (carries the style table)
        measure: Text measurer; must match the fonts the PDF renderer draws with

    Returns:
        PaginationPlan; identical inputs always give an identical plan
    """
    y = PAGE_TOP_Y
    page_count = 1
    planned: List[PlannedParagraph] = []

    for paragraph in model.paragraphs:
        style = resolve_planned_style(model.style_table.options_for(paragraph.style))
        wrapped = plan_paragraph_lines(paragraph, style, measure)
        lines: List[PlannedLine] = []

        y -= style.spacing_before

        for index, line in enumerate(wrapped):
            break_before = LineBreak.NONE if index == 0 else LineBreak.LINE
            if y - style.line_height < BOTTOM_MARGIN:
                page_count += 1
                y = PAGE_TOP_Y
                break_before = LineBreak.PAGE

            lines.append(
                PlannedLine(
                    break_before=break_before,
                    text=line.text,
                    skills_label=line.skills_label,
                    bullet_marker=line.bullet_marker,
                )
            )
            y -= style.line_height

        y -= style.spacing_after
        planned.append(PlannedParagraph(paragraph=paragraph, style=style, lines=tuple(lines)))

    plan = PaginationPlan(
        paragraphs=tuple(planned), page_count=page_count, style_table=model.style_table
    )
    log_plan_built(plan)
    return plan
