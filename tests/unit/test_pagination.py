"""Unit tests for the pagination planner."""

import pytest

from tailorfit.contexts.modeling import Paragraph, build_document_model, build_style_table
from tailorfit.contexts.modeling.document_model import DocumentModel
from tailorfit.contexts.rendering.pagination import (
    BOTTOM_MARGIN,
    CONTENT_WIDTH,
    LEFT_MARGIN,
    LETTER_HEIGHT_POINTS,
    TOP_MARGIN,
    LineBreak,
    build_pagination_plan,
    resolve_planned_style,
)


def _dense_model(style_table, words=1800):
    text = " ".join(f"word{i % 97}" for i in range(words))
    return DocumentModel(paragraphs=(Paragraph("body", text),), style_table=style_table)


@pytest.mark.unit
def test_page_geometry():
    """Test US letter content box in points."""
    assert LEFT_MARGIN == 32
    assert TOP_MARGIN == 34
    assert BOTTOM_MARGIN == 34
    assert CONTENT_WIDTH == 548
    assert LETTER_HEIGHT_POINTS == 792


@pytest.mark.unit
def test_resolve_bullet_style(style_table):
    """Test conversion of the bullet archetype to points and x positions."""
    style = resolve_planned_style(style_table["bullet"])

    assert style.font_key == "regular"
    assert style.font_size == 10
    assert style.line_height == pytest.approx(12.4)
    assert style.spacing_after == pytest.approx(0.6)
    assert style.indent_left == 18
    assert style.hanging == 11
    assert style.max_width == 530
    assert style.base_x == 50
    assert style.first_line_x == 39
    assert style.bullet_x == 39


@pytest.mark.unit
def test_line_height_has_a_floor(style_table):
    """Test that small fonts still get the minimum line height."""
    table = build_style_table({"body": {"font_size_half_points": 16}})
    assert resolve_planned_style(table["body"]).line_height == 12
    assert resolve_planned_style(style_table["name"]).line_height == pytest.approx(17 * 1.24)
    assert resolve_planned_style(style_table["name"]).font_key == "bold"


@pytest.mark.unit
def test_sample_resume_fits_one_page(sample_resume, sample_layout, style_table, approx_measure):
    """Test that a typical resume plans onto a single page."""
    model = build_document_model(sample_resume, sample_layout, style_table)
    plan = build_pagination_plan(model, approx_measure)

    assert plan.page_count == 1
    assert plan.page_break_count() == 0
    assert len(plan.paragraphs) == len(model.paragraphs)
    assert all(p.lines[0].break_before == LineBreak.NONE for p in plan.paragraphs)


@pytest.mark.unit
def test_dense_paragraph_spills_to_second_page(style_table, approx_measure):
    """Test that a long paragraph breaks onto a new page without losing words."""
    model = _dense_model(style_table)
    plan = build_pagination_plan(model, approx_measure)

    assert plan.page_count >= 2
    assert plan.page_count == 1 + plan.page_break_count()
    planned_words = " ".join(line.text for line in plan.lines()).split()
    assert planned_words == model.paragraphs[0].text.split()


@pytest.mark.unit
def test_lines_stay_above_bottom_margin(style_table, approx_measure):
    """Test that no planned line crosses the bottom margin."""
    plan = build_pagination_plan(_dense_model(style_table, words=4000), approx_measure)
    style = plan.paragraphs[0].style

    y = LETTER_HEIGHT_POINTS - TOP_MARGIN - style.spacing_before
    for line in plan.lines():
        if line.break_before == LineBreak.PAGE:
            y = LETTER_HEIGHT_POINTS - TOP_MARGIN
        assert y - style.line_height >= BOTTOM_MARGIN
        y -= style.line_height


@pytest.mark.unit
def test_paragraph_first_line_can_start_a_page(style_table, approx_measure):
    """Test that a paragraph whose first line does not fit starts on the next page."""
    filler = tuple(Paragraph("body", f"line {i}") for i in range(200))
    model = DocumentModel(paragraphs=filler, style_table=style_table)
    plan = build_pagination_plan(model, approx_measure)

    page_starts = [p for p in plan.paragraphs if p.lines[0].break_before == LineBreak.PAGE]
    assert page_starts
    assert plan.page_count == 1 + len(page_starts)


@pytest.mark.unit
def test_bullet_marker_invariant(sample_resume, sample_layout, style_table, approx_measure):
    """Test that every bullet paragraph marks exactly its first line."""
    model = build_document_model(sample_resume, sample_layout, style_table)
    plan = build_pagination_plan(model, approx_measure)

    bullets = [p for p in plan.paragraphs if p.paragraph.style == "bullet"]
    assert bullets
    for planned in bullets:
        assert planned.lines[0].bullet_marker
        assert not any(line.bullet_marker for line in planned.lines[1:])

    others = [p for p in plan.paragraphs if p.paragraph.style != "bullet"]
    assert not any(line.bullet_marker for p in others for line in p.lines)


@pytest.mark.unit
def test_skills_paragraphs_carry_labels(sample_resume, sample_layout, style_table, approx_measure):
    """Test that skills lines are planned with their bold label."""
    model = build_document_model(sample_resume, sample_layout, style_table)
    plan = build_pagination_plan(model, approx_measure)

    skills = [p for p in plan.paragraphs if p.paragraph.semantic_role == "skillsLine"]
    assert [p.lines[0].skills_label for p in skills] == ["Languages:", "Frameworks:", "Cloud:", "Tools:"]
    assert skills[0].lines[0].text == " Python, Go, TypeScript, SQL"


@pytest.mark.unit
def test_plan_is_deterministic(sample_resume, custom_layout, style_table, reportlab_measure):
    """Test that identical inputs give identical plans."""
    model = build_document_model(sample_resume, custom_layout, style_table)
    assert build_pagination_plan(model, reportlab_measure) == build_pagination_plan(
        model, reportlab_measure
    )
