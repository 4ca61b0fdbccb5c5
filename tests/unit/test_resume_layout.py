"""Unit tests for section ordering."""

from dataclasses import replace

import pytest

from tailorfit.contexts.modeling import SourceLayout, SourceSection
from tailorfit.contexts.modeling.resume_layout import build_render_sections, has_content


@pytest.mark.unit
def test_empty_layout_uses_known_order(sample_resume):
    """Test that without a layout, sections follow the known order."""
    sections = build_render_sections(sample_resume, SourceLayout())
    assert [section.kind for section in sections] == [
        "summary",
        "experience",
        "skills",
        "education",
        "projects",
    ]
    assert [section.heading for section in sections] == [
        "Summary",
        "Experience",
        "Skills",
        "Education",
        "Projects",
    ]


@pytest.mark.unit
def test_layout_order_and_headings_win(sample_resume):
    """Test that layout sections print first, then missing known sections."""
    layout = SourceLayout(
        sections=(
            SourceSection(kind="skills", heading="Core Competencies"),
            SourceSection(kind="experience", heading=""),
        )
    )
    sections = build_render_sections(sample_resume, layout)
    assert [section.kind for section in sections] == [
        "skills",
        "experience",
        "summary",
        "education",
        "projects",
    ]
    assert sections[0].heading == "Core Competencies"
    assert sections[1].heading == "Experience"


@pytest.mark.unit
def test_duplicate_known_sections_skipped_custom_kept(sample_resume):
    """Test that a known kind prints once while every custom section prints."""
    layout = SourceLayout(
        sections=(
            SourceSection(kind="experience", heading="Experience"),
            SourceSection(kind="custom", heading="Awards", lines=("Best paper",)),
            SourceSection(kind="experience", heading="More Experience"),
            SourceSection(kind="custom", heading="Talks", lines=("PyCon",)),
        )
    )
    sections = build_render_sections(sample_resume, layout)
    headings = [section.heading for section in sections]

    assert headings.count("Experience") == 1
    assert "More Experience" not in headings
    assert headings[:3] == ["Experience", "Awards", "Talks"]


@pytest.mark.unit
def test_sections_without_content_skipped(sample_resume):
    """Test that empty sections are not printed."""
    resume = replace(sample_resume, projects=None, summary=None)
    layout = SourceLayout(
        sections=(
            SourceSection(kind="projects", heading="Projects"),
            SourceSection(kind="custom", heading="Empty"),
        )
    )
    kinds = [section.kind for section in build_render_sections(resume, layout)]
    assert "projects" not in kinds
    assert "summary" not in kinds
    assert "custom" not in kinds


@pytest.mark.unit
def test_source_lines_count_as_content(sample_resume):
    """Test that source lines alone make a section printable."""
    resume = replace(sample_resume, summary=None)
    assert not has_content("summary", resume)
    assert has_content("summary", resume, SourceSection(kind="summary", heading="Summary", lines=("x",)))
