"""Unit tests for source layout extraction from raw resume text."""

import pytest

from tailorfit.contexts.intake.source_layout import (
    classify_heading,
    extract_source_layout,
    find_education_index,
    is_generic_heading,
    tokenize,
)
from tailorfit.contexts.modeling import EducationEntry, ProjectEntry, TailoredResume

RAW_RESUME = """Jane Doe
jane@example.com | 555-0100

SUMMARY
Backend engineer.
Work Experience
Engineer, Acme
- Built APIs
Technical Skills
Languages: Go, Python
Top of Form
EDUCATION
State University, BS Computer Science
Research on distributed caching
Dean's List
VOLUNTEER WORK
Food bank organizer
"""


@pytest.fixture
def parsed_resume():
    return TailoredResume(
        name="Jane Doe",
        email="jane@example.com",
        phone="555-0100",
        education=(
            EducationEntry(
                institution="State University",
                degree="BS Computer Science",
                date_range="2014 - 2018",
            ),
        ),
    )


@pytest.mark.unit
def test_extract_sections(parsed_resume):
    """Test that keyword and all-caps headings split the text into sections."""
    layout = extract_source_layout(RAW_RESUME, parsed_resume)

    assert [(s.kind, s.heading) for s in layout.sections] == [
        ("summary", "SUMMARY"),
        ("experience", "Work Experience"),
        ("skills", "Technical Skills"),
        ("education", "EDUCATION"),
        ("custom", "VOLUNTEER WORK"),
    ]
    assert layout.sections[1].lines == ("Engineer, Acme", "- Built APIs")
    assert layout.sections[4].lines == ("Food bank organizer",)


@pytest.mark.unit
def test_artifact_lines_skipped(parsed_resume):
    """Test that form artifacts are not kept as content."""
    layout = extract_source_layout(RAW_RESUME, parsed_resume)
    assert layout.sections[2].lines == ("Languages: Go, Python",)


@pytest.mark.unit
def test_education_detail_blocks(parsed_resume):
    """Test that lines after an education entry's own line become its details."""
    layout = extract_source_layout(RAW_RESUME, parsed_resume)
    education = layout.sections[3]

    assert education.education_detail_blocks == (
        ("Research on distributed caching", "Dean's List"),
    )
    assert layout.sections[0].education_detail_blocks is None


@pytest.mark.unit
def test_text_before_first_heading_ignored(parsed_resume):
    """Test that all-caps lines only count as headings after the first known heading."""
    layout = extract_source_layout("JANE DOE\nEXPERIENCE\nEngineer\n", parsed_resume)
    assert [(s.kind, s.heading, s.lines) for s in layout.sections] == [
        ("experience", "EXPERIENCE", ("Engineer",))
    ]


@pytest.mark.unit
def test_default_layout_without_headings(parsed_resume):
    """Test the fallback layout when no heading is found."""
    layout = extract_source_layout("just some text\nwith no headings", parsed_resume)
    assert [s.kind for s in layout.sections] == ["experience", "skills", "education"]

    with_projects = TailoredResume(
        name="Jane Doe", email="", phone="", projects=(ProjectEntry("tool", "Go"),)
    )
    layout = extract_source_layout("", with_projects)
    assert [s.kind for s in layout.sections] == ["experience", "skills", "education", "projects"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "heading,kind",
    [
        ("Professional Summary", "summary"),
        ("Core Competencies", "skills"),
        ("Project Experience", "projects"),
        ("Volunteer Experience", "experience"),
        ("Education", "education"),
        ("Publications", "custom"),
    ],
)
def test_classify_heading(heading, kind):
    """Test mapping heading text to section kinds."""
    assert classify_heading(heading) == kind


@pytest.mark.unit
@pytest.mark.parametrize(
    "line,expected",
    [
        ("CERTIFICATIONS & AWARDS", True),
        ("VOLUNTEER WORK", True),
        ("Languages", False),
        ("TEAM 2020", False),
        ("CONTACT: ME", False),
        ("AB", False),
    ],
)
def test_is_generic_heading(line, expected):
    """Test short all-caps heading detection."""
    assert is_generic_heading(line) is expected


@pytest.mark.unit
def test_find_education_index_needs_two_tokens():
    """Test that a line must share two long tokens with an entry."""
    token_sets = [set(tokenize("State University BS Computer Science"))]
    assert find_education_index("State University", token_sets) == 0
    assert find_education_index("University of Somewhere", token_sets) == -1
    assert find_education_index("", token_sets) == -1
