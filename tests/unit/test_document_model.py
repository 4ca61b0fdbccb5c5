"""Unit tests for the canonical document model."""

from dataclasses import replace

import pytest

from tailorfit.contexts.modeling import (
    BulletPoint,
    ExperienceEntry,
    Paragraph,
    ProjectEntry,
    SourceLayout,
    SourceSection,
    TailoredResume,
    build_document_model,
)
from tailorfit.contexts.modeling.document_model import SKILLS_LINE_ROLE, build_contact_line


def _texts(model, style=None):
    return [p.text for p in model.paragraphs if style is None or p.style == style]


@pytest.mark.unit
def test_sample_document_sequence(sample_resume, sample_layout, style_table):
    """Test the full paragraph sequence of a typical resume."""
    model = build_document_model(sample_resume, sample_layout, style_table)

    assert model.paragraphs[0] == Paragraph("name", "Jane Doe")
    assert model.paragraphs[1] == Paragraph(
        "contact", "jane.doe@example.com | (555) 010-0100 | linkedin.com/in/janedoe"
    )
    assert _texts(model, "sectionHeading") == [
        "Summary",
        "Work Experience",
        "Technical Skills",
        "Education",
        "Projects",
    ]
    assert _texts(model, "entryHeader") == [
        "Senior Software Engineer, Acme Corp (Remote) Jan 2021 - Present",
        "Software Engineer, Initech Jun 2018 - Dec 2020",
        "BS Computer Science, State University - 2014 - 2018",
        "queue-bench: Go, Kafka",
    ]
    assert model.style_table == style_table


@pytest.mark.unit
def test_contact_line_drops_missing_fields():
    """Test that only printable contact fields are joined."""
    resume = TailoredResume(name="Jane Doe", email="", phone=None, linkedin="linkedin.com/in/x")
    assert build_contact_line(resume) == "linkedin.com/in/x"

    model = build_document_model(resume, SourceLayout())
    contacts = [p for p in model.paragraphs if p.style == "contact"]
    assert contacts == [Paragraph("contact", "linkedin.com/in/x")]


@pytest.mark.unit
def test_no_contact_paragraph_when_all_missing(style_table):
    """Test that no contact paragraph is emitted without contact details."""
    resume = TailoredResume(name="Jane Doe", email="n/a", phone="  ", website="null")
    model = build_document_model(resume, SourceLayout(), style_table)
    assert [p.style for p in model.paragraphs] == ["name"]


@pytest.mark.unit
def test_bullets_carry_glyph_prefix(sample_resume, sample_layout, style_table):
    """Test that bullet paragraphs are written with a leading glyph."""
    model = build_document_model(sample_resume, sample_layout, style_table)
    bullets = _texts(model, "bullet")

    assert len(bullets) == 6
    assert all(text.startswith("• ") for text in bullets)
    assert bullets[-1] == "• Open-source benchmark harness for message brokers."


@pytest.mark.unit
def test_skills_lines_are_normalized_and_tagged(sample_resume, sample_layout, style_table):
    """Test that skill lines split on pipes and carry the skills role."""
    model = build_document_model(sample_resume, sample_layout, style_table)
    skills = [p for p in model.paragraphs if p.semantic_role == SKILLS_LINE_ROLE]

    assert [p.text for p in skills] == [
        "Languages: Python, Go, TypeScript, SQL",
        "Frameworks: FastAPI, Django",
        "Cloud: AWS, GCP",
        "Tools: Docker, Terraform, Git",
    ]
    assert all(p.style == "body" for p in skills)


@pytest.mark.unit
def test_education_details(sample_resume, sample_layout, style_table):
    """Test that GPA, honors and source detail lines follow the education header."""
    resume = replace(
        sample_resume,
        education=(replace(sample_resume.education[0], honors="Magna Cum Laude"),),
    )
    texts = _texts(build_document_model(resume, sample_layout, style_table))
    start = texts.index("BS Computer Science, State University - 2014 - 2018")

    assert texts[start + 1 : start + 4] == ["GPA: 3.8", "Magna Cum Laude", "Thesis on stream joins"]


@pytest.mark.unit
def test_null_like_content_dropped(style_table):
    """Test that placeholder strings never become paragraphs."""
    resume = TailoredResume(
        name="Jane Doe",
        email="jane@example.com",
        phone="",
        experience=(
            ExperienceEntry(
                company="Acme",
                title="Engineer",
                location="n/a",
                date_range="2020 – 2021",
                bullets=(BulletPoint("Shipped"), BulletPoint("n/a"), BulletPoint("  ")),
            ),
        ),
        projects=(ProjectEntry(name="tool", technologies="null", bullets=()),),
    )
    model = build_document_model(resume, SourceLayout(), style_table)

    assert _texts(model, "bullet") == ["• Shipped"]
    assert "Engineer, Acme 2020 - 2021" in _texts(model, "entryHeader")
    assert "tool" in _texts(model, "entryHeader")
    assert all(p.text.strip() for p in model.paragraphs)


@pytest.mark.unit
def test_summary_falls_back_to_source_lines(sample_resume, sample_layout, style_table):
    """Test that the source summary prints when the resume has none."""
    resume = replace(sample_resume, summary=None)
    texts = _texts(build_document_model(resume, sample_layout, style_table))
    assert texts[texts.index("Summary") + 1] == "Backend engineer."


@pytest.mark.unit
def test_custom_section_printed_verbatim(sample_resume, custom_layout, style_table):
    """Test that every custom line becomes its own body paragraph after the heading."""
    model = build_document_model(sample_resume, custom_layout, style_table)
    texts = _texts(model)
    start = texts.index("Certifications & Talks")

    custom = model.paragraphs[start + 1 : start + 8]
    assert [p.style for p in custom] == ["body"] * 7
    assert [p.text for p in custom] == list(custom_layout.sections[-1].lines)
    assert len(model.paragraphs) == start + 8


@pytest.mark.unit
def test_custom_sections_in_layout_position(sample_resume, style_table):
    """Test that a custom section keeps its position in the source order."""
    layout = SourceLayout(
        sections=(
            SourceSection(kind="custom", heading="Awards", lines=("Hackathon winner",)),
            SourceSection(kind="experience", heading="Experience"),
        )
    )
    headings = _texts(build_document_model(sample_resume, layout, style_table), "sectionHeading")
    assert headings[:2] == ["Awards", "Experience"]


@pytest.mark.unit
def test_model_is_deterministic(sample_resume, sample_layout, style_table):
    """Test that identical inputs build identical models."""
    first = build_document_model(sample_resume, sample_layout, style_table)
    second = build_document_model(sample_resume, sample_layout, style_table)
    assert first == second
