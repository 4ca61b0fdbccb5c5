"""Unit tests for resume and source layout values."""

import dataclasses

import pytest

from tailorfit.contexts.modeling import (
    BulletPoint,
    InvalidResumeDataError,
    SourceLayout,
    SourceSection,
    TailoredResume,
    load_payload,
)


@pytest.mark.unit
def test_load_payload(sample_payload):
    """Test converting a wire payload into resume and layout values."""
    resume, layout = load_payload(sample_payload)

    assert resume.name == "Jane Doe"
    assert resume.github is None
    assert resume.experience[0].date_range == "Jan 2021 – Present"
    assert resume.experience[0].bullets[0] == BulletPoint(
        text="Designed an event ingestion service handling 40k messages per second with p99 latency under 50 ms."
    )
    assert resume.projects[0].technologies == "Go, Kafka"
    assert [section.kind for section in layout.sections] == [
        "summary",
        "experience",
        "skills",
        "education",
        "projects",
    ]
    assert layout.sections[3].education_detail_blocks == (("Thesis on stream joins",),)


@pytest.mark.unit
def test_wire_round_trip(sample_payload):
    """Test that to_dict reproduces the wire shape."""
    resume, layout = load_payload(sample_payload)

    assert resume.to_dict() == sample_payload["resume"]
    assert TailoredResume.from_dict(resume.to_dict()) == resume
    assert SourceLayout.from_dict(layout.to_dict()) == layout


@pytest.mark.unit
def test_missing_source_layout_gives_empty_layout(sample_payload):
    """Test that a payload without sourceLayout uses an empty layout."""
    del sample_payload["sourceLayout"]
    _, layout = load_payload(sample_payload)
    assert layout == SourceLayout()


@pytest.mark.unit
def test_null_projects_stay_null(sample_payload):
    """Test that null projects are kept distinct from an empty list."""
    sample_payload["resume"]["projects"] = None
    resume, _ = load_payload(sample_payload)
    assert resume.projects is None
    assert resume.to_dict()["projects"] is None


@pytest.mark.unit
def test_null_email_and_phone_become_empty(sample_payload):
    """Test that null contact strings load as empty strings."""
    sample_payload["resume"]["email"] = None
    del sample_payload["resume"]["phone"]
    resume, _ = load_payload(sample_payload)
    assert resume.email == ""
    assert resume.phone == ""


@pytest.mark.unit
def test_missing_name_reports_field_path(sample_payload):
    """Test that a missing required field names its location."""
    del sample_payload["resume"]["name"]
    with pytest.raises(InvalidResumeDataError) as exc_info:
        load_payload(sample_payload)
    assert exc_info.value.field_path == "resume"
    assert "name" in exc_info.value.message


@pytest.mark.unit
def test_bad_bullets_report_nested_path(sample_payload):
    """Test that a malformed nested field reports its full path."""
    sample_payload["resume"]["experience"][1]["bullets"] = "not a list"
    with pytest.raises(InvalidResumeDataError) as exc_info:
        load_payload(sample_payload)
    assert exc_info.value.field_path == "resume.experience[1].bullets"


@pytest.mark.unit
def test_non_string_skill_rejected(sample_payload):
    """Test that skill lines must be strings."""
    sample_payload["resume"]["skills"].append(42)
    with pytest.raises(InvalidResumeDataError) as exc_info:
        load_payload(sample_payload)
    assert exc_info.value.field_path == "resume.skills[3]"


@pytest.mark.unit
def test_unknown_section_kind_rejected(sample_payload):
    """Test that source sections must use a known kind."""
    sample_payload["sourceLayout"]["sections"][0]["kind"] = "hobbies"
    with pytest.raises(InvalidResumeDataError) as exc_info:
        load_payload(sample_payload)
    assert exc_info.value.field_path == "sourceLayout.sections[0].kind"


@pytest.mark.unit
def test_string_bullets_accepted():
    """Test that plain-string bullets are accepted on input."""
    assert BulletPoint.from_dict("Shipped it") == BulletPoint(text="Shipped it")


@pytest.mark.unit
def test_values_are_immutable(sample_resume):
    """Test that resume values cannot be modified in place."""
    with pytest.raises(dataclasses.FrozenInstanceError):
        sample_resume.name = "Someone Else"
    with pytest.raises(dataclasses.FrozenInstanceError):
        SourceSection(kind="custom", heading="Awards").heading = "Other"
