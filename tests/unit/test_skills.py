"""Unit tests for skill line normalization and priority trimming."""

import pytest

from tailorfit.contexts.modeling.skills import (
    format_skills_for_editor,
    normalize_skill_lines,
    parse_category,
    parse_skills_editor_input,
    remove_one_skill_item,
    remove_one_skill_item_by_priority,
    resolve_category_priority_key,
)


@pytest.mark.unit
def test_normalize_splits_pipes_and_newlines():
    """Test that pipe-joined and multi-line skill strings become separate lines."""
    lines = normalize_skill_lines(
        ["Languages: Python | Frameworks: React", "   ", "Tools:  Git\nCloud: AWS"]
    )
    assert lines == ("Languages: Python", "Frameworks: React", "Tools: Git", "Cloud: AWS")


@pytest.mark.unit
def test_editor_input_and_format():
    """Test that the free-text editor parses one category per line."""
    parsed = parse_skills_editor_input("Languages: Go\n\nTools: Git | Cloud: AWS\n")
    assert parsed == ("Languages: Go", "Tools: Git", "Cloud: AWS")
    assert format_skills_for_editor(parsed) == "Languages: Go\nTools: Git\nCloud: AWS"


@pytest.mark.unit
def test_parse_category():
    """Test parsing a labeled skill line into label and items."""
    category = parse_category("Languages:  Go ,Python, ")
    assert category.label == "Languages"
    assert category.items == ("Go", "Python")
    assert category.format() == "Languages: Go, Python"


@pytest.mark.unit
@pytest.mark.parametrize("line", ["no colon here", ": Go, Python", "Languages:", "Languages: , ,"])
def test_parse_category_rejects_unlabeled_lines(line):
    """Test that lines without a label or items are not categories."""
    assert parse_category(line) is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "label,expected",
    [
        ("Programming Languages", "languages"),
        ("Frameworks & Libraries", "frameworks"),
        ("Cloud Platforms", "cloud"),
        ("Databases", "databases"),
        ("Data Engineering", "databases"),
        ("DevOps Tools", "tools"),
        ("Agile Methodologies", "methods"),
        ("Soft Skills", "other"),
    ],
)
def test_resolve_category_priority_key(label, expected):
    """Test mapping free-form labels onto trim categories."""
    assert resolve_category_priority_key(label) == expected


@pytest.mark.unit
def test_lowest_priority_category_trimmed_first():
    """Test that 'other' categories lose items before languages."""
    lines, operation = remove_one_skill_item_by_priority(
        ["Languages: Go, Python, Rust, C", "Interests: Chess, Running"]
    )
    assert lines == ("Languages: Go, Python, Rust, C", "Interests: Chess")
    assert operation.kind == "item"
    assert operation.item == "Running"
    assert operation.label == "Interests"


@pytest.mark.unit
def test_single_item_line_without_minimum_is_dropped():
    """Test that a one-item line in a category without a minimum is removed whole."""
    lines, operation = remove_one_skill_item_by_priority(["Languages: A, B, C", "Interests: Chess"])
    assert lines == ("Languages: A, B, C",)
    assert operation.kind == "line"
    assert operation.line == "Interests: Chess"
    assert operation.line_index == 1


@pytest.mark.unit
def test_core_minimum_is_respected_then_relaxed():
    """Test that core minimums block the first pass and are relaxed afterwards."""
    lines, operation = remove_one_skill_item_by_priority(["Languages: A, B, C"])
    assert operation is None
    assert lines == ("Languages: A, B, C",)

    lines, operation = remove_one_skill_item(["Languages: A, B, C"])
    assert lines == ("Languages: A, B",)
    assert operation.kind == "item"
    assert operation.item == "C"


@pytest.mark.unit
def test_last_matching_line_trimmed_within_category():
    """Test that within a category the last line loses its last item."""
    lines, operation = remove_one_skill_item_by_priority(
        ["Tools: Git, Docker", "Build Tools: Make, Bazel"]
    )
    assert lines == ("Tools: Git, Docker", "Build Tools: Make")
    assert operation.line_index == 1


@pytest.mark.unit
def test_unparseable_lines_dropped_from_the_end():
    """Test that lines without categories are dropped last line first."""
    lines, operation = remove_one_skill_item(["free text one", "free text two"])
    assert lines == ("free text one",)
    assert operation.kind == "line"
    assert operation.line == "free text two"


@pytest.mark.unit
def test_single_core_item_is_eventually_removed():
    """Test that a lone language is dropped once minimums no longer apply."""
    lines, operation = remove_one_skill_item(["Languages: Go"])
    assert lines == ()
    assert operation.kind == "line"


@pytest.mark.unit
def test_remove_from_empty_skills():
    """Test that removing from no skills reports no operation."""
    assert remove_one_skill_item([]) == ((), None)
