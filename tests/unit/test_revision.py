"""Unit tests for export revision fingerprints."""

import pytest

from tailorfit.contexts.modeling import SourceLayout, compute_export_revision
from tailorfit.contexts.modeling.editing import update_summary
from tailorfit.contexts.modeling.revision import stable_serialize


@pytest.mark.unit
def test_stable_serialize_sorts_keys():
    """Test that key order does not change the serialization."""
    assert stable_serialize({"b": 1, "a": [2, {"d": 3, "c": 4}]}) == '{"a":[2,{"c":4,"d":3}],"b":1}'
    assert stable_serialize("é") == '"é"'


@pytest.mark.unit
def test_revision_is_deterministic(sample_resume, sample_layout):
    """Test that equal inputs give the same 24-character revision."""
    revision = compute_export_revision(sample_resume, sample_layout)

    assert len(revision) == 24
    assert all(c in "0123456789abcdef" for c in revision)
    assert compute_export_revision(sample_resume, sample_layout) == revision


@pytest.mark.unit
def test_revision_changes_with_content(sample_resume, sample_layout):
    """Test that editing the resume or layout changes the revision."""
    revision = compute_export_revision(sample_resume, sample_layout)

    edited = update_summary(sample_resume, "Different summary.")
    assert compute_export_revision(edited, sample_layout) != revision
    assert compute_export_revision(sample_resume, SourceLayout()) != revision
