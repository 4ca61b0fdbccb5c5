"""Stable fingerprint of an export input, used to detect when exports must be regenerated."""

import hashlib
import json

from tailorfit.contexts.modeling.resume_data_structure import SourceLayout, TailoredResume

REVISION_LENGTH = 24


def stable_serialize(value) -> str:
    """Compact JSON with sorted keys; equal values always serialize identically."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def compute_export_revision(resume: TailoredResume, source_layout: SourceLayout) -> str:
    """
    Fingerprint a (resume, layout) pair.

    Returns:
        First 24 hex characters of the SHA-256 of the stable wire serialization
    """
    payload = {"resume": resume.to_dict(), "sourceLayout": source_layout.to_dict()}
    digest = hashlib.sha256(stable_serialize(payload).encode("utf-8")).hexdigest()
    return digest[:REVISION_LENGTH]
