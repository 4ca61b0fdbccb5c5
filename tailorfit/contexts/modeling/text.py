"""Text sanitization shared by the content model, estimator and editors."""

import re
from typing import Any, Optional

DASH_PATTERN = re.compile(r"[\u2013\u2014]")
WHITESPACE_PATTERN = re.compile(r"\s+")
# C0 controls other than tab, newline and carriage return; not representable in XML 1.0
CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

NULL_LIKE_VALUES = {"", "null", "undefined", "n/a", "-"}


def sanitize_text(value: Optional[str]) -> str:
    """
    Drop control characters, collapse en/em dashes to hyphens and whitespace
    runs to single spaces, then trim.

    Idempotent: sanitize_text(sanitize_text(x)) == sanitize_text(x).
    """
    if value is None:
        return ""
    value = CONTROL_CHAR_PATTERN.sub("", value)
    value = DASH_PATTERN.sub("-", value)
    value = WHITESPACE_PATTERN.sub(" ", value)
    return value.strip()


def is_null_like(value: Any) -> bool:
    """True for None and for strings that carry no printable content ('n/a', 'null', ...)."""
    if value is None:
        return True
    if not isinstance(value, str):
        return False
    return value.strip().lower() in NULL_LIKE_VALUES


def sanitize_nullable_text(value: Any) -> Optional[str]:
    """Sanitized text, or None when the value is null-like."""
    if is_null_like(value):
        return None
    return sanitize_text(str(value))


def normalize_space(value: str) -> str:
    """Collapse whitespace runs and trim, leaving dashes untouched."""
    return WHITESPACE_PATTERN.sub(" ", value).strip()
