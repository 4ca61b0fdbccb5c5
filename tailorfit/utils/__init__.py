"""
Shared utilities for tailorfit.

Common functionality used across contexts:
- Logger setup with provenance tracking
- PDF read-back helpers
- Timestamps
"""

from tailorfit.utils.timestamp import now

__all__ = ["now"]
