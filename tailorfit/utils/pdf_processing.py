"""
PDF read-back utilities used to verify rendered exports.

Helper functions:
    page_count: Quick page count without full extraction.
    extract_page_lines: Text lines per page, clustered by baseline.
    normalize_for_matching: Text normalization for fuzzy matching.
"""

from io import BytesIO
from pathlib import Path
from typing import List, Optional, Union

import pdfplumber
from PyPDF2 import PdfReader

PdfSource = Union[bytes, Path, str]


def _open_source(pdf: PdfSource):
    if isinstance(pdf, (bytes, bytearray)):
        return BytesIO(pdf)
    return str(pdf)


def page_count(pdf: PdfSource) -> Optional[int]:
    """Get page count from PDF bytes or path, or None if unreadable."""
    try:
        reader = PdfReader(_open_source(pdf))
        return len(reader.pages)
    except Exception:
        return None


def normalize_for_matching(text: str) -> str:
    """Keep only lowercase alphanumeric characters for fuzzy text matching."""
    return "".join(c for c in text.lower() if c.isalnum())


def cluster_by_y_tolerance(chars: List, tolerance: float = 3.0) -> List[List]:
    """
    Group characters into lines by Y-coordinate proximity.

    Handles baseline shifts between bold/regular text that would otherwise split lines.
    """
    if not chars:
        return []

    sorted_chars = sorted(chars, key=lambda c: (c["top"], c["x0"]))

    lines = []
    current_line = [sorted_chars[0]]
    current_y = sorted_chars[0]["top"]

    for char in sorted_chars[1:]:
        if abs(char["top"] - current_y) <= tolerance:
            current_line.append(char)
        else:
            lines.append(current_line)
            current_line = [char]
            current_y = char["top"]

    if current_line:
        lines.append(current_line)

    return lines


def extract_page_lines(pdf: PdfSource, y_tolerance: float = 3.0) -> List[List[str]]:
    """
    Extract visual text lines for every page.

    Returns:
        One list of line strings per page, top to bottom.
    """
    pages: List[List[str]] = []
    with pdfplumber.open(_open_source(pdf)) as document:
        for page in document.pages:
            lines = []
            for line_chars in cluster_by_y_tolerance(page.chars, tolerance=y_tolerance):
                ordered = sorted(line_chars, key=lambda c: c["x0"])
                text = ""
                previous = None
                for char in ordered:
                    # pdfplumber reports no space glyphs between separately drawn strings
                    if previous is not None and char["x0"] - previous["x1"] > 1.0:
                        text += " "
                    text += char["text"]
                    previous = char
                lines.append(" ".join(text.split()))
            pages.append(lines)
    return pages
