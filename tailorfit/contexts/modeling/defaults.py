"""
Default paragraph style table for the canonical document.

Sizes are half-points; spacing and indents are twips (twentieths of a point),
the native units of the DOCX output. The pagination planner converts them to
points.
"""

from typing import Any, Dict

PARAGRAPH_STYLE_NAMES = ("name", "contact", "sectionHeading", "body", "entryHeader", "bullet")

# Every option with its neutral value; archetypes below only list what differs
BASE_PARAGRAPH_STYLE: Dict[str, Any] = {
    "bold": False,
    "italic": False,
    "center": False,
    "font_size_half_points": 21,
    "spacing_before": 0,
    "spacing_after": 0,
    "indent_left": 0,
    "hanging": 0,
    "section_divider": False,
}

DEFAULT_PARAGRAPH_STYLES: Dict[str, Dict[str, Any]] = {
    "name": {
        "bold": True,
        "center": True,
        "font_size_half_points": 34,
        "spacing_after": 70,
    },
    "contact": {
        "center": True,
        "font_size_half_points": 20,
        "spacing_after": 90,
    },
    "sectionHeading": {
        "bold": True,
        "font_size_half_points": 22,
        "spacing_before": 120,
        "spacing_after": 55,
        "section_divider": True,
    },
    "body": {
        "font_size_half_points": 21,
        "spacing_after": 20,
    },
    "entryHeader": {
        "bold": True,
        "font_size_half_points": 21,
        "spacing_after": 18,
    },
    "bullet": {
        "font_size_half_points": 20,
        "spacing_after": 12,
        "indent_left": 360,
        "hanging": 220,
    },
}

# Document-wide defaults (DOCX Normal style)
DEFAULT_FONT_FAMILY = "Times New Roman"
DEFAULT_FONT_SIZE_HALF_POINTS = 21
DOCUMENT_TITLE = "Tailored Resume"


def get_default_paragraph_styles() -> Dict[str, Dict[str, Any]]:
    """Get every archetype with all options filled in."""
    return {
        name: {**BASE_PARAGRAPH_STYLE, **options}
        for name, options in DEFAULT_PARAGRAPH_STYLES.items()
    }
