"""
Text measurement.

Wrapping decisions must use the same glyph metrics the PDF renderer draws
with, otherwise planned lines overflow or wrap early in the output.
ReportLabTextMeasure reads ReportLab's built-in AFM metrics for the standard
Times family, which are the fonts render_pdf draws with.
"""

from typing import Dict, Protocol

from reportlab.pdfbase import pdfmetrics

from tailorfit.contexts.modeling.exceptions import FontResourceError

# Style variant -> ReportLab standard font name
FONT_NAMES: Dict[str, str] = {
    "regular": "Times-Roman",
    "bold": "Times-Bold",
    "italic": "Times-Italic",
    "boldItalic": "Times-BoldItalic",
}


def resolve_font_key(bold: bool, italic: bool) -> str:
    if bold and italic:
        return "boldItalic"
    if bold:
        return "bold"
    if italic:
        return "italic"
    return "regular"


class TextMeasure(Protocol):
    def width_of_text_at_size(self, text: str, font_key: str, font_size: float) -> float:
        """Width of text in points for a style variant at a font size."""
        ...


class ReportLabTextMeasure:
    """
    Production measurer backed by ReportLab's standard Times metrics.

    Raises:
        FontResourceError: If a font variant cannot be resolved (at construction)
    """

    def __init__(self, font_names: Dict[str, str] = None):
        self.font_names = dict(font_names or FONT_NAMES)
        for font_key in FONT_NAMES:
            if font_key not in self.font_names:
                raise FontResourceError(f"{font_key} (no font mapped)")

        for font_name in self.font_names.values():
            try:
                pdfmetrics.getFont(font_name)
            except Exception as e:
                raise FontResourceError(font_name, e) from e

    def width_of_text_at_size(self, text: str, font_key: str, font_size: float) -> float:
        return pdfmetrics.stringWidth(text, self.font_names[font_key], font_size)


class ApproximateTextMeasure:
    """
    Average-character-width measurer for tests that do not assert exact placement.

    Every character (space included) is char_width_factor × font size wide;
    bold variants are bold_factor wider.
    """

    def __init__(self, char_width_factor: float = 0.5, bold_factor: float = 1.1):
        self.char_width_factor = char_width_factor
        self.bold_factor = bold_factor

    def width_of_text_at_size(self, text: str, font_key: str, font_size: float) -> float:
        width = len(text) * font_size * self.char_width_factor
        if font_key in ("bold", "boldItalic"):
            width *= self.bold_factor
        return width
