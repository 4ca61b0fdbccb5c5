"""
Greedy line wrapping against measured widths.

Words are packed onto a line while the measured width fits; a word that does
not fit even an empty line is split character by character. Every split
consumes at least one character, so wrapping always terminates (a single
glyph wider than the line is placed anyway and overflows).

Line widths are given per line index; the last width repeats for all
following lines. This covers hanging-indent bullets and label-prefixed skills
lines, whose first line is narrower than the rest.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from tailorfit.contexts.rendering.measurement import TextMeasure

LETTER_WIDTH_POINTS = 612
LETTER_HEIGHT_POINTS = 792
TWIPS_PER_POINT = 20

LEFT_MARGIN = 640 / TWIPS_PER_POINT
RIGHT_MARGIN = 640 / TWIPS_PER_POINT
TOP_MARGIN = 680 / TWIPS_PER_POINT
BOTTOM_MARGIN = 680 / TWIPS_PER_POINT
CONTENT_WIDTH = LETTER_WIDTH_POINTS - LEFT_MARGIN - RIGHT_MARGIN

MIN_LINE_WIDTH = 1
# Below this many minimum widths, a skills value starts on its own line
SKILLS_VALUE_MIN_WIDTH = MIN_LINE_WIDTH * 8

BULLET_PREFIX_PATTERN = re.compile(r"^\s*•\s*")
LINE_SPLIT_PATTERN = re.compile(r"\r?\n")


@dataclass(frozen=True)
class WrappedLine:
    """
    One visual line before page breaks are assigned.

    Attributes:
        text: Text to draw (skills first lines carry a leading space before the value)
        skills_label: Bold label on the first line of a skills line, "" on its
            continuation lines, None for every other paragraph
        bullet_marker: True on the first line of a bullet paragraph
    """

    text: str
    skills_label: Optional[str] = None
    bullet_marker: bool = False


def split_long_word(
    word: str, max_width: float, measure: TextMeasure, font_key: str, font_size: float
) -> List[str]:
    """Split a word into the longest prefixes that fit max_width, at least one character each."""
    pieces = []
    remaining = word

    while remaining:
        next_size = 1
        while (
            next_size <= len(remaining)
            and measure.width_of_text_at_size(remaining[:next_size], font_key, font_size) <= max_width
        ):
            next_size += 1

        cut = max(1, next_size - 1)
        pieces.append(remaining[:cut])
        remaining = remaining[cut:]

    return pieces


def line_width_for_index(line_widths: Sequence[float], line_index: int) -> float:
    if not line_widths:
        return CONTENT_WIDTH
    width = line_widths[min(line_index, len(line_widths) - 1)]
    return max(MIN_LINE_WIDTH, width)


def wrap_words(
    words: Sequence[str],
    line_widths: Sequence[float],
    measure: TextMeasure,
    font_key: str,
    font_size: float,
) -> List[str]:
    """
    Pack words greedily into lines.

    Args:
        words: Words in order (no empty strings)
        line_widths: Permitted width per line index; the last one repeats
        measure: Text measurer
        font_key: Style variant
        font_size: Font size in points

    Returns:
        Lines in order; always at least one (possibly "")
    """
    lines: List[str] = []
    current = ""

    for word in words:
        max_width = line_width_for_index(line_widths, len(lines))
        candidate = f"{current} {word}" if current else word

        if measure.width_of_text_at_size(candidate, font_key, font_size) <= max_width:
            current = candidate
            continue

        if current:
            lines.append(current)
            current = ""

        fresh_width = line_width_for_index(line_widths, len(lines))
        if measure.width_of_text_at_size(word, font_key, font_size) <= fresh_width:
            current = word
            continue

        pieces = split_long_word(word, fresh_width, measure, font_key, font_size)
        lines.extend(pieces[:-1])
        current = pieces[-1]

    if current or not lines:
        lines.append(current)

    return lines


def wrap_text(
    text: str, max_width: float, measure: TextMeasure, font_key: str, font_size: float
) -> List[str]:
    """
    Wrap text at a single width, honoring embedded newlines.

    Each logical paragraph yields at least one line; blank ones yield "".
    """
    normalized = text.strip()
    if not normalized:
        return [""]

    wrapped: List[str] = []
    for logical in LINE_SPLIT_PATTERN.split(normalized):
        words = logical.split()
        if not words:
            wrapped.append("")
            continue
        wrapped.extend(wrap_words(words, [max_width], measure, font_key, font_size))

    return wrapped or [""]


def wrap_text_with_first_line_width(
    text: str,
    first_line_width: float,
    later_line_width: float,
    measure: TextMeasure,
    font_key: str,
    font_size: float,
) -> List[str]:
    """Wrap text with a narrower (or wider) first line; blank text yields no lines."""
    words = text.split()
    if not words:
        return []
    return wrap_words(words, [first_line_width, later_line_width], measure, font_key, font_size)


def split_skills_line(text: str) -> Optional[Tuple[str, str]]:
    """
    Split "Label: value" at the first colon.

    Returns:
        (label including the colon, trimmed value), or None if there is no
        colon after the first character
    """
    index = text.find(":")
    if index <= 0:
        return None
    return text[: index + 1], text[index + 1 :].strip()


def wrap_skills_line(
    text: str, max_width: float, measure: TextMeasure, font_size: float
) -> Optional[List[WrappedLine]]:
    """
    Wrap a "Label: value" skills line with a bold label.

    The first value line shares the label's row when enough width remains
    after the label and one space; otherwise the value starts on a new
    full-width line and the label row holds only the label.

    Returns:
        Wrapped lines, or None when the text has no label (wrap as plain text)
    """
    split = split_skills_line(text)
    if split is None:
        return None
    label, value = split

    label_width = measure.width_of_text_at_size(label, "bold", font_size)
    space_width = measure.width_of_text_at_size(" ", "regular", font_size)
    first_value_width = max_width - label_width - space_width
    value_on_new_line = first_value_width < SKILLS_VALUE_MIN_WIDTH

    if not value:
        value_lines: List[str] = []
    elif value_on_new_line:
        value_lines = wrap_text(value, max_width, measure, "regular", font_size)
    else:
        value_lines = wrap_text_with_first_line_width(
            value, first_value_width, max_width, measure, "regular", font_size
        )

    shares_label_row = not value_on_new_line and bool(value_lines) and bool(value_lines[0])
    lines = [WrappedLine(text=f" {value_lines[0]}" if shares_label_row else "", skills_label=label)]

    start_index = 1 if shares_label_row else 0
    lines.extend(WrappedLine(text=line, skills_label="") for line in value_lines[start_index:])
    return lines


def wrap_bullet(
    text: str, max_width: float, measure: TextMeasure, font_key: str, font_size: float
) -> List[WrappedLine]:
    """
    Wrap a bullet paragraph whose text starts with a literal "•".

    The glyph is stripped (renderers draw it in the marker column) and only
    the first line is flagged as the marker line. Text without the glyph is
    wrapped as a plain paragraph.
    """
    if not BULLET_PREFIX_PATTERN.match(text):
        return [WrappedLine(text=line) for line in wrap_text(text, max_width, measure, font_key, font_size)]

    stripped = BULLET_PREFIX_PATTERN.sub("", text, count=1).strip()
    wrapped = wrap_text(stripped, max_width, measure, font_key, font_size)
    return [WrappedLine(text=line, bullet_marker=index == 0) for index, line in enumerate(wrapped)]
