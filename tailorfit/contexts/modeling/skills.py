"""
Skill line normalization and priority-ordered trimming.

Skill lines are flat strings, usually "Category: item, item, item". Lines
produced by the tailoring service may pack several categories into one string
separated by pipes; normalization splits those apart.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from tailorfit.contexts.modeling.text import normalize_space

SKILL_LINE_SPLIT_PATTERN = re.compile(r"\r?\n|\|")

# Categories trimmed first come first
SKILL_TRIM_ORDER = (
    "other",
    "methods",
    "tools",
    "databases",
    "cloud",
    "frameworks",
    "languages",
)

CORE_CATEGORY_MIN_ITEMS = {
    "languages": 3,
    "frameworks": 2,
    "cloud": 2,
}


def normalize_skill_lines(skills: Iterable[str]) -> Tuple[str, ...]:
    """Split skill strings on newlines and pipes, collapse whitespace, drop empties."""
    lines: List[str] = []
    for skill in skills:
        for part in SKILL_LINE_SPLIT_PATTERN.split(skill):
            part = normalize_space(part)
            if part:
                lines.append(part)
    return tuple(lines)


def parse_skills_editor_input(text: str) -> Tuple[str, ...]:
    """Parse the free-text skills editor (one category per line) into skill lines."""
    return normalize_skill_lines([text])


def format_skills_for_editor(skills: Iterable[str]) -> str:
    """Format skill lines for the free-text skills editor."""
    return "\n".join(normalize_skill_lines(skills))


@dataclass(frozen=True)
class SkillCategory:
    label: str
    items: Tuple[str, ...]

    def format(self) -> str:
        return f"{self.label}: {', '.join(self.items)}"


@dataclass(frozen=True)
class SkillTrimOperation:
    """
    Record of one skill removal.

    Attributes:
        kind: "item" when a single item was removed, "line" when a whole line was dropped
        line_index: Index of the affected line before removal
        label: Category label (item removals only)
        item: Removed item (item removals only)
        line: Removed line text (line removals only)
    """

    kind: str
    line_index: int
    label: Optional[str] = None
    item: Optional[str] = None
    line: Optional[str] = None


def parse_category(line: str) -> Optional[SkillCategory]:
    """Parse "Label: a, b, c" into a SkillCategory, or None if the line has no label or items."""
    idx = line.find(":")
    if idx <= 0:
        return None

    label = normalize_space(line[:idx])
    items = tuple(item for item in (normalize_space(raw) for raw in line[idx + 1 :].split(",")) if item)
    if not label or not items:
        return None
    return SkillCategory(label=label, items=items)


def normalize_category_label(label: str) -> str:
    return re.sub(r"[^a-z]", "", label.lower())


def resolve_category_priority_key(label: str) -> str:
    """Map a free-form category label onto one of SKILL_TRIM_ORDER."""
    normalized = normalize_category_label(label)
    if "language" in normalized:
        return "languages"
    if "framework" in normalized:
        return "frameworks"
    if "cloud" in normalized:
        return "cloud"
    if "database" in normalized or "data" in normalized:
        return "databases"
    if "tool" in normalized:
        return "tools"
    if "method" in normalized:
        return "methods"
    return "other"


def remove_one_skill_item_by_priority(
    skill_lines: Sequence[str], enforce_core_minimum: bool = True
) -> Tuple[Tuple[str, ...], Optional[SkillTrimOperation]]:
    """
    Remove a single skill item, lowest-value category first.

    Within a category the last matching line loses its last item. Lines whose
    category has no minimum are dropped when only one item remains.

    Args:
        skill_lines: Current skill lines
        enforce_core_minimum: Keep CORE_CATEGORY_MIN_ITEMS items in core categories

    Returns:
        (next_lines, operation); operation is None when nothing could be removed
    """
    lines = list(skill_lines)

    for category_key in SKILL_TRIM_ORDER:
        for i in range(len(lines) - 1, -1, -1):
            category = parse_category(lines[i])
            if category is None:
                continue
            if resolve_category_priority_key(category.label) != category_key:
                continue

            min_items = CORE_CATEGORY_MIN_ITEMS.get(category_key, 0) if enforce_core_minimum else 0

            if len(category.items) > max(1, min_items):
                removed_item = category.items[-1]
                lines[i] = SkillCategory(category.label, category.items[:-1]).format()
                return tuple(lines), SkillTrimOperation(
                    kind="item", line_index=i, label=category.label, item=removed_item
                )

            if len(category.items) == 1 and min_items == 0:
                removed_line = lines.pop(i)
                return tuple(lines), SkillTrimOperation(kind="line", line_index=i, line=removed_line)

    return tuple(lines), None


def remove_one_skill_item(
    skill_lines: Sequence[str],
) -> Tuple[Tuple[str, ...], Optional[SkillTrimOperation]]:
    """
    Remove one skill item: with core minimums, then without them, then the last whole line.

    Returns:
        (next_lines, operation); operation is None only when skill_lines is empty
    """
    next_lines, removed = remove_one_skill_item_by_priority(skill_lines, enforce_core_minimum=True)
    if removed is not None:
        return next_lines, removed

    next_lines, removed = remove_one_skill_item_by_priority(skill_lines, enforce_core_minimum=False)
    if removed is not None:
        return next_lines, removed

    if not skill_lines:
        return (), None

    index = len(skill_lines) - 1
    return tuple(skill_lines[:-1]), SkillTrimOperation(
        kind="line", line_index=index, line=skill_lines[index]
    )
