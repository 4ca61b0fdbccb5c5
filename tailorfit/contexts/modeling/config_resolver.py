"""
Paragraph style table resolution.

The style table is immutable configuration injected into the document model
and read by the planner and both renderers. Defaults live in defaults.py; a
YAML file may override individual options:

    paragraph_styles:
      bullet:
        spacing_after: 10
      name:
        font_size_half_points: 32

Examples:
    >>> table = load_style_table()                       # defaults (or TAILORFIT_STYLE_CONFIG)
    >>> table = load_style_table(Path("styles.yaml"))    # explicit override file
    >>> table = build_style_table({"bullet": {"spacing_after": 10}})
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from tailorfit.contexts.modeling.defaults import get_default_paragraph_styles
from tailorfit.contexts.modeling.logger import log_style_overrides

load_dotenv()


@dataclass(frozen=True)
class ParagraphStyleOptions:
    """
    Formatting options for one paragraph archetype.

    Attributes:
        bold: Bold font variant
        italic: Italic font variant
        center: Center alignment
        font_size_half_points: Font size in half-points (21 = 10.5pt)
        spacing_before: Space above the paragraph in twips
        spacing_after: Space below the paragraph in twips
        indent_left: Left indent in twips
        hanging: Hanging indent in twips (first line starts this far left of indent_left)
        section_divider: Draw a rule below the paragraph
    """

    bold: bool = False
    italic: bool = False
    center: bool = False
    font_size_half_points: int = 21
    spacing_before: int = 0
    spacing_after: int = 0
    indent_left: int = 0
    hanging: int = 0
    section_divider: bool = False


STYLE_OPTION_KEYS = tuple(f.name for f in fields(ParagraphStyleOptions))


class ParagraphStyleTable:
    """Read-only mapping from archetype name to ParagraphStyleOptions."""

    def __init__(self, styles: Mapping[str, ParagraphStyleOptions]):
        self._styles = MappingProxyType(dict(styles))

    def __getitem__(self, style: str) -> ParagraphStyleOptions:
        return self.options_for(style)

    def __contains__(self, style: str) -> bool:
        return style in self._styles

    def __iter__(self):
        return iter(self._styles)

    def __eq__(self, other) -> bool:
        return isinstance(other, ParagraphStyleTable) and dict(self._styles) == dict(other._styles)

    def __hash__(self) -> int:
        return hash(tuple(sorted(self._styles.items())))

    def __repr__(self) -> str:
        return f"ParagraphStyleTable({dict(self._styles)!r})"

    def options_for(self, style: str) -> ParagraphStyleOptions:
        """
        Get options for an archetype.

        Raises:
            KeyError: If the archetype is not in the table
        """
        if style not in self._styles:
            raise KeyError(f"Unknown paragraph style '{style}'. Known: {list(self._styles)}")
        return self._styles[style]

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {
            name: {key: getattr(options, key) for key in STYLE_OPTION_KEYS}
            for name, options in self._styles.items()
        }


def _validate_overrides(overrides: Mapping[str, Any], defaults: Mapping[str, Any]) -> None:
    for style, options in overrides.items():
        if style not in defaults:
            raise ValueError(
                f"Unknown paragraph style '{style}'. Expected one of {list(defaults)}"
            )
        if not isinstance(options, Mapping):
            raise ValueError(f"Overrides for '{style}' must be a mapping, got {type(options).__name__}")
        unknown = [key for key in options if key not in STYLE_OPTION_KEYS]
        if unknown:
            raise ValueError(
                f"Unknown option(s) {unknown} for paragraph style '{style}'. "
                f"Expected keys from {list(STYLE_OPTION_KEYS)}"
            )


def build_style_table(overrides: Optional[Mapping[str, Any]] = None) -> ParagraphStyleTable:
    """
    Merge archetype overrides over the defaults.

    Args:
        overrides: {archetype: {option: value}}; None for pure defaults

    Returns:
        Immutable ParagraphStyleTable

    Raises:
        ValueError: If an archetype or option key is unknown
    """
    defaults = get_default_paragraph_styles()
    merged = OmegaConf.create(defaults)

    if overrides:
        _validate_overrides(overrides, defaults)
        merged = OmegaConf.merge(merged, OmegaConf.create(dict(overrides)))

    resolved = OmegaConf.to_container(merged, resolve=True)
    return ParagraphStyleTable(
        {name: ParagraphStyleOptions(**options) for name, options in resolved.items()}
    )


def load_style_table(config_path: Optional[Path] = None) -> ParagraphStyleTable:
    """
    Load the style table, applying YAML overrides when a config file is given.

    Args:
        config_path: YAML file with a top-level paragraph_styles mapping
            (defaults to TAILORFIT_STYLE_CONFIG; defaults only when unset)

    Returns:
        Immutable ParagraphStyleTable
    """
    if config_path is None:
        env_path = os.getenv("TAILORFIT_STYLE_CONFIG")
        if not env_path:
            return build_style_table()
        config_path = Path(env_path)

    config = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True) or {}
    overrides = config.get("paragraph_styles") or {}
    log_style_overrides(config_path, overrides)
    return build_style_table(overrides)
