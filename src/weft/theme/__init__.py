"""Theme system: palettes, styles and their loading."""
from __future__ import annotations

from weft.theme.defaults import DEFAULT_PALETTE, DEFAULT_THEME, get_default_theme
from weft.theme.loader import discover_themes, load_theme
from weft.theme.models import (
    PALETTE_KEYS,
    BorderStyle,
    ColorPair,
    ColorStyle,
    Effect,
    Palette,
    Style,
    Theme,
    parse_color,
)

__all__ = [
    "BorderStyle",
    "ColorPair",
    "ColorStyle",
    "DEFAULT_PALETTE",
    "DEFAULT_THEME",
    "Effect",
    "PALETTE_KEYS",
    "Palette",
    "Style",
    "Theme",
    "discover_themes",
    "get_default_theme",
    "load_theme",
    "parse_color",
]
