"""
Built-in default theme.

Provides a colour for every key in
:data:`~weft.theme.models.PALETTE_KEYS`, using the 16 standard terminal
colours so that it renders on any backend.
"""

from __future__ import annotations

from weft.theme.models import BorderStyle, Palette, Theme

# ---------------------------------------------------------------------------
# Default palette
# ---------------------------------------------------------------------------

DEFAULT_PALETTE: Palette = {
    "background": "blue",
    "shadow": "black",
    "view": "white",
    "primary": "black",
    "secondary": "blue",
    "tertiary": "bright_white",
    "title_primary": "red",
    "title_secondary": "yellow",
    "highlight": "red",
    "highlight_inactive": "blue",
    "highlight_text": "white",
}


DEFAULT_THEME = Theme(
    name="default",
    description="Blue background, white views",
    author="weft",
    shadow=True,
    borders=BorderStyle.SIMPLE,
    palette=dict(DEFAULT_PALETTE),
)


def get_default_theme() -> Theme:
    """Return a fresh copy of the default theme."""
    return Theme(
        name=DEFAULT_THEME.name,
        description=DEFAULT_THEME.description,
        author=DEFAULT_THEME.author,
        shadow=DEFAULT_THEME.shadow,
        borders=DEFAULT_THEME.borders,
        palette=dict(DEFAULT_PALETTE),
    )
