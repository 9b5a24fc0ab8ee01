"""
Theme data models.

A :class:`Theme` maps palette keys (``"primary"``, ``"highlight"``, ...)
to colour strings.  Views never name concrete colours: they request a
:class:`ColorStyle`, which the printer resolves against the active theme
and the colours currently in effect.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from rich.color import Color, ColorParseError

# ---------------------------------------------------------------------------
# Palette keys
# ---------------------------------------------------------------------------

PALETTE_KEYS: list[str] = [
    "background",
    "shadow",
    "view",
    "primary",
    "secondary",
    "tertiary",
    "title_primary",
    "title_secondary",
    "highlight",
    "highlight_inactive",
    "highlight_text",
]
"""Every palette key a complete theme defines."""

Palette = dict[str, str]
"""A mapping from palette keys to colour strings."""


def parse_color(text: str) -> Color | None:
    """
    Parse a colour string such as ``"#1e1e2e"``, ``"red"`` or
    ``"color(33)"``.

    Returns
    -------
    Color | None
        ``None`` when *text* is not a colour.
    """
    try:
        return Color.parse(text)
    except ColorParseError:
        return None


# ---------------------------------------------------------------------------
# Styles
# ---------------------------------------------------------------------------


class Effect(Enum):
    """Text effects a backend may render."""

    SIMPLE = "simple"
    REVERSE = "reverse"
    DIM = "dim"
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    UNDERLINE = "underline"
    BLINK = "blink"


class BorderStyle(Enum):
    SIMPLE = "simple"
    OUTSET = "outset"
    NONE = "none"


@dataclass(frozen=True)
class ColorPair:
    """Concrete foreground and background colours."""

    front: Color
    back: Color

    def invert(self) -> ColorPair:
        return ColorPair(self.back, self.front)


@dataclass(frozen=True)
class ColorStyle:
    """
    Abstract colours for text.

    Each side is a palette key, a literal colour string, or ``None`` to
    keep the colour currently in effect.
    """

    front: str | None = None
    back: str | None = None

    @classmethod
    def inherit_parent(cls) -> ColorStyle:
        return cls()

    @classmethod
    def primary(cls) -> ColorStyle:
        return cls("primary", "view")

    @classmethod
    def secondary(cls) -> ColorStyle:
        return cls("secondary", "view")

    @classmethod
    def tertiary(cls) -> ColorStyle:
        return cls("tertiary", "view")

    @classmethod
    def title_primary(cls) -> ColorStyle:
        return cls("title_primary", "view")

    @classmethod
    def title_secondary(cls) -> ColorStyle:
        return cls("title_secondary", "view")

    @classmethod
    def background(cls) -> ColorStyle:
        return cls("view", "background")

    @classmethod
    def shadow(cls) -> ColorStyle:
        return cls("shadow", "shadow")

    @classmethod
    def highlight(cls) -> ColorStyle:
        return cls("highlight_text", "highlight")

    @classmethod
    def highlight_inactive(cls) -> ColorStyle:
        return cls("highlight_text", "highlight_inactive")


@dataclass(frozen=True)
class Style:
    """A colour style plus a set of effects."""

    color: ColorStyle = field(default_factory=ColorStyle)
    effects: frozenset[Effect] = frozenset()

    @classmethod
    def from_color(cls, color: ColorStyle) -> Style:
        return cls(color=color)

    @classmethod
    def from_effect(cls, effect: Effect) -> Style:
        return cls(effects=frozenset({effect}))


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------


@dataclass
class Theme:
    """
    Full theme definition including metadata and palette.

    Attributes
    ----------
    name:
        Short identifier for the theme (e.g. ``"default"``).
    description:
        One-line human-readable description.
    author:
        Theme author name or handle.
    shadow:
        Whether layers draw a drop shadow.
    borders:
        How boxes are drawn.
    palette:
        Mapping from palette key to colour string.  The loader fills in
        defaults for any missing key.
    """

    name: str = "untitled"
    description: str = ""
    author: str = ""
    shadow: bool = True
    borders: BorderStyle = BorderStyle.SIMPLE
    palette: Palette = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Convenience accessors
    # ------------------------------------------------------------------

    def get(self, key: str, fallback: str = "default") -> str:
        """Return the colour string for *key*, or *fallback* if absent."""
        return self.palette.get(key, fallback)

    def __getitem__(self, key: str) -> str:
        return self.palette[key]

    def __contains__(self, key: str) -> bool:
        return key in self.palette

    def color(self, key: str) -> Color:
        """Return the parsed colour for palette *key*."""
        parsed = parse_color(self.get(key))
        return parsed if parsed is not None else Color.default()

    def default_pair(self) -> ColorPair:
        """Colours in effect before any style is applied."""
        return ColorPair(self.color("primary"), self.color("view"))

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _resolve_side(self, ref: str | None, previous: Color) -> Color:
        if ref is None:
            return previous
        if ref in self.palette:
            return self.color(ref)
        parsed = parse_color(ref)
        return parsed if parsed is not None else previous

    def resolve(self, style: ColorStyle, previous: ColorPair) -> ColorPair:
        """
        Resolve *style* to concrete colours.

        Unset sides and unknown colour strings keep the colour from
        *previous*.
        """
        return ColorPair(
            self._resolve_side(style.front, previous.front),
            self._resolve_side(style.back, previous.back),
        )
