"""
Scoped drawing context.

A :class:`Printer` is handed to :meth:`View.draw`.  Coordinates given to
it are relative to the view's own top-left corner; the printer translates
them to the screen and crops anything outside the view's window.

Derived printers (:meth:`Printer.offset_by`, :meth:`Printer.cropped`, ...)
share the backend and colour state with their parent.  Colour and effect
changes are context managers that restore the previous state on every
exit path::

    with printer.color(ColorStyle.highlight()):
        printer.print((0, 0), "selected")
"""

from __future__ import annotations

import copy
from contextlib import ExitStack, contextmanager
from typing import Iterator

from rich.cells import cell_len, get_character_cell_size

from weft.backend import Backend
from weft.direction import Orientation
from weft.rect import Rect
from weft.theme.models import BorderStyle, ColorPair, ColorStyle, Effect, Style, Theme
from weft.vec import XY, Vec2Like, as_xy


class Printer:
    """
    Drawing context bound to a rectangle of the screen.

    Attributes
    ----------
    offset:
        Screen position of the printer's top-left cell.
    output_size:
        Size of the visible window, in cells.
    size:
        Size the view believes it has.  It can exceed ``output_size`` when
        the view is scrolled.
    content_offset:
        Part of the view hidden above and to the left of the window.
    focused:
        Whether the view being drawn is on the focus path.
    enabled:
        Whether the view being drawn is enabled.
    theme:
        Theme used to resolve colour styles.
    """

    def __init__(self, size: Vec2Like, theme: Theme, backend: Backend) -> None:
        size = as_xy(size)
        self.offset: XY[int] = XY.zero()
        self.output_size: XY[int] = size
        self.size: XY[int] = size
        self.content_offset: XY[int] = XY.zero()
        self.focused = True
        self.enabled = True
        self.theme = theme
        self.backend = backend
        # Shared with every derived printer.
        self._colors: list[ColorPair] = [theme.default_pair()]

    # ------------------------------------------------------------------
    # Text output
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Clear the whole screen with the theme background."""
        self.backend.clear(self.theme.color("background"))

    def print(self, start: Vec2Like, text: str) -> None:
        """
        Print a single line of *text* starting at *start*.

        Parts outside the window are cropped, measured in terminal cells.
        A wide character cut in half by the left edge is replaced by a
        space.
        """
        start = as_xy(start)
        if not start.strictly_lt(self.output_size + self.content_offset):
            return

        hidden = self.content_offset.saturating_sub(start)
        if hidden.y > 0:
            return

        if hidden.x > 0:
            skipped = 0
            index = 0
            while index < len(text) and skipped < hidden.x:
                skipped += get_character_cell_size(text[index])
                index += 1
            text = text[index:]
            if skipped > hidden.x:
                text = " " * (skipped - hidden.x) + text
            start = start + (hidden.x, 0)

        start = start - self.content_offset
        room = self.output_size.x - start.x
        if room <= 0:
            return

        width = 0
        end = 0
        for char in text:
            char_width = get_character_cell_size(char)
            if width + char_width > room:
                break
            width += char_width
            end += 1
        if end:
            self.backend.print_at(start + self.offset, text[:end])

    def print_hline(self, start: Vec2Like, length: int, pattern: str) -> None:
        """Repeat *pattern* horizontally over *length* cells."""
        repeat = length // max(cell_len(pattern), 1)
        if repeat > 0:
            self.print(start, pattern * repeat)

    def print_vline(self, start: Vec2Like, length: int, pattern: str) -> None:
        """Repeat *pattern* vertically over *length* rows."""
        start = as_xy(start)
        for y in range(length):
            self.print(start + (0, y), pattern)

    def print_line(self, orientation: Orientation, start: Vec2Like, length: int, pattern: str) -> None:
        if orientation is Orientation.HORIZONTAL:
            self.print_hline(start, length, pattern)
        else:
            self.print_vline(start, length, pattern)

    def print_box(self, start: Vec2Like, size: Vec2Like, invert: bool = False) -> None:
        """
        Draw a box outline of *size* with its top-left at *start*.

        Nothing is drawn for boxes smaller than 2x2 or when the theme has
        no borders.
        """
        start = as_xy(start)
        size = as_xy(size)
        if size.x < 2 or size.y < 2 or self.theme.borders is BorderStyle.NONE:
            return
        end = start + size.saturating_sub((1, 1))

        with self.border_color(high=True, invert=invert):
            self.print(start, "┌")
            self.print_hline(start + (1, 0), size.x - 2, "─")
            self.print_vline(start + (0, 1), size.y - 2, "│")
            self.print((start.x, end.y), "└")

        with self.border_color(high=False, invert=invert):
            self.print((end.x, start.y), "┐")
            self.print_vline((end.x, start.y + 1), size.y - 2, "│")
            self.print_hline((start.x + 1, end.y), size.x - 2, "─")
            self.print(end, "┘")

    def print_hdelim(self, start: Vec2Like, length: int) -> None:
        """Draw a horizontal delimiter with T-junctions at both ends."""
        start = as_xy(start)
        if length < 2:
            return
        self.print(start, "├")
        self.print_hline(start + (1, 0), length - 2, "─")
        self.print(start + (length - 1, 0), "┤")

    # ------------------------------------------------------------------
    # Style scopes
    # ------------------------------------------------------------------

    @contextmanager
    def color(self, style: ColorStyle) -> Iterator[Printer]:
        """Use *style* inside the ``with`` block."""
        pair = self.theme.resolve(style, self._colors[-1])
        previous = self.backend.set_color(pair)
        self._colors.append(pair)
        try:
            yield self
        finally:
            self._colors.pop()
            self.backend.set_color(previous)

    @contextmanager
    def effect(self, effect: Effect) -> Iterator[Printer]:
        self.backend.set_effect(effect)
        try:
            yield self
        finally:
            self.backend.unset_effect(effect)

    @contextmanager
    def effects(self, effects: frozenset[Effect] | set[Effect]) -> Iterator[Printer]:
        with ExitStack() as stack:
            for effect in effects:
                stack.enter_context(self.effect(effect))
            yield self

    @contextmanager
    def style(self, style: Style) -> Iterator[Printer]:
        with self.color(style.color), self.effects(style.effects):
            yield self

    @contextmanager
    def selection(self, selected: bool) -> Iterator[Printer]:
        """Highlight the block if *selected*, dimmer when not focused."""
        if not selected:
            style = ColorStyle.primary()
        elif self.enabled and self.focused:
            style = ColorStyle.highlight()
        else:
            style = ColorStyle.highlight_inactive()
        with self.color(style):
            yield self

    @contextmanager
    def border_color(self, high: bool, invert: bool = False) -> Iterator[Printer]:
        """
        Colour for box borders.

        Outset borders draw the top-left and bottom-right halves in
        different colours; ``invert`` swaps them.
        """
        borders = self.theme.borders
        if borders is BorderStyle.OUTSET and high != invert:
            style = ColorStyle.tertiary()
        else:
            style = ColorStyle.primary()
        with self.color(style):
            yield self

    # ------------------------------------------------------------------
    # Derived printers
    # ------------------------------------------------------------------

    def _derive(self) -> Printer:
        return copy.copy(self)

    def offset_by(self, offset: Vec2Like) -> Printer:
        """Printer for a child placed at *offset*."""
        offset = as_xy(offset)
        sub = self._derive()
        # Part of the offset is absorbed by the hidden content.
        consumed = sub.content_offset.or_min(offset)
        offset = offset - consumed
        sub.content_offset = sub.content_offset - consumed
        sub.offset = sub.offset + offset
        sub.output_size = sub.output_size.saturating_sub(offset)
        sub.size = sub.size.saturating_sub(offset)
        return sub

    def cropped(self, size: Vec2Like) -> Printer:
        sub = self._derive()
        sub.output_size = sub.output_size.or_min(size)
        sub.size = sub.size.or_min(size)
        return sub

    def windowed(self, rect: Rect) -> Printer:
        return self.offset_by(rect.top_left).cropped(rect.size())

    def shrinked(self, borders: Vec2Like) -> Printer:
        return self.cropped(self.size.saturating_sub(borders))

    def focused_if(self, focused: bool) -> Printer:
        sub = self._derive()
        sub.focused = self.focused and focused
        return sub

    def enabled_if(self, enabled: bool) -> Printer:
        sub = self._derive()
        sub.enabled = self.enabled and enabled
        return sub

    def with_content_offset(self, offset: Vec2Like) -> Printer:
        """Printer showing the content scrolled by *offset*."""
        sub = self._derive()
        sub.content_offset = sub.content_offset + offset
        return sub

    def with_inner_size(self, size: Vec2Like) -> Printer:
        sub = self._derive()
        sub.size = as_xy(size)
        return sub

    def __repr__(self) -> str:
        return (
            f"Printer(offset={self.offset}, output_size={self.output_size}, "
            f"size={self.size}, content_offset={self.content_offset})"
        )
