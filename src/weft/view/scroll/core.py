"""
Scrolling state.

:class:`ScrollCore` stores everything a scrollable view needs: the
viewport offset, the sizes from the last layout, per-axis settings and the
scrollbar drag state.  It knows how to draw scrollbars, how to react to
scrolling input, and how to keep the offset valid.  The size negotiation
that drives it lives in :mod:`weft.view.scroll`.

After every mutation the offset satisfies::

    offset <= inner_size.saturating_sub(available_size())
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from weft.direction import Orientation, ParseError
from weft.event import (
    CtrlKey,
    Event,
    EventResult,
    Key,
    KeyEvent,
    Mouse,
    MouseButton,
    MouseEvent,
    MouseEventKind,
)
from weft.logging import get_logger
from weft.rect import Rect
from weft.theme.models import ColorStyle
from weft.vec import XY, Vec2, Vec2Like, as_xy
from weft.view.size_cache import SizeCache

if TYPE_CHECKING:
    from weft.printer import Printer

logger = get_logger("view.scroll")


class ScrollStrategy(Enum):
    """How the offset follows content and size changes."""

    KEEP_ROW = "keep_row"
    STICK_TO_TOP = "stick_to_top"
    STICK_TO_BOTTOM = "stick_to_bottom"

    @classmethod
    def from_str(cls, text: str) -> ScrollStrategy:
        """Parse ``"KeepRow"`` or ``"keep_row"`` style names."""
        try:
            return _STRATEGY_NAMES[text]
        except KeyError:
            raise ParseError(f"unknown scroll strategy: {text!r}") from None


_STRATEGY_NAMES = {
    "KeepRow": ScrollStrategy.KEEP_ROW,
    "keep_row": ScrollStrategy.KEEP_ROW,
    "StickToTop": ScrollStrategy.STICK_TO_TOP,
    "stick_to_top": ScrollStrategy.STICK_TO_TOP,
    "StickToBottom": ScrollStrategy.STICK_TO_BOTTOM,
    "stick_to_bottom": ScrollStrategy.STICK_TO_BOTTOM,
}

_SCROLL_UP = (KeyEvent(Key.UP), CtrlKey(Key.UP))
_SCROLL_DOWN = (KeyEvent(Key.DOWN), CtrlKey(Key.DOWN))
_SCROLL_LEFT = (KeyEvent(Key.LEFT), CtrlKey(Key.LEFT))
_SCROLL_RIGHT = (KeyEvent(Key.RIGHT), CtrlKey(Key.RIGHT))


class ScrollCore:
    """
    Scrolling state shared by scrollable views.

    Attributes
    ----------
    inner_size:
        Content size from the last layout.
    offset:
        Top-left corner of the viewport, in content coordinates.
    enabled:
        Axes on which scrolling is allowed.  Vertical only by default.
    show_scrollbars:
        Whether scrollbars are drawn and reserve space.
    scrollbar_padding:
        Gap between the content and a scrollbar.
    wheel_step:
        Rows scrolled per mouse wheel notch.
    scroll_strategy:
        How the offset follows content changes.
    """

    def __init__(self) -> None:
        self.inner_size: XY[int] = XY.zero()
        self.offset: XY[int] = XY.zero()
        self.enabled: XY[bool] = XY(False, True)
        self.show_scrollbars = True
        self.scrollbar_padding: XY[int] = Vec2(1, 0)
        self.wheel_step = 3
        self.scroll_strategy = ScrollStrategy.KEEP_ROW
        self._last_available: XY[int] = XY.zero()
        self._thumb_grab: tuple[Orientation, int] | None = None
        self._size_cache: XY[SizeCache] | None = None

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_scroll_strategy(self, strategy: ScrollStrategy) -> None:
        self.scroll_strategy = strategy
        self._adjust_scroll()

    def set_scrollbar_padding(self, padding: Vec2Like) -> None:
        self.scrollbar_padding = as_xy(padding)
        self.invalidate_cache()

    def set_show_scrollbars(self, show: bool) -> None:
        self.show_scrollbars = show
        self.invalidate_cache()

    def set_scroll_x(self, enabled: bool) -> None:
        self.enabled = XY(enabled, self.enabled.y)
        self.invalidate_cache()

    def set_scroll_y(self, enabled: bool) -> None:
        self.enabled = XY(self.enabled.x, enabled)
        self.invalidate_cache()

    def is_enabled(self) -> XY[bool]:
        return self.enabled

    # ------------------------------------------------------------------
    # Sizes
    # ------------------------------------------------------------------

    def available_size(self) -> XY[int]:
        """Viewport size from the last layout, scrollbars excluded."""
        return self._last_available

    def is_scrolling(self) -> XY[bool]:
        """Axes on which the content exceeds the viewport."""
        return self.inner_size.zip_map(self._last_available, lambda i, s: i > s)

    def reservation_for(self, scrolling: XY[bool]) -> XY[int]:
        # A vertical scrollbar takes horizontal room and vice versa.
        if not self.show_scrollbars:
            return XY.zero()
        return scrolling.swap().select_or(self.scrollbar_padding + (1, 1), XY.zero())

    def scrollbar_size(self) -> XY[int]:
        """Room taken by the scrollbars currently shown."""
        return self.reservation_for(self.is_scrolling())

    def last_outer_size(self) -> XY[int]:
        return self.available_size() + self.scrollbar_size()

    def content_viewport(self) -> Rect:
        """Visible part of the content, in content coordinates."""
        return Rect.from_size(self.offset, self.available_size())

    def max_offset(self) -> XY[int]:
        return self.inner_size.saturating_sub(self.available_size())

    # ------------------------------------------------------------------
    # Layout bookkeeping (driven by weft.view.scroll)
    # ------------------------------------------------------------------

    def set_last_size(self, last_size: XY[int], scrolling: XY[bool]) -> None:
        self._last_available = last_size.saturating_sub(self.reservation_for(scrolling))

    def set_inner_size(self, inner_size: XY[int]) -> None:
        self.inner_size = inner_size

    def build_cache(self, self_size: XY[int], last_size: XY[int], scrolling: XY[bool]) -> None:
        self._size_cache = SizeCache.build(self_size, last_size, scrolling)

    def try_cache(self, constraint: XY[int]) -> tuple[XY[int], XY[int], XY[bool]] | None:
        """Cached ``(inner_size, size, scrolling)`` if still valid for *constraint*."""
        cache = self._size_cache
        if cache is None:
            return None
        if not cache.zip_map(constraint, lambda c, r: c.accept(r)).both():
            return None
        return self.inner_size, cache.map(lambda c: c.value), cache.map(lambda c: c.extra)

    def invalidate_cache(self) -> None:
        self._size_cache = None

    def needs_relayout(self) -> bool:
        return self._size_cache is None

    def update_offset(self) -> None:
        """Clamp the offset, then apply the scroll strategy."""
        self._clamp_offset()
        self._adjust_scroll()

    # ------------------------------------------------------------------
    # Programmatic scrolling
    # ------------------------------------------------------------------

    def _clamp_offset(self) -> None:
        self.offset = self.offset.or_min(self.max_offset())

    def set_offset(self, offset: Vec2Like) -> None:
        self.offset = as_xy(offset).or_min(self.max_offset())

    def scroll_to_rect(self, area: Rect) -> None:
        """Scroll as little as possible to show *area*."""
        # The furthest top-left that still shows the bottom-right corner.
        top_left = (area.bottom_right + (1, 1)).saturating_sub(self.available_size())
        # The furthest bottom-right that still shows the top-left corner.
        bottom_right = area.top_left
        # The area may be larger than the viewport.
        low = top_left.or_min(bottom_right)
        high = top_left.or_max(bottom_right)
        self.offset = self.offset.or_max(low).or_min(high)
        self._clamp_offset()

    def scroll_to(self, pos: Vec2Like) -> None:
        """Scroll as little as possible to show *pos*."""
        pos = as_xy(pos)
        low = (pos + (1, 1)).saturating_sub(self.available_size())
        self.offset = self.offset.or_min(pos).or_max(low)
        self._clamp_offset()

    def scroll_to_x(self, x: int) -> None:
        available = self.available_size().x
        if x >= self.offset.x + available:
            self.offset = XY(1 + x - available, self.offset.y)
        elif x < self.offset.x:
            self.offset = XY(x, self.offset.y)
        self._clamp_offset()

    def scroll_to_y(self, y: int) -> None:
        available = self.available_size().y
        if y >= self.offset.y + available:
            self.offset = XY(self.offset.x, 1 + y - available)
        elif y < self.offset.y:
            self.offset = XY(self.offset.x, y)
        self._clamp_offset()

    def scroll_to_top(self) -> None:
        self.set_offset((self.offset.x, 0))

    def scroll_to_bottom(self) -> None:
        self.set_offset((self.offset.x, self.max_offset().y))

    def scroll_to_left(self) -> None:
        self.set_offset((0, self.offset.y))

    def scroll_to_right(self) -> None:
        self.set_offset((self.max_offset().x, self.offset.y))

    def _adjust_scroll(self) -> None:
        if self.scroll_strategy is ScrollStrategy.STICK_TO_TOP:
            self.scroll_to_top()
        elif self.scroll_strategy is ScrollStrategy.STICK_TO_BOTTOM:
            self.scroll_to_bottom()

    # ------------------------------------------------------------------
    # Scrollbars
    # ------------------------------------------------------------------

    def scrollbar_thumb_lengths(self) -> XY[int]:
        available = self.available_size()
        # (visible / total) * visible
        return (available * available // self.inner_size.or_max((1, 1))).or_max((1, 1))

    def scrollbar_thumb_offsets(self, lengths: XY[int]) -> XY[int]:
        available = self.available_size()
        steps = (available + (1, 1)).saturating_sub(lengths)
        max_offset = self.max_offset() + (1, 1)
        return steps * self.offset // max_offset

    def sub_printer(self, printer: Printer) -> Printer:
        """
        Draw the scrollbars and return the printer for the content.

        The returned printer is cropped to the viewport and shifted by the
        current offset.
        """
        size = self.available_size()

        if self.show_scrollbars:
            scrolling = self.is_scrolling()
            lengths = self.scrollbar_thumb_lengths()
            offsets = self.scrollbar_thumb_offsets(lengths)
            track = XY("-", "|")
            color = ColorStyle.highlight() if printer.focused else ColorStyle.highlight_inactive()

            for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
                if not orientation.get(scrolling):
                    continue
                start = printer.size.saturating_sub((1, 1)).with_axis(orientation, 0)
                offset = orientation.make_vec(orientation.get(offsets), 0)
                printer.print_line(orientation, start, orientation.get(size), orientation.get(track))

                grabbed = self._thumb_grab is not None and self._thumb_grab[0] is orientation
                thumb = " " if grabbed else "▒"
                with printer.color(color):
                    printer.print_line(orientation, start + offset, orientation.get(lengths), thumb)

            if scrolling.both():
                printer.print(printer.size.saturating_sub((1, 1)), "╳")

        return printer.cropped(size).with_content_offset(self.offset).with_inner_size(self.inner_size)

    # ------------------------------------------------------------------
    # Dragging
    # ------------------------------------------------------------------

    def start_drag(self, position: XY[int]) -> bool:
        """
        Start dragging if *position* hits a scrollbar.

        A press on the thumb keeps the grab point; a press elsewhere on the
        track centres the thumb under the pointer.
        """
        scrollbar_pos = self.last_outer_size().saturating_sub((1, 1))
        lengths = self.scrollbar_thumb_lengths()
        offsets = self.scrollbar_thumb_offsets(lengths)
        available = self.available_size()

        # For the vertical bar: right column, and within the track height.
        on_bar = (
            position.zip_map(scrollbar_pos, lambda p, s: p == s)
            .swap()
            .and_(position.zip_map(available, lambda p, a: p < a))
        )
        grabbed = on_bar.and_(self.enabled).and_(self.is_scrolling())

        for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
            if not orientation.get(grabbed):
                continue
            pos = orientation.get(position)
            length = orientation.get(lengths)
            offset = orientation.get(offsets)
            if offset <= pos < offset + length:
                self._thumb_grab = (orientation, pos - offset)
            else:
                self._thumb_grab = (orientation, (length - 1) // 2)
                self.drag(position)
            logger.debug("Scrollbar grabbed: %s", self._thumb_grab)
            return True
        return False

    def drag(self, position: XY[int]) -> None:
        if self._thumb_grab is None:
            return
        orientation, grab = self._thumb_grab
        self.scroll_to_thumb(orientation, max(orientation.get(position) - grab, 0))

    def release_grab(self) -> None:
        self._thumb_grab = None

    def is_dragging(self) -> bool:
        return self._thumb_grab is not None

    def scroll_to_thumb(self, orientation: Orientation, thumb_pos: int) -> None:
        """Scroll so the thumb along *orientation* starts at *thumb_pos*."""
        lengths = self.scrollbar_thumb_lengths()
        available = self.available_size()
        # offset = thumb_pos * (inner + 1 - available) / (available + 1 - length)
        extra = (available + (1, 1)).saturating_sub(lengths).or_max((1, 1))
        new_offset = ((self.inner_size + (1, 1)).saturating_sub(available) * thumb_pos).div_up(extra)
        self.offset = self.offset.set_axis_from(orientation, new_offset.or_min(self.max_offset()))

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def is_event_inside(self, event: Event) -> tuple[bool, Event]:
        """
        Translate *event* into content coordinates.

        Returns whether the event lands in the viewport, and the
        translated event.  Key events always count as inside.
        """
        if not isinstance(event, Mouse):
            return True, event
        relative = event.relative_position()
        inside = relative is not None and relative.strictly_lt(self.available_size())
        return inside, Mouse(event.offset, event.position + self.offset, event.event)

    def on_inner_event(self, event: Event, inner_result: EventResult, important_area: Rect) -> EventResult:
        """
        Handle *event* after the content had its chance.

        If the content consumed it, scroll *important_area* into view and
        return the content's result.  Otherwise treat scrolling keys, the
        wheel and scrollbar drags.
        """
        if inner_result.is_consumed():
            self.scroll_to_rect(important_area)
            return inner_result

        if not self._scroll_for(event):
            return EventResult.ignored()

        # Manual scrolling overrides any stickiness.
        self.scroll_strategy = ScrollStrategy.KEEP_ROW
        self._clamp_offset()
        return EventResult.consumed()

    def _scroll_for(self, event: Event) -> bool:
        available = self.available_size()
        max_offset = self.max_offset()
        x, y = self.offset
        can_up = self.enabled.y and y > 0
        can_down = self.enabled.y and y < max_offset.y
        can_left = self.enabled.x and x > 0
        can_right = self.enabled.x and x < max_offset.x

        if isinstance(event, Mouse):
            return self._scroll_for_mouse(event, can_up, can_down)

        if event == KeyEvent(Key.HOME) and self.enabled.any():
            self.offset = self.enabled.select_or(XY.zero(), self.offset)
        elif event == KeyEvent(Key.END) and self.enabled.any():
            self.offset = self.enabled.select_or(max_offset, self.offset)
        elif event in _SCROLL_UP and can_up:
            self.offset = XY(x, y - 1)
        elif event in _SCROLL_DOWN and can_down:
            self.offset = XY(x, y + 1)
        elif event == KeyEvent(Key.PAGE_UP) and can_up:
            self.offset = XY(x, max(y - available.y, 0))
        elif event == KeyEvent(Key.PAGE_DOWN) and can_down:
            self.offset = XY(x, min(y + available.y, max_offset.y))
        elif event in _SCROLL_LEFT and can_left:
            self.offset = XY(x - 1, y)
        elif event in _SCROLL_RIGHT and can_right:
            self.offset = XY(x + 1, y)
        else:
            return False
        return True

    def _scroll_for_mouse(self, event: Mouse, can_up: bool, can_down: bool) -> bool:
        mouse: MouseEvent = event.event
        x, y = self.offset

        if mouse.kind is MouseEventKind.WHEEL_UP and can_up:
            self.offset = XY(x, max(y - self.wheel_step, 0))
            return True
        if mouse.kind is MouseEventKind.WHEEL_DOWN and can_down:
            self.offset = XY(x, min(y + self.wheel_step, self.max_offset().y))
            return True
        if mouse.button is not MouseButton.LEFT or not self.show_scrollbars:
            return False

        if mouse.kind is MouseEventKind.PRESS:
            relative = event.relative_position()
            return relative is not None and self.start_drag(relative)
        if mouse.kind is MouseEventKind.HOLD and self.is_dragging():
            self.drag(event.position.saturating_sub(event.offset))
            return True
        if mouse.kind is MouseEventKind.RELEASE and self.is_dragging():
            self.release_grab()
            return True
        return False

    def __repr__(self) -> str:
        return (
            f"ScrollCore(offset={self.offset}, inner_size={self.inner_size}, "
            f"available={self._last_available}, enabled={self.enabled})"
        )
