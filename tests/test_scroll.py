"""Tests for the scrolling core and size negotiation."""

from __future__ import annotations

import pytest

from helpers import SizedView
from weft.backend import PuppetBackend
from weft.direction import ParseError
from weft.event import CtrlKey, Key, KeyEvent, Mouse, MouseEvent
from weft.printer import Printer
from weft.rect import Rect
from weft.theme import Theme
from weft.vec import XY
from weft.view import scroll
from weft.view.scroll import ScrollCore, ScrollStrategy


def laid_out(content: tuple[int, int], size: tuple[int, int] = (20, 10)) -> tuple[ScrollCore, SizedView]:
    core = ScrollCore()
    child = SizedView(content)
    scroll.layout(core, XY(*size), False, child.layout, child.required_size)
    return core, child


# ---------------------------------------------------------------------------
# TestScrollStrategy
# ---------------------------------------------------------------------------


class TestScrollStrategy:
    """Tests for ScrollStrategy parsing."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("KeepRow", ScrollStrategy.KEEP_ROW),
            ("stick_to_top", ScrollStrategy.STICK_TO_TOP),
            ("StickToBottom", ScrollStrategy.STICK_TO_BOTTOM),
        ],
    )
    def test_from_str(self, text: str, expected: ScrollStrategy) -> None:
        assert ScrollStrategy.from_str(text) is expected

    def test_from_str_rejects_unknown(self) -> None:
        with pytest.raises(ParseError):
            ScrollStrategy.from_str("sideways")


# ---------------------------------------------------------------------------
# TestSizes
# ---------------------------------------------------------------------------


class TestSizes:
    """Tests for the scrollbar negotiation."""

    def test_fitting_content_needs_one_pass(self) -> None:
        core = ScrollCore()
        child = SizedView((5, 5))

        inner, size, scrolling = scroll.sizes(core, XY(20, 10), True, True, child.required_size)

        assert len(child.constraints) == 1
        assert scrolling == XY(False, False)
        assert inner == XY(20, 5)
        assert size == XY(20, 5)

    def test_tall_content_reserves_scrollbar(self) -> None:
        core = ScrollCore()
        child = SizedView((5, 100))

        inner, size, scrolling = scroll.sizes(core, XY(20, 10), True, True, child.required_size)

        assert child.constraints == [XY(20, 10), XY(18, 10)]
        assert inner == XY(18, 100)
        assert size == XY(20, 10)
        assert scrolling == XY(False, True)

    def test_flip_settles_in_three_passes(self) -> None:
        """The vertical bar makes the content overflow horizontally too."""
        core = ScrollCore()
        core.set_scroll_x(True)
        child = SizedView((20, 11))

        _, size, scrolling = scroll.sizes(core, XY(20, 10), True, True, child.required_size)

        assert len(child.constraints) == 3
        assert scrolling == XY(True, True)
        assert size.fits_in(XY(20, 10))

    def test_hidden_scrollbars_reserve_nothing(self) -> None:
        core = ScrollCore()
        core.set_show_scrollbars(False)
        child = SizedView((5, 100))

        inner, _, scrolling = scroll.sizes(core, XY(20, 10), True, True, child.required_size)

        assert len(child.constraints) == 1
        assert inner == XY(20, 100)
        assert scrolling == XY(False, True)

    def test_non_strict_follows_content(self) -> None:
        core = ScrollCore()
        child = SizedView((5, 3))

        assert scroll.required_size(core, XY(20, 10), True, child.required_size) == XY(5, 3)

    def test_strict_fits_in_constraint(self) -> None:
        core = ScrollCore()
        core.set_scroll_x(True)
        child = SizedView((50, 50))

        _, size, _ = scroll.sizes(core, XY(20, 10), True, True, child.required_size)
        assert size.fits_in(XY(20, 10))

    def test_cache_is_used_after_layout(self) -> None:
        core, child = laid_out((5, 100))
        asked = len(child.constraints)

        scroll.required_size(core, XY(20, 10), False, child.required_size)
        assert len(child.constraints) == asked


# ---------------------------------------------------------------------------
# TestLayout
# ---------------------------------------------------------------------------


class TestLayout:
    """Tests for layout bookkeeping."""

    def test_layout_records_sizes(self) -> None:
        core, child = laid_out((5, 100))

        assert child.layouts == [XY(18, 100)]
        assert core.inner_size == XY(18, 100)
        assert core.available_size() == XY(18, 10)
        assert core.last_outer_size() == XY(20, 10)
        assert core.max_offset() == XY(0, 90)

    def test_offset_clamped_when_content_shrinks(self) -> None:
        core, child = laid_out((5, 100))
        core.set_offset((0, 90))

        child.size = XY(5, 50)
        core.invalidate_cache()
        scroll.layout(core, XY(20, 10), False, child.layout, child.required_size)

        assert core.offset == XY(0, 40)

    def test_stick_to_bottom_follows_growth(self) -> None:
        core, child = laid_out((5, 100))
        core.set_scroll_strategy(ScrollStrategy.STICK_TO_BOTTOM)
        assert core.offset == XY(0, 90)

        child.size = XY(5, 120)
        core.invalidate_cache()
        scroll.layout(core, XY(20, 10), False, child.layout, child.required_size)
        assert core.offset == XY(0, 110)


# ---------------------------------------------------------------------------
# TestProgrammaticScrolling
# ---------------------------------------------------------------------------


class TestProgrammaticScrolling:
    """Tests for offset setters."""

    def test_set_offset_is_clamped(self) -> None:
        core, _ = laid_out((5, 100))
        core.set_offset((7, 500))
        assert core.offset == XY(0, 90)

    def test_scroll_to_shows_position(self) -> None:
        core, _ = laid_out((5, 100))

        core.scroll_to((0, 25))
        assert core.offset == XY(0, 16)
        assert core.content_viewport().contains((0, 25))

        core.scroll_to((0, 3))
        assert core.offset == XY(0, 3)

    def test_scroll_to_rect_moves_minimally(self) -> None:
        core, _ = laid_out((5, 100))

        core.scroll_to_rect(Rect.from_size((0, 30), (5, 2)))
        assert core.offset == XY(0, 22)

    def test_scroll_to_edges(self) -> None:
        core, _ = laid_out((5, 100))

        core.scroll_to_bottom()
        assert core.offset == XY(0, 90)
        core.scroll_to_top()
        assert core.offset == XY(0, 0)

    def test_scroll_to_y(self) -> None:
        core, _ = laid_out((5, 100))

        core.scroll_to_y(15)
        assert core.offset == XY(0, 6)
        core.scroll_to_y(2)
        assert core.offset == XY(0, 2)


# ---------------------------------------------------------------------------
# TestScrollEvents
# ---------------------------------------------------------------------------


def send(core: ScrollCore, child: SizedView, event) -> bool:
    result = scroll.on_event(core, event, child.on_event, child.important_area)
    return result.is_consumed()


class TestScrollEvents:
    """Tests for keyboard and mouse scrolling."""

    def test_page_down_moves_by_viewport_height(self) -> None:
        core, child = laid_out((5, 100))

        assert send(core, child, KeyEvent(Key.PAGE_DOWN))
        assert core.offset == XY(0, 10)
        assert child.events == [KeyEvent(Key.PAGE_DOWN)]

    def test_end_then_page_down_is_ignored(self) -> None:
        core, child = laid_out((5, 100))

        assert send(core, child, KeyEvent(Key.END))
        assert core.offset == XY(0, 90)
        assert not send(core, child, KeyEvent(Key.PAGE_DOWN))
        assert core.offset == XY(0, 90)

    def test_arrows(self) -> None:
        core, child = laid_out((5, 100))

        assert not send(core, child, KeyEvent(Key.UP))
        assert send(core, child, CtrlKey(Key.DOWN))
        assert core.offset == XY(0, 1)
        assert send(core, child, KeyEvent(Key.HOME))
        assert core.offset == XY(0, 0)

    def test_horizontal_keys_need_horizontal_scrolling(self) -> None:
        core, child = laid_out((5, 100))
        assert not send(core, child, KeyEvent(Key.RIGHT))

    def test_manual_scroll_drops_stickiness(self) -> None:
        core, child = laid_out((5, 100))
        core.set_scroll_strategy(ScrollStrategy.STICK_TO_BOTTOM)

        send(core, child, KeyEvent(Key.UP))
        assert core.offset == XY(0, 89)
        assert core.scroll_strategy is ScrollStrategy.KEEP_ROW

    def test_consumed_by_content_scrolls_important_area(self) -> None:
        core = ScrollCore()
        child = SizedView((5, 100), consume=True)
        scroll.layout(core, XY(20, 10), False, child.layout, child.required_size)

        assert send(core, child, KeyEvent(Key.DOWN))
        # The whole content is important, so the top-left stays in view.
        assert core.offset == XY(0, 0)

    def test_wheel(self) -> None:
        core, child = laid_out((5, 100))

        assert send(core, child, Mouse(XY(0, 0), XY(1, 1), MouseEvent.wheel_down()))
        assert core.offset == XY(0, 3)
        assert send(core, child, Mouse(XY(0, 0), XY(1, 1), MouseEvent.wheel_up()))
        assert core.offset == XY(0, 0)

    def test_mouse_is_translated_to_content(self) -> None:
        core, child = laid_out((5, 100))
        core.set_offset((0, 20))

        send(core, child, Mouse(XY(0, 0), XY(2, 3), MouseEvent.press()))
        assert child.events[-1] == Mouse(XY(0, 0), XY(2, 23), MouseEvent.press())

    def test_mouse_outside_viewport_skips_content(self) -> None:
        core, child = laid_out((5, 100))

        send(core, child, Mouse(XY(0, 0), XY(19, 5), MouseEvent.release()))
        assert child.events == []

    def test_press_on_track_drags(self) -> None:
        core, child = laid_out((5, 100))

        assert send(core, child, Mouse(XY(0, 0), XY(19, 5), MouseEvent.press()))
        assert core.is_dragging()
        assert core.offset == XY(0, 46)

        assert send(core, child, Mouse(XY(0, 0), XY(19, 5), MouseEvent.release()))
        assert not core.is_dragging()
        assert not send(core, child, Mouse(XY(0, 0), XY(19, 5), MouseEvent.release()))

    def test_hold_without_drag_is_ignored(self) -> None:
        core, child = laid_out((5, 100))
        assert not send(core, child, Mouse(XY(0, 0), XY(2, 2), MouseEvent.hold()))

    def test_hold_moves_offset_with_pointer(self) -> None:
        core, child = laid_out((5, 100))

        # The thumb is one row tall and sits on row 0.
        assert send(core, child, Mouse(XY(0, 0), XY(19, 0), MouseEvent.press()))
        assert core.is_dragging()
        assert core.offset == XY(0, 0)

        assert send(core, child, Mouse(XY(0, 0), XY(19, 5), MouseEvent.hold()))
        assert core.offset == XY(0, 46)
        assert send(core, child, Mouse(XY(0, 0), XY(19, 2), MouseEvent.hold()))
        assert core.offset == XY(0, 19)
        assert child.events == []

    def test_hold_past_the_track_stops_at_the_end(self) -> None:
        core, child = laid_out((5, 100))
        send(core, child, Mouse(XY(0, 0), XY(19, 0), MouseEvent.press()))

        assert send(core, child, Mouse(XY(0, 0), XY(19, 50), MouseEvent.hold()))

        assert core.offset.y == core.max_offset().y

    def test_offset_stays_clamped(self) -> None:
        core, child = laid_out((5, 100))

        def assert_clamped() -> None:
            assert core.offset.x <= core.max_offset().x
            assert core.offset.y <= core.max_offset().y

        for _ in range(40):
            send(core, child, Mouse(XY(0, 0), XY(1, 1), MouseEvent.wheel_down()))
            assert_clamped()
        assert core.offset == XY(0, 90)
        assert not send(core, child, Mouse(XY(0, 0), XY(1, 1), MouseEvent.wheel_down()))

        # The thumb is now at the bottom of the track; a press at the top
        # of the track moves it there.
        send(core, child, Mouse(XY(0, 0), XY(19, 0), MouseEvent.press()))
        assert core.offset == XY(0, 0)
        send(core, child, Mouse(XY(0, 0), XY(19, 200), MouseEvent.hold()))
        assert_clamped()
        send(core, child, Mouse(XY(0, 0), XY(19, 200), MouseEvent.release()))

        core.scroll_to((0, 95))
        assert_clamped()
        core.scroll_to_y(500)
        assert_clamped()
        core.scroll_to_rect(Rect.from_size((30, 120), (4, 4)))
        assert_clamped()
        core.scroll_to_right()
        assert_clamped()
        core.scroll_to_top()
        assert core.offset == XY(0, 0)

# ---------------------------------------------------------------------------
# TestImportantArea
# ---------------------------------------------------------------------------


class TestImportantArea:
    """Tests for scroll.important_area."""

    def test_cropped_to_viewport(self) -> None:
        core, child = laid_out((5, 100))
        core.set_offset((0, 20))

        area = scroll.important_area(core, child.important_area)
        assert area == Rect.from_size((0, 0), (18, 10))

    def test_area_below_viewport_sticks_to_bottom_row(self) -> None:
        core, _ = laid_out((5, 100))
        marked = Rect.from_size((0, 50), (5, 1))

        area = scroll.important_area(core, lambda size: marked)

        assert area == Rect.from_size((0, 9), (5, 1))
        assert core.content_viewport().size() == XY(18, 10)

    def test_area_above_viewport_sticks_to_top_row(self) -> None:
        core, _ = laid_out((5, 100))
        core.set_offset((0, 60))

        area = scroll.important_area(core, lambda size: Rect.from_size((0, 50), (5, 1)))

        assert area == Rect.from_size((0, 0), (5, 1))


# ---------------------------------------------------------------------------
# TestHorizontalScrolling
# ---------------------------------------------------------------------------


class TestHorizontalScrolling:
    """Tests for the horizontal axis."""

    def test_scroll_to_x(self) -> None:
        core = ScrollCore()
        core.set_scroll_x(True)
        child = SizedView((50, 5))
        scroll.layout(core, XY(20, 10), False, child.layout, child.required_size)
        assert core.available_size().x == 20
        assert core.max_offset().x == 30

        core.scroll_to_x(25)
        assert core.offset.x == 6
        core.scroll_to_x(10)
        assert core.offset.x == 6
        core.scroll_to_x(3)
        assert core.offset.x == 3
        core.scroll_to_x(100)
        assert core.offset.x == 30


# ---------------------------------------------------------------------------
# TestDrawLines
# ---------------------------------------------------------------------------


class TestDrawLines:
    """Tests for scroll.draw_lines."""

    def test_only_visible_rows_are_drawn(self, backend: PuppetBackend, theme: Theme) -> None:
        core, _ = laid_out((5, 100))
        core.set_offset((0, 20))
        drawn: list[int] = []

        def draw_row(printer: Printer, y: int) -> None:
            drawn.append(y)
            printer.print((0, 0), f"row{y}")

        scroll.draw_lines(core, Printer((20, 10), theme, backend), draw_row)

        assert drawn == list(range(20, 30))
        assert backend.screen.find("row20") == [XY(0, 0)]
        assert backend.screen.find("row29") == [XY(0, 9)]
