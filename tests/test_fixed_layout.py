"""Tests for FixedLayout."""

from __future__ import annotations

import pytest

from helpers import SizedView, focusable
from weft.direction import Direction
from weft.event import Key, KeyEvent, Mouse, MouseEvent, ShiftKey
from weft.printer import Printer
from weft.rect import Rect
from weft.vec import XY
from weft.view.view import CannotFocus, Selector, ViewNotFound
from weft.views import FixedLayout, with_name


def make_grid() -> tuple[FixedLayout, list[SizedView]]:
    """
    Four focusable children::

        AAA  BBB

        CCC
                  DD
    """
    views = [focusable((3, 1)), focusable((3, 1)), focusable((3, 1)), focusable((2, 1))]
    layout = (
        FixedLayout()
        .child(Rect.from_size((0, 0), (3, 1)), views[0])
        .child(Rect.from_size((5, 0), (3, 1)), views[1])
        .child(Rect.from_size((0, 3), (3, 1)), views[2])
        .child(Rect.from_size((10, 5), (2, 1)), views[3])
    )
    return layout, views


# ---------------------------------------------------------------------------
# TestChildren
# ---------------------------------------------------------------------------


class TestChildren:
    """Tests for child management and sizing."""

    def test_required_size_covers_every_child(self) -> None:
        layout, _ = make_grid()
        assert layout.required_size(XY(1, 1)) == XY(12, 6)

    def test_empty_required_size(self) -> None:
        assert FixedLayout().required_size(XY(5, 5)) == XY(0, 0)

    def test_layout_uses_positions(self) -> None:
        layout, views = make_grid()
        layout.layout(XY(40, 10))
        assert views[3].layouts == [XY(2, 1)]

    def test_draw_windows(self, printer: Printer) -> None:
        layout, views = make_grid()
        layout.draw(printer)

        assert views[1].drawn_with[-1].offset == XY(5, 0)
        assert views[1].drawn_with[-1].output_size == XY(3, 1)
        assert views[0].drawn_with[-1].focused is True
        assert views[1].drawn_with[-1].focused is False

    def test_set_child_position(self) -> None:
        layout, _ = make_grid()
        layout.set_child_position(3, Rect.from_size((0, 8), (1, 1)))
        assert layout.child_position(3) == Rect.from_size((0, 8), (1, 1))
        assert layout.required_size(XY(1, 1)) == XY(8, 9)

    def test_remove_child(self) -> None:
        layout, views = make_grid()
        layout.set_focus_index(3)

        assert layout.remove_child(0) is views[0]
        assert len(layout) == 3
        assert layout.get_child(layout.focus_index) is views[3]


# ---------------------------------------------------------------------------
# TestKeyboardFocus
# ---------------------------------------------------------------------------


class TestKeyboardFocus:
    """Tests for Tab and arrow navigation."""

    def test_arrow_moves_to_overlapping_neighbour(self) -> None:
        layout, views = make_grid()

        assert layout.on_event(KeyEvent(Key.RIGHT)).is_consumed()
        assert layout.focus_index == 1
        assert views[1].focus_sources == [Direction.left()]

    def test_arrow_ignores_children_off_the_row(self) -> None:
        layout, _ = make_grid()
        layout.set_focus_index(1)

        assert not layout.on_event(KeyEvent(Key.RIGHT)).is_consumed()
        assert layout.focus_index == 1

    def test_down_and_back(self) -> None:
        layout, _ = make_grid()

        layout.on_event(KeyEvent(Key.DOWN))
        assert layout.focus_index == 2
        layout.on_event(KeyEvent(Key.UP))
        assert layout.focus_index == 0

    def test_left_from_second(self) -> None:
        layout, _ = make_grid()
        layout.set_focus_index(1)

        layout.on_event(KeyEvent(Key.LEFT))
        assert layout.focus_index == 0

    def test_tab_follows_insertion_order(self) -> None:
        layout, views = make_grid()

        layout.on_event(KeyEvent(Key.TAB))
        assert layout.focus_index == 1
        assert views[1].focus_sources == [Direction.front()]
        layout.on_event(ShiftKey(Key.TAB))
        assert layout.focus_index == 0

    def test_tab_does_not_wrap(self) -> None:
        layout, _ = make_grid()
        layout.set_focus_index(3)
        assert not layout.on_event(KeyEvent(Key.TAB)).is_consumed()

    def test_tab_skips_unfocusable(self) -> None:
        target = focusable()
        layout = (
            FixedLayout()
            .child(Rect.from_size((0, 0), (1, 1)), focusable())
            .child(Rect.from_size((0, 1), (1, 1)), SizedView())
            .child(Rect.from_size((0, 2), (1, 1)), target)
        )

        layout.on_event(KeyEvent(Key.TAB))
        assert layout.focus_index == 2

    def test_focused_child_consumes_first(self) -> None:
        child = SizedView(focusable=True, consume=True)
        layout = (
            FixedLayout()
            .child(Rect.from_size((0, 0), (1, 1)), child)
            .child(Rect.from_size((2, 0), (1, 1)), focusable())
        )

        assert layout.on_event(KeyEvent(Key.RIGHT)).is_consumed()
        assert layout.focus_index == 0


# ---------------------------------------------------------------------------
# TestTakeFocus
# ---------------------------------------------------------------------------


class TestTakeFocus:
    """Tests for take_focus and focus_view."""

    def test_none_keeps_current(self) -> None:
        layout, _ = make_grid()
        layout.set_focus_index(2)
        layout.take_focus(Direction.none())
        assert layout.focus_index == 2

    def test_back_picks_last(self) -> None:
        layout, _ = make_grid()
        layout.take_focus(Direction.back())
        assert layout.focus_index == 3

    def test_from_below_picks_lowest(self) -> None:
        layout, _ = make_grid()
        layout.take_focus(Direction.down())
        assert layout.focus_index == 3

    def test_from_the_right_picks_rightmost(self) -> None:
        layout, _ = make_grid()
        layout.take_focus(Direction.right())
        assert layout.focus_index == 3

    def test_refused(self) -> None:
        layout = FixedLayout().child(Rect.from_size((0, 0), (1, 1)), SizedView())
        with pytest.raises(CannotFocus):
            layout.take_focus(Direction.front())

    def test_set_focus_index_errors(self) -> None:
        layout = FixedLayout().child(Rect.from_size((0, 0), (1, 1)), SizedView())
        with pytest.raises(ViewNotFound):
            layout.set_focus_index(0)
        with pytest.raises(ViewNotFound):
            layout.set_focus_index(3)

    def test_focus_view(self) -> None:
        layout = (
            FixedLayout()
            .child(Rect.from_size((0, 0), (1, 1)), focusable())
            .child(Rect.from_size((0, 1), (1, 1)), with_name(focusable(), "two"))
        )

        assert layout.focus_view(Selector("two")).is_consumed()
        assert layout.focus_index == 1


# ---------------------------------------------------------------------------
# TestMouse
# ---------------------------------------------------------------------------


class TestMouse:
    """Tests for mouse focus grabs."""

    def test_press_focuses_child_under_pointer(self) -> None:
        layout, views = make_grid()

        layout.on_event(Mouse(XY(0, 0), XY(6, 0), MouseEvent.press()))

        assert layout.focus_index == 1
        assert views[1].events[-1] == Mouse(XY(5, 0), XY(6, 0), MouseEvent.press())

    def test_press_on_empty_space_keeps_focus(self) -> None:
        layout, _ = make_grid()
        layout.on_event(Mouse(XY(0, 0), XY(4, 0), MouseEvent.press()))
        assert layout.focus_index == 0

    def test_important_area(self) -> None:
        layout, _ = make_grid()
        layout.set_focus_index(2)
        assert layout.important_area(XY(12, 6)) == Rect.from_size((0, 3), (3, 1))
