"""Tests for the leaf views: TextView, Button and DummyView."""

from __future__ import annotations

from typing import Any

import pytest

from weft.backend import PuppetBackend
from weft.direction import Direction
from weft.event import Char, Key, KeyEvent, Mouse, MouseButton, MouseEvent
from weft.printer import Printer
from weft.vec import XY
from weft.view.view import CannotFocus
from weft.views import Button, DummyView, TextView


class Recorder:
    def __init__(self) -> None:
        self.calls: list[Any] = []


# ---------------------------------------------------------------------------
# TestTextView
# ---------------------------------------------------------------------------


class TestTextView:
    """Tests for TextView."""

    def test_required_size_is_widest_line(self) -> None:
        view = TextView("ab\nabcd\n")
        assert view.required_size(XY(1, 1)) == XY(4, 3)

    def test_wide_characters_count_twice(self) -> None:
        assert TextView("日本").required_size(XY(10, 1)) == XY(4, 1)

    def test_set_content_needs_relayout(self) -> None:
        view = TextView("a")
        view.layout(XY(1, 1))
        assert not view.needs_relayout()

        view.append("b")

        assert view.content == "ab"
        assert view.needs_relayout()

    def test_draws_lines(self, printer: Printer, backend: PuppetBackend) -> None:
        TextView("first\nsecond").draw(printer)

        assert backend.screen.find("first") == [XY(0, 0)]
        assert backend.screen.find("second") == [XY(0, 1)]

    def test_focus(self) -> None:
        with pytest.raises(CannotFocus):
            TextView("label").take_focus(Direction.front())
        assert TextView("item", focusable=True).take_focus(Direction.front()).is_consumed()


# ---------------------------------------------------------------------------
# TestButton
# ---------------------------------------------------------------------------


class TestButton:
    """Tests for Button."""

    def setup_method(self) -> None:
        self.button = Button("OK", lambda r: r.calls.append("ok"))
        self.button.layout(XY(4, 1))

    def test_required_size(self) -> None:
        assert self.button.required_size(XY(10, 10)) == XY(4, 1)

    def test_enter_runs_callback(self) -> None:
        root = Recorder()

        result = self.button.on_event(KeyEvent(Key.ENTER))
        result.process(root)  # type: ignore[arg-type]

        assert result.is_consumed()
        assert root.calls == ["ok"]

    def test_other_keys_ignored(self) -> None:
        assert not self.button.on_event(Char("x")).is_consumed()

    def test_click_inside(self) -> None:
        event = Mouse(XY(3, 2), XY(5, 2), MouseEvent.release())
        assert self.button.on_event(event).has_callback()

    def test_click_outside_or_other_button(self) -> None:
        outside = Mouse(XY(3, 2), XY(7, 2), MouseEvent.release())
        right = Mouse(XY(3, 2), XY(4, 2), MouseEvent.release(MouseButton.RIGHT))

        assert not self.button.on_event(outside).is_consumed()
        assert not self.button.on_event(right).is_consumed()

    def test_disabled(self) -> None:
        self.button.enabled = False

        assert not self.button.on_event(KeyEvent(Key.ENTER)).is_consumed()
        with pytest.raises(CannotFocus):
            self.button.take_focus(Direction.front())

    def test_draw(self, printer: Printer, backend: PuppetBackend) -> None:
        self.button.draw(printer)
        assert backend.screen.find("<OK>") == [XY(0, 0)]


# ---------------------------------------------------------------------------
# TestDummyView
# ---------------------------------------------------------------------------


class TestDummyView:
    """Tests for DummyView."""

    def test_takes_no_room(self) -> None:
        view = DummyView()
        assert view.required_size(XY(10, 10)) == XY(0, 0)
        assert not view.needs_relayout()

    def test_refuses_focus(self) -> None:
        with pytest.raises(CannotFocus):
            DummyView().take_focus(Direction.front())
