"""Tests for events, callbacks, results and triggers."""

from __future__ import annotations

from typing import Any

import pytest

from weft.event import (
    Callback,
    Char,
    CtrlKey,
    EventResult,
    EventTrigger,
    Key,
    KeyEvent,
    Mouse,
    MouseEvent,
    MouseEventKind,
    Refresh,
)
from weft.vec import Vec2


class Recorder:
    """Stand-in for the application root; callbacks append to ``calls``."""

    def __init__(self) -> None:
        self.calls: list[str] = []


def record(name: str) -> Any:
    return lambda root: root.calls.append(name)


# ---------------------------------------------------------------------------
# TestEvents
# ---------------------------------------------------------------------------


class TestEvents:
    """Tests for event values."""

    def test_events_compare_by_value(self) -> None:
        assert KeyEvent(Key.ENTER) == KeyEvent(Key.ENTER)
        assert KeyEvent(Key.ENTER) != CtrlKey(Key.ENTER)
        assert Char("a") != Char("b")

    def test_relativized_shifts_mouse_offset(self) -> None:
        event = Mouse(Vec2(0, 0), Vec2(5, 3), MouseEvent.press())
        moved = event.relativized((2, 1))
        assert moved.offset == Vec2(2, 1)
        assert moved.position == Vec2(5, 3)
        assert moved.relative_position() == Vec2(3, 2)

    def test_relative_position_outside_is_none(self) -> None:
        event = Mouse(Vec2(4, 4), Vec2(1, 5), MouseEvent.press())
        assert event.relative_position() is None

    def test_relativized_leaves_keys_alone(self) -> None:
        event = KeyEvent(Key.TAB)
        assert event.relativized((3, 3)) == event

    def test_grabs_focus(self) -> None:
        assert MouseEvent.press().grabs_focus()
        assert MouseEvent.wheel_up().grabs_focus()
        assert not MouseEvent.release().grabs_focus()
        assert not MouseEvent.hold().grabs_focus()

    def test_from_f(self) -> None:
        assert Key.from_f(5) is Key.F5
        with pytest.raises(ValueError):
            Key.from_f(13)


# ---------------------------------------------------------------------------
# TestCallback
# ---------------------------------------------------------------------------


class TestCallback:
    """Tests for Callback."""

    def test_runs_wrapped_function(self) -> None:
        root = Recorder()
        Callback.from_fn(record("a"))(root)  # type: ignore[arg-type]
        assert root.calls == ["a"]

    def test_once_runs_only_once(self) -> None:
        root = Recorder()
        cb = Callback.from_fn_once(record("a"))
        cb(root)  # type: ignore[arg-type]
        cb(root)  # type: ignore[arg-type]
        assert root.calls == ["a"]

    def test_then_runs_in_order(self) -> None:
        root = Recorder()
        Callback.from_fn(record("a")).then(Callback.from_fn(record("b")))(root)  # type: ignore[arg-type]
        assert root.calls == ["a", "b"]


# ---------------------------------------------------------------------------
# TestEventResult
# ---------------------------------------------------------------------------


class TestEventResult:
    """Tests for EventResult."""

    def test_ignored_is_not_consumed(self) -> None:
        assert not EventResult.ignored().is_consumed()
        assert EventResult.consumed().is_consumed()
        assert not EventResult.consumed().has_callback()

    def test_and_with_ignored_is_identity(self) -> None:
        consumed = EventResult.with_cb(record("a"))
        assert EventResult.ignored().and_(consumed) is consumed
        assert consumed.and_(EventResult.ignored()) is consumed

    def test_and_chains_callbacks(self) -> None:
        root = Recorder()
        result = EventResult.with_cb(record("a")) & EventResult.with_cb(record("b"))
        result.process(root)  # type: ignore[arg-type]
        assert root.calls == ["a", "b"]

    def test_or_else_only_when_ignored(self) -> None:
        consumed = EventResult.consumed()
        assert consumed.or_else(lambda: EventResult.ignored()) is consumed
        assert EventResult.ignored().or_else(EventResult.consumed).is_consumed()

    def test_combine_mixed_results(self) -> None:
        """Ignored, consumed and consumed-with-callback merge into one callback."""
        root = Recorder()
        combined = EventResult.combine(
            [EventResult.ignored(), EventResult.consumed(), EventResult.with_cb(record("cb"))]
        )
        assert combined.is_consumed()
        assert combined.has_callback()
        combined.process(root)  # type: ignore[arg-type]
        assert root.calls == ["cb"]

    def test_combine_all_ignored(self) -> None:
        combined = EventResult.combine([EventResult.ignored(), EventResult.ignored()])
        assert not combined.is_consumed()

    def test_combine_keeps_order(self) -> None:
        root = Recorder()
        EventResult.combine(
            [EventResult.with_cb(record("a")), EventResult.with_cb(record("b"))]
        ).process(root)  # type: ignore[arg-type]
        assert root.calls == ["a", "b"]


# ---------------------------------------------------------------------------
# TestEventTrigger
# ---------------------------------------------------------------------------


class TestEventTrigger:
    """Tests for EventTrigger."""

    def test_from_event_matches_exactly(self) -> None:
        trigger = EventTrigger.from_event(KeyEvent(Key.ESC))
        assert trigger.apply(KeyEvent(Key.ESC))
        assert not trigger.apply(KeyEvent(Key.ENTER))

    def test_coerce(self) -> None:
        assert EventTrigger.coerce("q")(Char("q"))
        assert EventTrigger.coerce(Key.ENTER)(KeyEvent(Key.ENTER))
        with pytest.raises(ValueError):
            EventTrigger.coerce("qq")

    def test_equality_by_tag(self) -> None:
        assert EventTrigger.from_event(Char("q")) == EventTrigger.coerce("q")
        assert EventTrigger.arrows() != EventTrigger.mouse()

    def test_or_combines(self) -> None:
        trigger = EventTrigger.coerce("a") | "b"
        assert trigger(Char("a"))
        assert trigger(Char("b"))
        assert not trigger(Char("c"))
        assert trigger.tag == (Char("a"), "or", Char("b"))

    def test_builtin_triggers(self) -> None:
        assert EventTrigger.arrows()(KeyEvent(Key.LEFT))
        assert not EventTrigger.arrows()(KeyEvent(Key.TAB))
        assert EventTrigger.mouse()(Mouse(Vec2(0, 0), Vec2(0, 0), MouseEvent(MouseEventKind.WHEEL_UP)))
        assert EventTrigger.any()(Refresh())
        assert not EventTrigger.none()(Refresh())
