"""
Input events and their outcomes.

Backends translate raw terminal input into :class:`Event` values.  Views
answer each event with an :class:`EventResult`: either ``ignored`` (let
someone else handle it) or ``consumed``, optionally carrying a
:class:`Callback` to run against the application root once routing is
over.

:class:`EventTrigger` is a named predicate over events, used to bind
callbacks to keys and mouse actions.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Hashable, Iterable

from weft.vec import XY, Vec2Like

if TYPE_CHECKING:
    from weft.root import Root

# ---------------------------------------------------------------------------
# Keys and mouse buttons
# ---------------------------------------------------------------------------


class Key(Enum):
    """Non-character keys."""

    ENTER = "enter"
    TAB = "tab"
    BACKSPACE = "backspace"
    ESC = "esc"

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    INS = "ins"
    DEL = "del"
    HOME = "home"
    END = "end"
    PAGE_UP = "pageup"
    PAGE_DOWN = "pagedown"

    PAUSE_BREAK = "pausebreak"
    NUMPAD_CENTER = "numpadcenter"

    F0 = "f0"
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"

    @classmethod
    def from_f(cls, n: int) -> Key:
        """
        Return the function key ``F<n>``.

        Raises
        ------
        ValueError
            If *n* is outside ``0..=12``.
        """
        if not 0 <= n <= 12:
            raise ValueError(f"there is no F{n} key")
        return cls(f"f{n}")


class MouseButton(Enum):
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"
    BUTTON4 = "button4"
    BUTTON5 = "button5"
    OTHER = "other"


class MouseEventKind(Enum):
    PRESS = "press"
    RELEASE = "release"
    HOLD = "hold"
    WHEEL_UP = "wheel_up"
    WHEEL_DOWN = "wheel_down"


@dataclass(frozen=True)
class MouseEvent:
    """
    What the mouse did.

    Press, release and hold carry the button involved; wheel events do not.
    """

    kind: MouseEventKind
    button: MouseButton | None = None

    @classmethod
    def press(cls, button: MouseButton = MouseButton.LEFT) -> MouseEvent:
        return cls(MouseEventKind.PRESS, button)

    @classmethod
    def release(cls, button: MouseButton = MouseButton.LEFT) -> MouseEvent:
        return cls(MouseEventKind.RELEASE, button)

    @classmethod
    def hold(cls, button: MouseButton = MouseButton.LEFT) -> MouseEvent:
        return cls(MouseEventKind.HOLD, button)

    @classmethod
    def wheel_up(cls) -> MouseEvent:
        return cls(MouseEventKind.WHEEL_UP)

    @classmethod
    def wheel_down(cls) -> MouseEvent:
        return cls(MouseEventKind.WHEEL_DOWN)

    def grabs_focus(self) -> bool:
        """
        Whether this event should move focus to the view under the pointer.

        Only presses and wheel events do.  Release and hold never do, so a
        view keeps the mouse while a drag wanders outside its bounds.
        """
        return self.kind in (
            MouseEventKind.PRESS,
            MouseEventKind.WHEEL_UP,
            MouseEventKind.WHEEL_DOWN,
        )


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Event:
    """
    Base class of every input event.

    The set of subclasses is open: code matching on events should always
    keep a fallback branch.  The internal :class:`Exit` event exists so
    that no match over the public variants is ever complete.
    """

    def relativized(self, top_left: Vec2Like) -> Event:
        """Return the event as seen by a child placed at *top_left*."""
        return self

    def mouse_position(self) -> XY[int] | None:
        """Absolute pointer position, for mouse events."""
        return None


@dataclass(frozen=True)
class WindowResize(Event):
    """The terminal was resized."""


@dataclass(frozen=True)
class FocusLost(Event):
    """Sent to a view that just lost the focus."""


@dataclass(frozen=True)
class Refresh(Event):
    """Periodic tick, when an auto-refresh rate is configured."""


@dataclass(frozen=True)
class Char(Event):
    char: str


@dataclass(frozen=True)
class CtrlChar(Event):
    char: str


@dataclass(frozen=True)
class AltChar(Event):
    char: str


@dataclass(frozen=True)
class KeyEvent(Event):
    key: Key


@dataclass(frozen=True)
class ShiftKey(Event):
    key: Key


@dataclass(frozen=True)
class AltKey(Event):
    key: Key


@dataclass(frozen=True)
class AltShiftKey(Event):
    key: Key


@dataclass(frozen=True)
class CtrlKey(Event):
    key: Key


@dataclass(frozen=True)
class CtrlShiftKey(Event):
    key: Key


@dataclass(frozen=True)
class CtrlAltKey(Event):
    key: Key


@dataclass(frozen=True)
class Mouse(Event):
    """
    A mouse event.

    Attributes
    ----------
    offset:
        Top-left corner of the view receiving the event, in screen
        coordinates.  Containers grow it as the event travels down.
    position:
        Pointer position in screen coordinates.
    event:
        What happened.
    """

    offset: XY[int]
    position: XY[int]
    event: MouseEvent

    def relativized(self, top_left: Vec2Like) -> Mouse:
        return replace(self, offset=self.offset + top_left)

    def mouse_position(self) -> XY[int]:
        return self.position

    def relative_position(self) -> XY[int] | None:
        """Pointer position relative to the receiving view, if inside it."""
        return self.position.checked_sub(self.offset)


@dataclass(frozen=True)
class Unknown(Event):
    """Input the backend could not decode."""

    data: bytes


@dataclass(frozen=True)
class Exit(Event):
    """Asks the application loop to stop."""


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------


class Callback:
    """
    Deferred action run against the application root.

    Callbacks may be stored, shared between several event results and run
    from another call stack than the one that created them.
    """

    __slots__ = ("_fn",)

    def __init__(self, fn: Callable[[Root], Any]) -> None:
        self._fn = fn

    @classmethod
    def from_fn(cls, fn: Callable[[Root], Any]) -> Callback:
        return cls(fn)

    @classmethod
    def from_fn_once(cls, fn: Callable[[Root], Any]) -> Callback:
        """Wrap *fn* so that only the first call runs it."""
        lock = threading.Lock()
        pending = [fn]

        def run_once(root: Root) -> None:
            with lock:
                if not pending:
                    return
                target = pending.pop()
            target(root)

        return cls(run_once)

    @classmethod
    def dummy(cls) -> Callback:
        """A callback that does nothing."""
        return cls(lambda root: None)

    def __call__(self, root: Root) -> None:
        self._fn(root)

    def then(self, other: Callback) -> Callback:
        """A callback running this one, then *other*."""
        first, second = self, other

        def run_both(root: Root) -> None:
            first(root)
            second(root)

        return Callback(run_both)

    def __repr__(self) -> str:
        return f"Callback({getattr(self._fn, '__qualname__', self._fn)!r})"


# ---------------------------------------------------------------------------
# EventResult
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EventResult:
    """
    Outcome of :meth:`View.on_event`.

    A consumed result stops propagation even without a callback.  Use the
    :meth:`ignored` and :meth:`consumed` constructors rather than building
    instances directly.
    """

    handled: bool
    callback: Callback | None = None

    @classmethod
    def ignored(cls) -> EventResult:
        return _IGNORED

    @classmethod
    def consumed(cls, callback: Callback | None = None) -> EventResult:
        return cls(True, callback)

    @classmethod
    def with_cb(cls, fn: Callable[[Root], Any]) -> EventResult:
        return cls(True, Callback.from_fn(fn))

    @classmethod
    def with_cb_once(cls, fn: Callable[[Root], Any]) -> EventResult:
        return cls(True, Callback.from_fn_once(fn))

    def is_consumed(self) -> bool:
        return self.handled

    def has_callback(self) -> bool:
        return self.callback is not None

    def process(self, root: Root) -> None:
        """Run the callback, if any."""
        if self.callback is not None:
            self.callback(root)

    def or_else(self, fn: Callable[[], EventResult]) -> EventResult:
        """Return ``self`` if consumed, else the result of *fn*."""
        if self.handled:
            return self
        return fn()

    def and_(self, other: EventResult) -> EventResult:
        """
        Merge two results.

        ``ignored`` is the identity.  Two consumed results give one
        consumed result whose callback runs both callbacks in order.
        """
        if not self.handled:
            return other
        if not other.handled:
            return self
        if self.callback is None:
            return other
        if other.callback is None:
            return self
        return EventResult(True, self.callback.then(other.callback))

    __and__ = and_

    @staticmethod
    def combine(results: Iterable[EventResult]) -> EventResult:
        """
        Merge any number of results into one.

        Returns ``ignored`` when nothing was consumed.  Otherwise returns a
        single consumed result whose callback runs every callback, in the
        original order.
        """
        handled = False
        callbacks: list[Callback] = []
        for result in results:
            if not result.handled:
                continue
            handled = True
            if result.callback is not None:
                callbacks.append(result.callback)

        if not handled:
            return _IGNORED

        def run_all(root: Root) -> None:
            for callback in callbacks:
                callback(root)

        return EventResult(True, Callback(run_all))


_IGNORED = EventResult(False)


# ---------------------------------------------------------------------------
# EventTrigger
# ---------------------------------------------------------------------------

_ARROWS = frozenset({Key.LEFT, Key.RIGHT, Key.UP, Key.DOWN})


class EventTrigger:
    """
    Predicate over events, tagged for comparison and debugging.

    Two triggers are equal when their tags are; the predicate itself is
    never compared.

    Parameters
    ----------
    predicate:
        Returns ``True`` for the events this trigger reacts to.
    tag:
        Any hashable value describing the trigger.
    """

    __slots__ = ("_predicate", "tag")

    def __init__(self, predicate: Callable[[Event], bool], tag: Hashable) -> None:
        self._predicate = predicate
        self.tag = tag

    @classmethod
    def from_fn(cls, predicate: Callable[[Event], bool]) -> EventTrigger:
        return cls(predicate, "free function")

    @classmethod
    def from_fn_and_tag(cls, predicate: Callable[[Event], bool], tag: Hashable) -> EventTrigger:
        return cls(predicate, tag)

    @classmethod
    def from_event(cls, event: Event) -> EventTrigger:
        """Trigger matching exactly *event*, tagged with it."""
        return cls(lambda e: e == event, event)

    @classmethod
    def coerce(cls, value: EventTrigger | Event | Key | str | Callable[[Event], bool]) -> EventTrigger:
        """
        Build a trigger from a trigger, an event, a key or a character.

        A single-character string matches :class:`Char`; a :class:`Key`
        matches the plain key press; any other callable is used as the
        predicate.
        """
        if isinstance(value, EventTrigger):
            return value
        if isinstance(value, Event):
            return cls.from_event(value)
        if isinstance(value, Key):
            return cls.from_event(KeyEvent(value))
        if isinstance(value, str):
            if len(value) != 1:
                raise ValueError(f"expected a single character, got {value!r}")
            return cls.from_event(Char(value))
        if callable(value):
            return cls.from_fn(value)
        raise TypeError(f"cannot build an event trigger from {value!r}")

    @classmethod
    def arrows(cls) -> EventTrigger:
        return cls(lambda e: isinstance(e, KeyEvent) and e.key in _ARROWS, "arrows")

    @classmethod
    def mouse(cls) -> EventTrigger:
        return cls(lambda e: isinstance(e, Mouse), "mouse")

    @classmethod
    def any(cls) -> EventTrigger:
        return cls(lambda e: True, "any")

    @classmethod
    def none(cls) -> EventTrigger:
        return cls(lambda e: False, "none")

    def has_tag(self, tag: Hashable) -> bool:
        return self.tag == tag

    def apply(self, event: Event) -> bool:
        return bool(self._predicate(event))

    __call__ = apply

    def or_(self, other: EventTrigger | Event | Key | str) -> EventTrigger:
        """Trigger matching either this one or *other*."""
        other = EventTrigger.coerce(other)
        first, second = self._predicate, other._predicate
        return EventTrigger(lambda e: first(e) or second(e), (self.tag, "or", other.tag))

    __or__ = or_

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventTrigger):
            return NotImplemented
        return self.tag == other.tag

    def __hash__(self) -> int:
        return hash(self.tag)

    def __repr__(self) -> str:
        return f"EventTrigger({self.tag!r})"
