"""Wrap-around focus for a container."""

from __future__ import annotations

from typing import TypeVar

from weft.direction import Direction
from weft.event import Event, EventResult, Key, KeyEvent, ShiftKey
from weft.view.view import CannotFocus, View
from weft.view.view_wrapper import ViewWrapper

V = TypeVar("V", bound=View)

# Direction the focus re-enters from when it leaves through a key.
_TAB_SOURCES = {
    KeyEvent(Key.TAB): Direction.front(),
    ShiftKey(Key.TAB): Direction.back(),
}
_ARROW_SOURCES = {
    KeyEvent(Key.RIGHT): Direction.left(),
    KeyEvent(Key.LEFT): Direction.right(),
    KeyEvent(Key.UP): Direction.down(),
    KeyEvent(Key.DOWN): Direction.up(),
}


class CircularFocus(ViewWrapper[V]):
    """
    Brings the focus back around when it would leave the wrapped view.

    Parameters
    ----------
    view:
        Usually a container.
    wrap_tab:
        Wrap Tab and Shift+Tab.
    wrap_arrows:
        Wrap the arrow keys.
    """

    def __init__(self, view: V, wrap_tab: bool = False, wrap_arrows: bool = False) -> None:
        super().__init__(view)
        self.wrap_tab = wrap_tab
        self.wrap_arrows = wrap_arrows

    @classmethod
    def tab(cls, view: V) -> CircularFocus[V]:
        return cls(view, wrap_tab=True)

    @classmethod
    def arrows(cls, view: V) -> CircularFocus[V]:
        return cls(view, wrap_arrows=True)

    def _source_for(self, event: Event) -> Direction | None:
        if self.wrap_tab and event in _TAB_SOURCES:
            return _TAB_SOURCES[event]
        if self.wrap_arrows and event in _ARROW_SOURCES:
            return _ARROW_SOURCES[event]
        return None

    def on_event(self, event: Event) -> EventResult:
        result = self.view.on_event(event)
        if result.is_consumed():
            return result
        source = self._source_for(event)
        if source is None:
            return result
        try:
            return self.view.take_focus(source)
        except CannotFocus:
            return EventResult.ignored()
