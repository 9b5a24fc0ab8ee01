"""Named wrapper, the target of name selectors."""

from __future__ import annotations

from typing import TypeVar

from weft.direction import Direction
from weft.event import EventResult
from weft.view.view import AnyCb, CannotFocus, Selector, View
from weft.view.view_wrapper import ViewWrapper

V = TypeVar("V", bound=View)


class NamedView(ViewWrapper[V]):
    """
    Gives a name to a view so it can be reached with a :class:`Selector`.

    A match stops the search: views nested inside a named view are only
    reached when the outer name does not match.
    """

    def __init__(self, name: str, view: V) -> None:
        super().__init__(view)
        self.name = name

    def matches(self, selector: Selector) -> bool:
        return selector.name == self.name

    def call_on_any(self, selector: Selector, callback: AnyCb) -> None:
        if self.matches(selector):
            callback(self.view)
        else:
            self.view.call_on_any(selector, callback)

    def focus_view(self, selector: Selector) -> EventResult:
        if not self.matches(selector):
            return self.view.focus_view(selector)
        try:
            return self.view.take_focus(Direction.none())
        except CannotFocus:
            return EventResult.consumed()

    def __repr__(self) -> str:
        return f"NamedView({self.name!r}, {self.view.type_name()})"


def with_name(view: V, name: str) -> NamedView[V]:
    """Wrap *view* in a :class:`NamedView` called *name*."""
    return NamedView(name, view)
