"""Base class for views that wrap a single child."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from weft.direction import Direction
from weft.event import Event, EventResult
from weft.rect import Rect
from weft.vec import XY
from weft.view.view import AnyCb, Selector, View

if TYPE_CHECKING:
    from weft.printer import Printer

V = TypeVar("V", bound=View)


class ViewWrapper(View, Generic[V]):
    """
    Forward every :class:`View` hook to ``self.view``.

    Subclasses override the hooks they change and call ``super()`` for the
    default behaviour.
    """

    def __init__(self, view: V) -> None:
        self.view: V = view

    def get_inner(self) -> V:
        return self.view

    def draw(self, printer: Printer) -> None:
        self.view.draw(printer)

    def layout(self, size: XY[int]) -> None:
        self.view.layout(size)

    def needs_relayout(self) -> bool:
        return self.view.needs_relayout()

    def required_size(self, constraint: XY[int]) -> XY[int]:
        return self.view.required_size(constraint)

    def on_event(self, event: Event) -> EventResult:
        return self.view.on_event(event)

    def take_focus(self, source: Direction) -> EventResult:
        return self.view.take_focus(source)

    def focus_view(self, selector: Selector) -> EventResult:
        return self.view.focus_view(selector)

    def call_on_any(self, selector: Selector, callback: AnyCb) -> None:
        self.view.call_on_any(selector, callback)

    def important_area(self, size: XY[int]) -> Rect:
        return self.view.important_area(size)
