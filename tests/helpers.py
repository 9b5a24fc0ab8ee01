"""Stub views shared by the tests."""

from __future__ import annotations

from weft.direction import Direction
from weft.event import Event, EventResult, FocusLost
from weft.printer import Printer
from weft.vec import XY, as_xy
from weft.view.view import CannotFocus, View


class SizedView(View):
    """
    A view with a fixed required size.

    Records what it is asked and sent so tests can inspect the traffic.
    """

    def __init__(self, size: tuple[int, int] = (1, 1), focusable: bool = False, consume: bool = False) -> None:
        self.size = as_xy(size)
        self.focusable = focusable
        self.consume = consume
        self.constraints: list[XY[int]] = []
        self.layouts: list[XY[int]] = []
        self.events: list[Event] = []
        self.focus_sources: list[Direction] = []
        self.focus_lost = 0
        self.drawn_with: list[Printer] = []

    def draw(self, printer: Printer) -> None:
        self.drawn_with.append(printer)

    def required_size(self, constraint: XY[int]) -> XY[int]:
        self.constraints.append(constraint)
        return self.size

    def layout(self, size: XY[int]) -> None:
        self.layouts.append(size)

    def needs_relayout(self) -> bool:
        return False

    def on_event(self, event: Event) -> EventResult:
        if isinstance(event, FocusLost):
            self.focus_lost += 1
            return EventResult.ignored()
        self.events.append(event)
        return EventResult.consumed() if self.consume else EventResult.ignored()

    def take_focus(self, source: Direction) -> EventResult:
        if not self.focusable:
            raise CannotFocus()
        self.focus_sources.append(source)
        return EventResult.consumed()


def focusable(size: tuple[int, int] = (1, 1)) -> SizedView:
    return SizedView(size, focusable=True)
