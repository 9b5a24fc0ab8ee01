"""Clickable button."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from rich.cells import cell_len

from weft.direction import Direction
from weft.event import Event, EventResult, Key, KeyEvent, Mouse, MouseButton, MouseEventKind
from weft.vec import XY
from weft.view.view import CannotFocus, View

if TYPE_CHECKING:
    from weft.printer import Printer
    from weft.root import Root


class Button(View):
    """
    A one-line ``<label>`` that runs a callback.

    Pressing Enter, or clicking it with the left button, consumes the
    event with *callback* attached.  A disabled button refuses the focus
    and ignores input.
    """

    def __init__(self, label: str, callback: Callable[[Root], Any]) -> None:
        self.label = label
        self.callback = callback
        self.enabled = True
        self._last_size: XY[int] = XY.zero()

    def _text(self) -> str:
        return f"<{self.label}>"

    def draw(self, printer: Printer) -> None:
        printer = printer.enabled_if(self.enabled)
        with printer.selection(printer.focused and printer.enabled):
            printer.print((0, 0), self._text())

    def required_size(self, constraint: XY[int]) -> XY[int]:
        return XY(cell_len(self._text()), 1)

    def layout(self, size: XY[int]) -> None:
        self._last_size = size

    def needs_relayout(self) -> bool:
        return False

    def take_focus(self, source: Direction) -> EventResult:
        if not self.enabled:
            raise CannotFocus()
        return EventResult.consumed()

    def on_event(self, event: Event) -> EventResult:
        if not self.enabled:
            return EventResult.ignored()
        if event == KeyEvent(Key.ENTER):
            return EventResult.with_cb(self.callback)
        if isinstance(event, Mouse) and event.event.kind is MouseEventKind.RELEASE and event.event.button is MouseButton.LEFT:
            position = event.relative_position()
            if position is not None and position.strictly_lt(self._last_size):
                return EventResult.with_cb(self.callback)
        return EventResult.ignored()
