"""Static multi-line text."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.cells import cell_len

from weft.direction import Direction
from weft.event import EventResult
from weft.theme.models import Style
from weft.vec import XY
from weft.view.view import CannotFocus, View

if TYPE_CHECKING:
    from weft.printer import Printer


class TextView(View):
    """
    Displays text, one row per line.

    Parameters
    ----------
    content:
        Text to show.  Lines are split on ``"\\n"`` and never wrapped.
    style:
        Style applied to the whole text.
    focusable:
        Whether the view accepts the focus.  Plain labels do not.
    """

    def __init__(self, content: str = "", style: Style | None = None, focusable: bool = False) -> None:
        self._lines: list[str] = []
        self._content = ""
        self._dirty = True
        self.style = style
        self.focusable = focusable
        self.set_content(content)

    @property
    def content(self) -> str:
        return self._content

    def set_content(self, content: str) -> None:
        self._content = content
        self._lines = content.split("\n")
        self._dirty = True

    def append(self, content: str) -> None:
        self.set_content(self._content + content)

    # ------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------

    def draw(self, printer: Printer) -> None:
        if self.style is None:
            self._draw_lines(printer)
        else:
            with printer.style(self.style):
                self._draw_lines(printer)

    def _draw_lines(self, printer: Printer) -> None:
        for y, line in enumerate(self._lines):
            printer.print((0, y), line)

    def required_size(self, constraint: XY[int]) -> XY[int]:
        width = max((cell_len(line) for line in self._lines), default=0)
        return XY(width, len(self._lines))

    def layout(self, size: XY[int]) -> None:
        self._dirty = False

    def needs_relayout(self) -> bool:
        return self._dirty

    def take_focus(self, source: Direction) -> EventResult:
        if not self.focusable:
            raise CannotFocus()
        return EventResult.consumed()
