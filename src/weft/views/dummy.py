"""Placeholder view."""

from __future__ import annotations

from typing import TYPE_CHECKING

from weft.vec import XY
from weft.view.view import View

if TYPE_CHECKING:
    from weft.printer import Printer


class DummyView(View):
    """Draws nothing, takes no room and never needs a new layout."""

    def draw(self, printer: Printer) -> None:
        pass

    def required_size(self, constraint: XY[int]) -> XY[int]:
        return XY.zero()

    def needs_relayout(self) -> bool:
        return False
