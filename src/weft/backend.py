"""
Backend protocol.

A backend turns terminal input into :class:`~weft.event.Event` values and
executes drawing primitives.  The toolkit never depends on which backend
is active.

:class:`PuppetBackend` keeps everything in memory: a queue of scripted
input and an :class:`ObservedScreen` cell grid.  Tests and headless runs
use it in place of a real terminal.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Iterable

from rich.cells import get_character_cell_size
from rich.color import Color
from rich.style import Style as RichStyle
from rich.text import Text

from weft.event import Event
from weft.theme.models import ColorPair, Effect
from weft.vec import XY, Vec2Like, as_xy


class Backend(ABC):
    """Interface every terminal backend implements."""

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    @abstractmethod
    def poll_event(self) -> Event | None:
        """Return the next pending event, or ``None`` if there is none."""
        ...

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    @abstractmethod
    def refresh(self) -> None:
        """Flush everything drawn since the last refresh to the screen."""
        ...

    @abstractmethod
    def has_colors(self) -> bool:
        ...

    @abstractmethod
    def screen_size(self) -> XY[int]:
        ...

    @abstractmethod
    def move_to(self, pos: XY[int]) -> None:
        ...

    @abstractmethod
    def print(self, text: str) -> None:
        """Print *text* at the cursor, with the current colours and effects."""
        ...

    @abstractmethod
    def clear(self, color: Color) -> None:
        """Fill the whole screen with *color*."""
        ...

    @abstractmethod
    def set_color(self, pair: ColorPair) -> ColorPair:
        """Make *pair* current and return the previous pair."""
        ...

    @abstractmethod
    def set_effect(self, effect: Effect) -> None:
        ...

    @abstractmethod
    def unset_effect(self, effect: Effect) -> None:
        ...

    def set_title(self, title: str) -> None:
        """Set the terminal window title, where supported."""

    def name(self) -> str:
        return type(self).__name__

    def print_at(self, pos: Vec2Like, text: str) -> None:
        self.move_to(as_xy(pos))
        self.print(text)


# ---------------------------------------------------------------------------
# Observed screen
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Cell:
    """
    One character cell.

    A wide character occupies its own cell plus a continuation cell whose
    ``text`` is empty.
    """

    text: str
    pair: ColorPair
    effects: frozenset[Effect] = frozenset()


class ObservedScreen:
    """In-memory grid of :class:`Cell`, addressed as ``(x, y)``."""

    def __init__(self, size: Vec2Like, pair: ColorPair) -> None:
        self.size = as_xy(size)
        self._grid: list[list[Cell]] = []
        self.clear(pair)

    def clear(self, pair: ColorPair) -> None:
        blank = Cell(" ", pair)
        self._grid = [[blank] * self.size.x for _ in range(self.size.y)]

    def put(self, pos: Vec2Like, cell: Cell) -> None:
        pos = as_xy(pos)
        if pos.strictly_lt(self.size):
            self._grid[pos.y][pos.x] = cell

    def cell(self, pos: Vec2Like) -> Cell:
        pos = as_xy(pos)
        return self._grid[pos.y][pos.x]

    def row(self, y: int) -> str:
        return "".join(cell.text for cell in self._grid[y])

    def rows(self) -> list[str]:
        return [self.row(y) for y in range(self.size.y)]

    def find(self, needle: str) -> list[XY[int]]:
        """Positions where *needle* starts, scanning row by row."""
        found: list[XY[int]] = []
        for y, line in enumerate(self.rows()):
            start = line.find(needle)
            while start != -1:
                found.append(XY(start, y))
                start = line.find(needle, start + 1)
        return found

    def copy(self) -> ObservedScreen:
        clone = ObservedScreen.__new__(ObservedScreen)
        clone.size = self.size
        clone._grid = [list(row) for row in self._grid]
        return clone

    def to_text(self) -> Text:
        """Render the grid as a styled ``rich`` text, one line per row."""
        text = Text()
        for y, row in enumerate(self._grid):
            if y:
                text.append("\n")
            for cell in row:
                if cell.text:
                    text.append(cell.text, style=_rich_style(cell))
        return text


def _rich_style(cell: Cell) -> RichStyle:
    effects = cell.effects
    return RichStyle(
        color=cell.pair.front,
        bgcolor=cell.pair.back,
        bold=Effect.BOLD in effects or None,
        dim=Effect.DIM in effects or None,
        italic=Effect.ITALIC in effects or None,
        underline=Effect.UNDERLINE in effects or None,
        strike=Effect.STRIKETHROUGH in effects or None,
        blink=Effect.BLINK in effects or None,
        reverse=Effect.REVERSE in effects or None,
    )


# ---------------------------------------------------------------------------
# Puppet backend
# ---------------------------------------------------------------------------


class PuppetBackend(Backend):
    """
    Backend driven by scripted input, drawing to memory.

    Parameters
    ----------
    size:
        Screen size in cells.
    events:
        Events returned by :meth:`poll_event`, in order.
    """

    def __init__(self, size: Vec2Like = (80, 24), events: Iterable[Event] = ()) -> None:
        self._size = as_xy(size)
        self._events: deque[Event] = deque(events)
        self._pair = ColorPair(Color.parse("white"), Color.parse("black"))
        self._effects: set[Effect] = set()
        self._cursor: XY[int] = XY.zero()
        self._screen = ObservedScreen(self._size, self._pair)
        self._last_frame: ObservedScreen | None = None
        self.refresh_count = 0
        self.title = ""

    # ------------------------------------------------------------------
    # Scripting
    # ------------------------------------------------------------------

    def inject(self, *events: Event) -> None:
        """Queue *events* for :meth:`poll_event`."""
        self._events.extend(events)

    def pending(self) -> int:
        return len(self._events)

    def resize(self, size: Vec2Like) -> None:
        self._size = as_xy(size)
        self._screen = ObservedScreen(self._size, self._pair)

    @property
    def screen(self) -> ObservedScreen:
        """The grid being drawn, including output not yet refreshed."""
        return self._screen

    def last_frame(self) -> ObservedScreen | None:
        """The grid as of the last :meth:`refresh`."""
        return self._last_frame

    # ------------------------------------------------------------------
    # Backend API
    # ------------------------------------------------------------------

    def poll_event(self) -> Event | None:
        if self._events:
            return self._events.popleft()
        return None

    def refresh(self) -> None:
        self._last_frame = self._screen.copy()
        self.refresh_count += 1

    def has_colors(self) -> bool:
        return True

    def screen_size(self) -> XY[int]:
        return self._size

    def move_to(self, pos: XY[int]) -> None:
        self._cursor = pos

    def print(self, text: str) -> None:
        effects = frozenset(self._effects)
        x, y = self._cursor
        for char in text:
            width = get_character_cell_size(char)
            if width == 0:
                continue
            self._screen.put((x, y), Cell(char, self._pair, effects))
            for extra in range(1, width):
                self._screen.put((x + extra, y), Cell("", self._pair, effects))
            x += width
        self._cursor = XY(x, y)

    def clear(self, color: Color) -> None:
        self._screen.clear(ColorPair(color, color))

    def set_color(self, pair: ColorPair) -> ColorPair:
        previous = self._pair
        self._pair = pair
        return previous

    def current_color(self) -> ColorPair:
        return self._pair

    def set_effect(self, effect: Effect) -> None:
        self._effects.add(effect)

    def unset_effect(self, effect: Effect) -> None:
        self._effects.discard(effect)

    def set_title(self, title: str) -> None:
        self.title = title

    def name(self) -> str:
        return "puppet"
