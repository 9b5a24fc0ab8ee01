"""Container placing children at fixed rectangles."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator

from weft.direction import Absolute, Direction, Relative
from weft.event import Event, EventResult, Key, KeyEvent, Mouse, ShiftKey
from weft.rect import Rect
from weft.vec import XY
from weft.view.view import AnyCb, CannotFocus, Selector, View, ViewNotFound

if TYPE_CHECKING:
    from weft.printer import Printer


class _Child:
    __slots__ = ("view", "position")

    def __init__(self, view: View, position: Rect) -> None:
        self.view = view
        self.position = position


_ARROW_TARGETS = {
    Key.LEFT: Absolute.LEFT,
    Key.RIGHT: Absolute.RIGHT,
    Key.UP: Absolute.UP,
    Key.DOWN: Absolute.DOWN,
}


class FixedLayout(View):
    """
    Children drawn at positions chosen by the caller.

    Arrow keys move the focus to the nearest child in that direction that
    overlaps the focused one on the other axis.  Tab and Shift+Tab follow
    insertion order and do not wrap.

    Example::

        layout = (
            FixedLayout()
            .child(Rect.from_size((0, 0), (1, 1)), TextView("/"))
            .child(Rect.from_size((3, 1), (11, 1)), Button("Click", on_click))
        )
    """

    def __init__(self) -> None:
        self._children: list[_Child] = []
        self._focus: int = 0

    # ------------------------------------------------------------------
    # Child management
    # ------------------------------------------------------------------

    def child(self, position: Rect, view: View) -> FixedLayout:
        self.add_child(position, view)
        return self

    def add_child(self, position: Rect, view: View) -> None:
        self._children.append(_Child(view, position))

    def __len__(self) -> int:
        return len(self._children)

    def is_empty(self) -> bool:
        return not self._children

    def get_child(self, index: int) -> View | None:
        if 0 <= index < len(self._children):
            return self._children[index].view
        return None

    def set_child_position(self, index: int, position: Rect) -> None:
        self._children[index].position = position

    def child_position(self, index: int) -> Rect:
        return self._children[index].position

    def remove_child(self, index: int) -> View | None:
        if not 0 <= index < len(self._children):
            return None
        if self._focus > index or (self._focus != 0 and self._focus == len(self._children) - 1):
            self._focus -= 1
        return self._children.pop(index).view

    # ------------------------------------------------------------------
    # Focus management
    # ------------------------------------------------------------------

    @property
    def focus_index(self) -> int:
        return self._focus

    def set_focus_index(self, index: int) -> EventResult:
        """Focus the child at *index*, or raise :class:`ViewNotFound`."""
        if not 0 <= index < len(self._children):
            raise ViewNotFound()
        try:
            result = self._children[index].view.take_focus(Direction.none())
        except CannotFocus:
            raise ViewNotFound() from None
        self._focus = index
        return result

    def _ordered(self, source: Direction) -> list[tuple[int, _Child]]:
        """Children as met when entering from *source*."""
        children = list(enumerate(self._children))
        if source.value is Relative.FRONT:
            return children
        if source.value is Relative.BACK:
            return children[::-1]
        # Sort by the edge facing the source; nearest first.
        side = source.value
        _, rel = side.split()
        children.sort(key=lambda item: item[1].position.edge(side), reverse=rel is Relative.BACK)
        return children

    def _circular(self) -> Iterator[tuple[int, _Child]]:
        children = list(enumerate(self._children))
        yield from children[self._focus:]
        yield from children[: self._focus]

    def _try_focus(self, candidates: Iterable[tuple[int, _Child]], source: Direction) -> EventResult:
        for index, child in candidates:
            try:
                result = child.view.take_focus(source)
            except CannotFocus:
                continue
            self._focus = index
            return result
        return EventResult.ignored()

    def _move_focus_rel(self, target: Relative) -> EventResult:
        source = Direction.rel(target.swap())
        if target is Relative.BACK:
            candidates = list(enumerate(self._children))[self._focus + 1:]
        else:
            candidates = list(enumerate(self._children))[: self._focus][::-1]
        return self._try_focus(candidates, source)

    def _move_focus_abs(self, target: Absolute) -> EventResult:
        source = Direction.abs_(target.opposite())
        orientation, rel = target.split()
        current = self._children[self._focus].position
        current_side = current.side(orientation.swap())
        current_edge = current.edge(target)

        def aligned(child: _Child) -> bool:
            lo, hi = child.position.side(orientation.swap())
            past = Relative.a_to_b(child.position.edge(target), current_edge) is rel
            return past and lo <= current_side[1] and current_side[0] <= hi

        candidates = [(i, c) for i, c in self._ordered(source) if aligned(c)]
        return self._try_focus(candidates, source)

    def _check_focus_grab(self, event: Event) -> None:
        if not isinstance(event, Mouse) or not event.event.grabs_focus():
            return
        position = event.relative_position()
        if position is None:
            return
        for index, child in enumerate(self._children):
            if not child.position.contains(position):
                continue
            try:
                child.view.take_focus(Direction.none())
            except CannotFocus:
                continue
            self._focus = index
            return

    # ------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------

    def draw(self, printer: Printer) -> None:
        for index, child in enumerate(self._children):
            sub = printer.windowed(child.position).focused_if(index == self._focus)
            child.view.draw(sub)

    def layout(self, size: XY[int]) -> None:
        for child in self._children:
            child.view.layout(child.position.size())

    def required_size(self, constraint: XY[int]) -> XY[int]:
        result: XY[int] = XY.zero()
        for child in self._children:
            result = result.or_max(child.position.bottom_right + (1, 1))
        return result

    def on_event(self, event: Event) -> EventResult:
        if self.is_empty():
            return EventResult.ignored()

        self._check_focus_grab(event)

        child = self._children[self._focus]
        result = child.view.on_event(event.relativized(child.position.top_left))
        if result.is_consumed():
            return result

        if event == ShiftKey(Key.TAB):
            return self._move_focus_rel(Relative.FRONT)
        if event == KeyEvent(Key.TAB):
            return self._move_focus_rel(Relative.BACK)
        if isinstance(event, KeyEvent) and event.key in _ARROW_TARGETS:
            return self._move_focus_abs(_ARROW_TARGETS[event.key])
        return EventResult.ignored()

    def take_focus(self, source: Direction) -> EventResult:
        if source.value is Absolute.NONE:
            # Keep the current focus when it still accepts.
            candidates: Iterable[tuple[int, _Child]] = self._circular()
        else:
            candidates = self._ordered(source)
        for index, child in candidates:
            try:
                result = child.view.take_focus(source)
            except CannotFocus:
                continue
            self._focus = index
            return result
        raise CannotFocus()

    def focus_view(self, selector: Selector) -> EventResult:
        for index, child in enumerate(self._children):
            try:
                result = child.view.focus_view(selector)
            except ViewNotFound:
                continue
            self._focus = index
            return result
        raise ViewNotFound()

    def call_on_any(self, selector: Selector, callback: AnyCb) -> None:
        for child in self._children:
            child.view.call_on_any(selector, callback)

    def important_area(self, size: XY[int]) -> Rect:
        if self.is_empty():
            return Rect.from_size((0, 0), size)
        child = self._children[self._focus]
        return child.view.important_area(child.position.size()) + child.position.top_left
