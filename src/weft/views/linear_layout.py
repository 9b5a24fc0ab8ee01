"""
Linear layout container.

Stacks child views along one axis, negotiating how the available length
is shared, and moves the focus between them with Tab and the arrow keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from weft.direction import Direction, Orientation, Relative
from weft.event import Event, EventResult, FocusLost, Key, KeyEvent, Mouse, ShiftKey
from weft.logging import get_logger
from weft.rect import Rect
from weft.vec import USIZE_MAX, XY
from weft.view.size_cache import SizeCache
from weft.view.view import AnyCb, CannotFocus, Selector, View, ViewNotFound

if TYPE_CHECKING:
    from weft.printer import Printer

logger = get_logger("views.linear_layout")


class _Child:
    """A child view with the sizes last negotiated for it."""

    __slots__ = ("view", "required_size", "last_size", "weight")

    def __init__(self, view: View, weight: int = 0) -> None:
        self.view = view
        # Last answer from required_size; not necessarily what it gets.
        self.required_size: XY[int] = XY.zero()
        self.last_size: XY[int] = XY.zero()
        self.weight = weight

    def ask(self, constraint: XY[int]) -> XY[int]:
        self.required_size = self.view.required_size(constraint)
        return self.required_size

    def layout(self, size: XY[int]) -> None:
        self.last_size = size
        self.view.layout(size)


@dataclass
class _ChildItem:
    index: int
    child: _Child
    offset: int
    length: int


def _place(children: list[_Child], orientation: Orientation, available: int) -> Iterator[_ChildItem]:
    """Walk *children*, handing each its required length while room lasts."""
    offset = 0
    for index, child in enumerate(children):
        length = min(available, orientation.get(child.required_size))
        available = max(available - length, 0)
        yield _ChildItem(index, child, offset, length)
        offset += length


def _cap(lengths: list[int], limit: int) -> list[int]:
    capped: list[int] = []
    for length in lengths:
        length = min(length, limit)
        limit -= length
        capped.append(length)
    return capped


class LinearLayout(View):
    """
    Children arranged in a row (horizontal) or a column (vertical).

    Every child gets the full length of the cross axis.  Along the main
    axis each child receives at least its minimum length, and leftover
    room goes first to the children asking for the least extra.

    Parameters
    ----------
    orientation:
        Axis along which children are stacked.
    children:
        Initial children, in order.
    """

    def __init__(self, orientation: Orientation, children: list[View] | None = None) -> None:
        self.orientation = orientation
        self._children: list[_Child] = [_Child(v) for v in children or []]
        self._focus: int = 0
        self._cache: XY[SizeCache] | None = None

    @classmethod
    def horizontal(cls, children: list[View] | None = None) -> LinearLayout:
        return cls(Orientation.HORIZONTAL, children)

    @classmethod
    def vertical(cls, children: list[View] | None = None) -> LinearLayout:
        return cls(Orientation.VERTICAL, children)

    # ------------------------------------------------------------------
    # Child management
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._children)

    def is_empty(self) -> bool:
        return not self._children

    def child(self, view: View) -> LinearLayout:
        """Chainable variant of :meth:`add_child`."""
        self.add_child(view)
        return self

    def add_child(self, view: View) -> None:
        self._children.append(_Child(view))
        self.invalidate()

    def insert_child(self, index: int, view: View) -> None:
        self._children.insert(index, _Child(view))
        if index <= self._focus and len(self._children) > 1:
            self._focus += 1
        self.invalidate()

    def swap_children(self, i: int, j: int) -> None:
        # Total size is unchanged, the cache stays valid.
        self._children[i], self._children[j] = self._children[j], self._children[i]

    def set_weight(self, index: int, weight: int) -> None:
        self._children[index].weight = weight

    def get_child(self, index: int) -> View | None:
        if 0 <= index < len(self._children):
            return self._children[index].view
        return None

    def get_child_mut(self, index: int) -> View | None:
        """Like :meth:`get_child`, for callers about to change the child."""
        self.invalidate()
        return self.get_child(index)

    def remove_child(self, index: int) -> View | None:
        """Remove and return the child at *index*, keeping the same child focused."""
        if not 0 <= index < len(self._children):
            return None
        self.invalidate()
        if self._focus > index or (self._focus != 0 and self._focus == len(self._children) - 1):
            self._focus -= 1
        return self._children.pop(index).view

    def clear(self) -> None:
        self.invalidate()
        self._children.clear()
        self._focus = 0

    def find_child_from_name(self, name: str) -> int | None:
        """Index of the child containing a view named *name*."""
        selector = Selector(name)
        for index, child in enumerate(self._children):
            found: list[View] = []
            child.view.call_on_any(selector, found.append)
            if found:
                return index
        return None

    def invalidate(self) -> None:
        """Drop the size cache so the next layout negotiates again."""
        self._cache = None

    # ------------------------------------------------------------------
    # Focus management
    # ------------------------------------------------------------------

    @property
    def focus_index(self) -> int:
        return self._focus

    def set_focus_index(self, index: int) -> EventResult:
        """
        Focus the child at *index*.

        Raises
        ------
        ViewNotFound
            If there is no such child or it refuses the focus.
        """
        if not 0 <= index < len(self._children):
            raise ViewNotFound()
        try:
            result = self._children[index].view.take_focus(Direction.none())
        except CannotFocus:
            raise ViewNotFound() from None
        return result.and_(self._set_focus_unchecked(index))

    def _set_focus_unchecked(self, index: int) -> EventResult:
        if index == self._focus:
            return EventResult.consumed()
        result = self._children[self._focus].view.on_event(FocusLost())
        self._focus = index
        return result

    def _iter_from(self, from_focus: bool, source: Relative) -> Iterator[tuple[int, _Child]]:
        """Children in *source* order, optionally starting at the focus."""
        if source is Relative.FRONT:
            start = self._focus if from_focus else 0
            yield from list(enumerate(self._children))[start:]
        else:
            end = self._focus + 1 if from_focus else len(self._children)
            yield from reversed(list(enumerate(self._children))[:end])

    def _move_focus(self, source: Direction) -> EventResult:
        """Focus the next child that accepts it, coming from *source*."""
        rel = source.relative(self.orientation)
        if rel is None:
            return EventResult.ignored()
        candidates = self._iter_from(True, rel)
        # Skip the focused child itself.
        next(candidates, None)
        for index, child in candidates:
            try:
                result = child.view.take_focus(source)
            except CannotFocus:
                continue
            return result.and_(self._set_focus_unchecked(index))
        return EventResult.ignored()

    def _check_focus_grab(self, event: Event) -> EventResult:
        """Focus the child under a mouse press or wheel event."""
        if not isinstance(event, Mouse) or not event.event.grabs_focus():
            return EventResult.ignored()
        position = event.relative_position()
        if position is None:
            return EventResult.ignored()
        coordinate = self.orientation.get(position)

        for item in _place(self._children, self.orientation, USIZE_MAX):
            # The last size gives the window each child accepts clicks in.
            if item.offset + self.orientation.get(item.child.last_size) <= coordinate:
                continue
            try:
                result = item.child.view.take_focus(Direction.none())
            except CannotFocus:
                return EventResult.ignored()
            return result.and_(self._set_focus_unchecked(item.index))
        return EventResult.ignored()

    # ------------------------------------------------------------------
    # Size negotiation
    # ------------------------------------------------------------------

    def _children_are_sleeping(self) -> bool:
        return not any(c.view.needs_relayout() for c in self._children)

    def _get_cache(self, req: XY[int]) -> XY[int] | None:
        if self._cache is None:
            return None
        if self._cache.zip_map(req, lambda c, r: c.accept(r)).both() and self._children_are_sleeping():
            return self._cache.map(lambda c: c.value)
        return None

    def needs_relayout(self) -> bool:
        if self._cache is None:
            return True
        return not self._children_are_sleeping()

    def required_size(self, req: XY[int]) -> XY[int]:
        cached = self._get_cache(req)
        if cached is not None:
            return cached

        o = self.orientation
        logger.debug("Req: %s", req)

        # Ideally everything fits.
        ideal_sizes = [c.ask(req) for c in self._children]
        ideal = o.stack(ideal_sizes)
        logger.debug("Ideal sizes: %s, result: %s", ideal_sizes, ideal)
        if ideal.fits_in(req):
            self._cache = SizeCache.build(ideal, req)
            return ideal

        # Otherwise, see how small everyone can get.
        budget_req = req.with_axis(o, 1)
        min_sizes = [c.ask(budget_req) for c in self._children]
        desperate = o.stack(min_sizes)
        logger.debug("Budget req: %s, min sizes: %s, desperate: %s", budget_req, min_sizes, desperate)

        if o.get(desperate) > o.get(req):
            # Even the minimum does not fit: cut the lengths from the end.
            capped = _cap([o.get(c.required_size) for c in self._children], o.get(req))
            for child, length in zip(self._children, capped):
                child.required_size = child.required_size.with_axis(o, length)
            logger.debug("Minimum %s exceeds request %s", desperate, req)
            self._cache = None
            return desperate

        # Share the leftover length, smallest demands first.
        available = o.get(req.saturating_sub(desperate))
        overweight = sorted(
            enumerate(max(o.get(a) - o.get(b), 0) for a, b in zip(ideal_sizes, min_sizes)),
            key=lambda pair: pair[1],
        )
        allocations = [0] * len(overweight)
        for rank, (index, weight) in enumerate(overweight):
            remaining = len(overweight) - rank
            spent = min(available // remaining, weight)
            allocations[index] = spent
            available -= spent
        logger.debug("Overweight: %s, allocations: %s", overweight, allocations)

        final_lengths = [req.with_axis(o, o.get(m) + a) for m, a in zip(min_sizes, allocations)]
        final_sizes = [c.ask(length) for c, length in zip(self._children, final_lengths)]
        compromise = o.stack(final_sizes)
        logger.debug("Final sizes: %s, compromise: %s", final_sizes, compromise)

        self._cache = SizeCache.build(compromise, req)
        return compromise

    def layout(self, size: XY[int]) -> None:
        if self._get_cache(size) is None:
            self.required_size(size)

        o = self.orientation
        for item in _place(self._children, o, o.get(size)):
            item.child.layout(size.with_axis(o, item.length))

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw(self, printer: Printer) -> None:
        o = self.orientation
        for item in _place(self._children, o, o.get(printer.size)):
            sub = (
                printer.offset_by(o.make_vec(item.offset, 0))
                .cropped(item.child.last_size)
                .focused_if(item.index == self._focus)
            )
            item.child.view.draw(sub)

    # ------------------------------------------------------------------
    # Input dispatch
    # ------------------------------------------------------------------

    def _focused_item(self) -> _ChildItem:
        for item in _place(self._children, self.orientation, USIZE_MAX):
            if item.index == self._focus:
                return item
        raise IndexError(self._focus)

    def on_event(self, event: Event) -> EventResult:
        if self.is_empty():
            return EventResult.ignored()

        grabbed = self._check_focus_grab(event)

        item = self._focused_item()
        offset = self.orientation.make_vec(item.offset, 0)
        result = item.child.view.on_event(event.relativized(offset))
        if result.is_consumed():
            return grabbed.and_(result)

        return grabbed.and_(self._navigate(event))

    def _navigate(self, event: Event) -> EventResult:
        has_prev = self._focus > 0
        has_next = self._focus + 1 < len(self._children)
        horizontal = self.orientation is Orientation.HORIZONTAL

        if event == ShiftKey(Key.TAB) and has_prev:
            return self._move_focus(Direction.back())
        if event == KeyEvent(Key.TAB) and has_next:
            return self._move_focus(Direction.front())
        if event == KeyEvent(Key.LEFT) and horizontal and has_prev:
            return self._move_focus(Direction.right())
        if event == KeyEvent(Key.UP) and not horizontal and has_prev:
            return self._move_focus(Direction.down())
        if event == KeyEvent(Key.RIGHT) and horizontal and has_next:
            return self._move_focus(Direction.left())
        if event == KeyEvent(Key.DOWN) and not horizontal and has_next:
            return self._move_focus(Direction.up())
        return EventResult.ignored()

    def take_focus(self, source: Direction) -> EventResult:
        rel = source.relative(self.orientation)
        # Coming from the sides: keep the current focus if possible.
        for index, child in self._iter_from(rel is None, rel or Relative.FRONT):
            try:
                result = child.view.take_focus(source)
            except CannotFocus:
                continue
            # No FocusLost here: we did not have the focus before.
            self._focus = index
            return result
        raise CannotFocus()

    def focus_view(self, selector: Selector) -> EventResult:
        for index, child in enumerate(self._children):
            try:
                result = child.view.focus_view(selector)
            except ViewNotFound:
                continue
            return result.and_(self._set_focus_unchecked(index))
        raise ViewNotFound()

    def call_on_any(self, selector: Selector, callback: AnyCb) -> None:
        for child in self._children:
            child.view.call_on_any(selector, callback)

    def important_area(self, size: XY[int]) -> Rect:
        if self.is_empty():
            return Rect.from_size((0, 0), size)
        item = self._focused_item()
        offset = self.orientation.make_vec(item.offset, 0)
        return item.child.view.important_area(item.child.last_size) + offset
