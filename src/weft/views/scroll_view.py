"""
Scrollable wrapper.

:class:`ScrollView` shows a window on a larger child and adds scrollbars
when the child overflows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from weft.direction import Direction
from weft.event import Event, EventResult
from weft.rect import Rect
from weft.vec import XY, Vec2Like
from weft.view import scroll
from weft.view.scroll import ScrollCore, ScrollStrategy
from weft.view.view import AnyCb, CannotFocus, Selector, View

if TYPE_CHECKING:
    from weft.printer import Printer
    from weft.root import Root

V = TypeVar("V", bound=View)

InnerScrollCallback = Callable[["ScrollView[Any]", Rect], EventResult]


def _ignore_scroll(view: ScrollView[Any], viewport: Rect) -> EventResult:
    return EventResult.ignored()


def _skip_unchanged(f: Callable[[Any, Rect], Any], if_skipped: Callable[[], Any]) -> Callable[[Any, Rect], Any]:
    """Wrap *f* so it only runs when the viewport differs from last time."""
    previous = Rect.from_size((0, 0), (0, 0))

    def wrapper(target: Any, viewport: Rect) -> Any:
        nonlocal previous
        if viewport == previous:
            return if_skipped()
        previous = viewport
        return f(target, viewport)

    return wrapper


class ScrollView(View, Generic[V]):
    """
    Scrollable window on a child view.

    Vertical scrolling is enabled by default.  Every operation that may
    move the viewport returns an :class:`EventResult` carrying the
    ``on_scroll`` callback, if one is set.

    Parameters
    ----------
    view:
        The content.
    """

    def __init__(self, view: V) -> None:
        self.inner = view
        self.core = ScrollCore()
        self._on_scroll: InnerScrollCallback = _ignore_scroll

    def get_inner(self) -> V:
        return self.inner

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def content_viewport(self) -> Rect:
        """Visible part of the content, in content coordinates."""
        return self.core.content_viewport()

    def inner_size(self) -> XY[int]:
        return self.core.inner_size

    def is_at_top(self) -> bool:
        return self.content_viewport().top() == 0

    def is_at_bottom(self) -> bool:
        return self.content_viewport().bottom() + 1 >= self.core.inner_size.y

    def is_at_left_edge(self) -> bool:
        return self.content_viewport().left() == 0

    def is_at_right_edge(self) -> bool:
        return self.content_viewport().right() + 1 >= self.core.inner_size.x

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_show_scrollbars(self, show: bool) -> None:
        self.core.set_show_scrollbars(show)

    def show_scrollbars(self, show: bool) -> ScrollView[V]:
        self.set_show_scrollbars(show)
        return self

    def set_scroll_strategy(self, strategy: ScrollStrategy | str) -> EventResult:
        if isinstance(strategy, str):
            strategy = ScrollStrategy.from_str(strategy)
        return self._scroll_operation(lambda: self.core.set_scroll_strategy(strategy))

    def scroll_strategy(self, strategy: ScrollStrategy | str) -> ScrollView[V]:
        self.set_scroll_strategy(strategy)
        return self

    def set_scroll_x(self, enabled: bool) -> EventResult:
        self.core.set_scroll_x(enabled)
        return self._on_scroll_callback()

    def set_scroll_y(self, enabled: bool) -> EventResult:
        self.core.set_scroll_y(enabled)
        return self._on_scroll_callback()

    def scroll_x(self, enabled: bool) -> ScrollView[V]:
        self.set_scroll_x(enabled)
        return self

    def scroll_y(self, enabled: bool) -> ScrollView[V]:
        self.set_scroll_y(enabled)
        return self

    # ------------------------------------------------------------------
    # Programmatic scrolling
    # ------------------------------------------------------------------

    def set_offset(self, offset: Vec2Like) -> EventResult:
        return self._scroll_operation(lambda: self.core.set_offset(offset))

    def scroll_to_top(self) -> EventResult:
        return self._scroll_operation(self.core.scroll_to_top)

    def scroll_to_bottom(self) -> EventResult:
        return self._scroll_operation(self.core.scroll_to_bottom)

    def scroll_to_left(self) -> EventResult:
        return self._scroll_operation(self.core.scroll_to_left)

    def scroll_to_right(self) -> EventResult:
        return self._scroll_operation(self.core.scroll_to_right)

    def scroll_to_important_area(self) -> EventResult:
        """Bring the content's important area into view."""

        def scroll_to_area() -> None:
            area = self.inner.important_area(self.core.inner_size)
            self.core.scroll_to_rect(area)

        return self._scroll_operation(scroll_to_area)

    def _scroll_operation(self, f: Callable[[], None]) -> EventResult:
        # The child may have changed since the last layout.
        self.layout(self.core.last_outer_size())
        f()
        return self._on_scroll_callback()

    # ------------------------------------------------------------------
    # Scroll callbacks
    # ------------------------------------------------------------------

    def set_on_scroll_inner(self, on_scroll: InnerScrollCallback) -> None:
        """Run *on_scroll* with this view and the new viewport after scrolling."""
        self._on_scroll = on_scroll

    def set_on_scroll(self, on_scroll: Callable[[Root, Rect], Any]) -> None:
        """Run *on_scroll* with the root and the new viewport after scrolling."""

        def inner(view: ScrollView[Any], viewport: Rect) -> EventResult:
            return EventResult.with_cb(lambda root: on_scroll(root, viewport))

        self.set_on_scroll_inner(inner)

    def set_on_scroll_change_inner(self, on_scroll: InnerScrollCallback) -> None:
        """Like :meth:`set_on_scroll_inner`, skipping calls where the viewport did not move."""
        self.set_on_scroll_inner(_skip_unchanged(on_scroll, EventResult.ignored))

    def set_on_scroll_change(self, on_scroll: Callable[[Root, Rect], Any]) -> None:
        self.set_on_scroll(_skip_unchanged(on_scroll, lambda: None))

    def on_scroll(self, on_scroll: Callable[[Root, Rect], Any]) -> ScrollView[V]:
        self.set_on_scroll(on_scroll)
        return self

    def _on_scroll_callback(self) -> EventResult:
        return self._on_scroll(self, self.content_viewport())

    # ------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------

    def draw(self, printer: Printer) -> None:
        scroll.draw(self.core, printer, self.inner.draw)

    def on_event(self, event: Event) -> EventResult:
        result = scroll.on_event(self.core, event, self.inner.on_event, self.inner.important_area)
        if not result.is_consumed():
            return result
        # A consumed event may have moved the viewport.
        return result.and_(self._on_scroll_callback())

    def layout(self, size: XY[int]) -> None:
        scroll.layout(
            self.core,
            size,
            self.inner.needs_relayout(),
            self.inner.layout,
            self.inner.required_size,
        )

    def needs_relayout(self) -> bool:
        return self.core.needs_relayout() or self.inner.needs_relayout()

    def required_size(self, constraint: XY[int]) -> XY[int]:
        return scroll.required_size(self.core, constraint, self.inner.needs_relayout(), self.inner.required_size)

    def call_on_any(self, selector: Selector, callback: AnyCb) -> None:
        self.inner.call_on_any(selector, callback)

    def focus_view(self, selector: Selector) -> EventResult:
        result = self.inner.focus_view(selector)
        return result.and_(self.scroll_to_important_area())

    def take_focus(self, source: Direction) -> EventResult:
        try:
            result = self.inner.take_focus(source)
        except CannotFocus:
            # Focusable while there is something to scroll.
            if self.core.is_scrolling().any():
                return EventResult.consumed()
            raise
        if source != Direction.none():
            return result.and_(self.scroll_to_important_area())
        return result

    def important_area(self, size: XY[int]) -> Rect:
        return scroll.important_area(self.core, self.inner.important_area)
