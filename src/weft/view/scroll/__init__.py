"""
Scrolling for any view.

A scrollable view owns a :class:`ScrollCore` and implements its
:class:`~weft.view.View` hooks by calling the functions below, passing the
hooks of its content as plain callables.  :class:`~weft.views.ScrollView`
is the ready-made wrapper.

Size negotiation
----------------
Whether a scrollbar is needed depends on the room left for the content,
and the room left depends on which scrollbars are shown.  :func:`sizes`
settles this in at most three passes:

1. Ask the content with no scrollbar reserved.
2. If some axis overflows, ask again reserving room for those scrollbars.
3. If that changed which axes overflow, ask one last time with the new
   set and keep the answer whatever it says.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from weft.event import Event, EventResult
from weft.logging import get_logger
from weft.rect import Rect
from weft.vec import XY
from weft.view.scroll.core import ScrollCore, ScrollStrategy

if TYPE_CHECKING:
    from weft.printer import Printer

__all__ = [
    "ScrollCore",
    "ScrollStrategy",
    "draw",
    "draw_lines",
    "important_area",
    "layout",
    "on_event",
    "required_size",
    "sizes",
]

logger = get_logger("view.scroll")

RequiredSize = Callable[[XY[int]], XY[int]]


# ---------------------------------------------------------------------------
# Size negotiation
# ---------------------------------------------------------------------------


def sizes_when_scrolling(
    core: ScrollCore,
    constraint: XY[int],
    scrolling: XY[bool],
    strict: bool,
    required_size: RequiredSize,
) -> tuple[XY[int], XY[int], XY[bool]]:
    """
    One negotiation pass, assuming scrollbars on the *scrolling* axes.

    Returns
    -------
    tuple
        ``(inner_size, size, new_scrolling)``: the content size, the
        outer size, and the axes that overflow with that outer size.
    """
    reserved = core.reservation_for(scrolling)
    available = constraint.saturating_sub(reserved)
    inner_size = required_size(available)

    wanted = inner_size + reserved
    # Scrollable axes shrink to the content; fixed axes fill the
    # constraint when strict and follow the content otherwise.
    fixed = constraint if strict else wanted
    size = core.enabled.select_or(wanted.or_min(constraint), fixed)

    available = size.saturating_sub(reserved)
    inner_size = core.enabled.select_or(inner_size, available)
    new_scrolling = inner_size.zip_map(available, lambda i, s: i > s)
    return inner_size, size, new_scrolling


def sizes(
    core: ScrollCore,
    constraint: XY[int],
    strict: bool,
    needs_relayout: bool,
    required_size: RequiredSize,
) -> tuple[XY[int], XY[int], XY[bool]]:
    """
    Negotiate ``(inner_size, size, scrolling)`` for *constraint*.

    The content's ``required_size`` is called at most three times.  With
    ``strict`` the outer size never exceeds *constraint*.
    """
    if not needs_relayout:
        cached = core.try_cache(constraint)
        if cached is not None:
            return cached

    attempt = 1
    inner_size, size, scrolling = sizes_when_scrolling(
        core, constraint, XY(False, False), strict, required_size
    )
    logger.debug("Attempt %d for %s: inner=%s size=%s scrolling=%s", attempt, constraint, inner_size, size, scrolling)

    if scrolling.any() and core.show_scrollbars:
        attempt += 1
        inner_size, size, new_scrolling = sizes_when_scrolling(
            core, constraint, scrolling, strict, required_size
        )
        logger.debug("Attempt %d for %s: inner=%s size=%s scrolling=%s", attempt, constraint, inner_size, size, new_scrolling)

        if new_scrolling != scrolling:
            # Accepted as is, even if the scrollbars would flip again.
            attempt += 1
            inner_size, size, _ = sizes_when_scrolling(
                core, constraint, new_scrolling, strict, required_size
            )
            logger.debug("Attempt %d for %s: inner=%s size=%s", attempt, constraint, inner_size, size)
        scrolling = new_scrolling

    return inner_size, size, scrolling


def layout(
    core: ScrollCore,
    size: XY[int],
    needs_relayout: bool,
    inner_layout: Callable[[XY[int]], None],
    inner_required_size: RequiredSize,
) -> None:
    """Lay out the content for an outer *size*, then fix the offset."""
    inner_size, self_size, scrolling = sizes(core, size, True, needs_relayout, inner_required_size)
    core.set_last_size(self_size, scrolling)
    core.set_inner_size(inner_size)
    core.build_cache(self_size, size, scrolling)

    inner_layout(inner_size)

    core.update_offset()


def required_size(
    core: ScrollCore,
    constraint: XY[int],
    needs_relayout: bool,
    inner_required_size: RequiredSize,
) -> XY[int]:
    _, size, _ = sizes(core, constraint, False, needs_relayout, inner_required_size)
    return size


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


def on_event(
    core: ScrollCore,
    event: Event,
    inner_on_event: Callable[[Event], EventResult],
    inner_important_area: Callable[[XY[int]], Rect],
) -> EventResult:
    """
    Route *event* to the content, then let the core use it.

    Mouse events outside the viewport never reach the content.
    """
    inside, relative_event = core.is_event_inside(event)
    result = inner_on_event(relative_event) if inside else EventResult.ignored()
    important = inner_important_area(core.inner_size)
    return core.on_inner_event(event, result, important)


def important_area(
    core: ScrollCore,
    inner_important_area: Callable[[XY[int]], Rect],
) -> Rect:
    """The content's important area, in outer coordinates, cropped to the viewport."""
    viewport = core.content_viewport()
    area = inner_important_area(core.inner_size)
    # An area outside the viewport collapses onto its nearest edge.
    last = viewport.size().saturating_sub((1, 1))
    top_left = area.top_left.saturating_sub(viewport.top_left).or_min(last)
    bottom_right = area.bottom_right.saturating_sub(viewport.top_left).or_min(last)
    return Rect.from_corners(top_left, bottom_right)


# ---------------------------------------------------------------------------
# Drawing
# ---------------------------------------------------------------------------


def draw(core: ScrollCore, printer: Printer, inner_draw: Callable[[Printer], None]) -> None:
    inner_draw(core.sub_printer(printer))


def draw_lines(
    core: ScrollCore,
    printer: Printer,
    line_drawer: Callable[[Printer, int], None],
) -> None:
    """Draw only the visible content rows, one printer per row."""

    def draw_visible(content: Printer) -> None:
        start = content.content_offset.y
        for y in range(start, start + content.output_size.y):
            line_drawer(content.offset_by((0, y)).cropped((content.size.x, 1)), y)

    draw(core, printer, draw_visible)
