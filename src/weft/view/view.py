"""
The view contract.

Every widget in a weft tree derives from :class:`View`.  Only
:meth:`View.draw` is mandatory; every other hook has a sensible default.

Layout happens in two phases.  A parent first asks each child
:meth:`View.required_size` for one or more constraints, then commits to a
size with exactly one :meth:`View.layout` call before :meth:`View.draw`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from weft.direction import Direction
from weft.event import Event, EventResult
from weft.rect import Rect
from weft.vec import XY, Vec2

if TYPE_CHECKING:
    from weft.printer import Printer


class CannotFocus(Exception):
    """The view, and every descendant it tried, refused the focus."""


class ViewNotFound(Exception):
    """No view matched the selector."""


@dataclass(frozen=True)
class Selector:
    """Identifies a view by the name given with :class:`~weft.views.NamedView`."""

    name: str


AnyCb = Callable[["View"], None]
"""Callback handed to :meth:`View.call_on_any`; receives the matching view."""


class View(ABC):
    """
    Base class for widgets.

    Focus requests are answered with an :class:`EventResult` on success
    and signalled with :class:`CannotFocus` or :class:`ViewNotFound`
    otherwise.  Those two exceptions are routine: callers catch them and
    try the next candidate.
    """

    # ------------------------------------------------------------------
    # Drawing and layout
    # ------------------------------------------------------------------

    @abstractmethod
    def draw(self, printer: Printer) -> None:
        """
        Draw the view.

        Parameters
        ----------
        printer:
            Drawing context bound to the rectangle given at layout time.
            Drawing must not change the view's state.
        """
        ...

    def layout(self, size: XY[int]) -> None:
        """Commit to *size*; called once per frame before :meth:`draw`."""

    def needs_relayout(self) -> bool:
        """Whether anything changed since the last :meth:`layout`."""
        return True

    def required_size(self, constraint: XY[int]) -> XY[int]:
        """
        Size this view wants, given at most *constraint*.

        May be called several times per frame with different constraints.
        The answer may exceed *constraint* if the view cannot shrink.
        """
        return Vec2(1, 1)

    # ------------------------------------------------------------------
    # Events and focus
    # ------------------------------------------------------------------

    def on_event(self, event: Event) -> EventResult:
        """
        React to *event*.

        Mouse coordinates have already been made relative to this view's
        top-left corner by its ancestors.
        """
        return EventResult.ignored()

    def take_focus(self, source: Direction) -> EventResult:
        """
        Try to become focused, entering from *source*.

        ``Direction.none()`` means "any focusable descendant, preferring
        the current focus".

        Raises
        ------
        CannotFocus
            If neither this view nor any descendant accepts the focus.
        """
        raise CannotFocus()

    def focus_view(self, selector: Selector) -> EventResult:
        """
        Focus the descendant matching *selector*.

        Raises
        ------
        ViewNotFound
            If no descendant matches.
        """
        raise ViewNotFound()

    def call_on_any(self, selector: Selector, callback: AnyCb) -> None:
        """Run *callback* on every descendant matching *selector*."""

    def important_area(self, size: XY[int]) -> Rect:
        """Part of the view that should stay visible when scrolled."""
        return Rect.from_size((0, 0), size)

    def type_name(self) -> str:
        return type(self).__name__
