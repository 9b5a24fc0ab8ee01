"""
Direction model.

Containers decide which child to focus next using two kinds of direction:

* :class:`Absolute` directions are screen-based (left, up, right, down,
  or none at all).
* :class:`Relative` directions (front, back) only make sense once an
  :class:`Orientation` is known: in a horizontal layout, front means left;
  in a vertical one, front means up.

:class:`Direction` holds either kind.  Converting between them is total
except for :meth:`Absolute.split`, which refuses ``Absolute.NONE``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, TypeVar

from weft.vec import XY, Vec2Like, as_xy

T = TypeVar("T")


class ParseError(ValueError):
    """Raised when a text value does not name a known variant."""


# ---------------------------------------------------------------------------
# Orientation
# ---------------------------------------------------------------------------

class Orientation(Enum):
    """Layout axis: horizontal (``x``) or vertical (``y``)."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def from_str(cls, text: str) -> Orientation:
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ParseError(f"unknown orientation: {text!r}") from None

    @staticmethod
    def pair() -> XY[Orientation]:
        """``XY(HORIZONTAL, VERTICAL)``, handy for axis-wise iteration."""
        return XY(Orientation.HORIZONTAL, Orientation.VERTICAL)

    def swap(self) -> Orientation:
        if self is Orientation.HORIZONTAL:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL

    def get(self, value: XY[T]) -> T:
        """Return the component of *value* along this axis."""
        if self is Orientation.HORIZONTAL:
            return value.x
        return value.y

    def set(self, value: XY[T], component: T) -> XY[T]:
        """Return *value* with its component along this axis replaced."""
        if self is Orientation.HORIZONTAL:
            return XY(component, value.y)
        return XY(value.x, component)

    def make_vec(self, main_axis: int, second_axis: int) -> XY[int]:
        """Build a vector from components along and across this axis."""
        if self is Orientation.HORIZONTAL:
            return XY(main_axis, second_axis)
        return XY(second_axis, main_axis)

    def stack(self, sizes: Iterable[Vec2Like]) -> XY[int]:
        """
        Bounding box of *sizes* laid out along this axis.

        Lengths are summed along the axis, and the largest one is kept
        across it.
        """
        result: XY[int] = XY.zero()
        for size in sizes:
            size = as_xy(size)
            if self is Orientation.HORIZONTAL:
                result = result.stack_horizontal(size)
            else:
                result = result.stack_vertical(size)
        return result


# ---------------------------------------------------------------------------
# Relative
# ---------------------------------------------------------------------------

class Relative(Enum):
    """Orientation-relative direction."""

    FRONT = "front"
    BACK = "back"

    @classmethod
    def from_str(cls, text: str) -> Relative:
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ParseError(f"unknown relative direction: {text!r}") from None

    def absolute(self, orientation: Orientation) -> Absolute:
        if orientation is Orientation.HORIZONTAL:
            return Absolute.LEFT if self is Relative.FRONT else Absolute.RIGHT
        return Absolute.UP if self is Relative.FRONT else Absolute.DOWN

    def pick(self, pair: tuple[T, T]) -> T:
        """Return the first element for ``FRONT``, the second for ``BACK``."""
        return pair[0] if self is Relative.FRONT else pair[1]

    def swap(self) -> Relative:
        return Relative.BACK if self is Relative.FRONT else Relative.FRONT

    @staticmethod
    def a_to_b(a: int, b: int) -> Relative | None:
        """
        Direction from *a* to *b*.

        ``FRONT`` when ``a < b``, ``BACK`` when ``a > b``, ``None`` when
        they are equal.
        """
        if a < b:
            return Relative.FRONT
        if a > b:
            return Relative.BACK
        return None


# ---------------------------------------------------------------------------
# Absolute
# ---------------------------------------------------------------------------

class Absolute(Enum):
    """Screen direction, or ``NONE`` when no direction applies."""

    LEFT = "left"
    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    NONE = "none"

    @classmethod
    def from_str(cls, text: str) -> Absolute:
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ParseError(f"unknown absolute direction: {text!r}") from None

    def relative(self, orientation: Orientation) -> Relative | None:
        """
        Meaning of this direction along *orientation*.

        ``LEFT``/``UP`` map to ``FRONT`` and ``RIGHT``/``DOWN`` to ``BACK``,
        each only under its own orientation.  Anything else is ``None``.
        """
        if orientation is Orientation.HORIZONTAL:
            if self is Absolute.LEFT:
                return Relative.FRONT
            if self is Absolute.RIGHT:
                return Relative.BACK
        else:
            if self is Absolute.UP:
                return Relative.FRONT
            if self is Absolute.DOWN:
                return Relative.BACK
        return None

    def opposite(self) -> Absolute:
        return _OPPOSITES[self]

    def split(self) -> tuple[Orientation, Relative]:
        """
        Decompose into an orientation and a relative direction.

        Raises
        ------
        ValueError
            For ``Absolute.NONE``, which has no axis.
        """
        if self is Absolute.LEFT:
            return Orientation.HORIZONTAL, Relative.FRONT
        if self is Absolute.RIGHT:
            return Orientation.HORIZONTAL, Relative.BACK
        if self is Absolute.UP:
            return Orientation.VERTICAL, Relative.FRONT
        if self is Absolute.DOWN:
            return Orientation.VERTICAL, Relative.BACK
        raise ValueError("Absolute.NONE cannot be split into an orientation")


_OPPOSITES = {
    Absolute.LEFT: Absolute.RIGHT,
    Absolute.RIGHT: Absolute.LEFT,
    Absolute.UP: Absolute.DOWN,
    Absolute.DOWN: Absolute.UP,
    Absolute.NONE: Absolute.NONE,
}


# ---------------------------------------------------------------------------
# Direction
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Direction:
    """Either an :class:`Absolute` or a :class:`Relative` direction."""

    value: Absolute | Relative

    @classmethod
    def abs_(cls, value: Absolute) -> Direction:
        return cls(value)

    @classmethod
    def rel(cls, value: Relative) -> Direction:
        return cls(value)

    @classmethod
    def from_str(cls, text: str) -> Direction:
        """Parse ``"front"``, ``"Left"``, ``"none"`` and friends."""
        key = text.strip().lower()
        for enum in (Relative, Absolute):
            try:
                return cls(enum(key))
            except ValueError:
                continue
        raise ParseError(f"unknown direction: {text!r}")

    # Shortcuts ------------------------------------------------------------

    @classmethod
    def front(cls) -> Direction:
        return cls(Relative.FRONT)

    @classmethod
    def back(cls) -> Direction:
        return cls(Relative.BACK)

    @classmethod
    def left(cls) -> Direction:
        return cls(Absolute.LEFT)

    @classmethod
    def right(cls) -> Direction:
        return cls(Absolute.RIGHT)

    @classmethod
    def up(cls) -> Direction:
        return cls(Absolute.UP)

    @classmethod
    def down(cls) -> Direction:
        return cls(Absolute.DOWN)

    @classmethod
    def none(cls) -> Direction:
        return cls(Absolute.NONE)

    # Conversions ----------------------------------------------------------

    @property
    def is_absolute(self) -> bool:
        return isinstance(self.value, Absolute)

    def relative(self, orientation: Orientation) -> Relative | None:
        if isinstance(self.value, Relative):
            return self.value
        return self.value.relative(orientation)

    def absolute(self, orientation: Orientation) -> Absolute:
        if isinstance(self.value, Absolute):
            return self.value
        return self.value.absolute(orientation)

    def opposite(self) -> Direction:
        if isinstance(self.value, Relative):
            return Direction(self.value.swap())
        return Direction(self.value.opposite())
