"""
Two-dimensional values.

:class:`XY` pairs an ``x`` and a ``y`` of the same type.  Integer pairs
(``Vec2``) carry every size and offset in the toolkit, boolean pairs carry
per-axis flags such as "scrolling on this axis", and optional pairs carry
per-axis results.

Sizes are never negative.  Arithmetic that may underflow goes through
:meth:`XY.saturating_sub` or :meth:`XY.checked_sub`.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterable, Iterator, TypeVar, Union

if TYPE_CHECKING:
    from weft.direction import Orientation

T = TypeVar("T")
U = TypeVar("U")

USIZE_MAX: int = sys.maxsize
"""Largest size a view may be offered ("unbounded")."""


# ---------------------------------------------------------------------------
# XY
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class XY(Generic[T]):
    """
    A pair of values, one per axis.

    Integer pairs are partially ordered: ``a < b`` only when ``a`` is
    strictly smaller than ``b`` on *both* axes.  Pairs that are neither
    equal nor dominated on both axes are incomparable, so every ordering
    operator returns ``False`` for them and :meth:`partial_cmp` returns
    ``None``.
    """

    x: T
    y: T

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def both_from(cls, value: T) -> XY[T]:
        """Return a pair with *value* on both axes."""
        return cls(value, value)

    @staticmethod
    def zero() -> XY[int]:
        return XY(0, 0)

    @staticmethod
    def max_value() -> XY[int]:
        return XY(USIZE_MAX, USIZE_MAX)

    # ------------------------------------------------------------------
    # Generic helpers
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[T]:
        yield self.x
        yield self.y

    def pair(self) -> tuple[T, T]:
        return (self.x, self.y)

    def swap(self) -> XY[T]:
        return XY(self.y, self.x)

    def map(self, f: Callable[[T], U]) -> XY[U]:
        return XY(f(self.x), f(self.y))

    def map_x(self, f: Callable[[T], T]) -> XY[T]:
        return XY(f(self.x), self.y)

    def map_y(self, f: Callable[[T], T]) -> XY[T]:
        return XY(self.x, f(self.y))

    def map_if(self, condition: XY[bool], f: Callable[[T], T]) -> XY[T]:
        """Apply *f* only on the axes where *condition* is true."""
        return XY(
            f(self.x) if condition.x else self.x,
            f(self.y) if condition.y else self.y,
        )

    def run_if(self, condition: XY[bool], f: Callable[[T], U]) -> XY[U | None]:
        """Call *f* on the axes where *condition* is true, ``None`` elsewhere."""
        return XY(
            f(self.x) if condition.x else None,
            f(self.y) if condition.y else None,
        )

    def fold(self, f: Callable[[T, T], U]) -> U:
        return f(self.x, self.y)

    def zip(self, *others: XY[Any]) -> XY[tuple]:
        """Pair this value with one or more others, axis by axis."""
        return XY(
            (self.x,) + tuple(o.x for o in others),
            (self.y,) + tuple(o.y for o in others),
        )

    def zip_map(self, other: XY[U] | tuple, f: Callable[[T, U], Any]) -> XY[Any]:
        other = as_xy(other)
        return XY(f(self.x, other.x), f(self.y, other.y))

    def keep(self, mask: XY[bool]) -> XY[T | None]:
        return XY(self.x if mask.x else None, self.y if mask.y else None)

    def get(self, orientation: Orientation) -> T:
        """Return the component selected by *orientation*."""
        return orientation.get(self)

    def with_axis(self, orientation: Orientation, value: T) -> XY[T]:
        """Return a copy with the *orientation* component replaced."""
        return orientation.set(self, value)

    def set_axis_from(self, orientation: Orientation, other: XY[T]) -> XY[T]:
        """Return a copy taking the *orientation* component from *other*."""
        return orientation.set(self, orientation.get(other))

    def keep_x(self) -> XY[int]:
        return XY(self.x, 0)

    def keep_y(self) -> XY[int]:
        return XY(0, self.y)

    def sum(self) -> Any:
        return self.x + self.y

    def product(self) -> Any:
        return self.x * self.y

    # ------------------------------------------------------------------
    # Boolean pairs
    # ------------------------------------------------------------------

    def any(self) -> bool:
        return bool(self.x or self.y)

    def both(self) -> bool:
        return bool(self.x and self.y)

    def and_(self, other: XY[bool]) -> XY[bool]:
        return XY(bool(self.x and other.x), bool(self.y and other.y))

    def or_(self, other: XY[bool]) -> XY[bool]:
        return XY(bool(self.x or other.x), bool(self.y or other.y))

    def select(self, other: XY[U]) -> XY[U | None]:
        """For a boolean pair, keep *other* where this is true."""
        return XY(other.x if self.x else None, other.y if self.y else None)

    def select_or(self, if_true: XY[U] | tuple, if_false: XY[U] | tuple) -> XY[U]:
        """For a boolean pair, pick *if_true* or *if_false* per axis."""
        if_true = as_xy(if_true)
        if_false = as_xy(if_false)
        return XY(
            if_true.x if self.x else if_false.x,
            if_true.y if self.y else if_false.y,
        )

    # ------------------------------------------------------------------
    # Optional pairs
    # ------------------------------------------------------------------

    def both_some(self) -> XY[T] | None:
        """Return ``self`` when both components are set, else ``None``."""
        if self.x is None or self.y is None:
            return None
        return self

    def unwrap_or(self, other: XY[T] | tuple) -> XY[T]:
        other = as_xy(other)
        return XY(
            other.x if self.x is None else self.x,
            other.y if self.y is None else self.y,
        )

    # ------------------------------------------------------------------
    # Integer arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: Vec2Like) -> XY[int]:
        other = as_xy(other)
        return XY(self.x + other.x, self.y + other.y)

    __radd__ = __add__

    def __sub__(self, other: Vec2Like) -> XY[int]:
        other = as_xy(other)
        return XY(self.x - other.x, self.y - other.y)

    def __mul__(self, other: Vec2Like) -> XY[int]:
        other = as_xy(other)
        return XY(self.x * other.x, self.y * other.y)

    __rmul__ = __mul__

    def __floordiv__(self, other: Vec2Like) -> XY[int]:
        other = as_xy(other)
        return XY(self.x // other.x, self.y // other.y)

    def div_up(self, other: Vec2Like) -> XY[int]:
        """Divide, rounding up."""
        other = as_xy(other)
        return XY(-(-self.x // other.x), -(-self.y // other.y))

    def saturating_sub(self, other: Vec2Like) -> XY[int]:
        """Subtract, stopping at zero on each axis."""
        other = as_xy(other)
        return XY(max(self.x - other.x, 0), max(self.y - other.y, 0))

    def saturating_add(self, other: Vec2Like) -> XY[int]:
        """Add a possibly negative offset, staying within ``[0, USIZE_MAX]``."""
        other = as_xy(other)
        return XY(
            min(max(self.x + other.x, 0), USIZE_MAX),
            min(max(self.y + other.y, 0), USIZE_MAX),
        )

    def checked_add(self, other: Vec2Like) -> XY[int] | None:
        other = as_xy(other)
        result = XY(self.x + other.x, self.y + other.y)
        if not (0 <= result.x <= USIZE_MAX and 0 <= result.y <= USIZE_MAX):
            return None
        return result

    def checked_sub(self, other: Vec2Like) -> XY[int] | None:
        other = as_xy(other)
        if other.x > self.x or other.y > self.y:
            return None
        return XY(self.x - other.x, self.y - other.y)

    def or_min(self, other: Vec2Like) -> XY[int]:
        other = as_xy(other)
        return XY(min(self.x, other.x), min(self.y, other.y))

    def or_max(self, other: Vec2Like) -> XY[int]:
        other = as_xy(other)
        return XY(max(self.x, other.x), max(self.y, other.y))

    def stack_vertical(self, other: Vec2Like) -> XY[int]:
        """Bounding box of this size placed above *other*."""
        other = as_xy(other)
        return XY(max(self.x, other.x), self.y + other.y)

    def stack_horizontal(self, other: Vec2Like) -> XY[int]:
        """Bounding box of this size placed left of *other*."""
        other = as_xy(other)
        return XY(self.x + other.x, max(self.y, other.y))

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def fits_in(self, other: Vec2Like) -> bool:
        """``True`` if this size is no larger than *other* on both axes."""
        other = as_xy(other)
        return self.x <= other.x and self.y <= other.y

    def fits(self, other: Vec2Like) -> bool:
        """``True`` if *other* fits in this size."""
        return as_xy(other).fits_in(self)

    def fits_in_rect(self, top_left: Vec2Like, size: Vec2Like) -> bool:
        """``True`` if this point lies in the rectangle ``top_left + size``."""
        top_left = as_xy(top_left)
        return self.fits(top_left) and self.strictly_lt(top_left + size)

    def strictly_lt(self, other: Vec2Like) -> bool:
        other = as_xy(other)
        return self.x < other.x and self.y < other.y

    def strictly_gt(self, other: Vec2Like) -> bool:
        return as_xy(other).strictly_lt(self)

    def partial_cmp(self, other: Vec2Like) -> int | None:
        """Return ``-1``, ``0`` or ``1``, or ``None`` when incomparable."""
        other = as_xy(other)
        if self == other:
            return 0
        if self.strictly_lt(other):
            return -1
        if self.strictly_gt(other):
            return 1
        return None

    def __lt__(self, other: Vec2Like) -> bool:
        return self.partial_cmp(other) == -1

    def __gt__(self, other: Vec2Like) -> bool:
        return self.partial_cmp(other) == 1

    def __le__(self, other: Vec2Like) -> bool:
        return self.partial_cmp(other) in (-1, 0)

    def __ge__(self, other: Vec2Like) -> bool:
        return self.partial_cmp(other) in (0, 1)


Vec2 = XY
"""Integer pair used for sizes and offsets."""

Vec2Like = Union[XY[int], tuple[int, int], int]


def as_xy(value: Any) -> XY[Any]:
    """
    Coerce *value* into an :class:`XY`.

    Accepts an ``XY``, an ``(x, y)`` tuple or list, or a scalar that is
    used on both axes.
    """
    if isinstance(value, XY):
        return value
    if isinstance(value, (tuple, list)):
        x, y = value
        return XY(x, y)
    return XY(value, value)


def max_of(values: Iterable[Vec2Like]) -> XY[int]:
    """Per-axis maximum of *values*, starting from zero."""
    result: XY[int] = XY.zero()
    for value in values:
        result = result.or_max(value)
    return result
