"""Axis-aligned rectangles with inclusive corners."""

from __future__ import annotations

from dataclasses import dataclass

from weft.direction import Absolute, Orientation
from weft.vec import XY, Vec2Like, as_xy


@dataclass(frozen=True)
class Rect:
    """
    A rectangle on the character grid.

    Both corners are inclusive: a rectangle built from size ``(3, 2)``
    at the origin has ``bottom_right == (2, 1)``.
    """

    top_left: XY[int]
    bottom_right: XY[int]

    @classmethod
    def from_size(cls, top_left: Vec2Like, size: Vec2Like) -> Rect:
        top_left = as_xy(top_left)
        return cls(top_left, top_left + as_xy(size).saturating_sub((1, 1)))

    @classmethod
    def from_corners(cls, a: Vec2Like, b: Vec2Like) -> Rect:
        a = as_xy(a)
        b = as_xy(b)
        return cls(a.or_min(b), a.or_max(b))

    @classmethod
    def from_point(cls, point: Vec2Like) -> Rect:
        point = as_xy(point)
        return cls(point, point)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def size(self) -> XY[int]:
        return self.bottom_right - self.top_left + (1, 1)

    def width(self) -> int:
        return self.size().x

    def height(self) -> int:
        return self.size().y

    def surface(self) -> int:
        return self.width() * self.height()

    def left(self) -> int:
        return self.top_left.x

    def right(self) -> int:
        return self.bottom_right.x

    def top(self) -> int:
        return self.top_left.y

    def bottom(self) -> int:
        return self.bottom_right.y

    def top_right(self) -> XY[int]:
        return XY(self.right(), self.top())

    def bottom_left(self) -> XY[int]:
        return XY(self.left(), self.bottom())

    def corners(self) -> tuple[XY[int], XY[int], XY[int], XY[int]]:
        """Top-left, top-right, bottom-left and bottom-right corners."""
        return (self.top_left, self.top_right(), self.bottom_left(), self.bottom_right)

    def side(self, orientation: Orientation) -> tuple[int, int]:
        """Inclusive ``(lo, hi)`` interval covered along *orientation*."""
        return (orientation.get(self.top_left), orientation.get(self.bottom_right))

    def edge(self, side: Absolute) -> int:
        """
        Coordinate of the edge facing *side*.

        Raises
        ------
        ValueError
            For ``Absolute.NONE``.
        """
        if side is Absolute.LEFT:
            return self.left()
        if side is Absolute.RIGHT:
            return self.right()
        if side is Absolute.UP:
            return self.top()
        if side is Absolute.DOWN:
            return self.bottom()
        raise ValueError("a rectangle has no edge for Absolute.NONE")

    def contains(self, point: Vec2Like) -> bool:
        point = as_xy(point)
        return point.fits(self.top_left) and point.fits_in(self.bottom_right)

    def intersects(self, other: Rect) -> bool:
        return all(
            _overlaps(self.side(o), other.side(o))
            for o in (Orientation.HORIZONTAL, Orientation.VERTICAL)
        )

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def offset(self, offset: Vec2Like) -> Rect:
        return Rect(self.top_left + offset, self.bottom_right + offset)

    def __add__(self, offset: Vec2Like) -> Rect:
        return self.offset(offset)

    def expanded_to(self, point: Vec2Like) -> Rect:
        """Smallest rectangle containing both this one and *point*."""
        return Rect(self.top_left.or_min(point), self.bottom_right.or_max(point))


def _overlaps(a: tuple[int, int], b: tuple[int, int]) -> bool:
    return a[0] <= b[1] and b[0] <= a[1]
