"""Per-axis cache of the last size negotiation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from weft.vec import XY


@dataclass(frozen=True)
class SizeCache:
    """
    Remembered size along one axis.

    Attributes
    ----------
    value:
        Size returned last time.
    constrained:
        ``True`` if that size hit the request, so a larger request could
        change the answer.
    extra:
        Additional per-axis state kept by the caller.
    """

    value: int
    constrained: bool
    extra: Any = None

    @classmethod
    def build(cls, size: XY[int], req: XY[int], extra: XY[Any] | None = None) -> XY[SizeCache]:
        """Cache *size*, computed for request *req*, on both axes."""
        if extra is None:
            extra = XY(None, None)
        return XY(
            cls(size.x, size.x >= req.x, extra.x),
            cls(size.y, size.y >= req.y, extra.y),
        )

    def accept(self, request: int) -> bool:
        """Whether this cached value is still valid for *request*."""
        if request < self.value:
            return False
        if request == self.value:
            return True
        return not self.constrained
