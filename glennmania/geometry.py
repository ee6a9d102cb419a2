"""Plain 2-D vectors and axis-aligned rectangles."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Vector2:
    """A mutable 2-D vector of floats."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x + other.x, self.y + other.y)

    def is_zero(self) -> bool:
        """True when both components are zero."""
        return self.x == 0 and self.y == 0


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def intersection(self, other: Rect) -> Rect | None:
        """The overlapping area of two rectangles, or None if they do not overlap.

        Rectangles that only share an edge do not overlap.
        """
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if left < right and top < bottom:
            return Rect(left, top, right - left, bottom - top)
        return None