"""
Geometry - Points and Rectangles
================================
Plain immutable geometry values shared by the buffer, text and driver
layers. Rectangles are half open: (x0, y0) is inside, (x1, y1) is not.
"""

from collections import namedtuple


class Point(namedtuple("Point", ("x", "y"))):
    """Integer pixel coordinate or offset."""

    __slots__ = ()

    def sub(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)


ZP = Point(0, 0)


class Rect(namedtuple("Rect", ("x0", "y0", "x1", "y1"))):
    """
    Axis aligned rectangle.

    Attributes:
        x0, y0: Top-left corner (inclusive)
        x1, y1: Bottom-right corner (exclusive)
    """

    __slots__ = ()

    @classmethod
    def of_size(cls, width: int, height: int) -> "Rect":
        return cls(0, 0, width, height)

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def min(self) -> Point:
        return Point(self.x0, self.y0)

    @property
    def empty(self) -> bool:
        return self.x0 >= self.x1 or self.y0 >= self.y1

    def intersect(self, other: "Rect") -> "Rect":
        """Largest rectangle inside both; an empty Rect(0,0,0,0) if none."""
        r = Rect(max(self.x0, other.x0), max(self.y0, other.y0),
                 min(self.x1, other.x1), min(self.y1, other.y1))
        if r.empty:
            return Rect(0, 0, 0, 0)
        return r
