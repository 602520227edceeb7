"""
Shape primitives and the overlap predicate used during placement.

Coordinates are integer grid cells with x growing to the right and y growing
up. Collision boxes are inclusive on both ends, so shapes that merely touch
along an edge are reported as colliding.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Tuple


@dataclass(frozen=True)
class Vec2:
    x: int
    y: int

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, k: int) -> "Vec2":
        return Vec2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


ORIGIN = Vec2(0, 0)


class Orientation(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def vector(self) -> Vec2:
        return _VECTORS[self]

    @property
    def perpendicular(self) -> Vec2:
        """Unit vector rotated a quarter turn; flanking walls sit at +/- this."""
        v = self.vector
        return Vec2(-v.y, v.x)


_VECTORS = {
    Orientation.RIGHT: Vec2(1, 0),
    Orientation.LEFT: Vec2(-1, 0),
    Orientation.UP: Vec2(0, 1),
    Orientation.DOWN: Vec2(0, -1),
}


@dataclass(frozen=True)
class Rectangle:
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Rectangle sides must be positive, got {self.width}x{self.height}")


@dataclass(frozen=True)
class CollisionBox:
    """Axis-aligned box covering cells [x, x+width-1] x [y, y+height-1]."""

    position: Vec2
    width: int
    height: int

    @classmethod
    def spanning(cls, a: Vec2, b: Vec2) -> "CollisionBox":
        """Smallest box containing both cells."""
        lo = Vec2(min(a.x, b.x), min(a.y, b.y))
        return cls(lo, abs(a.x - b.x) + 1, abs(a.y - b.y) + 1)

    @classmethod
    def empty(cls, at: Vec2) -> "CollisionBox":
        return cls(at, 0, 0)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def x_interval(self) -> Tuple[int, int]:
        return (self.position.x, self.position.x + self.width - 1)

    @property
    def y_interval(self) -> Tuple[int, int]:
        return (self.position.y, self.position.y + self.height - 1)


class Collidable(Protocol):
    def collision_box(self) -> CollisionBox:
        ...


def intervals_overlap(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    a0, a1 = a
    b0, b1 = b
    return (
        a0 <= b0 <= a1
        or b0 <= a0 <= b1
        or (a0 <= b0 and b1 <= a1)
        or (b0 <= a0 and a1 <= b1)
    )


def boxes_collide(a: CollisionBox, b: CollisionBox) -> bool:
    # A zero-size footprint occupies no cells.
    if a.is_empty or b.is_empty:
        return False
    return intervals_overlap(a.x_interval, b.x_interval) and intervals_overlap(a.y_interval, b.y_interval)


def collides(a: Collidable, b: Collidable) -> bool:
    """True when the collision boxes of two shapes share at least one cell."""
    return boxes_collide(a.collision_box(), b.collision_box())


__all__ = [
    "Vec2",
    "ORIGIN",
    "Orientation",
    "Rectangle",
    "CollisionBox",
    "Collidable",
    "intervals_overlap",
    "boxes_collide",
    "collides",
]
