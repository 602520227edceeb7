from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple

from .geometry import CollisionBox, Orientation, Rectangle, Vec2
from .rng import RandomSource


@dataclass(frozen=True)
class Room:
    """Rectangular chamber; ``position`` is the lower-left corner."""

    shape: Rectangle
    position: Vec2

    @classmethod
    def at(cls, x: int, y: int, width: int, height: int) -> "Room":
        return cls(Rectangle(width, height), Vec2(x, y))

    @property
    def width(self) -> int:
        return self.shape.width

    @property
    def height(self) -> int:
        return self.shape.height

    def collision_box(self) -> CollisionBox:
        return CollisionBox(self.position, self.width, self.height)

    def contains(self, p: Vec2) -> bool:
        return (
            self.position.x <= p.x < self.position.x + self.width
            and self.position.y <= p.y < self.position.y + self.height
        )

    def is_interior(self, p: Vec2) -> bool:
        """True for cells inside the room that are not on its border."""
        return (
            self.position.x < p.x < self.position.x + self.width - 1
            and self.position.y < p.y < self.position.y + self.height - 1
        )

    def on_border(self, p: Vec2) -> bool:
        return self.contains(p) and not self.is_interior(p)


@dataclass(frozen=True)
class Corridor:
    """Straight one-cell-wide run of ``length`` cells starting at ``position``."""

    orientation: Orientation
    length: int
    position: Vec2

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError(f"Corridor length must be positive, got {self.length}")

    @property
    def endpoint(self) -> Vec2:
        """The open end: last cell of the run."""
        return self.position + self.orientation.vector * (self.length - 1)

    def cells(self) -> Iterator[Vec2]:
        step = self.orientation.vector
        for k in range(self.length):
            yield self.position + step * k

    def collision_box(self) -> CollisionBox:
        # Both end cells are junctions with a room border; only the cells
        # between them count towards the footprint.
        if self.length <= 2:
            return CollisionBox.empty(self.position)
        step = self.orientation.vector
        return CollisionBox.spanning(self.position + step, self.position + step * (self.length - 2))


@dataclass(frozen=True)
class DungeonLayout:
    rooms: Tuple[Room, ...] = ()
    corridors: Tuple[Corridor, ...] = ()


class SpawnType(Enum):
    PLAYER = "player"
    KEY = "key"
    DOOR = "door"


@dataclass(frozen=True)
class Spawn:
    position: Vec2
    spawn_type: SpawnType


@dataclass(frozen=True)
class DungeonState:
    """One immutable snapshot of a generation run.

    Only ``rng`` is shared between snapshots: every state derived from this one
    holds the very same RandomSource, so randomness consumed by one step is
    visible to all later steps.
    """

    layout: DungeonLayout = field(default_factory=DungeonLayout)
    spawns: Tuple[Spawn, ...] = ()
    rng: RandomSource = field(default_factory=RandomSource, compare=False)

    @classmethod
    def empty(cls, rng: Optional[RandomSource] = None) -> "DungeonState":
        return cls(DungeonLayout(), (), rng if rng is not None else RandomSource())

    @property
    def rooms(self) -> Tuple[Room, ...]:
        return self.layout.rooms

    @property
    def corridors(self) -> Tuple[Corridor, ...]:
        return self.layout.corridors


class DungeonStateBuilder:
    """Derive a new DungeonState from an existing one.

    Replaces rooms, corridors or spawns while keeping the source state's
    RandomSource by reference. The source state is never modified.
    """

    def __init__(self, layout: DungeonLayout, spawns: Tuple[Spawn, ...], rng: RandomSource) -> None:
        self._layout = layout
        self._spawns = spawns
        self._rng = rng

    @classmethod
    def from_state(cls, state: DungeonState) -> "DungeonStateBuilder":
        return cls(state.layout, state.spawns, state.rng)

    def rooms(self, rooms: Iterable[Room]) -> "DungeonStateBuilder":
        self._layout = DungeonLayout(tuple(rooms), self._layout.corridors)
        return self

    def corridors(self, corridors: Iterable[Corridor]) -> "DungeonStateBuilder":
        self._layout = DungeonLayout(self._layout.rooms, tuple(corridors))
        return self

    def spawns(self, spawns: Iterable[Spawn]) -> "DungeonStateBuilder":
        self._spawns = tuple(spawns)
        return self

    def build(self) -> DungeonState:
        return DungeonState(self._layout, self._spawns, self._rng)


__all__ = [
    "Room",
    "Corridor",
    "DungeonLayout",
    "SpawnType",
    "Spawn",
    "DungeonState",
    "DungeonStateBuilder",
]
