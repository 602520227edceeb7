from __future__ import annotations

import hashlib
import logging
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .geometry import Vec2
from .layout import DungeonLayout, Spawn, SpawnType

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class TileType(Enum):
    """Tile classes produced by the rasterizer.

    - VOID: nothing was ever written here
    - FLOOR: walkable open tile
    - WALL: blocks movement
    """

    VOID = 0
    FLOOR = 1
    WALL = 2

    @property
    def is_walkable(self) -> bool:
        return self is TileType.FLOOR

    @property
    def glyph(self) -> str:
        """Single-character visualization for logs and the CLI."""
        return {TileType.VOID: " ", TileType.FLOOR: ".", TileType.WALL: "#"}[self]


SPAWN_GLYPHS = {
    SpawnType.PLAYER: "@",
    SpawnType.KEY: "k",
    SpawnType.DOOR: "+",
}


class TileGrid:
    """
    Sparse tile map over an unbounded integer plane. Any coordinate that was
    never written reads as VOID. Writes are last-write-wins.
    """

    def __init__(self) -> None:
        self._tiles: Dict[Coord, TileType] = {}

    # ---- Access ----------------------------------------------------------
    def get(self, x: int, y: int) -> TileType:
        return self._tiles.get((x, y), TileType.VOID)

    def __getitem__(self, p: Vec2) -> TileType:
        return self.get(p.x, p.y)

    def set(self, x: int, y: int, t: TileType) -> None:
        self._tiles[(x, y)] = t

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tuple[Coord, TileType]]:
        return iter(self._tiles.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TileGrid):
            return NotImplemented
        return self._tiles == other._tiles

    # ---- Query -----------------------------------------------------------
    def is_wall(self, x: int, y: int) -> bool:
        return self.get(x, y) is TileType.WALL

    def is_walkable(self, x: int, y: int) -> bool:
        return self.get(x, y).is_walkable

    def count(self, t: TileType) -> int:
        return sum(1 for v in self._tiles.values() if v is t)

    def bounds(self) -> Optional[Tuple[int, int, int, int]]:
        """(min_x, min_y, max_x, max_y) over written cells, or None when empty."""
        if not self._tiles:
            return None
        xs = [x for x, _ in self._tiles]
        ys = [y for _, y in self._tiles]
        return (min(xs), min(ys), max(xs), max(ys))

    # ---- Export / Compare -----------------------------------------------
    def snapshot(self) -> Tuple[Tuple[int, int, int], ...]:
        """Deterministic, hashable snapshot of written tiles for equality tests."""
        return tuple((x, y, t.value) for (x, y), t in sorted(self._tiles.items()))

    def signature(self) -> str:
        h = hashlib.blake2b(repr(self.snapshot()).encode("utf-8"), digest_size=16)
        return h.hexdigest()

    def to_str_lines(self, spawns: Iterable[Spawn] = ()) -> List[str]:
        """ASCII rendering, highest row first so "up" reads upwards."""
        b = self.bounds()
        if b is None:
            return []
        min_x, min_y, max_x, max_y = b
        markers: Dict[Coord, str] = {}
        # Earlier spawns win a shared cell, so the player marker always shows.
        for s in spawns:
            markers.setdefault(s.position.as_tuple(), SPAWN_GLYPHS[s.spawn_type])
        lines: List[str] = []
        for y in range(max_y, min_y - 1, -1):
            row = []
            for x in range(min_x, max_x + 1):
                row.append(markers.get((x, y)) or self.get(x, y).glyph)
            lines.append("".join(row).rstrip())
        return lines


def rasterize(layout: DungeonLayout) -> TileGrid:
    """Convert a finished layout into a sparse tile grid.

    Rooms are drawn first and corridors second, so a corridor's end cell that
    sits on a room border is reopened as FLOOR where the two meet.
    """
    grid = TileGrid()
    for room in layout.rooms:
        x0, y0 = room.position.x, room.position.y
        for dy in range(room.height):
            for dx in range(room.width):
                on_border = dx == 0 or dy == 0 or dx == room.width - 1 or dy == room.height - 1
                grid.set(x0 + dx, y0 + dy, TileType.WALL if on_border else TileType.FLOOR)

    for corridor in layout.corridors:
        side = corridor.orientation.perpendicular
        for cell in corridor.cells():
            grid.set(cell.x, cell.y, TileType.FLOOR)
            for wall in (cell + side, cell - side):
                grid.set(wall.x, wall.y, TileType.WALL)

    logger.debug(
        "Rasterized %d rooms and %d corridors into %d tiles",
        len(layout.rooms),
        len(layout.corridors),
        len(grid),
    )
    return grid


__all__ = ["TileType", "TileGrid", "rasterize", "SPAWN_GLYPHS"]
