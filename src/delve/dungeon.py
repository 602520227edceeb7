from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Dict, Optional, Tuple

from .config import GenerationSettings
from .generator import DungeonGenerator
from .layout import DungeonLayout, Spawn, SpawnType
from .placement import add_corridor_then_room, add_room
from .rng import RandomSource
from .spawns import add_door, add_key, place_player_spawn
from .tiles import TileGrid, rasterize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dungeon:
    """Everything the map, movement and gameplay layers consume for one level."""

    seed: Optional[int]
    layout: DungeonLayout
    spawns: Tuple[Spawn, ...]
    tiles: TileGrid = field(hash=False)

    def spawn_of(self, spawn_type: SpawnType) -> Optional[Spawn]:
        """First spawn of the given type, in generation order."""
        return next((s for s in self.spawns if s.spawn_type is spawn_type), None)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable summary; diffable across runs."""
        return {
            "seed": self.seed,
            "rooms": [
                {"x": r.position.x, "y": r.position.y, "width": r.width, "height": r.height}
                for r in self.layout.rooms
            ],
            "corridors": [
                {
                    "x": c.position.x,
                    "y": c.position.y,
                    "orientation": c.orientation.value,
                    "length": c.length,
                }
                for c in self.layout.corridors
            ],
            "spawns": [
                {"type": s.spawn_type.value, "x": s.position.x, "y": s.position.y}
                for s in self.spawns
            ],
            "tiles": {
                "bounds": self.tiles.bounds(),
                "signature": self.tiles.signature(),
            },
        }


def build_standard_generator(settings: GenerationSettings) -> DungeonGenerator:
    """Starting room and player, a chain of corridor-linked rooms, then key and door."""
    gen = DungeonGenerator(seed=settings.seed, max_retries=settings.max_retries)
    gen.add_retryable_step(partial(add_room, settings=settings))
    gen.add_retryable_step(place_player_spawn)
    for _ in range(settings.corridor_rooms):
        gen.add_retryable_step(partial(add_corridor_then_room, settings=settings))
    gen.add_retryable_step(add_key)
    # A door needs a corridor to sit on.
    if settings.corridor_rooms:
        gen.add_retryable_step(add_door)
    return gen


def generate_dungeon(
    settings: Optional[GenerationSettings] = None, seed: Optional[int] = None
) -> Dungeon:
    """Run the standard pipeline and rasterize the result.

    GenerationError propagates unchanged; deciding whether to try another
    seed is left to the caller.
    """
    settings = settings or GenerationSettings()
    effective_seed = seed if seed is not None else settings.seed
    rng = RandomSource(effective_seed)
    logger.info("Generating dungeon seed=%s corridor_rooms=%d", effective_seed, settings.corridor_rooms)

    state = build_standard_generator(settings).generate(rng)
    tiles = rasterize(state.layout)
    return Dungeon(seed=effective_seed, layout=state.layout, spawns=state.spawns, tiles=tiles)


__all__ = ["Dungeon", "build_standard_generator", "generate_dungeon"]
