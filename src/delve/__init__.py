"""
delve: procedural dungeon floor plans.

Builds non-overlapping rooms joined by straight corridors, places player,
key and door spawns, and rasterizes the result into a sparse tile grid.
"""
from importlib.metadata import PackageNotFoundError, version

from .config import GenerationSettings
from .dungeon import Dungeon, build_standard_generator, generate_dungeon
from .exceptions import (
    ConfigError,
    DelveError,
    GenerationError,
    PlacementCollision,
    PrerequisiteMissing,
    RetryBudgetExceeded,
)
from .generator import DungeonGenerator, RetryableStep
from .geometry import Orientation, Rectangle, Vec2, collides
from .layout import Corridor, DungeonLayout, DungeonState, DungeonStateBuilder, Room, Spawn, SpawnType
from .placement import add_corridor, add_corridor_then_room, add_room
from .rng import RandomSource
from .spawns import add_door, add_key, place_player_spawn
from .tiles import TileGrid, TileType, rasterize

try:
    __version__ = version("delve")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "ConfigError",
    "Corridor",
    "DelveError",
    "Dungeon",
    "DungeonGenerator",
    "DungeonLayout",
    "DungeonState",
    "DungeonStateBuilder",
    "GenerationError",
    "GenerationSettings",
    "Orientation",
    "PlacementCollision",
    "PrerequisiteMissing",
    "RandomSource",
    "Rectangle",
    "RetryBudgetExceeded",
    "RetryableStep",
    "Room",
    "Spawn",
    "SpawnType",
    "TileGrid",
    "TileType",
    "Vec2",
    "add_corridor",
    "add_corridor_then_room",
    "add_door",
    "add_key",
    "add_room",
    "build_standard_generator",
    "collides",
    "generate_dungeon",
    "place_player_spawn",
    "rasterize",
]
