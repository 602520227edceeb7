from __future__ import annotations

import logging

from .exceptions import PrerequisiteMissing
from .geometry import Vec2
from .layout import DungeonState, DungeonStateBuilder, Room, Spawn, SpawnType
from .rng import RandomSource

logger = logging.getLogger(__name__)


def _interior_point(room: Room, rng: RandomSource) -> Vec2:
    """Uniform cell strictly inside the room's walls."""
    x = rng.randrange(1, room.width - 1)
    y = rng.randrange(1, room.height - 1)
    return room.position + Vec2(x, y)


def _with_spawn(state: DungeonState, spawn: Spawn) -> DungeonState:
    logger.debug(
        "Spawn %s at (%d,%d)", spawn.spawn_type.value, spawn.position.x, spawn.position.y
    )
    return DungeonStateBuilder.from_state(state).spawns((*state.spawns, spawn)).build()


def place_player_spawn(state: DungeonState) -> DungeonState:
    """Player start inside the first room of the layout."""
    if not state.rooms:
        raise PrerequisiteMissing("Could not place player spawn")
    position = _interior_point(state.rooms[0], state.rng)
    return _with_spawn(state, Spawn(position, SpawnType.PLAYER))


def add_key(state: DungeonState) -> DungeonState:
    """Key inside a uniformly chosen room."""
    if not state.rooms:
        raise PrerequisiteMissing("Failed to place key")
    room = state.rng.choice(state.rooms)
    return _with_spawn(state, Spawn(_interior_point(room, state.rng), SpawnType.KEY))


def add_door(state: DungeonState) -> DungeonState:
    """Door on a uniformly chosen corridor, past its first cell."""
    if not state.corridors:
        raise PrerequisiteMissing("Failed to place door")
    rng = state.rng
    corridor = rng.choice(state.corridors)
    k = rng.randrange(1, corridor.length)
    position = corridor.position + corridor.orientation.vector * k
    return _with_spawn(state, Spawn(position, SpawnType.DOOR))


__all__ = ["place_player_spawn", "add_key", "add_door"]
