"""
Room and corridor placement steps.

Each step samples one candidate from the shared random source, checks it
against all existing geometry and either returns a new state holding the
candidate or raises PlacementCollision. Callers resample by wrapping the step
in a RetryableStep.
"""
from __future__ import annotations

import logging
from typing import Iterable

from .config import DEFAULT_SETTINGS, GenerationSettings
from .exceptions import PlacementCollision
from .geometry import ORIGIN, Collidable, Orientation, Rectangle, Vec2, collides
from .layout import Corridor, DungeonState, DungeonStateBuilder, Room
from .rng import RandomSource

logger = logging.getLogger(__name__)

ORIENTATIONS = (Orientation.UP, Orientation.DOWN, Orientation.LEFT, Orientation.RIGHT)


def _is_clear(candidate: Collidable, state: DungeonState) -> bool:
    others: Iterable[Collidable] = (*state.rooms, *state.corridors)
    return not any(collides(candidate, other) for other in others)


def _end_is_taken(corridor: Corridor, state: DungeonState) -> bool:
    # The far end is left out of the footprint, so it may only land on empty ground.
    end = corridor.endpoint
    if any(room.contains(end) for room in state.rooms):
        return True
    return any(end in other.cells() for other in state.corridors)


def _entry_offset(orientation: Orientation, width: int, height: int, rng: RandomSource) -> Vec2:
    """Cell on the new room's border where a corridor heading ``orientation`` arrives."""
    if orientation is Orientation.DOWN:
        return Vec2(rng.randrange(1, width - 1), height - 1)
    if orientation is Orientation.UP:
        return Vec2(rng.randrange(1, width - 1), 0)
    if orientation is Orientation.LEFT:
        return Vec2(width - 1, rng.randrange(1, height - 1))
    return Vec2(0, rng.randrange(1, height - 1))


def _exit_offset(orientation: Orientation, room: Room, rng: RandomSource) -> Vec2:
    """Cell on an existing room's border where a corridor heading ``orientation`` leaves."""
    w, h = room.width, room.height
    if orientation is Orientation.UP:
        return Vec2(rng.randrange(1, w - 1), h - 1)
    if orientation is Orientation.DOWN:
        return Vec2(rng.randrange(1, w - 1), 0)
    if orientation is Orientation.RIGHT:
        return Vec2(w - 1, rng.randrange(1, h - 1))
    return Vec2(0, rng.randrange(1, h - 1))


def _free_standing_position(state: DungeonState, settings: GenerationSettings) -> Vec2:
    """Position for a room with no corridor to hang off.

    Only the first room uses the literal seed region. Each further unanchored
    room draws from that region widened by one maximal room per room already
    placed, so a run of retryable add_room steps always finds space.
    """
    rng = state.rng
    spread = len(state.rooms) * settings.room_max_size
    lo = settings.seed_region_min - spread
    hi = settings.seed_region_max + spread
    return Vec2(rng.randrange(lo, hi), rng.randrange(lo, hi))


def add_room(state: DungeonState, settings: GenerationSettings = DEFAULT_SETTINGS) -> DungeonState:
    """Place one room, attached to the open end of the latest corridor if any."""
    rng = state.rng
    width = rng.randrange(settings.room_min_size, settings.room_max_size)
    height = rng.randrange(settings.room_min_size, settings.room_max_size)

    if state.corridors:
        corridor = state.corridors[-1]
        offset = _entry_offset(corridor.orientation, width, height, rng)
        position = corridor.endpoint - offset
    else:
        position = _free_standing_position(state, settings)

    room = Room(Rectangle(width, height), position)
    if not _is_clear(room, state):
        raise PlacementCollision("Failed to add room")

    logger.debug("Placed room %dx%d at (%d,%d)", width, height, position.x, position.y)
    return DungeonStateBuilder.from_state(state).rooms((*state.rooms, room)).build()


def add_corridor(state: DungeonState, settings: GenerationSettings = DEFAULT_SETTINGS) -> DungeonState:
    """Run a corridor out of a random room's edge, or from the origin on an empty canvas."""
    rng = state.rng
    orientation = rng.choice(ORIENTATIONS)

    if state.rooms:
        anchor = rng.choice(state.rooms)
        position = anchor.position + _exit_offset(orientation, anchor, rng)
    else:
        position = ORIGIN

    length = rng.randrange(settings.corridor_min_length, settings.corridor_max_length)
    corridor = Corridor(orientation, length, position)
    if not _is_clear(corridor, state) or _end_is_taken(corridor, state):
        raise PlacementCollision("Failed to add corridor")

    logger.debug(
        "Placed corridor %s len=%d at (%d,%d)", orientation.value, length, position.x, position.y
    )
    return DungeonStateBuilder.from_state(state).corridors((*state.corridors, corridor)).build()


def add_corridor_then_room(
    state: DungeonState, settings: GenerationSettings = DEFAULT_SETTINGS
) -> DungeonState:
    """Corridor plus the room at its far end; both succeed or neither is kept."""
    return add_room(add_corridor(state, settings), settings)


__all__ = ["add_room", "add_corridor", "add_corridor_then_room", "ORIENTATIONS"]
