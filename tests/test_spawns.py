import pytest

from delve.exceptions import PrerequisiteMissing, RetryBudgetExceeded
from delve.generator import DungeonGenerator
from delve.geometry import Orientation, Vec2
from delve.layout import Corridor, DungeonLayout, DungeonState, Room, SpawnType
from delve.placement import add_room
from delve.rng import RandomSource
from delve.spawns import add_door, add_key, place_player_spawn


def _state(rooms=(), corridors=(), rng=None):
    return DungeonState(DungeonLayout(tuple(rooms), tuple(corridors)), (), rng or RandomSource(1))


def test_player_spawn_fails_without_rooms():
    with pytest.raises(PrerequisiteMissing, match="Could not place player spawn"):
        DungeonGenerator(seed=1).add_step(place_player_spawn).generate()


def test_retryable_player_spawn_still_fails_without_rooms():
    gen = DungeonGenerator(seed=1).add_retryable_step(place_player_spawn, max_retries=10)
    with pytest.raises(RetryBudgetExceeded, match="Could not place player spawn and exceeded maximum retries"):
        gen.generate()


@pytest.mark.parametrize("seed", range(20))
def test_player_spawn_strictly_inside_first_room(seed):
    state = DungeonGenerator(seed=seed).add_step(add_room).add_step(place_player_spawn).generate()
    (spawn,) = state.spawns
    assert spawn.spawn_type is SpawnType.PLAYER
    assert state.rooms[0].is_interior(spawn.position)


def test_player_spawn_uses_first_room(scripted_rng):
    rooms = [Room.at(0, 0, 6, 6), Room.at(40, 40, 6, 6)]
    state = place_player_spawn(_state(rooms=rooms, rng=scripted_rng([4, 1])))
    assert state.spawns[0].position == Vec2(4, 1)


def test_key_fails_without_rooms():
    with pytest.raises(PrerequisiteMissing):
        DungeonGenerator(seed=1).add_step(add_key).generate()


@pytest.mark.parametrize("w,h", [(3, 3), (6, 6), (15, 7)])
def test_key_offset_within_interior(w, h):
    room = Room.at(0, 0, w, h)
    for seed in range(25):
        spawn = add_key(_state(rooms=[room], rng=RandomSource(seed))).spawns[0]
        assert spawn.spawn_type is SpawnType.KEY
        assert 1 <= spawn.position.x <= w - 2
        assert 1 <= spawn.position.y <= h - 2


def test_key_can_land_in_any_room(scripted_rng):
    rooms = [Room.at(0, 0, 6, 6), Room.at(40, 40, 6, 6)]
    state = add_key(_state(rooms=rooms, rng=scripted_rng([1, 2, 3])))
    assert state.spawns[0].position == Vec2(42, 43)


def test_door_fails_without_corridors():
    with pytest.raises(PrerequisiteMissing, match="Failed to place door"):
        add_door(_state(rooms=[Room.at(0, 0, 6, 6)]))


@pytest.mark.parametrize("orientation", list(Orientation))
def test_door_sits_on_corridor_past_its_start(orientation):
    corridor = Corridor(orientation, 7, Vec2(3, 3))
    cells = list(corridor.cells())
    for seed in range(25):
        spawn = add_door(_state(corridors=[corridor], rng=RandomSource(seed))).spawns[0]
        assert spawn.spawn_type is SpawnType.DOOR
        assert spawn.position in cells[1:]


def test_spawns_keep_generation_order():
    state = (
        DungeonGenerator(seed=8)
        .add_step(add_room)
        .add_step(place_player_spawn)
        .add_step(add_key)
        .generate()
    )
    assert [s.spawn_type for s in state.spawns] == [SpawnType.PLAYER, SpawnType.KEY]


def test_spawn_steps_do_not_touch_layout():
    source = _state(rooms=[Room.at(0, 0, 6, 6)], corridors=[Corridor(Orientation.UP, 4, Vec2(2, 5))])
    state = add_door(add_key(place_player_spawn(source)))
    assert state.layout == source.layout
    assert source.spawns == ()
    assert len(state.spawns) == 3
