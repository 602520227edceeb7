import itertools
import json

import pytest

from delve import generate_dungeon
from delve.config import GenerationSettings
from delve.dungeon import build_standard_generator
from delve.geometry import collides
from delve.layout import SpawnType
from delve.tiles import TileType


SEEDS = [0, 1, 7, 42, 1234]


@pytest.fixture(params=SEEDS)
def dungeon(request):
    return generate_dungeon(seed=request.param)


def test_standard_pipeline_shape(dungeon):
    assert len(dungeon.layout.rooms) == 9
    assert len(dungeon.layout.corridors) == 8
    assert [s.spawn_type for s in dungeon.spawns] == [SpawnType.PLAYER, SpawnType.KEY, SpawnType.DOOR]


def test_geometry_never_overlaps(dungeon):
    rooms, corridors = dungeon.layout.rooms, dungeon.layout.corridors
    for a, b in itertools.combinations(rooms, 2):
        assert not collides(a, b)
    for a, b in itertools.combinations(corridors, 2):
        assert not collides(a, b)
    for corridor in corridors:
        assert not any(collides(corridor, room) for room in rooms)


def test_each_corridor_leads_into_the_next_room(dungeon):
    rooms, corridors = dungeon.layout.rooms, dungeon.layout.corridors
    for i, corridor in enumerate(corridors):
        assert rooms[i + 1].on_border(corridor.endpoint)
        assert any(r.on_border(corridor.position) for r in rooms[: i + 1])


def test_player_and_key_stand_on_floor(dungeon):
    player = dungeon.spawn_of(SpawnType.PLAYER)
    key = dungeon.spawn_of(SpawnType.KEY)

    assert dungeon.layout.rooms[0].is_interior(player.position)
    assert dungeon.tiles[player.position] is TileType.FLOOR
    assert dungeon.tiles[key.position] is TileType.FLOOR
    assert any(r.is_interior(key.position) for r in dungeon.layout.rooms)


def test_door_sits_on_a_corridor(dungeon):
    door = dungeon.spawn_of(SpawnType.DOOR)
    assert any(door.position in list(c.cells())[1:] for c in dungeon.layout.corridors)


def test_same_seed_same_dungeon():
    a = generate_dungeon(seed=99)
    b = generate_dungeon(seed=99)
    assert a.layout == b.layout
    assert a.spawns == b.spawns
    assert a.tiles.signature() == b.tiles.signature()
    assert a.to_dict() == b.to_dict()


def test_different_seeds_usually_differ():
    signatures = {generate_dungeon(seed=s).tiles.signature() for s in SEEDS}
    assert len(signatures) > 1


def test_seed_argument_beats_settings_seed():
    settings = GenerationSettings(seed=5)
    assert generate_dungeon(settings).seed == 5
    assert generate_dungeon(settings, seed=6).seed == 6
    assert generate_dungeon(settings, seed=5).to_dict() == generate_dungeon(settings).to_dict()


def test_no_corridor_rooms_means_no_door():
    d = generate_dungeon(GenerationSettings(corridor_rooms=0), seed=3)
    assert len(d.layout.rooms) == 1
    assert d.layout.corridors == ()
    assert [s.spawn_type for s in d.spawns] == [SpawnType.PLAYER, SpawnType.KEY]
    assert d.spawn_of(SpawnType.DOOR) is None


def test_corridor_room_count_follows_settings():
    d = generate_dungeon(GenerationSettings(corridor_rooms=3), seed=11)
    assert len(d.layout.rooms) == 4
    assert len(d.layout.corridors) == 3


def test_standard_generator_step_count():
    assert len(build_standard_generator(GenerationSettings()).steps) == 12
    assert len(build_standard_generator(GenerationSettings(corridor_rooms=0)).steps) == 3


def test_to_dict_is_json_serializable():
    d = generate_dungeon(seed=21)
    data = json.loads(json.dumps(d.to_dict()))

    assert data["seed"] == 21
    assert len(data["rooms"]) == 9
    assert len(data["corridors"]) == 8
    assert [s["type"] for s in data["spawns"]] == ["player", "key", "door"]
    assert data["corridors"][0]["orientation"] in {"up", "down", "left", "right"}
    assert data["tiles"]["signature"] == d.tiles.signature()
    assert len(data["tiles"]["bounds"]) == 4


def test_dungeon_is_hashable():
    a = generate_dungeon(seed=17)
    b = generate_dungeon(seed=17)
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
