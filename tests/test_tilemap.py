import pytest

from bspmap.mapgen import FLOOR, WALL, MapConfig, MapConfigError, Point, Size, TileMap, render_rows
from bspmap.mapgen.checks import analyze, reachable_floor
from bspmap.mapgen.geometry import rect

from map_test_utils import bfs_cells


def _example():
    return TileMap(seed=42, size=(20, 20), min_room_size=(6, 6), max_room_size=(10, 10))


# ---------------- Validation -------------------------------------------------


@pytest.mark.parametrize(
    "kwargs,field",
    [
        (dict(size=(10, 10)), "size"),
        (dict(size=(20, 19)), "size"),
        (dict(min_room_size=(8, 8), max_room_size=(6, 6)), "min_room"),
        (dict(min_room_size=(6, 9), max_room_size=(10, 9)), "min_room"),
        (dict(min_room_size=(5, 6)), "min_room"),
        (dict(size=(30, 30), max_room_size=(30, 10)), "max_room"),
        (dict(size=(30, 30), max_room_size=(10, 31)), "max_room"),
        (dict(seed=2**32), "seed"),
    ],
)
def test_invalid_parameters_rejected(kwargs, field):
    with pytest.raises(MapConfigError) as exc:
        TileMap(**kwargs)
    assert exc.value.field == field
    assert exc.value.reason


def test_config_object_validation_messages():
    with pytest.raises(MapConfigError, match="at least 20x20"):
        MapConfig(width=10, height=10).validate()
    with pytest.raises(MapConfigError, match="less than map width"):
        MapConfig(width=20, height=40, max_room_width=20).validate()


# ---------------- Determinism ------------------------------------------------


SEED_42_20X20 = [
    "11111111111111111111",
    "11111111000000000001",
    "11111111000000000001",
    "10001111000000000001",
    "10001111111111111011",
    "10001111111111111011",
    "10001111111111111011",
    "11011111111111111011",
    "11011111111111100001",
    "11000000000000000001",
    "11011111110111100001",
    "10001111110111111011",
    "10001111110111111011",
    "10001111110111111011",
    "10001111100011100001",
    "10001111100000000001",
    "11111111100000000001",
    "11111111100011100001",
    "11111111111111100001",
    "11111111111111111111",
]


def test_example_scenario_render_is_fixed():
    m = _example()
    assert m.rows() == SEED_42_20X20
    assert m.render() == "\n".join(SEED_42_20X20)


def test_example_scenario_geometry_is_fixed():
    m = _example()
    assert sorted(m.rooms) == sorted([
        rect(1, 3, 3, 4),
        rect(1, 11, 3, 5),
        rect(8, 1, 11, 3),
        rect(15, 8, 4, 3),
        rect(9, 14, 3, 4),
        rect(15, 14, 4, 5),
    ])
    assert sorted(m.corridors) == sorted([
        rect(2, 4, 1, 8),
        rect(10, 15, 7, 1),
        rect(17, 15, 1, 1),
        rect(11, 9, 7, 1),
        rect(10, 9, 1, 6),
        rect(17, 2, 1, 14),
        rect(11, 16, 7, 1),
        rect(2, 10, 1, 4),
        rect(2, 9, 14, 1),
    ])
    assert m.metrics["nodes"] == 11


def test_example_scenario_is_reproducible():
    a = _example()
    b = _example()
    assert dict(a.tiles) == dict(b.tiles)
    assert a.rooms == b.rooms and a.corridors == b.corridors


# ---------------- Caller config is left alone ---------------------------------


def test_failed_construction_leaves_config_untouched():
    cfg = MapConfig(width=40, height=40, seed=1)
    with pytest.raises(MapConfigError):
        TileMap(cfg, size=(10, 10))
    assert cfg == MapConfig(width=40, height=40, seed=1)


def test_keyword_overrides_apply_to_a_copy():
    cfg = MapConfig(width=40, height=40, seed=1)
    m = TileMap(cfg, seed=2, size=(30, 24))
    assert (cfg.seed, cfg.width, cfg.height) == (1, 40, 40)
    assert (m.seed, m.width, m.height) == (2, 30, 24)
    assert m.config is not cfg


def test_seedless_config_stays_seedless():
    cfg = MapConfig()
    first = TileMap(cfg)
    assert cfg.seed is None
    assert first.config.seed == first.seed
    seeds = {TileMap(cfg).seed for _ in range(5)}
    assert cfg.seed is None
    assert len(seeds) > 1


def test_config_and_keyword_construction_agree():
    a = TileMap(MapConfig(width=48, height=32, seed=7))
    b = TileMap(seed=7, size=(48, 32), min_room_size=(6, 6), max_room_size=(10, 10))
    assert a.render() == b.render()


def test_different_seeds_differ():
    renders = {TileMap(seed=s, size=(40, 40)).render() for s in range(6)}
    assert len(renders) > 1


def test_random_seed_is_recorded():
    m = TileMap(size=(30, 30))
    assert 0 <= m.seed < 2**32
    assert TileMap(seed=m.seed, size=(30, 30)).render() == m.render()


# ---------------- Structure --------------------------------------------------


@pytest.mark.parametrize("seed", [0, 1, 42, 4242, 2**32 - 1])
@pytest.mark.parametrize("size", [(20, 20), (40, 40), (64, 24)])
def test_coverage_border_and_connectivity(seed, size):
    m = TileMap(seed=seed, size=size)
    report = analyze(m)
    assert report["unpainted"] == []
    assert report["border_breaches"] == []
    assert report["unreachable_rooms"] == []
    assert len(m.tiles) == size[0] * size[1]


def test_every_floor_tile_reachable():
    m = TileMap(seed=99, size=(60, 45))
    floor = [p for p, t in m.tiles.items() if t is FLOOR]
    assert floor
    assert reachable_floor(m, m.rooms[0].position) == set(floor)


def test_rooms_inside_map_and_off_border():
    m = TileMap(seed=5, size=(50, 50))
    for room in m.rooms:
        assert room.x >= 1 and room.y >= 1
        assert room.x2 <= m.width - 1 and room.y2 <= m.height - 1
        assert all(m.tiles[c] is FLOOR for c in room.cells())


def test_corridor_cells_are_floor():
    m = TileMap(seed=123, size=(40, 40))
    assert m.corridors
    for seg in m.corridors:
        assert all(m.tiles[c] is FLOOR for c in seg.cells())


def test_floor_is_surrounded_by_defined_tiles():
    m = TileMap(seed=8, size=(40, 30))
    for (x, y), tile in m.tiles.items():
        if tile is FLOOR:
            for dx in (-1, 0, 1):
                for dy in (-1, 0, 1):
                    assert Point(x + dx, y + dy) in m.tiles


def test_metrics_consistency():
    m = TileMap(seed=31337, size=(70, 50))
    mt = m.metrics
    assert mt["tiles_floor"] + mt["tiles_wall"] == 70 * 50
    assert mt["rooms"] == mt["leaves"] == len(m.rooms)
    assert mt["nodes"] == 2 * mt["leaves"] - 1
    assert mt["corridor_segments"] == len(m.corridors)
    assert mt["tree_depth"] >= 2


# ---------------- Read access & rendering ------------------------------------


def test_tiles_mapping_is_read_only():
    m = _example()
    with pytest.raises(TypeError):
        m.tiles[Point(0, 0)] = FLOOR


def test_size_and_bounds_exposed():
    m = _example()
    assert m.size == Size(20, 20)
    assert m.min_room_size == Size(6, 6)
    assert m.max_room_size == Size(10, 10)


def test_render_layout():
    m = TileMap(seed=3, size=(33, 21))
    rows = m.rows()
    assert len(rows) == 21
    assert all(len(r) == 33 for r in rows)
    assert set("".join(rows)) <= {"0", "1"}
    assert rows[0] == "1" * 33 and rows[-1] == "1" * 33
    assert m.render() == "\n".join(rows)
    assert str(m) == m.render()
    for (x, y), tile in m.tiles.items():
        assert rows[y][x] == tile.value


def test_render_rows_marks_unpainted():
    tiles = {Point(0, 0): WALL, Point(1, 0): FLOOR}
    assert render_rows(tiles, Size(3, 2)) == ["10x", "xxx"]


def test_soft_connectivity_of_room_pairs():
    m = TileMap(seed=2718, size=(80, 60))
    floor = {tuple(p) for p, t in m.tiles.items() if t is FLOOR}
    start = tuple(m.rooms[0].position)
    reach = bfs_cells(floor, start)
    for room in m.rooms:
        assert tuple(room.position) in reach
