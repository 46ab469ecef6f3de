import pytest

from steerdungeon.dungeon import FLOOR, WALL, Dungeon
from steerdungeon.pathfinder import find_path_a_star, heuristic, prebuild_map
from steerdungeon.vecmath import IVec2


def _open(width, height):
    return Dungeon.filled(width, height, FLOOR)


def _adjacent(a, b):
    return abs(a.x - b.x) + abs(a.y - b.y) == 1


def test_heuristic_is_euclidean():
    assert heuristic(IVec2(0, 0), IVec2(3, 4)) == pytest.approx(5.0)
    assert heuristic(IVec2(2, 2), IVec2(2, 2)) == 0.0


def test_heuristic_is_symmetric():
    a, b = IVec2(1, 7), IVec2(-4, 2)
    assert heuristic(a, b) == heuristic(b, a)


def test_path_in_open_grid_is_shortest_and_connected():
    dungeon = _open(8, 8)
    start, goal = IVec2(1, 1), IVec2(6, 4)
    path = find_path_a_star(dungeon, start, goal)
    assert path[0] == start
    assert path[-1] == goal
    assert len(path) == abs(goal.x - start.x) + abs(goal.y - start.y) + 1
    assert all(_adjacent(a, b) for a, b in zip(path, path[1:]))


def test_path_to_self_is_single_cell():
    dungeon = _open(5, 5)
    assert find_path_a_star(dungeon, IVec2(2, 2), IVec2(2, 2)) == [IVec2(2, 2)]


def test_start_outside_dungeon_gives_empty_path():
    dungeon = _open(5, 5)
    assert find_path_a_star(dungeon, IVec2(-1, 0), IVec2(2, 2)) == []
    assert find_path_a_star(dungeon, IVec2(5, 0), IVec2(2, 2)) == []


def test_path_goes_around_walls():
    dungeon = Dungeon.from_rows([
        "     ",
        " ### ",
        " #   ",
        " ####",
        "     ",
    ])
    start, goal = IVec2(0, 4), IVec2(2, 2)
    path = find_path_a_star(dungeon, start, goal)
    assert path[0] == start and path[-1] == goal
    assert all(dungeon[p.x, p.y] != WALL for p in path)
    assert all(_adjacent(a, b) for a, b in zip(path, path[1:]))


def test_blocked_goal_gives_empty_path():
    dungeon = Dungeon.from_rows([
        "  #  ",
        "  #  ",
        "  #  ",
    ])
    assert find_path_a_star(dungeon, IVec2(0, 0), IVec2(4, 2)) == []


def test_limits_restrict_search():
    dungeon = _open(10, 10)
    path = find_path_a_star(dungeon, IVec2(0, 0), IVec2(3, 3), IVec2(0, 0), IVec2(4, 4))
    assert path[-1] == IVec2(3, 3)
    assert all(0 <= p.x < 4 and 0 <= p.y < 4 for p in path)
    assert find_path_a_star(dungeon, IVec2(0, 0), IVec2(6, 6), IVec2(0, 0), IVec2(4, 4)) == []


def test_prebuild_rejects_bad_split():
    with pytest.raises(ValueError):
        prebuild_map(_open(10, 10), 0)


def test_prebuild_open_map_structure():
    split = 10
    dp = prebuild_map(_open(2 * split, 2 * split), split)
    assert dp.tile_split == split
    assert len(dp.tile_portals_indices) == 4
    # every portal belongs to exactly two super tiles
    for idx in range(len(dp.portals)):
        owners = [t for t in dp.tile_portals_indices if idx in t]
        assert len(owners) == 2
    # every portal crosses a super tile boundary
    for portal in dp.portals:
        crosses_x = portal.start_x // split != portal.end_x // split
        crosses_y = portal.start_y // split != portal.end_y // split
        assert crosses_x != crosses_y


def test_prebuild_connections_are_symmetric():
    dp = prebuild_map(_open(30, 20), 10)
    assert dp.portals
    for idx, portal in enumerate(dp.portals):
        assert portal.conns
        for conn in portal.conns:
            back = [c for c in dp.portals[conn.conn_idx].conns if c.conn_idx == idx]
            assert [c.score for c in back] == [conn.score]
            assert conn.score >= 1.0


def test_prebuild_overlapping_portals_score_one():
    dp = prebuild_map(_open(20, 20), 10)
    first, second = dp.tile_portals_indices[0]
    conns = dp.portals[first].conns
    assert [(c.conn_idx, c.score) for c in conns if c.conn_idx == second] == [(second, 1.0)]


def test_prebuild_straight_corridor_score_across_tile():
    split = 10
    dp = prebuild_map(_open(3 * split, split), split)
    first, second = dp.tile_portals_indices[1]
    scores = [c.score for c in dp.portals[first].conns if c.conn_idx == second]
    assert scores == [float(split)]


def test_prebuild_wall_splits_tile():
    split = 10
    rows = ["".join(WALL if x == 15 else FLOOR for x in range(3 * split)) for _ in range(split)]
    dp = prebuild_map(Dungeon.from_rows(rows), split)
    first, second = dp.tile_portals_indices[1]
    assert dp.portals[first].conns == []
    assert dp.portals[second].conns == []


def test_prebuild_wall_border_has_no_portal():
    split = 10
    rows = ["".join(WALL if x == split else FLOOR for x in range(2 * split)) for _ in range(split)]
    dp = prebuild_map(Dungeon.from_rows(rows), split)
    assert dp.portals == []
    assert dp.tile_portals_indices == [[], []]