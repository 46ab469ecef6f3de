"""Grid A* search and a hierarchical portal graph built on top of it."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from itertools import combinations
from typing import Iterator

from .dungeon import WALL, Dungeon
from .vecmath import IVec2, sqr

_NO_DISTANCE = 0xFFFFFFFF


@dataclass
class PortalConnection:
    """A link from one portal to another, with the shortest walk between them."""

    conn_idx: int
    score: float


@dataclass
class PathPortal:
    """A run of walkable cells crossing the border of two neighbouring super tiles."""

    start_x: int
    start_y: int
    end_x: int
    end_y: int
    conns: list[PortalConnection] = field(default_factory=list)


@dataclass
class DungeonPortals:
    """All portals of a dungeon and, per super tile, the indices of its portals."""

    tile_split: int
    portals: list[PathPortal]
    tile_portals_indices: list[list[int]]


def heuristic(lhs: IVec2, rhs: IVec2) -> float:
    """Straight-line distance between two grid cells."""
    return math.sqrt(sqr(float(lhs.x - rhs.x)) + sqr(float(lhs.y - rhs.y)))


def _reconstruct_path(prev: dict[IVec2, IVec2], goal: IVec2) -> list[IVec2]:
    path = [goal]
    current = goal
    while current in prev:
        current = prev[current]
        path.append(current)
    path.reverse()
    return path


def find_path_a_star(
    dungeon: Dungeon,
    start: IVec2,
    goal: IVec2,
    lim_min: IVec2 | None = None,
    lim_max: IVec2 | None = None,
) -> list[IVec2]:
    """Shortest 4-connected path from ``start`` to ``goal``, both ends included.

    Only cells with ``lim_min <= cell < lim_max`` are explored; by default the
    whole dungeon. Returns an empty list when there is no path.
    """
    if lim_min is None:
        lim_min = IVec2(0, 0)
    if lim_max is None:
        lim_max = IVec2(dungeon.width, dungeon.height)
    if not dungeon._inside(start.x, start.y):
        return []

    g: dict[IVec2, float] = {start: 0.0}
    f: dict[IVec2, float] = {start: heuristic(start, goal)}
    prev: dict[IVec2, IVec2] = {}
    open_list = [start]
    closed: set[IVec2] = set()

    while open_list:
        best_idx, current = min(
            enumerate(open_list), key=lambda item: f.get(item[1], math.inf)
        )
        if current == goal:
            return _reconstruct_path(prev, goal)
        del open_list[best_idx]
        if current in closed:
            continue
        closed.add(current)

        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            neighbour = IVec2(current.x + dx, current.y + dy)
            if not (
                lim_min.x <= neighbour.x < lim_max.x
                and lim_min.y <= neighbour.y < lim_max.y
            ):
                continue
            if not dungeon._inside(neighbour.x, neighbour.y):
                continue
            if dungeon[neighbour.x, neighbour.y] == WALL:
                continue
            score = g[current] + 1.0
            if score < g.get(neighbour, math.inf):
                prev[neighbour] = current
                g[neighbour] = score
                f[neighbour] = score + heuristic(neighbour, goal)
            if neighbour not in open_list:
                open_list.append(neighbour)
    return []


def _border_portals(
    dungeon: Dungeon,
    tile_x: int,
    tile_y: int,
    split: int,
    direction: tuple[int, int],
    offset: tuple[int, int],
) -> Iterator[PathPortal]:
    """Portals along one border of a super tile, towards the tile at ``offset``."""
    dx, dy = direction
    ox, oy = offset

    def make(span_from: int, span_to: int) -> PathPortal:
        return PathPortal(
            tile_x * split + span_from * dx + ox,
            tile_y * split + span_from * dy + oy,
            tile_x * split + span_to * dx,
            tile_y * split + span_to * dy,
        )

    span_from: int | None = None
    span_to = 0
    for i in range(split):
        x = tile_x * split + i * dx
        y = tile_y * split + i * dy
        if dungeon[x, y] != WALL and dungeon[x + ox, y + oy] != WALL:
            if span_from is None:
                span_from = i
            span_to = i
        elif span_from is not None:
            yield make(span_from, span_to)
            span_from = None
    if span_from is not None:
        yield make(span_from, span_to)


def _portal_cells(portal: PathPortal, lim_min: IVec2, lim_max: IVec2) -> Iterator[IVec2]:
    for y in range(max(portal.start_y, lim_min.y), min(portal.end_y, lim_max.y - 1) + 1):
        for x in range(max(portal.start_x, lim_min.x), min(portal.end_x, lim_max.x - 1) + 1):
            yield IVec2(x, y)


def _portal_distance(
    dungeon: Dungeon,
    first: PathPortal,
    second: PathPortal,
    lim_min: IVec2,
    lim_max: IVec2,
) -> float | None:
    """Shortest path length between two portals inside a tile, or None if unreachable."""
    targets = list(_portal_cells(second, lim_min, lim_max))
    min_dist = _NO_DISTANCE
    for source in _portal_cells(first, lim_min, lim_max):
        for target in targets:
            path = find_path_a_star(dungeon, source, target, lim_min, lim_max)
            if not path and source != target:
                return None
            min_dist = min(min_dist, len(path))
    return float(min_dist)


def prebuild_map(dungeon: Dungeon, split_tiles: int = 10) -> DungeonPortals:
    """Split the dungeon into square super tiles and link their border portals."""
    if split_tiles < 1:
        raise ValueError("split_tiles must be at least 1")
    split = split_tiles
    cols = dungeon.width // split
    rows = dungeon.height // split

    portals: list[PathPortal] = []
    tile_indices: list[list[int]] = []

    def push(own: list[int], neighbour: list[int], new_portals: Iterator[PathPortal]) -> None:
        for portal in new_portals:
            idx = len(portals)
            portals.append(portal)
            own.append(idx)
            neighbour.append(idx)

    for ty in range(rows):
        for tx in range(cols):
            own: list[int] = []
            tile_indices.append(own)
            if ty > 0:
                push(
                    own,
                    tile_indices[(ty - 1) * cols + tx],
                    _border_portals(dungeon, tx, ty, split, (1, 0), (0, -1)),
                )
            if tx > 0:
                push(
                    own,
                    tile_indices[ty * cols + tx - 1],
                    _border_portals(dungeon, tx, ty, split, (0, 1), (-1, 0)),
                )

    for tidx, indices in enumerate(tile_indices):
        x, y = tidx % cols, tidx // cols
        lim_min = IVec2(x * split, y * split)
        lim_max = IVec2((x + 1) * split, (y + 1) * split)
        for first_idx, second_idx in combinations(indices, 2):
            first, second = portals[first_idx], portals[second_idx]
            score = _portal_distance(dungeon, first, second, lim_min, lim_max)
            if score is None:
                continue
            first.conns.append(PortalConnection(second_idx, score))
            second.conns.append(PortalConnection(first_idx, score))

    return DungeonPortals(split, portals, tile_indices)