"""Tile dungeons and the generators that carve them."""

from __future__ import annotations

import operator
import random
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .vecmath import IVec2, Vec2, dist_sq

WALL = "#"
FLOOR = " "

_DIRS4 = ((1, 0), (0, 1), (-1, 0), (0, -1))
_DIRS8 = ((1, 0), (0, 1), (-1, 0), (0, -1), (1, 1), (-1, 1), (1, -1), (-1, -1))

_ROOMS = (
    ("#####", "#   #", "#   #", "#   #", "#####"),
    ("     ", " ### ", " # # ", " ### ", "     "),
    ("#####", " ### ", " # # ", " # # ", "     "),
    ("#   #", "## ##", "## ##", "## ##", "#   #"),
    ("#####", "#####", "     ", "#####", "#####"),
)


@dataclass
class Dungeon:
    """A rectangular grid of tile characters, indexed by ``(x, y)``."""

    width: int
    height: int
    tiles: list[str] = field(repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("dungeon dimensions must be positive")
        if len(self.tiles) != self.width * self.height:
            raise ValueError("tile count does not match dungeon size")

    @classmethod
    def filled(cls, width: int, height: int, tile: str = WALL) -> Dungeon:
        return cls(width, height, [tile] * (width * height))

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> Dungeon:
        rows = list(rows)
        if not rows:
            raise ValueError("a dungeon needs at least one row")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("all rows must have the same length")
        return cls(width, len(rows), [ch for row in rows for ch in row])

    def _index(self, key) -> int:
        x, y = key
        x, y = operator.index(x), operator.index(y)
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"tile ({x}, {y}) is outside the dungeon")
        return y * self.width + x

    def __getitem__(self, key) -> str:
        return self.tiles[self._index(key)]

    def __setitem__(self, key, value: str) -> None:
        if not isinstance(value, str) or len(value) != 1:
            raise ValueError("a tile must be a single character")
        self.tiles[self._index(key)] = value

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _positions(self) -> Iterator[tuple[int, int]]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def _copy(self) -> Dungeon:
        return Dungeon(self.width, self.height, list(self.tiles))

    def rows(self) -> list[str]:
        return [
            "".join(self.tiles[y * self.width:(y + 1) * self.width])
            for y in range(self.height)
        ]

    def render(self) -> str:
        """The dungeon as text, one newline-terminated line per row."""
        return "".join(row + "\n" for row in self.rows())


def _rng(rng: random.Random | None) -> random.Random:
    return random.Random() if rng is None else rng


def _clamp(value: int, lo: int, hi: int) -> int:
    return min(max(value, lo), hi)


def _require_min_size(width: int, height: int) -> None:
    if width < 3 or height < 3:
        raise ValueError("dungeon must be at least 3x3")


def _carve_path(dungeon: Dungeon, start: IVec2, end: IVec2) -> None:
    """Dig a straight-ish corridor from ``start`` towards ``end``."""
    x, y = start.x, start.y
    while dist_sq(IVec2(x, y), end) > 0.0:
        dx, dy = end.x - x, end.y - y
        if abs(dx) > abs(dy):
            x += 1 if dx > 0 else -1
        else:
            y += 1 if dy > 0 else -1
        dungeon[x, y] = FLOOR


def gen_drunk_dungeon(
    width: int,
    height: int,
    num_iter: int,
    max_excavations: int,
    rng: random.Random | None = None,
) -> Dungeon:
    """Drunkard's-walk dungeon whose walkers wrap around the map edges.

    Each start point is then joined to the nearest later start point.
    """
    _require_min_size(width, height)
    rng = _rng(rng)
    dungeon = Dungeon.filled(width, height, WALL)
    walls_left = width * height
    starts: list[IVec2] = []
    for _ in range(num_iter):
        x = rng.randint(1, width - 2)
        y = rng.randint(1, height - 2)
        starts.append(IVec2(x, y))
        excavated = 0
        while excavated < max_excavations and walls_left:
            if dungeon[x, y] == WALL:
                excavated += 1
                walls_left -= 1
                dungeon[x, y] = FLOOR
            dx, dy = _DIRS4[rng.randint(0, 3)]
            x = (x + dx) % width
            y = (y + dy) % height

    for i, start in enumerate(starts[:-1]):
        closest = min(starts[i + 1:], key=lambda end: dist_sq(start, end))
        _carve_path(dungeon, start, closest)
    return dungeon


def gen_clamped_drunk_dungeon(
    width: int, height: int, rng: random.Random | None = None
) -> Dungeon:
    """Four drunkard's walks kept off the border, every pair joined by a corridor."""
    _require_min_size(width, height)
    rng = _rng(rng)
    num_iter = 4
    max_excavations = 200
    dungeon = Dungeon.filled(width, height, WALL)
    walls_left = (width - 2) * (height - 2)
    starts: list[IVec2] = []
    for _ in range(num_iter):
        x = rng.randint(1, width - 2)
        y = rng.randint(1, height - 2)
        starts.append(IVec2(x, y))
        excavated = 0
        while excavated < max_excavations and walls_left:
            if dungeon[x, y] == WALL:
                excavated += 1
                walls_left -= 1
                dungeon[x, y] = FLOOR
            dx, dy = _DIRS4[rng.randint(0, 3)]
            x = _clamp(x + dx, 1, width - 2)
            y = _clamp(y + dy, 1, height - 2)

    for start in starts:
        for end in starts:
            _carve_path(dungeon, start, end)
    return dungeon


def _require_inv_args(width: int, height: int, init_sz: int, max_steps: int) -> None:
    if init_sz < 1:
        raise ValueError("init_sz must be at least 1")
    if max_steps < 1:
        raise ValueError("max_steps must be at least 1")
    if width < 2 * init_sz + 2 or height < 2 * init_sz + 2:
        raise ValueError("dungeon is too small for the initial room")


def _seed_room(dungeon: Dungeon, init_sz: int, rng: random.Random) -> None:
    sx = rng.randint(init_sz + 1, dungeon.width - init_sz - 1)
    sy = rng.randint(init_sz + 1, dungeon.height - init_sz - 1)
    for y in range(sy - init_sz, sy + init_sz):
        for x in range(sx - init_sz, sx + init_sz):
            dungeon[x, y] = FLOOR


def _step(dungeon: Dungeon, x: int, y: int, d: tuple[int, int]) -> tuple[int, int]:
    return (
        _clamp(x + d[0], 1, dungeon.width - 2),
        _clamp(y + d[1], 1, dungeon.height - 2),
    )


def _touches_floor(dungeon: Dungeon, x: int, y: int) -> bool:
    return any(
        dungeon[xx, yy] != WALL
        for yy in range(max(y, 1) - 1, min(dungeon.height - 2, y) + 2)
        for xx in range(max(x, 1) - 1, min(dungeon.width - 2, x) + 2)
    )


def gen_inv_dungeon(
    width: int,
    height: int,
    max_excavations: int,
    init_sz: int,
    max_steps: int,
    rng: random.Random | None = None,
) -> Dungeon:
    """Grow a cave outwards from a seed room by walkers that stop next to floor."""
    _require_inv_args(width, height, init_sz, max_steps)
    rng = _rng(rng)
    dungeon = Dungeon.filled(width, height, WALL)
    _seed_room(dungeon, init_sz, rng)

    for _ in range(max_excavations):
        while True:
            x = rng.randint(1, width - 2)
            y = rng.randint(1, height - 2)
            direction = _DIRS8[rng.randint(0, 7)]
            found = False
            for _ in range(max_steps):
                x, y = _step(dungeon, x, y, direction)
                if _touches_floor(dungeon, x, y):
                    found = True
                    break
            if found:
                dungeon[x, y] = FLOOR
                break
    return dungeon


def _room_cells(room: tuple[str, ...], dungeon: Dungeon, x: int, y: int):
    for yy in range(-2, 3):
        for xx in range(-2, 3):
            tx, ty = x + xx, y + yy
            if dungeon._inside(tx, ty):
                yield tx, ty, room[yy + 2][xx + 2]


def gen_inv_room_dungeon(
    width: int,
    height: int,
    max_excavations: int,
    init_sz: int,
    max_steps: int,
    rng: random.Random | None = None,
) -> Dungeon:
    """Like :func:`gen_inv_dungeon`, but stamps small 5x5 room shapes."""
    _require_inv_args(width, height, init_sz, max_steps)
    rng = _rng(rng)
    dungeon = Dungeon.filled(width, height, WALL)
    _seed_room(dungeon, init_sz, rng)

    for _ in range(max_excavations):
        while True:
            x = rng.randint(1, width - 2)
            y = rng.randint(1, height - 2)
            room = _ROOMS[rng.randint(0, len(_ROOMS) - 1)]
            direction = _DIRS8[rng.randint(0, 7)]
            found = False
            for _ in range(max_steps):
                x, y = _step(dungeon, x, y, direction)
                if any(
                    dungeon[tx, ty] != WALL
                    for tx, ty, cell in _room_cells(room, dungeon, x, y)
                    if cell != WALL
                ):
                    found = True
                    break
            if found:
                for tx, ty, cell in _room_cells(room, dungeon, x, y):
                    if dungeon[tx, ty] == WALL:
                        dungeon[tx, ty] = cell
                break
    return dungeon


def _count_walls(dungeon: Dungeon, x: int, y: int, radius: int) -> int:
    """Walls in the square around (x, y); tiles off the map count as walls."""
    return sum(
        1
        for yy in range(y - radius, y + radius + 1)
        for xx in range(x - radius, x + radius + 1)
        if not dungeon._inside(xx, yy) or dungeon[xx, yy] == WALL
    )


def run_cellular(dungeon: Dungeon, num_iter: int) -> Dungeon:
    """Smooth a dungeon with a cellular automaton; returns a new dungeon.

    Stops early once an iteration changes nothing.
    """
    current = dungeon._copy()
    for _ in range(num_iter):
        next_tiles = list(current.tiles)
        changed = False
        for x, y in current._positions():
            near = _count_walls(current, x, y, 1)
            wide = _count_walls(current, x, y, 2)
            should_be_wall = near >= 5 or wide < 1
            if should_be_wall != (current[x, y] == WALL):
                next_tiles[y * current.width + x] = WALL if should_be_wall else FLOOR
                changed = True
        current = Dungeon(current.width, current.height, next_tiles)
        if not changed:
            break
    return current


def gen_cellular_dungeon(
    width: int,
    height: int,
    fillrate: float,
    num_iter: int,
    rng: random.Random | None = None,
) -> Dungeon:
    """Random noise with wall density ``fillrate``, smoothed by :func:`run_cellular`."""
    rng = _rng(rng)
    tiles = [WALL if rng.random() < fillrate else FLOOR for _ in range(width * height)]
    return run_cellular(Dungeon(width, height, tiles), num_iter)


def find_walkable_tile(dungeon: Dungeon, rng: random.Random | None = None) -> Vec2:
    """Pick a random floor tile; raises ValueError when there is none."""
    rng = _rng(rng)
    floors = [(x, y) for x, y in dungeon._positions() if dungeon[x, y] == FLOOR]
    if not floors:
        raise ValueError("dungeon has no walkable tiles")
    x, y = floors[rng.randint(0, len(floors) - 1)]
    return Vec2(float(x), float(y))


def is_tile_walkable(dungeon: Dungeon, pos) -> bool:
    """True when ``pos`` (tile coordinates) lies inside the map on a floor tile."""
    if pos.x < 0 or pos.x >= dungeon.width or pos.y < 0 or pos.y >= dungeon.height:
        return False
    return dungeon[int(pos.x), int(pos.y)] == FLOOR