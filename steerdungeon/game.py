"""The top-down arena: a player, steering monsters, a spawner and a camera."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterable, Iterator

from .dungeon import Dungeon, find_walkable_tile
from .objects import (
    BLUE,
    GREEN,
    RED,
    WHITE,
    Entity,
    MonsterSpawner,
    create_monster,
    create_player,
)
from .pathfinder import DungeonPortals, prebuild_map
from .steering import (
    SteerType,
    create_evader,
    create_fleer,
    create_pursuer,
    create_seeker,
    create_steer_beh,
    update_steering,
)
from .vecmath import Vec2, normalize

TILE_SIZE = 64.0

_CAMERA_LERP = 0.1
_ARENA_PLAYER_SPEED = 150.0
_DUNGEON_PLAYER_SPEED = 350.0
_PLAYER_TEXTURE = "swordsman_tex"
_MONSTER_TEXTURE = "minotaur_tex"
_ANGLE_STEPS = 1 << 16

_SPAWN_COLORS = {
    SteerType.SEEKER: WHITE,
    SteerType.PURSUER: RED,
    SteerType.EVADER: BLUE,
    SteerType.FLEER: GREEN,
}
_SPAWN_DISTANCES = {
    SteerType.SEEKER: 800.0,
    SteerType.PURSUER: 800.0,
    SteerType.EVADER: 300.0,
    SteerType.FLEER: 300.0,
}

_DIRECTIONS = {
    "left": Vec2(-1.0, 0.0),
    "right": Vec2(1.0, 0.0),
    "up": Vec2(0.0, -1.0),
    "down": Vec2(0.0, 1.0),
}


@dataclass
class Camera:
    """A 2D camera that eases towards what it follows."""

    target: Vec2 = Vec2()
    offset: Vec2 = Vec2()
    rotation: float = 0.0
    zoom: float = 1.0

    def follow(self, target: Vec2) -> None:
        """Move a tenth of the way from the current target to ``target``."""
        self.target = self.target + (target - self.target) * _CAMERA_LERP


class Game:
    """Game state and its per-frame update.

    Without a dungeon the game is an open arena with four starting monsters
    and a spawner; with one, the player starts on a random floor tile and the
    dungeon's portal graph is built.
    """

    def __init__(self, dungeon: Dungeon | None = None, rng: random.Random | None = None):
        self.rng = random.Random() if rng is None else rng
        self.camera = Camera()
        self.entities: list[Entity] = []
        self.spawners: list[MonsterSpawner] = []
        self.dungeon = dungeon
        self.portals: DungeonPortals | None = None
        if dungeon is None:
            self._init_arena()
        else:
            self._init_dungeon(dungeon)

    def _init_arena(self) -> None:
        starts = (
            (create_seeker, Vec2(400.0, 400.0), WHITE),
            (create_pursuer, Vec2(-400.0, 400.0), RED),
            (create_evader, Vec2(-400.0, -400.0), BLUE),
            (create_fleer, Vec2(400.0, -400.0), GREEN),
        )
        for factory, pos, color in starts:
            self.entities.append(factory(create_monster(pos, color, _MONSTER_TEXTURE)))
        self.entities.append(
            create_player(Vec2(0.0, 0.0), _PLAYER_TEXTURE, move_speed=_ARENA_PLAYER_SPEED)
        )
        self.spawners.append(MonsterSpawner(0.0, 0.1))

    def _init_dungeon(self, dungeon: Dungeon) -> None:
        self.portals = prebuild_map(dungeon)
        tile = find_walkable_tile(dungeon, self.rng)
        self.entities.append(
            create_player(tile * TILE_SIZE, _PLAYER_TEXTURE, move_speed=_DUNGEON_PLAYER_SPEED)
        )

    def _players(self) -> Iterator[Entity]:
        return (e for e in self.entities if e.is_player)

    @property
    def player(self) -> Entity:
        """The first player entity; LookupError if there is none."""
        for entity in self._players():
            return entity
        raise LookupError("the game has no player")

    def update(self, dt: float, player_input: Iterable[str] = ()) -> None:
        """Advance the game by ``dt`` seconds.

        ``player_input`` names the held direction keys: any of
        ``"left"``, ``"right"``, ``"up"`` and ``"down"``.
        """
        keys = set(player_input)
        unknown = keys - _DIRECTIONS.keys()
        if unknown:
            raise ValueError(f"unknown input keys: {sorted(unknown)}")

        for player in self._players():
            self.camera.follow(player.position)

        direction = sum((_DIRECTIONS[k] for k in keys), Vec2(0.0, 0.0))
        for player in self._players():
            player.velocity = normalize(direction) * player.move_speed

        for entity in self.entities:
            entity.position = entity.position + entity.velocity * dt

        self._spawn(dt)
        update_steering(self.entities, dt)

    def _spawn(self, dt: float) -> None:
        for spawner in self.spawners:
            for player in list(self._players()):
                spawner.time_to_spawn -= dt
                if spawner.time_to_spawn < 0.0 and spawner.time_between_spawns <= 0.0:
                    raise ValueError("time_between_spawns must be positive")
                while spawner.time_to_spawn < 0.0:
                    self._spawn_monster(player.position)
                    spawner.time_to_spawn += spawner.time_between_spawns

    def _spawn_monster(self, around: Vec2) -> None:
        steer_type = SteerType(self.rng.randint(0, len(SteerType) - 1))
        distance = _SPAWN_DISTANCES[steer_type]
        angle = self.rng.randint(0, _ANGLE_STEPS) / _ANGLE_STEPS * math.pi * 2.0
        pos = Vec2(
            around.x + math.cos(angle) * distance,
            around.y + math.sin(angle) * distance,
        )
        monster = create_monster(pos, _SPAWN_COLORS[steer_type], _MONSTER_TEXTURE)
        self.entities.append(create_steer_beh(monster, steer_type))