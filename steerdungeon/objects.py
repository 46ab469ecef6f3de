"""Game entities and the factories that create players and monsters."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Hashable

from .vecmath import Vec2


class Actions(IntEnum):
    """What an actor intends to do on its turn."""

    NOP = 0
    MOVE_START = 1
    MOVE_LEFT = 1
    MOVE_RIGHT = 2
    MOVE_DOWN = 3
    MOVE_UP = 4
    MOVE_END = 5
    ATTACK = 5
    HEAL_SELF = 6
    NUM = 7


@dataclass(frozen=True, slots=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255


WHITE = Color(255, 255, 255, 255)
BLACK = Color(0, 0, 0, 255)
GRAY = Color(130, 130, 130, 255)
RED = Color(230, 41, 55, 255)
GREEN = Color(0, 228, 48, 255)
BLUE = Color(0, 121, 241, 255)


@dataclass(eq=False)
class Entity:
    """A game object; entities compare by identity."""

    name: str | None = None
    position: Vec2 = Vec2()
    velocity: Vec2 = Vec2()
    move_speed: float = 0.0
    hitpoints: float = 10.0
    action: Actions = Actions.NOP
    color: Color = WHITE
    texture: str | None = None
    team: int = 0
    num_actions: int = 1
    cur_actions: int = 0
    melee_damage: float = 2.0
    is_player: bool = False
    steer_dir: Vec2 | None = None
    steer_accel: float = 1.0
    tags: set[Hashable] = field(default_factory=set)


@dataclass
class MonsterSpawner:
    """Countdown state for spawning monsters around the player."""

    time_to_spawn: float
    time_between_spawns: float


def create_monster(pos: Vec2, color: Color, texture: str) -> Entity:
    """A hostile monster standing at ``pos``."""
    return Entity(
        position=Vec2(pos.x, pos.y),
        velocity=Vec2(0.0, 0.0),
        move_speed=100.0,
        hitpoints=100.0,
        action=Actions.NOP,
        color=color,
        texture=texture,
        team=1,
        num_actions=1,
        cur_actions=0,
        melee_damage=20.0,
    )


def create_player(pos: Vec2, texture: str, move_speed: float = 350.0) -> Entity:
    """The player entity, named ``"player"``, standing at ``pos``."""
    return Entity(
        name="player",
        position=Vec2(pos.x, pos.y),
        velocity=Vec2(0.0, 0.0),
        move_speed=move_speed,
        hitpoints=100.0,
        action=Actions.NOP,
        color=WHITE,
        texture=texture,
        team=0,
        num_actions=2,
        cur_actions=0,
        melee_damage=50.0,
        is_player=True,
    )