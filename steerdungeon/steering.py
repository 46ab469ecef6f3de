"""Steering behaviours: seek, pursue, evade, flee and simple flocking."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Callable, Iterable

from .objects import Entity
from .vecmath import Vec2, length, length_sq, normalize, safeinv, truncate

_PURSUE_PREDICT_TIME = 4.0
_EVADE_MAX_PREDICT_TIME = 4.0
_SEPARATION_DIST = 70.0
_ALIGNMENT_DIST = 100.0
_ALIGNMENT_WEIGHT = 0.8
_COHESION_DIST = 500.0
_COHESION_MULT = 100.0


class SteerType(IntEnum):
    """The chase or escape behaviour a steering monster is given."""

    SEEKER = 0
    PURSUER = 1
    EVADER = 2
    FLEER = 3


class Behaviour(Enum):
    """Tags placed on an entity's ``tags`` to enable a steering rule."""

    SEEKER = "seeker"
    PURSUER = "pursuer"
    EVADER = "evader"
    FLEER = "fleer"
    SEPARATION = "separation"
    ALIGNMENT = "alignment"
    COHESION = "cohesion"


def _create_steerer(entity: Entity) -> Entity:
    entity.steer_dir = Vec2(0.0, 0.0)
    entity.steer_accel = 1.0
    entity.tags.update((Behaviour.SEPARATION, Behaviour.ALIGNMENT, Behaviour.COHESION))
    return entity


def create_seeker(entity: Entity) -> Entity:
    """Make ``entity`` head straight for the player."""
    _create_steerer(entity).tags.add(Behaviour.SEEKER)
    return entity


def create_pursuer(entity: Entity) -> Entity:
    """Make ``entity`` head for where the player will be."""
    _create_steerer(entity).tags.add(Behaviour.PURSUER)
    return entity


def create_evader(entity: Entity) -> Entity:
    """Make ``entity`` run from where the player is heading."""
    _create_steerer(entity).tags.add(Behaviour.EVADER)
    return entity


def create_fleer(entity: Entity) -> Entity:
    """Make ``entity`` run directly away from the player."""
    _create_steerer(entity).tags.add(Behaviour.FLEER)
    return entity


_FACTORIES: dict[SteerType, Callable[[Entity], Entity]] = {
    SteerType.SEEKER: create_seeker,
    SteerType.PURSUER: create_pursuer,
    SteerType.EVADER: create_evader,
    SteerType.FLEER: create_fleer,
}


def create_steer_beh(entity: Entity, steer_type: SteerType | int) -> Entity:
    """Give ``entity`` the steering behaviour named by ``steer_type``."""
    return _FACTORIES[SteerType(steer_type)](entity)


def _steerers(entities: list[Entity], tag: Behaviour) -> Iterable[Entity]:
    return (e for e in entities if e.steer_dir is not None and tag in e.tags)


def _seek(entities: list[Entity], players: list[Entity]) -> None:
    for e in _steerers(entities, Behaviour.SEEKER):
        for p in players:
            e.steer_dir += normalize(p.position - e.position) * e.move_speed - e.velocity


def _flee(entities: list[Entity], players: list[Entity]) -> None:
    for e in _steerers(entities, Behaviour.FLEER):
        for p in players:
            e.steer_dir += normalize(e.position - p.position) * e.move_speed - e.velocity


def _pursue(entities: list[Entity], players: list[Entity]) -> None:
    for e in _steerers(entities, Behaviour.PURSUER):
        for p in players:
            target = p.position + p.velocity * _PURSUE_PREDICT_TIME
            e.steer_dir += normalize(target - e.position) * e.move_speed - e.velocity


def _evade(entities: list[Entity], players: list[Entity]) -> None:
    for e in _steerers(entities, Behaviour.EVADER):
        for p in players:
            dpos = e.position - p.position
            dvel = e.velocity - p.velocity
            dot = (dvel.x * dpos.x + dvel.y * dpos.y) * safeinv(length(dpos))
            intercept_time = dot * safeinv(length(dvel))
            predict_time = max(min(_EVADE_MAX_PREDICT_TIME, intercept_time * 0.9), 1.0)
            target = p.position + p.velocity * predict_time
            e.steer_dir += normalize(e.position - target) * e.move_speed - e.velocity


def _neighbours(entities: list[Entity], e: Entity, radius: float) -> Iterable[Entity]:
    radius_sq = radius * radius
    for other in entities:
        if other is e:
            continue
        if length_sq(other.position - e.position) > radius_sq:
            continue
        yield other


def _separate(entities: list[Entity]) -> None:
    for e in _steerers(entities, Behaviour.SEPARATION):
        for other in _neighbours(entities, e, _SEPARATION_DIST):
            dist_sq = length_sq(other.position - e.position)
            push = (e.position - other.position) * safeinv(dist_sq)
            e.steer_dir += push * e.move_speed * _SEPARATION_DIST - e.velocity


def _align(entities: list[Entity]) -> None:
    for e in _steerers(entities, Behaviour.ALIGNMENT):
        for other in _neighbours(entities, e, _ALIGNMENT_DIST):
            e.steer_dir += other.velocity * _ALIGNMENT_WEIGHT


def _cohere(entities: list[Entity]) -> None:
    for e in _steerers(entities, Behaviour.COHESION):
        total = Vec2(0.0, 0.0)
        count = 0
        for other in _neighbours(entities, e, _COHESION_DIST):
            total += other.position
            count += 1
        centre = total * safeinv(float(count))
        e.steer_dir += normalize(centre - e.position) * _COHESION_MULT - e.velocity


def update_steering(entities: Iterable[Entity], dt: float) -> None:
    """Run one steering tick over ``entities``.

    Velocities are first advanced by the steering accumulated on the previous
    tick, then the steering directions are reset and recomputed.
    """
    entities = list(entities)
    for e in entities:
        if e.steer_dir is None:
            continue
        accel = truncate(e.steer_dir, e.move_speed) * dt * e.steer_accel
        e.velocity = truncate(e.velocity + accel, e.move_speed)

    for e in entities:
        if e.steer_dir is not None:
            e.steer_dir = Vec2(0.0, 0.0)

    players = [e for e in entities if e.is_player]
    _seek(entities, players)
    _flee(entities, players)
    _pursue(entities, players)
    _evade(entities, players)
    _separate(entities)
    _align(entities)
    _cohere(entities)