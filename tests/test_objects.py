from steerdungeon.objects import (
    WHITE,
    Actions,
    Color,
    Entity,
    MonsterSpawner,
    create_monster,
    create_player,
)
from steerdungeon.vecmath import Vec2


def test_action_aliases():
    assert Actions(1) is Actions.MOVE_LEFT
    assert Actions(1) is Actions.MOVE_START
    assert Actions(int(Actions.MOVE_END)) is Actions.ATTACK
    assert Actions(0) is Actions.NOP
    assert Actions.NUM == Actions.HEAL_SELF + 1


def test_move_actions_lie_between_start_and_end():
    moves = [Actions(i) for i in range(Actions.MOVE_START, Actions.MOVE_END)]
    assert moves == [
        Actions.MOVE_LEFT,
        Actions.MOVE_RIGHT,
        Actions.MOVE_DOWN,
        Actions.MOVE_UP,
    ]
    assert len(set(moves)) == Actions.MOVE_END - Actions.MOVE_START


def test_color_default_alpha_and_white():
    assert Color(1, 2, 3).a == 255
    assert WHITE == Color(255, 255, 255, 255)


def test_entity_defaults():
    e = Entity()
    assert e.hitpoints == 10.0
    assert e.melee_damage == 2.0
    assert e.num_actions == 1
    assert e.action is Actions.NOP
    assert e.tags == set()


def test_create_monster():
    pos = Vec2(12.5, -3.0)
    color = Color(10, 20, 30)
    m = create_monster(pos, color, "minotaur_tex")
    assert m.position == pos
    assert m.velocity == Vec2(0.0, 0.0)
    assert m.move_speed == 100.0
    assert m.hitpoints == 100.0
    assert m.team == 1
    assert m.num_actions == 1 and m.cur_actions == 0
    assert m.melee_damage == 20.0
    assert m.color == color
    assert m.texture == "minotaur_tex"
    assert not m.is_player


def test_create_player_defaults():
    p = create_player(Vec2(1.0, 2.0), "swordsman_tex")
    assert p.name == "player"
    assert p.is_player
    assert p.team == 0
    assert p.move_speed == 350.0
    assert p.num_actions == 2
    assert p.melee_damage == 50.0
    assert p.color == WHITE
    assert p.position == Vec2(1.0, 2.0)


def test_create_player_custom_speed():
    assert create_player(Vec2(), "swordsman_tex", 150.0).move_speed == 150.0


def test_entities_compare_by_identity():
    a = create_monster(Vec2(), WHITE, "minotaur_tex")
    b = create_monster(Vec2(), WHITE, "minotaur_tex")
    assert a != b
    assert a == a
    assert len({a, b}) == 2


def test_entity_tags_are_not_shared():
    a, b = Entity(), Entity()
    a.tags.add("seeker")
    assert b.tags == set()


def test_monster_spawner_is_mutable():
    spawner = MonsterSpawner(0.0, 0.1)
    spawner.time_to_spawn -= 0.25
    assert spawner.time_to_spawn == -0.25
    assert spawner.time_between_spawns == 0.1