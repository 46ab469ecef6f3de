import math

import pytest

from steerdungeon.vecmath import (
    IVec2,
    Vec2,
    dist,
    dist_sq,
    length,
    length_sq,
    normalize,
    safeinv,
    sqr,
    truncate,
)


def test_vec2_arithmetic_round_trip():
    a = Vec2(1.5, -2.0)
    b = Vec2(0.25, 4.0)
    assert (a + b) - b == a
    assert a * 2.0 == Vec2(3.0, -4.0)
    assert 2.0 * a == a * 2.0
    assert -a == a * -1.0


def test_vec2_unpacks():
    x, y = Vec2(7.0, 8.0)
    assert (x, y) == (7.0, 8.0)


def test_ivec2_subtraction_and_equality():
    a = IVec2(5, 9)
    b = IVec2(2, 3)
    assert a - b == IVec2(3, 6)
    assert (a - b) + b == a
    assert IVec2(1, 2) != IVec2(2, 1)


def test_safeinv_inverts_and_keeps_tiny_values():
    assert safeinv(4.0) * 4.0 == pytest.approx(1.0)
    assert safeinv(0.0) == 0.0
    assert safeinv(1e-9) == 1e-9


def test_length_and_length_sq_agree():
    v = Vec2(3.0, 4.0)
    assert length(v) == pytest.approx(math.sqrt(length_sq(v)))
    assert length(v) == pytest.approx(5.0)


def test_normalize_gives_unit_length():
    for v in (Vec2(3.0, 4.0), Vec2(-10.0, 0.5), Vec2(0.001, 0.002)):
        assert length(normalize(v)) == pytest.approx(1.0)


def test_normalize_zero_vector_stays_zero():
    assert normalize(Vec2(0.0, 0.0)) == Vec2(0.0, 0.0)


def test_truncate_limits_length_and_keeps_short_vectors():
    long_vec = Vec2(30.0, 40.0)
    cut = truncate(long_vec, 10.0)
    assert length(cut) == pytest.approx(10.0)
    assert cut.x * long_vec.y == pytest.approx(cut.y * long_vec.x)
    short = Vec2(1.0, 1.0)
    assert truncate(short, 10.0) is short


def test_sqr_and_distances():
    assert sqr(-3) == 9
    a, b = IVec2(0, 0), IVec2(3, 4)
    assert dist_sq(a, b) == 25.0
    assert dist(a, b) == pytest.approx(math.sqrt(dist_sq(a, b)))
    assert dist(Vec2(1.0, 1.0), Vec2(1.0, 1.0)) == 0.0