import math

import pytest

from sc2botkit.geometry import Point, Point2D, PointI, Vec, Vec2D, VecI


def test_veci_neg_add_is_zero():
    v = VecI(3, -7)
    assert v.add(v.neg()) == VecI(0, 0)
    assert -v + v == VecI(0, 0)


def test_veci_sub_inverts_add():
    a, b = VecI(2, 9), VecI(-4, 5)
    assert a.add(b).sub(b) == a


def test_veci_mul_and_len2():
    v = VecI(3, 4)
    assert v.mul(2) == VecI(6, 8)
    assert v.len2() == v.dot(v)
    assert math.isclose(v.length() ** 2, v.len2())
    assert v.len64() == v.length()


def test_veci_manhattan_ignores_sign():
    assert VecI(-3, 4).manhattan() == VecI(3, -4).manhattan() == 3 + 4


def test_vec2d_norm_is_unit_length():
    n = Vec2D(3.0, -8.5).norm()
    assert math.isclose(n.length(), 1.0)


def test_vec2d_norm_zero_raises():
    with pytest.raises(ZeroDivisionError):
        Vec2D(0.0, 0.0).norm()


def test_vec2d_div_inverts_mul():
    v = Vec2D(1.5, -2.25)
    back = v.mul(4.0).div(4.0)
    assert math.isclose(back.x, v.x) and math.isclose(back.y, v.y)
    assert v.mul64(2.0) == v.mul(2.0)


def test_vec2d_manhattan_and_neg():
    v = Vec2D(-1.5, 2.5)
    assert v.manhattan() == v.neg().manhattan()
    assert v.sub(v) == Vec2D()


@pytest.mark.parametrize("n", [4, 8, 16])
def test_vec2d_quadrant_keeps_axis_direction(n):
    q = Vec2D(5.0, 0.0).quadrant(n)
    assert math.isclose(q.x, 1.0)
    assert math.isclose(q.y, 0.0, abs_tol=1e-12)


def test_vec2d_quadrant_is_unit_and_snapped():
    n = 8
    q = Vec2D(2.0, 0.3).quadrant(n)
    assert math.isclose(q.length(), 1.0)
    angle = math.atan2(q.y, q.x) % (2 * math.pi)
    steps = angle / (2 * math.pi / n)
    assert math.isclose(steps, round(steps), abs_tol=1e-9)


def test_vec_cross_is_orthogonal():
    a, b = Vec(1.0, 2.0, 3.0), Vec(-2.0, 0.5, 4.0)
    c = a.cross(b)
    assert math.isclose(c.dot(a), 0.0, abs_tol=1e-12)
    assert math.isclose(c.dot(b), 0.0, abs_tol=1e-12)
    assert b.cross(a) == c.neg()


def test_vec_norm_and_manhattan():
    v = Vec(-1.0, 2.0, -2.0)
    assert math.isclose(v.norm().length(), 1.0)
    assert v.manhattan() == v.neg().manhattan()
    assert v.div(2.0).mul(2.0) == v
    assert v.mul64(3.0) == v.mul(3.0)
    assert v.add(v.neg()) == Vec()
    assert math.isclose(v.length() ** 2, v.len2())


def test_pointi_conversions():
    p = PointI(3, 7)
    assert p.to_point2d() == Point2D(3.0, 7.0)
    assert p.to_point2d_centered() == Point2D(3.5, 7.5)
    assert p.to_point() == Point(3.0, 7.0, 0.0)
    assert p.to_point_centered() == Point(3.5, 7.5, 0.0)


def test_pointi_vec_to_and_add_round_trip():
    a, b = PointI(1, 2), PointI(-5, 9)
    assert a.add(a.vec_to(b)) == b
    assert a.distance2(b) == a.vec_to(b).len2()
    assert math.isclose(a.distance(b) ** 2, a.distance2(b))
    assert a.manhattan(b) == b.manhattan(a)


def test_pointi_offsets():
    p = PointI(10, 10)
    four = p.offset4_by(2)
    eight = p.offset8_by(2)
    assert four[0] == PointI(10, 8)
    assert all(p.manhattan(q) == 2 for q in four)
    assert set(four) <= set(eight)
    assert len(set(eight)) == 8


def test_point2d_truncates():
    assert Point2D(3.9, 7.2).to_point_i() == PointI(3, 7)
    assert Point2D(1.0, 2.0).to_point() == Point(1.0, 2.0, 0.0)


def test_point2d_offset_moves_by_distance():
    a, b = Point2D(0.0, 0.0), Point2D(10.0, 5.0)
    moved = a.offset(b, 2.0)
    assert math.isclose(a.distance(moved), 2.0)
    assert math.isclose(moved.distance(b), a.distance(b) - 2.0)


def test_point2d_dir_and_distance():
    a, b = Point2D(1.0, 1.0), Point2D(4.0, -3.0)
    assert math.isclose(a.dir_to(b).length(), 1.0)
    assert math.isclose(a.distance(b) ** 2, a.distance2(b))
    assert a.manhattan(b) == a.vec_to(b).manhattan()
    assert a.add(a.vec_to(b)) == b


def test_point2d_offsets():
    p = Point2D(0.5, 0.5)
    eight = p.offset8_by(1.0)
    assert eight[2] == Point2D(1.5, 0.5)
    assert set(p.offset4_by(1.0)) <= set(eight)


def test_point_conversions_and_offset():
    p = Point(2.7, 3.1, 9.0)
    assert p.to_point_i() == PointI(2, 3)
    assert p.to_point2d() == Point2D(2.7, 3.1)
    target = Point(5.0, 5.0, 5.0)
    moved = p.offset(target, 1.0)
    assert math.isclose(p.distance(moved), 1.0)
    assert math.isclose(p.distance(target) ** 2, p.distance2(target))
    assert p.add(p.vec_to(target)) == target