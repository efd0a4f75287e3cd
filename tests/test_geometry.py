import math

import pytest

from boxdetect.geometry import Point, Size, norm


@pytest.mark.parametrize(
    "a, b",
    [
        (Point(1, 2), Point(7, -5)),
        (Point(0.5, -1.25), Point(2.0, 3.5)),
        (Point(-9, 4), Point(-9, 4)),
    ],
)
def test_add_then_subtract_round_trips(a, b):
    assert (a + b) - b == a


def test_default_point_is_origin():
    assert Point() == Point(0, 0)


def test_negation_is_involution():
    p = Point(3, -8)
    assert -(-p) == p
    assert p + (-p) == Point()


def test_scalar_multiplication_matches_repeated_addition():
    p = Point(4, -6)
    assert p * 3 == p + p + p
    assert 3 * p == p * 3


def test_integer_point_truncates_float_scaling():
    result = Point(3, -3) * 0.5
    assert result == Point(1, -1)
    assert result.integral


def test_integer_division_truncates_towards_zero():
    p = Point(7, -7)
    assert p / 2 == Point(7 // 2, -(7 // 2))


def test_float_point_division_is_exact_inverse_of_multiplication():
    p = Point(1.5, -2.25)
    assert (p * 4.0) / 4.0 == p


def test_division_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        Point(1, 1) / 0


def test_dot_is_symmetric_and_matches_ddot():
    a, b = Point(2, 5), Point(-3, 7)
    assert a.dot(b) == b.dot(a)
    assert float(a.dot(b)) == a.ddot(b)


def test_cross_is_antisymmetric_and_zero_with_self():
    a, b = Point(2.5, 1.0), Point(-1.0, 4.0)
    assert a.cross(b) == -b.cross(a)
    assert a.cross(a) == 0.0


def test_norm_of_point_squared_equals_ddot_with_itself():
    p = Point(3, 4)
    assert norm(p) == 5.0
    assert math.isclose(norm(p) ** 2, p.ddot(p))


def test_point_size_round_trip():
    p = Point(12, 34)
    assert p.to_size().to_point() == p
    s = Size(640, 480)
    assert s.to_point().to_size() == s


def test_size_area_and_emptiness():
    s = Size(4, 5)
    assert s.area() == s.width * s.height
    assert not s.empty()
    assert Size(0, 10).empty()
    assert Size(10, -1).empty()
    assert Size().empty()


def test_size_aspect_ratio_inverts_when_swapped():
    s = Size(1920, 1080)
    swapped = Size(s.height, s.width)
    assert math.isclose(s.aspect_ratio() * swapped.aspect_ratio(), 1.0)


def test_size_aspect_ratio_with_zero_height():
    assert Size(5, 0).aspect_ratio() == math.inf
    assert math.isnan(Size(0, 0).aspect_ratio())


def test_size_arithmetic_round_trips():
    a, b = Size(10, 20), Size(3, 4)
    assert (a + b) - b == a
    assert (a * 3) / 3 == a


def test_integer_size_division_truncates():
    assert Size(7, 9) / 2 == Size(7 // 2, 9 // 2)