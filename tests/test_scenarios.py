import itertools
import math

import numpy as np
import pytest

from geosketch import Angle, Length, Sketch
from geosketch.errors import UnsatisfiableError


def test_three_four_five_segment():
    sketch = Sketch()
    p1 = sketch.add_point("P1")
    p2 = sketch.add_point("P2")
    seg = sketch.add_segment(p1, p2)
    sketch.add_constraints([p1.fixed_at(0, 0), p2.fixed_at(3, 4), seg.length_equals(5.0)])

    solution = sketch.solve()
    assert solution.segment_length(seg) == pytest.approx(5.0, abs=1e-6)


@pytest.mark.parametrize("length", [0.5, 1.0, 2.25, 7.0, Length.millimeters(1250)])
def test_length_constraint_yields_endpoint_distance(length):
    sketch = Sketch()
    a = sketch.add_point()
    b = sketch.add_point()
    seg = sketch.add_segment(a, b)
    sketch.add_constraints([a.fixed_at(1, -2), seg.length_equals(length)])

    solution = sketch.solve()
    expected = length.to_meters() if isinstance(length, Length) else length
    (ax, ay), (bx, by) = solution.point(a), solution.point(b)
    assert math.hypot(bx - ax, by - ay) == pytest.approx(expected, abs=1e-6)


def test_perpendicular_unit_segments():
    sketch = Sketch()
    a = sketch.add_point("A")
    b = sketch.add_point("B")
    c = sketch.add_point("C")
    d = sketch.add_point("D")
    ab = sketch.add_segment(a, b)
    cd = sketch.add_segment(c, d)
    sketch.add_constraints(
        [
            a.fixed_at(0, 0),
            c.fixed_at(2, 1),
            ab.length_equals(1.0),
            cd.length_equals(1.0),
            ab.perpendicular_to(cd),
        ]
    )

    solution = sketch.solve()
    d1 = np.subtract(solution.point(b), solution.point(a))
    d2 = np.subtract(solution.point(d), solution.point(c))
    assert np.linalg.norm(d1) == pytest.approx(1.0, abs=1e-6)
    assert np.linalg.norm(d2) == pytest.approx(1.0, abs=1e-6)
    assert float(np.dot(d1, d2)) == pytest.approx(0.0, abs=1e-6)


def test_parallel_segments():
    sketch = Sketch()
    a, b, c, d = (sketch.add_point(name) for name in "ABCD")
    ab = sketch.add_segment(a, b)
    cd = sketch.add_segment(c, d)
    sketch.add_constraints(
        [
            a.fixed_at(0, 0),
            b.fixed_at(2, 1),
            c.fixed_at(0, 3),
            cd.length_equals(5),
            ab.parallel_to(cd),
        ]
    )

    solution = sketch.solve()
    d1 = np.subtract(solution.point(b), solution.point(a))
    d2 = np.subtract(solution.point(d), solution.point(c))
    assert float(d1[0] * d2[1] - d1[1] * d2[0]) == pytest.approx(0.0, abs=1e-6)
    assert solution.segment_length(cd) == pytest.approx(5.0, abs=1e-6)


def test_conflicting_fixed_positions_with_coincidence_are_unsatisfiable():
    sketch = Sketch()
    p1 = sketch.add_point("P1")
    p2 = sketch.add_point("P2")
    sketch.add_constraints([p1.fixed_at(0, 0), p2.fixed_at(1, 2), p1.coincident_with(p2)])
    with pytest.raises(UnsatisfiableError):
        sketch.solve()


@pytest.mark.parametrize("x, y", [(0.0, 0.0), (1.5, -2.25), (-1e3, 1e-3), (123.456789, 0.000001)])
def test_fixed_position_is_exact(x, y):
    sketch = Sketch()
    p = sketch.add_point()
    sketch.add_constraint(p.fixed_at(x, y))
    px, py = sketch.solve().point(p)
    assert px == pytest.approx(x, abs=1e-6)
    assert py == pytest.approx(y, abs=1e-6)


def test_coincident_points_extract_identically():
    sketch = Sketch()
    a = sketch.add_point()
    b = sketch.add_point()
    c = sketch.add_point()
    ab = sketch.add_segment(a, b)
    sketch.add_constraints(
        [a.fixed_at(1, 1), ab.length_equals(2), b.coincident_with(c)]
    )
    solution = sketch.solve()
    assert solution.point(b) == solution.point(c)


@pytest.mark.parametrize("end", [(4.0, 2.0), (-3.0, 1.0), (0.0, 5.0)])
def test_point_on_segment_parameter_in_unit_interval(end):
    sketch = Sketch()
    s = sketch.add_point("S")
    e = sketch.add_point("E")
    p = sketch.add_point("P")
    seg = sketch.add_segment(s, e)
    sketch.add_constraints([s.fixed_at(0, 0), e.fixed_at(*end), seg.contains(p)])

    solution = sketch.solve()
    start = np.array(solution.point(s))
    direction = np.array(solution.point(e)) - start
    offset = np.array(solution.point(p)) - start
    t = float(np.dot(offset, direction) / np.dot(direction, direction))
    assert -1e-6 <= t <= 1 + 1e-6
    assert float(direction[0] * offset[1] - direction[1] * offset[0]) == pytest.approx(0.0, abs=1e-6)


def test_point_on_segment_with_pinned_point():
    sketch = Sketch()
    s = sketch.add_point()
    e = sketch.add_point()
    p = sketch.add_point()
    seg = sketch.add_segment(s, e)
    sketch.add_constraints([s.fixed_at(0, 0), e.fixed_at(4, 0), p.fixed_at(5, 0), seg.contains(p)])
    with pytest.raises(UnsatisfiableError):
        sketch.solve()


@pytest.mark.parametrize("degrees", [0, 30, 45, 60, 90])
def test_angle_between_segments(degrees):
    sketch = Sketch()
    a = sketch.add_point("A")
    b = sketch.add_point("B")
    c = sketch.add_point("C")
    d = sketch.add_point("D")
    base = sketch.add_segment(a, b)
    arm = sketch.add_segment(c, d)
    sketch.add_constraints(
        [
            a.fixed_at(0, 0),
            b.fixed_at(1, 0),
            c.fixed_at(0, 0),
            arm.length_equals(1),
            base.angle_with(arm, Angle.degrees(degrees)),
        ]
    )

    solution = sketch.solve()
    assert solution.angle_between(base, arm) == pytest.approx(math.radians(degrees), abs=1e-6)
    assert abs(solution.segment_angle(arm)) == pytest.approx(math.radians(degrees), abs=1e-6)


def test_extraction_is_bit_identical_on_repeat():
    sketch = Sketch()
    a = sketch.add_point()
    b = sketch.add_point()
    seg = sketch.add_segment(a, b)
    sketch.add_constraints([a.fixed_at(0, 0), seg.length_equals(2)])
    solution = sketch.solve()
    first = solution.point(b)
    second = solution.point(b)
    assert first[0] == second[0] and first[1] == second[1]
    assert solution.segment_length(seg) == solution.segment_length(seg)


def test_distance_symmetry():
    sketch = Sketch()
    p1 = sketch.add_point()
    p2 = sketch.add_point()
    sketch.add_constraints([p1.fixed_at(-1.25, 0.5), p2.fixed_at(2, 3)])
    solution = sketch.solve()
    assert solution.distance(p1, p2) == solution.distance(p2, p1)


def test_constraint_order_does_not_change_solution():
    def build(order):
        sketch = Sketch()
        a, b, c = (sketch.add_point(name) for name in "ABC")
        ab = sketch.add_segment(a, b)
        bc = sketch.add_segment(b, c)
        constraints = [
            a.fixed_at(0, 0),
            b.fixed_at(3, 0),
            ab.perpendicular_to(bc),
            bc.length_equals(2),
            c.fixed_at(3, 2),
        ]
        sketch.add_constraints(constraints[i] for i in order)
        return sketch.solve().all_point_coordinates()

    reference = build(range(5))
    for order in itertools.islice(itertools.permutations(range(5)), 1, None, 17):
        coords = build(order)
        for key, value in reference.items():
            assert coords[key] == pytest.approx(value, abs=1e-6)


def test_circle_radius():
    sketch = Sketch()
    center = sketch.add_point("O")
    circle = sketch.add_circle(center)
    sketch.add_constraints([center.fixed_at(1, 1), circle.radius_equals(Length.centimeters(150))])
    params = sketch.solve().circle(circle)
    assert params.center == pytest.approx((1.0, 1.0))
    assert params.radius == pytest.approx(1.5, abs=1e-6)
    assert params.circumference == pytest.approx(3 * math.pi, abs=1e-6)
    assert params.area == pytest.approx(2.25 * math.pi, abs=1e-6)
