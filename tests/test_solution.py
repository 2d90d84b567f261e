import math
import threading

import numpy as np
import pytest
import z3

from geosketch.errors import ExtractionError, InvalidEntityError
from geosketch.ids import PointId
from geosketch.sketch import Sketch
from geosketch.solver import solution as solution_module
from geosketch.solver import SegmentParameters, model_value_to_float, normalize_point_coords


def _solved_triangle():
    sketch = Sketch()
    a = sketch.add_point("A")
    b = sketch.add_point("B")
    c = sketch.add_point("C")
    ab = sketch.add_segment(a, b)
    ac = sketch.add_segment(a, c)
    circle = sketch.add_circle(c, "k")
    sketch.add_constraints(
        [
            a.fixed_at(0, 0),
            b.fixed_at(4, 0),
            c.fixed_at(0, 3),
            circle.radius_equals(2),
        ]
    )
    return sketch, (a, b, c), (ab, ac), circle, sketch.solve()


def test_point_coordinates_and_segment_parameters():
    _, (a, b, c), (ab, ac), _, solution = _solved_triangle()
    assert solution.point(a) == (0.0, 0.0)
    assert solution.point(b.id) == (4.0, 0.0)

    params = solution.segment(ab)
    assert isinstance(params, SegmentParameters)
    assert params.start == (0.0, 0.0)
    assert params.end == (4.0, 0.0)
    assert params.length == pytest.approx(4.0, abs=1e-6)
    assert params.angle == pytest.approx(0.0, abs=1e-6)
    assert solution.segment_angle(ac) == pytest.approx(math.pi / 2, abs=1e-6)
    assert solution.segment_length(ac) == pytest.approx(3.0, abs=1e-6)


def test_circle_parameters():
    _, (a, b, c), _, circle, solution = _solved_triangle()
    params = solution.circle(circle)
    assert params.center == (0.0, 3.0)
    assert params.radius == pytest.approx(2.0, abs=1e-6)
    assert solution.radius(circle.id) == pytest.approx(2.0, abs=1e-6)
    assert solution.circle_circumference(circle) == pytest.approx(4 * math.pi, abs=1e-6)
    assert solution.circle_area(circle) == pytest.approx(4 * math.pi, abs=1e-6)


def test_distance_is_symmetric():
    _, (a, b, c), _, _, solution = _solved_triangle()
    assert solution.distance(b, c) == pytest.approx(5.0, abs=1e-6)
    assert solution.distance(b, c) == solution.distance(c, b)


def test_angle_between_segments_is_unsigned():
    _, _, (ab, ac), _, solution = _solved_triangle()
    assert solution.angle_between(ab, ac) == pytest.approx(math.pi / 2, abs=1e-6)
    assert solution.angle_between(ac, ab) == pytest.approx(math.pi / 2, abs=1e-6)


def test_extraction_is_idempotent_and_cached():
    _, (a, *_), (ab, _), circle, solution = _solved_triangle()
    first = solution.point(a)
    assert solution.point(a) is first
    assert solution.segment(ab) is solution.segment(ab)
    assert solution.circle(circle) is solution.circle(circle)


def test_unreferenced_point_resolves_to_model_completion():
    sketch = Sketch()
    a = sketch.add_point()
    free = sketch.add_point()
    sketch.add_constraint(a.fixed_at(1, 1))
    solution = sketch.solve()
    x, y = solution.point(free)
    assert math.isfinite(x) and math.isfinite(y)


def test_stale_identifier_raises_without_poisoning_cache():
    _, (a, *_), _, _, solution = _solved_triangle()
    cached = solution.point(a)
    with pytest.raises(InvalidEntityError):
        solution.point(PointId(17, 0))
    assert solution.point(a) is cached


def test_all_point_coordinates_follow_store_order():
    _, (a, b, c), _, _, solution = _solved_triangle()
    coords = solution.all_point_coordinates()
    assert list(coords) == [a.id, b.id, c.id]
    assert coords[c.id] == (0.0, 3.0)

    normalized = solution.normalized_point_coords(scale=10.0)
    assert normalized[a.id] == pytest.approx((0.0, 0.0))
    assert normalized[b.id] == pytest.approx((10.0, 0.0))
    assert normalized[c.id] == pytest.approx((0.0, 10.0))


def test_concurrent_queries_see_one_value():
    _, (a, b, c), _, _, solution = _solved_triangle()
    results = []

    def worker():
        results.append((solution.point(a), solution.point(b), solution.point(c)))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len({id(result[0]) for result in results}) == 1
    assert all(result == results[0] for result in results)


def test_model_value_to_float_handles_rationals_and_algebraics():
    assert model_value_to_float(z3.Q(3, 4), "x") == 0.75
    sqrt2 = z3.Real("sqrt2")
    solver = z3.Solver()
    solver.add(sqrt2 * sqrt2 == 2, sqrt2 > 0)
    assert solver.check() == z3.sat
    value = solver.model().eval(sqrt2)
    assert model_value_to_float(value, "sqrt2") == pytest.approx(math.sqrt(2), abs=1e-12)


def test_model_value_to_float_rejects_non_numerals():
    with pytest.raises(ExtractionError) as excinfo:
        model_value_to_float(z3.Real("y"), "y")
    assert excinfo.value.variable == "y"
    with pytest.raises(ExtractionError):
        model_value_to_float(z3.BoolVal(True), "flag")


def test_model_value_to_float_rejects_overflow():
    with pytest.raises(ExtractionError):
        model_value_to_float(z3.Q(10 ** 400, 1), "huge")


def test_normalize_point_coords():
    coords = {"A": (0.0, 0.0), "B": (2.0, 4.0), "C": (1.0, 4.0)}
    normalized = normalize_point_coords(coords, scale=1.0)
    assert normalized["A"] == (0.0, 0.0)
    assert normalized["B"] == (1.0, 1.0)
    assert np.allclose(normalized["C"], (0.5, 1.0))
    assert normalize_point_coords({}) == {}
    assert normalize_point_coords({"P": (3.0, 3.0)}) == {"P": (0.0, 0.0)}


def test_extraction_error_leaves_other_cached_values(monkeypatch):
    _, (a, b, _), (ab, _), _, solution = _solved_triangle()
    cached = solution.point(a)

    real_convert = solution_module.model_value_to_float

    def failing_convert(value, name, precision=30):
        if name.startswith("B_"):
            raise ExtractionError(name, "not representable")
        return real_convert(value, name, precision)

    monkeypatch.setattr(solution_module, "model_value_to_float", failing_convert)
    with pytest.raises(ExtractionError) as excinfo:
        solution.point(b)
    assert excinfo.value.variable == "B_1g0_x"
    with pytest.raises(ExtractionError):
        solution.segment(ab)
    assert solution.point(a) is cached

    monkeypatch.undo()
    assert solution.point(b) == (4.0, 0.0)
    assert solution.segment_length(ab) == pytest.approx(4.0, abs=1e-6)
