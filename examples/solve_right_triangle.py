"""Example: a 3-4-5 right triangle built from fixed, length and perpendicular constraints."""

from geosketch import Sketch, SolveOptions


def main() -> None:
    sketch = Sketch()
    a = sketch.add_point("A")
    b = sketch.add_point("B")
    c = sketch.add_point("C")
    ab = sketch.add_segment(a, b, "AB")
    ac = sketch.add_segment(a, c, "AC")
    bc = sketch.add_segment(b, c, "BC")

    sketch.add_constraints(
        [
            a.fixed_at(0, 0),
            b.fixed_at(4, 0),
            ac.length_equals(3),
            ab.perpendicular_to(ac),
        ]
    )
    solution = sketch.solve(SolveOptions(timeout_ms=10_000))

    for point in sketch.points():
        x, y = solution.point(point)
        print(f"{point.display_name()}: ({x:.6f}, {y:.6f})")
    for segment in (ab, ac, bc):
        print(f"|{segment.display_name()}| = {solution.segment_length(segment):.6f}")


if __name__ == "__main__":
    main()
