"""Example: a circle sized by a radius constraint with a chord lying on a diameter."""

from geosketch import Length, Sketch


def main() -> None:
    sketch = Sketch()
    center = sketch.add_point("O")
    left = sketch.add_point("L")
    right = sketch.add_point("R")
    marker = sketch.add_point("M")
    circle = sketch.add_circle(center, "c")
    diameter = sketch.add_segment(left, right, "LR")

    sketch.add_constraints(
        [
            center.fixed_at(2, 2),
            circle.radius_equals(Length.centimeters(150)),
            left.fixed_at(0.5, 2),
            right.fixed_at(3.5, 2),
            diameter.contains(marker),
            marker.coincident_with(center),
        ]
    )
    solution = sketch.solve()

    params = solution.circle(circle)
    print(f"center: ({params.center[0]:.6f}, {params.center[1]:.6f})")
    print(f"radius: {params.radius:.6f}")
    print(f"circumference: {params.circumference:.6f}")
    print(f"area: {params.area:.6f}")
    print("normalized:")
    for pid, (x, y) in solution.normalized_point_coords(scale=100.0).items():
        print(f"  {sketch.get_point(pid).display_name()}: ({x:.2f}, {y:.2f})")


if __name__ == "__main__":
    main()
