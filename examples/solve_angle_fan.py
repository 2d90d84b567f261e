"""Example: unit arms fanned out from the origin at fixed angles to a horizontal base."""

import math

from geosketch import Angle, Sketch

ANGLES = (15, 30, 45, 60, 75)


def main() -> None:
    sketch = Sketch()
    origin = sketch.add_point("O")
    east = sketch.add_point("E")
    base = sketch.add_segment(origin, east, "base")
    constraints = [origin.fixed_at(0, 0), east.fixed_at(1, 0)]

    arms = []
    for degrees in ANGLES:
        tip = sketch.add_point(f"T{degrees}")
        arm = sketch.add_segment(origin, tip, f"arm{degrees}")
        constraints.append(arm.length_equals(1))
        constraints.append(base.angle_with(arm, Angle.degrees(degrees)))
        arms.append(arm)
    sketch.add_constraints(constraints)

    solution = sketch.solve()
    for arm in arms:
        params = solution.segment(arm)
        print(
            f"{arm.display_name()}: end=({params.end[0]:.6f}, {params.end[1]:.6f}) "
            f"direction={math.degrees(params.angle):.4f}deg"
        )


if __name__ == "__main__":
    main()
