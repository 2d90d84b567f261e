"""Geometric entities and their constraint factory methods.

Entities are immutable.  A point owns two z3 real variables; segments and
circles refer to points by identifier and never copy coordinates.  Factory
methods only build constraint records; nothing is asserted until the sketch is
solved.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

import z3

from .constraints import (
    AngleBetweenSegments,
    CircleRadius,
    CoincidentPoints,
    FixedPosition,
    ParallelSegments,
    PerpendicularSegments,
    PointOnSegment,
    SegmentLength,
)
from .ids import CircleId, EntityId, PointId, SegmentId
from .units import AngleLike, LengthLike, as_angle, as_length

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_]+")


def variable_prefix(entity_id: EntityId, label: Optional[str]) -> str:
    """Return the unique z3 name prefix for an entity."""

    base = _UNSAFE_CHARS_RE.sub("_", label).strip("_") if label else ""
    base = base or entity_id.kind[0]
    return f"{base}_{entity_id.index}g{entity_id.generation}"


def _point_id(value: Union["Point", PointId]) -> PointId:
    return value.id if isinstance(value, Point) else value


def _segment_id(value: Union["Segment", SegmentId]) -> SegmentId:
    return value.id if isinstance(value, Segment) else value


@dataclass(frozen=True)
class Point:
    id: PointId
    label: Optional[str] = None
    x: z3.ArithRef = field(init=False, repr=False, compare=False)
    y: z3.ArithRef = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        prefix = variable_prefix(self.id, self.label)
        object.__setattr__(self, "x", z3.Real(f"{prefix}_x"))
        object.__setattr__(self, "y", z3.Real(f"{prefix}_y"))

    def display_name(self) -> str:
        return self.label or f"Point{self.id.index}"

    def variables(self) -> Tuple[z3.ArithRef, z3.ArithRef]:
        return (self.x, self.y)

    def fixed_at(self, x: LengthLike, y: LengthLike) -> FixedPosition:
        return FixedPosition(self.id, as_length(x), as_length(y))

    def coincident_with(self, other: Union["Point", PointId]) -> CoincidentPoints:
        return CoincidentPoints(self.id, _point_id(other))


@dataclass(frozen=True)
class Segment:
    id: SegmentId
    start: PointId
    end: PointId
    label: Optional[str] = None

    def display_name(self) -> str:
        return self.label or f"Segment{self.id.index}"

    def endpoints(self) -> Tuple[PointId, PointId]:
        return (self.start, self.end)

    def contains_point(self, point: Union[Point, PointId]) -> bool:
        """Return ``True`` when ``point`` is one of the endpoints."""

        pid = _point_id(point)
        return pid == self.start or pid == self.end

    def length_equals(self, length: LengthLike) -> SegmentLength:
        return SegmentLength(self.id, as_length(length))

    def parallel_to(self, other: Union["Segment", SegmentId]) -> ParallelSegments:
        return ParallelSegments(self.id, _segment_id(other))

    def perpendicular_to(self, other: Union["Segment", SegmentId]) -> PerpendicularSegments:
        return PerpendicularSegments(self.id, _segment_id(other))

    def contains(self, point: Union[Point, PointId]) -> PointOnSegment:
        """Constrain ``point`` to lie on this segment."""

        return PointOnSegment(self.id, _point_id(point))

    def angle_with(self, other: Union["Segment", SegmentId], angle: AngleLike) -> AngleBetweenSegments:
        return AngleBetweenSegments(self.id, _segment_id(other), as_angle(angle))


@dataclass(frozen=True)
class Circle:
    id: CircleId
    center: PointId
    label: Optional[str] = None
    radius: z3.ArithRef = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        prefix = variable_prefix(self.id, self.label)
        object.__setattr__(self, "radius", z3.Real(f"{prefix}_radius"))

    def display_name(self) -> str:
        return self.label or f"Circle{self.id.index}"

    def center_point(self) -> PointId:
        return self.center

    def radius_equals(self, radius: LengthLike) -> CircleRadius:
        return CircleRadius(self.id, as_length(radius))


Entity = Union[Point, Segment, Circle]


__all__ = [
    "Point",
    "Segment",
    "Circle",
    "Entity",
    "variable_prefix",
]
