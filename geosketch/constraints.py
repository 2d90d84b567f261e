"""Constraint records.

Constraints are immutable data: building one never touches the entity store
or a solving session.  The set of kinds is closed; ``CONSTRAINT_TYPES`` lists
every variant and the compiler handles each of them explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Tuple, Union

from .errors import InvalidParameterError
from .ids import CircleId, EntityId, PointId, SegmentId
from .units import Angle, Length, as_angle, as_length


def _check_id(value: object, expected: type, field_name: str) -> None:
    if not isinstance(value, expected):
        raise TypeError(f"{field_name} must be a {expected.__name__}, got {value!r}")


@dataclass(frozen=True)
class FixedPosition:
    """Pin ``point`` at ``(x, y)``."""

    point: PointId
    x: Length
    y: Length

    kind: ClassVar[str] = "fixed_position"

    def __post_init__(self) -> None:
        _check_id(self.point, PointId, "point")
        object.__setattr__(self, "x", as_length(self.x))
        object.__setattr__(self, "y", as_length(self.y))

    def references(self) -> Tuple[EntityId, ...]:
        return (self.point,)

    def describe(self) -> str:
        return f"{self.point!r} is fixed at ({self.x.to_meters():.3f}m, {self.y.to_meters():.3f}m)"


@dataclass(frozen=True)
class CoincidentPoints:
    point1: PointId
    point2: PointId

    kind: ClassVar[str] = "coincident_points"

    def __post_init__(self) -> None:
        _check_id(self.point1, PointId, "point1")
        _check_id(self.point2, PointId, "point2")

    def references(self) -> Tuple[EntityId, ...]:
        return (self.point1, self.point2)

    def describe(self) -> str:
        return f"{self.point1!r} and {self.point2!r} are coincident"


@dataclass(frozen=True)
class SegmentLength:
    segment: SegmentId
    length: Length

    kind: ClassVar[str] = "segment_length"

    def __post_init__(self) -> None:
        _check_id(self.segment, SegmentId, "segment")
        length = as_length(self.length)
        if length.to_meters() < 0:
            raise InvalidParameterError(f"segment length must be non-negative, got {length}")
        object.__setattr__(self, "length", length)

    def references(self) -> Tuple[EntityId, ...]:
        return (self.segment,)

    def describe(self) -> str:
        return f"{self.segment!r} has length {self.length.to_meters():.3f}m"


@dataclass(frozen=True)
class ParallelSegments:
    segment1: SegmentId
    segment2: SegmentId

    kind: ClassVar[str] = "parallel"

    def __post_init__(self) -> None:
        _check_id(self.segment1, SegmentId, "segment1")
        _check_id(self.segment2, SegmentId, "segment2")

    def references(self) -> Tuple[EntityId, ...]:
        return (self.segment1, self.segment2)

    def describe(self) -> str:
        return f"{self.segment1!r} and {self.segment2!r} are parallel"


@dataclass(frozen=True)
class PerpendicularSegments:
    segment1: SegmentId
    segment2: SegmentId

    kind: ClassVar[str] = "perpendicular"

    def __post_init__(self) -> None:
        _check_id(self.segment1, SegmentId, "segment1")
        _check_id(self.segment2, SegmentId, "segment2")

    def references(self) -> Tuple[EntityId, ...]:
        return (self.segment1, self.segment2)

    def describe(self) -> str:
        return f"{self.segment1!r} and {self.segment2!r} are perpendicular"


@dataclass(frozen=True)
class PointOnSegment:
    """``point`` lies between the endpoints of ``segment`` (inclusive)."""

    segment: SegmentId
    point: PointId

    kind: ClassVar[str] = "point_on_segment"

    def __post_init__(self) -> None:
        _check_id(self.segment, SegmentId, "segment")
        _check_id(self.point, PointId, "point")

    def references(self) -> Tuple[EntityId, ...]:
        return (self.segment, self.point)

    def describe(self) -> str:
        return f"{self.point!r} lies on {self.segment!r}"


@dataclass(frozen=True)
class AngleBetweenSegments:
    """The directions of ``segment1`` and ``segment2`` enclose ``angle``."""

    segment1: SegmentId
    segment2: SegmentId
    angle: Angle

    kind: ClassVar[str] = "angle_between"

    def __post_init__(self) -> None:
        _check_id(self.segment1, SegmentId, "segment1")
        _check_id(self.segment2, SegmentId, "segment2")
        object.__setattr__(self, "angle", as_angle(self.angle))

    def references(self) -> Tuple[EntityId, ...]:
        return (self.segment1, self.segment2)

    def describe(self) -> str:
        return f"{self.segment1!r} and {self.segment2!r} enclose {self.angle.to_degrees():.3f}deg"


@dataclass(frozen=True)
class CircleRadius:
    circle: CircleId
    radius: Length

    kind: ClassVar[str] = "circle_radius"

    def __post_init__(self) -> None:
        _check_id(self.circle, CircleId, "circle")
        radius = as_length(self.radius)
        if radius.to_meters() < 0:
            raise InvalidParameterError(f"circle radius must be non-negative, got {radius}")
        object.__setattr__(self, "radius", radius)

    def references(self) -> Tuple[EntityId, ...]:
        return (self.circle,)

    def describe(self) -> str:
        return f"{self.circle!r} has radius {self.radius.to_meters():.3f}m"


Constraint = Union[
    FixedPosition,
    CoincidentPoints,
    SegmentLength,
    ParallelSegments,
    PerpendicularSegments,
    PointOnSegment,
    AngleBetweenSegments,
    CircleRadius,
]

CONSTRAINT_TYPES: Tuple[type, ...] = (
    FixedPosition,
    CoincidentPoints,
    SegmentLength,
    ParallelSegments,
    PerpendicularSegments,
    PointOnSegment,
    AngleBetweenSegments,
    CircleRadius,
)


def is_constraint(value: object) -> bool:
    return isinstance(value, CONSTRAINT_TYPES)


__all__ = [
    "FixedPosition",
    "CoincidentPoints",
    "SegmentLength",
    "ParallelSegments",
    "PerpendicularSegments",
    "PointOnSegment",
    "AngleBetweenSegments",
    "CircleRadius",
    "Constraint",
    "CONSTRAINT_TYPES",
    "is_constraint",
]
