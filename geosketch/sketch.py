"""Sketch builder: owns the entity store and the pending constraint list."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .constraints import Constraint, is_constraint
from .entities import Circle, Entity, Point, Segment
from .errors import SketchFrozenError
from .ids import CircleId, EntityId, PointId, SegmentId
from .solver import Solution, SolveOptions, solve
from .store import EntityStore

logger = logging.getLogger(__name__)


def _point_id(value: Union[Point, PointId]) -> PointId:
    return value.id if isinstance(value, Point) else value


class Sketch:
    """A 2D sketch under construction.

    Entities and constraints may be added until the first call to
    :meth:`solve`.  After that the sketch is frozen, but it can be solved
    again; every solve compiles the same constraints into a fresh session.
    """

    def __init__(self) -> None:
        self.store = EntityStore()
        self._constraints: List[Constraint] = []

    @property
    def frozen(self) -> bool:
        return self.store.frozen

    # ------------------------------------------------------------------
    # Entities

    def add_point(self, label: Optional[str] = None) -> Point:
        pid = self.store.create(PointId.kind, label)
        return self.store.point(pid)

    def add_segment(
        self,
        start: Union[Point, PointId],
        end: Union[Point, PointId],
        label: Optional[str] = None,
    ) -> Segment:
        sid = self.store.create(SegmentId.kind, label, start=_point_id(start), end=_point_id(end))
        return self.store.segment(sid)

    def add_circle(self, center: Union[Point, PointId], label: Optional[str] = None) -> Circle:
        cid = self.store.create(CircleId.kind, label, center=_point_id(center))
        return self.store.circle(cid)

    def get(self, entity_id: EntityId) -> Entity:
        return self.store.get(entity_id)

    def get_point(self, point_id: PointId) -> Point:
        return self.store.point(point_id)

    def get_segment(self, segment_id: SegmentId) -> Segment:
        return self.store.segment(segment_id)

    def get_circle(self, circle_id: CircleId) -> Circle:
        return self.store.circle(circle_id)

    def points(self) -> Iterator[Point]:
        for _, point in self.store.points.items():
            yield point

    def segments(self) -> Iterator[Segment]:
        for _, segment in self.store.segments.items():
            yield segment

    def circles(self) -> Iterator[Circle]:
        for _, circle in self.store.circles.items():
            yield circle

    # ------------------------------------------------------------------
    # Constraints

    @property
    def constraints(self) -> Tuple[Constraint, ...]:
        return tuple(self._constraints)

    def add_constraint(self, constraint: Constraint) -> None:
        if self.frozen:
            raise SketchFrozenError("constraints cannot be added once solving has started")
        if not is_constraint(constraint):
            raise TypeError(f"expected a constraint record, got {constraint!r}")
        self._constraints.append(constraint)
        logger.debug("Added constraint: %s", constraint.describe())

    def add_constraints(self, constraints: Iterable[Constraint]) -> None:
        for constraint in constraints:
            self.add_constraint(constraint)

    # ------------------------------------------------------------------
    # Solving

    def solve(self, options: Optional[SolveOptions] = None) -> Solution:
        return solve(self.store, self._constraints, options)

    def __repr__(self) -> str:
        return (
            f"Sketch(points={len(self.store.points)}, segments={len(self.store.segments)}, "
            f"circles={len(self.store.circles)}, constraints={len(self._constraints)}, "
            f"frozen={self.frozen})"
        )


__all__ = ["Sketch"]
