"""Translation of constraint records into z3 real-arithmetic assertions."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import z3

from ..constraints import (
    AngleBetweenSegments,
    CircleRadius,
    CoincidentPoints,
    Constraint,
    FixedPosition,
    ParallelSegments,
    PerpendicularSegments,
    PointOnSegment,
    SegmentLength,
    is_constraint,
)
from ..errors import InvalidEntityError
from ..ids import CircleId, EntityId, SegmentId
from ..logging_utils import apply_debug_logging
from ..store import EntityStore
from ..units import to_fraction
from .config import get_compiler_config
from .model import CompiledBatch, CompiledConstraint, CompilerConfig

logger = logging.getLogger(__name__)

Vector = Tuple[z3.ArithRef, z3.ArithRef]


def _tag(entity_id: EntityId) -> str:
    return f"{entity_id.kind[0]}{entity_id.index}g{entity_id.generation}"


def rational(value: float, decimals: int) -> z3.RatNumRef:
    """Return ``value`` as a z3 rational literal rounded to ``decimals`` places."""

    frac = to_fraction(value, decimals)
    return z3.Q(frac.numerator, frac.denominator)


class _Compiler:
    """Turns constraint records into assertions for one solve batch.

    Every reference is validated before the first assertion is built, so a
    bad identifier never leaves a partially compiled batch behind.
    """

    def __init__(self, store: EntityStore, config: CompilerConfig) -> None:
        self.store = store
        self.config = config

    # ------------------------------------------------------------------
    # Reference helpers

    def validate(self, constraints: Sequence[Constraint]) -> None:
        for constraint in constraints:
            if not is_constraint(constraint):
                raise TypeError(f"unsupported constraint record {constraint!r}")
            for entity_id in constraint.references():
                try:
                    entity = self.store.get(entity_id)
                except InvalidEntityError:
                    logger.info("Rejecting batch: %s references %r", constraint.kind, entity_id)
                    raise
                if isinstance(entity_id, SegmentId):
                    self.store.point(entity.start)
                    self.store.point(entity.end)
                elif isinstance(entity_id, CircleId):
                    self.store.point(entity.center)

    def point_vars(self, point_id) -> Vector:
        return self.store.point(point_id).variables()

    def direction(self, segment_id: SegmentId) -> Vector:
        segment = self.store.segment(segment_id)
        sx, sy = self.point_vars(segment.start)
        ex, ey = self.point_vars(segment.end)
        return ex - sx, ey - sy

    def length_literal(self, meters: float, *, squared: bool = False) -> z3.RatNumRef:
        frac = to_fraction(meters, self.config.length_decimals)
        if squared:
            frac = frac * frac
        return z3.Q(frac.numerator, frac.denominator)

    # ------------------------------------------------------------------
    # Entry point

    def compile(self, constraints: Sequence[Constraint]) -> CompiledBatch:
        self.validate(constraints)
        batch = CompiledBatch()
        for constraint in constraints:
            record = self._dispatch(constraint)
            logger.debug(
                "Compiled %s into %d assertion(s): %s",
                constraint.kind,
                len(record.assertions),
                record.description,
            )
            batch.records.append(record)
        logger.info(
            "Compiled %d constraint(s) into %d assertion(s) with %d parameter variable(s)",
            len(batch.records),
            len(batch.assertions),
            len(batch.parameters),
        )
        return batch

    def _dispatch(self, constraint: Constraint) -> CompiledConstraint:
        if isinstance(constraint, FixedPosition):
            return self._fixed_position(constraint)
        if isinstance(constraint, CoincidentPoints):
            return self._coincident_points(constraint)
        if isinstance(constraint, SegmentLength):
            return self._segment_length(constraint)
        if isinstance(constraint, ParallelSegments):
            return self._parallel(constraint)
        if isinstance(constraint, PerpendicularSegments):
            return self._perpendicular(constraint)
        if isinstance(constraint, PointOnSegment):
            return self._point_on_segment(constraint)
        if isinstance(constraint, AngleBetweenSegments):
            return self._angle_between(constraint)
        if isinstance(constraint, CircleRadius):
            return self._circle_radius(constraint)
        raise TypeError(f"unsupported constraint record {constraint!r}")

    # ------------------------------------------------------------------
    # Handlers

    def _fixed_position(self, constraint: FixedPosition) -> CompiledConstraint:
        px, py = self.point_vars(constraint.point)
        decimals = self.config.length_decimals
        return CompiledConstraint(
            constraint,
            (
                px == rational(constraint.x.to_meters(), decimals),
                py == rational(constraint.y.to_meters(), decimals),
            ),
        )

    def _coincident_points(self, constraint: CoincidentPoints) -> CompiledConstraint:
        x1, y1 = self.point_vars(constraint.point1)
        x2, y2 = self.point_vars(constraint.point2)
        return CompiledConstraint(constraint, (x1 == x2, y1 == y2))

    def _segment_length(self, constraint: SegmentLength) -> CompiledConstraint:
        # Squared distance keeps the assertion polynomial.
        dx, dy = self.direction(constraint.segment)
        target = self.length_literal(constraint.length.to_meters(), squared=True)
        return CompiledConstraint(constraint, (dx * dx + dy * dy == target,))

    def _parallel(self, constraint: ParallelSegments) -> CompiledConstraint:
        dx1, dy1 = self.direction(constraint.segment1)
        dx2, dy2 = self.direction(constraint.segment2)
        return CompiledConstraint(constraint, (dx1 * dy2 - dy1 * dx2 == 0,))

    def _perpendicular(self, constraint: PerpendicularSegments) -> CompiledConstraint:
        dx1, dy1 = self.direction(constraint.segment1)
        dx2, dy2 = self.direction(constraint.segment2)
        return CompiledConstraint(constraint, (dx1 * dx2 + dy1 * dy2 == 0,))

    def _point_on_segment(self, constraint: PointOnSegment) -> CompiledConstraint:
        segment = self.store.segment(constraint.segment)
        sx, sy = self.point_vars(segment.start)
        ex, ey = self.point_vars(segment.end)
        px, py = self.point_vars(constraint.point)

        name = f"t.{_tag(constraint.segment)}.{_tag(constraint.point)}"
        t = z3.Real(name)
        return CompiledConstraint(
            constraint,
            (
                px == sx + t * (ex - sx),
                py == sy + t * (ey - sy),
                t >= 0,
                t <= 1,
            ),
            parameters=(name,),
        )

    def _angle_between(self, constraint: AngleBetweenSegments) -> CompiledConstraint:
        prefix = f"angle.{_tag(constraint.segment1)}.{_tag(constraint.segment2)}"
        names = tuple(f"{prefix}.{suffix}" for suffix in ("u1x", "u1y", "u2x", "u2y", "len1", "len2"))
        u1x, u1y, u2x, u2y, len1, len2 = (z3.Real(name) for name in names)

        dx1, dy1 = self.direction(constraint.segment1)
        dx2, dy2 = self.direction(constraint.segment2)
        cosine = rational(constraint.angle.cos(), self.config.angle_decimals)

        assertions: List[z3.BoolRef] = [
            u1x * u1x + u1y * u1y == 1,
            u2x * u2x + u2y * u2y == 1,
            len1 >= 0,
            len2 >= 0,
            # A non-negative helper length pins the unit vector to the segment's direction and sign.
            u1x * len1 == dx1,
            u1y * len1 == dy1,
            u2x * len2 == dx2,
            u2y * len2 == dy2,
            u1x * u2x + u1y * u2y == cosine,
        ]
        return CompiledConstraint(constraint, tuple(assertions), parameters=names)

    def _circle_radius(self, constraint: CircleRadius) -> CompiledConstraint:
        radius = self.store.circle(constraint.circle).radius
        target = self.length_literal(constraint.radius.to_meters())
        return CompiledConstraint(constraint, (radius == target, radius >= 0))


def translate(
    store: EntityStore,
    constraints: Iterable[Constraint],
    config: Optional[CompilerConfig] = None,
) -> CompiledBatch:
    """Compile ``constraints`` against ``store`` into a :class:`CompiledBatch`.

    Raises :class:`~geosketch.errors.InvalidEntityError` before any assertion is
    built when a constraint references a missing or stale entity.
    """

    items = list(constraints)
    active = config if config is not None else get_compiler_config()
    logger.info(
        "Translating %d constraint(s) over %d entities (length_decimals=%d, angle_decimals=%d)",
        len(items),
        len(store),
        active.length_decimals,
        active.angle_decimals,
    )
    return _Compiler(store, active).compile(items)


apply_debug_logging(globals(), logger=logger, skip={"translate", "rational", "_tag"})
