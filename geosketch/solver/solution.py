"""Extraction of float geometry from a z3 model."""

from __future__ import annotations

import logging
import math
import threading
from typing import Dict, Optional, Union

import numpy as np
import z3

from ..entities import Circle, Point, Segment
from ..ids import CircleId, PointId, SegmentId
from ..store import EntityStore
from .model import CircleParameters, Point2D, SegmentParameters
from .utils import model_value_to_float, normalize_point_coords

logger = logging.getLogger(__name__)

PointRef = Union[Point, PointId]
SegmentRef = Union[Segment, SegmentId]
CircleRef = Union[Circle, CircleId]


def _pid(ref: PointRef) -> PointId:
    return ref.id if isinstance(ref, Point) else ref


def _sid(ref: SegmentRef) -> SegmentId:
    return ref.id if isinstance(ref, Segment) else ref


def _cid(ref: CircleRef) -> CircleId:
    return ref.id if isinstance(ref, Circle) else ref


class Solution:
    """Read-only view of one satisfying configuration.

    Values are pulled out of the model on first request and cached per
    identifier, so repeated queries never touch the model again and return
    identical floats.  A failed extraction caches nothing; values already
    cached for other entities stay valid.  The cache is guarded by a lock, so
    a solution can be shared between reader threads.
    """

    def __init__(self, store: EntityStore, model: z3.ModelRef, *, algebraic_precision: int = 30) -> None:
        self._store = store
        self._model = model
        self._precision = algebraic_precision
        self._lock = threading.RLock()
        self._points: Dict[PointId, Point2D] = {}
        self._radii: Dict[CircleId, float] = {}
        self._segments: Dict[SegmentId, SegmentParameters] = {}
        self._circles: Dict[CircleId, CircleParameters] = {}

    @property
    def model(self) -> z3.ModelRef:
        return self._model

    def _evaluate(self, variable: z3.ArithRef) -> float:
        value = self._model.eval(variable, model_completion=True)
        return model_value_to_float(value, str(variable), self._precision)

    # ------------------------------------------------------------------
    # Primary values

    def point(self, point: PointRef) -> Point2D:
        pid = _pid(point)
        with self._lock:
            cached = self._points.get(pid)
            if cached is not None:
                return cached
            entity = self._store.point(pid)
            coords = (self._evaluate(entity.x), self._evaluate(entity.y))
            self._points[pid] = coords
            logger.debug("Extracted %r -> (%.9g, %.9g)", pid, *coords)
            return coords

    def radius(self, circle: CircleRef) -> float:
        cid = _cid(circle)
        with self._lock:
            cached = self._radii.get(cid)
            if cached is not None:
                return cached
            value = self._evaluate(self._store.circle(cid).radius)
            self._radii[cid] = value
            return value

    # ------------------------------------------------------------------
    # Derived quantities

    def segment(self, segment: SegmentRef) -> SegmentParameters:
        sid = _sid(segment)
        with self._lock:
            cached = self._segments.get(sid)
            if cached is not None:
                return cached
            entity = self._store.segment(sid)
            start = self.point(entity.start)
            end = self.point(entity.end)
            dx, dy = np.subtract(end, start)
            params = SegmentParameters(
                start=start,
                end=end,
                length=float(np.hypot(dx, dy)),
                angle=float(np.arctan2(dy, dx)),
            )
            self._segments[sid] = params
            return params

    def circle(self, circle: CircleRef) -> CircleParameters:
        cid = _cid(circle)
        with self._lock:
            cached = self._circles.get(cid)
            if cached is not None:
                return cached
            entity = self._store.circle(cid)
            center = self.point(entity.center)
            radius = self.radius(cid)
            params = CircleParameters(
                center=center,
                radius=radius,
                circumference=2.0 * math.pi * radius,
                area=math.pi * radius * radius,
            )
            self._circles[cid] = params
            return params

    def segment_length(self, segment: SegmentRef) -> float:
        return self.segment(segment).length

    def segment_angle(self, segment: SegmentRef) -> float:
        """Direction of start->end in radians, in ``(-pi, pi]``."""

        return self.segment(segment).angle

    def circle_circumference(self, circle: CircleRef) -> float:
        return self.circle(circle).circumference

    def circle_area(self, circle: CircleRef) -> float:
        return self.circle(circle).area

    def distance(self, point1: PointRef, point2: PointRef) -> float:
        a = np.asarray(self.point(point1))
        b = np.asarray(self.point(point2))
        return float(np.linalg.norm(b - a))

    def angle_between(self, segment1: SegmentRef, segment2: SegmentRef) -> Optional[float]:
        """Unsigned angle in ``[0, pi]`` between two segment directions.

        Returns ``None`` when either segment has zero length.
        """

        p1 = self.segment(segment1)
        p2 = self.segment(segment2)
        if p1.length == 0.0 or p2.length == 0.0:
            return None
        d1 = np.subtract(p1.end, p1.start) / p1.length
        d2 = np.subtract(p2.end, p2.start) / p2.length
        return float(np.arccos(np.clip(np.dot(d1, d2), -1.0, 1.0)))

    # ------------------------------------------------------------------
    # Bulk access for downstream consumers

    def all_point_coordinates(self) -> Dict[PointId, Point2D]:
        return {pid: self.point(pid) for pid, _ in self._store.points.items()}

    def normalized_point_coords(self, scale: float = 100.0) -> Dict[PointId, Point2D]:
        """Return every point's coordinates mapped into ``[0, scale]``."""

        return normalize_point_coords(self.all_point_coordinates(), scale=scale)

    def __repr__(self) -> str:
        return f"Solution(points={len(self._store.points)}, cached={len(self._points)})"


__all__ = ["Solution"]
