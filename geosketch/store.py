"""Generational arena storage for sketch entities."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Iterator, List, Optional, Tuple, Type, TypeVar

from .entities import Circle, Entity, Point, Segment
from .errors import EntityInUseError, InvalidEntityError, SketchFrozenError
from .ids import ID_TYPES, CircleId, EntityId, PointId, SegmentId

logger = logging.getLogger(__name__)

T = TypeVar("T")
I = TypeVar("I", bound=EntityId)


@dataclass
class _Slot(Generic[T]):
    generation: int
    value: Optional[T]


class Arena(Generic[I, T]):
    """Slot storage whose identifiers carry a generation tag.

    Removing a value bumps the slot's generation, so identifiers issued before
    the removal are reported as stale instead of aliasing whatever is stored
    in the slot next.
    """

    def __init__(self, id_type: Type[I]) -> None:
        self.id_type = id_type
        self._slots: List[_Slot[T]] = []
        self._free: List[int] = []

    def insert_with(self, make: Callable[[I], T]) -> I:
        if self._free:
            index = self._free.pop()
            slot = self._slots[index]
            entity_id = self.id_type(index, slot.generation)
            slot.value = make(entity_id)
        else:
            index = len(self._slots)
            entity_id = self.id_type(index, 0)
            self._slots.append(_Slot(0, make(entity_id)))
        return entity_id

    def get(self, entity_id: EntityId) -> T:
        if not isinstance(entity_id, self.id_type):
            raise InvalidEntityError(
                entity_id,
                InvalidEntityError.WRONG_KIND,
                f"expected a {self.id_type.__name__}, got {entity_id!r}",
            )
        if not 0 <= entity_id.index < len(self._slots):
            raise InvalidEntityError(
                entity_id,
                InvalidEntityError.OUT_OF_RANGE,
                f"{entity_id!r} is out of range (arena holds {len(self._slots)} slots)",
            )
        slot = self._slots[entity_id.index]
        if slot.generation != entity_id.generation or slot.value is None:
            raise InvalidEntityError(
                entity_id,
                InvalidEntityError.GENERATION_MISMATCH,
                f"{entity_id!r} is stale (slot is at generation {slot.generation})",
            )
        return slot.value

    def contains(self, entity_id: EntityId) -> bool:
        try:
            self.get(entity_id)
        except InvalidEntityError:
            return False
        return True

    def remove(self, entity_id: I) -> T:
        value = self.get(entity_id)
        slot = self._slots[entity_id.index]
        slot.value = None
        slot.generation += 1
        self._free.append(entity_id.index)
        return value

    def items(self) -> Iterator[Tuple[I, T]]:
        for index, slot in enumerate(self._slots):
            if slot.value is not None:
                yield self.id_type(index, slot.generation), slot.value

    def __len__(self) -> int:
        return sum(1 for slot in self._slots if slot.value is not None)


class EntityStore:
    """Owns every point, segment and circle of one sketch.

    The store is open until :meth:`freeze` is called; afterwards creation
    raises :class:`SketchFrozenError`.  Lookups always validate the
    identifier's kind, index and generation.
    """

    def __init__(self) -> None:
        self.points: Arena[PointId, Point] = Arena(PointId)
        self.segments: Arena[SegmentId, Segment] = Arena(SegmentId)
        self.circles: Arena[CircleId, Circle] = Arena(CircleId)
        self._arenas: Dict[str, Arena] = {
            PointId.kind: self.points,
            SegmentId.kind: self.segments,
            CircleId.kind: self.circles,
        }
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        if not self._frozen:
            logger.info(
                "Freezing entity store: %d points, %d segments, %d circles",
                len(self.points),
                len(self.segments),
                len(self.circles),
            )
        self._frozen = True

    def _ensure_open(self) -> None:
        if self._frozen:
            raise SketchFrozenError("entities cannot be added once solving has started")

    def create(
        self,
        kind: str,
        label: Optional[str] = None,
        *,
        start: Optional[PointId] = None,
        end: Optional[PointId] = None,
        center: Optional[PointId] = None,
    ) -> EntityId:
        """Allocate a new entity of ``kind`` and return its identifier.

        Segments need ``start`` and ``end``; circles need ``center``.  Those
        references must be live points.
        """

        self._ensure_open()
        if kind not in ID_TYPES:
            raise ValueError(f"unknown entity kind {kind!r}")
        if kind == PointId.kind:
            entity_id: EntityId = self.points.insert_with(lambda pid: Point(pid, label))
        elif kind == SegmentId.kind:
            if start is None or end is None:
                raise ValueError("a segment needs both start and end points")
            self.points.get(start)
            self.points.get(end)
            entity_id = self.segments.insert_with(lambda sid: Segment(sid, start, end, label))
        else:
            if center is None:
                raise ValueError("a circle needs a center point")
            self.points.get(center)
            entity_id = self.circles.insert_with(lambda cid: Circle(cid, center, label))
        logger.debug("Created %r label=%r", entity_id, label)
        return entity_id

    def referrers(self, point_id: PointId) -> Tuple[EntityId, ...]:
        """Identifiers of the live segments and circles built on ``point_id``."""

        users: List[EntityId] = [
            sid for sid, segment in self.segments.items() if point_id in segment.endpoints()
        ]
        users.extend(cid for cid, circle in self.circles.items() if circle.center == point_id)
        return tuple(users)

    def remove(self, entity_id: EntityId) -> Entity:
        """Release ``entity_id``; identifiers issued for it become stale.

        A point that a live segment or circle still references cannot be
        removed; remove those entities first.
        """

        self._ensure_open()
        arena = self._arenas.get(getattr(entity_id, "kind", None))
        if arena is None:
            raise InvalidEntityError(entity_id, InvalidEntityError.WRONG_KIND)
        if isinstance(entity_id, PointId):
            arena.get(entity_id)
            users = self.referrers(entity_id)
            if users:
                raise EntityInUseError(entity_id, users)
        entity = arena.remove(entity_id)
        logger.debug("Removed %r", entity_id)
        return entity

    def get(self, entity_id: EntityId) -> Entity:
        arena = self._arenas.get(getattr(entity_id, "kind", None))
        if arena is None:
            raise InvalidEntityError(entity_id, InvalidEntityError.WRONG_KIND)
        return arena.get(entity_id)

    def point(self, point_id: PointId) -> Point:
        return self.points.get(point_id)

    def segment(self, segment_id: SegmentId) -> Segment:
        return self.segments.get(segment_id)

    def circle(self, circle_id: CircleId) -> Circle:
        return self.circles.get(circle_id)

    def contains(self, entity_id: EntityId) -> bool:
        try:
            self.get(entity_id)
        except InvalidEntityError:
            return False
        return True

    def __len__(self) -> int:
        return len(self.points) + len(self.segments) + len(self.circles)


__all__ = ["Arena", "EntityStore"]
