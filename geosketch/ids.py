"""Strongly typed generational identifiers for sketch entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Tuple


@dataclass(frozen=True, order=True)
class EntityId:
    """Opaque ``(index, generation)`` pair issued by an :class:`~geosketch.store.Arena`.

    Identifiers of different kinds never compare equal, even when their
    index and generation match.
    """

    index: int
    generation: int = 0

    kind: ClassVar[str] = "entity"

    def raw_parts(self) -> Tuple[int, int]:
        return (self.index, self.generation)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.index}, gen={self.generation})"


@dataclass(frozen=True, order=True, repr=False)
class PointId(EntityId):
    kind: ClassVar[str] = "point"


@dataclass(frozen=True, order=True, repr=False)
class SegmentId(EntityId):
    kind: ClassVar[str] = "segment"


@dataclass(frozen=True, order=True, repr=False)
class CircleId(EntityId):
    kind: ClassVar[str] = "circle"


ID_TYPES = {cls.kind: cls for cls in (PointId, SegmentId, CircleId)}


__all__ = ["EntityId", "PointId", "SegmentId", "CircleId", "ID_TYPES"]
