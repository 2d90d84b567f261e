"""Error hierarchy shared by the sketch builder, compiler and extractor."""

from __future__ import annotations

from typing import Any, Optional, Tuple


class GeoSketchError(Exception):
    """Base class for every error raised by :mod:`geosketch`."""


class InvalidEntityError(GeoSketchError, LookupError):
    """Raised when an identifier does not resolve to a live entity.

    ``reason`` is one of ``"out-of-range"``, ``"generation-mismatch"`` or
    ``"wrong-kind"`` so callers can tell a never-issued identifier from a
    stale one.
    """

    OUT_OF_RANGE = "out-of-range"
    GENERATION_MISMATCH = "generation-mismatch"
    WRONG_KIND = "wrong-kind"

    def __init__(self, entity_id: Any, reason: str, message: Optional[str] = None):
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(message or f"{entity_id!r} is invalid ({reason})")


class UnsatisfiableError(GeoSketchError):
    """The engine proved that no configuration satisfies every constraint."""


class EngineUnknownError(GeoSketchError):
    """The engine could not decide satisfiability (timeout, resource limit, ...)."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"solving engine returned unknown: {reason}")


class ExtractionError(GeoSketchError):
    """A model value could not be turned into a finite float."""

    def __init__(self, variable: str, message: str):
        self.variable = variable
        super().__init__(f"{variable}: {message}")


class SketchFrozenError(GeoSketchError, RuntimeError):
    """Raised when a sketch is mutated after solving has started."""


class InvalidParameterError(GeoSketchError, ValueError):
    """Raised for unusable literal parameters (non-finite lengths, bad precision)."""


class SessionStateError(GeoSketchError, RuntimeError):
    """Raised when a one-shot solving session is used out of order or reused."""


class EntityInUseError(GeoSketchError, ValueError):
    """Raised when removing a point that a live segment or circle still references."""

    def __init__(self, entity_id: Any, users: Tuple[Any, ...]):
        self.entity_id = entity_id
        self.users = users
        names = ", ".join(repr(user) for user in users)
        super().__init__(f"{entity_id!r} is still referenced by {names}")


__all__ = [
    "GeoSketchError",
    "InvalidEntityError",
    "UnsatisfiableError",
    "EngineUnknownError",
    "ExtractionError",
    "SketchFrozenError",
    "InvalidParameterError",
    "SessionStateError",
    "EntityInUseError",
]
