"""Unit-tagged scalar values and their bounded conversion to rationals."""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from fractions import Fraction
from typing import Union

from .errors import InvalidParameterError

logger = logging.getLogger(__name__)

_INCH_IN_METERS = 0.0254
_MAX_DECIMALS = 15


def _finite(value: object, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(f"{what} must be a real number, got {value!r}")
    result = float(value)
    if not math.isfinite(result):
        raise InvalidParameterError(f"{what} must be finite, got {result!r}")
    return result


@dataclass(frozen=True, order=True)
class Length:
    """A distance stored in meters."""

    meters_value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "meters_value", _finite(self.meters_value, "length"))

    @classmethod
    def meters(cls, value: float) -> "Length":
        return cls(value)

    @classmethod
    def millimeters(cls, value: float) -> "Length":
        return cls(_finite(value, "length") / 1000.0)

    @classmethod
    def centimeters(cls, value: float) -> "Length":
        return cls(_finite(value, "length") / 100.0)

    @classmethod
    def inches(cls, value: float) -> "Length":
        return cls(_finite(value, "length") * _INCH_IN_METERS)

    def to_meters(self) -> float:
        return self.meters_value

    def to_millimeters(self) -> float:
        return self.meters_value * 1000.0

    def to_centimeters(self) -> float:
        return self.meters_value * 100.0

    def to_inches(self) -> float:
        return self.meters_value / _INCH_IN_METERS

    def is_zero(self, epsilon: float = 1e-12) -> bool:
        return abs(self.meters_value) < epsilon

    def __add__(self, other: "Length") -> "Length":
        if not isinstance(other, Length):
            return NotImplemented
        return Length(self.meters_value + other.meters_value)

    def __sub__(self, other: "Length") -> "Length":
        if not isinstance(other, Length):
            return NotImplemented
        return Length(self.meters_value - other.meters_value)

    def __mul__(self, other):
        if isinstance(other, Length):
            return Area(self.meters_value * other.meters_value)
        if isinstance(other, numbers.Real):
            return Length(self.meters_value * float(other))
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Real):
            return Length(self.meters_value * float(other))
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Length):
            return self.meters_value / other.meters_value
        if isinstance(other, numbers.Real):
            return Length(self.meters_value / float(other))
        return NotImplemented

    def __neg__(self) -> "Length":
        return Length(-self.meters_value)

    def __str__(self) -> str:
        return f"{self.meters_value:.6g}m"


@dataclass(frozen=True, order=True)
class Area:
    """A surface area stored in square meters."""

    square_meters_value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "square_meters_value", _finite(self.square_meters_value, "area"))

    @classmethod
    def square_meters(cls, value: float) -> "Area":
        return cls(value)

    def to_square_meters(self) -> float:
        return self.square_meters_value

    def to_square_millimeters(self) -> float:
        return self.square_meters_value * 1_000_000.0

    def __add__(self, other: "Area") -> "Area":
        if not isinstance(other, Area):
            return NotImplemented
        return Area(self.square_meters_value + other.square_meters_value)

    def __sub__(self, other: "Area") -> "Area":
        if not isinstance(other, Area):
            return NotImplemented
        return Area(self.square_meters_value - other.square_meters_value)

    def __mul__(self, other):
        if isinstance(other, numbers.Real):
            return Area(self.square_meters_value * float(other))
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Area):
            return self.square_meters_value / other.square_meters_value
        if isinstance(other, Length):
            return Length(self.square_meters_value / other.meters_value)
        if isinstance(other, numbers.Real):
            return Area(self.square_meters_value / float(other))
        return NotImplemented


@dataclass(frozen=True, order=True)
class Angle:
    """An angle stored in radians."""

    radians_value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "radians_value", _finite(self.radians_value, "angle"))

    @classmethod
    def radians(cls, value: float) -> "Angle":
        return cls(value)

    @classmethod
    def degrees(cls, value: float) -> "Angle":
        return cls(math.radians(_finite(value, "angle")))

    def to_radians(self) -> float:
        return self.radians_value

    def to_degrees(self) -> float:
        return math.degrees(self.radians_value)

    def normalize(self) -> "Angle":
        """Return the equivalent angle in ``[0, 2*pi)``."""

        return Angle(self.radians_value % math.tau)

    def normalize_symmetric(self) -> "Angle":
        """Return the equivalent angle in ``[-pi, pi)``."""

        rad = self.radians_value % math.tau
        if rad >= math.pi:
            rad -= math.tau
        return Angle(rad)

    def sin(self) -> float:
        return math.sin(self.radians_value)

    def cos(self) -> float:
        return math.cos(self.radians_value)

    def tan(self) -> float:
        return math.tan(self.radians_value)

    def is_zero(self, epsilon: float = 1e-12) -> bool:
        return abs(self.radians_value) < epsilon

    def __add__(self, other: "Angle") -> "Angle":
        if not isinstance(other, Angle):
            return NotImplemented
        return Angle(self.radians_value + other.radians_value)

    def __sub__(self, other: "Angle") -> "Angle":
        if not isinstance(other, Angle):
            return NotImplemented
        return Angle(self.radians_value - other.radians_value)

    def __mul__(self, other):
        if isinstance(other, numbers.Real):
            return Angle(self.radians_value * float(other))
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Angle):
            return self.radians_value / other.radians_value
        if isinstance(other, numbers.Real):
            return Angle(self.radians_value / float(other))
        return NotImplemented

    def __neg__(self) -> "Angle":
        return Angle(-self.radians_value)

    def __str__(self) -> str:
        return f"{self.to_degrees():.6g}deg"


LengthLike = Union[Length, float, int]
AngleLike = Union[Angle, float, int]


def as_length(value: LengthLike) -> Length:
    """Coerce ``value`` to :class:`Length`; bare numbers are read as meters."""

    if isinstance(value, Length):
        return value
    return Length(_finite(value, "length"))


def as_angle(value: AngleLike) -> Angle:
    """Coerce ``value`` to :class:`Angle`; bare numbers are read as radians."""

    if isinstance(value, Angle):
        return value
    return Angle(_finite(value, "angle"))


def to_fraction(value: float, decimals: int) -> Fraction:
    """Round ``value`` to ``decimals`` decimal places and return it as an exact rational.

    The conversion goes through ``repr`` so binary noise below the 17th
    significant digit never reaches the solver; the stated resolution is the
    only approximation applied.
    """

    if isinstance(decimals, bool) or not isinstance(decimals, int) or not 0 <= decimals <= _MAX_DECIMALS:
        raise InvalidParameterError(f"decimals must be an int in [0, {_MAX_DECIMALS}], got {decimals!r}")
    exact = Fraction(repr(_finite(value, "value")))
    scale = 10 ** decimals
    rounded = Fraction(round(exact * scale), scale)
    if rounded == 0 and exact != 0:
        logger.warning("Value %r rounds to zero at %d decimal places", value, decimals)
    return rounded


__all__ = [
    "Length",
    "Area",
    "Angle",
    "LengthLike",
    "AngleLike",
    "as_length",
    "as_angle",
    "to_fraction",
]
