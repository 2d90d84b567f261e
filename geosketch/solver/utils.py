"""Utility helpers shared across solver modules."""

from __future__ import annotations

import logging
import math
from fractions import Fraction
from typing import Dict, Mapping, TypeVar

import numpy as np
import z3

from ..errors import ExtractionError
from .model import Point2D

logger = logging.getLogger(__name__)

K = TypeVar("K")


def model_value_to_float(value: z3.ExprRef, name: str, precision: int = 30) -> float:
    """Convert a model value to ``float`` through its exact rational form.

    Irrational algebraic numbers are first approximated by a rational within
    ``10**-precision``.  Anything else, a zero denominator or a non-finite
    result raises :class:`ExtractionError`.
    """

    if z3.is_rational_value(value):
        numerator = value.numerator_as_long()
        denominator = value.denominator_as_long()
    elif z3.is_algebraic_value(value):
        approx = value.approx(precision)
        numerator = approx.numerator_as_long()
        denominator = approx.denominator_as_long()
        logger.debug("Approximated algebraic value of %s to %d digits", name, precision)
    else:
        raise ExtractionError(name, f"model value {value} is not a real numeral")

    if denominator == 0:
        raise ExtractionError(name, f"zero denominator in {numerator}/{denominator}")
    try:
        result = float(Fraction(numerator, denominator))
    except OverflowError as exc:
        raise ExtractionError(name, f"{numerator}/{denominator} overflows a float") from exc
    if not math.isfinite(result):
        raise ExtractionError(name, f"non-finite result for {numerator}/{denominator}")
    return result


def normalize_point_coords(
    coords: Mapping[K, Point2D],
    scale: float = 100.0,
) -> Dict[K, Point2D]:
    """Normalize a coordinate mapping into ``[0, scale]`` for each axis."""

    if not coords:
        return {}

    keys = list(coords.keys())
    values = np.array([coords[key] for key in keys], dtype=float)
    mins = values.min(axis=0)
    spans = values.max(axis=0) - mins
    safe_spans = np.where(spans == 0, 1.0, spans)
    scaled = np.where(spans == 0, 0.0, (values - mins) / safe_spans) * scale

    normalized: Dict[K, Point2D] = {
        key: (float(x), float(y)) for key, (x, y) in zip(keys, scaled)
    }
    logger.info("Normalized coordinates for %d points with scale=%s", len(coords), scale)
    return normalized
