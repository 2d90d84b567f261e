"""Solver façade orchestrating compilation, the z3 check and extraction."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..constraints import Constraint
from ..store import EntityStore
from .config import get_compiler_config, set_compiler_config
from .model import (
    CheckResult,
    CheckStatus,
    CircleParameters,
    CompiledBatch,
    CompiledConstraint,
    CompilerConfig,
    Point2D,
    SegmentParameters,
    SolveOptions,
)
from .session import SolvingSession, run_batch
from .solution import Solution
from .translator import translate
from .utils import model_value_to_float, normalize_point_coords

logger = logging.getLogger(__name__)

if not logging.getLogger().handlers:  # pragma: no cover - depends on host application
    logging.basicConfig(level=logging.INFO)


def compile_sketch(
    store: EntityStore,
    constraints: Iterable[Constraint],
    options: Optional[SolveOptions] = None,
) -> CompiledBatch:
    """Compile ``constraints`` with the compiler settings carried by ``options``."""

    config = options.compiler if options is not None else None
    return translate(store, constraints, config)


def solve(
    store: EntityStore,
    constraints: Iterable[Constraint],
    options: Optional[SolveOptions] = None,
) -> Solution:
    """Freeze ``store``, check ``constraints`` in a fresh session and return the solution.

    Raises :class:`~geosketch.errors.InvalidEntityError` before the engine is
    touched, :class:`~geosketch.errors.UnsatisfiableError` when no configuration
    exists and :class:`~geosketch.errors.EngineUnknownError` when the engine
    gives up.
    """

    options = options or SolveOptions()
    items = list(constraints)
    store.freeze()
    logger.info(
        "Solving sketch with %d points, %d segments, %d circles and %d constraints",
        len(store.points),
        len(store.segments),
        len(store.circles),
        len(items),
    )
    batch = compile_sketch(store, items, options)
    model = run_batch(batch, timeout_ms=options.timeout_ms)
    return Solution(store, model, algebraic_precision=options.algebraic_precision)


__all__ = [
    "compile_sketch",
    "solve",
    "translate",
    "run_batch",
    "SolvingSession",
    "Solution",
    "SolveOptions",
    "CompilerConfig",
    "CompiledBatch",
    "CompiledConstraint",
    "CheckResult",
    "CheckStatus",
    "SegmentParameters",
    "CircleParameters",
    "Point2D",
    "get_compiler_config",
    "set_compiler_config",
    "model_value_to_float",
    "normalize_point_coords",
]
