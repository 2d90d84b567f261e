"""Core data structures for the solver pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import z3

from ..constraints import Constraint

Point2D = Tuple[float, float]


@dataclass
class CompilerConfig:
    """Decimal resolution used when literal parameters become rationals."""

    length_decimals: int = 6
    angle_decimals: int = 9


@dataclass
class SolveOptions:
    """Per-solve options.

    ``timeout_ms`` is forwarded to the engine; ``None`` leaves it unbounded.
    ``algebraic_precision`` is the number of decimal digits requested when an
    irrational model value has to be approximated by a rational.
    """

    timeout_ms: Optional[int] = None
    algebraic_precision: int = 30
    compiler: Optional[CompilerConfig] = None


@dataclass(frozen=True, eq=False)
class CompiledConstraint:
    """Assertions emitted for a single constraint record."""

    constraint: Constraint
    assertions: Tuple[z3.BoolRef, ...]
    parameters: Tuple[str, ...] = ()

    @property
    def description(self) -> str:
        return self.constraint.describe()


@dataclass
class CompiledBatch:
    """All assertions of one solve batch, in constraint order."""

    records: List[CompiledConstraint] = field(default_factory=list)

    @property
    def assertions(self) -> List[z3.BoolRef]:
        return [assertion for record in self.records for assertion in record.assertions]

    @property
    def parameters(self) -> List[str]:
        return sorted({name for record in self.records for name in record.parameters})

    def canonical(self) -> Tuple[str, ...]:
        """Return the distinct assertions as sorted S-expressions.

        Two batches built from permutations of the same constraint set have
        equal canonical forms.
        """

        return tuple(sorted({assertion.sexpr() for assertion in self.assertions}))

    def canonical_assertions(self) -> List[z3.BoolRef]:
        unique = {}
        for assertion in self.assertions:
            unique.setdefault(assertion.sexpr(), assertion)
        return [unique[key] for key in sorted(unique)]

    def __len__(self) -> int:
        return len(self.records)


class CheckStatus(enum.Enum):
    SAT = "sat"
    UNSAT = "unsat"
    UNKNOWN = "unknown"


@dataclass(frozen=True, eq=False)
class CheckResult:
    status: CheckStatus
    model: Optional[z3.ModelRef] = None
    reason: Optional[str] = None
    elapsed: float = 0.0


@dataclass(frozen=True)
class SegmentParameters:
    start: Point2D
    end: Point2D
    length: float
    angle: float


@dataclass(frozen=True)
class CircleParameters:
    center: Point2D
    radius: float
    circumference: float
    area: float


__all__ = [
    "Point2D",
    "CompilerConfig",
    "SolveOptions",
    "CompiledConstraint",
    "CompiledBatch",
    "CheckStatus",
    "CheckResult",
    "SegmentParameters",
    "CircleParameters",
]
