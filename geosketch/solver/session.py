"""One-shot z3 session: submit a compiled batch, check once."""

from __future__ import annotations

import logging
import time
from typing import Optional

import z3

from ..errors import EngineUnknownError, SessionStateError, UnsatisfiableError
from .model import CheckResult, CheckStatus, CompiledBatch

logger = logging.getLogger(__name__)


class SolvingSession:
    """Owns a single :class:`z3.Solver` for exactly one solve batch.

    The session moves through ``open -> submitted -> checked``.  Any attempt to
    submit twice, check twice or check before submitting raises
    :class:`SessionStateError`; a new batch always needs a new session.
    """

    OPEN = "open"
    SUBMITTED = "submitted"
    CHECKED = "checked"

    def __init__(self, timeout_ms: Optional[int] = None) -> None:
        self._solver = z3.Solver()
        if timeout_ms is not None:
            if isinstance(timeout_ms, bool) or not isinstance(timeout_ms, int) or timeout_ms <= 0:
                raise ValueError(f"timeout_ms must be a positive int, got {timeout_ms!r}")
            self._solver.set("timeout", timeout_ms)
        self.timeout_ms = timeout_ms
        self.state = self.OPEN
        self.assertion_count = 0
        self._result: Optional[CheckResult] = None

    def submit(self, batch: CompiledBatch) -> None:
        if self.state != self.OPEN:
            raise SessionStateError(f"cannot submit to a session in state {self.state!r}")
        assertions = batch.canonical_assertions()
        self._solver.add(*assertions)
        self.assertion_count = len(assertions)
        self.state = self.SUBMITTED
        logger.info("Submitted %d distinct assertion(s) to z3", self.assertion_count)

    def check(self) -> CheckResult:
        if self.state != self.SUBMITTED:
            raise SessionStateError(f"cannot check a session in state {self.state!r}")
        started = time.monotonic()
        raw = self._solver.check()
        elapsed = time.monotonic() - started
        self.state = self.CHECKED

        if raw == z3.sat:
            result = CheckResult(CheckStatus.SAT, model=self._solver.model(), elapsed=elapsed)
        elif raw == z3.unsat:
            result = CheckResult(CheckStatus.UNSAT, elapsed=elapsed)
        else:
            result = CheckResult(
                CheckStatus.UNKNOWN, reason=self._solver.reason_unknown(), elapsed=elapsed
            )
        logger.info(
            "z3 check finished status=%s elapsed=%.3fs%s",
            result.status.value,
            elapsed,
            f" reason={result.reason}" if result.reason else "",
        )
        self._result = result
        return result

    @property
    def result(self) -> Optional[CheckResult]:
        return self._result


def run_batch(batch: CompiledBatch, timeout_ms: Optional[int] = None) -> z3.ModelRef:
    """Submit ``batch`` to a fresh session and return the model.

    Raises :class:`UnsatisfiableError` or :class:`EngineUnknownError`; never retries.
    """

    session = SolvingSession(timeout_ms=timeout_ms)
    session.submit(batch)
    result = session.check()
    if result.status is CheckStatus.UNSAT:
        raise UnsatisfiableError(
            f"no configuration satisfies the {len(batch)} constraint(s) of this batch"
        )
    if result.status is CheckStatus.UNKNOWN:
        raise EngineUnknownError(result.reason or "unknown")
    return result.model
