"""DEBUG call tracing for the compiler and solver modules."""

from __future__ import annotations

import inspect
import logging
import reprlib
import time
from functools import wraps
from typing import Any, Callable, Iterable, Mapping, MutableMapping, Optional, Set, TypeVar, cast

import z3

from .ids import EntityId

F = TypeVar("F", bound=Callable[..., Any])

_MAX_SEXPR = 120
_MAX_ITEMS = 5
_MAX_REPR = 400

_repr = reprlib.Repr()
_repr.maxother = 160
_repr.maxlist = _MAX_ITEMS
_repr.maxtuple = _MAX_ITEMS


def _summarize_expr(expr: z3.ExprRef) -> str:
    try:
        text = " ".join(expr.sexpr().split())
    except z3.Z3Exception:  # pragma: no cover - context already released
        return "z3<?>"
    if len(text) > _MAX_SEXPR:
        text = text[:_MAX_SEXPR] + "..."
    return f"z3<{text}>"


def summarize(value: Any) -> str:
    """Short, log-friendly rendering of ``value``.

    Identifiers print as themselves, z3 terms as truncated S-expressions and
    solver/model handles by type only.  Containers show their first few
    items.
    """

    if isinstance(value, EntityId):
        return repr(value)
    if isinstance(value, z3.ExprRef):
        return _summarize_expr(value)
    if isinstance(value, (z3.Solver, z3.ModelRef)):
        return f"<{type(value).__name__}>"
    if isinstance(value, Mapping):
        shown = [f"{summarize(k)}: {summarize(v)}" for k, v in list(value.items())[:_MAX_ITEMS]]
        if len(value) > _MAX_ITEMS:
            shown.append(f"... ({len(value)} entries)")
        return "{" + ", ".join(shown) + "}"
    if isinstance(value, (list, tuple)):
        shown = [summarize(item) for item in value[:_MAX_ITEMS]]
        if len(value) > _MAX_ITEMS:
            shown.append(f"... ({len(value)} items)")
        body = ", ".join(shown)
        return f"({body})" if isinstance(value, tuple) else f"[{body}]"

    try:
        rendered = _repr.repr(value)
    except Exception as exc:  # pragma: no cover - broken __repr__ in caller code
        rendered = f"<repr-error {exc!r}>"
    if len(rendered) > _MAX_REPR:
        rendered = rendered[:_MAX_REPR] + "... (truncated)"
    return rendered


def _describe_call(args: tuple, kwargs: Mapping[str, Any]) -> str:
    parts = [summarize(arg) for arg in args]
    parts.extend(f"{key}={summarize(value)}" for key, value in kwargs.items())
    return ", ".join(parts) or "no-args"


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Decorate a callable so each call emits DEBUG entry/exit records with timing."""

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func
        label = name or getattr(func, "__qualname__", func.__name__)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            logger.debug("Entering %s (%s)", label, _describe_call(args, kwargs))
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.debug("Exception in %s", label, exc_info=True)
                raise
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            if log_result:
                logger.debug("Exiting %s after %.2fms -> %s", label, elapsed_ms, summarize(result))
            else:
                logger.debug("Exiting %s after %.2fms", label, elapsed_ms)
            return result

        wrapper._debug_logging_wrapped = True  # type: ignore[attr-defined]
        return cast(F, wrapper)

    return decorator


def _wrap_methods(cls: type, logger: logging.Logger, skip: Set[str]) -> None:
    for attr, member in list(vars(cls).items()):
        qualified = f"{cls.__name__}.{attr}"
        if attr.startswith("__") or attr in skip or qualified in skip:
            continue
        decorate = debug_log_call(logger, name=qualified)
        if isinstance(member, staticmethod):
            setattr(cls, attr, staticmethod(decorate(member.__func__)))
        elif isinstance(member, classmethod):
            setattr(cls, attr, classmethod(decorate(member.__func__)))
        elif inspect.isfunction(member):
            setattr(cls, attr, decorate(member))


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Trace every function and plain class defined in ``namespace``.

    Typically called as ``apply_debug_logging(globals(), logger=logger)`` at
    the bottom of a module.  Dataclasses and anything imported from another
    module are left untouched.
    """

    module_name = namespace.get("__name__")
    logger = logger or logging.getLogger(str(module_name))
    skipped: Set[str] = set(skip or ())

    for key, value in list(namespace.items()):
        if key in skipped or getattr(value, "__module__", None) != module_name:
            continue
        if inspect.isfunction(value):
            namespace[key] = debug_log_call(logger, name=key)(value)
        elif inspect.isclass(value) and not hasattr(value, "__dataclass_fields__"):
            _wrap_methods(value, logger, skipped)


__all__ = ["summarize", "debug_log_call", "apply_debug_logging"]
