"""Configuration helpers for the constraint compiler."""

from __future__ import annotations

import copy

from ..errors import InvalidParameterError
from .model import CompilerConfig

_COMPILER_CONFIG = CompilerConfig()

_MAX_DECIMALS = 15


def _validate(config: CompilerConfig) -> None:
    for name in ("length_decimals", "angle_decimals"):
        value = getattr(config, name)
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _MAX_DECIMALS:
            raise InvalidParameterError(f"{name} must be an int in [0, {_MAX_DECIMALS}], got {value!r}")


def get_compiler_config() -> CompilerConfig:
    return copy.deepcopy(_COMPILER_CONFIG)


def set_compiler_config(config: CompilerConfig) -> None:
    global _COMPILER_CONFIG
    _validate(config)
    _COMPILER_CONFIG = copy.deepcopy(config)
