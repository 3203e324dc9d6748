"""Environment variable access with type coercion.

casebench reads a handful of ``CASEBENCH_*`` variables as the lowest-priority
configuration layer (below config files and CLI flags).

Usage:
    from casebench.utils.env import get_env

    warmup = get_env("CASEBENCH_WARMUP_SECONDS", default=1.0, as_type=float)
    iterations = get_env("CASEBENCH_ITERATIONS", as_type=int)
"""

from __future__ import annotations

import os
from typing import Any, TypeVar, cast, overload

T = TypeVar("T")

LOG_LEVEL_VAR = "CASEBENCH_LOG_LEVEL"
WARMUP_SECONDS_VAR = "CASEBENCH_WARMUP_SECONDS"
ITERATIONS_VAR = "CASEBENCH_ITERATIONS"
MEMORY_PROBE_VAR = "CASEBENCH_MEMORY_PROBE"

_FALSE_STRINGS = ("false", "0", "", "no", "off")


class EnvVarError(Exception):
    """Base exception for environment variable errors."""

    pass


class EnvVarNotSetError(EnvVarError):
    """Raised when a required environment variable is not set."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Required environment variable not set: {name}")


class EnvVarTypeError(EnvVarError):
    """Raised when a variable's value cannot be converted to the requested type."""

    def __init__(self, name: str, value: str, expected_type: type) -> None:
        self.name = name
        self.value = value
        self.expected_type = expected_type
        super().__init__(f"Cannot convert {name}='{value}' to {expected_type.__name__}")


def _coerce_type(name: str, value: str, as_type: type) -> Any:
    """Convert ``value`` to ``as_type``.

    Raises:
        EnvVarTypeError: If conversion fails.
    """
    try:
        if as_type is bool:
            return value.strip().lower() not in _FALSE_STRINGS
        if as_type is str:
            return value
        if as_type is list:
            return [item.strip() for item in value.split(",") if item.strip()]
        return as_type(value.strip())
    except (ValueError, TypeError) as e:
        raise EnvVarTypeError(name, value, as_type) from e


@overload
def get_env(name: str, *, default: T, as_type: type[T]) -> T:
    ...


@overload
def get_env(name: str, *, default: T) -> T:
    ...


@overload
def get_env(name: str, *, as_type: type[T]) -> T | None:
    ...


@overload
def get_env(name: str) -> str | None:
    ...


def get_env(
    name: str,
    *,
    default: T | None = None,
    as_type: type[T] | None = None,
) -> T | str | None:
    """Read an environment variable, optionally converting it.

    Empty values count as unset so that ``CASEBENCH_ITERATIONS=`` falls back
    to the default instead of failing to parse.

    Args:
        name: Variable name.
        default: Returned when the variable is unset or empty.
        as_type: bool, int, float, str, list (comma-separated) or any
            callable type taking a string.

    Returns:
        The (converted) value or ``default``.

    Raises:
        EnvVarTypeError: If conversion fails.

    Examples:
        >>> get_env("CASEBENCH_ITERATIONS", default=10, as_type=int)
        10
    """
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    if as_type is not None:
        return cast(T, _coerce_type(name, value, as_type))
    return value


def require_env(name: str, *, as_type: type[T] | None = None) -> T | str:
    """Read an environment variable that must be set.

    Raises:
        EnvVarNotSetError: If the variable is unset or empty.
        EnvVarTypeError: If conversion fails.
    """
    value = os.environ.get(name)
    if value is None or value == "":
        raise EnvVarNotSetError(name)
    if as_type is not None:
        return cast(T, _coerce_type(name, value, as_type))
    return value
