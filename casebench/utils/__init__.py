"""casebench utilities - logging and environment configuration."""

from casebench.utils.env import (
    EnvVarError,
    EnvVarNotSetError,
    EnvVarTypeError,
    get_env,
    require_env,
)
from casebench.utils.logger import (
    Logger,
    LoggerNotConfiguredError,
    LogLevel,
)

__all__ = [
    # Env
    "EnvVarError",
    "EnvVarNotSetError",
    "EnvVarTypeError",
    "LogLevel",
    # Logger
    "Logger",
    "LoggerNotConfiguredError",
    "get_env",
    "require_env",
]
