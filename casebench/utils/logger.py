"""Centralized logging for casebench.

Every module logs under the ``casebench`` root logger. The command line
configures it once at startup; library code that runs without the CLI gets
a quiet stderr handler on first use.

Usage:
    from casebench.utils.logger import Logger

    Logger.configure(level="DEBUG", timestamps=False)

    log = Logger.get("engine")
    log.debug("Measuring case Append...")
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import TextIO


class LogLevel(Enum):
    """Log levels accepted by Logger.configure()."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def parse(cls, level: "str | LogLevel") -> "LogLevel":
        """Accept a LogLevel or a case-insensitive level name."""
        if isinstance(level, LogLevel):
            return level
        return cls(level.strip().upper())

    def to_logging_level(self) -> int:
        """Convert to the numeric level used by the logging module."""
        level: int = getattr(logging, self.value)
        return level


class LoggerNotConfiguredError(Exception):
    """Raised by Logger.get() before Logger.configure() was called."""

    def __init__(self) -> None:
        super().__init__(
            "Logger not configured. Call Logger.configure() or "
            "Logger.ensure_configured() first."
        )


class Logger:
    """Process-wide logging setup for casebench.

    Example:
        >>> Logger.configure(level="INFO", output="stderr")
        >>> Logger.get("runner").info("Running 3 suites")
    """

    _configured: bool = False
    _root_name: str = "casebench"

    @classmethod
    def configure(
        cls,
        level: str | LogLevel = "WARNING",
        output: str | Path | TextIO | None = None,
        timestamps: bool = True,
        include_location: bool = False,
        format_string: str | None = None,
    ) -> None:
        """Attach a single handler to the casebench root logger.

        Args:
            level: Level name or LogLevel.
            output: None for stdout, "stderr", a file path, or any stream
                with a ``write`` method.
            timestamps: Prefix records with the time.
            include_location: Add ``[file:line]`` to each record.
            format_string: Full logging format; overrides the two flags above.

        Raises:
            ValueError: If ``level`` or ``output`` cannot be used.
        """
        log_level = LogLevel.parse(level)
        handler = cls._build_handler(output)

        root = logging.getLogger(cls._root_name)
        root.setLevel(log_level.to_logging_level())
        for old in root.handlers[:]:
            root.removeHandler(old)
            old.close()

        handler.setLevel(log_level.to_logging_level())
        handler.setFormatter(
            logging.Formatter(
                format_string or cls._build_format(timestamps, include_location)
            )
        )
        root.addHandler(handler)
        root.propagate = False

        cls._configured = True

    @staticmethod
    def _build_handler(output: str | Path | TextIO | None) -> logging.Handler:
        if output is None:
            return logging.StreamHandler(sys.stdout)
        if output == "stderr":
            return logging.StreamHandler(sys.stderr)
        if isinstance(output, str | Path):
            return logging.FileHandler(str(output))
        if hasattr(output, "write"):
            return logging.StreamHandler(output)
        raise ValueError(f"Invalid log output: {type(output)}")

    @staticmethod
    def _build_format(timestamps: bool, include_location: bool) -> str:
        parts = ["%(asctime)s"] if timestamps else []
        parts += ["%(levelname)s", "[%(name)s]"]
        if include_location:
            parts.append("[%(filename)s:%(lineno)d]")
        parts.append("%(message)s")
        return " ".join(parts)

    @classmethod
    def ensure_configured(cls) -> None:
        """Configure a WARNING-level stderr handler if nothing is set up yet."""
        if not cls._configured:
            cls.configure(level=LogLevel.WARNING, output="stderr", timestamps=False)

    @classmethod
    def get(cls, name: str | None = None) -> logging.Logger:
        """Return ``casebench.<name>``, or the casebench root for None.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()
        if name:
            return logging.getLogger(f"{cls._root_name}.{name}")
        return logging.getLogger(cls._root_name)

    @classmethod
    def set_level(cls, level: str | LogLevel) -> None:
        """Change the level of the root logger and its handlers.

        Raises:
            LoggerNotConfiguredError: If configure() hasn't been called.
        """
        if not cls._configured:
            raise LoggerNotConfiguredError()

        numeric = LogLevel.parse(level).to_logging_level()
        root = logging.getLogger(cls._root_name)
        root.setLevel(numeric)
        for handler in root.handlers:
            handler.setLevel(numeric)

    @classmethod
    def is_configured(cls) -> bool:
        """Check whether configure() has run."""
        return cls._configured
