"""Constants for casebench models and commands."""

from enum import StrEnum, auto

DEFAULT_ITERATION_COUNT = 10
DEFAULT_WARMUP_SECONDS = 1.0

# Reporter column widths
NAME_WIDTH = 20
DURATION_WIDTH = 16
MEMORY_WIDTH = 16

# 100 ns per tick in the canonical duration format
NANOSECONDS_PER_TICK = 100
TICKS_PER_SECOND = 10_000_000


class ProbeKind(StrEnum):
    """Memory accounting strategies."""

    TRACEMALLOC = auto()
    RSS = auto()
    NONE = auto()


DEFAULT_PROBE_KIND = ProbeKind.TRACEMALLOC
