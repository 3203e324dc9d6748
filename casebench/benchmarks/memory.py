"""Memory accounting for case measurements.

A probe reports the process's live allocated bytes. The engine reads it
twice per case: once after forcing a collection (the baseline) and once
right after the timed loop without collecting, so allocations the case
retained are still counted.

Probes:
    TracemallocProbe  Python heap bytes traced by tracemalloc (default).
                      Exact for Python objects; tracing slows allocation-heavy
                      cases somewhat.
    RssProbe          Resident set size from psutil. No tracing overhead but
                      page-granular and affected by allocator caching.
    NullProbe         Always 0, for timing-only runs.
"""

import gc
import tracemalloc
from abc import ABC, abstractmethod

import psutil

from casebench.models.constants import ProbeKind


def quiesce() -> None:
    """Bring the garbage collector to a settled state.

    CPython runs finalizers during a collection; the second pass reclaims
    whatever those finalizers released.
    """
    gc.collect()
    gc.collect()


class MemoryProbe(ABC):
    """Source of live allocated-byte counts."""

    kind: ProbeKind

    def start(self) -> None:
        """Begin accounting. Called once before the first case."""

    def stop(self) -> None:
        """End accounting. Called once after the last case."""

    @abstractmethod
    def live_bytes(self) -> int:
        """Return the currently live allocated bytes."""

    def snapshot(self, collect: bool) -> int:
        """Read live bytes, forcing a full collection first if ``collect``."""
        if collect:
            gc.collect()
        return self.live_bytes()

    def __enter__(self) -> "MemoryProbe":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()


class TracemallocProbe(MemoryProbe):
    """Live bytes from tracemalloc.

    Tracing is started on demand and stopped again only if this probe
    started it, so an outer tracemalloc session is left alone.
    """

    kind = ProbeKind.TRACEMALLOC

    def __init__(self) -> None:
        self._owns_tracing = False

    def start(self) -> None:
        if not tracemalloc.is_tracing():
            tracemalloc.start()
            self._owns_tracing = True

    def stop(self) -> None:
        if self._owns_tracing:
            tracemalloc.stop()
            self._owns_tracing = False

    def live_bytes(self) -> int:
        if not tracemalloc.is_tracing():
            raise RuntimeError("TracemallocProbe used before start()")
        current, _peak = tracemalloc.get_traced_memory()
        return current


class RssProbe(MemoryProbe):
    """Resident set size of the current process via psutil."""

    kind = ProbeKind.RSS

    def __init__(self) -> None:
        self._process = psutil.Process()

    def live_bytes(self) -> int:
        return int(self._process.memory_info().rss)


class NullProbe(MemoryProbe):
    """Probe that reports nothing; every delta is 0."""

    kind = ProbeKind.NONE

    def live_bytes(self) -> int:
        return 0


_PROBES: dict[ProbeKind, type[MemoryProbe]] = {
    ProbeKind.TRACEMALLOC: TracemallocProbe,
    ProbeKind.RSS: RssProbe,
    ProbeKind.NONE: NullProbe,
}


def create_probe(kind: str | ProbeKind) -> MemoryProbe:
    """Build a probe from its kind name ("tracemalloc", "rss" or "none").

    Raises:
        ValueError: For unknown kinds.
    """
    try:
        probe_kind = ProbeKind(str(kind).lower())
    except ValueError:
        valid = ", ".join(k.value for k in ProbeKind)
        raise ValueError(f"Unknown memory probe '{kind}'. Valid: {valid}") from None
    return _PROBES[probe_kind]()
