"""Result record produced for every measured case."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any


@dataclass(frozen=True)
class BenchmarkResult:
    """Measured cost of one case over one execution pass.

    ``duration_ns`` covers the whole iteration batch, not a single call.
    ``memory_delta`` is the change in live bytes across the batch and can be
    negative when the collector frees more than the case allocates.
    """

    name: str
    duration_ns: int
    memory_delta: int

    @property
    def duration(self) -> timedelta:
        """Elapsed time as a timedelta (microsecond resolution)."""
        return timedelta(microseconds=self.duration_ns / 1000)

    @property
    def seconds(self) -> float:
        """Elapsed time in seconds."""
        return self.duration_ns / 1e9

    def per_iteration_ns(self, iteration_count: int) -> float:
        """Average nanoseconds per call; 0.0 when nothing ran."""
        if iteration_count <= 0:
            return 0.0
        return self.duration_ns / iteration_count

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary."""
        return {
            "name": self.name,
            "duration_ns": self.duration_ns,
            "duration_s": self.seconds,
            "memory_delta": self.memory_delta,
        }
