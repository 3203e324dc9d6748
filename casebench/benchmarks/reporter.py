"""Text rendering of benchmark results.

One line per result: the case name left-aligned, then the duration in the
constant ``[-][d.]hh:mm:ss[.fffffff]`` format, right-aligned:

    Append                   00:00:00.0001234
"""

import sys
from collections.abc import Iterable
from typing import TextIO

from casebench.benchmarks.results import BenchmarkResult
from casebench.models.constants import (
    DURATION_WIDTH,
    MEMORY_WIDTH,
    NAME_WIDTH,
    NANOSECONDS_PER_TICK,
    TICKS_PER_SECOND,
)


def format_duration(duration_ns: int) -> str:
    """Format nanoseconds as ``[-][d.]hh:mm:ss[.fffffff]``.

    The fraction has seven digits (100 ns ticks) and is left out when it is
    zero; days appear only when non-zero. Sub-tick remainders are truncated.

    Examples:
        >>> format_duration(1_500_000)
        '00:00:00.0015000'
        >>> format_duration(90_000_000_000)
        '00:01:30'
    """
    sign = "-" if duration_ns < 0 else ""
    ticks = abs(duration_ns) // NANOSECONDS_PER_TICK
    total_seconds, fraction = divmod(ticks, TICKS_PER_SECOND)
    total_minutes, seconds = divmod(total_seconds, 60)
    total_hours, minutes = divmod(total_minutes, 60)
    days, hours = divmod(total_hours, 24)

    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if days:
        text = f"{days}.{text}"
    if fraction:
        text = f"{text}.{fraction:07d}"
    return sign + text


def format_bytes(delta: int) -> str:
    """Format a signed byte count, e.g. ``+4,096 B`` or ``-120 B``."""
    return f"{delta:+,d} B"


def format_result(result: BenchmarkResult, show_memory: bool = False) -> str:
    """Render one result as an aligned line."""
    line = f"{result.name:<{NAME_WIDTH}} {format_duration(result.duration_ns):>{DURATION_WIDTH}}"
    if show_memory:
        line += f" {format_bytes(result.memory_delta):>{MEMORY_WIDTH}}"
    return line


def format_results(
    results: Iterable[BenchmarkResult], show_memory: bool = False
) -> list[str]:
    """Render results as lines, in the given order."""
    return [format_result(result, show_memory) for result in results]


def print_results(
    results: Iterable[BenchmarkResult],
    output: TextIO | None = None,
    show_memory: bool = False,
) -> None:
    """Write one line per result to ``output`` (stdout by default)."""
    stream = output if output is not None else sys.stdout
    for line in format_results(results, show_memory):
        stream.write(line + "\n")
