"""Execution engine: measures every case of a CaseRegistry.

Per case, in registry order:
    1. run the paired prepare, if any (neither timed nor measured)
    2. quiesce the garbage collector
    3. baseline = live bytes after a forced collection
    4. time ``iteration_count`` back-to-back calls
    5. after = live bytes without collecting
    6. emit BenchmarkResult(name, elapsed, after - baseline)

Errors raised by a prepare or case propagate unchanged and abort the run.
"""

import time
from collections.abc import Callable

from casebench.benchmarks.cases import BenchmarkCase, BenchmarkPrepare, CaseRegistry
from casebench.benchmarks.memory import MemoryProbe, TracemallocProbe, quiesce
from casebench.benchmarks.results import BenchmarkResult
from casebench.utils.logger import Logger


def validate_iteration_count(iteration_count: object) -> int:
    """Return ``iteration_count`` if it is an int >= 0.

    Raises:
        ValueError: Otherwise.
    """
    if (
        not isinstance(iteration_count, int)
        or isinstance(iteration_count, bool)
        or iteration_count < 0
    ):
        raise ValueError(
            f"iteration_count must be a non-negative integer, got {iteration_count!r}"
        )
    return iteration_count


class ExecutionEngine:
    """Runs cases and turns each into a BenchmarkResult.

    Args:
        probe: Memory probe; defaults to a TracemallocProbe.
        clock: Nanosecond clock used for timing.
    """

    def __init__(
        self,
        probe: MemoryProbe | None = None,
        clock: Callable[[], int] = time.perf_counter_ns,
    ) -> None:
        self.probe = probe if probe is not None else TracemallocProbe()
        self.clock = clock

    @property
    def logger(self):
        Logger.ensure_configured()
        return Logger.get("engine")

    def run(
        self, registry: CaseRegistry, iteration_count: int
    ) -> list[BenchmarkResult]:
        """Measure every case in ``registry`` order.

        Returns:
            One result per case. Nothing is returned if any case fails.
        """
        validate_iteration_count(iteration_count)
        results: list[BenchmarkResult] = []
        with self.probe:
            for benchmark_case in registry.cases:
                results.append(
                    self.measure(
                        benchmark_case,
                        iteration_count,
                        registry.prepare_for(benchmark_case.name),
                    )
                )
        return results

    def measure(
        self,
        benchmark_case: BenchmarkCase,
        iteration_count: int,
        prepare: BenchmarkPrepare | None = None,
    ) -> BenchmarkResult:
        """Measure one case. The probe must already be started."""
        if prepare is not None:
            prepare.run()

        self.logger.debug(
            f"Measuring '{benchmark_case.name}' ({iteration_count} iterations)"
        )

        run = benchmark_case.run
        probe = self.probe
        clock = self.clock

        quiesce()
        baseline = probe.snapshot(collect=True)

        start = clock()
        for _ in range(iteration_count):
            run()
        elapsed = clock() - start

        after = probe.snapshot(collect=False)

        result = BenchmarkResult(benchmark_case.name, elapsed, after - baseline)
        self.logger.debug(
            f"'{result.name}': {result.duration_ns} ns, {result.memory_delta:+d} bytes"
        )
        return result
