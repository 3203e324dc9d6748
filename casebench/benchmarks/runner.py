"""Suite runner: executes benchmark suites in sequence and prints results.

Usage:
    from casebench.benchmarks.runner import SuiteRunner

    runner = SuiteRunner(warmup_seconds=1.0)
    report = runner.run([ListBenchmark(), DictBenchmark()])

    # Or let the runner construct the suites
    runner.run_types([ListBenchmark, DictBenchmark])
    runner.run_registry()

Each suite prints its identity, one line per case and a blank line:

    ListBenchmark (10)
    Append                   00:00:00.0000412

"""

import sys
import time
from collections.abc import Callable, Iterable
from typing import TextIO

from casebench.benchmarks.base import SupportsExecute
from casebench.benchmarks.registry import (
    SuiteRegistry,
    default_registry,
    is_concrete_benchmark,
)
from casebench.benchmarks.report import RunReport
from casebench.benchmarks.reporter import print_results
from casebench.models.constants import DEFAULT_WARMUP_SECONDS
from casebench.utils.logger import Logger


class SuiteRunner:
    """Runs suites one after another and collects their results.

    The warm-up delay is applied once, before the first suite, and is never
    part of any measurement.

    Args:
        output: Stream for the text report (stdout by default).
        warmup_seconds: Delay before the first suite; 0 disables it.
        show_memory: Add the memory delta column to printed results.
        stop_on_error: Re-raise a suite's exception (default). When False,
            the failure is logged and recorded and the next suite runs.
        sleep: Sleep function used for the warm-up delay.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        warmup_seconds: float = DEFAULT_WARMUP_SECONDS,
        show_memory: bool = False,
        stop_on_error: bool = True,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if warmup_seconds < 0:
            raise ValueError(f"warmup_seconds must be >= 0, got {warmup_seconds}")
        self.output = output
        self.warmup_seconds = warmup_seconds
        self.show_memory = show_memory
        self.stop_on_error = stop_on_error
        self._sleep = sleep

    @property
    def logger(self):
        Logger.ensure_configured()
        return Logger.get("runner")

    def _stream(self) -> TextIO:
        return self.output if self.output is not None else sys.stdout

    def run(self, benchmarks: Iterable[SupportsExecute]) -> RunReport:
        """Execute each suite in order, printing as each one completes.

        Returns:
            RunReport with every suite's results (and errors when
            stop_on_error is False).
        """
        suites = list(benchmarks)
        report = RunReport(show_memory=self.show_memory)
        if not suites:
            self.logger.info("No suites to run")
            return report

        if self.warmup_seconds > 0:
            self.logger.debug(f"Warming up for {self.warmup_seconds}s")
            self._sleep(self.warmup_seconds)

        for benchmark in suites:
            identity = str(benchmark)
            self.logger.info(f"Running {identity}")
            try:
                results = benchmark.execute()
            except Exception as e:
                if self.stop_on_error:
                    raise
                self.logger.error(f"{identity} failed: {type(e).__name__}: {e}")
                report.add_error(identity, f"{type(e).__name__}: {e}")
                continue

            stream = self._stream()
            stream.write(identity + "\n")
            print_results(results, stream, self.show_memory)
            stream.write("\n")
            report.add_suite(identity, results)

        report.finalize()
        return report

    def run_types(self, benchmark_types: Iterable[type]) -> RunReport:
        """Instantiate each concrete Benchmark subclass and run it.

        Abstract classes and non-benchmark types are skipped.
        """
        suites = []
        for benchmark_type in benchmark_types:
            if not is_concrete_benchmark(benchmark_type):
                self.logger.warning(
                    f"Skipping {getattr(benchmark_type, '__name__', benchmark_type)}: "
                    "not a concrete Benchmark subclass"
                )
                continue
            suites.append(benchmark_type())
        return self.run(suites)

    def run_registry(
        self,
        registry: SuiteRegistry | None = None,
        names: Iterable[str] | None = None,
    ) -> RunReport:
        """Create and run registered suites (all, or the named ones in order).

        Raises:
            SuiteNotFoundError: If a name is not registered.
        """
        registry = registry if registry is not None else default_registry
        if names is None:
            suites = registry.create_all()
        else:
            suites = [registry.create(name) for name in names]
        return self.run(suites)


def execute(*benchmarks: SupportsExecute) -> RunReport:
    """Run the given suite instances with the default runner settings."""
    return SuiteRunner().run(benchmarks)


def execute_types(*benchmark_types: type) -> RunReport:
    """Instantiate and run the given Benchmark subclasses."""
    return SuiteRunner().run_types(benchmark_types)


def execute_all(registry: SuiteRegistry | None = None) -> RunReport:
    """Run every suite in ``registry`` (the default registry if None)."""
    return SuiteRunner().run_registry(registry)
