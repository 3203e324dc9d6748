"""Micro-benchmark subsystem for casebench.

Provides:
- Benchmark: base class for suites of named cases
- case / case_prepare: case declaration markers
- ExecutionEngine: timing and memory measurement of cases
- SuiteRegistry: explicit registration of suites
- SuiteRunner: sequential execution with printed results
- RunReport: collected results as text, JSON or YAML

Quick Start:
    from casebench.benchmarks import Benchmark, case, case_prepare, execute

    class ListBenchmark(Benchmark):
        @case_prepare("Append")
        def reset(self):
            self.items = []

        @case("Append")
        def append(self):
            self.items.extend(range(100))

    execute(ListBenchmark())
"""

from casebench.benchmarks.base import Benchmark, SupportsExecute
from casebench.benchmarks.cases import (
    BenchmarkCase,
    BenchmarkPrepare,
    CaseRegistry,
    CaseRegistryError,
    DuplicatePrepareError,
    RegistryFrozenError,
    case,
    case_prepare,
)
from casebench.benchmarks.engine import ExecutionEngine
from casebench.benchmarks.memory import (
    MemoryProbe,
    NullProbe,
    RssProbe,
    TracemallocProbe,
    create_probe,
    quiesce,
)
from casebench.benchmarks.registry import (
    SuiteLoadError,
    SuiteNameCollisionError,
    SuiteNotFoundError,
    SuiteRegistry,
    SuiteRegistryError,
    default_registry,
    register_suite,
)
from casebench.benchmarks.report import OutputFormat, RunReport
from casebench.benchmarks.reporter import (
    format_duration,
    format_result,
    format_results,
    print_results,
)
from casebench.benchmarks.results import BenchmarkResult
from casebench.benchmarks.runner import (
    SuiteRunner,
    execute,
    execute_all,
    execute_types,
)

__all__ = [
    # Base
    "Benchmark",
    "BenchmarkCase",
    "BenchmarkPrepare",
    "BenchmarkResult",
    "CaseRegistry",
    "CaseRegistryError",
    "DuplicatePrepareError",
    # Engine
    "ExecutionEngine",
    "MemoryProbe",
    "NullProbe",
    "OutputFormat",
    "RegistryFrozenError",
    "RssProbe",
    "RunReport",
    "SuiteLoadError",
    "SuiteNameCollisionError",
    "SuiteNotFoundError",
    # Registry
    "SuiteRegistry",
    "SuiteRegistryError",
    # Runner
    "SuiteRunner",
    "SupportsExecute",
    "TracemallocProbe",
    "case",
    "case_prepare",
    "create_probe",
    "default_registry",
    "execute",
    "execute_all",
    "execute_types",
    "format_duration",
    "format_result",
    "format_results",
    "print_results",
    "quiesce",
    "register_suite",
]
