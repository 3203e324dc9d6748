"""Base class for micro-benchmark suites."""

import logging
from abc import ABC
from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from casebench.benchmarks.cases import (
    BenchmarkCase,
    BenchmarkPrepare,
    CaseRegistry,
    register_declared,
)
from casebench.benchmarks.engine import ExecutionEngine, validate_iteration_count
from casebench.benchmarks.memory import MemoryProbe, create_probe
from casebench.benchmarks.results import BenchmarkResult
from casebench.models.constants import DEFAULT_ITERATION_COUNT, DEFAULT_PROBE_KIND
from casebench.utils.logger import Logger


@runtime_checkable
class SupportsExecute(Protocol):
    """Anything the suite runner can run: execute() plus a display identity."""

    def execute(self) -> Sequence[BenchmarkResult]:
        ...

    def __str__(self) -> str:
        ...


class Benchmark(ABC):
    """Abstract base class for benchmark suites.

    A suite groups named cases that share the suite's attributes. Cases are
    declared with the @case / @case_prepare markers or registered explicitly
    in register_cases(); either way they are collected once, when the
    instance is constructed, and fixed afterwards.

    Lifecycle of execute():
        1. prepare() - once, before any case
        2. per case: its paired prepare, then the measured iterations
        3. free() - once, after every case succeeded

    Configuration Management:
        ``iteration_count`` (default 10) may be changed any time before
        execute(). Child classes can extend _PARAM_FIELDS so that config
        files and ``--set`` style overrides reach their own attributes.

    Example:
        >>> class ListBenchmark(Benchmark):
        ...     @case_prepare("Append")
        ...     def reset(self):
        ...         self.items = []
        ...
        ...     @case("Append")
        ...     def append(self):
        ...         self.items.extend(range(100))
        ...
        >>> bench = ListBenchmark()
        >>> bench.iteration_count = 5
        >>> [r.name for r in bench.execute()]
        ['Append']
    """

    _PARAM_FIELDS: tuple[str, ...] = ("iteration_count",)

    def __init__(self, memory_probe: MemoryProbe | str | None = None) -> None:
        """Collect this suite's cases.

        Args:
            memory_probe: A MemoryProbe, a probe kind name, or None for the
                default tracemalloc probe.

        Raises:
            DuplicatePrepareError: If two prepares share a case name.
        """
        self.iteration_count: int = DEFAULT_ITERATION_COUNT
        self.use_memory_probe(
            memory_probe if memory_probe is not None else DEFAULT_PROBE_KIND
        )

        self._registry = CaseRegistry(owner=self.get_name())
        register_declared(self, self._registry)
        self.register_cases(self._registry)
        self._registry.freeze()

    # -------------------------------------------------------------------------
    # Identity & Metadata
    # -------------------------------------------------------------------------

    def get_name(self) -> str:
        """Get the internal suite name (defaults to the class name)."""
        return self.__class__.__name__

    def get_pretty_name(self) -> str:
        """Get the human-readable suite name."""
        return self.get_name()

    def get_description(self) -> str:
        """First line of the class docstring, or an empty string."""
        doc = self.__class__.__doc__
        if not doc:
            return ""
        return doc.strip().splitlines()[0]

    def __str__(self) -> str:
        return f"{self.get_name()} ({self.iteration_count})"

    # -------------------------------------------------------------------------
    # Cases
    # -------------------------------------------------------------------------

    def register_cases(self, registry: CaseRegistry) -> None:
        """Register cases explicitly with registry.add_case()/add_prepare().

        Called once from __init__, after marker-declared cases were added.
        Default implementation registers nothing.
        """

    @property
    def cases(self) -> tuple[BenchmarkCase, ...]:
        return self._registry.cases

    @property
    def prepares(self) -> Mapping[str, BenchmarkPrepare]:
        return self._registry.prepares

    @property
    def memory_probe(self) -> MemoryProbe:
        return self._engine.probe

    def use_memory_probe(self, probe: MemoryProbe | str) -> None:
        """Switch memory accounting, e.g. ``bench.use_memory_probe("rss")``.

        Raises:
            ValueError: For unknown probe kind names.
        """
        if not isinstance(probe, MemoryProbe):
            probe = create_probe(probe)
        self._engine = ExecutionEngine(probe)

    # -------------------------------------------------------------------------
    # Configuration & Parameters
    # -------------------------------------------------------------------------

    def get_parameters(self) -> dict[str, Any]:
        """Get the current parameters, keyed by _PARAM_FIELDS.

        Raises:
            AttributeError: If a field in _PARAM_FIELDS was never set.
        """
        missing = [f for f in self._PARAM_FIELDS if not hasattr(self, f)]
        if missing:
            raise AttributeError(
                f"{self.__class__.__name__} missing required parameter fields: "
                f"{', '.join(missing)}. Ensure all fields in _PARAM_FIELDS are "
                "initialized in __init__()."
            )
        return {field: getattr(self, field) for field in self._PARAM_FIELDS}

    def set_parameters(self, params: dict[str, Any]) -> None:
        """Set parameters from a dictionary (e.g., from a config file).

        Values are converted to the type of the current value when one is
        set, so "5" from the command line becomes 5. Keys outside
        _PARAM_FIELDS are rejected.

        Raises:
            KeyError: For unknown parameter names.
            ValueError: If a value cannot be converted.
        """
        unknown = sorted(set(params) - set(self._PARAM_FIELDS))
        if unknown:
            raise KeyError(
                f"{self.get_name()} has no parameter(s): {', '.join(unknown)}"
            )
        for field, value in params.items():
            current = getattr(self, field, None)
            if current is not None and not isinstance(current, str):
                value = type(current)(value)
            setattr(self, field, value)

    # -------------------------------------------------------------------------
    # Lifecycle Hooks
    # -------------------------------------------------------------------------

    def prepare(self) -> None:
        """Suite-wide setup, run once before the first case."""

    def free(self) -> None:
        """Suite-wide cleanup, run once after the last case."""

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def execute(self) -> list[BenchmarkResult]:
        """Measure every case and return one result per case, in order.

        Raises:
            ValueError: If iteration_count is not a non-negative integer.
            Exception: Anything raised by a hook, prepare or case propagates
                and no results are returned.
        """
        iteration_count = validate_iteration_count(self.iteration_count)
        self.logger.info(
            f"Executing {len(self._registry)} case(s), {iteration_count} iterations each"
        )
        self.prepare()
        results = self._engine.run(self._registry, iteration_count)
        self.free()
        return results

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------

    @property
    def logger(self) -> logging.Logger:
        """Get the logger for this suite."""
        Logger.ensure_configured()
        return Logger.get(f"benchmark.{self.__class__.__name__}")
