"""Tests for the Benchmark base class."""

import pytest

from casebench.benchmarks.base import Benchmark, SupportsExecute
from casebench.benchmarks.cases import DuplicatePrepareError, case, case_prepare
from casebench.benchmarks.memory import NullProbe, RssProbe, TracemallocProbe


class AppendBenchmark(Benchmark):
    """Appends 100 integers per call."""

    def __init__(self, **kwargs):
        self.items: list[int] = []
        self.events: list[str] = []
        super().__init__(**kwargs)

    def prepare(self):
        self.events.append("prepare")

    def free(self):
        self.events.append("free")

    @case_prepare("Append")
    def reset(self):
        self.events.append("reset")
        self.items = []

    @case("Append")
    def append(self):
        for i in range(100):
            self.items.append(i)


class MixedBenchmark(Benchmark):
    """Marker and explicit cases together."""

    def __init__(self):
        self.order: list[str] = []
        super().__init__(memory_probe="none")

    @case("Declared")
    def declared(self):
        self.order.append("declared")

    def register_cases(self, registry):
        registry.add_case("Explicit", lambda: self.order.append("explicit"))
        registry.add_prepare("Explicit", lambda: self.order.append("setup"))


class DoublePrepare(Benchmark):
    @case("Work")
    def work(self):
        pass

    @case_prepare("Work")
    def setup_one(self):
        pass

    @case_prepare("Work")
    def setup_two(self):
        pass


class FailingBenchmark(Benchmark):
    def __init__(self):
        self.freed = False
        super().__init__(memory_probe=NullProbe())

    def free(self):
        self.freed = True

    @case("Fails")
    def fails(self):
        raise ValueError("case failed")


def test_append_scenario():
    """Test the Append scenario: one result with positive time and memory."""
    bench = AppendBenchmark()
    bench.iteration_count = 5

    results = bench.execute()

    assert [r.name for r in results] == ["Append"]
    assert results[0].duration_ns > 0
    assert results[0].memory_delta > 0
    assert len(bench.items) == 500


def test_lifecycle_order():
    """Test global hooks wrap the per-case prepare."""
    bench = AppendBenchmark(memory_probe="none")
    bench.iteration_count = 1

    bench.execute()

    assert bench.events == ["prepare", "reset", "free"]


def test_execute_can_repeat():
    """Test each execute() returns a fresh list."""
    bench = AppendBenchmark(memory_probe="none")

    first = bench.execute()
    second = bench.execute()

    assert first is not second
    assert [r.name for r in first] == [r.name for r in second]


def test_default_iteration_count_and_identity():
    """Test the default iteration count and display identity."""
    bench = AppendBenchmark(memory_probe="none")

    assert bench.iteration_count == 10
    assert str(bench) == "AppendBenchmark (10)"

    bench.iteration_count = 3
    assert str(bench) == "AppendBenchmark (3)"


def test_declared_then_explicit_cases():
    """Test explicit registrations follow marker declarations."""
    bench = MixedBenchmark()
    bench.iteration_count = 1

    results = bench.execute()

    assert [r.name for r in results] == ["Declared", "Explicit"]
    assert bench.order == ["declared", "setup", "explicit"]
    assert set(bench.prepares) == {"Explicit"}


def test_duplicate_prepare_fails_construction():
    """Test a duplicate prepare name is a construction-time error."""
    with pytest.raises(DuplicatePrepareError):
        DoublePrepare()


def test_failure_propagates_without_free():
    """Test a failing case aborts execute() before free()."""
    bench = FailingBenchmark()

    with pytest.raises(ValueError, match="case failed"):
        bench.execute()

    assert not bench.freed


def test_negative_iteration_count_rejected():
    """Test iteration_count is validated before any hook runs."""
    bench = AppendBenchmark(memory_probe="none")
    bench.iteration_count = -1

    with pytest.raises(ValueError):
        bench.execute()

    assert bench.events == []


def test_memory_probe_selection():
    """Test probe selection by name, instance and default."""
    assert isinstance(AppendBenchmark().memory_probe, TracemallocProbe)
    assert isinstance(AppendBenchmark(memory_probe="rss").memory_probe, RssProbe)

    bench = AppendBenchmark()
    bench.use_memory_probe(NullProbe())
    assert isinstance(bench.memory_probe, NullProbe)


def test_parameters():
    """Test parameter get/set with type conversion."""
    bench = AppendBenchmark(memory_probe="none")

    bench.set_parameters({"iteration_count": "25"})

    assert bench.get_parameters() == {"iteration_count": 25}
    with pytest.raises(KeyError):
        bench.set_parameters({"size": 3})


def test_identity_metadata():
    """Test name, pretty name and description defaults."""
    bench = AppendBenchmark(memory_probe="none")

    assert bench.get_name() == "AppendBenchmark"
    assert bench.get_pretty_name() == "AppendBenchmark"
    assert bench.get_description() == "Appends 100 integers per call."
    assert FailingBenchmark().get_description() == ""


def test_cases_are_fixed_after_construction():
    """Test the case list is exposed read-only."""
    bench = AppendBenchmark(memory_probe="none")

    assert isinstance(bench.cases, tuple)
    assert [c.name for c in bench.cases] == ["Append"]


def test_supports_execute_protocol():
    """Test benchmarks satisfy the runner's capability protocol."""
    assert isinstance(AppendBenchmark(memory_probe="none"), SupportsExecute)


def test_logger_is_namespaced_per_suite(captured_log):
    """Test the suite logger lives under casebench.benchmark."""
    bench = AppendBenchmark()

    bench.logger.info("hello from the suite")

    assert bench.logger.name == "casebench.benchmark.AppendBenchmark"
    assert "hello from the suite" in captured_log.getvalue()
