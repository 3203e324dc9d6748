"""Tests for the execution engine."""

import pytest

from casebench.benchmarks.cases import BenchmarkCase, CaseRegistry
from casebench.benchmarks.engine import ExecutionEngine, validate_iteration_count
from casebench.benchmarks.memory import MemoryProbe, NullProbe


class FakeClock:
    """Nanosecond clock that only moves when told to."""

    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now

    def advance(self, ns):
        self.now += ns


class ScriptedProbe(MemoryProbe):
    """Probe returning queued readings and recording how it was used."""

    def __init__(self, readings):
        self.readings = list(readings)
        self.collect_flags = []
        self.started = 0
        self.stopped = 0

    def start(self):
        self.started += 1

    def stop(self):
        self.stopped += 1

    def live_bytes(self):
        return self.readings.pop(0)

    def snapshot(self, collect):
        self.collect_flags.append(collect)
        return self.live_bytes()


def test_results_match_case_order():
    """Test one result per case, in registry order."""
    registry = CaseRegistry()
    for name in ["C", "A", "B"]:
        registry.add_case(name, lambda: None)

    results = ExecutionEngine(NullProbe()).run(registry, 3)

    assert [r.name for r in results] == ["C", "A", "B"]


def test_case_runs_iteration_count_times():
    """Test that a case without a prepare still runs every iteration."""
    calls = []
    registry = CaseRegistry()
    registry.add_case("Count", lambda: calls.append(1))

    ExecutionEngine(NullProbe()).run(registry, 7)

    assert len(calls) == 7


def test_prepare_runs_before_case_and_is_not_timed():
    """Test prepare side effects are visible and excluded from duration."""
    clock = FakeClock()
    seen = []
    state = {"ready": False}

    def prepare():
        state["ready"] = True
        clock.advance(1_000_000)

    def body():
        seen.append(state["ready"])
        clock.advance(10)

    registry = CaseRegistry()
    registry.add_case("Work", body)
    registry.add_prepare("Work", prepare)

    results = ExecutionEngine(NullProbe(), clock=clock).run(registry, 3)

    assert seen == [True, True, True]
    assert results[0].duration_ns == 30


def test_prepare_runs_once_per_case():
    """Test that the paired prepare runs once, not per iteration."""
    prepares = []
    registry = CaseRegistry()
    registry.add_case("Work", lambda: None)
    registry.add_prepare("Work", lambda: prepares.append(1))

    ExecutionEngine(NullProbe()).run(registry, 5)

    assert prepares == [1]


def test_memory_protocol():
    """Test baseline read with collection and after-read without."""
    probe = ScriptedProbe([1000, 1600, 2000, 1900])
    registry = CaseRegistry()
    registry.add_case("Grow", lambda: None)
    registry.add_case("Shrink", lambda: None)

    results = ExecutionEngine(probe, clock=FakeClock()).run(registry, 1)

    assert probe.collect_flags == [True, False, True, False]
    assert [r.memory_delta for r in results] == [600, -100]
    assert probe.started == 1
    assert probe.stopped == 1


def test_zero_iterations():
    """Test iteration_count=0 brackets no work."""
    calls = []
    registry = CaseRegistry()
    registry.add_case("Idle", lambda: calls.append(1))

    results = ExecutionEngine(NullProbe(), clock=FakeClock()).run(registry, 0)

    assert calls == []
    assert results[0].duration_ns == 0
    assert results[0].memory_delta == 0


def test_error_on_third_iteration_propagates():
    """Test that a failing case aborts the run with no results."""
    calls = []
    later = []

    def flaky():
        calls.append(1)
        if len(calls) == 3:
            raise RuntimeError("boom")

    registry = CaseRegistry()
    registry.add_case("Flaky", flaky)
    registry.add_case("Later", lambda: later.append(1))
    probe = ScriptedProbe([0, 0, 0, 0])

    with pytest.raises(RuntimeError, match="boom"):
        ExecutionEngine(probe).run(registry, 10)

    assert len(calls) == 3
    assert later == []
    assert probe.stopped == 1


def test_prepare_error_propagates():
    """Test that a failing prepare aborts before its case runs."""
    calls = []
    registry = CaseRegistry()
    registry.add_case("Work", lambda: calls.append(1))
    registry.add_prepare("Work", lambda: 1 / 0)

    with pytest.raises(ZeroDivisionError):
        ExecutionEngine(NullProbe()).run(registry, 2)

    assert calls == []


def test_measure_single_case():
    """Test measuring a case directly."""
    clock = FakeClock()
    probe = ScriptedProbe([10, 74])
    engine = ExecutionEngine(probe, clock=clock)

    result = engine.measure(BenchmarkCase("One", lambda: clock.advance(5)), 4)

    assert result.name == "One"
    assert result.duration_ns == 20
    assert result.memory_delta == 64


@pytest.mark.parametrize("value", [-1, 2.5, "10", True, None])
def test_invalid_iteration_count(value):
    """Test that iteration counts must be non-negative integers."""
    with pytest.raises(ValueError):
        validate_iteration_count(value)


def test_default_probe_is_tracemalloc():
    """Test the engine's default memory probe."""
    from casebench.benchmarks.memory import TracemallocProbe

    assert isinstance(ExecutionEngine().probe, TracemallocProbe)
