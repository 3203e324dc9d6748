"""Case and prepare declarations and the per-benchmark case registry.

Two ways to declare work on a benchmark:

    class ListBenchmark(Benchmark):
        @case_prepare("Append")
        def reset(self):
            self.items = []

        @case("Append")
        def append(self):
            for i in range(100):
                self.items.append(i)

        def register_cases(self, registry):
            registry.add_case("Sort", lambda: sorted(self.items))

Marker declarations are gathered once per instance by register_declared();
explicit registrations are made from Benchmark.register_cases(). Both feed
the same CaseRegistry, which is frozen when the benchmark finishes
constructing.
"""

import inspect
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from casebench.utils.logger import Logger

CASE_MARKER = "__casebench_case__"
PREPARE_MARKER = "__casebench_prepare__"

Routine = Callable[[], Any]


class CaseRegistryError(Exception):
    """Base exception for case registry errors."""

    pass


class DuplicatePrepareError(CaseRegistryError):
    """Raised when two prepares are declared for the same case name."""

    def __init__(self, name: str, owner: str) -> None:
        self.name = name
        self.owner = owner
        super().__init__(f"Duplicate prepare for case '{name}' in {owner or 'registry'}")


class RegistryFrozenError(CaseRegistryError):
    """Raised when registering on a registry after construction finished."""

    def __init__(self, owner: str) -> None:
        self.owner = owner
        super().__init__(
            f"Cases of {owner or 'registry'} are fixed once construction completes"
        )


def _check_name(name: object) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"Case name must be a non-empty string, got {name!r}")
    return name


@dataclass(frozen=True)
class BenchmarkCase:
    """One named, measured unit of work."""

    name: str
    run: Routine


@dataclass(frozen=True)
class BenchmarkPrepare:
    """Setup run immediately before the case with the same name."""

    name: str
    run: Routine


def case(name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Mark a method as a measured case called ``name``.

    Raises:
        ValueError: If ``name`` is empty.
    """
    _check_name(name)

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        setattr(func, CASE_MARKER, name)
        return func

    return decorator


def case_prepare(name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Mark a method as the setup for the case called ``name``.

    Raises:
        ValueError: If ``name`` is empty.
    """
    _check_name(name)

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        setattr(func, PREPARE_MARKER, name)
        return func

    return decorator


def takes_no_arguments(routine: Callable[..., Any]) -> bool:
    """Check whether ``routine`` can be called with no arguments."""
    try:
        signature = inspect.signature(routine)
    except (TypeError, ValueError):
        return False
    for param in signature.parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.default is param.empty:
            return False
    return True


class CaseRegistry:
    """Ordered cases and name-keyed prepares owned by one benchmark.

    Cases keep registration order. Prepares are unique per name. After
    freeze() the registry is read-only.
    """

    def __init__(self, owner: str = "") -> None:
        self.owner = owner
        self._cases: list[BenchmarkCase] = []
        self._prepares: dict[str, BenchmarkPrepare] = {}
        self._frozen = False

    @property
    def _log(self):
        Logger.ensure_configured()
        return Logger.get("cases")

    def _ensure_open(self) -> None:
        if self._frozen:
            raise RegistryFrozenError(self.owner)

    def add_case(self, name: str, run: Routine) -> BenchmarkCase:
        """Append a case.

        Raises:
            ValueError: If ``name`` is empty or ``run`` is not callable.
            RegistryFrozenError: After freeze().
        """
        self._ensure_open()
        _check_name(name)
        if not callable(run):
            raise ValueError(f"Case '{name}' must be callable, got {type(run).__name__}")
        if any(existing.name == name for existing in self._cases):
            self._log.warning(f"{self.owner}: case '{name}' declared more than once")
        benchmark_case = BenchmarkCase(name, run)
        self._cases.append(benchmark_case)
        return benchmark_case

    def add_prepare(self, name: str, run: Routine) -> BenchmarkPrepare:
        """Register the prepare for case ``name``.

        Raises:
            ValueError: If ``name`` is empty or ``run`` is not callable.
            DuplicatePrepareError: If ``name`` already has a prepare.
            RegistryFrozenError: After freeze().
        """
        self._ensure_open()
        _check_name(name)
        if not callable(run):
            raise ValueError(
                f"Prepare '{name}' must be callable, got {type(run).__name__}"
            )
        if name in self._prepares:
            raise DuplicatePrepareError(name, self.owner)
        benchmark_prepare = BenchmarkPrepare(name, run)
        self._prepares[name] = benchmark_prepare
        return benchmark_prepare

    def freeze(self) -> None:
        """Make the registry read-only and report prepares with no case."""
        if self._frozen:
            return
        case_names = {c.name for c in self._cases}
        for name in self._prepares:
            if name not in case_names:
                self._log.warning(f"{self.owner}: prepare '{name}' has no matching case")
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def cases(self) -> tuple[BenchmarkCase, ...]:
        return tuple(self._cases)

    @property
    def prepares(self) -> Mapping[str, BenchmarkPrepare]:
        return MappingProxyType(self._prepares)

    def prepare_for(self, name: str) -> BenchmarkPrepare | None:
        """Return the prepare paired with case ``name``, if any."""
        return self._prepares.get(name)

    def __len__(self) -> int:
        return len(self._cases)

    def __iter__(self) -> Iterator[BenchmarkCase]:
        return iter(self._cases)


def _declared_markers(cls: type) -> dict[str, tuple[str | None, str | None]]:
    """Map attribute name to its (case, prepare) markers in definition order.

    Base classes come first. An override keeps the position of the method it
    overrides and inherits its markers unless it declares its own.
    """
    markers: dict[str, tuple[str | None, str | None]] = {}
    for klass in reversed(cls.__mro__):
        for attr_name, member in vars(klass).items():
            if not inspect.isfunction(member):
                continue
            case_name = getattr(member, CASE_MARKER, None)
            prepare_name = getattr(member, PREPARE_MARKER, None)
            if case_name is None and prepare_name is None:
                continue
            markers[attr_name] = (case_name, prepare_name)
    return markers


def register_declared(instance: object, registry: CaseRegistry) -> None:
    """Add every @case / @case_prepare method of ``instance`` to ``registry``.

    Methods that need arguments are skipped.
    """
    log = registry._log
    for attr_name, (case_name, prepare_name) in _declared_markers(
        type(instance)
    ).items():
        routine = getattr(instance, attr_name)
        if not takes_no_arguments(routine):
            log.debug(f"{registry.owner}: skipping {attr_name}(), it takes arguments")
            continue
        if case_name is not None:
            registry.add_case(case_name, routine)
        if prepare_name is not None:
            registry.add_prepare(prepare_name, routine)
