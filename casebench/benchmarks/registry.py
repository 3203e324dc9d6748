"""Registry of benchmark suites, populated explicitly.

Usage:
    from casebench.benchmarks.registry import default_registry, register_suite

    @register_suite
    class ListBenchmark(Benchmark):
        ...

    # Or with an explicit name / any zero-argument factory
    default_registry.register("lists-small", lambda: ListBenchmark(size=10))

    # Import benchmark files so their decorators run
    default_registry.load_path("benchmarks/")

    bench = default_registry.create("ListBenchmark")
"""

import importlib.util
import inspect
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from types import ModuleType
from typing import Any, TypeVar

from casebench.benchmarks.base import Benchmark, SupportsExecute
from casebench.benchmarks.cases import takes_no_arguments
from casebench.utils.logger import Logger

SuiteFactory = Callable[[], SupportsExecute]
F = TypeVar("F", bound=Callable[..., Any])

_MODULE_PREFIX = "casebench_suite"


class SuiteRegistryError(Exception):
    """Base exception for suite registry errors."""

    pass


class SuiteNameCollisionError(SuiteRegistryError):
    """Raised when two different factories claim the same suite name."""

    def __init__(self, name: str, factory1: Callable, factory2: Callable) -> None:
        self.name = name
        self.factory1 = factory1
        self.factory2 = factory2
        super().__init__(
            f"Suite name collision: '{name}' is registered by both "
            f"{_describe(factory1)} and {_describe(factory2)}"
        )


class SuiteNotFoundError(SuiteRegistryError):
    """Raised when a requested suite is not registered."""

    def __init__(self, name: str, known: list[str] | None = None) -> None:
        self.name = name
        self.known = known or []
        message = f"Suite not found: '{name}'"
        if self.known:
            message += f". Registered: {', '.join(self.known)}"
        super().__init__(message)


class SuiteLoadError(SuiteRegistryError):
    """Raised when a benchmark file cannot be imported."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to load benchmarks from {path}: {reason}")


def _describe(factory: Callable) -> str:
    module = getattr(factory, "__module__", "?")
    qualname = getattr(factory, "__qualname__", repr(factory))
    return f"{module}.{qualname}"


def is_concrete_benchmark(obj: object) -> bool:
    """Check whether ``obj`` is a Benchmark subclass that can be instantiated."""
    return (
        inspect.isclass(obj)
        and issubclass(obj, Benchmark)
        and obj is not Benchmark
        and not inspect.isabstract(obj)
    )


class SuiteRegistry:
    """Mapping from suite name to a zero-argument factory.

    Registration order is preserved and is the order create_all() and the
    runner use.

    Raises SuiteNameCollisionError if two different factories claim a name.

    Example:
        >>> registry = SuiteRegistry()
        >>> registry.register("ListBenchmark", ListBenchmark)
        >>> for bench in registry.create_all():
        ...     bench.execute()
    """

    def __init__(self) -> None:
        self._factories: dict[str, SuiteFactory] = {}
        self._modules: dict[Path, ModuleType] = {}

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(self, name: str, factory: SuiteFactory) -> None:
        """Register ``factory`` under ``name``.

        Registering the same factory twice is a no-op.

        Raises:
            ValueError: If ``name`` is empty or ``factory`` is not callable.
            SuiteNameCollisionError: If ``name`` belongs to another factory.
        """
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Suite name must be a non-empty string, got {name!r}")
        if not callable(factory):
            raise ValueError(f"Factory for suite '{name}' is not callable")

        existing = self._factories.get(name)
        if existing is not None:
            if existing is not factory:
                raise SuiteNameCollisionError(name, existing, factory)
            return
        self._factories[name] = factory

    def suite(self, name: str | None = None) -> Callable[[F], F]:
        """Decorator registering a class (or factory function).

        The name defaults to the decorated object's ``__name__``.
        """

        def decorator(factory: F) -> F:
            self.register(name or factory.__name__, factory)
            return factory

        return decorator

    def unregister(self, name: str) -> None:
        """Remove a suite.

        Raises:
            SuiteNotFoundError: If ``name`` is not registered.
        """
        if name not in self._factories:
            raise SuiteNotFoundError(name, self.names())
        del self._factories[name]

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load_path(
        self, path: str | Path, auto_register: bool = False
    ) -> list[ModuleType]:
        """Import a benchmark file, or every public ``*.py`` in a directory.

        Importing runs any ``@register_suite`` decorators in those files.
        With ``auto_register``, concrete Benchmark subclasses defined in the
        loaded modules are also registered under their class names, unless
        the class is already registered under some name or its constructor
        needs arguments.

        Returns:
            The loaded modules, in load order.

        Raises:
            SuiteLoadError: If the path is missing or a module fails to import.
        """
        path = Path(path)
        if not path.exists():
            raise SuiteLoadError(path, "no such file or directory")

        if path.is_dir():
            files = sorted(
                p for p in path.glob("*.py") if not p.name.startswith("_")
            )
        else:
            files = [path]

        modules = [self._load_module(file) for file in files]

        if auto_register:
            for module in modules:
                self._auto_register(module)
        return modules

    def _auto_register(self, module: ModuleType) -> None:
        registered = list(self._factories.values())
        for _name, obj in inspect.getmembers(module, is_concrete_benchmark):
            if obj.__module__ != module.__name__ or obj in registered:
                continue
            if not takes_no_arguments(obj):
                Logger.ensure_configured()
                Logger.get("registry").debug(
                    f"Not auto-registering {obj.__name__}: constructor needs arguments"
                )
                continue
            self.register(obj.__name__, obj)

    def _load_module(self, filepath: Path) -> ModuleType:
        resolved = filepath.resolve()
        if resolved in self._modules:
            return self._modules[resolved]

        for module in list(sys.modules.values()):
            module_file = getattr(module, "__file__", None)
            if module_file and Path(module_file).resolve() == resolved:
                self._modules[resolved] = module
                return module

        module_name = f"{_MODULE_PREFIX}_{filepath.stem}"
        suffix = 1
        while module_name in sys.modules:
            suffix += 1
            module_name = f"{_MODULE_PREFIX}_{filepath.stem}_{suffix}"

        spec = importlib.util.spec_from_file_location(module_name, resolved)
        if spec is None or spec.loader is None:
            raise SuiteLoadError(filepath, "not a Python module")
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            del sys.modules[module_name]
            raise SuiteLoadError(filepath, f"{type(e).__name__}: {e}") from e

        self._modules[resolved] = module
        return module

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    def names(self) -> list[str]:
        """Registered suite names, in registration order."""
        return list(self._factories)

    def resolve_name(self, name: str) -> str:
        """Return the registered name matching ``name``, ignoring case.

        Raises:
            SuiteNotFoundError: If nothing matches.
        """
        if name in self._factories:
            return name
        lowered = name.lower()
        for registered in self._factories:
            if registered.lower() == lowered:
                return registered
        raise SuiteNotFoundError(name, self.names())

    def get_factory(self, name: str) -> SuiteFactory:
        """Get the factory registered for ``name`` (case-insensitive).

        Raises:
            SuiteNotFoundError: If the suite is not registered.
        """
        return self._factories[self.resolve_name(name)]

    def create(self, name: str) -> SupportsExecute:
        """Build a fresh suite instance.

        Raises:
            SuiteNotFoundError: If the suite is not registered.
        """
        return self.get_factory(name)()

    def create_all(self) -> list[SupportsExecute]:
        """Build one instance of every registered suite."""
        return [factory() for factory in self._factories.values()]

    def list_suites(self) -> list[dict[str, Any]]:
        """Summaries of every registered suite, sorted by name.

        Each entry has name, pretty_name, description and cases (the case
        names). Suites that fail to construct are reported with an error
        entry instead of raising.
        """
        summaries = []
        for name, factory in sorted(self._factories.items()):
            try:
                instance = factory()
            except Exception as e:
                summaries.append(
                    {
                        "name": name,
                        "pretty_name": name,
                        "description": f"(failed to construct: {e})",
                        "cases": [],
                    }
                )
                continue
            if isinstance(instance, Benchmark):
                summaries.append(
                    {
                        "name": name,
                        "pretty_name": instance.get_pretty_name(),
                        "description": instance.get_description(),
                        "cases": [c.name for c in instance.cases],
                    }
                )
            else:
                summaries.append(
                    {
                        "name": name,
                        "pretty_name": str(instance),
                        "description": "",
                        "cases": [],
                    }
                )
        return summaries

    def __len__(self) -> int:
        return len(self._factories)

    def __contains__(self, name: str) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._factories))


default_registry = SuiteRegistry()


def register_suite(factory: F | None = None, *, name: str | None = None) -> Any:
    """Register a suite with the default registry.

    Usable bare (``@register_suite``) or with a name
    (``@register_suite(name="lists")``).
    """
    if factory is None:
        return default_registry.suite(name)
    return default_registry.suite(name)(factory)
