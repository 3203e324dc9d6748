"""casebench - micro-benchmark harness measuring time and memory per case."""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
