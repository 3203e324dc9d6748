"""Run report: the results of every suite in one run, in several formats.

Usage:
    from casebench.benchmarks.report import RunReport, OutputFormat

    report = RunReport()
    report.add_suite("ListBenchmark (10)", results)

    report.emit("run.json", OutputFormat.JSON)
    report.emit(sys.stdout, OutputFormat.TEXT)
"""

import json
import sys
from collections.abc import Sequence
from datetime import UTC, datetime
from enum import Enum
from io import StringIO
from pathlib import Path
from typing import Any, TextIO

import yaml  # type: ignore[import-untyped, unused-ignore]

from casebench.benchmarks.reporter import format_results
from casebench.benchmarks.results import BenchmarkResult


class OutputFormat(Enum):
    """Supported output formats for a run report."""

    JSON = "json"
    YAML = "yaml"
    TEXT = "text"

    @classmethod
    def from_path(cls, path: str | Path) -> "OutputFormat":
        """Pick a format from a file extension (JSON unless .yaml/.yml/.txt)."""
        suffix = Path(path).suffix.lower()
        if suffix in (".yaml", ".yml"):
            return cls.YAML
        if suffix == ".txt":
            return cls.TEXT
        return cls.JSON


class RunReport:
    """Results and errors of the suites run in one invocation.

    Suites are kept in the order they ran. Text output reproduces the
    runner's stdout layout: identity line, result lines, blank line.
    """

    def __init__(self, show_memory: bool = False) -> None:
        self.show_memory = show_memory
        self._suites: list[tuple[str, list[BenchmarkResult]]] = []
        self._errors: list[tuple[str, str]] = []
        self._metadata: dict[str, Any] = {
            "timestamp_start": datetime.now(UTC).isoformat(),
            "timestamp_end": None,
            "casebench_version": self._get_version(),
        }

    def _get_version(self) -> str:
        from casebench import __version__

        return str(__version__)

    def add_suite(self, identity: str, results: Sequence[BenchmarkResult]) -> None:
        """Record the results of one suite."""
        self._suites.append((identity, list(results)))

    def add_error(self, identity: str, error: str) -> None:
        """Record a suite that failed."""
        self._errors.append((identity, error))

    def finalize(self) -> None:
        """Mark the report complete, setting the end timestamp once."""
        if self._metadata["timestamp_end"] is not None:
            return
        self._metadata["timestamp_end"] = datetime.now(UTC).isoformat()

    @property
    def suites(self) -> list[tuple[str, list[BenchmarkResult]]]:
        return list(self._suites)

    @property
    def errors(self) -> list[tuple[str, str]]:
        return list(self._errors)

    def to_dict(self) -> dict[str, Any]:
        """Convert the report to plain data for serialization."""
        return {
            "metadata": self._metadata,
            "suites": [
                {"suite": identity, "results": [r.to_dict() for r in results]}
                for identity, results in self._suites
            ],
            "errors": [
                {"suite": identity, "error": error} for identity, error in self._errors
            ]
            or None,
            "summary": {
                "suites_run": len(self._suites) + len(self._errors),
                "succeeded": len(self._suites),
                "failed": len(self._errors),
                "cases": sum(len(results) for _, results in self._suites),
            },
        }

    # -------------------------------------------------------------------------
    # Emission Methods
    # -------------------------------------------------------------------------

    def emit(
        self,
        output: str | Path | TextIO,
        format: OutputFormat = OutputFormat.TEXT,
        indent: int = 2,
    ) -> None:
        """Write the report to a file path or stream."""
        self.finalize()

        if format == OutputFormat.JSON:
            content = json.dumps(self.to_dict(), indent=indent, default=str) + "\n"
        elif format == OutputFormat.YAML:
            content = yaml.safe_dump(
                self.to_dict(), indent=indent, default_flow_style=False, sort_keys=False
            )
        elif format == OutputFormat.TEXT:
            content = self._to_text()
        else:
            raise ValueError(f"Unknown format: {format}")

        if isinstance(output, str | Path):
            Path(output).write_text(content)
        else:
            output.write(content)
            if output is not sys.stdout and output is not sys.stderr:
                output.flush()

    def _to_text(self) -> str:
        buffer = StringIO()
        for identity, results in self._suites:
            buffer.write(identity + "\n")
            for line in format_results(results, self.show_memory):
                buffer.write(line + "\n")
            buffer.write("\n")
        for identity, error in self._errors:
            buffer.write(f"{identity} FAILED: {error}\n\n")
        return buffer.getvalue()

    def emit_json(self, path: str | Path) -> None:
        self.emit(path, OutputFormat.JSON)

    def emit_yaml(self, path: str | Path) -> None:
        self.emit(path, OutputFormat.YAML)

    def emit_stdout(self) -> None:
        """Emit human-readable results to stdout."""
        self.emit(sys.stdout, OutputFormat.TEXT)

    def __len__(self) -> int:
        return len(self._suites)
