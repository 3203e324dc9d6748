"""Run command - load benchmark files and execute their suites.

CLI Examples:
    casebench run benchmarks/                     # Run every suite found
    casebench run bench_lists.py -s ListBenchmark # Run one suite
    casebench run benchmarks/ -n 100 -w 0         # 100 iterations, no warm-up
    casebench run benchmarks/ -m                  # Show memory deltas
    casebench run benchmarks/ -o run.json         # Also write a JSON report
    casebench run benchmarks/ --config run.yaml   # Suites and overrides from file
"""

import json
import sys
import traceback
from io import StringIO
from pathlib import Path
from typing import Any

import click
import yaml  # type: ignore[import-untyped, unused-ignore]
from pydantic import ValidationError

from casebench.benchmarks.base import Benchmark, SupportsExecute
from casebench.benchmarks.registry import (
    SuiteRegistry,
    SuiteRegistryError,
    default_registry,
)
from casebench.benchmarks.report import OutputFormat
from casebench.benchmarks.runner import SuiteRunner
from casebench.models.config_models import RunConfig, SuiteConfig
from casebench.models.constants import (
    DEFAULT_PROBE_KIND,
    DEFAULT_WARMUP_SECONDS,
    ProbeKind,
)
from casebench.utils.env import (
    ITERATIONS_VAR,
    MEMORY_PROBE_VAR,
    WARMUP_SECONDS_VAR,
    EnvVarError,
    get_env,
)
from casebench.utils.logger import Logger


def _fail(message: str, verbose: bool = False) -> None:
    click.echo(f"Error: {message}", err=True)
    if verbose:
        traceback.print_exc()
    sys.exit(1)


def load_run_config(config_path: str | None) -> RunConfig | None:
    """Load and validate a YAML or JSON run configuration."""
    if not config_path:
        return None

    path = Path(config_path)
    try:
        content = path.read_text()
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (OSError, ValueError, yaml.YAMLError) as e:
        _fail(f"Failed to parse config file {config_path}: {e}")

    if not isinstance(data, dict):
        _fail(f"Config file {config_path} must be a mapping")

    try:
        return RunConfig.model_validate(data)
    except ValidationError as e:
        _fail(f"Invalid run configuration in {config_path}:\n{e}")
    return None


def _resolve_settings(
    config: RunConfig | None,
    iterations: int | None,
    warmup: float | None,
    probe: str | None,
) -> tuple[int | None, float, ProbeKind]:
    """Merge CLI flags, config file and environment, in that priority."""
    config_fields = config.model_fields_set if config else set()

    if iterations is None:
        if config and "iteration_count" in config_fields:
            iterations = config.iteration_count
        else:
            iterations = get_env(ITERATIONS_VAR, as_type=int)

    if warmup is None:
        if config and "warmup_seconds" in config_fields:
            warmup = config.warmup_seconds
        else:
            warmup = get_env(
                WARMUP_SECONDS_VAR, default=DEFAULT_WARMUP_SECONDS, as_type=float
            )

    if warmup < 0:
        raise ValueError(f"Warm-up must be non-negative, got {warmup}")

    if probe is None:
        if config and config.memory_probe is not None:
            probe = config.memory_probe
        else:
            probe = get_env(MEMORY_PROBE_VAR, default=str(DEFAULT_PROBE_KIND))

    return iterations, warmup, ProbeKind(str(probe).lower())


def build_suites(
    registry: SuiteRegistry,
    suite_configs: list[SuiteConfig],
    iterations: int | None,
    probe: ProbeKind,
) -> list[SupportsExecute]:
    """Instantiate the requested suites and apply their overrides.

    An empty ``suite_configs`` selects every registered suite.
    """
    if not suite_configs:
        suite_configs = [SuiteConfig(name=name) for name in registry.names()]

    suites = []
    for suite_config in suite_configs:
        suite = registry.create(suite_config.name)
        if isinstance(suite, Benchmark):
            suite.use_memory_probe(probe)
            params: dict[str, Any] = {}
            if iterations is not None:
                params["iteration_count"] = iterations
            params.update(suite_config.overrides())
            if params:
                suite.set_parameters(params)
        suites.append(suite)
    return suites


def run_suites(
    paths: tuple[str, ...],
    suite_names: tuple[str, ...],
    iterations: int | None,
    warmup: float | None,
    show_memory: bool,
    probe: str | None,
    fmt: str | None,
    output: str | None,
    config_path: str | None,
    keep_going: bool,
    verbose: bool,
    registry: SuiteRegistry | None = None,
) -> None:
    """Load benchmark files, run the selected suites and report."""
    registry = registry if registry is not None else default_registry
    log = Logger.get("cli.run")

    config = load_run_config(config_path)
    try:
        iterations, warmup, probe_kind = _resolve_settings(
            config, iterations, warmup, probe
        )
    except (EnvVarError, ValueError) as e:
        _fail(str(e), verbose)

    try:
        for path in paths:
            modules = registry.load_path(path, auto_register=True)
            log.debug(f"Loaded {len(modules)} module(s) from {path}")

        if suite_names:
            suite_configs = [SuiteConfig(name=name) for name in suite_names]
        else:
            suite_configs = config.suites if config else []
        suites = build_suites(registry, suite_configs, iterations, probe_kind)
    except (SuiteRegistryError, KeyError, ValueError) as e:
        _fail(str(e), verbose)

    if not suites:
        click.echo("No suites registered. Pass benchmark files or directories.")
        return

    stdout_format = OutputFormat(fmt) if fmt else OutputFormat.TEXT
    runner = SuiteRunner(
        # Structured stdout replaces the printed text report
        output=StringIO() if stdout_format != OutputFormat.TEXT else None,
        warmup_seconds=warmup,
        show_memory=show_memory,
        stop_on_error=not keep_going,
    )

    try:
        report = runner.run(suites)
    except Exception as e:
        _fail(f"Suite failed: {type(e).__name__}: {e}", verbose)

    if stdout_format != OutputFormat.TEXT:
        report.emit(sys.stdout, stdout_format)

    if output:
        file_format = OutputFormat(fmt) if fmt else OutputFormat.from_path(output)
        report.emit(output, file_format)
        click.echo(f"Results saved to: {output}", err=True)

    if report.errors:
        for identity, error in report.errors:
            click.echo(f"Error: {identity} failed: {error}", err=True)
        sys.exit(1)
