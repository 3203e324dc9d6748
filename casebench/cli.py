#!/usr/bin/env python3
"""casebench CLI - command-line interface for casebench."""

import click

from casebench.models.constants import ProbeKind
from casebench.utils.env import LOG_LEVEL_VAR, get_env
from casebench.utils.logger import Logger


@click.group()
def casebench():
    """Micro-benchmark harness: time and memory per benchmark case."""
    # Logs go to stderr; stdout carries the report
    if not Logger.is_configured():
        Logger.configure(
            level=get_env(LOG_LEVEL_VAR, default="WARNING"),
            output="stderr",
            timestamps=True,
        )


@casebench.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
@click.option(
    "--suite",
    "-s",
    "suites",
    multiple=True,
    help="Run only these suites, in the given order (repeatable)",
)
@click.option(
    "--iterations",
    "-n",
    type=click.IntRange(min=0),
    default=None,
    help="Iterations per case for every suite (default: 10)",
)
@click.option(
    "--warmup",
    "-w",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds to wait before the first suite (default: 1)",
)
@click.option(
    "--memory",
    "-m",
    "show_memory",
    is_flag=True,
    help="Show the memory delta column",
)
@click.option(
    "--probe",
    type=click.Choice([k.value for k in ProbeKind], case_sensitive=False),
    default=None,
    help="Memory accounting strategy (default: tracemalloc)",
)
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["text", "json", "yaml"], case_sensitive=False),
    default=None,
    help="Report format for stdout and --output",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write the report to a file (format from extension)",
)
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML or JSON run configuration",
)
@click.option(
    "--keep-going",
    is_flag=True,
    help="Continue with the next suite when one fails",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Debug logging and tracebacks on errors",
)
def run(
    paths,
    suites,
    iterations,
    warmup,
    show_memory,
    probe,
    fmt,
    output,
    config,
    keep_going,
    verbose,
):
    r"""Run benchmark suites found in PATHS.

    \b
    Examples:
      casebench run benchmarks/                      # Run every suite
      casebench run bench_lists.py -s ListBenchmark  # Run one suite
      casebench run benchmarks/ -n 100 -w 0          # 100 iterations, no warm-up
      casebench run benchmarks/ -m --probe rss       # Memory deltas from RSS
      casebench run benchmarks/ -o run.yaml          # Save a YAML report
    """
    from casebench.commands.run_cmd import run_suites

    if verbose:
        Logger.set_level("DEBUG")

    run_suites(
        paths=paths,
        suite_names=suites,
        iterations=iterations,
        warmup=warmup,
        show_memory=show_memory,
        probe=probe,
        fmt=fmt.lower() if fmt else None,
        output=output,
        config_path=config,
        keep_going=keep_going,
        verbose=verbose,
    )


@casebench.command(name="list")
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
def list_command(paths):
    """List suites found in PATHS."""
    from casebench.commands.list_cmd import list_suites

    list_suites(paths)


@casebench.command()
@click.option("--verbose", "-v", is_flag=True, help="Show detailed version information")
def version(verbose):
    """Display casebench version information."""
    from casebench.commands.version_cmd import run_version

    run_version(verbose=verbose)


if __name__ == "__main__":
    casebench()
