"""List command - show the suites found in benchmark files."""

import sys
import textwrap

import click

from casebench.benchmarks.registry import (
    SuiteRegistry,
    SuiteRegistryError,
    default_registry,
)


def list_suites(paths: tuple[str, ...], registry: SuiteRegistry | None = None) -> None:
    """Load ``paths`` and print every registered suite with its cases."""
    registry = registry if registry is not None else default_registry

    try:
        for path in paths:
            registry.load_path(path, auto_register=True)
    except SuiteRegistryError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo("Registered Suites:")
    click.echo("-" * 50)

    suites = registry.list_suites()
    if not suites:
        click.echo("  No suites registered.")
        return

    for suite in suites:
        cases = suite["cases"]
        click.echo(f"  {suite['name']:<20} {len(cases)} case(s)")
        if suite["pretty_name"] != suite["name"]:
            click.echo(f"      {suite['pretty_name']}")
        if suite["description"]:
            click.echo(
                textwrap.fill(
                    suite["description"],
                    width=70,
                    initial_indent="      ",
                    subsequent_indent="      ",
                )
            )
        if cases:
            click.echo(f"      cases: {', '.join(cases)}")
        click.echo()

    click.echo("-" * 50)
    click.echo(f"Total: {len(suites)} suites registered")
