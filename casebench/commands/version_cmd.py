"""
Version command - displays casebench version information
"""

import platform

import click

from casebench import __version__


def run_version(verbose: bool = False) -> None:
    """
    Display casebench version information.

    Args:
        verbose: If True, also show the interpreter and platform
    """
    click.echo(f"casebench {__version__}")
    if verbose:
        click.echo(
            f"  Python:   {platform.python_implementation()} {platform.python_version()}"
        )
        click.echo(f"  Platform: {platform.platform()}")
