"""Output utilities for CLI commands with clear intent.

user_output() is for messages meant for a human and goes to stderr.
machine_output() is for data (completion scripts, status listings) and goes to
stdout, so it can be piped or redirected cleanly.
"""

import click


def user_output(message: str = "") -> None:
    """Print a human-facing message to stderr."""
    click.echo(message, err=True)


def machine_output(message: str = "") -> None:
    """Print data to stdout."""
    click.echo(message)
