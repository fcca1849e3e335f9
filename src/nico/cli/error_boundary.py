"""Conversion of nico failures into CLI exit behavior.

Core code raises typed NicoError subclasses (and lets OSError propagate).
Commands are wrapped with @error_boundary, which reports the failure as one
styled line on stderr and exits with status 1. Extra detail (for example the
full git command and its stderr) is logged at debug level.
"""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, NoReturn

import click

from nico.cli.output import user_output
from nico.core.errors import (
    ConfigDirectoryMismatchError,
    ConfigNotFoundError,
    ConfigParseError,
    GitError,
    InvalidUrlError,
    MissingDependencyError,
    NicoError,
    RepositoryStateError,
    TemplateRenderingError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first: InvalidUrlError is also a ValidationError
ERROR_LABELS: list[tuple[type[BaseException], str]] = [
    (InvalidUrlError, "invalid URL"),
    (ValidationError, "invalid input"),
    (ConfigNotFoundError, "config not found"),
    (RepositoryStateError, "repository state"),
    (ConfigDirectoryMismatchError, "config mismatch"),
    (ConfigParseError, "malformed config"),
    (TemplateRenderingError, "template rendering"),
    (GitError, "git"),
    (MissingDependencyError, "missing dependency"),
    (NicoError, "nico"),
    (OSError, "I/O"),
]


def error_label(error: BaseException) -> str:
    """Short name of the failure kind shown in the error line."""
    for error_type, label in ERROR_LABELS:
        if isinstance(error, error_type):
            return label
    return type(error).__name__


def exit_with_error(error: NicoError | OSError) -> NoReturn:
    """Report error on stderr and exit with status 1."""
    lines = str(error).strip().splitlines() or [type(error).__name__]
    user_output(click.style("Error: ", fg="red") + f"({error_label(error)}) {lines[0]}")
    for line in lines[1:]:
        logger.debug("%s", line)
    raise SystemExit(1)


def error_boundary(func: Callable) -> Callable:
    """Decorator turning NicoError/OSError raised by a command into exit code 1.

    Example:
        @click.command()
        @click.pass_obj
        @error_boundary
        def my_command(ctx: NicoContext) -> None:
            ...
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (NicoError, OSError) as e:
            exit_with_error(e)

    return wrapper
