import logging
import os
import sys
from pathlib import Path

import click

from nico.cli.commands.completion import completion_cmd
from nico.cli.commands.init import init_cmd
from nico.cli.commands.status import status_cmd
from nico.cli.constants import CONTEXT_SETTINGS, DEBUG_ENV_VAR, LOG_FORMAT, VERBOSITY_LEVELS
from nico.cli.error_boundary import exit_with_error
from nico.core.context import NicoContext, create_context
from nico.core.errors import NicoError
from nico.core.project import reenter_project_shell


def configure_logging(verbose: int) -> None:
    """Set the root log level from the -v count (NICO_DEBUG forces debug)."""
    if os.environ.get(DEBUG_ENV_VAR):
        level = logging.DEBUG
    else:
        level = VERBOSITY_LEVELS[min(verbose, len(VERBOSITY_LEVELS) - 1)]
    logging.basicConfig(level=level, format=LOG_FORMAT)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="nico")
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase log verbosity (-v for info, -vv for debug).",
)
@click.option(
    "-p",
    "--project",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Use a project outside of the current directory (the project's root directory).",
)
@click.option("--ignore-project", is_flag=True, hidden=True)
@click.pass_context
def cli(click_ctx: click.Context, verbose: int, project: Path | None, ignore_project: bool) -> None:
    """Automated scaffolding & templating for multi-host Nix configurations."""
    configure_logging(verbose)

    # Only create context if not already provided (e.g., by tests)
    if click_ctx.obj is None:
        click_ctx.obj = create_context()
    ctx: NicoContext = click_ctx.obj

    # Inside the project's dev shell NICO_ENV is already set; never delegate twice
    if project is None or ignore_project or ctx.project_env is not None:
        return

    try:
        exit_code = reenter_project_shell(ctx.shell, project, sys.argv[1:])
    except (NicoError, OSError) as e:
        exit_with_error(e)
    click_ctx.exit(exit_code)


cli.add_command(completion_cmd)
cli.add_command(completion_cmd, name="completions")
cli.add_command(init_cmd)
cli.add_command(status_cmd)


def main() -> None:
    """CLI entry point used by the `nico` console script."""
    cli()
