"""`nico init`: create a nico project in a directory."""

from pathlib import Path

import click

from nico.cli.constants import GIT_INSTALL_HINT
from nico.cli.error_boundary import error_boundary
from nico.cli.output import user_output
from nico.core.context import NicoContext
from nico.core.errors import ValidationError
from nico.core.init_flow import run_init
from nico.core.init_types import (
    DEFAULT_COMIN_URL,
    DEFAULT_DESCRIPTION,
    DEFAULT_NIX,
    DEFAULT_SOPS_URL,
    DEFAULT_SYSTEM,
    AdoptExisting,
    CloneRemote,
    CreateLocal,
    InitArgs,
    InitMode,
)
from nico.core.shell import require_tool


def identify_mode(git_local: bool, git_clone: str | None, git_existing: bool) -> InitMode:
    """Determine which repository strategy to use.

    Validates mutual exclusivity of flags and returns a strongly-typed mode.
    Adopting an existing repository is the default when no flag is given.

    Raises:
        ValidationError: If more than one of the flags is provided
    """
    flags_set = sum([git_local, git_clone is not None, git_existing])
    if flags_set > 1:
        raise ValidationError("Cannot use multiple of: --git-local, --git-clone, --git-existing")

    if git_local:
        return CreateLocal()
    if git_clone is not None:
        return CloneRemote(url=git_clone)
    return AdoptExisting()


@click.command("init")
@click.argument("path", required=False, type=click.Path(path_type=Path))
@click.option(
    "-d",
    "--desc",
    "description",
    default=DEFAULT_DESCRIPTION,
    show_default=True,
    help="Flake description.",
)
@click.option(
    "--system", default=DEFAULT_SYSTEM, show_default=True, help="System architecture to build for."
)
@click.option(
    "--nix",
    default=DEFAULT_NIX,
    show_default=True,
    help='NixOS channel tag to use in the flake (formats into "nixpkgs/nixos-{nix}").',
)
@click.option("--sops-url", default=DEFAULT_SOPS_URL, show_default=True, help="sops-nix flake URL.")
@click.option("--comin-url", default=DEFAULT_COMIN_URL, show_default=True, help="comin flake URL.")
@click.option(
    "--git-local",
    is_flag=True,
    help="Initialize a new local repository. Mostly useful for testing and initial setup.",
)
@click.option(
    "--git-clone",
    metavar="URL",
    default=None,
    help="Clone an existing repository and track it as 'origin'. No authentication support.",
)
@click.option(
    "--git-existing",
    is_flag=True,
    help="Use the repository already in the target directory and detect its remotes (default).",
)
@click.pass_obj
@error_boundary
def init_cmd(
    ctx: NicoContext,
    path: Path | None,
    description: str,
    system: str,
    nix: str,
    sops_url: str,
    comin_url: str,
    git_local: bool,
    git_clone: str | None,
    git_existing: bool,
) -> None:
    """Initialize a new configuration directory.

    PATH defaults to the current directory. Missing directories, including
    parents, are created.
    """
    require_tool(ctx.shell, "git", GIT_INSTALL_HINT)
    mode = identify_mode(git_local, git_clone, git_existing)

    result = run_init(
        ctx,
        InitArgs(
            path=path,
            description=description,
            system=system,
            nix=nix,
            sops_url=sops_url,
            comin_url=comin_url,
            mode=mode,
        ),
    )

    user_output(click.style("✓ ", fg="green") + f"Initialized nico project at {result.root}")
    remotes = result.config.resources.remotes
    if not remotes:
        user_output("  No remotes detected.")
    for name, remote in remotes.items():
        user_output(f"  - {name}: {remote.url} (branch {remote.main_branch})")
