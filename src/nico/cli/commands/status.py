"""`nico status`: summarize the active project."""

import click

from nico.cli.error_boundary import error_boundary
from nico.cli.output import machine_output
from nico.core.context import NicoContext
from nico.core.project import discover_project


def _label(text: str) -> str:
    return click.style(text, bold=True)


@click.command("status")
@click.option(
    "--policy",
    is_flag=True,
    help="Also print each remote's rendered polling policy block.",
)
@click.pass_obj
@error_boundary
def status_cmd(ctx: NicoContext, policy: bool) -> None:
    """Get project status."""
    project = discover_project(ctx.cwd, ctx.project_env)
    config = project.config

    machine_output(f"{_label('Project Path:')}\t\t{project.root}")
    machine_output(f"{_label('Nix Branch:')}\t\tnixpkgs/nixos-{config.init.nix}")
    machine_output(f"{_label('Target Architecture:')}\t{config.init.system}")
    machine_output(_label("Remotes:"))

    for name, remote in config.resources.remotes.items():
        url = click.style(remote.url, italic=True)
        machine_output(f"  - {name}: {url} ({remote.transport.value})")
        if policy:
            for line in remote.render_policy(ctx.templates).rstrip("\n").splitlines():
                machine_output(f"      {line}")
