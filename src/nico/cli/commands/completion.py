"""`nico completion`: print a shell completion script."""

import click

from nico.cli.error_boundary import error_boundary
from nico.cli.output import machine_output, user_output
from nico.core.completion import SUPPORTED_SHELLS
from nico.core.context import NicoContext
from nico.core.errors import NicoError


@click.command("completion")
@click.argument("shell", type=click.Choice(SUPPORTED_SHELLS))
@click.pass_obj
@error_boundary
def completion_cmd(ctx: NicoContext, shell: str) -> None:
    """Generate completions for the specified shell.

    \b
    Examples:
      nico completion bash > ~/.local/share/bash-completion/completions/nico
      nico completion zsh > "${fpath[1]}/_nico"
      nico completion fish > ~/.config/fish/completions/nico.fish
    """
    user_output(f"Generating completions for {shell}...")
    try:
        script = ctx.completion.generate(shell)
    except RuntimeError as e:
        raise NicoError(str(e)) from e
    machine_output(script.rstrip("\n"))
