"""Locating the active nico project.

A project is a directory holding nico.config.json. Commands other than init
find it either through NICO_ENV (set when nico re-runs itself inside the
project's dev shell) or by walking up from the current directory.
"""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from nico.core.configuration import Configuration, find_config_dir, load_configuration_path
from nico.core.errors import ConfigDirectoryMismatchError, ConfigNotFoundError
from nico.core.shell import Shell, require_tool

logger = logging.getLogger(__name__)

NICO_ENV_VAR = "NICO_ENV"


@dataclass(frozen=True)
class ProjectContext:
    """A discovered project root and its loaded configuration."""

    root: Path
    config: Configuration


def discover_project(cwd: Path, env_root: Path | None) -> ProjectContext:
    """Find and load the active project.

    Args:
        cwd: Directory to search upward from when env_root is None
        env_root: Project root recorded in NICO_ENV, if any

    Raises:
        ConfigNotFoundError: If no configuration can be found
        ConfigDirectoryMismatchError: If env_root is set but its configuration
            lives in a different directory
        ConfigParseError: If the configuration is malformed
    """
    start = env_root if env_root is not None else cwd
    found = find_config_dir(start)
    if found is None:
        raise ConfigNotFoundError(start)

    if env_root is not None and found != env_root.resolve():
        raise ConfigDirectoryMismatchError(env_root, found)

    logger.debug("Using project at %s", found)
    return ProjectContext(root=found, config=load_configuration_path(found))


def build_develop_command(project: Path, nico_exe: str, argv: list[str]) -> list[str]:
    """Command line that re-runs nico inside the project's nix dev shell.

    --ignore-project is passed so the inner nico does not delegate again.
    """
    return [
        "nix",
        "develop",
        str(project),
        "--command",
        nico_exe,
        "--ignore-project",
        *argv,
    ]


def reenter_project_shell(shell: Shell, project: Path, argv: list[str]) -> int:
    """Re-run the current nico invocation inside `nix develop <project>`.

    Returns:
        Exit code of the delegated invocation

    Raises:
        MissingDependencyError: If nix is not installed
    """
    require_tool(shell, "nix", "Install Nix from https://nixos.org/download/")
    nico_exe = shell.get_installed_tool_path("nico") or sys.argv[0]

    project = project.resolve()
    command = build_develop_command(project, nico_exe, argv)
    env = dict(os.environ)
    env[NICO_ENV_VAR] = str(project)

    logger.info("Delegating to the dev shell of %s", project)
    return shell.run_command(command, cwd=project, env=env)
