"""Application context with dependency injection."""

import os
from dataclasses import dataclass
from pathlib import Path

import click

from nico.cli.output import user_output
from nico.core.completion import Completion, RealCompletion
from nico.core.git.abc import Git
from nico.core.git.real import RealGit
from nico.core.project import NICO_ENV_VAR
from nico.core.shell import RealShell, Shell
from nico.core.templates import TemplateRegistry


@dataclass(frozen=True)
class NicoContext:
    """Immutable context holding all dependencies for nico operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.

    project_env is the project root recorded in NICO_ENV. It is set only when
    nico runs inside a project's dev shell, and doubles as the marker that
    stops --project from delegating to nix develop again.
    """

    git: Git
    shell: Shell
    completion: Completion
    templates: TemplateRegistry
    cwd: Path
    project_env: Path | None

    @staticmethod
    def for_test(
        git: Git | None = None,
        shell: Shell | None = None,
        completion: Completion | None = None,
        templates: TemplateRegistry | None = None,
        cwd: Path | None = None,
        project_env: Path | None = None,
    ) -> "NicoContext":
        """Create test context with optional pre-configured integration classes.

        Args:
            git: Optional Git implementation. If None, creates empty FakeGit.
            shell: Optional Shell implementation. If None, creates a FakeShell
                   with git and nix installed.
            completion: Optional Completion implementation.
                        If None, creates empty FakeCompletion.
            templates: Optional TemplateRegistry. If None, loads the bundled templates.
            cwd: Optional current working directory. If None, uses Path.cwd().
            project_env: Optional NICO_ENV value. If None, no dev shell is active.

        Returns:
            NicoContext configured with provided values and test defaults
        """
        from tests.fakes.completion import FakeCompletion
        from tests.fakes.git import FakeGit
        from tests.fakes.shell import FakeShell

        if shell is None:
            shell = FakeShell(installed_tools={"git": "/usr/bin/git", "nix": "/usr/bin/nix"})

        return NicoContext(
            git=git or FakeGit(),
            shell=shell,
            completion=completion or FakeCompletion(),
            templates=templates or TemplateRegistry.from_package(),
            cwd=cwd or Path.cwd(),
            project_env=project_env,
        )


def safe_cwd() -> tuple[Path | None, str | None]:
    """Get current working directory, detecting if it no longer exists.

    Returns:
        tuple[Path | None, str | None]: (path, error_message)
        - If successful: (Path, None)
        - If directory deleted: (None, error_message)
    """
    try:
        cwd_path = Path.cwd()
        return (cwd_path, None)
    except (FileNotFoundError, OSError):
        return (
            None,
            "Current working directory no longer exists",
        )


def create_context() -> NicoContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution. The template registry is built here, once per process.
    """
    cwd_result, error_msg = safe_cwd()
    if cwd_result is None:
        assert error_msg is not None
        user_output(click.style("Error: ", fg="red") + error_msg)
        user_output("\nThe directory you're running from has been deleted.")
        user_output("Please change to a valid directory and try again.")
        raise SystemExit(1)

    env_value = os.environ.get(NICO_ENV_VAR)
    project_env = Path(env_value) if env_value else None

    return NicoContext(
        git=RealGit(),
        shell=RealShell(),
        completion=RealCompletion(),
        templates=TemplateRegistry.from_package(),
        cwd=cwd_result,
        project_env=project_env,
    )
