"""Host shell operations: tool discovery and running external commands.

Abstracted so tests can simulate installed/missing tools without mock.patch.
"""

import shutil
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path

from nico.core.errors import MissingDependencyError


class Shell(ABC):
    """Abstract interface for interacting with the host system."""

    @abstractmethod
    def get_installed_tool_path(self, tool_name: str) -> str | None:
        """Get the absolute path of an executable on PATH.

        Returns:
            Path to the executable, or None if it is not installed
        """
        ...

    @abstractmethod
    def run_command(
        self,
        command: list[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> int:
        """Run a command attached to the current terminal.

        Returns:
            The command's exit code
        """
        ...


class RealShell(Shell):
    """Production implementation using shutil and subprocess."""

    def get_installed_tool_path(self, tool_name: str) -> str | None:
        return shutil.which(tool_name)

    def run_command(
        self,
        command: list[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> int:
        # Interactive delegation: no capture, output goes straight to the user
        result = subprocess.run(
            command,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            check=False,
        )
        return result.returncode


def require_tool(shell: Shell, tool_name: str, hint: str) -> str:
    """Return the path of tool_name, or fail if it is not installed.

    Raises:
        MissingDependencyError: If the tool is not on PATH
    """
    path = shell.get_installed_tool_path(tool_name)
    if path is None:
        raise MissingDependencyError(tool_name, hint)
    return path
