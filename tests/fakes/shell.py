"""Fake implementation of Shell for testing.

This fake enables testing tool discovery and dev-shell delegation without
requiring nix or git to be installed.
"""

from collections.abc import Mapping
from pathlib import Path

from nico.core.shell import Shell


class FakeShell(Shell):
    """In-memory fake implementation of shell operations.

    Constructor Injection:
    - All state is provided via constructor parameters
    - No mutations occur apart from call recording

    Examples:
        # Test with tool installed
        >>> shell = FakeShell(installed_tools={"nix": "/usr/bin/nix"})
        >>> shell.get_installed_tool_path("nix")
        '/usr/bin/nix'

        # Test with tool missing
        >>> FakeShell().get_installed_tool_path("git") is None
        True
    """

    def __init__(
        self,
        *,
        installed_tools: dict[str, str] | None = None,
        command_exit_code: int = 0,
    ) -> None:
        """Initialize fake with predetermined tool availability.

        Args:
            installed_tools: Mapping of tool name to executable path. Tools not in
                this mapping will return None from get_installed_tool_path()
            command_exit_code: Exit code to return from run_command() (default: 0)
        """
        self._installed_tools = installed_tools or {}
        self._command_exit_code = command_exit_code
        self._command_calls: list[tuple[list[str], Path | None, dict[str, str] | None]] = []

    def get_installed_tool_path(self, tool_name: str) -> str | None:
        """Return the tool path if configured, None otherwise."""
        return self._installed_tools.get(tool_name)

    def run_command(
        self,
        command: list[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> int:
        """Track call to run_command and return configured exit code.

        It does not execute any actual subprocess operations.
        """
        self._command_calls.append((list(command), cwd, dict(env) if env is not None else None))
        return self._command_exit_code

    @property
    def command_calls(self) -> list[tuple[list[str], Path | None, dict[str, str] | None]]:
        """Get the list of run_command() calls that were made.

        Returns list of (command, cwd, env) tuples.

        This property is for test assertions only.
        """
        return self._command_calls.copy()
