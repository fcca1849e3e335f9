"""Shell completion script generation operations.

This module provides abstraction over completion script generation for different
shells (bash, zsh, fish). This abstraction enables dependency injection for testing
without mock.patch.
"""

import os
import shutil
import sys
from abc import ABC, abstractmethod

from nico.core.subprocess import run_subprocess_with_context

SUPPORTED_SHELLS = ("bash", "zsh", "fish")

# Environment variable Click inspects to switch into completion mode
COMPLETE_VAR = "_NICO_COMPLETE"


class Completion(ABC):
    """Abstract interface for shell completion script generation."""

    @abstractmethod
    def generate(self, shell: str) -> str:
        """Generate the completion script for shell.

        Args:
            shell: One of SUPPORTED_SHELLS

        Returns:
            Completion script as a string.

        Example:
            >>> completion_ops = RealCompletion()
            >>> script = completion_ops.generate("zsh")
        """
        ...

    @abstractmethod
    def get_nico_path(self) -> str:
        """Get path to the nico executable."""
        ...


class RealCompletion(Completion):
    """Production implementation using subprocess and Click's completion system."""

    def generate(self, shell: str) -> str:
        """Generate a completion script via Click's completion system.

        Implementation details:
        - Uses _NICO_COMPLETE=<shell>_source environment variable
        - Invokes nico executable to generate completion code
        """
        if shell not in SUPPORTED_SHELLS:
            raise ValueError(f"Unsupported shell: {shell}")

        nico_exe = self.get_nico_path()
        env = os.environ.copy()
        env[COMPLETE_VAR] = f"{shell}_source"
        result = run_subprocess_with_context(
            [nico_exe],
            operation_context=f"generate {shell} completion script",
            env=env,
        )
        return result.stdout

    def get_nico_path(self) -> str:
        """Get nico executable path using shutil.which or sys.argv fallback."""
        nico_exe = shutil.which("nico")
        if not nico_exe:
            nico_exe = sys.argv[0]
        return nico_exe
