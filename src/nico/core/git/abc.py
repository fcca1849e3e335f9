"""High-level git operations interface.

This module provides a clean abstraction over git subprocess calls, making the
initialization flow testable without touching real repositories.

Architecture:
- Git: Abstract base class defining the interface
- RealGit: Production implementation using subprocess
- FakeGit (tests/fakes/git.py): In-memory implementation for tests
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

# ============================================================================
# Abstract Interface
# ============================================================================


class Git(ABC):
    """Abstract interface for git operations.

    All implementations (real and fake) must implement this interface.
    This interface contains ONLY runtime operations - no test setup methods.

    Mutating operations raise RuntimeError on failure (see
    run_subprocess_with_context); callers translate that into GitError.
    """

    @abstractmethod
    def init_repository(self, path: Path) -> None:
        """Create a new, empty repository at path.

        Args:
            path: Directory to initialize (must already exist)
        """
        ...

    @abstractmethod
    def create_initial_commit(self, repo_root: Path) -> None:
        """Record a parentless commit of the (empty) index.

        Args:
            repo_root: Path to the repository root
        """
        ...

    @abstractmethod
    def clone_repository(self, url: str, target: Path) -> None:
        """Clone url into target with full history.

        Args:
            url: Source repository URL
            target: Destination directory (may exist if empty)
        """
        ...

    @abstractmethod
    def list_remotes(self, repo_root: Path) -> list[str]:
        """List configured remote names in configuration order."""
        ...

    @abstractmethod
    def get_remote_url(self, repo_root: Path, remote: str) -> str | None:
        """Get the fetch URL of a remote, or None if it has none configured."""
        ...

    @abstractmethod
    def get_remote_default_branch(self, repo_root: Path, remote: str) -> str | None:
        """Ask a remote which branch its HEAD points at.

        Contacts the remote. Returns None when the remote answered but did not
        advertise a symbolic HEAD that could be decoded into a branch name.

        Raises:
            RuntimeError: If the remote could not be contacted
        """
        ...

    @abstractmethod
    def add_paths(self, repo_root: Path, paths: Sequence[str]) -> None:
        """Stage new and changed files under the given pathspecs."""
        ...

    @abstractmethod
    def commit(self, repo_root: Path, message: str) -> None:
        """Commit the staged index on top of HEAD."""
        ...
