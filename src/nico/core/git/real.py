"""Production Git implementation using subprocess.

This module provides the real Git implementation that executes actual git
commands via subprocess.
"""

import os
import subprocess
from collections.abc import Sequence
from pathlib import Path

from nico.core.git.abc import Git
from nico.core.subprocess import run_subprocess_with_context

# ============================================================================
# Production Implementation
# ============================================================================


class RealGit(Git):
    """Production implementation using subprocess.

    All git operations execute actual git commands via subprocess.
    """

    def init_repository(self, path: Path) -> None:
        """Create a new, empty repository at path."""
        run_subprocess_with_context(
            ["git", "init", str(path)],
            operation_context=f"initialize repository at {path}",
        )

    def create_initial_commit(self, repo_root: Path) -> None:
        """Record a parentless commit of the (empty) index."""
        run_subprocess_with_context(
            ["git", "commit", "--allow-empty", "-m", "Initial commit"],
            operation_context="create initial commit",
            cwd=repo_root,
        )

    def clone_repository(self, url: str, target: Path) -> None:
        """Clone url into target with full history."""
        run_subprocess_with_context(
            ["git", "clone", url, str(target)],
            operation_context=f"clone '{url}' into {target}",
        )

    def list_remotes(self, repo_root: Path) -> list[str]:
        """List configured remote names in configuration order."""
        result = run_subprocess_with_context(
            ["git", "remote"],
            operation_context="list remotes",
            cwd=repo_root,
        )
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def get_remote_url(self, repo_root: Path, remote: str) -> str | None:
        """Get the fetch URL of a remote, or None if it has none configured."""
        result = subprocess.run(
            ["git", "config", "--get", f"remote.{remote}.url"],
            cwd=repo_root,
            capture_output=True,
            text=True,
            check=False,
        )
        # Exit code 1 means the key is not set
        if result.returncode != 0:
            return None

        url = result.stdout.strip()
        if not url:
            return None
        return url

    def get_remote_default_branch(self, repo_root: Path, remote: str) -> str | None:
        """Ask a remote which branch its HEAD points at."""
        result = run_subprocess_with_context(
            ["git", "ls-remote", "--symref", remote, "HEAD"],
            operation_context=f"query default branch of remote '{remote}'",
            cwd=repo_root,
            # Fail instead of waiting for credentials on an authenticated remote
            env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
        )

        # Expected line: "ref: refs/heads/main\tHEAD"
        for line in result.stdout.splitlines():
            if not line.startswith("ref: "):
                continue
            ref = line[len("ref: ") :].split("\t", maxsplit=1)[0].strip()
            if ref.startswith("refs/heads/"):
                return ref.replace("refs/heads/", "", 1)
        return None

    def add_paths(self, repo_root: Path, paths: Sequence[str]) -> None:
        """Stage new and changed files under the given pathspecs."""
        run_subprocess_with_context(
            ["git", "add", "--", *paths],
            operation_context=f"stage {', '.join(paths)}",
            cwd=repo_root,
        )

    def commit(self, repo_root: Path, message: str) -> None:
        """Commit the staged index on top of HEAD."""
        run_subprocess_with_context(
            ["git", "commit", "-m", message],
            operation_context=f"commit '{message}'",
            cwd=repo_root,
        )
