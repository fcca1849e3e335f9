"""Repository bootstrapping for `nico init`.

Prepares the target directory and produces a repository in one of three
mutually exclusive ways:

- CreateLocal: `git init` plus an empty initial commit; the project directory
  itself becomes the single remote "local".
- CloneRemote: clone a URL; the URL becomes the single remote "origin".
- AdoptExisting: open the repository already there and discover its remotes.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from nico.core.configuration import CONFIG_FILENAME
from nico.core.errors import GitError, RepositoryStateError, ValidationError
from nico.core.git.abc import Git
from nico.core.init_types import AdoptExisting, CloneRemote, CreateLocal, InitArgs
from nico.core.remote import DEFAULT_MAIN_BRANCH, RemoteDescriptor, classify

logger = logging.getLogger(__name__)

LOCAL_REMOTE_NAME = "local"
CLONE_REMOTE_NAME = "origin"


@dataclass(frozen=True)
class RepositoryHandle:
    """An open working tree for the duration of one command.

    Not persisted; the remotes it reports are copied into the project
    configuration, which owns them from then on.
    """

    root: Path
    git: Git

    def remote_names(self) -> list[str]:
        return self.git.list_remotes(self.root)

    def remote_url(self, name: str) -> str | None:
        return self.git.get_remote_url(self.root, name)

    def remote_default_branch(self, name: str) -> str | None:
        return self.git.get_remote_default_branch(self.root, name)

    def add_files(self, paths: Sequence[str]) -> None:
        try:
            self.git.add_paths(self.root, paths)
        except RuntimeError as e:
            raise GitError(str(e)) from e

    def commit(self, message: str) -> None:
        try:
            self.git.commit(self.root, message)
        except RuntimeError as e:
            raise GitError(str(e)) from e


@dataclass(frozen=True)
class BootstrapResult:
    """Outcome of a successful bootstrap."""

    root: Path
    remotes: list[RemoteDescriptor]
    repo: RepositoryHandle


def has_repository_metadata(path: Path) -> bool:
    """Check whether path is the top of a git working tree."""
    return (path / ".git").exists()


def prepare_target(path: Path) -> Path:
    """Ensure path is a usable directory and return its canonical form.

    Missing directories (including missing ancestors) are created.

    Raises:
        ValidationError: If path exists but is not a directory
    """
    if path.exists() and not path.is_dir():
        raise ValidationError(f"Initialization path must be a directory: {path}")

    if not path.exists():
        logger.debug("Creating %s", path)
        path.mkdir(parents=True, exist_ok=True)

    return path.resolve()


def bootstrap_repository(git: Git, args: InitArgs, cwd: Path) -> BootstrapResult:
    """Prepare the target directory and produce a repository per args.mode.

    Args:
        git: Git backend
        args: Init arguments; args.path defaults to cwd
        cwd: Current working directory of the invocation

    Raises:
        ValidationError: If the target is not a directory
        InvalidUrlError: If a clone URL does not end with .git
        RepositoryStateError: If repository metadata is present/absent
            contrary to the mode, or the target already holds
            a nico configuration
        GitError: If a git operation fails
    """
    target = args.path if args.path is not None else cwd
    if not target.is_absolute():
        target = cwd / target

    logger.info("Initializing a project at %s", target)

    # Reject a malformed clone URL before touching the filesystem
    if isinstance(args.mode, CloneRemote):
        classify(CLONE_REMOTE_NAME, args.mode.url)

    root = prepare_target(target)
    if (root / CONFIG_FILENAME).exists():
        raise RepositoryStateError(
            f"{root} is already a nico project ({CONFIG_FILENAME} exists); "
            "refusing to overwrite its configuration."
        )

    match args.mode:
        case CreateLocal():
            return _create_local(git, root)
        case CloneRemote(url=url):
            return _clone_remote(git, root, url)
        case AdoptExisting():
            return _adopt_existing(git, root)


def _create_local(git: Git, root: Path) -> BootstrapResult:
    if has_repository_metadata(root):
        raise RepositoryStateError(
            "Attempting to create a new local git repository, "
            "but the target directory already contains one."
        )

    try:
        git.init_repository(root)
        git.create_initial_commit(root)
    except RuntimeError as e:
        raise GitError(str(e)) from e

    remote = RemoteDescriptor(name=LOCAL_REMOTE_NAME, url=str(root))
    return BootstrapResult(root=root, remotes=[remote], repo=RepositoryHandle(root, git))


def _clone_remote(git: Git, root: Path, url: str) -> BootstrapResult:
    if has_repository_metadata(root):
        raise RepositoryStateError(
            "Attempting to clone a git repository, "
            "but the target directory already contains one."
        )

    remote = classify(CLONE_REMOTE_NAME, url)

    try:
        git.clone_repository(url, root)
    except RuntimeError as e:
        raise GitError(str(e)) from e

    return BootstrapResult(root=root, remotes=[remote], repo=RepositoryHandle(root, git))


def _adopt_existing(git: Git, root: Path) -> BootstrapResult:
    if not has_repository_metadata(root):
        raise RepositoryStateError("Target folder does not contain an existing git repository.")

    repo = RepositoryHandle(root, git)
    try:
        names = repo.remote_names()
    except RuntimeError as e:
        raise GitError(str(e)) from e

    return BootstrapResult(root=root, remotes=discover_remotes(repo, names), repo=repo)


def discover_remotes(repo: RepositoryHandle, names: Sequence[str]) -> list[RemoteDescriptor]:
    """Build descriptors for every remote whose URL and HEAD can be read.

    Best effort: a remote without a URL, or one that cannot be contacted,
    is left out instead of failing the whole init.
    """
    remotes: list[RemoteDescriptor] = []
    for name in names:
        if not name:
            continue

        url = repo.remote_url(name)
        if url is None:
            logger.debug("Skipping remote '%s': no URL configured", name)
            continue

        try:
            branch = repo.remote_default_branch(name)
        except RuntimeError as e:
            logger.debug("Skipping remote '%s': %s", name, e)
            continue

        remotes.append(
            RemoteDescriptor(name=name, url=url, main_branch=branch or DEFAULT_MAIN_BRANCH)
        )
    return remotes
