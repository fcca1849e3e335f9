"""Integration tests running init against real git repositories."""

import shutil
import subprocess
from pathlib import Path

import pytest

from nico.core.bootstrap import bootstrap_repository
from nico.core.context import NicoContext
from nico.core.git.real import RealGit
from nico.core.init_flow import run_init
from nico.core.init_types import AdoptExisting, CloneRemote, CreateLocal, InitArgs
from nico.core.shell import RealShell

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


@pytest.fixture(autouse=True)
def git_identity(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")


def _git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    )
    return result.stdout


def _make_bare_remote(tmp_path: Path, branch: str) -> Path:
    seed = tmp_path / "seed"
    seed.mkdir()
    _git(seed, "init", "-b", branch)
    _git(seed, "commit", "--allow-empty", "-m", "seed")
    bare = tmp_path / "remote.git"
    _git(tmp_path, "clone", "--bare", str(seed), str(bare))
    return bare


def _context(cwd: Path) -> NicoContext:
    return NicoContext.for_test(git=RealGit(), shell=RealShell(), cwd=cwd)


def test_create_local_produces_two_commits(tmp_path: Path) -> None:
    result = run_init(_context(tmp_path), InitArgs(path=Path("fleet"), mode=CreateLocal()))

    log = _git(result.root, "log", "--format=%s").splitlines()
    assert log == ["Nico initialization", "Initial commit"]
    tracked = _git(result.root, "ls-files").splitlines()
    assert sorted(tracked) == ["flake.nix", "nico.config.json"]
    assert _git(result.root, "status", "--porcelain") == ""


def test_clone_remote_records_origin(tmp_path: Path) -> None:
    bare = _make_bare_remote(tmp_path, "main")
    url = str(bare)

    result = run_init(
        _context(tmp_path), InitArgs(path=Path("fleet"), mode=CloneRemote(url=url))
    )

    assert result.config.resources.remotes["origin"].url == url
    assert _git(result.root, "log", "-1", "--format=%s").strip() == "Nico initialization"


def test_adopt_existing_skips_remote_without_url(tmp_path: Path) -> None:
    bare = _make_bare_remote(tmp_path, "trunk")
    repo = tmp_path / "fleet"
    repo.mkdir()
    _git(repo, "init")
    _git(repo, "remote", "add", "upstream", str(bare))
    _git(repo, "config", "remote.broken.fetch", "+refs/heads/*:refs/remotes/broken/*")

    result = bootstrap_repository(RealGit(), InitArgs(path=repo, mode=AdoptExisting()), tmp_path)

    assert [(r.name, r.main_branch) for r in result.remotes] == [("upstream", "trunk")]
