"""Tests for FakeGit test infrastructure."""

from pathlib import Path

import pytest

from tests.fakes.git import FakeGit


def test_init_repository_creates_metadata_dir(tmp_path: Path) -> None:
    git = FakeGit()

    git.init_repository(tmp_path)

    assert (tmp_path / ".git").is_dir()
    assert git.initialized_paths == [tmp_path]


def test_clone_registers_origin(tmp_path: Path) -> None:
    git = FakeGit()

    git.clone_repository("/srv/r.git", tmp_path)

    assert git.list_remotes(tmp_path) == ["origin"]
    assert git.get_remote_url(tmp_path, "origin") == "/srv/r.git"


def test_remote_queries_use_configured_state(tmp_path: Path) -> None:
    git = FakeGit(
        remotes={tmp_path: {"a": "/a.git", "b": None}},
        default_branches={tmp_path: {"a": "dev"}},
        unreachable_remotes={"b"},
    )

    assert git.list_remotes(tmp_path) == ["a", "b"]
    assert git.get_remote_url(tmp_path, "b") is None
    assert git.get_remote_default_branch(tmp_path, "a") == "dev"
    with pytest.raises(RuntimeError):
        git.get_remote_default_branch(tmp_path, "b")


def test_tracking_properties_return_copies(tmp_path: Path) -> None:
    git = FakeGit()
    git.commit(tmp_path, "msg")

    git.commits.clear()

    assert git.commits == [(tmp_path, "msg")]
