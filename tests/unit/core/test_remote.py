"""Tests for remote descriptors and URL classification."""

import pydantic
import pytest

from nico.core.errors import InvalidUrlError, ValidationError
from nico.core.remote import (
    DEFAULT_MAIN_BRANCH,
    DEFAULT_POLLING_PERIOD,
    DEFAULT_TESTING_BRANCH_PREFIX,
    DEFAULT_TIMEOUT,
    RemoteDescriptor,
    TransportKind,
    classify,
    classify_transport,
)
from nico.core.templates import TemplateRegistry


def test_classify_https_url_applies_default_policy() -> None:
    remote = classify("origin", "https://github.com/user/repo.git")

    assert remote.name == "origin"
    assert remote.url == "https://github.com/user/repo.git"
    assert remote.transport == TransportKind.HTTP
    assert remote.main_branch == DEFAULT_MAIN_BRANCH
    assert remote.testing_branch_prefix == DEFAULT_TESTING_BRANCH_PREFIX
    assert remote.polling_period == DEFAULT_POLLING_PERIOD
    assert remote.timeout == DEFAULT_TIMEOUT


def test_classify_accepts_single_trailing_slash_and_keeps_url() -> None:
    remote = classify("origin", "https://host/repo.git/")

    assert remote.url == "https://host/repo.git/"


def test_classify_rejects_url_without_git_suffix() -> None:
    with pytest.raises(InvalidUrlError) as exc_info:
        classify("origin", "https://github.com/user/repo")

    assert exc_info.value.url == "https://github.com/user/repo"
    assert "should end with .git" in str(exc_info.value)


def test_invalid_url_is_a_validation_error() -> None:
    with pytest.raises(ValidationError):
        classify("origin", "https://host/repo.git//")


@pytest.mark.parametrize(
    ("name", "url", "expected"),
    [
        ("origin", "http://host/repo.git", TransportKind.HTTP),
        ("origin", "ssh://host/repo.git", TransportKind.SSH),
        ("origin", "rsync://host/repo.git", TransportKind.SSH),
        ("git@host", "/srv/repo.git", TransportKind.SSH),
        ("origin", "git://host/repo.git", TransportKind.GIT),
        ("origin", "/srv/repo.git", TransportKind.LOCAL),
        ("origin", "git@github.com:user/repo.git", TransportKind.LOCAL),
    ],
)
def test_classify_transport(name: str, url: str, expected: TransportKind) -> None:
    assert classify_transport(name, url) == expected


def test_http_prefix_wins_over_at_sign_in_name() -> None:
    assert classify_transport("me@host", "https://host/repo.git") == TransportKind.HTTP


def test_descriptor_rejects_negative_durations() -> None:
    with pytest.raises(pydantic.ValidationError):
        RemoteDescriptor(name="origin", url="/srv/repo.git", polling_period=-1)


def test_render_policy_uses_descriptor_fields() -> None:
    remote = RemoteDescriptor(
        name="origin",
        url="https://host/repo.git",
        main_branch="trunk",
        polling_period=30,
        timeout=120,
    )

    rendered = remote.render_policy(TemplateRegistry.from_package())

    assert 'name = "origin";' in rendered
    assert 'url = "https://host/repo.git";' in rendered
    assert 'main.name = "trunk";' in rendered
    assert 'testing.name = "testing-${config.networking.hostName}";' in rendered
    assert "poller.period = 30;" in rendered
    assert "timeout = 120;" in rendered


def test_render_policy_without_bundled_template_is_a_bug() -> None:
    remote = classify("origin", "https://host/repo.git")

    with pytest.raises(RuntimeError, match="comin/remote.nix"):
        remote.render_policy(TemplateRegistry.from_sources({}))
