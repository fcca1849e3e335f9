"""Tests for the completion command."""

from click.testing import CliRunner

from nico.cli.cli import cli
from nico.core.context import NicoContext
from tests.fakes.completion import FakeCompletion


def test_completion_prints_script() -> None:
    completion = FakeCompletion(scripts={"zsh": "#compdef nico\n"})
    ctx = NicoContext.for_test(completion=completion)

    result = CliRunner().invoke(cli, ["completion", "zsh"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "#compdef nico" in result.stdout
    assert "Generating completions for zsh..." in result.output
    assert completion.generation_calls == ["zsh"]


def test_completions_alias() -> None:
    completion = FakeCompletion()
    ctx = NicoContext.for_test(completion=completion)

    result = CliRunner().invoke(cli, ["completions", "fish"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert completion.generation_calls == ["fish"]


def test_completion_rejects_unknown_shell() -> None:
    completion = FakeCompletion()
    ctx = NicoContext.for_test(completion=completion)

    result = CliRunner().invoke(cli, ["completion", "powershell"], obj=ctx)

    assert result.exit_code == 2
    assert completion.generation_calls == []


def test_completion_generation_failure() -> None:
    completion = FakeCompletion(generate_raises=RuntimeError("Failed to generate bash script"))
    ctx = NicoContext.for_test(completion=completion)

    result = CliRunner().invoke(cli, ["completion", "bash"], obj=ctx)

    assert result.exit_code == 1
    assert "Failed to generate bash script" in result.output
