"""Tests for the template registry."""

import pytest

from nico.core.errors import TemplateRenderingError
from nico.core.templates import TemplateRegistry


def test_from_package_registers_bundled_templates() -> None:
    registry = TemplateRegistry.from_package()

    assert {"flake/root.nix", "comin/remote.nix"} <= registry.keys()


def test_render_substitutes_variables() -> None:
    registry = TemplateRegistry.from_sources({"greet.txt": "hello {{ who }}\n"})

    assert registry.render("greet.txt", {"who": "world"}) == "hello world\n"


def test_nix_directive_marker_is_stripped() -> None:
    source = "[\n#! {% if items %}\n  {{ items }}\n#! {% endif %}\n]\n"
    registry = TemplateRegistry.from_sources({"list.nix": source})

    assert registry.render("list.nix", {"items": "a b"}) == "[\n  a b\n]\n"
    assert registry.render("list.nix", {"items": ""}) == "[\n]\n"


def test_marker_is_kept_for_non_nix_templates() -> None:
    registry = TemplateRegistry.from_sources({"notes.txt": "#! keep\n"})

    assert registry.render("notes.txt", {}) == "#! keep\n"


def test_unknown_key_raises() -> None:
    registry = TemplateRegistry.from_sources({})

    with pytest.raises(TemplateRenderingError, match="not registered"):
        registry.render("missing.nix", {})


def test_missing_variable_raises() -> None:
    registry = TemplateRegistry.from_sources({"greet.txt": "hello {{ who }}"})

    with pytest.raises(TemplateRenderingError):
        registry.render("greet.txt", {})


def test_broken_template_fails_at_load() -> None:
    with pytest.raises(RuntimeError, match="broken.nix"):
        TemplateRegistry.from_sources({"broken.nix": "{% if %}"})
