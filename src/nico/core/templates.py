"""Template registry for generated project files.

Templates ship inside the package under ``nico/templates`` as
``<key>.template`` files. The registry is built once per process (see
create_context) and never mutated afterwards; the render pipeline receives it
by reference.
"""

import logging
from collections.abc import Iterator, Mapping
from importlib.resources import files
from importlib.resources.abc import Traversable
from types import MappingProxyType
from typing import Any

import jinja2

from nico.core.errors import TemplateRenderingError

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".template"

# Lets template directives sit behind Nix comments so the template files
# remain parseable Nix: "#! {% if x %}" becomes "{% if x %}".
NIX_DIRECTIVE_MARKER = "#! "


def _walk_templates(root: Traversable, prefix: str = "") -> Iterator[tuple[str, str]]:
    for entry in sorted(root.iterdir(), key=lambda e: e.name):
        if entry.is_dir():
            yield from _walk_templates(entry, f"{prefix}{entry.name}/")
        elif entry.name.endswith(TEMPLATE_SUFFIX):
            key = prefix + entry.name[: -len(TEMPLATE_SUFFIX)]
            yield key, entry.read_text(encoding="utf-8")


class TemplateRegistry:
    """Immutable, pre-compiled set of named templates.

    Keys are template paths relative to the template root without the
    ``.template`` suffix, e.g. ``flake/root.nix``.

    Example:
        >>> registry = TemplateRegistry.from_sources({"greet.txt": "hi {{ name }}"})
        >>> registry.render("greet.txt", {"name": "nico"})
        'hi nico'
    """

    def __init__(self, sources: Mapping[str, str]) -> None:
        cleaned: dict[str, str] = {}
        for key, content in sources.items():
            if key.endswith(".nix"):
                content = content.replace(NIX_DIRECTIVE_MARKER, "")
            logger.debug("Adding template with key %s.", key)
            cleaned[key] = content

        self._sources = MappingProxyType(cleaned)
        self._environment = jinja2.Environment(
            loader=jinja2.DictLoader(cleaned),
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
        )

        # Compile everything up front so a broken bundled template fails at
        # startup rather than halfway through an init.
        for key in cleaned:
            try:
                self._environment.get_template(key)
            except jinja2.TemplateSyntaxError as e:
                raise RuntimeError(f"Failed to load internal template '{key}': {e}") from e

    @staticmethod
    def from_sources(sources: Mapping[str, str]) -> "TemplateRegistry":
        """Build a registry from in-memory template text (used by tests)."""
        return TemplateRegistry(sources)

    @staticmethod
    def from_package() -> "TemplateRegistry":
        """Build the registry from the templates bundled with nico."""
        logger.debug("Loading templates...")
        root = files("nico") / "templates"
        return TemplateRegistry(dict(_walk_templates(root)))

    def keys(self) -> frozenset[str]:
        """Names of all registered templates."""
        return frozenset(self._sources)

    def render(self, key: str, data: Mapping[str, Any]) -> str:
        """Render the template registered under key with data.

        Raises:
            TemplateRenderingError: If the template is not registered or a
                variable it references is missing from data
        """
        if key not in self._sources:
            raise TemplateRenderingError(f"Template '{key}' is not registered")

        try:
            return self._environment.get_template(key).render(**data)
        except jinja2.TemplateError as e:
            raise TemplateRenderingError(f"Failed to render template '{key}': {e}") from e
