"""Render pipeline: project configuration -> flake.nix text."""

from typing import Any

from nico.core.configuration import Configuration
from nico.core.templates import TemplateRegistry

FLAKE_TEMPLATE = "flake/root.nix"
FLAKE_FILENAME = "flake.nix"


def build_flake_data(config: Configuration) -> dict[str, Any]:
    """Map a configuration onto the data shape the flake template expects.

    Extra flakes and dev packages are always rendered empty; managing them
    is the job of future resource commands, not of init.
    """
    return {
        "init": {
            "description": config.init.description,
            "nix": config.init.nix,
            "sops_url": config.init.sops_url,
            "comin_url": config.init.comin_url,
            "system": config.init.system,
        },
        "resources": {
            "extra_flakes": "",
            "dev_packages": "",
        },
    }


def render_flake(config: Configuration, registry: TemplateRegistry) -> str:
    """Render the root flake.nix for a project.

    Raises:
        TemplateRenderingError: If the flake template is missing or fails
    """
    return registry.render(FLAKE_TEMPLATE, build_flake_data(config))
