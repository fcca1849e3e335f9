"""Typed inputs to project initialization.

The CLI turns its flags into an InitArgs record; everything below the CLI
works with these types only.
"""

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_DESCRIPTION = "Automatically generated config flake."
DEFAULT_SYSTEM = "x86_64-linux"
DEFAULT_NIX = "unstable"
DEFAULT_SOPS_URL = "github:Mic92/sops-nix"
DEFAULT_COMIN_URL = "github:nlewo/comin"


@dataclass(frozen=True)
class CreateLocal:
    """Initialize a brand-new local repository in the target directory."""


@dataclass(frozen=True)
class CloneRemote:
    """Clone url into the target directory and track it as 'origin'."""

    url: str


@dataclass(frozen=True)
class AdoptExisting:
    """Use the repository already present in the target directory."""


InitMode = CreateLocal | CloneRemote | AdoptExisting


@dataclass(frozen=True)
class InitArgs:
    """Everything `nico init` needs to know.

    Attributes:
        path: Directory to initialize; None means the current directory
        description: Flake description
        system: System architecture to build for
        nix: NixOS channel tag (rendered as nixpkgs/nixos-{nix})
        sops_url: Flake URL of sops-nix
        comin_url: Flake URL of comin
        mode: Which repository strategy to use
    """

    path: Path | None = None
    description: str = DEFAULT_DESCRIPTION
    system: str = DEFAULT_SYSTEM
    nix: str = DEFAULT_NIX
    sops_url: str = DEFAULT_SOPS_URL
    comin_url: str = DEFAULT_COMIN_URL
    mode: InitMode = field(default_factory=AdoptExisting)
