"""Project configuration stored in ``nico.config.json``.

The configuration is created once by ``nico init`` and is the authoritative
record of the project's init parameters and resources (extra flakes,
developer packages, remotes). Other commands find it by walking up from the
current directory.

Saving is a plain overwrite. There is no temp-file-and-rename step, so a
crash mid-write can leave a truncated file behind.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

import pydantic
from pydantic import BaseModel, ConfigDict, Field, model_validator

from nico.core.errors import ConfigNotFoundError, ConfigParseError, ValidationError
from nico.core.init_types import InitArgs
from nico.core.remote import RemoteDescriptor

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "nico.config.json"


class ExtraFlake(BaseModel):
    """An additional flake input declared by the project."""

    model_config = ConfigDict(strict=True)

    ident: str
    url: str
    follows: str


class InitConfig(BaseModel):
    """Parameters given to `nico init`. Never changed after creation."""

    model_config = ConfigDict(strict=True, frozen=True)

    description: str
    nix: str
    system: str
    sops_url: str
    comin_url: str


class Resources(BaseModel):
    """Mutable project resources."""

    model_config = ConfigDict(strict=True)

    extra_flakes: list[ExtraFlake] = Field(default_factory=list)
    dev_packages: list[str] = Field(default_factory=list)
    remotes: dict[str, RemoteDescriptor] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _remote_keys_match_names(self) -> "Resources":
        for key, remote in self.remotes.items():
            if key != remote.name:
                raise ValueError(f"remote stored under '{key}' is named '{remote.name}'")
        return self


class Configuration(BaseModel):
    """The full contents of nico.config.json."""

    model_config = ConfigDict(strict=True)

    init: InitConfig
    resources: Resources = Field(default_factory=Resources)

    @staticmethod
    def from_init(args: InitArgs, remotes: Iterable[RemoteDescriptor]) -> "Configuration":
        """Build a configuration in memory without persisting it.

        Remotes are keyed by name; a later remote with the same name replaces
        an earlier one.
        """
        remote_map: dict[str, RemoteDescriptor] = {}
        for remote in remotes:
            remote_map[remote.name] = remote

        return Configuration(
            init=InitConfig(
                description=args.description,
                nix=args.nix,
                system=args.system,
                sops_url=args.sops_url,
                comin_url=args.comin_url,
            ),
            resources=Resources(remotes=remote_map),
        )


def create_configuration(
    root: Path, args: InitArgs, remotes: Iterable[RemoteDescriptor]
) -> Configuration:
    """Build a configuration for a freshly initialized project and save it to root."""
    config = Configuration.from_init(args, remotes)
    save_configuration(config, root)
    return config


def serialize_configuration(config: Configuration) -> str:
    """Render a configuration as pretty-printed JSON with a trailing newline."""
    return json.dumps(config.model_dump(mode="json"), indent=2, ensure_ascii=False) + "\n"


def save_configuration(config: Configuration, directory: Path) -> Path:
    """Write config to directory/nico.config.json, replacing any existing file.

    Returns:
        Path of the written file
    """
    config_path = directory / CONFIG_FILENAME
    logger.debug("Writing configuration to %s", config_path)
    config_path.write_text(serialize_configuration(config), encoding="utf-8")
    return config_path


def find_config_dir(start: Path) -> Path | None:
    """Walk up from start to the first directory containing nico.config.json."""
    current = start.resolve()
    for directory in [current, *current.parents]:
        if (directory / CONFIG_FILENAME).exists():
            return directory
    return None


def load_configuration(start: Path | None = None) -> Configuration:
    """Load the configuration of the project containing start (default: cwd).

    Raises:
        ConfigNotFoundError: If no directory from start up to the filesystem
            root contains nico.config.json
        ConfigParseError: If the file found is malformed
    """
    origin = start if start is not None else Path.cwd()
    config_dir = find_config_dir(origin)
    if config_dir is None:
        raise ConfigNotFoundError(origin)
    return load_configuration_path(config_dir)


def load_configuration_path(path: Path) -> Configuration:
    """Load a configuration from a project directory or the config file itself.

    Raises:
        ValidationError: If path is neither a directory containing
            nico.config.json nor a file named nico.config.json
        ConfigParseError: If the file is not UTF-8 or not a valid configuration
    """
    if path.is_dir() and (path / CONFIG_FILENAME).exists():
        config_path = path / CONFIG_FILENAME
    elif path.is_file() and path.name == CONFIG_FILENAME:
        config_path = path
    else:
        raise ValidationError(
            f"The supplied configuration path {path} must be either a directory containing "
            f"`{CONFIG_FILENAME}` or an existing `{CONFIG_FILENAME}` file."
        )

    config_path = config_path.resolve()
    logger.debug("Loading configuration from %s", config_path)
    try:
        return Configuration.model_validate_json(config_path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, pydantic.ValidationError) as e:
        raise ConfigParseError(config_path, str(e)) from e
