"""The `nico init` sequence.

bootstrap repository -> write nico.config.json -> render flake.nix -> commit.

Each step raises on failure and nothing is rolled back. If rendering or the
commit fails, nico.config.json stays on disk; running init again against the
same directory then stops at the bootstrap checks instead of overwriting it.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from nico.core.bootstrap import bootstrap_repository
from nico.core.configuration import Configuration, create_configuration
from nico.core.context import NicoContext
from nico.core.init_types import InitArgs
from nico.core.render import FLAKE_FILENAME, render_flake

logger = logging.getLogger(__name__)

INIT_COMMIT_MESSAGE = "Nico initialization"


@dataclass(frozen=True)
class InitResult:
    """What a successful init produced."""

    root: Path
    config: Configuration
    flake_path: Path


def run_init(ctx: NicoContext, args: InitArgs) -> InitResult:
    """Initialize a nico project according to args.

    Raises:
        NicoError: Any bootstrap, configuration, rendering or git failure
        OSError: If a file cannot be written
    """
    bootstrap = bootstrap_repository(ctx.git, args, ctx.cwd)
    root = bootstrap.root

    config = create_configuration(root, args, bootstrap.remotes)
    logger.debug("Config data: %r", config)

    logger.debug("Writing %s.", FLAKE_FILENAME)
    rendered = render_flake(config, ctx.templates)
    flake_path = root / FLAKE_FILENAME
    flake_path.write_text(rendered, encoding="utf-8")

    bootstrap.repo.add_files(["."])
    bootstrap.repo.commit(INIT_COMMIT_MESSAGE)

    return InitResult(root=root, config=config, flake_path=flake_path)
