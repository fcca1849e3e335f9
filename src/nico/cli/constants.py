"""Constants shared by CLI commands."""

import logging

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

# Repeated -v flags: none -> warnings only, -v -> info, -vv -> debug
VERBOSITY_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]

LOG_FORMAT = "[%(levelname)s %(name)s:%(lineno)d] %(message)s"

DEBUG_ENV_VAR = "NICO_DEBUG"

GIT_INSTALL_HINT = "Install git from https://git-scm.com/downloads and try again."
