"""Exception hierarchy for nico.

Every failure the core reports to the user derives from NicoError. The CLI
entry point catches NicoError (and OSError) once, prints a single styled
line, and exits non-zero. Nothing below the CLI recovers from these.
"""

from pathlib import Path


class NicoError(Exception):
    """Base class for all reportable nico failures."""


class ValidationError(NicoError):
    """Argument or input failed validation (bad path shape, conflicting flags)."""


class InvalidUrlError(ValidationError):
    """A remote URL does not follow the `.git` suffix convention."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Invalid remote URL '{url}': {reason}")
        self.url = url
        self.reason = reason


class ConfigNotFoundError(NicoError):
    """No nico.config.json in the start directory or any of its parents."""

    def __init__(self, start: Path) -> None:
        super().__init__(f"Unable to find nico config in {start} or any parent folders.")
        self.start = start


class RepositoryStateError(NicoError):
    """Repository metadata is present (or absent) contrary to the selected mode."""


class ConfigDirectoryMismatchError(NicoError):
    """The recorded project root disagrees with where the config actually lives."""

    def __init__(self, recorded_root: Path, found_in: Path) -> None:
        super().__init__(
            f"Project root is recorded as {recorded_root} but its configuration was "
            f"found in {found_in}. The configuration must be manually corrected."
        )
        self.recorded_root = recorded_root
        self.found_in = found_in


class ConfigParseError(NicoError):
    """A persisted configuration file exists but could not be deserialized."""

    def __init__(self, path: Path, details: str) -> None:
        super().__init__(f"Malformed configuration at {path}: {details}")
        self.path = path


class TemplateRenderingError(NicoError):
    """A template is missing or failed during substitution."""


class GitError(NicoError):
    """Repository creation, clone, staging or commit failed."""


class MissingDependencyError(NicoError):
    """A required host binary is not installed."""

    def __init__(self, tool: str, hint: str) -> None:
        super().__init__(f"Required dependency '{tool}' is not installed. {hint}")
        self.tool = tool
