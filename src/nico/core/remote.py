"""Remote descriptors: one version-control endpoint plus its CI polling policy.

The policy fields (branches, polling period, timeout) are not used during
initialization. They are persisted with the project configuration and
consumed when generating the GitOps (comin) configuration for a host.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from nico.core.errors import InvalidUrlError, TemplateRenderingError
from nico.core.templates import TemplateRegistry

DEFAULT_MAIN_BRANCH = "main"
DEFAULT_TESTING_BRANCH_PREFIX = "testing-"
DEFAULT_POLLING_PERIOD = 60
DEFAULT_TIMEOUT = 300

REPOSITORY_SUFFIX = ".git"
POLICY_TEMPLATE = "comin/remote.nix"


class TransportKind(Enum):
    """How a remote URL is reached."""

    LOCAL = "local"
    HTTP = "http"
    SSH = "ssh"
    GIT = "git"


def classify_transport(name: str, url: str) -> TransportKind:
    """Assign a transport kind to a remote URL.

    First match wins: http(s) prefix, then ssh/rsync prefix or an '@' in the
    remote name, then the git protocol, and anything else is a local path.
    """
    if url.startswith("https://") or url.startswith("http://"):
        return TransportKind.HTTP
    if url.startswith("ssh://") or url.startswith("rsync://") or "@" in name:
        return TransportKind.SSH
    if url.startswith("git://"):
        return TransportKind.GIT
    return TransportKind.LOCAL


class RemoteDescriptor(BaseModel):
    """A named remote and the policy a downstream poller applies to it.

    Attributes:
        name: Remote name, unique within a project's remote mapping
        url: Fetch URL as configured in git
        main_branch: Branch deployed from this remote
        testing_branch_prefix: Prefix of branches deployed for testing
        polling_period: Seconds between polls of the remote
        timeout: Seconds before a fetch from the remote is abandoned
    """

    model_config = ConfigDict(strict=True, frozen=True)

    name: str
    url: str
    main_branch: str = DEFAULT_MAIN_BRANCH
    testing_branch_prefix: str = DEFAULT_TESTING_BRANCH_PREFIX
    polling_period: int = Field(default=DEFAULT_POLLING_PERIOD, ge=0)
    timeout: int = Field(default=DEFAULT_TIMEOUT, ge=0)

    @property
    def transport(self) -> TransportKind:
        """Transport kind of this remote's URL."""
        return classify_transport(self.name, self.url)

    def render_policy(self, registry: TemplateRegistry) -> str:
        """Render this remote as a comin remote block.

        The policy template ships with nico and only references fields that
        always exist, so a failure here is a bug rather than a user error.
        """
        data = {
            "name": self.name,
            "url": self.url,
            "main_branch": self.main_branch,
            "testing_branch_prefix": self.testing_branch_prefix,
            "polling_period": self.polling_period,
            "timeout": self.timeout,
        }
        try:
            return registry.render(POLICY_TEMPLATE, data)
        except TemplateRenderingError as e:
            raise RuntimeError(f"Bundled template '{POLICY_TEMPLATE}' failed to render: {e}") from e


def classify(name: str, url: str) -> RemoteDescriptor:
    """Validate a remote URL and build its descriptor with default policy.

    A single trailing '/' is ignored when checking the suffix; the URL is
    stored as given.

    Raises:
        InvalidUrlError: If the URL does not end with '.git'

    Example:
        >>> classify("origin", "https://host/repo.git").transport
        <TransportKind.HTTP: 'http'>
    """
    trimmed = url[:-1] if url.endswith("/") else url
    if not trimmed.endswith(REPOSITORY_SUFFIX):
        raise InvalidUrlError(url, "Git URLs should end with .git")
    return RemoteDescriptor(name=name, url=url)
