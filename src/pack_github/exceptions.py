"""Install pipeline exceptions.

Every failure the pipeline can produce has its own class so callers (and
tests) can tell them apart, even when the CLI prints them the same way.
"""


class PackGithubError(Exception):
    """Base exception for GitHub install operations."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (slug, paths, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class InvalidArgumentError(PackGithubError):
    """Missing or unusable user input."""


class NetworkError(PackGithubError):
    """Transport failure or error status from GitHub."""


class DecodeError(PackGithubError):
    """GitHub returned a body that is not the expected shape."""


class NoReleasesError(PackGithubError):
    """Repository has no releases at all."""


class NoMatchingReleaseError(PackGithubError):
    """Release exists but offers nothing installable."""


class NoAssetsError(PackGithubError):
    """Release has no files attached."""


class HashError(PackGithubError):
    """Asset could not be downloaded or hashed."""


class MetadataError(PackGithubError):
    """Metadata file is missing or invalid."""


class PackLoadError(PackGithubError):
    """Pack manifest is missing or invalid."""


class CommitError(PackGithubError):
    """A persistence step failed.

    Steps that finished before the failure are not rolled back; they are
    listed in ``completed_steps``.
    """

    step = ""

    def __init__(self, message: str, completed_steps: list[str] | None = None, context: dict | None = None):
        super().__init__(message, context)
        self.completed_steps = list(completed_steps or [])

    @property
    def partially_committed(self) -> bool:
        """True when something already reached disk before the failure."""
        return "write_record" in self.completed_steps


class IndexLoadError(CommitError):
    step = "load_index"


class RecordWriteError(CommitError):
    step = "write_record"


class IndexUpdateError(CommitError):
    step = "update_index"


class IndexWriteError(CommitError):
    step = "write_index"


class PackHashError(CommitError):
    step = "update_pack_hash"


class PackWriteError(CommitError):
    step = "write_pack"
