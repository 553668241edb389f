"""pack-github - Add GitHub release assets to a pack as pinned, hash-verified metadata.

Public API: resolve an identifier, pick a release and asset, build the
dependency record, and commit it into the pack.
"""

from .assets import select_asset
from .client import GithubClient
from .commit import CommitResult
from .commit import commit_record
from .config import ClientConfig
from .config import MetadataConfig
from .exceptions import CommitError
from .exceptions import DecodeError
from .exceptions import HashError
from .exceptions import IndexLoadError
from .exceptions import IndexUpdateError
from .exceptions import IndexWriteError
from .exceptions import InvalidArgumentError
from .exceptions import MetadataError
from .exceptions import NetworkError
from .exceptions import NoAssetsError
from .exceptions import NoMatchingReleaseError
from .exceptions import NoReleasesError
from .exceptions import PackGithubError
from .exceptions import PackHashError
from .exceptions import PackLoadError
from .exceptions import PackWriteError
from .exceptions import RecordWriteError
from .installer import InstallResult
from .installer import install_from_github
from .metadata import build_record
from .metadata import make_record
from .metadata import metadata_path
from .pack import Index
from .pack import Pack
from .releases import fetch_release
from .releases import select_release
from .schema import Asset
from .schema import DependencyRecord
from .schema import GithubUpdate
from .schema import Release
from .schema import Repo
from .schema import load_record
from .slug import resolve_slug
from .updater import UpdateCheck
from .updater import check_for_update

__all__ = [
    # Resolution
    "resolve_slug",
    "fetch_release",
    "select_release",
    "select_asset",
    # Records
    "build_record",
    "make_record",
    "metadata_path",
    "load_record",
    "DependencyRecord",
    "GithubUpdate",
    # API models
    "Asset",
    "Release",
    "Repo",
    # Client and config
    "GithubClient",
    "ClientConfig",
    "MetadataConfig",
    # Persistence
    "Pack",
    "Index",
    "commit_record",
    "CommitResult",
    # Install / update
    "install_from_github",
    "InstallResult",
    "check_for_update",
    "UpdateCheck",
    # Exceptions
    "PackGithubError",
    "InvalidArgumentError",
    "NetworkError",
    "DecodeError",
    "NoReleasesError",
    "NoMatchingReleaseError",
    "NoAssetsError",
    "HashError",
    "MetadataError",
    "PackLoadError",
    "CommitError",
    "IndexLoadError",
    "RecordWriteError",
    "IndexUpdateError",
    "IndexWriteError",
    "PackHashError",
    "PackWriteError",
]

__version__ = "0.1.0"
