"""Build dependency records for a selected release asset."""

import logging
from dataclasses import dataclass
from pathlib import Path

from .client import GithubClient
from .config import MetadataConfig
from .hashing import HASH_FORMAT
from .hashing import hash_asset
from .schema import UNIVERSAL_SIDE
from .schema import Asset
from .schema import DependencyRecord
from .schema import GithubUpdate
from .schema import ModDownload
from .schema import Release
from .schema import Repo

logger = logging.getLogger(__name__)

META_EXTENSION = ".pw.toml"


@dataclass
class PendingRecord:
    """A built record and the pack-relative path it will be written to."""

    record: DependencyRecord
    path: Path


def metadata_path(repo_name: str, config: MetadataConfig) -> Path:
    """Path of the metadata file for ``repo_name``.

    Relative paths are relative to the pack root.

    Example:
        >>> metadata_path("bar", MetadataConfig())
        PosixPath('mods/bar.pw.toml')
    """
    base = config.meta_folder_base or Path()
    return base / config.meta_folder / f"{repo_name}{META_EXTENSION}"


def make_record(repo: Repo, release: Release, asset: Asset, content_hash: str) -> DependencyRecord:
    """Assemble a record from already-resolved parts (no I/O)."""
    return DependencyRecord(
        name=repo.name,
        filename=asset.name,
        side=UNIVERSAL_SIDE,
        download=ModDownload(
            url=asset.browser_download_url,
            hash_format=HASH_FORMAT,
            hash=content_hash,
        ),
        update=GithubUpdate(
            slug=repo.full_name,
            tag=release.tag_name,
            branch=release.target_commitish,
        ),
    )


def build_record(
    client: GithubClient,
    repo: Repo,
    release: Release,
    asset: Asset,
    config: MetadataConfig,
) -> PendingRecord:
    """Hash ``asset`` and build its record.

    The asset download is the only I/O.

    Raises:
        HashError: If the asset can't be downloaded or hashed
    """
    content_hash = hash_asset(client, asset)
    logger.debug(f"{asset.name} {HASH_FORMAT}={content_hash}")

    record = make_record(repo, release, asset, content_hash)
    return PendingRecord(record=record, path=metadata_path(repo.name, config))
