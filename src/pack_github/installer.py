"""Install a GitHub release asset into a pack.

Process:
1. Resolve the user's input to a slug
2. Look up the repository for its canonical name
3. Fetch releases and select one for the branch
4. Select the asset to install
5. Hash the asset and build its dependency record
6. Commit the record into the pack (see ``commit.commit_record``)

Errors from every step propagate unchanged so callers can tell them apart.
"""

import logging
from dataclasses import dataclass

from .assets import select_release_asset
from .client import GithubClient
from .commit import CommitResult
from .commit import commit_record
from .config import MetadataConfig
from .metadata import build_record
from .protocols import PackProtocol
from .releases import fetch_release
from .schema import Asset
from .schema import DependencyRecord
from .schema import Release
from .slug import is_valid_slug
from .slug import resolve_slug

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """What was installed and where it was recorded."""

    slug: str
    release: Release
    asset: Asset
    record: DependencyRecord
    commit: CommitResult


def install_from_github(
    identifier: str,
    pack: PackProtocol,
    client: GithubClient,
    config: MetadataConfig | None = None,
    branch: str = "",
) -> InstallResult:
    """
    Install the release asset ``identifier`` points at.

    Args:
        identifier: GitHub repository URL or ``owner/repo`` slug
        pack: Pack to record the dependency in
        client: GitHub client
        config: Metadata placement (defaults to ``mods/`` under the pack root)
        branch: Release target to prefer; empty prefers untargeted releases

    Returns:
        InstallResult describing the installed asset

    Raises:
        InvalidArgumentError: If identifier is empty
        NetworkError: If GitHub can't be reached or rejects the slug
        DecodeError: If GitHub's response is malformed
        NoReleasesError: If the repository has no releases
        NoMatchingReleaseError: If every release is a draft
        NoAssetsError: If the selected release has no files
        HashError: If the asset can't be downloaded
        CommitError: If persisting fails (subclass names the step)

    Example:
        >>> with GithubClient() as client:
        ...     result = install_from_github("https://github.com/foo/bar", Pack.load(Path("pack.toml")), client)
        >>> print(result.commit.path)
        mods/bar.pw.toml
    """
    config = config or MetadataConfig()

    slug = resolve_slug(identifier)
    if not is_valid_slug(slug):
        logger.warning(f"'{slug}' doesn't look like owner/repo, trying anyway")

    repo = client.get_repo(slug)
    logger.debug(f"Resolved {slug} to {repo.full_name}")

    release = fetch_release(client, repo.full_name, branch)

    asset = select_release_asset(release)
    logger.info(f"Installing {asset.name} from release {release.tag_name}")

    pending = build_record(client, repo, release, asset, config)
    result = commit_record(pack, pending.record, pending.path)

    logger.info(f"Successfully installed {repo.name} ({release.tag_name})")
    return InstallResult(slug=repo.full_name, release=release, asset=asset, record=pending.record, commit=result)
