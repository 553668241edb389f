"""Release selection.

Decision table for ``select_release``:

    releases empty                      -> NoReleasesError
    some target_commitish == branch     -> first such release
    otherwise                           -> first release (latest)

Release order is GitHub's own (newest first); it is not re-sorted here.
"""

import logging

from .client import GithubClient
from .exceptions import NoMatchingReleaseError
from .exceptions import NoReleasesError
from .schema import Release

logger = logging.getLogger(__name__)


def select_release(releases: list[Release], branch: str = "", slug: str = "") -> Release:
    """Pick the release to install.

    An empty ``branch`` only matches releases whose target is empty too;
    anything else falls back to the first release.

    Args:
        releases: Releases in API order
        branch: Target branch or commit to match exactly
        slug: Repository slug, for messages only

    Returns:
        Selected release

    Raises:
        NoReleasesError: If there are no releases at all
    """
    if not releases:
        raise NoReleasesError(f"Repository '{slug}' has no releases", context={"slug": slug})

    for release in releases:
        if release.target_commitish == branch:
            return release

    latest = releases[0]
    logger.info(f"No release targets '{branch}', using latest release {latest.tag_name}")
    return latest


def fetch_release(client: GithubClient, slug: str, branch: str = "") -> Release:
    """Fetch the release list for ``slug`` and select one.

    Draft releases are skipped before selection; their assets can't be
    downloaded, and GitHub lists them first for an authenticated owner.

    Raises:
        NetworkError: On transport failure
        DecodeError: If the response isn't a list of releases
        NoReleasesError: If the repository has no releases
        NoMatchingReleaseError: If every release is a draft
    """
    releases = client.list_releases(slug)
    published = [release for release in releases if not release.draft]
    if releases and not published:
        raise NoMatchingReleaseError(
            f"Repository '{slug}' only has draft releases, which can't be downloaded",
            context={"slug": slug},
        )
    return select_release(published, branch, slug=slug)
