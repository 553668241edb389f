"""Check installed records for newer releases.

Reads the ``[update.github]`` block a record was installed with and runs
the same release selection again.
"""

import logging
from dataclasses import dataclass

from .client import GithubClient
from .releases import fetch_release
from .schema import DependencyRecord

logger = logging.getLogger(__name__)


@dataclass
class UpdateCheck:
    """Result of checking one record."""

    name: str
    slug: str
    current_tag: str
    latest_tag: str

    @property
    def has_update(self) -> bool:
        return self.current_tag != self.latest_tag


def check_for_update(client: GithubClient, record: DependencyRecord) -> UpdateCheck:
    """Compare the record's pinned tag with what an install would pick now.

    Raises:
        NetworkError: If GitHub can't be reached
        DecodeError: If GitHub's response is malformed
        NoReleasesError: If the repository no longer has releases
    """
    source = record.update
    release = fetch_release(client, source.slug, source.branch)
    logger.debug(f"{record.name}: pinned {source.tag}, latest {release.tag_name}")
    return UpdateCheck(
        name=record.name,
        slug=source.slug,
        current_tag=source.tag,
        latest_tag=release.tag_name,
    )
