"""Content hashing of release assets."""

import hashlib
import logging

import httpx

from .client import GithubClient
from .exceptions import HashError
from .schema import Asset

logger = logging.getLogger(__name__)

HASH_FORMAT = "sha256"


def hash_asset(client: GithubClient, asset: Asset, hash_format: str = HASH_FORMAT) -> str:
    """Download ``asset`` and return its hex digest.

    The body is streamed into the hash; it is never written to disk.

    Raises:
        HashError: If the download fails or the hash format is unknown
    """
    try:
        digest = hashlib.new(hash_format)
    except ValueError as e:
        raise HashError(f"Unsupported hash format: {hash_format}") from e

    logger.debug(f"Hashing {asset.name} from {asset.browser_download_url}")
    try:
        for chunk in client.iter_download(asset.browser_download_url):
            digest.update(chunk)
    except httpx.HTTPError as e:
        raise HashError(
            f"Failed to download {asset.name}: {e}",
            context={"url": asset.browser_download_url},
        ) from e

    return digest.hexdigest()
