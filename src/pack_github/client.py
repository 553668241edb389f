"""Synchronous GitHub REST client.

Covers the three calls an install needs: repository lookup, release list,
and asset download. Every httpx failure is translated into NetworkError and
every malformed payload into DecodeError.
"""

import logging
from collections.abc import Iterator

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError

from .config import ClientConfig
from .exceptions import DecodeError
from .exceptions import NetworkError
from .schema import Release
from .schema import Repo

logger = logging.getLogger(__name__)

API_VERSION = "2022-11-28"

_releases_adapter = TypeAdapter(list[Release])


class GithubClient:
    """
    Thin GitHub API client over ``httpx.Client``.

    Use as a context manager so the connection pool is closed:

        >>> with GithubClient(ClientConfig.from_env()) as client:
        ...     releases = client.list_releases("foo/bar")
    """

    def __init__(self, config: ClientConfig | None = None, transport: httpx.BaseTransport | None = None):
        """Initialize client.

        Args:
            config: Client settings (API URL, token, timeout)
            transport: Optional httpx transport, used by tests to fake GitHub
        """
        self.config = config or ClientConfig()
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"

        self._http = httpx.Client(
            base_url=self.config.api_url,
            headers=headers,
            timeout=self.config.timeout,
            follow_redirects=True,
            transport=transport,
        )

    def __enter__(self) -> "GithubClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _get_json(self, path: str, slug: str):
        try:
            response = self._http.get(path)
        except httpx.HTTPError as e:
            raise NetworkError(f"Failed to reach GitHub: {e}", context={"slug": slug}) from e

        if response.status_code == 404:
            raise NetworkError(
                f"Repository '{slug}' not found on GitHub",
                context={"slug": slug, "status": 404},
            )
        if response.is_error:
            raise NetworkError(
                f"GitHub returned HTTP {response.status_code} for {path}",
                context={"slug": slug, "status": response.status_code},
            )

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"GitHub returned invalid JSON for {path}: {e}", context={"slug": slug}) from e

    def get_repo(self, slug: str) -> Repo:
        """Look up repository metadata.

        Raises:
            NetworkError: On transport failure or error status
            DecodeError: If the payload isn't a repository object
        """
        data = self._get_json(f"repos/{slug}", slug)
        try:
            return Repo.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"Unexpected repository payload for '{slug}': {e}", context={"slug": slug}) from e

    def list_releases(self, slug: str) -> list[Release]:
        """List releases in the order GitHub returns them (newest first).

        Raises:
            NetworkError: On transport failure or error status
            DecodeError: If the payload isn't a list of releases
        """
        data = self._get_json(f"repos/{slug}/releases", slug)
        try:
            releases = _releases_adapter.validate_python(data)
        except ValidationError as e:
            raise DecodeError(f"Unexpected releases payload for '{slug}': {e}", context={"slug": slug}) from e

        logger.debug(f"Fetched {len(releases)} releases for {slug}")
        return releases

    def iter_download(self, url: str) -> Iterator[bytes]:
        """Stream the bytes at ``url``.

        The API token is only sent when ``url`` is on the API host.

        Raises:
            httpx.HTTPError: On transport failure or error status; callers decide how to classify it
        """
        request = self._http.build_request("GET", url)
        if request.url.host != self._http.base_url.host:
            request.headers.pop("Authorization", None)

        response = self._http.send(request, stream=True)
        try:
            response.raise_for_status()
            yield from response.iter_bytes()
        finally:
            response.close()
