"""Shared fixtures: a fake GitHub API and an empty pack on disk."""

import hashlib

import httpx
import pytest
from pack_github import ClientConfig
from pack_github import GithubClient
from pack_github import Pack

JAR_BYTES = b"PK\x03\x04 fake jar content"
JAR_SHA256 = hashlib.sha256(JAR_BYTES).hexdigest()

DOWNLOAD_BASE = "https://github.com/foo/bar/releases/download"


def _release_payload(tag: str, target: str = "", assets: list[str] | None = None, **extra) -> dict:
    """Release payload as GitHub returns it."""
    names = assets if assets is not None else [f"bar-{tag}.jar"]
    return {
        "tag_name": tag,
        "target_commitish": target,
        "assets": [{"name": name, "browser_download_url": f"{DOWNLOAD_BASE}/{tag}/{name}"} for name in names],
        **extra,
    }


class FakeGithub:
    """Serves repo, release and download requests from in-memory data."""

    def __init__(self, releases: list | None = None, repo: dict | None = None):
        self.repo = repo or {"full_name": "foo/bar", "name": "bar"}
        self.releases = releases if releases is not None else [_release_payload("v2")]
        self.downloads: dict[str, bytes] = {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        full_name = self.repo["full_name"]

        if request.url.host == "api.github.com":
            if path == f"/repos/{full_name}":
                return httpx.Response(200, json=self.repo)
            if path == f"/repos/{full_name}/releases":
                return httpx.Response(200, json=self.releases)
            return httpx.Response(404, json={"message": "Not Found"})

        url = str(request.url)
        if url in self.downloads:
            return httpx.Response(200, content=self.downloads[url])
        if url.startswith(DOWNLOAD_BASE):
            return httpx.Response(200, content=JAR_BYTES)
        return httpx.Response(404)


@pytest.fixture
def github():
    return FakeGithub()


@pytest.fixture
def client(github):
    with GithubClient(ClientConfig(), transport=httpx.MockTransport(github)) as client:
        yield client


@pytest.fixture
def pack_file(tmp_path):
    """Minimal pack.toml with an empty index."""
    path = tmp_path / "pack.toml"
    path.write_text(
        'name = "Test Pack"\n'
        'pack-format = "packwiz:1.1.0"\n'
        "\n"
        "[index]\n"
        'file = "index.toml"\n'
        'hash-format = "sha256"\n'
        'hash = ""\n'
        "\n"
        "[versions]\n"
        'minecraft = "1.20.1"\n'
    )
    (tmp_path / "index.toml").write_text('hash-format = "sha256"\n')
    return path


@pytest.fixture
def pack(pack_file):
    return Pack.load(pack_file)


@pytest.fixture
def release():
    """Factory for release payloads: ``release("v2", target="main")``."""
    return _release_payload


@pytest.fixture
def jar_sha256():
    return JAR_SHA256
