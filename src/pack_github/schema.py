"""Data models for GitHub API payloads and dependency records.

API models ignore fields we don't use; GitHub adds fields to its payloads
regularly and that must not break decoding.
"""

import tomllib
from pathlib import Path
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError

from .exceptions import MetadataError

UNIVERSAL_SIDE = "both"

Side = Literal["both", "client", "server"]


class Repo(BaseModel):
    """Repository as returned by ``GET /repos/{slug}``."""

    model_config = ConfigDict(frozen=True)

    full_name: str = Field(min_length=1)
    name: str = Field(min_length=1)


class Asset(BaseModel):
    """One file attached to a release."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    browser_download_url: str = Field(min_length=1)


class Release(BaseModel):
    """One published release, as listed by ``GET /repos/{slug}/releases``."""

    model_config = ConfigDict(frozen=True)

    tag_name: str
    target_commitish: str = ""
    assets: list[Asset] = Field(default_factory=list)
    draft: bool = False


class GithubUpdate(BaseModel):
    """Update-tracking data for a record installed from GitHub.

    Stored under ``[update.github]`` so a later update check knows where the
    file came from and which release was pinned.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["github"] = "github"
    slug: str
    tag: str
    branch: str = ""

    def to_table(self) -> dict[str, str]:
        return {"slug": self.slug, "tag": self.tag, "branch": self.branch}


# Source kinds a record can be tracked by, keyed by their table name
UPDATE_SOURCES: dict[str, type[GithubUpdate]] = {"github": GithubUpdate}


class ModDownload(BaseModel):
    """Where to fetch the file and how to verify it."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(min_length=1)
    hash_format: str = "sha256"
    hash: str = Field(min_length=1)


class DependencyRecord(BaseModel):
    """Persisted description of one installed dependency."""

    model_config = ConfigDict(frozen=True)

    name: str
    filename: str
    side: Side = UNIVERSAL_SIDE
    download: ModDownload
    update: GithubUpdate

    def to_toml_dict(self) -> dict:
        """Convert to the ``.pw.toml`` table layout."""
        return {
            "name": self.name,
            "filename": self.filename,
            "side": self.side,
            "download": {
                "url": self.download.url,
                "hash-format": self.download.hash_format,
                "hash": self.download.hash,
            },
            "update": {self.update.kind: self.update.to_table()},
        }

    @classmethod
    def from_toml_dict(cls, data: dict) -> "DependencyRecord":
        """Create from a parsed ``.pw.toml`` document.

        Raises:
            MetadataError: If required tables are missing or no known update source is present
        """
        download = data.get("download")
        if not isinstance(download, dict):
            raise MetadataError("[download] table missing from metadata")

        update_tables = data.get("update", {})
        if not isinstance(update_tables, dict):
            raise MetadataError("[update] in metadata is not a table")

        update = None
        for kind, source_cls in UPDATE_SOURCES.items():
            if kind in update_tables:
                table = update_tables[kind]
                if not isinstance(table, dict):
                    raise MetadataError(f"[update.{kind}] in metadata is not a table")
                try:
                    update = source_cls(kind=kind, **table)
                except ValidationError as e:
                    raise MetadataError(f"Invalid [update.{kind}] table: {e}") from e
                break
        if update is None:
            raise MetadataError(
                f"No supported update source in metadata (found: {', '.join(update_tables) or 'none'})"
            )

        try:
            return cls(
                name=data["name"],
                filename=data["filename"],
                side=data.get("side", UNIVERSAL_SIDE),
                download=ModDownload(
                    url=download.get("url", ""),
                    hash_format=download.get("hash-format", "sha256"),
                    hash=download.get("hash", ""),
                ),
                update=update,
            )
        except KeyError as e:
            raise MetadataError(f"Required field {e} missing from metadata") from e
        except ValidationError as e:
            raise MetadataError(f"Invalid metadata: {e}") from e


def load_record(path: Path) -> DependencyRecord:
    """Load a dependency record from a ``.pw.toml`` file.

    Raises:
        MetadataError: If the file doesn't exist or isn't a valid record
    """
    if not path.exists():
        raise MetadataError(f"Metadata file not found: {path}", context={"path": str(path)})

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise MetadataError(f"Invalid TOML in {path}: {e}", context={"path": str(path)}) from e
    except OSError as e:
        raise MetadataError(f"Failed to read {path}: {e}", context={"path": str(path)}) from e

    return DependencyRecord.from_toml_dict(data)
