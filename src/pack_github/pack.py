"""File-backed pack manifest, index, and metadata files.
Layout (TOML):

    pack.toml
        name = "My Pack"
        pack-format = "packwiz:1.1.0"
        [index]
        file = "index.toml"
        hash-format = "sha256"
        hash = "..."

    index.toml
        hash-format = "sha256"
        [[files]]
        file = "mods/bar.pw.toml"
        hash = "..."
        metafile = true

Fields this module doesn't know about are kept as loaded and written back.
"""

import hashlib
import logging
import os
import tomllib
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

import tomli_w

from .exceptions import PackLoadError
from .schema import DependencyRecord

logger = logging.getLogger(__name__)

DEFAULT_HASH_FORMAT = "sha256"
DEFAULT_INDEX_FILE = "index.toml"


def hash_bytes(data: bytes, hash_format: str = DEFAULT_HASH_FORMAT) -> str:
    return hashlib.new(hash_format, data).hexdigest()


def _relative_key(path: Path, root: Path) -> str:
    """Index key for ``path``: relative to the pack root, forward slashes."""
    if path.is_absolute():
        path = Path(os.path.relpath(path, root))
    return path.as_posix()


_ENTRY_KEYS = {"file", "hash", "hash-format", "metafile"}
_INDEX_KEYS = {"hash-format", "files"}


@dataclass
class IndexEntry:
    """One file tracked by the index.

    Keys this module doesn't use (``preserve``, ``alias``...) are kept in
    ``extra`` and written back unchanged.
    """

    file: str
    hash: str
    hash_format: str | None = None
    metafile: bool = False
    extra: dict = field(default_factory=dict)

    def to_dict(self, index_hash_format: str) -> dict:
        data: dict = {"file": self.file, "hash": self.hash}
        if self.hash_format and self.hash_format != index_hash_format:
            data["hash-format"] = self.hash_format
        if self.metafile:
            data["metafile"] = True
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "IndexEntry":
        return cls(
            file=data["file"],
            hash=data.get("hash", ""),
            hash_format=data.get("hash-format"),
            metafile=data.get("metafile", False),
            extra={key: value for key, value in data.items() if key not in _ENTRY_KEYS},
        )


class Index:
    """
    Pack index (with injected file path and pack root).

    Keys are pack-relative paths; re-adding a path replaces its entry so the
    index never holds duplicates.
    """

    def __init__(self, index_path: Path, pack_root: Path, hash_format: str = DEFAULT_HASH_FORMAT):
        self.index_path = index_path
        self.pack_root = pack_root
        self.hash_format = hash_format
        self._entries: dict[str, IndexEntry] = {}
        self._extra: dict = {}

    @classmethod
    def load(cls, index_path: Path, pack_root: Path) -> "Index":
        """Load an index file; a missing file yields an empty index.

        Raises:
            OSError: If the file can't be read
            tomllib.TOMLDecodeError: If the file isn't valid TOML
        """
        index = cls(index_path, pack_root)
        if not index_path.exists():
            logger.debug(f"No index at {index_path}, starting empty")
            return index

        with open(index_path, "rb") as f:
            data = tomllib.load(f)

        index.hash_format = data.get("hash-format", DEFAULT_HASH_FORMAT)
        index._extra = {key: value for key, value in data.items() if key not in _INDEX_KEYS}
        for raw in data.get("files", []):
            entry = IndexEntry.from_dict(raw)
            index._entries[entry.file] = entry

        logger.debug(f"Loaded {len(index._entries)} index entries from {index_path}")
        return index

    def refresh_file_with_hash(self, path: Path, hash_format: str, hash: str, mark_as_meta: bool) -> None:
        """Replace the entry for ``path``, even if its hash is unchanged.

        Unknown keys of a replaced entry carry over to the new one.
        """
        key = _relative_key(path, self.pack_root)
        previous = self._entries.get(key)
        self._entries[key] = IndexEntry(
            file=key,
            hash=hash,
            hash_format=hash_format,
            metafile=mark_as_meta,
            extra=dict(previous.extra) if previous else {},
        )
        logger.debug(f"Index entry {key} -> {hash_format}:{hash}")

    def get_entry(self, path: Path | str) -> IndexEntry | None:
        return self._entries.get(_relative_key(Path(path), self.pack_root))

    def list_entries(self) -> list[IndexEntry]:
        return list(self._entries.values())

    def write(self) -> None:
        """Write the index, entries sorted by path.

        Raises:
            OSError: If the file can't be written
        """
        data = {
            **self._extra,
            "hash-format": self.hash_format,
            "files": [self._entries[key].to_dict(self.hash_format) for key in sorted(self._entries)],
        }
        self.index_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.index_path, "wb") as f:
            tomli_w.dump(data, f)
        logger.debug(f"Saved index with {len(self._entries)} entries")


class Pack:
    """
    Pack manifest manager (with injected manifest path).

    Example:
        >>> pack = Pack.load(Path("pack.toml"))
        >>> index = pack.load_index()
    """

    def __init__(self, pack_path: Path, data: dict):
        self.pack_path = pack_path
        self.root = pack_path.parent
        self._data = data

    @classmethod
    def load(cls, pack_path: Path) -> "Pack":
        """Load the pack manifest.

        Raises:
            PackLoadError: If the manifest is missing or invalid
        """
        if not pack_path.exists():
            raise PackLoadError(
                f"Pack file not found: {pack_path}. Run this inside a pack directory.",
                context={"pack_path": str(pack_path)},
            )
        try:
            with open(pack_path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise PackLoadError(f"Failed to read pack file {pack_path}: {e}", context={"pack_path": str(pack_path)}) from e

        return cls(pack_path, data)

    @property
    def name(self) -> str:
        return self._data.get("name", "")

    @property
    def index_table(self) -> dict:
        return self._data.setdefault("index", {})

    @property
    def index_path(self) -> Path:
        return self.root / self.index_table.get("file", DEFAULT_INDEX_FILE)

    @property
    def index_hash(self) -> str | None:
        return self.index_table.get("hash")

    def load_index(self) -> Index:
        return Index.load(self.index_path, self.root)

    def write_record(self, record: DependencyRecord, path: Path) -> tuple[str, str]:
        """Write ``record`` to ``path`` (pack-relative), overwriting it.

        Returns:
            (hash_format, hash) of the bytes written

        Raises:
            OSError: If the file can't be written
        """
        content = tomli_w.dumps(record.to_toml_dict()).encode("utf-8")
        target = self.root / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        logger.debug(f"Wrote {target}")
        return DEFAULT_HASH_FORMAT, hash_bytes(content)

    def update_index_hash(self) -> None:
        """Hash the index file as it is on disk.

        Raises:
            OSError: If the index file can't be read
        """
        hash_format = self.index_table.get("hash-format", DEFAULT_HASH_FORMAT)
        self.index_table["file"] = self.index_table.get("file", DEFAULT_INDEX_FILE)
        self.index_table["hash-format"] = hash_format
        self.index_table["hash"] = hash_bytes(self.index_path.read_bytes(), hash_format)

    def write(self) -> None:
        """Write the pack manifest.

        Raises:
            OSError: If the file can't be written
        """
        with open(self.pack_path, "wb") as f:
            tomli_w.dump(self._data, f)
        logger.debug(f"Saved pack manifest {self.pack_path}")
