"""Protocols for the pack storage the commit sequence writes through.

The install pipeline only needs these interfaces; ``pack.Pack`` is the
file-backed implementation, tests may provide others.
"""

from pathlib import Path
from typing import Protocol

from .schema import DependencyRecord


class IndexProtocol(Protocol):
    """Mapping of pack-relative paths to content hashes."""

    def refresh_file_with_hash(self, path: Path, hash_format: str, hash: str, mark_as_meta: bool) -> None:
        """Set the entry for ``path``, replacing any existing one.

        The entry is treated as changed even if the hash is identical.
        """
        ...

    def write(self) -> None:
        """Persist the index."""
        ...


class PackProtocol(Protocol):
    """Top-level pack manifest owning the index."""

    def load_index(self) -> IndexProtocol:
        """Load the pack's index from disk."""
        ...

    def write_record(self, record: DependencyRecord, path: Path) -> tuple[str, str]:
        """Write a metadata file, overwriting any existing one.

        Returns:
            (hash_format, hash) of the written file
        """
        ...

    def update_index_hash(self) -> None:
        """Recompute the stored hash of the index file."""
        ...

    def write(self) -> None:
        """Persist the pack manifest."""
        ...
