"""Commit a dependency record into the pack.

Steps run in a fixed order and each needs the previous one to succeed:

    1. load_index        -> IndexLoadError
    2. write_record      -> RecordWriteError
    3. update_index      -> IndexUpdateError
    4. write_index       -> IndexWriteError
    5. update_pack_hash  -> PackHashError
    6. write_pack        -> PackWriteError

Nothing is rolled back. A failure after step 2 can leave a metadata file
the index doesn't list, or an index the pack hash doesn't match; rerunning
the install (or reverting with version control) repairs it. The raised
error's ``completed_steps`` says how far the sequence got.
"""

import logging
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from .exceptions import CommitError
from .exceptions import IndexLoadError
from .exceptions import IndexUpdateError
from .exceptions import IndexWriteError
from .exceptions import PackHashError
from .exceptions import PackWriteError
from .exceptions import RecordWriteError
from .protocols import PackProtocol
from .schema import DependencyRecord

logger = logging.getLogger(__name__)


@dataclass
class CommitResult:
    """Outcome of a successful commit."""

    path: Path
    hash_format: str
    hash: str
    completed_steps: list[str] = field(default_factory=list)


def _fail(error_cls: type[CommitError], path: Path, completed: list[str], cause: Exception) -> CommitError:
    return error_cls(
        f"Failed to {error_cls.step.replace('_', ' ')} for {path}: {cause}",
        completed_steps=completed,
        context={"path": str(path)},
    )


def commit_record(pack: PackProtocol, record: DependencyRecord, path: Path) -> CommitResult:
    """
    Persist ``record`` at ``path`` and refresh the index and pack hash.

    Args:
        pack: Pack to write into
        record: Record to persist
        path: Pack-relative metadata path

    Returns:
        CommitResult with the record file's hash

    Raises:
        CommitError: Subclass naming the step that failed
    """
    completed: list[str] = []

    try:
        index = pack.load_index()
    except Exception as e:
        raise _fail(IndexLoadError, path, completed, e) from e
    completed.append(IndexLoadError.step)

    # Overwrites any existing file at path
    try:
        hash_format, file_hash = pack.write_record(record, path)
    except Exception as e:
        raise _fail(RecordWriteError, path, completed, e) from e
    completed.append(RecordWriteError.step)

    try:
        index.refresh_file_with_hash(path, hash_format, file_hash, True)
    except Exception as e:
        raise _fail(IndexUpdateError, path, completed, e) from e
    completed.append(IndexUpdateError.step)

    try:
        index.write()
    except Exception as e:
        raise _fail(IndexWriteError, path, completed, e) from e
    completed.append(IndexWriteError.step)

    try:
        pack.update_index_hash()
    except Exception as e:
        raise _fail(PackHashError, path, completed, e) from e
    completed.append(PackHashError.step)

    try:
        pack.write()
    except Exception as e:
        raise _fail(PackWriteError, path, completed, e) from e
    completed.append(PackWriteError.step)

    logger.debug(f"Committed {path} ({hash_format}:{file_hash})")
    return CommitResult(path=path, hash_format=hash_format, hash=file_hash, completed_steps=completed)
