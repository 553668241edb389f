"""Tests for the ordered, non-transactional commit sequence."""

import tomllib
from pathlib import Path

import pytest
from pack_github import CommitError
from pack_github import DependencyRecord
from pack_github import GithubUpdate
from pack_github import Index
from pack_github import IndexLoadError
from pack_github import IndexUpdateError
from pack_github import IndexWriteError
from pack_github import PackHashError
from pack_github import PackWriteError
from pack_github import RecordWriteError
from pack_github import commit_record
from pack_github.schema import ModDownload

RECORD = DependencyRecord(
    name="bar",
    filename="bar-v2.jar",
    download=ModDownload(url="https://example.com/bar-v2.jar", hash="abc123"),
    update=GithubUpdate(slug="foo/bar", tag="v2"),
)
PATH = Path("mods/bar.pw.toml")


class RecordingPack:
    """In-memory pack that logs calls and can fail at a named step."""

    def __init__(self, fail_at: str | None = None):
        self.fail_at = fail_at
        self.calls: list[str] = []

    def _step(self, name: str) -> None:
        self.calls.append(name)
        if name == self.fail_at:
            raise OSError(f"{name} exploded")

    def load_index(self):
        self._step("load_index")
        return RecordingIndex(self)

    def write_record(self, record, path):
        self._step("write_record")
        return "sha256", "filehash"

    def update_index_hash(self):
        self._step("update_pack_hash")

    def write(self):
        self._step("write_pack")


class RecordingIndex:
    def __init__(self, pack: RecordingPack):
        self.pack = pack
        self.entries: dict = {}

    def refresh_file_with_hash(self, path, hash_format, hash, mark_as_meta):
        self.pack._step("update_index")
        self.entries[path] = (hash_format, hash, mark_as_meta)

    def write(self):
        self.pack._step("write_index")


STEPS = ["load_index", "write_record", "update_index", "write_index", "update_pack_hash", "write_pack"]


def test_steps_run_in_order():
    pack = RecordingPack()

    result = commit_record(pack, RECORD, PATH)

    assert pack.calls == STEPS
    assert result.completed_steps == STEPS
    assert (result.hash_format, result.hash) == ("sha256", "filehash")


@pytest.mark.parametrize(
    "step,error_cls",
    [
        ("load_index", IndexLoadError),
        ("write_record", RecordWriteError),
        ("update_index", IndexUpdateError),
        ("write_index", IndexWriteError),
        ("update_pack_hash", PackHashError),
        ("write_pack", PackWriteError),
    ],
)
def test_failure_aborts_at_step(step, error_cls):
    """Each step has its own error and later steps never run."""
    pack = RecordingPack(fail_at=step)
    position = STEPS.index(step)

    with pytest.raises(error_cls) as exc_info:
        commit_record(pack, RECORD, PATH)

    error = exc_info.value
    assert isinstance(error, CommitError)
    assert error.step == step
    assert error.completed_steps == STEPS[:position]
    assert pack.calls == STEPS[: position + 1]
    assert isinstance(error.__cause__, OSError)


def test_partially_committed_flag():
    with pytest.raises(CommitError) as early:
        commit_record(RecordingPack(fail_at="write_record"), RECORD, PATH)
    with pytest.raises(CommitError) as late:
        commit_record(RecordingPack(fail_at="write_index"), RECORD, PATH)

    assert not early.value.partially_committed
    assert late.value.partially_committed


def test_index_marked_as_metafile():
    pack = RecordingPack()
    index = RecordingIndex(pack)
    pack.load_index = lambda: index  # type: ignore[method-assign]

    commit_record(pack, RECORD, PATH)

    assert index.entries[PATH] == ("sha256", "filehash", True)


def test_index_write_failure_leaves_record_on_disk(pack, tmp_path, monkeypatch):
    """No rollback: the record stays on disk, absent from the index."""

    def broken_write(self):
        raise OSError("disk full")

    monkeypatch.setattr(Index, "write", broken_write)

    with pytest.raises(IndexWriteError, match="disk full") as exc_info:
        commit_record(pack, RECORD, PATH)

    assert exc_info.value.partially_committed
    assert (tmp_path / PATH).exists()
    with open(tmp_path / "index.toml", "rb") as f:
        assert "files" not in tomllib.load(f)


def test_commit_to_real_pack(pack, pack_file, tmp_path):
    result = commit_record(pack, RECORD, PATH)

    index = Index.load(tmp_path / "index.toml", tmp_path)
    entry = index.get_entry(PATH)
    assert entry is not None
    assert entry.hash == result.hash
    assert entry.metafile

    with open(pack_file, "rb") as f:
        assert tomllib.load(f)["index"]["hash"] == pack.index_hash


def test_commit_keeps_other_index_entries(pack, tmp_path):
    """Committing one record leaves other entries' keys untouched."""
    (tmp_path / "index.toml").write_text(
        'hash-format = "sha256"\n'
        "\n"
        "[[files]]\n"
        'file = "config/options.txt"\n'
        'hash = "aaa"\n'
        "preserve = true\n"
        'alias = "opts.txt"\n'
    )

    commit_record(pack, RECORD, PATH)

    with open(tmp_path / "index.toml", "rb") as f:
        files = {entry["file"]: entry for entry in tomllib.load(f)["files"]}
    assert files["config/options.txt"] == {
        "file": "config/options.txt",
        "hash": "aaa",
        "preserve": True,
        "alias": "opts.txt",
    }
    assert files["mods/bar.pw.toml"]["metafile"] is True
