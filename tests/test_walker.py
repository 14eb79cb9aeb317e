"""Tests for directory traversal."""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path

import pytest

import traversal.walker as walker_module
from traversal import (
    DiagnosticsSummary,
    FailureKind,
    TraversalError,
    classify_error,
    walk,
)


def _build_tree(root: Path) -> None:
    (root / "a").mkdir()
    (root / "a" / "inner.txt").write_text("x")
    (root / "a" / "deeper").mkdir()
    (root / "a" / "deeper" / "leaf.md").write_text("x")
    (root / "b.txt").write_text("x")
    (root / "c").mkdir()


def _symlink_or_skip(target: Path, link: Path) -> None:
    try:
        os.symlink(target, link)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported here")


class _UnstatableEntry:
    """Directory entry whose symlink check fails, as on a revoked mount."""

    def __init__(self, path: str) -> None:
        self.path = path
        self.name = os.path.basename(path)

    def is_dir(self) -> bool:
        return True

    def is_file(self) -> bool:
        return False

    def is_symlink(self) -> bool:
        raise PermissionError(errno.EACCES, "Permission denied", self.path)


class TestWalk:
    def test_pre_order_excludes_root(self, tmp_path: Path) -> None:
        _build_tree(tmp_path)

        result = walk(tmp_path)

        assert [c.path for c in result.candidates] == [
            str(tmp_path / "a"),
            str(tmp_path / "a" / "deeper"),
            str(tmp_path / "a" / "deeper" / "leaf.md"),
            str(tmp_path / "a" / "inner.txt"),
            str(tmp_path / "b.txt"),
            str(tmp_path / "c"),
        ]
        assert result.ok

    def test_flags_captured(self, tmp_path: Path) -> None:
        _build_tree(tmp_path)

        by_path = {c.path: c for c in walk(tmp_path).candidates}

        assert by_path[str(tmp_path / "a")].is_dir
        assert not by_path[str(tmp_path / "a")].is_file
        assert by_path[str(tmp_path / "b.txt")].is_file
        assert not by_path[str(tmp_path / "b.txt")].is_dir

    def test_accepts_string_root(self, tmp_path: Path) -> None:
        _build_tree(tmp_path)
        assert len(walk(str(tmp_path)).candidates) == 6

    def test_empty_directory(self, tmp_path: Path) -> None:
        result = walk(tmp_path)
        assert result.candidates == []
        assert result.diagnostics == []

    def test_file_root_yields_itself(self, tmp_path: Path) -> None:
        target = tmp_path / "solo.txt"
        target.write_text("x")

        result = walk(target)

        assert len(result.candidates) == 1
        assert result.candidates[0].path == str(target)
        assert result.candidates[0].is_file

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        with pytest.raises(TraversalError, match="missing"):
            walk(tmp_path / "missing")

    def test_unreadable_root_raises(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def _deny(path: str):
            raise PermissionError(errno.EACCES, "Permission denied", path)

        monkeypatch.setattr(walker_module, "_list_dir", _deny)
        with pytest.raises(TraversalError):
            walk(tmp_path)

    def test_unreadable_subdirectory_is_skipped(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        _build_tree(tmp_path)
        blocked = str(tmp_path / "a")
        original = walker_module._list_dir

        def _list_dir(path: str):
            if path == blocked:
                raise PermissionError(errno.EACCES, "Permission denied", path)
            return original(path)

        monkeypatch.setattr(walker_module, "_list_dir", _list_dir)
        with caplog.at_level(logging.DEBUG, logger="traversal.walker"):
            result = walk(tmp_path)

        assert [c.path for c in result.candidates] == [
            blocked,
            str(tmp_path / "b.txt"),
            str(tmp_path / "c"),
        ]
        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].path == blocked
        assert result.diagnostics[0].kind is FailureKind.PERMISSION_DENIED
        assert not result.ok
        assert any(blocked in record.message for record in caplog.records)

    def test_symlinked_directory_followed_by_default(self, tmp_path: Path) -> None:
        (tmp_path / "real").mkdir()
        (tmp_path / "real" / "kilo.txt").write_text("x")
        _symlink_or_skip(tmp_path / "real", tmp_path / "link")

        result = walk(tmp_path)

        # "link" sorts first; the real directory must still be walked afterwards
        assert [c.path for c in result.candidates] == [
            str(tmp_path / "link"),
            str(tmp_path / "link" / "kilo.txt"),
            str(tmp_path / "real"),
            str(tmp_path / "real" / "kilo.txt"),
        ]
        assert result.ok

    def test_symlinked_directory_not_followed_when_disabled(self, tmp_path: Path) -> None:
        (tmp_path / "real").mkdir()
        (tmp_path / "real" / "file.txt").write_text("x")
        _symlink_or_skip(tmp_path / "real", tmp_path / "link")

        paths = [c.path for c in walk(tmp_path, follow_symlinks=False).candidates]

        assert str(tmp_path / "link") in paths
        assert str(tmp_path / "link" / "file.txt") not in paths
        assert str(tmp_path / "real" / "file.txt") in paths

    def test_symlink_cycle_recorded(self, tmp_path: Path) -> None:
        (tmp_path / "real").mkdir()
        (tmp_path / "real" / "file.txt").write_text("x")
        _symlink_or_skip(tmp_path, tmp_path / "real" / "back")

        result = walk(tmp_path)

        paths = [c.path for c in result.candidates]
        assert paths == [
            str(tmp_path / "real"),
            str(tmp_path / "real" / "back"),
            str(tmp_path / "real" / "file.txt"),
        ]
        assert [d.kind for d in result.diagnostics] == [FailureKind.LOOP]
        assert result.diagnostics[0].path == str(tmp_path / "real" / "back")

    def test_symlink_check_failure_is_skipped(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "b.txt").write_text("x")
        flaky = str(tmp_path / "a")
        original = walker_module._list_dir

        def _list_dir(path: str):
            entries = original(path)
            if path == str(tmp_path):
                return [_UnstatableEntry(flaky), *entries]
            return entries

        monkeypatch.setattr(walker_module, "_list_dir", _list_dir)
        result = walk(tmp_path, follow_symlinks=False)

        assert [c.path for c in result.candidates] == [flaky, str(tmp_path / "b.txt")]
        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].path == flaky
        assert result.diagnostics[0].kind is FailureKind.PERMISSION_DENIED

    def test_broken_symlink_is_neither_file_nor_dir(self, tmp_path: Path) -> None:
        _symlink_or_skip(tmp_path / "nowhere", tmp_path / "dangling")

        result = walk(tmp_path)

        assert len(result.candidates) == 1
        assert not result.candidates[0].is_file
        assert not result.candidates[0].is_dir


class TestFailureTaxonomy:
    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (PermissionError(errno.EACCES, "denied"), FailureKind.PERMISSION_DENIED),
            (FileNotFoundError(errno.ENOENT, "gone"), FailureKind.NOT_FOUND),
            (NotADirectoryError(errno.ENOTDIR, "not dir"), FailureKind.NOT_A_DIRECTORY),
            (OSError(errno.ELOOP, "too many links"), FailureKind.LOOP),
            (OSError(errno.EIO, "io"), FailureKind.IO_ERROR),
            (ValueError("odd"), FailureKind.OTHER),
        ],
    )
    def test_classify_error(self, error: BaseException, expected: FailureKind) -> None:
        assert classify_error(error) is expected

    def test_summary_counts(self) -> None:
        summary = DiagnosticsSummary()
        summary.record(FailureKind.PERMISSION_DENIED)
        summary.record(FailureKind.PERMISSION_DENIED)
        summary.record(FailureKind.NOT_FOUND)

        assert summary.total == 3
        assert summary.top_failures(1) == [("permission_denied", 2)]
        assert summary.top_failures() == [("permission_denied", 2), ("not_found", 1)]

    def test_walk_result_summary(self, tmp_path: Path) -> None:
        result = walk(tmp_path)
        result.record_failure("x", PermissionError(errno.EACCES, "denied"))
        assert result.summary().get_failure_stats()[FailureKind.PERMISSION_DENIED] == 1
