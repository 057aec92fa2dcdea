"""Tests for file utility functions."""

from __future__ import annotations

import os
from datetime import date, datetime
from pathlib import Path

from mementor.utils.files import (
    bucket_directory,
    bucket_path,
    is_snapshot_file,
    iter_snapshot_paths,
    latest_pair,
    rebucket_snapshots,
    remove_empty_dirs,
    snapshot_filename,
)


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("x")
    return path


class TestNaming:
    """Test snapshot naming helpers."""

    def test_is_snapshot_file(self) -> None:
        """Only snapshot_*.md files count."""
        assert is_snapshot_file(Path("snapshot_101500.md"))
        assert not is_snapshot_file(Path("notes.md"))
        assert not is_snapshot_file(Path("snapshot_101500.json"))

    def test_snapshot_filename(self) -> None:
        """Uses the time of day."""
        assert snapshot_filename(datetime(2024, 3, 1, 9, 5, 7)) == "snapshot_090507.md"

    def test_bucket_path(self, tmp_path: Path) -> None:
        """Zero-padded year/month/day folders."""
        assert bucket_path(tmp_path, date(2024, 3, 1)) == tmp_path / "2024" / "03" / "01"

    def test_bucket_directory_creates(self, tmp_path: Path) -> None:
        """Creates the folder when missing."""
        directory = bucket_directory(tmp_path, date(2024, 12, 31))

        assert directory.is_dir()
        assert directory == tmp_path / "2024" / "12" / "31"


class TestIterSnapshotPaths:
    """Test iter_snapshot_paths function."""

    def test_recursive_sorted(self, tmp_path: Path) -> None:
        """Finds snapshots in all date folders, oldest first."""
        second = _touch(tmp_path / "2024" / "03" / "02" / "snapshot_080000.md")
        first = _touch(tmp_path / "2024" / "03" / "01" / "snapshot_235959.md")
        third = _touch(tmp_path / "2024" / "03" / "02" / "snapshot_093000.md")
        _touch(tmp_path / "2024" / "03" / "02" / "notes.md")

        assert list(iter_snapshot_paths(tmp_path)) == [first, second, third]

    def test_single_day(self, tmp_path: Path) -> None:
        """Restricts to one day's folder."""
        _touch(tmp_path / "2024" / "03" / "01" / "snapshot_235959.md")
        wanted = _touch(tmp_path / "2024" / "03" / "02" / "snapshot_080000.md")

        assert list(iter_snapshot_paths(tmp_path, date(2024, 3, 2))) == [wanted]

    def test_missing_day(self, tmp_path: Path) -> None:
        """A day without a folder yields nothing."""
        assert list(iter_snapshot_paths(tmp_path, date(2020, 1, 1))) == []

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A missing snapshots directory yields nothing."""
        assert list(iter_snapshot_paths(tmp_path / "missing")) == []


class TestLatestPair:
    """Test latest_pair function."""

    def test_pair(self) -> None:
        """Returns the last two paths."""
        paths = [Path("a"), Path("b"), Path("c")]

        assert latest_pair(paths) == (Path("b"), Path("c"))

    def test_not_enough(self) -> None:
        """Needs at least two snapshots."""
        assert latest_pair([Path("a")]) is None
        assert latest_pair([]) is None


class TestCleanup:
    """Test rebucket_snapshots and remove_empty_dirs."""

    def test_rebucket_moves_loose_files(self, tmp_path: Path) -> None:
        """Loose snapshots move into folders from their mtime."""
        loose = _touch(tmp_path / "snapshot_legacy.md")
        other = _touch(tmp_path / "readme.md")
        stamp = datetime(2024, 3, 1, 9, 15, 30)
        os.utime(loose, (stamp.timestamp(), stamp.timestamp()))

        moved = rebucket_snapshots(tmp_path)

        destination = tmp_path / "2024" / "03" / "01" / "snapshot_091530.md"
        assert moved == [(loose, destination)]
        assert destination.exists()
        assert not loose.exists()
        assert other.exists()

    def test_rebucket_does_not_overwrite(self, tmp_path: Path) -> None:
        """Existing destinations are left alone."""
        stamp = datetime(2024, 3, 1, 9, 15, 30)
        existing = _touch(tmp_path / "2024" / "03" / "01" / "snapshot_091530.md")
        loose = _touch(tmp_path / "snapshot_legacy.md")
        os.utime(loose, (stamp.timestamp(), stamp.timestamp()))

        assert rebucket_snapshots(tmp_path) == []
        assert loose.exists()
        assert existing.read_text() == "x"

    def test_remove_empty_dirs(self, tmp_path: Path) -> None:
        """Removes nested empty folders and keeps populated ones."""
        (tmp_path / "2023" / "01" / "01").mkdir(parents=True)
        kept = _touch(tmp_path / "2024" / "03" / "01" / "snapshot_091530.md")

        removed = remove_empty_dirs(tmp_path)

        assert removed == 3
        assert not (tmp_path / "2023").exists()
        assert kept.exists()
        assert tmp_path.exists()
