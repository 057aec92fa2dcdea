"""Utility helpers for locating and organising snapshot files."""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Iterator, List, Sequence, Tuple

LOGGER = logging.getLogger(__name__)

SNAPSHOT_PREFIX = "snapshot_"
SNAPSHOT_SUFFIX = ".md"


def is_snapshot_file(path: Path) -> bool:
    return path.name.startswith(SNAPSHOT_PREFIX) and path.name.endswith(SNAPSHOT_SUFFIX)


def bucket_path(base_dir: Path, when: date | datetime) -> Path:
    """``base_dir/YYYY/MM/DD`` for the given day."""
    return base_dir / f"{when.year:04d}" / f"{when.month:02d}" / f"{when.day:02d}"


def bucket_directory(base_dir: Path, when: date | datetime) -> Path:
    """Create (if needed) and return the day folder for ``when``."""
    directory = bucket_path(base_dir, when)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def snapshot_filename(when: datetime) -> str:
    return f"{SNAPSHOT_PREFIX}{when:%H%M%S}{SNAPSHOT_SUFFIX}"


def iter_snapshot_paths(snapshots_dir: Path, day: date | None = None) -> Iterator[Path]:
    """Yield snapshot files in sorted order.

    With ``day`` only that day's folder is searched, otherwise the whole tree.
    """
    snapshots_dir = Path(snapshots_dir)
    if day is not None:
        target = bucket_path(snapshots_dir, day)
        if not target.is_dir():
            return
        candidates = (child for child in target.iterdir() if child.is_file())
    elif snapshots_dir.is_dir():
        candidates = (child for child in snapshots_dir.rglob("*") if child.is_file())
    else:
        return
    yield from sorted(path for path in candidates if is_snapshot_file(path))


def latest_pair(paths: Sequence[Path]) -> Tuple[Path, Path] | None:
    """Return the two most recent snapshots as ``(older, newer)``."""
    if len(paths) < 2:
        return None
    return paths[-2], paths[-1]


def rebucket_snapshots(snapshots_dir: Path) -> List[Tuple[Path, Path]]:
    """Move loose snapshot files into their year/month/day folders.

    The day and time come from each file's modification time. Returns the
    ``(source, destination)`` pairs that were moved.
    """
    moved: List[Tuple[Path, Path]] = []
    for path in sorted(Path(snapshots_dir).iterdir()):
        if not (path.is_file() and is_snapshot_file(path)):
            continue
        stamp = datetime.fromtimestamp(path.stat().st_mtime)
        destination = bucket_directory(snapshots_dir, stamp) / snapshot_filename(stamp)
        if destination.exists():
            LOGGER.warning("Skipping %s: %s already exists", path, destination)
            continue
        path.rename(destination)
        LOGGER.info("Moved %s to %s", path.name, destination.relative_to(snapshots_dir))
        moved.append((path, destination))
    return moved


def remove_empty_dirs(directory: Path) -> int:
    """Remove empty sub-directories below ``directory``; return how many."""
    removed = 0
    for child in sorted(Path(directory).iterdir()):
        if not child.is_dir():
            continue
        removed += remove_empty_dirs(child)
        if not any(child.iterdir()):
            child.rmdir()
            removed += 1
    return removed
