"""Snapshot comparison pipeline."""

from __future__ import annotations

import logging
from pathlib import Path

from mementor.diff.content import diff_content
from mementor.diff.metrics import diff_metrics
from mementor.models import HealthMetrics, MetricsDiff, SnapshotDiff
from mementor.snapshot.parser import parse_snapshot

LOGGER = logging.getLogger(__name__)


def compare_snapshots(old_path: Path, new_path: Path) -> SnapshotDiff:
    """Compare two snapshot files.

    Both documents must parse; a ``FormatError`` or ``OSError`` from either
    aborts the comparison and nothing partial is returned.
    """
    old_path = Path(old_path)
    new_path = Path(new_path)
    LOGGER.info("Comparing %s -> %s", old_path, new_path)

    old_snapshot = parse_snapshot(old_path)
    new_snapshot = parse_snapshot(new_path)

    old_metrics = old_snapshot.metadata.health_metrics or HealthMetrics()
    new_metrics = new_snapshot.metadata.health_metrics or HealthMetrics()

    metrics = MetricsDiff(
        old=old_metrics,
        new=new_metrics,
        changes=diff_metrics(old_metrics, new_metrics),
    )
    content = diff_content(old_snapshot.content, new_snapshot.content)
    LOGGER.debug(
        "%d metric changes, %d added, %d removed, %d modified",
        len(metrics.changes),
        len(content.added),
        len(content.removed),
        len(content.modified),
    )
    return SnapshotDiff(old_path=old_path, new_path=new_path, metrics=metrics, content=content)
