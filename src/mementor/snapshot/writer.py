"""Render and write snapshot documents."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from mementor.config import AppConfig
from mementor.metrics.health import calculate_health_metrics, days_since_last_snapshot
from mementor.models import Dependency, SnapshotMetadata
from mementor.snapshot import extractor
from mementor.snapshot.parser import SEPARATOR
from mementor.utils.files import bucket_directory, snapshot_filename
from mementor.utils.text import format_number

LOGGER = logging.getLogger(__name__)

HEADER_TITLE = "=== MEMENTOR SNAPSHOT ==="


def render_metadata_header(metadata: SnapshotMetadata) -> str:
    """Render the text header that :mod:`mementor.snapshot.extractor` reads back."""
    header: List[str] = [
        HEADER_TITLE,
        f"Version: {metadata.version}",
        f"Created: {metadata.created_at}",
        f"Updated: {metadata.updated_at}",
        "",
        "Dependencies:",
    ]
    header.extend(f"- {dep.name}: {dep.version}" for dep in metadata.dependencies)

    metrics = metadata.health_metrics
    if metrics is not None:
        header.extend(
            [
                "",
                "Health Metrics:",
                f"- {extractor.WORD_COUNT_LABEL}: {metrics.word_count}",
                f"- {extractor.READING_TIME_LABEL}: {metrics.reading_time} minutes",
                f"- {extractor.TODOS_LABEL}: {metrics.todo_count}",
                f"- {extractor.COMPLETION_LABEL}: "
                f"{format_number(metrics.completion_percentage)}%",
                f"- {extractor.SECTIONS_LABEL}: {metrics.section_count}",
                f"- {extractor.CODE_BLOCKS_LABEL}: {metrics.code_blocks}",
                f"- {extractor.SNAPSHOT_DELTA_LABEL}: {metrics.last_snapshot_delta}",
            ]
        )

    if metadata.tags:
        header.extend(["", "Tags:"])
        header.extend(f"- {tag}" for tag in metadata.tags)

    return "\n".join(header)


def render_snapshot(metadata: SnapshotMetadata, body: str) -> str:
    return f"{render_metadata_header(metadata)}\n\n{SEPARATOR}\n\n{body}"


def create_snapshot(
    doc_path: Path,
    output_dir: Path,
    *,
    config: AppConfig | None = None,
    now: datetime | None = None,
) -> Path:
    """Capture ``doc_path`` into a new snapshot below ``output_dir``.

    The file lands in ``output_dir/YYYY/MM/DD/snapshot_HHMMSS.md``. ``now``
    must be timezone aware when given.
    """
    config = config or AppConfig()
    moment = now or datetime.now(timezone.utc)
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    body = Path(doc_path).read_text(encoding="utf-8")
    metrics = calculate_health_metrics(body, now=moment)
    metrics.last_snapshot_delta = days_since_last_snapshot(output_dir, now=moment)

    timestamp = metrics.last_updated
    metadata = SnapshotMetadata(
        version=config.version,
        created_at=timestamp,
        updated_at=timestamp,
        health_metrics=metrics,
        dependencies=[Dependency(name="mementor", version=config.version)],
        tags=list(config.tags),
    )

    local = moment.astimezone()
    target = bucket_directory(output_dir, local) / snapshot_filename(local)
    target.write_text(render_snapshot(metadata, body), encoding="utf-8")
    LOGGER.info("Created snapshot %s", target)
    return target
