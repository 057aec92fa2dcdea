"""Re-derive typed metadata from the textual header of a snapshot.

Snapshots store their health metrics as a formatted bulleted list, e.g.::

    Health Metrics:
    - Word Count: 523
    - Reading Time: 3 minutes
    - Completion: 87.5%

Everything that knows about that format lives here. Extraction is tolerant:
a missing or garbled entry resolves to zero instead of raising, so that
partially written or hand edited snapshots can still be compared.
"""

from __future__ import annotations

import logging
import re
from typing import Sequence, Union

from mementor.models import HealthMetrics, SnapshotMetadata

LOGGER = logging.getLogger(__name__)

WORD_COUNT_LABEL = "Word Count"
READING_TIME_LABEL = "Reading Time"
TODOS_LABEL = "TODOs"
COMPLETION_LABEL = "Completion"
SECTIONS_LABEL = "Sections"
CODE_BLOCKS_LABEL = "Code Blocks"
SNAPSHOT_DELTA_LABEL = "Days Since Last Snapshot"

_INT_PREFIX = re.compile(r"\d+")
_FLOAT_PREFIX = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def _find_labeled_line(lines: Sequence[str], label: str) -> str | None:
    marker = f"- {label}:"
    for line in lines:
        if marker in line:
            return line
    return None


def extract_metric(
    lines: Sequence[str], label: str, *, percentage: bool = False
) -> Union[int, float]:
    """Return the numeric value of ``- <label>: <value>``, or 0.

    Only the leading number of the value is read, so unit suffixes such as
    ``minutes`` or ``%`` are ignored.
    """
    line = _find_labeled_line(lines, label)
    if line is None:
        return 0.0 if percentage else 0

    value = line.split(":")[1].strip()
    if percentage:
        match = _FLOAT_PREFIX.match(value.replace("%", ""))
        if match is None:
            LOGGER.debug("Unparseable percentage for %r: %r", label, value)
            return 0.0
        return float(match.group())

    token = value.split(" ")[0]
    match = _INT_PREFIX.match(token)
    if match is None:
        LOGGER.debug("Unparseable value for %r: %r", label, value)
        return 0
    return int(match.group())


def _header_value(lines: Sequence[str], prefix: str) -> str:
    for line in lines:
        if line.startswith(prefix):
            return line[len(prefix) :].strip()
    return ""


def extract_metrics(lines: Sequence[str]) -> HealthMetrics:
    """Rebuild the health metrics recorded in a snapshot header.

    Fields without a textual representation (links, section depth, average
    section length, readability) come back empty or zero.
    """
    todo_count = int(extract_metric(lines, TODOS_LABEL))
    return HealthMetrics(
        last_updated=_header_value(lines, "Updated:"),
        word_count=int(extract_metric(lines, WORD_COUNT_LABEL)),
        reading_time=int(extract_metric(lines, READING_TIME_LABEL)),
        has_todos=todo_count > 0,
        todo_count=todo_count,
        completion_percentage=float(
            extract_metric(lines, COMPLETION_LABEL, percentage=True)
        ),
        section_count=int(extract_metric(lines, SECTIONS_LABEL)),
        code_blocks=int(extract_metric(lines, CODE_BLOCKS_LABEL)),
        last_snapshot_delta=int(extract_metric(lines, SNAPSHOT_DELTA_LABEL)),
    )


def extract_metadata(lines: Sequence[str]) -> SnapshotMetadata:
    """Parse the version, timestamps and metrics of a snapshot header."""
    return SnapshotMetadata(
        version=_header_value(lines, "Version:"),
        created_at=_header_value(lines, "Created:"),
        updated_at=_header_value(lines, "Updated:"),
        health_metrics=extract_metrics(lines),
    )
