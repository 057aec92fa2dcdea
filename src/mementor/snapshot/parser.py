"""Split snapshot documents into metadata and body content."""

from __future__ import annotations

import logging
from pathlib import Path

from mementor.models import ParsedSnapshot
from mementor.snapshot.extractor import extract_metadata
from mementor.utils.text import non_blank_lines

LOGGER = logging.getLogger(__name__)

SEPARATOR = "---"


class FormatError(ValueError):
    """Raised when a snapshot document has no metadata separator."""


def parse_snapshot_text(text: str) -> ParsedSnapshot:
    """Parse an in-memory snapshot document.

    The first line that is exactly ``---`` ends the metadata header. Blank
    body lines are discarded since they never take part in diffing.
    """
    lines = text.splitlines()
    try:
        separator_index = lines.index(SEPARATOR)
    except ValueError:
        raise FormatError("Invalid snapshot format: no metadata section found") from None

    metadata_lines = lines[:separator_index]
    body_lines = lines[separator_index + 1 :]
    return ParsedSnapshot(
        metadata=extract_metadata(metadata_lines),
        content=non_blank_lines(body_lines),
    )


def parse_snapshot(path: Path) -> ParsedSnapshot:
    """Read and parse the snapshot stored at ``path``."""
    path = Path(path)
    LOGGER.debug("Parsing snapshot %s", path)
    text = path.read_text(encoding="utf-8")
    try:
        return parse_snapshot_text(text)
    except FormatError as exc:
        raise FormatError(f"{exc}: {path}") from None
