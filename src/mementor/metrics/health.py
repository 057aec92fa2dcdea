"""Health metrics computed from a markdown document."""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime, timezone
from pathlib import Path

from mementor.models import HealthMetrics

LOGGER = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200

_HEADING = re.compile(r"^(#{1,6})\s", re.MULTILINE)
_OPEN_TODO = re.compile(r"\[[ \t]*\]")
_DONE_TODO = re.compile(r"\[x\]", re.IGNORECASE)
_CODE_BLOCK = re.compile(r"```.*?```", re.DOTALL)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _isoformat(moment: datetime) -> str:
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def calculate_health_metrics(text: str, *, now: datetime | None = None) -> HealthMetrics:
    """Compute size, structure and completeness indicators for ``text``.

    ``last_snapshot_delta`` is left at 0; it depends on where the snapshot is
    written and is filled in by the snapshot writer.
    """
    moment = now or _utcnow()
    words = len(text.split())
    headings = _HEADING.findall(text)
    open_todos = len(_OPEN_TODO.findall(text))
    done_todos = len(_DONE_TODO.findall(text))
    total_todos = open_todos + done_todos
    sections = len(headings)

    return HealthMetrics(
        last_updated=_isoformat(moment),
        word_count=words,
        reading_time=math.ceil(words / WORDS_PER_MINUTE),
        has_todos=open_todos > 0,
        todo_count=open_todos,
        completion_percentage=(done_todos / total_todos * 100) if total_todos else 100.0,
        section_count=sections,
        section_depth=max((len(marker) for marker in headings), default=0),
        code_blocks=len(_CODE_BLOCK.findall(text)),
        avg_section_length=(words / sections) if sections else float(words),
    )


def days_since_last_snapshot(directory: Path, *, now: datetime | None = None) -> int:
    """Whole days since the newest ``*.md`` file under ``directory``."""
    directory = Path(directory)
    try:
        mtimes = [path.stat().st_mtime for path in directory.rglob("*.md") if path.is_file()]
    except OSError as exc:
        LOGGER.error("Error calculating last snapshot delta: %s", exc)
        return 0
    if not mtimes:
        return 0

    moment = now or _utcnow()
    latest = datetime.fromtimestamp(max(mtimes), tz=timezone.utc)
    return max(int((moment - latest).total_seconds() // 86400), 0)
