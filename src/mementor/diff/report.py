"""Plain-text rendering of snapshot comparisons."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List

from mementor.diff.metrics import is_numeric
from mementor.models import MetricChange, SnapshotDiff
from mementor.utils.text import format_number, title_case_field

TREND_UP = "📈"
TREND_DOWN = "📉"
TREND_FLAT = "➡️"


def _format_value(value: Any) -> str:
    if is_numeric(value):
        return format_number(value)
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, list):
        return ", ".join(value)
    return str(value)


def _trend(delta: float) -> str:
    if delta > 0:
        return TREND_UP
    if delta < 0:
        return TREND_DOWN
    return TREND_FLAT


def _format_change(change: MetricChange) -> str:
    old = _format_value(change.old)
    new = _format_value(change.new)
    if change.delta is None:
        return f"  {old} → {new}"
    sign = "+" if change.delta >= 0 else ""
    return f"  {old} → {new} {_trend(change.delta)} ({sign}{format_number(change.delta)})"


def format_diff(diff: SnapshotDiff) -> str:
    """Render ``diff`` as a human readable report."""
    lines: List[str] = [
        "=== SNAPSHOT COMPARISON ===",
        f"Old: {Path(diff.old_path).name}",
        f"New: {Path(diff.new_path).name}",
        "",
        "=== METRICS CHANGES ===",
    ]

    for name, change in diff.metrics.changes.items():
        lines.append(f"{title_case_field(name)}:")
        lines.append(_format_change(change))

    content = diff.content
    if content.added:
        lines.extend(["", "=== ADDED CONTENT ==="])
        lines.extend(f"+ {line}" for line in content.added)

    if content.removed:
        lines.extend(["", "=== REMOVED CONTENT ==="])
        lines.extend(f"- {line}" for line in content.removed)

    if content.modified:
        lines.extend(["", "=== MODIFIED CONTENT ==="])
        for pair in content.modified:
            lines.extend([f"- {pair.old}", f"+ {pair.new}", ""])

    return "\n".join(lines)
