"""Tests for the plain-text comparison report."""

from __future__ import annotations

from pathlib import Path

from mementor.diff.metrics import diff_metrics
from mementor.diff.report import TREND_DOWN, TREND_FLAT, TREND_UP, format_diff
from mementor.models import (
    ContentDiff,
    HealthMetrics,
    MetricChange,
    MetricsDiff,
    ModifiedLine,
    SnapshotDiff,
)


def _diff(changes=None, content=None) -> SnapshotDiff:
    return SnapshotDiff(
        old_path=Path("/snapshots/2024/03/01/snapshot_091500.md"),
        new_path=Path("/snapshots/2024/03/02/snapshot_103000.md"),
        metrics=MetricsDiff(old=HealthMetrics(), new=HealthMetrics(), changes=changes or {}),
        content=content or ContentDiff(),
    )


class TestFormatDiff:
    """Test format_diff function."""

    def test_header_uses_basenames(self) -> None:
        """Header names both files without their directories."""
        lines = format_diff(_diff()).split("\n")

        assert lines[:5] == [
            "=== SNAPSHOT COMPARISON ===",
            "Old: snapshot_091500.md",
            "New: snapshot_103000.md",
            "",
            "=== METRICS CHANGES ===",
        ]

    def test_empty_diff_has_no_content_blocks(self) -> None:
        """Blocks with no entries are omitted."""
        report = format_diff(_diff())

        assert "ADDED CONTENT" not in report
        assert "REMOVED CONTENT" not in report
        assert "MODIFIED CONTENT" not in report

    def test_numeric_increase(self) -> None:
        """Increases show the up glyph and a plus sign."""
        report = format_diff(_diff({"word_count": MetricChange(old=400, new=450, delta=50)}))

        assert "Word Count:" in report
        assert f"  400 → 450 {TREND_UP} (+50)" in report

    def test_numeric_decrease(self) -> None:
        """Decreases show the down glyph and a minus sign."""
        change = MetricChange(old=100.0, new=87.5, delta=-12.5)
        report = format_diff(_diff({"completion_percentage": change}))

        assert "Completion Percentage:" in report
        assert f"  100 → 87.5 {TREND_DOWN} (-12.5)" in report

    def test_zero_delta(self) -> None:
        """A zero delta is flat and signed positive."""
        report = format_diff(_diff({"word_count": MetricChange(old=1, new=1, delta=0)}))

        assert f"  1 → 1 {TREND_FLAT} (+0)" in report

    def test_non_numeric_change(self) -> None:
        """Non-numeric values are printed without a trend."""
        changes = diff_metrics(HealthMetrics(has_todos=True), HealthMetrics(has_todos=False))
        report = format_diff(_diff(changes))

        assert "Has Todos:\n  true → false" in report

    def test_content_blocks(self) -> None:
        """Added, removed and modified blocks in order."""
        content = ContentDiff(
            added=["Update docs"],
            removed=["Old note"],
            modified=[ModifiedLine(old="Fixed the login bug", new="Fixed the login issue")],
        )

        report = format_diff(_diff(content=content))

        assert report.endswith(
            "\n".join(
                [
                    "",
                    "=== ADDED CONTENT ===",
                    "+ Update docs",
                    "",
                    "=== REMOVED CONTENT ===",
                    "- Old note",
                    "",
                    "=== MODIFIED CONTENT ===",
                    "- Fixed the login bug",
                    "+ Fixed the login issue",
                    "",
                ]
            )
        )

    def test_only_modified(self) -> None:
        """Only non-empty blocks are rendered."""
        content = ContentDiff(modified=[ModifiedLine(old="a b", new="a c")])

        report = format_diff(_diff(content=content))

        assert "=== MODIFIED CONTENT ===" in report
        assert "ADDED CONTENT" not in report
