"""Field by field comparison of health metrics."""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict

from mementor.models import HealthMetrics, MetricChange


def is_numeric(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def diff_metrics(old: HealthMetrics, new: HealthMetrics) -> Dict[str, MetricChange]:
    """Return the fields whose values differ, keyed by field name.

    Unchanged fields are left out. Numeric fields also carry
    ``delta = new - old``.
    """
    changes: Dict[str, MetricChange] = {}
    for metric in fields(HealthMetrics):
        old_value = getattr(old, metric.name)
        new_value = getattr(new, metric.name)
        if old_value == new_value:
            continue

        change = MetricChange(old=old_value, new=new_value)
        if is_numeric(old_value) and is_numeric(new_value):
            change.delta = new_value - old_value
        changes[metric.name] = change
    return changes
