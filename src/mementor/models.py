"""Core Mementor data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

MetricValue = Union[str, int, float, bool, List[str]]


@dataclass(slots=True)
class HealthMetrics:
    """Quantitative indicators describing a document at capture time."""

    last_updated: str = ""
    word_count: int = 0
    reading_time: int = 0
    has_todos: bool = False
    todo_count: int = 0
    linked_files: List[str] = field(default_factory=list)
    broken_links: List[str] = field(default_factory=list)
    completion_percentage: float = 0.0
    section_count: int = 0
    section_depth: int = 0
    code_blocks: int = 0
    avg_section_length: float = 0.0
    readability_score: float = 0.0
    last_snapshot_delta: int = 0


@dataclass(slots=True)
class Dependency:
    name: str
    version: str


@dataclass(slots=True)
class SnapshotMetadata:
    """Header of a snapshot document."""

    version: str
    created_at: str
    updated_at: str
    health_metrics: Optional[HealthMetrics] = None
    dependencies: List[Dependency] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)


@dataclass(slots=True)
class ParsedSnapshot:
    """Snapshot document split into its metadata and non-blank body lines."""

    metadata: SnapshotMetadata
    content: List[str]


@dataclass(slots=True)
class MetricChange:
    old: MetricValue
    new: MetricValue
    delta: Optional[Union[int, float]] = None


@dataclass(slots=True)
class ModifiedLine:
    old: str
    new: str


@dataclass(slots=True)
class ContentDiff:
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    modified: List[ModifiedLine] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified)


@dataclass(slots=True)
class MetricsDiff:
    old: HealthMetrics
    new: HealthMetrics
    changes: Dict[str, MetricChange] = field(default_factory=dict)


@dataclass(slots=True)
class SnapshotDiff:
    """Result of comparing two snapshot documents."""

    old_path: Path
    new_path: Path
    metrics: MetricsDiff
    content: ContentDiff
