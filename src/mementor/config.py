"""Application configuration defaults."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

LOGGER = logging.getLogger(__name__)

CONFIG_FILENAME = "mementor.json"
DEFAULT_VERSION = "1.0.0"


@dataclass(slots=True)
class AppConfig:
    docs_dir: Path = Path("docs/context")
    context_file: str = "active_context.md"
    snapshots_subdir: str = "snapshots"
    version: str = DEFAULT_VERSION
    tags: List[str] = field(default_factory=lambda: ["documentation", "snapshot"])

    def resolve_docs_dir(self, base_dir: Path | None = None) -> Path:
        if Path(self.docs_dir).is_absolute() or base_dir is None:
            return Path(self.docs_dir)
        return base_dir / self.docs_dir

    def resolve_snapshots_dir(self, base_dir: Path | None = None) -> Path:
        return self.resolve_docs_dir(base_dir) / self.snapshots_subdir

    def resolve_context_path(self, base_dir: Path | None = None) -> Path:
        return self.resolve_docs_dir(base_dir) / self.context_file


def load_config(base_dir: Path | None = None) -> AppConfig:
    """Load ``mementor.json`` from ``base_dir`` on top of the defaults.

    Both the camelCase keys written by older tooling and snake_case keys are
    accepted. A missing or unreadable file yields the defaults.
    """
    config = AppConfig()
    config_path = (base_dir or Path.cwd()) / CONFIG_FILENAME
    if not config_path.exists():
        LOGGER.debug("No %s found, using defaults", config_path)
        return config

    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        LOGGER.warning("Ignoring invalid config %s: %s", config_path, exc)
        return config
    if not isinstance(raw, dict):
        LOGGER.warning("Ignoring config %s: expected a JSON object", config_path)
        return config

    docs_dir = raw.get("docs_dir", raw.get("docsDir"))
    if docs_dir:
        config.docs_dir = Path(docs_dir)
    context_file = raw.get("context_file", raw.get("contextFile"))
    if context_file:
        config.context_file = str(context_file)
    if raw.get("version"):
        config.version = str(raw["version"])
    if isinstance(raw.get("tags"), list):
        config.tags = [str(tag) for tag in raw["tags"]]
    return config
