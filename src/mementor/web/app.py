"""FastAPI application exposing snapshot listing and comparison."""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
import os
from dataclasses import asdict
from pathlib import Path
from typing import Any, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from mementor import __version__
from mementor.config import load_config
from mementor.diff.comparer import compare_snapshots
from mementor.diff.report import format_diff
from mementor.models import SnapshotDiff
from mementor.snapshot.parser import FormatError
from mementor.utils.files import iter_snapshot_paths, latest_pair

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="Mementor Web", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.docs_dir = None


class ComparePayload(BaseModel):
    old: str | None = None
    new: str | None = None
    date: dt.date | None = None
    docs_dir: Path | None = None


def _resolve_snapshots_dir(docs_dir: Path | None) -> Path:
    config = load_config(Path.cwd())
    docs_dir = docs_dir if docs_dir is not None else app.state.docs_dir
    if docs_dir is not None:
        config.docs_dir = docs_dir
    return config.resolve_snapshots_dir(Path.cwd())


def _resolve_inside(snapshots_dir: Path, name: str) -> Path:
    """Resolve ``name`` below ``snapshots_dir``.

    Only ``name`` is confined: ``..`` segments and symlinks may not leave
    ``snapshots_dir``. The base itself comes from the caller's ``docs_dir``
    or the server default and is trusted as given.
    """
    if "\0" in name:
        raise HTTPException(status_code=400, detail="Invalid path: contains null byte")
    base = os.path.realpath(str(snapshots_dir))
    candidate = os.path.realpath(os.path.join(base, name))
    if not (candidate + os.sep).startswith(base + os.sep):
        raise HTTPException(
            status_code=403, detail="Access denied: path is outside the snapshots directory"
        )
    path = Path(candidate)
    if not path.is_file():
        raise HTTPException(status_code=404, detail=f"Snapshot not found: {name}")
    return path


def _serialize_diff(diff: SnapshotDiff) -> dict[str, Any]:
    payload = asdict(diff)
    payload["old_path"] = str(diff.old_path)
    payload["new_path"] = str(diff.new_path)
    return payload


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get("/snapshots")
async def list_snapshots(
    docs_dir: Path | None = None, date: dt.date | None = None
) -> dict[str, List[str]]:
    """List snapshot files relative to the snapshots directory."""
    snapshots_dir = _resolve_snapshots_dir(docs_dir)
    paths = iter_snapshot_paths(snapshots_dir, date)
    return {"snapshots": [path.relative_to(snapshots_dir).as_posix() for path in paths]}


@app.post("/compare")
async def compare(payload: ComparePayload) -> dict[str, Any]:
    """Compare two named snapshots, or the latest two when none are named."""
    snapshots_dir = _resolve_snapshots_dir(payload.docs_dir)

    if payload.old and payload.new:
        old_path = _resolve_inside(snapshots_dir, payload.old)
        new_path = _resolve_inside(snapshots_dir, payload.new)
    elif payload.old or payload.new:
        raise HTTPException(status_code=400, detail="Provide both old and new, or neither")
    else:
        pair = latest_pair(list(iter_snapshot_paths(snapshots_dir, payload.date)))
        if pair is None:
            raise HTTPException(status_code=404, detail="Need at least 2 snapshots to compare")
        old_path, new_path = pair

    try:
        diff = await asyncio.to_thread(compare_snapshots, old_path, new_path)
    except FormatError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except OSError as exc:
        LOGGER.error("Unable to read snapshots: %s", exc)
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    return {"diff": _serialize_diff(diff), "report": format_diff(diff)}
