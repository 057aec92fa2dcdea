"""Command line interface for Mementor."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mementor.config import AppConfig, load_config
from mementor.diff.comparer import compare_snapshots
from mementor.diff.report import format_diff
from mementor.snapshot.parser import FormatError
from mementor.snapshot.writer import create_snapshot
from mementor.utils.files import (
    iter_snapshot_paths,
    latest_pair,
    rebucket_snapshots,
    remove_empty_dirs,
)
from mementor.web.app import app as web_app


console = Console()
app = typer.Typer(help="Mementor - living documentation snapshots")

DATE_FORMATS = ["%Y-%m-%d"]


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load(docs_dir: Optional[Path]) -> AppConfig:
    config = load_config(Path.cwd())
    if docs_dir is not None:
        config.docs_dir = docs_dir
    return config


@app.command()
def snapshot(
    docs_dir: Path = typer.Option(None, "--docs-dir", help="Documentation directory"),
    context_file: str = typer.Option(None, "--context-file", help="Document to capture"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Capture the active context document into a new snapshot."""
    _setup_logging(verbose)
    config = _load(docs_dir)
    if context_file:
        config.context_file = context_file

    doc_path = config.resolve_context_path(Path.cwd())
    if not doc_path.exists():
        console.print(f"[red]Document not found: {doc_path}[/red]")
        raise typer.Exit(code=1)

    target = create_snapshot(doc_path, config.resolve_snapshots_dir(Path.cwd()), config=config)
    console.print(f"Created snapshot: [bold]{target}[/bold]")


@app.command()
def compare(
    old: Optional[str] = typer.Argument(None, help="Older snapshot, relative to the snapshots dir"),
    new: Optional[str] = typer.Argument(None, help="Newer snapshot, relative to the snapshots dir"),
    date: Optional[datetime] = typer.Option(
        None, "--date", "-d", formats=DATE_FORMATS, help="Compare the latest two of this day"
    ),
    docs_dir: Path = typer.Option(None, "--docs-dir", help="Documentation directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Compare two snapshots, by default the two most recent ones."""
    _setup_logging(verbose)
    snapshots_dir = _load(docs_dir).resolve_snapshots_dir(Path.cwd())

    if old and new:
        old_path, new_path = snapshots_dir / old, snapshots_dir / new
    elif old or new:
        raise typer.BadParameter("Provide both OLD and NEW snapshots, or neither")
    else:
        snapshots = list(iter_snapshot_paths(snapshots_dir, date.date() if date else None))
        pair = latest_pair(snapshots)
        if pair is None:
            console.print(
                f"[yellow]Need at least 2 snapshots to compare. Found: {len(snapshots)}[/yellow]"
            )
            raise typer.Exit(code=1)
        old_path, new_path = pair

    try:
        diff = compare_snapshots(old_path, new_path)
    except (FormatError, OSError) as exc:
        console.print(f"[red]Failed to compare snapshots: {escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    console.print(format_diff(diff), markup=False, highlight=False, emoji=False, soft_wrap=True)


@app.command("list")
def list_snapshots(
    date: Optional[datetime] = typer.Option(
        None, "--date", "-d", formats=DATE_FORMATS, help="Only list this day"
    ),
    docs_dir: Path = typer.Option(None, "--docs-dir", help="Documentation directory"),
) -> None:
    """List stored snapshots."""
    snapshots_dir = _load(docs_dir).resolve_snapshots_dir(Path.cwd())
    snapshots = list(iter_snapshot_paths(snapshots_dir, date.date() if date else None))
    if not snapshots:
        console.print("[yellow]No snapshots found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Snapshot")
    table.add_column("Size")
    for path in snapshots:
        table.add_row(path.relative_to(snapshots_dir).as_posix(), str(path.stat().st_size))
    console.print(table)


@app.command()
def cleanup(
    docs_dir: Path = typer.Option(None, "--docs-dir", help="Documentation directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Move loose snapshots into date folders and drop empty folders."""
    _setup_logging(verbose)
    snapshots_dir = _load(docs_dir).resolve_snapshots_dir(Path.cwd())
    if not snapshots_dir.is_dir():
        console.print("[yellow]Snapshots directory not found, nothing to clean up.[/yellow]")
        return

    moved = rebucket_snapshots(snapshots_dir)
    removed = remove_empty_dirs(snapshots_dir)
    console.print(f"Moved {len(moved)} snapshots, removed {removed} empty directories.")


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    docs_dir: Path = typer.Option(None, "--docs-dir", help="Documentation directory"),
) -> None:
    """Start the web API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install it with \"python -m pip install uvicorn\""
        ) from exc

    web_app.state.docs_dir = docs_dir
    snapshots_dir = _load(docs_dir).resolve_snapshots_dir(Path.cwd())
    if not snapshots_dir.exists():
        console.print("[yellow]Warning: snapshots directory not found, comparisons might fail.[/yellow]")

    console.print(f"Starting web interface on http://{host}:{port} (snapshots: {snapshots_dir})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
