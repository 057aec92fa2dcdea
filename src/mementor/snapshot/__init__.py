"""Snapshot parsing and rendering."""
