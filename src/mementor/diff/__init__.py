"""Snapshot comparison engine."""
