"""Mementor - living documentation snapshots."""

__version__ = "0.1.0"
