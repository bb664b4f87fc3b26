"""Sync canonical MetaForge game data into a document store."""

__version__ = "0.1.0"
