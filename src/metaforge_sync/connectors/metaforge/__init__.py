"""MetaForge content API connector."""

from metaforge_sync.connectors.metaforge.connector import MetaForgeConnector

__all__ = ["MetaForgeConnector"]
