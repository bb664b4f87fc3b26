"""Source connectors for MetaForge ingestion."""

from metaforge_sync.connectors.base import BaseConnector
from metaforge_sync.connectors.metaforge import MetaForgeConnector

__all__ = ["BaseConnector", "MetaForgeConnector"]
