"""Data models for raw payload records and canonical documents."""

from metaforge_sync.models.canonical import (
    ArcData,
    CanonicalRecord,
    ItemData,
    MapData,
    QuestData,
    TraderData,
)
from metaforge_sync.models.raw import RawRecord

__all__ = [
    "ArcData",
    "CanonicalRecord",
    "ItemData",
    "MapData",
    "QuestData",
    "RawRecord",
    "TraderData",
]
