"""Canonical documents produced by the entity mappers."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CanonicalRecord(BaseModel):
    """Fixed-schema document keyed by a stable identifier."""

    id: str = Field(..., min_length=1, description="Document id in the destination collection")
    data: dict[str, Any] = Field(default_factory=dict)


class _Document(BaseModel):
    """Stored field names are camelCase; Python attributes are snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ItemSources(_Document):
    maps: list[str] = Field(default_factory=list)
    biomes: list[str] = Field(default_factory=list)
    enemies: list[str] = Field(default_factory=list)
    traders: list[str] = Field(default_factory=list)
    quests: list[str] = Field(default_factory=list)


class ItemData(_Document):
    """mfItems document."""

    name: str = "Unknown Item"
    rarity: str = "Unknown"
    type: str = "Unknown"
    sources: ItemSources = Field(default_factory=ItemSources)
    metaforge_id: Any = None
    category_slug: Optional[str] = None


class RequiredItem(_Document):
    item_id: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1)


class QuestData(_Document):
    """mfQuests document."""

    name: str = "Unknown Quest"
    category: str = "Unknown"
    description: str = ""
    required_items: list[RequiredItem] = Field(default_factory=list)
    metaforge_id: Any = None
    rewards: list[Any] = Field(default_factory=list)


class ArcDrop(_Document):
    item_id: str = Field(..., min_length=1)
    notes: Optional[str] = None


class ArcData(_Document):
    """mfArcs document."""

    name: str = "Unknown Arc"
    type: Optional[str] = None
    description: Optional[str] = None
    maps: list[str] = Field(default_factory=list)
    biomes: list[str] = Field(default_factory=list)
    drops: list[ArcDrop] = Field(default_factory=list)
    metaforge_id: Any = None


class InventoryEntry(_Document):
    item_id: str = Field(..., min_length=1)
    price: Optional[float] = None
    currency: Optional[str] = None
    notes: Optional[str] = None


class TraderData(_Document):
    """mfTraders document."""

    name: str = "Unknown Trader"
    description: Optional[str] = None
    location_map: Optional[str] = None
    inventory: list[InventoryEntry] = Field(default_factory=list)
    metaforge_id: Any = None


class MapData(_Document):
    """
    mfMaps document. pointsOfInterest, zones and coordinates are copied
    verbatim and only written when the source provides them.
    """

    name: str = "Unknown Map"
    slug: str
    description: Optional[str] = None
    biomes: list[str] = Field(default_factory=list)
    arcs: list[str] = Field(default_factory=list)
    points_of_interest: Any = None
    zones: Any = None
    coordinates: Any = None
    metaforge_id: Any = None

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(
            by_alias=True,
            exclude={
                name
                for name in ("points_of_interest", "zones", "coordinates")
                if getattr(self, name) is None
            },
        )
