"""
Entity mappers: one raw MetaForge record -> one CanonicalRecord.

Each canonical field lists its source aliases in priority order; the first
present value wins, otherwise the documented default applies. A record with
no identifier candidate raises MissingIdentifierError. Sub-records (quest
requirements, arc drops, trader inventory) without their own item id are
dropped.
"""

from collections.abc import Mapping
from typing import Any, Callable, Optional

from metaforge_sync.models.canonical import (
    ArcData,
    ArcDrop,
    CanonicalRecord,
    InventoryEntry,
    ItemData,
    ItemSources,
    MapData,
    QuestData,
    RequiredItem,
    TraderData,
)
from metaforge_sync.models.raw import RawRecord

from .fields import (
    as_list,
    dig,
    first_defined,
    first_present,
    resolve_identifier,
    to_number,
    to_string_list,
    to_text,
)

# fmt: off
# Items
ITEM_ID_KEYS = ("id", "itemId", "slug")
ITEM_NAME_KEYS = ("name", "title")
ITEM_RARITY_KEYS = ("rarity", "tier")
ITEM_TYPE_KEYS = ("type", "category", "itemType")
ITEM_SOURCE_KEYS: dict[str, tuple[str, ...]] = {
    "maps": ("maps",),
    "biomes": ("biomes",),
    "enemies": ("enemies", "dropsFrom"),
    "traders": ("traders", "vendors"),
    "quests": ("quests", "requiredBy"),
}

# Quests
QUEST_ID_KEYS = ("id", "questId", "slug")
QUEST_NAME_KEYS = ("name", "title")
QUEST_CATEGORY_KEYS = ("category", "type", "questline")
QUEST_DESCRIPTION_KEYS = ("description", "summary")
QUEST_REQUIREMENT_KEYS = ("requiredItems", "inputs", "requires", "ingredients")
QUEST_REWARD_KEYS = ("rewards", "outputs")
REQUIREMENT_ID_KEYS = ("itemId", "id", "slug")
REQUIREMENT_QUANTITY_KEYS = ("quantity", "count")

# Arcs
ARC_ID_KEYS = ("id", "arcId", "slug", "name")
ARC_NAME_KEYS = ("name", "title")
ARC_TYPE_KEYS = ("type", "arcType", "category")
ARC_DESCRIPTION_KEYS = ("description", "summary")
ARC_MAP_KEYS = ("maps", "locations", "mapSlugs", "mapNames")
ARC_BIOME_KEYS = ("biomes", "biome")
ARC_DROP_KEYS = ("drops", "loot", "rewards", "dropsFrom")

# Traders
TRADER_ID_KEYS = ("id", "traderId", "slug", "name")
TRADER_NAME_KEYS = ("name", "title")
TRADER_DESCRIPTION_KEYS = ("description", "bio")
TRADER_LOCATION_KEYS = ("location", "map", "locationMap", "region")
TRADER_LOCATION_OBJECT_KEYS = ("name", "map", "slug")
TRADER_INVENTORY_KEYS = ("inventory", "items", "wares")
INVENTORY_CURRENCY_KEYS = ("currency", "priceCurrency", "costCurrency")
INVENTORY_NOTES_KEYS = ("notes", "type", "rarity")

# Maps
MAP_ID_KEYS = ("id", "slug", "mapId", "name")
MAP_NAME_KEYS = ("name", "title")
MAP_DESCRIPTION_KEYS = ("description", "summary")
MAP_BIOME_KEYS = ("biomes", "biome", "regions")
MAP_ARC_KEYS = ("arcs", "activities", "events", "arcIds")

# Sub-record item references: direct keys, then a nested "item" object
SUB_ITEM_ID_KEYS = ("itemId", "id", "slug")
NESTED_ITEM_ID_KEYS = ("id", "slug")

# Upstream MetaForge id, kept only when the payload carries one explicitly
METAFORGE_ID_KEYS = ("metaforgeId", "metaforge_id")

DROP_NOTE_SEPARATOR = " | "
# fmt: on


def _payload(raw: RawRecord | Mapping | Any) -> Any:
    return raw.data if isinstance(raw, RawRecord) else raw


def _text(raw: Any, keys: tuple[str, ...], default: Optional[str] = None) -> Optional[str]:
    value = first_present(raw, keys)
    return to_text(value) if value is not None else default


def _metaforge_id(raw: Any) -> Any:
    return first_defined(raw, METAFORGE_ID_KEYS)


def _sub_item_id(entry: Any, keys: tuple[str, ...] = SUB_ITEM_ID_KEYS) -> Optional[str]:
    value = first_present(entry, keys)
    if value is None:
        value = first_present(dig(entry, "item"), NESTED_ITEM_ID_KEYS)
    return to_text(value) if value is not None else None


def map_item(raw: RawRecord | Mapping) -> CanonicalRecord:
    """Map a MetaForge item into the mfItems schema."""
    d = _payload(raw)
    item_id = resolve_identifier(d, ITEM_ID_KEYS, "item")

    nested_sources = dig(d, "sources")
    sources = {}
    for field, aliases in ITEM_SOURCE_KEYS.items():
        # sources.<field> wins over top-level aliases
        value = first_present(nested_sources, (field,))
        if value is None:
            value = first_present(d, aliases)
        sources[field] = to_string_list(value)

    data = ItemData(
        name=_text(d, ITEM_NAME_KEYS, "Unknown Item"),
        rarity=_text(d, ITEM_RARITY_KEYS, "Unknown"),
        type=_text(d, ITEM_TYPE_KEYS, "Unknown"),
        sources=ItemSources(**sources),
        metaforge_id=_metaforge_id(d),
        category_slug=_text(d, ("slug",)),
    )
    return CanonicalRecord(id=item_id, data=data.to_document())


def _quantity(entry: Any) -> int:
    number = to_number(first_present(entry, REQUIREMENT_QUANTITY_KEYS))
    if number is None or number < 1:
        return 1
    return int(number)


def map_quest(raw: RawRecord | Mapping) -> CanonicalRecord:
    """Map a MetaForge quest or recipe into the mfQuests schema."""
    d = _payload(raw)
    quest_id = resolve_identifier(d, QUEST_ID_KEYS, "quest")

    required_items = []
    for entry in as_list(first_present(d, QUEST_REQUIREMENT_KEYS)):
        item_id = _sub_item_id(entry, REQUIREMENT_ID_KEYS)
        if item_id is None:
            continue
        required_items.append(RequiredItem(item_id=item_id, quantity=_quantity(entry)))

    data = QuestData(
        name=_text(d, QUEST_NAME_KEYS, "Unknown Quest"),
        category=_text(d, QUEST_CATEGORY_KEYS, "Unknown"),
        description=_text(d, QUEST_DESCRIPTION_KEYS, ""),
        required_items=required_items,
        metaforge_id=_metaforge_id(d),
        rewards=as_list(first_present(d, QUEST_REWARD_KEYS)),
    )
    return CanonicalRecord(id=quest_id, data=data.to_document())


def _drop_notes(entry: Any) -> Optional[str]:
    parts = [_text(entry, (key,)) for key in ("notes", "type", "rarity")]
    chance = first_present(entry, ("chance",))
    if chance is not None and chance != 0:
        parts.append(f"Chance: {to_text(chance)}")
    present = [p for p in parts if p]
    return DROP_NOTE_SEPARATOR.join(present) if present else None


def map_arc(raw: RawRecord | Mapping) -> CanonicalRecord:
    """Map a MetaForge ARC enemy into the mfArcs schema."""
    d = _payload(raw)
    arc_id = resolve_identifier(d, ARC_ID_KEYS, "arc")

    drops = []
    for entry in as_list(first_present(d, ARC_DROP_KEYS)):
        item_id = _sub_item_id(entry)
        if item_id is None:
            continue
        drops.append(ArcDrop(item_id=item_id, notes=_drop_notes(entry)))

    data = ArcData(
        name=_text(d, ARC_NAME_KEYS, "Unknown Arc"),
        type=_text(d, ARC_TYPE_KEYS),
        description=_text(d, ARC_DESCRIPTION_KEYS),
        maps=to_string_list(first_present(d, ARC_MAP_KEYS)),
        biomes=to_string_list(first_present(d, ARC_BIOME_KEYS)),
        drops=drops,
        metaforge_id=_metaforge_id(d),
    )
    return CanonicalRecord(id=arc_id, data=data.to_document())


def _location_map(raw: Any) -> Optional[str]:
    location = first_present(raw, TRADER_LOCATION_KEYS)
    if isinstance(location, str):
        return location
    if isinstance(location, Mapping):
        return _text(location, TRADER_LOCATION_OBJECT_KEYS)
    return None


def map_trader(raw: RawRecord | Mapping) -> CanonicalRecord:
    """Map a MetaForge trader into the mfTraders schema."""
    d = _payload(raw)
    trader_id = resolve_identifier(d, TRADER_ID_KEYS, "trader")

    inventory = []
    for entry in as_list(first_present(d, TRADER_INVENTORY_KEYS)):
        item_id = _sub_item_id(entry)
        if item_id is None:
            continue
        inventory.append(
            InventoryEntry(
                item_id=item_id,
                price=to_number(entry.get("price")),
                currency=_text(entry, INVENTORY_CURRENCY_KEYS),
                notes=_text(entry, INVENTORY_NOTES_KEYS),
            )
        )

    data = TraderData(
        name=_text(d, TRADER_NAME_KEYS, "Unknown Trader"),
        description=_text(d, TRADER_DESCRIPTION_KEYS),
        location_map=_location_map(d),
        inventory=inventory,
        metaforge_id=_metaforge_id(d),
    )
    return CanonicalRecord(id=trader_id, data=data.to_document())


def map_map(raw: RawRecord | Mapping) -> CanonicalRecord:
    """Map a MetaForge game map into the mfMaps schema."""
    d = _payload(raw)
    map_id = resolve_identifier(d, MAP_ID_KEYS, "map")

    data = MapData(
        name=_text(d, MAP_NAME_KEYS, "Unknown Map"),
        slug=_text(d, ("slug",), map_id),
        description=_text(d, MAP_DESCRIPTION_KEYS),
        biomes=to_string_list(first_present(d, MAP_BIOME_KEYS)),
        arcs=to_string_list(first_present(d, MAP_ARC_KEYS)),
        points_of_interest=d.get("pointsOfInterest"),
        zones=d.get("zones"),
        coordinates=d.get("coordinates"),
        metaforge_id=_metaforge_id(d),
    )
    return CanonicalRecord(id=map_id, data=data.to_document())


Mapper = Callable[[RawRecord | Mapping], CanonicalRecord]

MAPPERS: dict[str, Mapper] = {
    "items": map_item,
    "quests": map_quest,
    "arcs": map_arc,
    "traders": map_trader,
    "maps": map_map,
}
