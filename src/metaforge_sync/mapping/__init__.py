"""Raw MetaForge record -> canonical document mapping."""

from metaforge_sync.mapping.fields import first_present, to_string_list
from metaforge_sync.mapping.mappers import (
    MAPPERS,
    map_arc,
    map_item,
    map_map,
    map_quest,
    map_trader,
)

__all__ = [
    "MAPPERS",
    "first_present",
    "map_arc",
    "map_item",
    "map_map",
    "map_quest",
    "map_trader",
    "to_string_list",
]
