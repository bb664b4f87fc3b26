"""Entity kinds synced from MetaForge and where they land.

Items and quests are the primary contract with the client app and must be
complete; a failure aborts the run. Arcs, traders and maps are enrichment
data and fail in isolation.
"""

from dataclasses import dataclass
from typing import Optional

from metaforge_sync.config import SyncSettings
from metaforge_sync.connectors.metaforge import constants
from metaforge_sync.errors import ConfigError
from metaforge_sync.mapping.mappers import MAPPERS, Mapper


@dataclass(frozen=True)
class EntityKind:
    """One fetch -> map -> write unit of a sync run."""

    name: str
    endpoint: str  # relative to base_url, or absolute
    key: str  # semantic key used by the shape resolver
    collection: str
    mapper: Mapper
    required: bool = False


def default_kinds(settings: Optional[SyncSettings] = None) -> list[EntityKind]:
    """Kinds in sync order. Maps come from the separate game-map-data API."""
    settings = settings or SyncSettings()
    # fmt: off
    return [
        EntityKind("items", constants.ITEMS_ENDPOINT, "items", "mfItems", MAPPERS["items"], required=True),
        EntityKind("quests", constants.QUESTS_ENDPOINT, "quests", "mfQuests", MAPPERS["quests"], required=True),
        EntityKind("arcs", constants.ARCS_ENDPOINT, "arcs", "mfArcs", MAPPERS["arcs"]),
        EntityKind("traders", constants.TRADERS_ENDPOINT, "traders", "mfTraders", MAPPERS["traders"]),
        EntityKind("maps", settings.game_map_url, "maps", "mfMaps", MAPPERS["maps"]),
    ]
    # fmt: on


def select_kinds(kinds: list[EntityKind], names: Optional[list[str]]) -> list[EntityKind]:
    """Keep the given kinds (in sync order); None selects all."""
    if not names:
        return list(kinds)
    wanted = {n.strip().lower() for n in names if n.strip()}
    known = {k.name for k in kinds}
    unknown = sorted(wanted - known)
    if unknown:
        raise ConfigError(f"Unknown entity kind(s): {unknown}. Available: {[k.name for k in kinds]}")
    return [k for k in kinds if k.name in wanted]
