"""Sync settings: defaults, YAML file, environment overrides."""

import os
from pathlib import Path
from typing import Literal, Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for settings loading. Run: poetry install"
    ) from e
from pydantic import BaseModel, Field, ValidationError, field_validator

from metaforge_sync.errors import ConfigError

DEFAULT_BASE_URL = "https://metaforge.app/api/arc-raiders"
DEFAULT_GAME_MAP_URL = "https://metaforge.app/api/game-map-data"
FIRESTORE_BATCH_LIMIT = 500

# env var -> settings field
ENV_OVERRIDES: dict[str, str] = {
    "META_BASE_URL": "base_url",
    "META_GAME_MAP_URL": "game_map_url",
    "META_SYNC_BACKEND": "backend",
    "META_SYNC_DB": "db_path",
    "META_SYNC_BATCH_SIZE": "batch_size",
    "META_SYNC_TIMEOUT": "request_timeout",
    "FIRESTORE_PROJECT": "firestore_project",
}


class SyncSettings(BaseModel):
    """Settings threaded through the connector, writer and orchestrator."""

    base_url: str = DEFAULT_BASE_URL
    game_map_url: str = DEFAULT_GAME_MAP_URL
    batch_size: int = Field(default=FIRESTORE_BATCH_LIMIT, ge=1, le=FIRESTORE_BATCH_LIMIT)
    request_timeout: float = Field(default=30.0, gt=0, description="Seconds per page request")

    backend: Literal["sqlite", "firestore"] = "sqlite"
    db_path: Path = Path("metaforge.db")
    firestore_project: Optional[str] = None

    kinds: Optional[list[str]] = Field(
        default=None,
        description="Subset of entity kinds to sync; None means all",
    )

    @field_validator("base_url", "game_map_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def load(
        cls,
        path: Optional[str | Path] = None,
        *,
        environ: Optional[dict[str, str]] = None,
        **overrides,
    ) -> "SyncSettings":
        """
        Build settings from (lowest to highest priority) defaults, an optional
        YAML file, environment variables and explicit keyword overrides.
        Overrides equal to None are ignored so argparse defaults pass through.
        """
        data: dict = {}
        if path is not None:
            loaded = yaml.safe_load(Path(path).read_text()) or {}
            if not isinstance(loaded, dict):
                raise ConfigError(f"Settings file {path} must contain a mapping")
            # Accept a nested "sync:" section or a flat file
            data.update(loaded.get("sync", loaded))

        env = os.environ if environ is None else environ
        for var, field in ENV_OVERRIDES.items():
            value = env.get(var)
            if value:
                data[field] = value

        data.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid sync settings: {e}") from e
