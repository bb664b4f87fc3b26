"""Raw record representation before mapping."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RawRecord(BaseModel):
    """
    Loosely-typed record from one MetaForge response page.
    Field names and nesting vary by entity kind and API version.
    """

    model_config = ConfigDict(extra="allow")

    data: Any = Field(default_factory=dict)
