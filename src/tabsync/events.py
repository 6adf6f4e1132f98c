"""Event models exchanged between stores, storage areas and the coordinator."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Mutation(BaseModel):
    """A committed local mutation, as passed to store subscribers."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="Mutation name")
    payload: Any = None

    @field_validator("type")
    @classmethod
    def _normalize_type(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("mutation type must be non-empty")
        return name


class StorageEvent(BaseModel):
    """Change notification for a single key of a shared storage.

    ``new_value`` is ``None`` when the key was removed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    old_value: str | None = None
    new_value: str | None = None
    origin: str | None = Field(default=None, description="Name of the storage area that wrote the value, if known")
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
