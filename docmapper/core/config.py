from __future__ import annotations

import os

from pydantic import BaseModel, field_validator


def _truthy(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes")


class MapperSettings(BaseModel):
    # Prefix marking document-local ids that never reach the repository
    temp_id_prefix: str = "@"
    metrics_enabled: bool = True

    @field_validator("temp_id_prefix")
    @classmethod
    def non_empty_prefix(cls, v: str) -> str:
        if not v:
            raise ValueError("temp_id_prefix must not be empty")
        return v

    @classmethod
    def from_env(cls) -> "MapperSettings":
        return cls(
            temp_id_prefix=(os.getenv("DOCMAPPER_TEMP_ID_PREFIX") or "@").strip() or "@",
            metrics_enabled=_truthy(os.getenv("DOCMAPPER_METRICS_ENABLED") or "1"),
        )


def load_settings() -> MapperSettings:
    return MapperSettings.from_env()
