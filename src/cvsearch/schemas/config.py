"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SearchSettings(BaseModel):
    endpoint: str | None = None
    metadata_endpoint: str | None = None
    limit: int | None = Field(default=None, gt=0)
    timeout: float | None = Field(default=None, gt=0)

    model_config = ConfigDict(extra="forbid")


class SessionSettings(BaseModel):
    token: str | None = None

    model_config = ConfigDict(extra="forbid")


class AISettings(BaseModel):
    endpoint: str | None = None
    api_key: str | None = None
    model: str | None = None
    temperature: float | None = Field(default=None, ge=0, le=1)
    max_tokens: int | None = Field(default=None, gt=0)
    timeout: float | None = Field(default=None, gt=0)

    model_config = ConfigDict(extra="forbid")


class ScoringSettings(BaseModel):
    ai_enabled: bool | None = None
    fallback_to_local: bool | None = None
    sort_results: bool | None = None

    model_config = ConfigDict(extra="forbid")


class MappingSettings(BaseModel):
    skip_invalid: bool | None = None

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    search: SearchSettings = Field(default_factory=SearchSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    ai: AISettings = Field(default_factory=AISettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    mapping: MappingSettings = Field(default_factory=MappingSettings)

    model_config = ConfigDict(extra="forbid")

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for section in ("search", "session", "ai", "scoring", "mapping"):
            values = getattr(self, section).model_dump(exclude_none=True)
            if values:
                settings[section] = values
        return settings


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    return AppConfig.model_validate(raw)
