"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, PositiveInt, ValidationError


class DocumentsConfig(BaseModel):
    max_idle_days: PositiveInt = 30


class ClockConfig(BaseModel):
    start_date: date | None = None


class StorageConfig(BaseModel):
    snapshot_path: str = "recruitflow.snapshot"
    audit_log: str | None = None


class MessagesConfig(BaseModel):
    new_interview: str = "You got a new interview!"
    new_posting: str = "You got a new Job Posting to manage!"
    rejection: str = "Sorry! You are rejected by a Job Posting!"


class SearchConfig(BaseModel):
    min_similarity: float = Field(default=80.0, ge=0.0, le=100.0)


class AppConfig(BaseModel):
    documents: DocumentsConfig = Field(default_factory=DocumentsConfig)
    clock: ClockConfig = Field(default_factory=ClockConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    messages: MessagesConfig = Field(default_factory=MessagesConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    log_level: str = "WARNING"

    def to_settings(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
