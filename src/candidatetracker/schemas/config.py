"""Pydantic configuration schema for YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError


class ClassifierSettings(BaseModel):
    strong_threshold: int | None = None
    medium_threshold: int | None = None
    auto_invite_threshold: int | None = None
    auto_reject_threshold: int | None = None
    auto_invite_enabled: bool | None = None
    auto_reject_enabled: bool | None = None

    model_config = ConfigDict(extra="forbid")


class DuplicateSettings(BaseModel):
    resume_similarity_threshold: float | None = Field(None, ge=0, le=100)
    date_format: str | None = None

    model_config = ConfigDict(extra="forbid")


class LifecycleSettings(BaseModel):
    allow_terminal_override: bool | None = None

    model_config = ConfigDict(extra="forbid")


class NotificationSettings(BaseModel):
    invite_webhook_url: str | None = None
    reject_webhook_url: str | None = None
    timeout_seconds: float = Field(10.0, gt=0)

    model_config = ConfigDict(extra="forbid")


class ScoringSettings(BaseModel):
    endpoint: str | None = None
    api_key: str | None = None
    timeout_seconds: float = Field(60.0, gt=0)

    model_config = ConfigDict(extra="forbid")


class LoggingSettings(BaseModel):
    level: str = "INFO"

    model_config = ConfigDict(extra="forbid")


class StorageSettings(BaseModel):
    url: str | None = None

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    classifier: ClassifierSettings = Field(default_factory=ClassifierSettings)
    duplicates: DuplicateSettings = Field(default_factory=DuplicateSettings)
    lifecycle: LifecycleSettings = Field(default_factory=LifecycleSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings | None = None

    model_config = ConfigDict(extra="forbid")

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for section in (
            "classifier",
            "duplicates",
            "lifecycle",
            "notifications",
            "scoring",
            "storage",
            "logging",
        ):
            value = getattr(self, section)
            if value is None:
                continue
            dumped = value.model_dump(exclude_none=True)
            if dumped:
                settings[section] = dumped
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError("Config must be a mapping")
    try:
        return AppConfig.model_validate(raw)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid configuration: {exc}") from exc
