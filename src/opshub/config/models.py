"""Pydantic models for OpsHub configuration."""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class HubIdentity(BaseModel):
    """Top-level hub identity metadata."""

    name: str = "Operations Hub"
    version: str = "0.1.0"


class DisplayConfig(BaseModel):
    """How timestamps and run trends are rendered."""

    timezone: str = "UTC"
    run_trend_size: int = Field(default=3, ge=1)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone {value!r}") from exc
        return value


class OpsHubConfig(BaseModel):
    """Root configuration model for .opshub.yaml."""

    hub: HubIdentity = Field(default_factory=HubIdentity)
    snapshot_path: str = "workflows.yaml"  # relative paths resolve against the config file
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level
