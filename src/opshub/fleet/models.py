"""Workflow and run records for a fleet snapshot."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

WorkflowStatus = Literal["healthy", "warning", "failed", "paused"]
SlaRisk = Literal["low", "medium", "high"]

STATUSES: tuple[str, ...] = get_args(WorkflowStatus)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps; aware timestamps pass through."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class Run(BaseModel):
    """One historical execution of a workflow."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    timestamp: datetime
    duration_seconds: float = Field(alias="durationSeconds", allow_inf_nan=False)
    errors: int

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @property
    def is_clean(self) -> bool:
        return self.errors == 0


class Workflow(BaseModel):
    """A managed automation definition with observed run statistics."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    client: str
    owner: str
    status: WorkflowStatus
    triggers: tuple[str, ...] = Field(min_length=1)
    runs_today: int = Field(alias="runsToday")
    success_rate: float = Field(alias="successRate", allow_inf_nan=False)
    sla_breach_risk: SlaRisk = Field(alias="slaBreachRisk")
    last_run_at: datetime = Field(alias="lastRunAt")
    next_run_at: datetime | None = Field(default=None, alias="nextRunAt")  # None = on demand
    run_history: tuple[Run, ...] = Field(default=(), alias="runHistory")

    @field_validator("last_run_at", "next_run_at")
    @classmethod
    def _timestamps_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None

    @property
    def on_demand(self) -> bool:
        return self.next_run_at is None
