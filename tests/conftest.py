"""Shared fixtures for OpsHub tests."""

from __future__ import annotations

import copy
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Dict, List

import pytest
import yaml

from opshub.config.models import OpsHubConfig
from opshub.fleet.models import Workflow
from opshub.fleet.snapshot import parse_workflows

NOW = datetime(2024, 5, 14, 12, 0, tzinfo=UTC)

SAMPLE_WORKFLOWS: List[Dict[str, Any]] = [
    {
        "id": "wf-invoice-sync",
        "name": "Invoice Sync",
        "client": "Acme Corp",
        "owner": "Dana",
        "status": "healthy",
        "triggers": ["schedule", "webhook"],
        "runsToday": 24,
        "successRate": 0.98,
        "slaBreachRisk": "low",
        "lastRunAt": "2024-05-14T11:55:00Z",
        "nextRunAt": "2024-05-14T12:30:00Z",
        "runHistory": [
            {"id": "r1", "timestamp": "2024-05-14T09:55:00Z", "durationSeconds": 10, "errors": 0},
            {"id": "r2", "timestamp": "2024-05-14T10:55:00Z", "durationSeconds": 20, "errors": 2},
            {"id": "r3", "timestamp": "2024-05-14T11:55:00Z", "durationSeconds": 12, "errors": 0},
        ],
    },
    {
        "id": "wf-lead-router",
        "name": "Lead Router",
        "client": "Acme Corp",
        "owner": "Sam",
        "status": "failed",
        "triggers": ["webhook"],
        "runsToday": 6,
        "successRate": 0.62,
        "slaBreachRisk": "high",
        "lastRunAt": "2024-05-14T10:00:00Z",
        "nextRunAt": None,
        "runHistory": [
            {"id": "r1", "timestamp": "2024-05-14T10:00:00Z", "durationSeconds": 30, "errors": 1},
        ],
    },
    {
        "id": "wf-report-digest",
        "name": "Weekly Report Digest",
        "client": "Globex",
        "owner": "Riley",
        "status": "warning",
        "triggers": ["schedule"],
        "runsToday": 1,
        "successRate": 0.85,
        "slaBreachRisk": "medium",
        "lastRunAt": "2024-05-13T12:00:00Z",
        "nextRunAt": "2024-05-21T12:00:00Z",
        "runHistory": [],
    },
    {
        "id": "wf-crm-backfill",
        "name": "CRM Backfill",
        "client": "Initech",
        "owner": "Dana",
        "status": "paused",
        "triggers": ["manual"],
        "runsToday": 0,
        "successRate": 1.0,
        "slaBreachRisk": "low",
        "lastRunAt": "2024-05-10T08:00:00Z",
        "runHistory": [
            {"id": "r1", "timestamp": "2024-05-10T08:00:00Z", "durationSeconds": 8, "errors": 0},
        ],
    },
]


def make_workflow(**overrides: Any) -> Workflow:
    """Build a single valid workflow, overriding any field by its Python name."""
    data: Dict[str, Any] = {
        "id": "wf",
        "name": "Workflow",
        "client": "Acme Corp",
        "owner": "Dana",
        "status": "healthy",
        "triggers": ("schedule",),
        "runs_today": 0,
        "success_rate": 1.0,
        "sla_breach_risk": "low",
        "last_run_at": NOW,
    }
    data.update(overrides)
    return Workflow(**data)


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def sample_records() -> List[Dict[str, Any]]:
    """Return a deep copy of the raw snapshot records."""
    return copy.deepcopy(SAMPLE_WORKFLOWS)


@pytest.fixture()
def workflows() -> tuple[Workflow, ...]:
    return parse_workflows(copy.deepcopy(SAMPLE_WORKFLOWS))


@pytest.fixture()
def sample_config() -> OpsHubConfig:
    return OpsHubConfig()


@pytest.fixture()
def snapshot_file(tmp_path: Path) -> Path:
    """Write the sample snapshot to a temp YAML file and return the path."""
    path = tmp_path / "workflows.yaml"
    with path.open("w") as fh:
        yaml.dump({"workflows": SAMPLE_WORKFLOWS}, fh)
    return path


@pytest.fixture()
def config_file(tmp_path: Path, snapshot_file: Path) -> Path:
    """Write a .opshub.yaml pointing at the sample snapshot."""
    path = tmp_path / ".opshub.yaml"
    with path.open("w") as fh:
        yaml.dump(
            {
                "hub": {"name": "Test Hub", "version": "0.1.0"},
                "snapshot_path": snapshot_file.name,
                "display": {"timezone": "UTC", "run_trend_size": 3},
            },
            fh,
        )
    return path


@pytest.fixture()
def workflow_factory():
    return make_workflow
