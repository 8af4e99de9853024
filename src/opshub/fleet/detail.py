"""Drill-down details for a single workflow."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any

from opshub.fleet.models import Run, Workflow
from opshub.fleet.timefmt import calendar_label, relative_label

STATUS_LABELS: dict[str, str] = {
    "healthy": "Healthy",
    "warning": "Warning",
    "failed": "Failed",
    "paused": "Paused",
}

GUIDANCE: dict[str, str] = {
    "failed": "Immediate remediation recommended",
    "warning": "Monitor for possible SLA slippage",
}
DEFAULT_GUIDANCE = "Workflow operating within SLA"

ON_DEMAND = "On demand"
CADENCE_SEPARATOR = " • "


def format_percent(rate: float) -> str:
    """Render a 0-1 ratio as a whole percentage, rounding halves up."""
    return f"{math.floor(rate * 100 + 0.5)}%"


def format_duration(seconds: float) -> str:
    if float(seconds).is_integer():
        return f"{int(seconds)}s"
    return f"{seconds:.1f}s"


def run_outcome(run: Run) -> str:
    if run.is_clean:
        return "Clean"
    return f"{run.errors} issue" if run.errors == 1 else f"{run.errors} issues"


@dataclass
class RunPoint:
    """One bar of the execution trend."""

    id: str
    when: str
    duration: str
    duration_seconds: float
    outcome: str
    clean: bool


@dataclass
class WorkflowDetail:
    """Render-ready drill-down for one workflow."""

    id: str
    name: str
    client: str
    owner: str
    status: str
    status_label: str
    last_run: str
    last_run_calendar: str
    next_run: str
    next_run_calendar: str | None
    cadence: str
    success_percent: str
    sla_risk: str
    guidance: str
    recent_runs: list[RunPoint] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "client": self.client,
            "owner": self.owner,
            "status": self.status,
            "status_label": self.status_label,
            "last_run": self.last_run,
            "last_run_calendar": self.last_run_calendar,
            "next_run": self.next_run,
            "next_run_calendar": self.next_run_calendar,
            "cadence": self.cadence,
            "success_percent": self.success_percent,
            "sla_risk": self.sla_risk,
            "guidance": self.guidance,
            "recent_runs": [
                {
                    "id": r.id,
                    "when": r.when,
                    "duration": r.duration,
                    "duration_seconds": r.duration_seconds,
                    "outcome": r.outcome,
                    "clean": r.clean,
                }
                for r in self.recent_runs
            ],
        }


def describe_workflow(
    workflow: Workflow,
    now: datetime,
    *,
    trend_size: int = 3,
    tz: tzinfo | str | None = None,
) -> WorkflowDetail:
    """Build the detail panel for *workflow* as seen at *now*."""
    if workflow.next_run_at is None:
        next_run, next_run_calendar = ON_DEMAND, None
    else:
        next_run = relative_label(now, workflow.next_run_at)
        next_run_calendar = calendar_label(workflow.next_run_at, tz)

    recent = workflow.run_history[-trend_size:] if trend_size > 0 else ()
    return WorkflowDetail(
        id=workflow.id,
        name=workflow.name,
        client=workflow.client,
        owner=workflow.owner,
        status=workflow.status,
        status_label=STATUS_LABELS.get(workflow.status, workflow.status.title()),
        last_run=relative_label(now, workflow.last_run_at),
        last_run_calendar=calendar_label(workflow.last_run_at, tz),
        next_run=next_run,
        next_run_calendar=next_run_calendar,
        cadence=CADENCE_SEPARATOR.join(workflow.triggers),
        success_percent=format_percent(workflow.success_rate),
        sla_risk=workflow.sla_breach_risk.upper(),
        guidance=GUIDANCE.get(workflow.status, DEFAULT_GUIDANCE),
        recent_runs=[
            RunPoint(
                id=run.id,
                when=calendar_label(run.timestamp, tz),
                duration=format_duration(run.duration_seconds),
                duration_seconds=run.duration_seconds,
                outcome=run_outcome(run),
                clean=run.is_clean,
            )
            for run in recent
        ],
    )
