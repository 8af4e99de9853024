"""Fleet-wide summary statistics."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from opshub.fleet.errors import DataIntegrityError
from opshub.fleet.models import STATUSES, Workflow


@dataclass(frozen=True)
class Summary:
    """Aggregate metrics over a set of workflows."""

    total_workflows: int = 0
    healthy: int = 0
    warning: int = 0
    failed: int = 0
    paused: int = 0
    total_runs_today: int = 0
    avg_success_rate: float = 0.0
    average_duration_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_workflows": self.total_workflows,
            "healthy": self.healthy,
            "warning": self.warning,
            "failed": self.failed,
            "paused": self.paused,
            "total_runs_today": self.total_runs_today,
            "avg_success_rate": self.avg_success_rate,
            "average_duration_seconds": self.average_duration_seconds,
        }


def summarize(workflows: Iterable[Workflow]) -> Summary:
    """Reduce *workflows* to a :class:`Summary` in one pass.

    Sums use ``math.fsum`` so the result is identical for any input order.
    Averages are 0.0 for empty input. ``success_rate`` values are averaged as
    given, even outside [0, 1].

    Raises:
        DataIntegrityError: a workflow carries a status outside the known set.
    """
    statuses: Counter[str] = Counter()
    runs_today = 0
    success_rates: list[float] = []
    durations: list[float] = []

    for wf in workflows:
        if wf.status not in STATUSES:
            raise DataIntegrityError(f"Workflow {wf.id!r} has unknown status {wf.status!r}")
        statuses[wf.status] += 1
        runs_today += wf.runs_today
        success_rates.append(wf.success_rate)
        durations.extend(run.duration_seconds for run in wf.run_history)

    total = len(success_rates)
    return Summary(
        total_workflows=total,
        healthy=statuses["healthy"],
        warning=statuses["warning"],
        failed=statuses["failed"],
        paused=statuses["paused"],
        total_runs_today=runs_today,
        avg_success_rate=math.fsum(success_rates) / total if total else 0.0,
        average_duration_seconds=math.fsum(durations) / len(durations) if durations else 0.0,
    )
