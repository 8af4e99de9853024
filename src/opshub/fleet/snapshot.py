"""Load and validate workflow snapshots."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from opshub.fleet.errors import DataIntegrityError
from opshub.fleet.models import Workflow

logger = logging.getLogger(__name__)


def _warn_out_of_range(wf: Workflow) -> None:
    """Out-of-range numbers are kept as-is; only report them."""
    if not 0.0 <= wf.success_rate <= 1.0:
        logger.warning("Workflow %s: success rate %s outside [0, 1]", wf.id, wf.success_rate)
    if wf.runs_today < 0:
        logger.warning("Workflow %s: negative runs today (%d)", wf.id, wf.runs_today)
    for run in wf.run_history:
        if run.errors < 0:
            logger.warning("Workflow %s run %s: negative error count (%d)", wf.id, run.id, run.errors)
        if run.duration_seconds < 0:
            logger.warning("Workflow %s run %s: negative duration (%s)", wf.id, run.id, run.duration_seconds)


def parse_workflows(records: Iterable[Mapping[str, Any]]) -> tuple[Workflow, ...]:
    """Validate raw records into an immutable snapshot.

    Raises:
        DataIntegrityError: a record is malformed or a workflow id repeats.
    """
    workflows: list[Workflow] = []
    seen: set[str] = set()
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise DataIntegrityError(f"Workflow record {index} is not a mapping")
        label = record.get("id", f"#{index}")
        try:
            wf = Workflow.model_validate(record)
        except ValidationError as exc:
            raise DataIntegrityError(f"Invalid workflow record {label}: {exc}") from exc
        if wf.id in seen:
            raise DataIntegrityError(f"Duplicate workflow id: {wf.id}")
        seen.add(wf.id)
        _warn_out_of_range(wf)
        workflows.append(wf)
    return tuple(workflows)


def load_snapshot(path: Path) -> tuple[Workflow, ...]:
    """Read a YAML or JSON snapshot holding a list or a ``workflows:`` list.

    Raises:
        FileNotFoundError: *path* does not exist.
        DataIntegrityError: the document has the wrong shape or a record is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Workflow snapshot not found: {path}")
    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)
    if raw is None:
        records: Any = []
    elif isinstance(raw, Mapping):
        if "workflows" not in raw:
            raise DataIntegrityError(f"Snapshot {path} has no 'workflows' key")
        records = raw["workflows"] or []
    else:
        records = raw
    if not isinstance(records, list):
        raise DataIntegrityError(f"Snapshot {path} must contain a list of workflows")
    workflows = parse_workflows(records)
    logger.info("Loaded %d workflows from %s", len(workflows), path)
    return workflows
