"""Fleet state derivation: filtering, metrics, selection and time labels."""

from opshub.fleet.detail import WorkflowDetail, describe_workflow
from opshub.fleet.errors import DataIntegrityError, OpsHubError
from opshub.fleet.filters import ALL, client_options, filter_workflows
from opshub.fleet.metrics import Summary, summarize
from opshub.fleet.models import Run, Workflow
from opshub.fleet.selection import resolve_selection
from opshub.fleet.snapshot import load_snapshot, parse_workflows
from opshub.fleet.timefmt import calendar_label, relative_label
from opshub.fleet.view import DashboardView, ViewState, compose_view

__all__ = [
    "ALL",
    "DashboardView",
    "DataIntegrityError",
    "OpsHubError",
    "Run",
    "Summary",
    "ViewState",
    "Workflow",
    "WorkflowDetail",
    "calendar_label",
    "client_options",
    "compose_view",
    "describe_workflow",
    "filter_workflows",
    "load_snapshot",
    "parse_workflows",
    "relative_label",
    "resolve_selection",
    "summarize",
]
