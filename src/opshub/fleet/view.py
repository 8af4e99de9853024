"""Dashboard view state and its derivation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from opshub.fleet.filters import ALL, client_options, filter_workflows
from opshub.fleet.metrics import Summary, summarize
from opshub.fleet.models import Workflow
from opshub.fleet.selection import resolve_selection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewState:
    """Operator-selected filters plus the selected workflow id."""

    client_filter: str = ALL
    status_filter: str = ALL
    search_term: str = ""
    selected_id: str = ""

    @classmethod
    def initial(cls, workflows: Sequence[Workflow]) -> ViewState:
        """Open filters with the first workflow selected."""
        return cls(selected_id=workflows[0].id if workflows else "")

    def with_client(self, client_filter: str) -> ViewState:
        return replace(self, client_filter=client_filter)

    def with_status(self, status_filter: str) -> ViewState:
        return replace(self, status_filter=status_filter)

    def with_search(self, search_term: str) -> ViewState:
        return replace(self, search_term=search_term)

    def select(self, selected_id: str) -> ViewState:
        return replace(self, selected_id=selected_id)


@dataclass(frozen=True)
class DashboardView:
    """Everything a presentation layer needs for one render."""

    state: ViewState
    workflows: list[Workflow] = field(default_factory=list)
    summary: Summary = field(default_factory=Summary)
    selected: Workflow | None = None
    clients: list[str] = field(default_factory=lambda: [ALL])

    def to_dict(self) -> dict[str, Any]:
        return {
            "filters": {
                "client": self.state.client_filter,
                "status": self.state.status_filter,
                "search": self.state.search_term,
                "selected": self.state.selected_id,
            },
            "clients": list(self.clients),
            "summary": self.summary.to_dict(),
            "workflow_ids": [wf.id for wf in self.workflows],
            "selected_id": self.selected.id if self.selected else None,
        }


def compose_view(workflows: Sequence[Workflow], state: ViewState) -> DashboardView:
    """Derive the filtered set, its summary and the selection from one snapshot."""
    filtered = filter_workflows(
        workflows,
        client_filter=state.client_filter,
        status_filter=state.status_filter,
        search_term=state.search_term,
    )
    summary = summarize(filtered)
    selected = resolve_selection(filtered, state.selected_id)
    if selected is not None and selected.id != state.selected_id:
        logger.debug("Selection %r not in view, falling back to %r", state.selected_id, selected.id)
    logger.debug("Composed view: %d of %d workflows", len(filtered), len(workflows))
    return DashboardView(
        state=state,
        workflows=filtered,
        summary=summary,
        selected=selected,
        clients=client_options(workflows),
    )
