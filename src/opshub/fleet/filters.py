"""Client, status and free-text filtering of the fleet."""

from __future__ import annotations

from collections.abc import Iterable

from opshub.fleet.models import Workflow

ALL = "all"


def matches(
    workflow: Workflow,
    client_filter: str = ALL,
    status_filter: str = ALL,
    search_term: str = "",
) -> bool:
    if client_filter != ALL and workflow.client != client_filter:
        return False
    if status_filter != ALL and workflow.status != status_filter:
        return False
    if search_term:
        needle = search_term.lower()
        return needle in workflow.name.lower() or needle in workflow.client.lower()
    return True


def filter_workflows(
    workflows: Iterable[Workflow],
    client_filter: str = ALL,
    status_filter: str = ALL,
    search_term: str = "",
) -> list[Workflow]:
    """Return the workflows passing every filter, in input order.

    Client and status filters are exact matches; ``"all"`` disables them.
    The search term is a case-insensitive substring match against the
    workflow name or client. Unknown filter values match nothing.
    """
    return [wf for wf in workflows if matches(wf, client_filter, status_filter, search_term)]


def client_options(workflows: Iterable[Workflow]) -> list[str]:
    """``"all"`` followed by each distinct client in order of first appearance."""
    seen: dict[str, None] = {}
    for wf in workflows:
        seen.setdefault(wf.client, None)
    return [ALL, *seen]
