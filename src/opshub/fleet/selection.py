"""Selection of the active workflow within a filtered view."""

from __future__ import annotations

from collections.abc import Sequence

from opshub.fleet.models import Workflow


def resolve_selection(filtered: Sequence[Workflow], selected_id: str) -> Workflow | None:
    """Return the workflow with *selected_id*, falling back to the first one.

    ``None`` only when *filtered* is empty.
    """
    for wf in filtered:
        if wf.id == selected_id:
            return wf
    return filtered[0] if filtered else None
