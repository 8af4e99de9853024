"""Composed dashboard view and client listing endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from opshub.api.clock import get_now
from opshub.fleet.detail import describe_workflow, format_percent
from opshub.fleet.errors import DataIntegrityError
from opshub.fleet.filters import ALL, client_options
from opshub.fleet.models import Workflow
from opshub.fleet.timefmt import relative_label
from opshub.fleet.view import ViewState, compose_view

router = APIRouter(tags=["dashboard"])


def _row(wf: Workflow, now: datetime) -> dict[str, Any]:
    return {
        "id": wf.id,
        "name": wf.name,
        "client": wf.client,
        "owner": wf.owner,
        "status": wf.status,
        "triggers": list(wf.triggers),
        "runs_today": wf.runs_today,
        "success_rate": wf.success_rate,
        "success_percent": format_percent(wf.success_rate),
        "sla_breach_risk": wf.sla_breach_risk,
        "last_run": relative_label(now, wf.last_run_at),
    }


@router.get("/dashboard")
async def get_dashboard(
    request: Request,
    client: str = ALL,
    status: str = ALL,
    search: str = "",
    selected: str | None = None,
    now: datetime = Depends(get_now),
) -> dict[str, Any]:
    """Filtered workflows, their summary and the selected workflow's detail."""
    config = request.app.state.config
    fleet = request.app.state.workflows

    state = ViewState.initial(fleet).with_client(client).with_status(status).with_search(search)
    if selected is not None:
        state = state.select(selected)
    try:
        view = compose_view(fleet, state)
    except DataIntegrityError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    detail = None
    if view.selected is not None:
        detail = describe_workflow(
            view.selected,
            now,
            trend_size=config.display.run_trend_size,
            tz=config.display.timezone,
        ).to_dict()

    payload = view.to_dict()
    payload["workflows"] = [_row(wf, now) for wf in view.workflows]
    payload["selected"] = detail
    return payload


@router.get("/clients")
async def list_clients(request: Request) -> list[str]:
    return client_options(request.app.state.workflows)
