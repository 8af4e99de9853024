"""Single-workflow detail endpoint."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from opshub.api.clock import get_now
from opshub.fleet.detail import describe_workflow

router = APIRouter(tags=["workflows"])


@router.get("/workflows/{workflow_id}")
async def get_workflow(
    request: Request, workflow_id: str, now: datetime = Depends(get_now)
) -> dict[str, Any]:
    config = request.app.state.config
    workflow = next((wf for wf in request.app.state.workflows if wf.id == workflow_id), None)
    if workflow is None:
        raise HTTPException(status_code=404, detail=f"Unknown workflow: {workflow_id}")
    return describe_workflow(
        workflow,
        now,
        trend_size=config.display.run_trend_size,
        tz=config.display.timezone,
    ).to_dict()
