"""FastAPI application factory for OpsHub."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from opshub.api.routes import dashboard, workflows
from opshub.config.loader import load_config
from opshub.config.models import OpsHubConfig
from opshub.fleet.errors import DataIntegrityError
from opshub.fleet.models import Workflow
from opshub.fleet.snapshot import load_snapshot

logger = logging.getLogger(__name__)


def _load_workflows(config: OpsHubConfig) -> tuple[Workflow, ...]:
    try:
        return load_snapshot(Path(config.snapshot_path))
    except FileNotFoundError:
        logger.warning("No workflow snapshot at %s, serving an empty fleet", config.snapshot_path)
    except (DataIntegrityError, yaml.YAMLError):
        logger.exception("Workflow snapshot %s is invalid, serving an empty fleet", config.snapshot_path)
    return ()


def create_app(
    config: OpsHubConfig | None = None,
    fleet: tuple[Workflow, ...] | None = None,
) -> FastAPI:
    app = FastAPI(title="OpsHub", version="0.1.0", description="Client workflow control center")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    if config is None:
        try:
            config = load_config()
        except (FileNotFoundError, ValueError):
            # Fallback for environments without a config file (e.g. testing)
            config = OpsHubConfig()
    app.state.config = config
    app.state.workflows = fleet if fleet is not None else _load_workflows(config)

    @app.get("/health", tags=["meta"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(dashboard.router, prefix="/api")
    app.include_router(workflows.router, prefix="/api")

    return app


app = create_app()
