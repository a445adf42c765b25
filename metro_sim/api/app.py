"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from metro_sim.api.dependencies import set_engine_manager
from metro_sim.api.engine_manager import EngineManager
from metro_sim.api.routes import api_router
from metro_sim.config import SimulationConfig
from metro_sim.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: SimulationConfig | None = None, *, autostart: bool = True) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = SimulationConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = EngineManager(_config)
        set_engine_manager(manager)
        if autostart:
            manager.start()
            logger.info("API server started, simulation running.")
        yield
        manager.stop()
        set_engine_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Metro Shuttle Simulation",
        description=(
            "Carriages shuttling on two rails between two depots.\n\n"
            "## API Groups\n\n"
            "- **Layout** - Static track geometry (fetch once at startup)\n"
            "- **State** - Live carriages, mode flags and the event feed\n"
            "- **Control** - Simulation lifecycle: start, pause, resume, step, reset\n"
            "- **Commands** - Anomalies: mining, fallen man, carriage breakage\n"
            "- **Config** - Read-only simulation configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Layout", "description": "Depots, stations and rail endpoints. Does not change during a run."},
            {"name": "State", "description": "Live simulation state polled by the frontend."},
            {"name": "Control", "description": "Simulation lifecycle controls: start, pause, resume, single-step, and reset."},
            {"name": "Commands", "description": "Anomaly toggles applied between ticks."},
            {"name": "Config", "description": "Read-only simulation configuration parameters."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
