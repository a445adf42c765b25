"""GET /api/v1/config: expose simulation configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from metro_sim.api.dependencies import get_engine_manager
from metro_sim.api.engine_manager import EngineManager
from metro_sim.api.schemas import SimulationConfigResponse

router = APIRouter()


@router.get("/config", response_model=SimulationConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> SimulationConfigResponse:
    cfg = manager.config
    return SimulationConfigResponse(
        seed=cfg.seed,
        depot_right=cfg.depot_right,
        depot_left=cfg.depot_left,
        carriage_width=cfg.carriage_width,
        stations_count=cfg.stations_count,
        tick_ms=cfg.tick_ms,
        station_duration_ms=cfg.station_duration_ms,
        step=cfg.step,
        new_carriage_interval=cfg.new_carriage_interval,
        max_ticks=cfg.max_ticks,
        journal_enabled=manager.journal is not None,
        tick_rate=manager.tick_rate,
    )
