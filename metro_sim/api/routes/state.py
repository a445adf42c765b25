"""GET /api/v1/state and /stats: live carriage data polled by the frontend."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from metro_sim.api.dependencies import get_engine_manager, get_snapshot
from metro_sim.api.engine_manager import EngineManager
from metro_sim.api.routes.serializers import serialize_carriage, serialize_event
from metro_sim.api.schemas import SimulationStateResponse, SimulationStats
from metro_sim.core.snapshot import Snapshot

router = APIRouter()


@router.get("/state", response_model=SimulationStateResponse)
def get_state(
    since_tick: int = Query(0, ge=0, description="Only return events since this tick"),
    snapshot: Snapshot = Depends(get_snapshot),
    manager: EngineManager = Depends(get_engine_manager),
) -> SimulationStateResponse:
    return SimulationStateResponse(
        tick=snapshot.tick,
        mining=snapshot.mining,
        man_on_rail=snapshot.man_on_rail.label if snapshot.man_on_rail is not None else None,
        broken_id=snapshot.broken_id,
        carriages=[serialize_carriage(c) for c in snapshot.carriages],
        events=[serialize_event(ev) for ev in manager.event_log.since_tick(since_tick)],
    )


@router.get("/stats", response_model=SimulationStats)
def get_stats(
    snapshot: Snapshot = Depends(get_snapshot),
    manager: EngineManager = Depends(get_engine_manager),
) -> SimulationStats:
    return SimulationStats(
        tick=snapshot.tick,
        carriage_count=len(snapshot.carriages),
        total_spawned=manager.total_spawned,
        total_retired=manager.total_retired,
        running=manager.running,
        paused=manager.paused,
        fault=manager.fault,
    )
