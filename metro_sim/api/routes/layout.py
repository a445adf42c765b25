"""GET /api/v1/layout: static track geometry (fetch once at startup)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from metro_sim.api.dependencies import get_engine_manager
from metro_sim.api.engine_manager import EngineManager
from metro_sim.api.schemas import LayoutResponse, RailLayoutSchema

router = APIRouter()


@router.get("/layout", response_model=LayoutResponse)
def get_layout(
    manager: EngineManager = Depends(get_engine_manager),
) -> LayoutResponse:
    geo = manager.simulation.geometry
    return LayoutResponse(
        depots={depot.name.lower(): pos for depot, pos in geo.depots.items()},
        stations=list(geo.stations),
        rails=[
            RailLayoutSchema(
                rail=layout.rail.label,
                direction=layout.direction,
                spawn_end=layout.spawn_end,
                depot_end=layout.depot_end,
            )
            for layout in geo.rails.values()
        ],
        carriage_width=geo.carriage_width,
        step=geo.step,
        station_ticks=geo.station_ticks,
    )
