"""POST /api/v1/commands/{command}: anomaly toggles applied between ticks."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException

from metro_sim.api.dependencies import get_engine_manager
from metro_sim.api.engine_manager import EngineManager
from metro_sim.api.routes.serializers import serialize_event
from metro_sim.api.schemas import CommandResponse
from metro_sim.core.errors import InvalidCommand, SimulationHalted
from metro_sim.utils.event_log import SimEvent

router = APIRouter()


class Command(str, Enum):
    mining = "mining"
    fallen_man = "fallen-man"
    break_ = "break"


def _respond(manager: EngineManager, event: SimEvent | None) -> CommandResponse:
    snapshot = manager.get_snapshot()
    return CommandResponse(
        status="ok" if event is not None else "noop",
        tick=snapshot.tick if snapshot else 0,
        event=serialize_event(event) if event is not None else None,
    )


@router.post("/commands/{command}", response_model=CommandResponse)
def run_command(
    command: Command,
    manager: EngineManager = Depends(get_engine_manager),
) -> CommandResponse:
    try:
        match command:
            case Command.mining:
                event = manager.toggle_mining()
            case Command.fallen_man:
                event = manager.drop_or_clear_fallen_man()
            case Command.break_:
                event = manager.toggle_break()
    except SimulationHalted as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return _respond(manager, event)


@router.post("/commands/break/{carriage_id}", response_model=CommandResponse)
def break_carriage(
    carriage_id: int,
    manager: EngineManager = Depends(get_engine_manager),
) -> CommandResponse:
    try:
        event = manager.break_carriage(carriage_id)
    except (InvalidCommand, SimulationHalted) as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return _respond(manager, event)
