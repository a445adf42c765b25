"""Pydantic response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Carriage ---

class CarriageSchema(BaseModel):
    id: int
    rail: str
    position: int
    dwell_ticks: int = 0
    is_broken: bool = False
    door_open: bool = False


# --- Layout ---

class RailLayoutSchema(BaseModel):
    rail: str
    direction: int
    spawn_end: int
    depot_end: int


class LayoutResponse(BaseModel):
    depots: dict[str, int] = Field(description="Depot reference points keyed by depot name")
    stations: list[int]
    rails: list[RailLayoutSchema]
    carriage_width: int
    step: int
    station_ticks: int


# --- Simulation State ---

class EventSchema(BaseModel):
    tick: int
    category: str
    message: str
    entity_ids: list[int] = Field(default_factory=list)
    metadata: dict | None = None


class SimulationStateResponse(BaseModel):
    tick: int
    mining: bool
    man_on_rail: str | None = None
    broken_id: int | None = None
    carriages: list[CarriageSchema]
    events: list[EventSchema] = Field(default_factory=list)


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int = 0


class CommandResponse(BaseModel):
    status: str
    tick: int = 0
    event: EventSchema | None = None


# --- Config ---

class SimulationConfigResponse(BaseModel):
    seed: int
    depot_right: int
    depot_left: int
    carriage_width: int
    stations_count: int
    tick_ms: int
    station_duration_ms: int
    step: int
    new_carriage_interval: int
    max_ticks: int
    journal_enabled: bool
    tick_rate: float


# --- Stats ---

class SimulationStats(BaseModel):
    tick: int
    carriage_count: int
    total_spawned: int
    total_retired: int
    running: bool
    paused: bool
    fault: str | None = None
