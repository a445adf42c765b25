"""Core data models and simulation state."""

from metro_sim.core.enums import Depot, Domain, EventCategory, Rail, RetireReason
from metro_sim.core.errors import (
    ConfigError,
    InvalidCommand,
    InvariantViolation,
    SimulationError,
    SimulationHalted,
)
from metro_sim.core.geometry import RailLayout, TrackGeometry
from metro_sim.core.models import Carriage
from metro_sim.core.sim_state import SimulationState
from metro_sim.core.snapshot import Snapshot

__all__ = [
    "Carriage",
    "ConfigError",
    "Depot",
    "Domain",
    "EventCategory",
    "InvalidCommand",
    "InvariantViolation",
    "Rail",
    "RailLayout",
    "RetireReason",
    "SimulationError",
    "SimulationHalted",
    "SimulationState",
    "Snapshot",
    "TrackGeometry",
]
