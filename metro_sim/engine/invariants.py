"""Post-tick invariant checks. A failure means the engine has a logic defect."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from metro_sim.core.errors import InvariantViolation

if TYPE_CHECKING:
    from metro_sim.core.geometry import TrackGeometry
    from metro_sim.core.sim_state import SimulationState


def check_invariants(state: SimulationState, geometry: TrackGeometry) -> None:
    """Raise ``InvariantViolation`` describing the first broken rule found."""
    broken = [cid for cid, c in state.carriages.items() if c.is_broken]
    if len(broken) > 1:
        raise InvariantViolation(f"tick {state.tick}: more than one broken carriage {sorted(broken)}")

    per_rail: Counter = Counter()
    for cid, carriage in state.carriages.items():
        if cid != carriage.id:
            raise InvariantViolation(f"tick {state.tick}: carriage {carriage.id} stored under key {cid}")
        if carriage.id > state.last_id:
            raise InvariantViolation(
                f"tick {state.tick}: carriage {carriage.id} above id high-water mark {state.last_id}"
            )
        if not geometry.in_bounds(carriage.rail, carriage.position):
            raise InvariantViolation(
                f"tick {state.tick}: carriage {carriage.id} at {carriage.position} "
                f"outside {carriage.rail.label} rail"
            )
        if not 0 <= carriage.dwell_ticks <= geometry.station_ticks:
            raise InvariantViolation(
                f"tick {state.tick}: carriage {carriage.id} dwell {carriage.dwell_ticks} "
                f"outside [0, {geometry.station_ticks}]"
            )
        per_rail[carriage.rail] += 1

    for rail, count in per_rail.items():
        if count > geometry.capacity:
            raise InvariantViolation(
                f"tick {state.tick}: {count} carriages on {rail.label} rail, capacity {geometry.capacity}"
            )
