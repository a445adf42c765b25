"""Immutable snapshot of the simulation state for renderers and the API."""

from __future__ import annotations

from dataclasses import dataclass

from metro_sim.core.enums import Rail
from metro_sim.core.models import Carriage
from metro_sim.core.sim_state import SimulationState


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the simulation, safe to share across threads.

    Carriages are copies ordered by id, so later ticks never leak into a
    snapshot a reader is still holding.
    """

    tick: int
    mining: bool
    man_on_rail: Rail | None
    carriages: tuple[Carriage, ...]

    @classmethod
    def from_state(cls, state: SimulationState) -> Snapshot:
        return cls(
            tick=state.tick,
            mining=state.mining,
            man_on_rail=state.man_on_rail,
            carriages=tuple(state.carriages[cid].copy() for cid in sorted(state.carriages)),
        )

    @property
    def broken_id(self) -> int | None:
        for carriage in self.carriages:
            if carriage.is_broken:
                return carriage.id
        return None

    def on_rail(self, rail: Rail) -> tuple[Carriage, ...]:
        return tuple(c for c in self.carriages if c.rail == rail)

    def get(self, carriage_id: int) -> Carriage | None:
        for carriage in self.carriages:
            if carriage.id == carriage_id:
                return carriage
        return None
