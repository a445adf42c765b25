"""TickLoop: the fixed-order tick orchestrator.

Step order within one tick:
  1. Retire the broken carriage if it sits on its depot endpoint
  2. Mining on: retire every carriage sitting on its depot endpoint
  3. Mining off, no carriages: restart ids and respawn carriages 1 (first) and 2 (second)
  4. Mining off, carriages present: spawn where spacing allows (first, then second rail)
  5. Movement for every carriage not added or removed by steps 1-4
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from metro_sim.core import events
from metro_sim.core.enums import Rail, RetireReason
from metro_sim.core.snapshot import Snapshot
from metro_sim.engine.invariants import check_invariants
from metro_sim.engine.movement import advance

if TYPE_CHECKING:
    from metro_sim.core.geometry import TrackGeometry
    from metro_sim.core.sim_state import SimulationState
    from metro_sim.engine.modes import ModeController
    from metro_sim.engine.registry import CarriageRegistry
    from metro_sim.utils.event_log import SimEvent

logger = logging.getLogger(__name__)

_SPAWN_ORDER = (Rail.FIRST, Rail.SECOND)


@dataclass(frozen=True, slots=True)
class TickResult:
    """Outcome of one tick: the new state plus what the caller should publish."""

    state: SimulationState
    snapshot: Snapshot
    events: list[SimEvent]


class TickLoop:
    """Drives one simulation step over an explicit state.

    ``run`` never mutates the state it is given. It works on a copy and
    returns it, so a tick that raises leaves the caller's state untouched.
    """

    __slots__ = ("_geometry", "_registry", "_modes")

    def __init__(
        self,
        geometry: TrackGeometry,
        registry: CarriageRegistry,
        modes: ModeController,
    ) -> None:
        self._geometry = geometry
        self._registry = registry
        self._modes = modes

    def run(self, state: SimulationState) -> TickResult:
        work = state.copy()
        tick_events: list[SimEvent] = []
        touched: set[int] = set()

        self._retire_broken(work, tick_events, touched)
        if work.mining:
            self._mining_sweep(work, tick_events, touched)
        elif not work.carriages:
            self._respawn_initial(work, tick_events, touched)
        else:
            self._spawn_spaced(work, tick_events, touched)
        self._move(work, touched)

        work.tick += 1
        check_invariants(work, self._geometry)

        logger.debug(
            "Tick %d: carriages=%d mining=%s man_on_rail=%s events=%d",
            work.tick, len(work.carriages), work.mining,
            work.man_on_rail.label if work.man_on_rail is not None else "-",
            len(tick_events),
        )
        return TickResult(state=work, snapshot=Snapshot.from_state(work), events=tick_events)

    # -- steps --

    def _retire_broken(self, state: SimulationState, out: list[SimEvent], touched: set[int]) -> None:
        broken = state.broken_carriage
        if broken is not None and self._registry.is_at_depot(broken):
            out.append(self._registry.remove(state, broken.id, RetireReason.BROKEN))
            touched.add(broken.id)

    def _mining_sweep(self, state: SimulationState, out: list[SimEvent], touched: set[int]) -> None:
        at_depot = [c.id for c in state.carriages.values() if self._registry.is_at_depot(c)]
        event = self._registry.remove_many(state, at_depot, RetireReason.MINED)
        if event is not None:
            out.append(event)
            touched.update(at_depot)

    def _respawn_initial(self, state: SimulationState, out: list[SimEvent], touched: set[int]) -> None:
        # Numbering restarts on an empty track.
        state.last_id = 0
        for rail in _SPAWN_ORDER:
            self._spawn(state, rail, out, touched)

    def _spawn_spaced(self, state: SimulationState, out: list[SimEvent], touched: set[int]) -> None:
        for rail in _SPAWN_ORDER:
            if self._registry.spawn_eligible(state.carriages, rail):
                self._spawn(state, rail, out, touched)

    def _spawn(self, state: SimulationState, rail: Rail, out: list[SimEvent], touched: set[int]) -> None:
        carriage_id = self._registry.spawn(state, rail)
        if carriage_id is not None:
            touched.add(carriage_id)
            out.append(events.carriage_started(state.tick, carriage_id, rail))

    def _move(self, state: SimulationState, touched: set[int]) -> None:
        for cid in sorted(state.carriages):
            if cid in touched:
                continue
            carriage = state.carriages[cid]
            state.carriages[cid] = advance(
                carriage,
                self._geometry,
                blocked=self._modes.blocked(state, carriage.rail),
                mining=state.mining,
            )
