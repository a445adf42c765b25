"""Simulation: the engine boundary consumed by drivers, the API and the CLI."""

from __future__ import annotations

import logging

from metro_sim.config import SimulationConfig
from metro_sim.core.enums import Rail
from metro_sim.core.errors import InvariantViolation, SimulationHalted
from metro_sim.core.geometry import TrackGeometry
from metro_sim.core.sim_state import SimulationState
from metro_sim.core.snapshot import Snapshot
from metro_sim.engine.modes import ModeController
from metro_sim.engine.registry import CarriageRegistry
from metro_sim.engine.tick_loop import TickLoop
from metro_sim.systems.rng import DeterministicRNG
from metro_sim.utils.event_log import SimEvent

logger = logging.getLogger(__name__)


class Simulation:
    """Owns one simulation state and exposes ticks and commands over it.

    Not thread-safe and not reentrant: a single caller must drive ``tick``
    and the commands. ``EngineManager`` serialises access with one lock.
    """

    def __init__(self, config: SimulationConfig | None = None, state: SimulationState | None = None) -> None:
        self.config = config or SimulationConfig()
        self.geometry = TrackGeometry.from_config(self.config)
        self.rng = DeterministicRNG(self.config.seed)
        self.registry = CarriageRegistry(self.geometry)
        self.modes = ModeController(self.rng)
        self.loop = TickLoop(self.geometry, self.registry, self.modes)
        self._state = state or SimulationState()
        self._halted: str | None = None

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def halted(self) -> bool:
        return self._halted is not None

    # -- ticking --

    def tick(self) -> tuple[Snapshot, list[SimEvent]]:
        """Advance one tick. On any error the state is left as it was."""
        self._ensure_running()
        try:
            result = self.loop.run(self._state)
        except InvariantViolation as exc:
            self._halted = str(exc)
            logger.error("Simulation halted: %s", exc)
            raise
        self._state = result.state
        return result.snapshot, result.events

    def snapshot(self) -> Snapshot:
        return Snapshot.from_state(self._state)

    def reset(self) -> None:
        self._state = SimulationState()
        self._halted = None

    def _ensure_running(self) -> None:
        if self._halted is not None:
            raise SimulationHalted(f"simulation halted: {self._halted}")

    # -- commands (rejected once halted) --

    def toggle_mining(self) -> SimEvent:
        self._ensure_running()
        return self.modes.toggle_mining(self._state)

    def toggle_break(self) -> SimEvent | None:
        self._ensure_running()
        return self.modes.toggle_break(self._state)

    def break_carriage(self, carriage_id: int) -> SimEvent:
        self._ensure_running()
        return self.modes.break_carriage(self._state, carriage_id)

    def drop_or_clear_fallen_man(self) -> SimEvent:
        self._ensure_running()
        return self.modes.drop_or_clear_fallen_man(self._state)

    def set_fallen_man(self, rail: Rail | None) -> SimEvent | None:
        self._ensure_running()
        return self.modes.set_fallen_man(self._state, rail)
