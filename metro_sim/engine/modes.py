"""Mode controller: mining, fallen man and breakage commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from metro_sim.core import events
from metro_sim.core.enums import Domain, Rail
from metro_sim.core.errors import InvalidCommand

if TYPE_CHECKING:
    from metro_sim.core.sim_state import SimulationState
    from metro_sim.systems.rng import DeterministicRNG
    from metro_sim.utils.event_log import SimEvent

logger = logging.getLogger(__name__)

_RAILS = (Rail.FIRST, Rail.SECOND)


class ModeController:
    """Applies user commands to the cross-cutting modes of a state.

    Toggles are total: any state accepts them. Only the targeted commands
    (``set_fallen_man`` with a bad value, ``break_carriage``) can be rejected.
    Random picks use ``state.command_seq`` so repeated commands in one tick
    draw independently.
    """

    __slots__ = ("_rng",)

    def __init__(self, rng: DeterministicRNG) -> None:
        self._rng = rng

    # -- queries --

    @staticmethod
    def blocked(state: SimulationState, rail: Rail) -> bool:
        return state.man_on_rail == rail

    # -- mining --

    def toggle_mining(self, state: SimulationState) -> SimEvent:
        state.mining = not state.mining
        if state.mining:
            for carriage in state.carriages.values():
                carriage.door_open = False
        logger.info("Tick %d: Mining %s", state.tick, "on" if state.mining else "off")
        return events.mining_toggled(state.tick, state.mining)

    # -- fallen man --

    def drop_or_clear_fallen_man(self, state: SimulationState) -> SimEvent:
        if state.man_on_rail is not None:
            return self.set_fallen_man(state, None)
        rail = self._rng.choice(Domain.FALLEN_MAN, state.next_command_seq(), state.tick, _RAILS)
        return self.set_fallen_man(state, rail)

    def set_fallen_man(self, state: SimulationState, rail: Rail | None) -> SimEvent | None:
        """Put a man on *rail*, or clear the current one with ``None``."""
        if rail is not None and not isinstance(rail, Rail):
            raise InvalidCommand(f"unknown rail {rail!r}")

        previous = state.man_on_rail
        if rail == previous:
            return None
        state.man_on_rail = rail
        if rail is None:
            logger.info("Tick %d: %s rail cleared", state.tick, previous.label)
            return events.man_lifted(state.tick, previous)
        logger.info("Tick %d: Man fell on %s rail", state.tick, rail.label)
        return events.man_fell(state.tick, rail)

    # -- breakage --

    def toggle_break(self, state: SimulationState) -> SimEvent | None:
        """Repair every broken carriage, or break a random one if none is broken."""
        broken = [c.id for c in state.carriages.values() if c.is_broken]
        if broken:
            for carriage in state.carriages.values():
                carriage.is_broken = False
            logger.info("Tick %d: Repaired carriages %s", state.tick, sorted(broken))
            return events.carriages_repaired(state.tick, broken)

        if not state.carriages:
            logger.debug("Tick %d: No carriage to break", state.tick)
            return None
        ids = sorted(state.carriages)
        target = self._rng.choice(Domain.BREAKDOWN, state.next_command_seq(), state.tick, ids)
        return self.break_carriage(state, target)

    def break_carriage(self, state: SimulationState, carriage_id: int) -> SimEvent:
        carriage = state.carriages.get(carriage_id)
        if carriage is None:
            raise InvalidCommand(f"carriage {carriage_id} does not exist")
        already = state.broken_carriage
        if already is not None:
            raise InvalidCommand(
                f"carriage {already.id} is already broken; repair it before breaking another"
            )
        carriage.is_broken = True
        carriage.door_open = False
        logger.info("Tick %d: Carriage #%d broken", state.tick, carriage_id)
        return events.carriage_broken(state.tick, carriage_id)
