"""Carriage registry: id allocation, spawn gating and removal."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Mapping

from metro_sim.core import events
from metro_sim.core.enums import Rail, RetireReason
from metro_sim.core.errors import InvalidCommand
from metro_sim.core.models import Carriage

if TYPE_CHECKING:
    from metro_sim.core.geometry import TrackGeometry
    from metro_sim.core.sim_state import SimulationState
    from metro_sim.utils.event_log import SimEvent

logger = logging.getLogger(__name__)


class CarriageRegistry:
    """Owns the rules for adding carriages to and removing them from a state.

    Ids come from the state's high-water mark, so they grow monotonically
    across both rails and are never handed out twice.
    """

    __slots__ = ("_geometry",)

    def __init__(self, geometry: TrackGeometry) -> None:
        self._geometry = geometry

    def on_rail(self, carriages: Mapping[int, Carriage], rail: Rail) -> list[Carriage]:
        """Carriages on *rail*, ordered by id."""
        return sorted((c for c in carriages.values() if c.rail == rail), key=lambda c: c.id)

    def spawn(self, state: SimulationState, rail: Rail) -> int | None:
        """Place a new carriage at the rail's spawn endpoint.

        Returns the new id, or ``None`` when the rail is already full.
        """
        if len(self.on_rail(state.carriages, rail)) >= self._geometry.capacity:
            logger.debug("Tick %d: %s rail full, spawn skipped", state.tick, rail.label)
            return None
        carriage_id = state.allocate_carriage_id()
        state.add_carriage(Carriage(
            id=carriage_id,
            rail=rail,
            position=self._geometry.layout(rail).spawn_end,
        ))
        logger.info("Tick %d: Spawned carriage #%d on %s rail", state.tick, carriage_id, rail.label)
        return carriage_id

    def remove(self, state: SimulationState, carriage_id: int, reason: RetireReason) -> SimEvent:
        if state.remove_carriage(carriage_id) is None:
            raise InvalidCommand(f"carriage {carriage_id} does not exist")
        logger.info("Tick %d: Retired carriage #%d (%s)", state.tick, carriage_id, reason.value)
        return events.carriage_retired(state.tick, carriage_id, reason)

    def remove_many(
        self,
        state: SimulationState,
        carriage_ids: Iterable[int],
        reason: RetireReason,
    ) -> SimEvent | None:
        """Remove a batch in one go. A batch of one reports like ``remove``."""
        ids = sorted(carriage_ids)
        if not ids:
            return None
        if len(ids) == 1:
            return self.remove(state, ids[0], reason)
        for carriage_id in ids:
            if state.remove_carriage(carriage_id) is None:
                raise InvalidCommand(f"carriage {carriage_id} does not exist")
        logger.info("Tick %d: Retired carriages %s (%s)", state.tick, ids, reason.value)
        return events.carriages_retired(state.tick, ids, reason)

    def spawn_eligible(self, carriages: Mapping[int, Carriage], rail: Rail) -> bool:
        """An empty rail, or enough room behind its newest carriage."""
        on_rail = self.on_rail(carriages, rail)
        if not on_rail:
            return True
        newest = on_rail[-1]
        travelled = self._geometry.travelled(rail, newest.position)
        return (
            travelled > self._geometry.new_carriage_interval
            and len(on_rail) < self._geometry.capacity
        )

    def is_at_depot(self, carriage: Carriage) -> bool:
        return carriage.position == self._geometry.layout(carriage.rail).depot_end
