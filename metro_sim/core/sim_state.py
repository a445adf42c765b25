"""Mutable authoritative simulation state, passed explicitly to every engine call."""

from __future__ import annotations

from metro_sim.core.enums import Rail
from metro_sim.core.models import Carriage


class SimulationState:
    """The single source of truth for the simulation.

    Holds the carriage set and both anomaly modes. Nothing in the engine
    reads mode flags from anywhere else.
    """

    __slots__ = ("tick", "carriages", "mining", "man_on_rail", "last_id", "command_seq")

    def __init__(self) -> None:
        self.tick: int = 0
        self.carriages: dict[int, Carriage] = {}
        self.mining: bool = False
        self.man_on_rail: Rail | None = None
        self.last_id: int = 0
        self.command_seq: int = 0

    def allocate_carriage_id(self) -> int:
        self.last_id += 1
        return self.last_id

    def add_carriage(self, carriage: Carriage) -> None:
        self.carriages[carriage.id] = carriage

    def remove_carriage(self, carriage_id: int) -> Carriage | None:
        return self.carriages.pop(carriage_id, None)

    def next_command_seq(self) -> int:
        seq = self.command_seq
        self.command_seq += 1
        return seq

    @property
    def broken_carriage(self) -> Carriage | None:
        for carriage in self.carriages.values():
            if carriage.is_broken:
                return carriage
        return None

    def copy(self) -> SimulationState:
        clone = SimulationState()
        clone.tick = self.tick
        clone.carriages = {cid: c.copy() for cid, c in self.carriages.items()}
        clone.mining = self.mining
        clone.man_on_rail = self.man_on_rail
        clone.last_id = self.last_id
        clone.command_seq = self.command_seq
        return clone
