"""Core data models: Carriage."""

from __future__ import annotations

from dataclasses import dataclass

from metro_sim.core.enums import Rail


@dataclass(slots=True)
class Carriage:
    """A carriage on one of the rails. The only mutable entity of the engine."""

    id: int
    rail: Rail
    position: int
    dwell_ticks: int = 0
    is_broken: bool = False
    door_open: bool = False

    @property
    def dwelling(self) -> bool:
        return self.dwell_ticks > 0

    def copy(self) -> Carriage:
        return Carriage(
            id=self.id,
            rail=self.rail,
            position=self.position,
            dwell_ticks=self.dwell_ticks,
            is_broken=self.is_broken,
            door_open=self.door_open,
        )

    def __repr__(self) -> str:
        flags = ""
        if self.is_broken:
            flags += " broken"
        if self.door_open:
            flags += " open"
        return f"Carriage(#{self.id} {self.rail.label}@{self.position} dwell={self.dwell_ticks}{flags})"
