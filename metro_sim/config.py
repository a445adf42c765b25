"""Simulation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration for the simulation run."""

    # Randomness
    seed: int = 42

    # Track layout (pixels)
    depot_right: int = 150             # Depot.RIGHT reference point (low coordinate)
    depot_left: int = 1050             # Depot.LEFT reference point (high coordinate)
    carriage_width: int = 70
    stations_count: int = 5

    # Timing
    tick_ms: int = 50
    station_duration_ms: int = 2000
    max_ticks: int = 0                 # 0 = run until stopped

    # Motion
    step: int = 5                      # Distance advanced per moving tick
    new_carriage_interval: int = 200   # Spawn spacing from the spawn endpoint

    # Event feed
    event_log_size: int = 1000

    # Journal (append-only human readable log); None disables it
    journal_dir: str | None = None
    journal_file: str = "metro.log"

    # Logging
    log_level: str = "INFO"

    @property
    def road_length(self) -> int:
        """Distance between neighbouring stations (and depot-to-station)."""
        return (self.depot_left - self.depot_right) // (self.stations_count + 1)

    @property
    def station_positions(self) -> tuple[int, ...]:
        return tuple(
            self.depot_right + self.road_length * k
            for k in range(1, self.stations_count + 1)
        )

    @property
    def station_ticks(self) -> int:
        """Number of ticks a carriage dwells at a station."""
        return self.station_duration_ms // self.tick_ms

    @property
    def tick_seconds(self) -> float:
        return self.tick_ms / 1000.0
