"""Static track layout derived from the configuration.

Positions are carriage body centres. Rail endpoints are pulled in by half a
carriage width from the depot reference points so the whole body stays
between the depot walls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from metro_sim.core.enums import Depot, Rail
from metro_sim.core.errors import ConfigError

if TYPE_CHECKING:
    from metro_sim.config import SimulationConfig


@dataclass(frozen=True, slots=True)
class RailLayout:
    """Direction and endpoints of a single rail."""

    rail: Rail
    direction: int
    spawn_end: int
    depot_end: int

    @property
    def low(self) -> int:
        return min(self.spawn_end, self.depot_end)

    @property
    def high(self) -> int:
        return max(self.spawn_end, self.depot_end)


@dataclass(frozen=True, slots=True)
class TrackGeometry:
    """Immutable layout: depots, stations and both rails."""

    depots: dict[Depot, int]
    stations: tuple[int, ...]
    rails: dict[Rail, RailLayout]
    step: int
    station_ticks: int
    carriage_width: int
    new_carriage_interval: int

    @classmethod
    def from_config(cls, config: SimulationConfig) -> TrackGeometry:
        _validate(config)
        half = config.carriage_width // 2
        low_end = config.depot_right + half
        high_end = config.depot_left - half
        rails = {
            Rail.FIRST: RailLayout(Rail.FIRST, 1, low_end, high_end),
            Rail.SECOND: RailLayout(Rail.SECOND, -1, high_end, low_end),
        }
        return cls(
            depots={Depot.LEFT: config.depot_left, Depot.RIGHT: config.depot_right},
            stations=config.station_positions,
            rails=rails,
            step=config.step,
            station_ticks=config.station_ticks,
            carriage_width=config.carriage_width,
            new_carriage_interval=config.new_carriage_interval,
        )

    @property
    def capacity(self) -> int:
        """Maximum number of carriages a single rail may hold."""
        return len(self.stations)

    def layout(self, rail: Rail) -> RailLayout:
        return self.rails[rail]

    def is_station(self, position: int) -> bool:
        return position in self.stations

    def in_bounds(self, rail: Rail, position: int) -> bool:
        layout = self.rails[rail]
        return layout.low <= position <= layout.high

    def travelled(self, rail: Rail, position: int) -> int:
        """Distance covered from the rail's spawn endpoint."""
        layout = self.rails[rail]
        return (position - layout.spawn_end) * layout.direction


def _validate(config: SimulationConfig) -> None:
    """Reject layouts where a station or depot endpoint could be stepped over."""
    if config.depot_left <= config.depot_right:
        raise ConfigError(
            f"depot_left ({config.depot_left}) must be greater than depot_right ({config.depot_right})"
        )
    if config.step <= 0:
        raise ConfigError(f"step must be positive, got {config.step}")
    if config.stations_count <= 0:
        raise ConfigError(f"stations_count must be positive, got {config.stations_count}")
    if config.carriage_width <= 0 or config.carriage_width % 2:
        raise ConfigError(f"carriage_width must be a positive even number, got {config.carriage_width}")
    if config.tick_ms <= 0 or config.station_duration_ms % config.tick_ms:
        raise ConfigError(
            f"station_duration_ms ({config.station_duration_ms}) must be a multiple of tick_ms ({config.tick_ms})"
        )
    span = config.depot_left - config.depot_right
    if span % (config.stations_count + 1):
        raise ConfigError(
            f"depot span {span} does not divide into {config.stations_count + 1} equal roads"
        )

    low_end = config.depot_right + config.carriage_width // 2
    high_end = config.depot_left - config.carriage_width // 2
    if high_end <= low_end:
        raise ConfigError("carriage is wider than the track")
    if (high_end - low_end) % config.step:
        raise ConfigError(f"track length {high_end - low_end} is not a multiple of step {config.step}")
    for station in config.station_positions:
        if not low_end < station < high_end:
            raise ConfigError(f"station {station} lies outside the track [{low_end}, {high_end}]")
        if (station - low_end) % config.step:
            raise ConfigError(f"station {station} cannot be reached in steps of {config.step}")
