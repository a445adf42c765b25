"""Tests for the configuration-derived track geometry.

Covers:
- Derived constants (road length, station positions, dwell ticks)
- Width-adjusted rail endpoints and directions
- Rejection of layouts the movement model could step over
"""

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from metro_sim.config import SimulationConfig
from metro_sim.core.enums import Depot, Rail
from metro_sim.core.errors import ConfigError
from metro_sim.core.geometry import TrackGeometry


class TestDerivedConstants:
    def test_default_stations_evenly_spaced(self):
        cfg = SimulationConfig()
        assert cfg.road_length == 150
        assert cfg.station_positions == (300, 450, 600, 750, 900)

    def test_station_ticks_from_duration(self):
        assert SimulationConfig().station_ticks == 40
        assert SimulationConfig(station_duration_ms=1000).station_ticks == 20

    def test_tick_seconds(self):
        assert SimulationConfig().tick_seconds == pytest.approx(0.05)

    def test_config_is_frozen(self):
        cfg = SimulationConfig()
        with pytest.raises(Exception):
            cfg.step = 10  # type: ignore


class TestRailLayout:
    def setup_method(self):
        self.geo = TrackGeometry.from_config(SimulationConfig())

    def test_first_rail_runs_right_to_left_depot(self):
        first = self.geo.layout(Rail.FIRST)
        assert first.direction == 1
        assert first.spawn_end == 185
        assert first.depot_end == 1015

    def test_second_rail_runs_the_other_way(self):
        second = self.geo.layout(Rail.SECOND)
        assert second.direction == -1
        assert second.spawn_end == 1015
        assert second.depot_end == 185

    def test_depots(self):
        assert self.geo.depots[Depot.LEFT] == 1050
        assert self.geo.depots[Depot.RIGHT] == 150

    def test_capacity_is_station_count(self):
        assert self.geo.capacity == 5

    def test_in_bounds_inclusive(self):
        assert self.geo.in_bounds(Rail.FIRST, 185)
        assert self.geo.in_bounds(Rail.FIRST, 1015)
        assert not self.geo.in_bounds(Rail.FIRST, 180)
        assert not self.geo.in_bounds(Rail.SECOND, 1020)

    def test_travelled_is_direction_aware(self):
        assert self.geo.travelled(Rail.FIRST, 385) == 200
        assert self.geo.travelled(Rail.SECOND, 815) == 200

    def test_is_station(self):
        assert self.geo.is_station(450)
        assert not self.geo.is_station(455)


class TestValidation:
    @pytest.mark.parametrize("overrides", [
        {"step": 7},
        {"step": 0},
        {"carriage_width": 71},
        {"station_duration_ms": 2010},
        {"depot_left": 1051},
        {"depot_left": 100},
        {"carriage_width": 400},
    ])
    def test_rejects_unreachable_layouts(self, overrides):
        with pytest.raises(ConfigError):
            TrackGeometry.from_config(SimulationConfig(**overrides))

    def test_accepts_alternative_even_layout(self):
        geo = TrackGeometry.from_config(SimulationConfig(step=10, carriage_width=60, depot_right=100, depot_left=1000))
        assert geo.stations == (250, 400, 550, 700, 850)
        assert geo.layout(Rail.FIRST).spawn_end == 130
