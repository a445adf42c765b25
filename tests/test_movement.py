"""Tests for the single-tick movement model.

Covers:
- Blocked rails freeze carriages completely
- Station dwell: start, door state, forced departure after the full dwell
- Stepping in each rail's direction and wrapping from the depot endpoint
- Purity: the input carriage is never modified
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from metro_sim.config import SimulationConfig
from metro_sim.core.enums import Rail
from metro_sim.core.geometry import TrackGeometry
from metro_sim.core.models import Carriage
from metro_sim.engine.movement import advance, at_station

GEO = TrackGeometry.from_config(SimulationConfig())


def _step(c: Carriage, blocked: bool = False, mining: bool = False) -> Carriage:
    return advance(c, GEO, blocked=blocked, mining=mining)


class TestBlocked:
    def test_blocked_carriage_frozen(self):
        c = Carriage(id=1, rail=Rail.FIRST, position=450, dwell_ticks=7, door_open=True)
        nxt = _step(c, blocked=True)
        assert nxt == c
        assert nxt is not c

    def test_blocked_carriage_closes_doors_when_mining_starts(self):
        c = Carriage(id=1, rail=Rail.FIRST, position=450, dwell_ticks=7, door_open=True)
        nxt = _step(c, blocked=True, mining=True)
        assert nxt.position == 450
        assert nxt.dwell_ticks == 7
        assert not nxt.door_open

    def test_blocked_at_depot_does_not_wrap(self):
        c = Carriage(id=1, rail=Rail.FIRST, position=1015)
        assert _step(c, blocked=True).position == 1015


class TestTravel:
    def test_first_rail_moves_up(self):
        nxt = _step(Carriage(id=1, rail=Rail.FIRST, position=185))
        assert nxt.position == 190
        assert nxt.dwell_ticks == 0
        assert not nxt.door_open

    def test_second_rail_moves_down(self):
        assert _step(Carriage(id=2, rail=Rail.SECOND, position=1015)).position == 1010

    def test_reaches_depot_endpoint_exactly(self):
        assert _step(Carriage(id=1, rail=Rail.FIRST, position=1010)).position == 1015
        assert _step(Carriage(id=2, rail=Rail.SECOND, position=190)).position == 185

    def test_wraps_from_depot_endpoint(self):
        nxt = _step(Carriage(id=1, rail=Rail.FIRST, position=1015))
        assert nxt.position == 185
        assert nxt.dwell_ticks == 0
        nxt = _step(Carriage(id=2, rail=Rail.SECOND, position=185))
        assert nxt.position == 1015

    def test_input_not_modified(self):
        c = Carriage(id=1, rail=Rail.FIRST, position=300)
        _step(c)
        assert c.position == 300
        assert c.dwell_ticks == 0


class TestStationDwell:
    def test_arriving_at_station_starts_dwell(self):
        c = Carriage(id=1, rail=Rail.FIRST, position=300)
        assert at_station(c, GEO)
        nxt = _step(c)
        assert nxt.position == 300
        assert nxt.dwell_ticks == 1
        assert nxt.door_open

    def test_mid_dwell_counts_as_station(self):
        c = Carriage(id=1, rail=Rail.FIRST, position=300, dwell_ticks=12)
        nxt = _step(c)
        assert nxt.dwell_ticks == 13
        assert nxt.position == 300

    def test_full_dwell_forces_departure(self):
        c = Carriage(id=1, rail=Rail.FIRST, position=300, dwell_ticks=GEO.station_ticks)
        assert not at_station(c, GEO)
        nxt = _step(c)
        assert nxt.dwell_ticks == 0
        assert nxt.position == 305
        assert not nxt.door_open

    def test_dwell_lasts_exactly_station_ticks(self):
        c = Carriage(id=2, rail=Rail.SECOND, position=900)
        stopped = 0
        while True:
            c = _step(c)
            if c.position != 900:
                break
            stopped += 1
        assert stopped == GEO.station_ticks
        assert c.position == 895

    def test_broken_carriage_keeps_doors_closed(self):
        nxt = _step(Carriage(id=1, rail=Rail.FIRST, position=600, is_broken=True))
        assert nxt.dwell_ticks == 1
        assert not nxt.door_open

    def test_mining_keeps_doors_closed(self):
        nxt = _step(Carriage(id=1, rail=Rail.FIRST, position=600), mining=True)
        assert nxt.dwell_ticks == 1
        assert not nxt.door_open

    def test_off_station_position_does_not_stop(self):
        assert not at_station(Carriage(id=1, rail=Rail.FIRST, position=305), GEO)


class TestFullLap:
    def test_lap_visits_every_station_and_returns(self):
        c = Carriage(id=1, rail=Rail.FIRST, position=185)
        visited = set()
        ticks = 0
        while True:
            c = _step(c)
            ticks += 1
            if c.door_open:
                visited.add(c.position)
            if c.position == 185:
                break
        assert visited == set(GEO.stations)
        # 166 steps, 5 full dwells, one tick on the depot endpoint to wrap
        assert ticks == 166 + 5 * GEO.station_ticks + 1
