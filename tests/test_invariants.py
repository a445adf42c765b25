"""Invariant checks and long randomized runs.

Every run drives the engine with a scripted sequence of commands and checks
the observable invariants after every single tick.
"""

import sys
import os
import random

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from metro_sim.config import SimulationConfig
from metro_sim.core.enums import EventCategory, Rail
from metro_sim.core.errors import InvariantViolation
from metro_sim.core.geometry import TrackGeometry
from metro_sim.core.models import Carriage
from metro_sim.core.sim_state import SimulationState
from metro_sim.engine.invariants import check_invariants
from metro_sim.engine.simulation import Simulation

GEO = TrackGeometry.from_config(SimulationConfig())


def _state(*carriages: Carriage) -> SimulationState:
    state = SimulationState()
    for c in carriages:
        state.add_carriage(c)
    state.last_id = max((c.id for c in carriages), default=0)
    return state


class TestCheckInvariants:
    def test_valid_state_passes(self):
        check_invariants(_state(
            Carriage(id=1, rail=Rail.FIRST, position=185),
            Carriage(id=2, rail=Rail.SECOND, position=185, is_broken=True),
        ), GEO)

    def test_two_broken(self):
        with pytest.raises(InvariantViolation, match="broken"):
            check_invariants(_state(
                Carriage(id=1, rail=Rail.FIRST, position=300, is_broken=True),
                Carriage(id=2, rail=Rail.SECOND, position=300, is_broken=True),
            ), GEO)

    def test_out_of_bounds(self):
        with pytest.raises(InvariantViolation, match="outside"):
            check_invariants(_state(Carriage(id=1, rail=Rail.FIRST, position=1020)), GEO)

    def test_dwell_too_long(self):
        with pytest.raises(InvariantViolation, match="dwell"):
            check_invariants(_state(Carriage(id=1, rail=Rail.FIRST, position=300, dwell_ticks=41)), GEO)

    def test_over_capacity(self):
        with pytest.raises(InvariantViolation, match="capacity"):
            check_invariants(_state(*(
                Carriage(id=i, rail=Rail.SECOND, position=200 + i * 5) for i in range(1, 7)
            )), GEO)

    def test_key_mismatch(self):
        state = _state(Carriage(id=1, rail=Rail.FIRST, position=300))
        state.carriages[5] = state.carriages.pop(1)
        with pytest.raises(InvariantViolation):
            check_invariants(state, GEO)


def _scripted_run(seed: int, ticks: int, script_seed: int):
    """Yield (man_on_rail, snapshot, events) with random commands between ticks."""
    sim = Simulation(SimulationConfig(seed=seed))
    script = random.Random(script_seed)
    for _ in range(ticks):
        roll = script.random()
        if roll < 0.004:
            sim.toggle_mining()
        elif roll < 0.010:
            sim.drop_or_clear_fallen_man()
        elif roll < 0.020:
            sim.toggle_break()
        blocked = sim.state.man_on_rail
        snapshot, events = sim.tick()
        yield blocked, snapshot, events


class TestRandomizedRuns:
    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_invariants_hold_every_tick(self, seed):
        prev: dict[int, Carriage] = {}
        highest_started = 0
        for blocked, snapshot, events in _scripted_run(seed, 4000, script_seed=seed * 10):
            assert sum(c.is_broken for c in snapshot.carriages) <= 1
            for rail in Rail:
                assert len(snapshot.on_rail(rail)) <= GEO.capacity
            for c in snapshot.carriages:
                assert GEO.in_bounds(c.rail, c.position)
                assert 0 <= c.dwell_ticks <= GEO.station_ticks
                before = prev.get(c.id)
                if before is not None and before.dwell_ticks == GEO.station_ticks and c.rail != blocked:
                    assert c.dwell_ticks == 0
                if c.door_open:
                    assert not c.is_broken and not snapshot.mining
            for e in events:
                if e.category == EventCategory.CARRIAGE_STARTED.value:
                    if e.entity_ids[0] == 1:
                        # numbering restarts on an empty track
                        highest_started = 0
                    assert e.entity_ids[0] > highest_started
                    highest_started = e.entity_ids[0]
            prev = {c.id: c for c in snapshot.carriages}

    def test_same_seed_same_script_identical(self):
        run_a = [snap for _, snap, _ in _scripted_run(11, 1500, script_seed=5)]
        run_b = [snap for _, snap, _ in _scripted_run(11, 1500, script_seed=5)]
        assert run_a == run_b

    @pytest.mark.slow
    def test_long_run(self):
        count = 0
        for _, snapshot, _ in _scripted_run(99, 20000, script_seed=99):
            count += 1
        assert count == 20000
        assert snapshot.tick == 20000
