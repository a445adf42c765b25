"""Single-carriage, single-tick movement model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from metro_sim.core.models import Carriage

if TYPE_CHECKING:
    from metro_sim.core.geometry import TrackGeometry


def at_station(carriage: Carriage, geometry: TrackGeometry) -> bool:
    """True while the carriage should stay put at a station this tick.

    A full dwell forces departure: once ``dwell_ticks`` reaches the station
    tick count the carriage no longer counts as stopped.
    """
    if carriage.dwell_ticks >= geometry.station_ticks:
        return False
    return carriage.dwell_ticks > 0 or geometry.is_station(carriage.position)


def advance(carriage: Carriage, geometry: TrackGeometry, *, blocked: bool, mining: bool) -> Carriage:
    """Return the carriage as it stands after one tick. The input is not modified.

    Order of rules:
      1. blocked rail: frozen in place, only the door state is refreshed
      2. sitting on the depot endpoint: wrap back to the spawn endpoint
      3. at a station: dwell one more tick, doors open unless broken or mining
      4. otherwise: one step in the rail's direction, doors closed
    """
    nxt = carriage.copy()
    if blocked:
        # Position and dwell hold; doors still follow the current modes.
        nxt.door_open = carriage.dwelling and not carriage.is_broken and not mining
        return nxt

    layout = geometry.layout(carriage.rail)

    if carriage.position == layout.depot_end:
        nxt.position = layout.spawn_end
        nxt.dwell_ticks = 0
        nxt.door_open = False
        return nxt

    if at_station(carriage, geometry):
        nxt.dwell_ticks = carriage.dwell_ticks + 1
        nxt.door_open = not carriage.is_broken and not mining
        return nxt

    nxt.dwell_ticks = 0
    nxt.door_open = False
    # Distances divide evenly by the step, so the depot endpoint is hit exactly.
    nxt.position = carriage.position + geometry.step * layout.direction
    return nxt
