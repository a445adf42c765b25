"""Factories for the events the engine reports.

Every message is a complete human-readable sentence; the journal writes
one line per event.
"""

from __future__ import annotations

from metro_sim.core.enums import EventCategory, Rail, RetireReason
from metro_sim.utils.event_log import SimEvent


def carriage_started(tick: int, carriage_id: int, rail: Rail) -> SimEvent:
    return SimEvent(
        tick=tick,
        category=EventCategory.CARRIAGE_STARTED.value,
        message=f"Carriage with number {carriage_id} started on {rail.label} rail",
        entity_ids=(carriage_id,),
        metadata={"id": carriage_id, "rail": rail.label},
    )


def carriage_retired(tick: int, carriage_id: int, reason: RetireReason) -> SimEvent:
    if reason is RetireReason.BROKEN:
        message = f"Broken carriage with number {carriage_id} was taken to the depot"
    else:
        message = f"Carriage with number {carriage_id} was hidden in the depot"
    return SimEvent(
        tick=tick,
        category=EventCategory.CARRIAGE_RETIRED.value,
        message=message,
        entity_ids=(carriage_id,),
        metadata={"id": carriage_id, "reason": reason.value},
    )


def carriages_retired(tick: int, carriage_ids: list[int], reason: RetireReason) -> SimEvent:
    ids = tuple(sorted(carriage_ids))
    numbers = ", ".join(str(cid) for cid in ids)
    return SimEvent(
        tick=tick,
        category=EventCategory.CARRIAGES_RETIRED.value,
        message=f"Carriages with numbers {numbers} were hidden in the depot",
        entity_ids=ids,
        metadata={"ids": list(ids), "reason": reason.value},
    )


def mining_toggled(tick: int, enabled: bool) -> SimEvent:
    return SimEvent(
        tick=tick,
        category=EventCategory.MINING.value,
        message="Mining mode enabled" if enabled else "Mining mode disabled",
        metadata={"mining": enabled},
    )


def man_fell(tick: int, rail: Rail) -> SimEvent:
    return SimEvent(
        tick=tick,
        category=EventCategory.FALLEN_MAN.value,
        message=f"Men fell on {rail.label} rail",
        metadata={"rail": rail.label, "fallen": True},
    )


def man_lifted(tick: int, rail: Rail) -> SimEvent:
    return SimEvent(
        tick=tick,
        category=EventCategory.FALLEN_MAN.value,
        message=f"Man was lifted from {rail.label} rail",
        metadata={"rail": rail.label, "fallen": False},
    )


def carriage_broken(tick: int, carriage_id: int) -> SimEvent:
    return SimEvent(
        tick=tick,
        category=EventCategory.BREAKDOWN.value,
        message=f"Carriage with number {carriage_id} was broken",
        entity_ids=(carriage_id,),
        metadata={"id": carriage_id},
    )


def carriages_repaired(tick: int, carriage_ids: list[int]) -> SimEvent:
    ids = tuple(sorted(carriage_ids))
    if len(ids) == 1:
        message = f"Carriage with number {ids[0]} was repaired"
    else:
        message = "Carriages with numbers " + ", ".join(str(i) for i in ids) + " were repaired"
    return SimEvent(
        tick=tick,
        category=EventCategory.REPAIR.value,
        message=message,
        entity_ids=ids,
        metadata={"ids": list(ids)},
    )
