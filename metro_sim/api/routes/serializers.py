"""Conversions from engine objects to API schemas."""

from __future__ import annotations

from metro_sim.api.schemas import CarriageSchema, EventSchema
from metro_sim.core.models import Carriage
from metro_sim.utils.event_log import SimEvent


def serialize_carriage(c: Carriage) -> CarriageSchema:
    return CarriageSchema(
        id=c.id,
        rail=c.rail.label,
        position=c.position,
        dwell_ticks=c.dwell_ticks,
        is_broken=c.is_broken,
        door_open=c.door_open,
    )


def serialize_event(ev: SimEvent) -> EventSchema:
    return EventSchema(
        tick=ev.tick,
        category=ev.category,
        message=ev.message,
        entity_ids=list(ev.entity_ids),
        metadata=ev.metadata,
    )
