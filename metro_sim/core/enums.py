"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class Rail(IntEnum):
    """The two parallel tracks. A carriage keeps its rail for life."""

    FIRST = 0   # moves towards increasing position
    SECOND = 1  # moves towards decreasing position

    @property
    def label(self) -> str:
        return self.name.lower()


@unique
class Depot(IntEnum):
    """End-of-track zones bounding both rails."""

    LEFT = 0
    RIGHT = 1


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    FALLEN_MAN = 0
    BREAKDOWN = 1


@unique
class RetireReason(str, Enum):
    """Why a carriage left the track."""

    BROKEN = "broken-retired"
    MINED = "mined-retired"


@unique
class EventCategory(str, Enum):
    """Categories of the events reported to the feed and journal."""

    CARRIAGE_STARTED = "carriage_started"
    CARRIAGE_RETIRED = "carriage_retired"
    CARRIAGES_RETIRED = "carriages_retired"
    MINING = "mining"
    FALLEN_MAN = "fallen_man"
    BREAKDOWN = "breakdown"
    REPAIR = "repair"
