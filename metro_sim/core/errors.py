"""Exception hierarchy for the simulation engine."""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for every error raised by the engine."""


class ConfigError(SimulationError):
    """The configuration describes a track the movement model cannot run."""


class InvalidCommand(SimulationError):
    """A command was rejected because it does not fit the current state."""


class InvariantViolation(SimulationError):
    """The engine produced an impossible state. The tick is discarded."""


class SimulationHalted(InvariantViolation):
    """A tick or command was requested after an invariant violation halted the run."""
