"""Engine systems: RNG."""

from metro_sim.systems.rng import DeterministicRNG

__all__ = ["DeterministicRNG"]
