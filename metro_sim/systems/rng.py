"""Domain-separated deterministic RNG using xxhash.

Every draw is a pure function of (seed, domain, entity_id, tick), so a run
is reproducible from its seed and the sequence of commands applied to it.
"""

from __future__ import annotations

import struct
from typing import Sequence, TypeVar

import xxhash

from metro_sim.core.enums import Domain

T = TypeVar("T")


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    No internal mutable state, therefore safe to share with the API thread.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, entity_id: int, tick: int) -> int:
        payload = struct.pack("<qiqi", self._seed, domain.value, entity_id, tick)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, entity_id: int, tick: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, entity_id, tick) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, entity_id: int, tick: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, entity_id, tick)
        return low + int(f * (high - low + 1))

    def choice(self, domain: Domain, entity_id: int, tick: int, items: Sequence[T]) -> T:
        """Pick one element of a non-empty sequence."""
        if not items:
            raise IndexError("cannot choose from an empty sequence")
        return items[self.next_int(domain, entity_id, tick, 0, len(items) - 1)]
