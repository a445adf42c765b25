"""EngineManager: singleton wrapper that drives the Simulation on a background thread.

The API reads from an atomically-swapped immutable Snapshot; ticks and
commands go through one engine lock, so the simulation only ever sees a
single writer.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Callable

from metro_sim.core.enums import EventCategory, Rail
from metro_sim.core.errors import InvariantViolation
from metro_sim.core.snapshot import Snapshot
from metro_sim.engine.simulation import Simulation
from metro_sim.utils.event_log import EventLog, SimEvent
from metro_sim.utils.journal import JournalWriter

if TYPE_CHECKING:
    from metro_sim.config import SimulationConfig

logger = logging.getLogger(__name__)


class EngineManager:
    """Manages the simulation lifecycle on a background thread.

    Provides thread-safe access to:
      - latest snapshot (atomic reference swap)
      - event log (lock-guarded ring buffer)
      - control commands (start / pause / resume / step / reset)
      - anomaly commands (mining / fallen man / breakage)
    """

    def __init__(self, config: SimulationConfig) -> None:
        self._config = config
        self.config = config
        self._tick_rate: float = config.tick_seconds

        self._sim: Simulation | None = None
        self._engine_lock = threading.Lock()
        self._journal: JournalWriter | None = None
        if config.journal_dir:
            self._journal = JournalWriter(config.journal_dir, config.journal_file)

        # Thread-safe shared state
        self._snapshot_lock = threading.Lock()
        self._latest_snapshot: Snapshot | None = None
        self._event_log = EventLog(maxlen=config.event_log_size)

        # Counters
        self._total_spawned: int = 0
        self._total_retired: int = 0
        self._fault: str | None = None

        # Control
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.01, min(value, 2.0))

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def journal(self) -> JournalWriter | None:
        return self._journal

    @property
    def simulation(self) -> Simulation:
        assert self._sim is not None
        return self._sim

    @property
    def total_spawned(self) -> int:
        return self._total_spawned

    @property
    def total_retired(self) -> int:
        return self._total_retired

    @property
    def fault(self) -> str | None:
        """Message of the invariant violation that stopped the engine, if any."""
        return self._fault

    # -- snapshot access --

    def get_snapshot(self) -> Snapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="engine-loop", daemon=True)
        self._thread.start()
        logger.info("EngineManager started (tick_rate=%.3fs)", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("EngineManager paused at tick %d", self._current_tick())

    def resume(self) -> None:
        self._paused.clear()
        logger.info("EngineManager resumed at tick %d", self._current_tick())

    def step(self) -> None:
        """Execute exactly one tick (must be paused)."""
        if not self._paused.is_set():
            self.pause()
        self._step_requested.set()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        logger.info("EngineManager stopped.")

    def reset(self) -> None:
        """Stop, rebuild, and leave stopped with a fresh snapshot."""
        self.stop()
        self._event_log.clear()
        self._total_spawned = 0
        self._total_retired = 0
        self._fault = None
        self._build()
        logger.info("EngineManager reset.")

    def tick_once(self) -> bool:
        """Run one tick synchronously and publish it. Returns False once halted."""
        with self._engine_lock:
            assert self._sim is not None
            try:
                snapshot, events = self._sim.tick()
            except InvariantViolation as exc:
                self._fault = str(exc)
                logger.exception("Engine halted at tick %d", self._sim.state.tick)
                return False
            self._count(events)
            self._publish(snapshot, events)
        return True

    # -- commands --

    def toggle_mining(self) -> SimEvent:
        return self._command(lambda sim: sim.toggle_mining())

    def drop_or_clear_fallen_man(self) -> SimEvent:
        return self._command(lambda sim: sim.drop_or_clear_fallen_man())

    def set_fallen_man(self, rail: Rail | None) -> SimEvent | None:
        return self._command(lambda sim: sim.set_fallen_man(rail))

    def toggle_break(self) -> SimEvent | None:
        return self._command(lambda sim: sim.toggle_break())

    def break_carriage(self, carriage_id: int) -> SimEvent:
        return self._command(lambda sim: sim.break_carriage(carriage_id))

    # -- internals --

    def _build(self) -> None:
        self._sim = Simulation(self._config)
        with self._snapshot_lock:
            self._latest_snapshot = self._sim.snapshot()

    def _command(self, fn: Callable[[Simulation], SimEvent | None]) -> SimEvent | None:
        with self._engine_lock:
            assert self._sim is not None
            event = fn(self._sim)
            self._publish(self._sim.snapshot(), [event] if event is not None else [])
        return event

    def _run_loop(self) -> None:
        """Background thread main loop."""
        logger.info("Engine thread started.")

        while not self._stop_requested.is_set():
            # Handle pause
            if self._paused.is_set() and not self._step_requested.is_set():
                time.sleep(0.01)
                continue

            single_step = self._step_requested.is_set()
            if single_step:
                self._step_requested.clear()

            if not self.tick_once():
                break

            max_ticks = self._config.max_ticks
            if max_ticks and self._current_tick() >= max_ticks:
                logger.info("Tick %d: Max ticks reached.", self._current_tick())
                break

            # Rate limiting
            if not single_step:
                time.sleep(self._tick_rate)

        self._running.clear()
        logger.info("Engine thread exited.")

    def _count(self, events: list[SimEvent]) -> None:
        for event in events:
            if event.category == EventCategory.CARRIAGE_STARTED.value:
                self._total_spawned += 1
            elif event.category in (
                EventCategory.CARRIAGE_RETIRED.value,
                EventCategory.CARRIAGES_RETIRED.value,
            ):
                self._total_retired += len(event.entity_ids)

    def _publish(self, snapshot: Snapshot, events: list[SimEvent]) -> None:
        """Swap snapshot, push events to the feed and the journal."""
        with self._snapshot_lock:
            self._latest_snapshot = snapshot
        if events:
            self._event_log.append_many(events)
            if self._journal is not None:
                self._journal.write_events(events)

    def _current_tick(self) -> int:
        if self._sim:
            return self._sim.state.tick
        return 0
