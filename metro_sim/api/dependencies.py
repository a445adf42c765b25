"""FastAPI dependencies: the process-wide EngineManager and its latest snapshot."""

from __future__ import annotations

from fastapi import Depends, HTTPException

from metro_sim.api.engine_manager import EngineManager
from metro_sim.core.snapshot import Snapshot

_manager: EngineManager | None = None


def set_engine_manager(manager: EngineManager | None) -> None:
    """Install the manager for this process; ``None`` detaches it on shutdown."""
    global _manager
    _manager = manager


def get_engine_manager() -> EngineManager:
    if _manager is None:
        raise HTTPException(status_code=503, detail="Simulation engine is not running.")
    return _manager


def get_snapshot(manager: EngineManager = Depends(get_engine_manager)) -> Snapshot:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")
    return snapshot
