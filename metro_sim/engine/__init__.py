"""Engine layer: registry, movement model, mode controller, tick loop."""

from metro_sim.engine.modes import ModeController
from metro_sim.engine.movement import advance
from metro_sim.engine.registry import CarriageRegistry
from metro_sim.engine.simulation import Simulation
from metro_sim.engine.tick_loop import TickLoop, TickResult

__all__ = ["CarriageRegistry", "ModeController", "Simulation", "TickLoop", "TickResult", "advance"]
