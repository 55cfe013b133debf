"""Simulation clock and render loop."""

from physai.simulation.clock import SimulationClock
from physai.simulation.loop import RenderLoop

__all__ = [
    "SimulationClock",
    "RenderLoop",
]
