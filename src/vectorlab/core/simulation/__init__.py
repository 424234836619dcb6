"""
Simulation algorithms driven by the lesson frame loop.

Every algorithm is a pure step function over an immutable state object, so a
QTimer (or a test) can drive it one tick at a time.
"""
from vectorlab.core.simulation.base import SimulationStatus

__all__ = ["SimulationStatus"]
