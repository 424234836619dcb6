from __future__ import annotations

from enum import Enum


class SimulationStatus(Enum):
    """Run state shared by every stepping algorithm."""
    RESET = "reset"
    RUNNING = "running"
    PAUSED = "paused"

    @property
    def is_running(self) -> bool:
        return self is SimulationStatus.RUNNING
