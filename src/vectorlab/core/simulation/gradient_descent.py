"""
Gradient Descent
================
Discrete steepest descent on a scalar field, one step per timer tick.

Each step moves the probe against the gradient:

    x' = x - alpha * df/dx(x, y)
    y' = y - alpha * df/dy(x, y)

The step length |(x', y') - (x, y)| decides the outcome:

* below CONVERGENCE_THRESHOLD  -> CONVERGED, the run pauses, position is kept;
* above DIVERGENCE_THRESHOLD   -> DIVERGED, the run pauses, position is kept;
* otherwise                    -> STEPPED, the pre-step surface point is
                                  appended to the trail.

A non-finite step (overflowing gradient) counts as divergence.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from vectorlab.config import CONVERGENCE_THRESHOLD, DIVERGENCE_THRESHOLD
from vectorlab.core.fields import ScalarField
from vectorlab.core.linalg import Vector
from vectorlab.core.simulation.base import SimulationStatus

logger = logging.getLogger(__name__)

DEFAULT_LEARNING_RATE: float = 0.1
MIN_LEARNING_RATE: float = 0.01
MAX_LEARNING_RATE: float = 0.5


class GradientOutcome(Enum):
    NONE = "none"
    STEPPED = "stepped"
    CONVERGED = "converged"
    DIVERGED = "diverged"


@dataclass(frozen=True)
class GradientDescentState:
    """
    Attributes:
        position: Current probe position (x, y) as a planar vector.
        history: Visited surface points (x, f(x, y), y), oldest first.
        iteration: Number of accepted steps since the last reset.
        learning_rate: Step size alpha.
        status: RESET, RUNNING or PAUSED.
        outcome: Result of the most recent step.
    """
    position: Vector
    history: tuple[Vector, ...] = ()
    iteration: int = 0
    learning_rate: float = DEFAULT_LEARNING_RATE
    status: SimulationStatus = SimulationStatus.RESET
    outcome: GradientOutcome = GradientOutcome.NONE

    @property
    def is_terminal(self) -> bool:
        return self.outcome in (GradientOutcome.CONVERGED, GradientOutcome.DIVERGED)


def clamp_learning_rate(alpha: float) -> float:
    if not math.isfinite(alpha):
        return DEFAULT_LEARNING_RATE
    return max(MIN_LEARNING_RATE, min(MAX_LEARNING_RATE, alpha))


def reset_gradient_descent(field: ScalarField, learning_rate: float = DEFAULT_LEARNING_RATE) -> GradientDescentState:
    """Fresh state at the field's start point. Calling it twice yields equal states."""
    sx, sy = field.start
    return GradientDescentState(position=Vector(sx, sy), learning_rate=learning_rate)


def step_gradient_descent(
    state: GradientDescentState,
    field: ScalarField,
    alpha: Optional[float] = None,
) -> GradientDescentState:
    """Advance one descent step. Returns a new state; `state` is not modified."""
    alpha = state.learning_rate if alpha is None else alpha
    x, y = state.position.x, state.position.y
    grad = field.gradient(x, y)

    nx = x - alpha * grad.x
    ny = y - alpha * grad.y
    dist = math.hypot(nx - x, ny - y)

    if not math.isfinite(dist) or dist > DIVERGENCE_THRESHOLD:
        logger.info("Gradient descent diverged on '%s' after %d iterations.", field.key, state.iteration)
        return replace(state, status=SimulationStatus.PAUSED, outcome=GradientOutcome.DIVERGED)

    if dist < CONVERGENCE_THRESHOLD:
        logger.info("Gradient descent converged on '%s' after %d iterations.", field.key, state.iteration)
        return replace(state, status=SimulationStatus.PAUSED, outcome=GradientOutcome.CONVERGED)

    return replace(
        state,
        position=Vector(nx, ny),
        history=state.history + (field.surface_point(x, y),),
        iteration=state.iteration + 1,
        outcome=GradientOutcome.STEPPED,
    )


def start(state: GradientDescentState) -> GradientDescentState:
    return replace(state, status=SimulationStatus.RUNNING, outcome=GradientOutcome.NONE)


def pause(state: GradientDescentState) -> GradientDescentState:
    return replace(state, status=SimulationStatus.PAUSED)


def toggle(state: GradientDescentState) -> GradientDescentState:
    return pause(state) if state.status.is_running else start(state)


def move_probe(state: GradientDescentState, delta: Vector, bounds: float) -> GradientDescentState:
    """
    Manual drag of the probe by a planar delta.

    The run is stopped, the trail cleared and the new position clamped to
    [-bounds, bounds]^2.
    """
    # min/max do not propagate NaN, so discard non-finite input before clamping
    target = (state.position + delta).finite_or(state.position)
    nx = max(-bounds, min(bounds, target.x))
    ny = max(-bounds, min(bounds, target.y))
    return replace(
        state,
        position=Vector(nx, ny),
        history=(),
        iteration=0,
        status=SimulationStatus.RESET,
        outcome=GradientOutcome.NONE,
    )


def loss_history(state: GradientDescentState, field: ScalarField) -> list[float]:
    """Loss value for every trail point plus the current position."""
    losses = [p.y for p in state.history]
    losses.append(field.value(state.position.x, state.position.y))
    return losses
