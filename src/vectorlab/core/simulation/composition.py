"""
Matrix Composition Animator
===========================
Plays a queue of 2x2 transformations one after another.

For a queue [M1, M2, ..., Mk] the space is first deformed by M1, then by M2
on top of that, and so on; the final matrix is Mk * ... * M2 * M1. Every step
takes `ticks_per_step` frames and is eased with smoothstep, interpolating from
the accumulated product A to Mi * A.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Sequence

from vectorlab.config import COMPOSITION_TICKS_PER_STEP
from vectorlab.core.linalg import Matrix2, lerp, mat_mul_mat
from vectorlab.core.simulation.base import SimulationStatus

logger = logging.getLogger(__name__)


def smoothstep(t: float) -> float:
    """3t^2 - 2t^3 with t clamped to [0, 1]."""
    t = max(0.0, min(1.0, t))
    return t * t * (3.0 - 2.0 * t)


def compose_queue(queue: Sequence[Matrix2]) -> Matrix2:
    """Mk * ... * M1 (the first queued matrix is applied first)."""
    total = Matrix2.identity()
    for m in queue:
        total = mat_mul_mat(m, total)
    return total


@dataclass(frozen=True)
class CompositionAnimation:
    """
    Attributes:
        queue: Matrices in application order.
        step_index: Step currently being animated.
        tick: Frames elapsed inside the current step.
        ticks_per_step: Frames per step.
        accumulated: Product of all completed steps.
        current: Matrix to draw this frame.
        status: RUNNING while playing, PAUSED once finished, RESET before start.
    """
    queue: tuple[Matrix2, ...] = ()
    step_index: int = 0
    tick: int = 0
    ticks_per_step: int = COMPOSITION_TICKS_PER_STEP
    accumulated: Matrix2 = Matrix2.identity()
    current: Matrix2 = Matrix2.identity()
    status: SimulationStatus = SimulationStatus.RESET

    @property
    def progress(self) -> float:
        """Fraction of the current step completed, in [0, 1]."""
        return min(1.0, self.tick / max(1, self.ticks_per_step))

    @property
    def is_finished(self) -> bool:
        return self.status is SimulationStatus.PAUSED


def start_composition(
    queue: Sequence[Matrix2],
    ticks_per_step: int = COMPOSITION_TICKS_PER_STEP,
) -> CompositionAnimation:
    """Begin playback from the identity. An empty queue finishes immediately."""
    queue = tuple(queue)
    if not queue:
        return CompositionAnimation(ticks_per_step=ticks_per_step, status=SimulationStatus.PAUSED)
    logger.debug("Composition started with %d steps.", len(queue))
    return CompositionAnimation(queue=queue, ticks_per_step=max(1, ticks_per_step), status=SimulationStatus.RUNNING)


def advance_composition(state: CompositionAnimation) -> CompositionAnimation:
    """Advance one frame. Non-running states are returned unchanged."""
    if state.status is not SimulationStatus.RUNNING:
        return state

    step_m = state.queue[state.step_index]
    target = mat_mul_mat(step_m, state.accumulated)
    tick = state.tick + 1

    if tick < state.ticks_per_step:
        t = smoothstep(tick / state.ticks_per_step)
        return replace(state, tick=tick, current=lerp(state.accumulated, target, t))

    # Step finished: fold it into the running product
    if state.step_index < len(state.queue) - 1:
        return replace(state, step_index=state.step_index + 1, tick=0, accumulated=target, current=target)

    logger.debug("Composition finished.")
    return replace(state, tick=tick, accumulated=target, current=target, status=SimulationStatus.PAUSED)


def animate_composition(
    queue: Sequence[Matrix2],
    tick: int,
    ticks_per_step: int = COMPOSITION_TICKS_PER_STEP,
) -> Matrix2:
    """
    Matrix shown `tick` frames after playback started, without stepping.

    tick <= 0 gives the identity; tick >= len(queue) * ticks_per_step gives the
    full composition.
    """
    if not queue or tick <= 0:
        return Matrix2.identity()
    ticks_per_step = max(1, ticks_per_step)
    step_index, inner = divmod(int(tick), ticks_per_step)
    if step_index >= len(queue):
        return compose_queue(queue)

    accumulated = compose_queue(queue[:step_index])
    target = mat_mul_mat(queue[step_index], accumulated)
    return lerp(accumulated, target, smoothstep(inner / ticks_per_step))


def reversed_queue(queue: Sequence[Matrix2]) -> tuple[Matrix2, ...]:
    return tuple(reversed(queue))
