import logging
from dataclasses import replace

import pytest

from vectorlab.core.fields import GRADIENT_FIELDS, ScalarField, field_by_key
from vectorlab.core.linalg import Vector
from vectorlab.core.simulation.base import SimulationStatus
from vectorlab.core.simulation.gradient_descent import (
    DEFAULT_LEARNING_RATE, MAX_LEARNING_RATE, MIN_LEARNING_RATE, GradientOutcome, clamp_learning_rate,
    loss_history, move_probe, pause, reset_gradient_descent, start, step_gradient_descent, toggle,
)


def _run_to_completion(state, field, limit=10_000):
    state = start(state)
    for _ in range(limit):
        state = step_gradient_descent(state, field)
        if state.is_terminal:
            return state
    raise AssertionError("descent did not terminate")


def test_reset_starts_at_configured_point(bowl):
    state = reset_gradient_descent(bowl)
    assert state.position == Vector(3.0, 3.0)
    assert state.history == ()
    assert state.iteration == 0
    assert state.status is SimulationStatus.RESET
    assert state.outcome is GradientOutcome.NONE


def test_reset_is_idempotent_regardless_of_prior_state(bowl):
    fresh = reset_gradient_descent(bowl)
    used = _run_to_completion(fresh, bowl)
    assert used != fresh
    assert reset_gradient_descent(bowl) == reset_gradient_descent(bowl) == fresh


def test_single_step_moves_against_gradient(bowl):
    state = start(reset_gradient_descent(bowl, learning_rate=0.1))
    nxt = step_gradient_descent(state, bowl)
    # grad at (3, 3) is (1.5, 1.5)
    assert (nxt.position.x, nxt.position.y) == pytest.approx((2.85, 2.85))
    assert nxt.iteration == 1
    assert nxt.outcome is GradientOutcome.STEPPED
    assert nxt.history == (bowl.surface_point(3.0, 3.0),)
    assert state.iteration == 0


def test_bowl_loss_strictly_decreases_until_convergence(bowl):
    state = start(reset_gradient_descent(bowl, learning_rate=0.1))
    losses = [bowl.value(state.position.x, state.position.y)]
    while True:
        state = step_gradient_descent(state, bowl)
        if state.is_terminal:
            break
        losses.append(bowl.value(state.position.x, state.position.y))

    assert state.outcome is GradientOutcome.CONVERGED
    assert state.status is SimulationStatus.PAUSED
    assert all(later < earlier for earlier, later in zip(losses, losses[1:]))
    assert state.iteration == len(losses) - 1


def test_convergence_keeps_position(bowl):
    state = start(reset_gradient_descent(bowl))
    state = replace(state, position=Vector(0.001, 0.0))
    nxt = step_gradient_descent(state, bowl)
    assert nxt.outcome is GradientOutcome.CONVERGED
    assert nxt.position == state.position
    assert nxt.iteration == state.iteration


def test_large_step_diverges_and_keeps_position(caplog):
    steep = ScalarField(
        key="steep",
        name="Steep",
        equation="f = 50 x²",
        f=lambda x, y: 50 * x * x,
        df_dx=lambda x, y: 100 * x,
        start=(1.0, 0.0),
    )
    state = start(reset_gradient_descent(steep, learning_rate=0.5))
    with caplog.at_level(logging.INFO, logger="vectorlab.core.simulation.gradient_descent"):
        nxt = step_gradient_descent(state, steep)
    assert nxt.outcome is GradientOutcome.DIVERGED
    assert nxt.status is SimulationStatus.PAUSED
    assert nxt.position == state.position
    assert "diverged" in caplog.text


def test_overflowing_gradient_counts_as_divergence():
    wild = ScalarField(
        key="wild",
        name="Wild",
        equation="",
        f=lambda x, y: 0.0,
        df_dx=lambda x, y: float("inf"),
        start=(1.0, 1.0),
    )
    nxt = step_gradient_descent(start(reset_gradient_descent(wild)), wild)
    assert nxt.outcome is GradientOutcome.DIVERGED


def test_run_pause_toggle(bowl):
    state = reset_gradient_descent(bowl)
    running = start(state)
    assert running.status.is_running
    assert pause(running).status is SimulationStatus.PAUSED
    assert toggle(running).status is SimulationStatus.PAUSED
    assert toggle(pause(running)).status.is_running


def test_drag_clears_trail_and_clamps(bowl):
    state = start(reset_gradient_descent(bowl))
    state = step_gradient_descent(step_gradient_descent(state, bowl), bowl)
    assert state.history

    moved = move_probe(state, Vector(10.0, -1.0), bowl.half_range)

    assert moved.position.x == bowl.half_range
    assert moved.position.y == pytest.approx(state.position.y - 1.0)
    assert moved.history == ()
    assert moved.iteration == 0
    assert moved.status is SimulationStatus.RESET


def test_drag_with_non_finite_delta_keeps_last_position(bowl):
    state = reset_gradient_descent(bowl)
    moved = move_probe(state, Vector(float("nan"), 0.5), bowl.half_range)
    assert moved.position == Vector(3.0, 3.5)


@pytest.mark.parametrize(
    "alpha,expected",
    [(0.1, 0.1), (0.0, MIN_LEARNING_RATE), (5.0, MAX_LEARNING_RATE), (float("nan"), DEFAULT_LEARNING_RATE)],
)
def test_learning_rate_is_clamped(alpha, expected):
    assert clamp_learning_rate(alpha) == expected


def test_loss_history_ends_with_current_loss(bowl):
    state = start(reset_gradient_descent(bowl))
    state = step_gradient_descent(state, bowl)
    losses = loss_history(state, bowl)
    assert losses == pytest.approx([bowl.value(3.0, 3.0), bowl.value(state.position.x, state.position.y)])


def test_waves_field_settles_in_a_local_minimum():
    waves = field_by_key(GRADIENT_FIELDS, "waves")
    state = _run_to_completion(reset_gradient_descent(waves, 0.1), waves)
    assert state.outcome is GradientOutcome.CONVERGED
    grad = waves.gradient(state.position.x, state.position.y)
    assert grad.magnitude < 0.05
