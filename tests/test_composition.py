import pytest

from vectorlab.core.linalg import Matrix2, Vector, mat_mul_mat, mat_mul_vec
from vectorlab.core.simulation.base import SimulationStatus
from vectorlab.core.simulation.composition import (
    CompositionAnimation, advance_composition, animate_composition, compose_queue, reversed_queue, smoothstep,
    start_composition,
)

ROTATE = Matrix2(0.0, -1.0, 1.0, 0.0)
STRETCH = Matrix2(2.0, 0.0, 0.0, 1.0)
SHEAR = Matrix2(1.0, 1.0, 0.0, 1.0)


def _coeffs(m):
    return pytest.approx((m.a, m.b, m.c, m.d))


def _play(queue, ticks_per_step):
    state = start_composition(queue, ticks_per_step)
    frames = [state]
    while state.status is SimulationStatus.RUNNING:
        state = advance_composition(state)
        frames.append(state)
    return frames


def test_smoothstep_endpoints_and_midpoint():
    assert smoothstep(0.0) == 0.0
    assert smoothstep(1.0) == 1.0
    assert smoothstep(0.5) == 0.5
    assert smoothstep(-3.0) == 0.0
    assert smoothstep(7.0) == 1.0


def test_first_queued_matrix_is_applied_first():
    total = compose_queue([STRETCH, ROTATE])
    assert total == mat_mul_mat(ROTATE, STRETCH)
    assert mat_mul_vec(total, Vector(1, 0)) == Vector(0, 2)


def test_reversed_queue_changes_the_result():
    queue = [STRETCH, ROTATE]
    assert compose_queue(reversed_queue(queue)) != compose_queue(queue)
    assert mat_mul_vec(compose_queue(reversed_queue(queue)), Vector(1, 0)) == Vector(0, 1)


def test_empty_queue_is_identity_and_finishes_immediately():
    assert compose_queue([]) == Matrix2.identity()
    state = start_composition([])
    assert state.is_finished
    assert advance_composition(state) is state
    assert state.current == Matrix2.identity()


def test_playback_ends_on_the_full_composition():
    queue = [ROTATE, SHEAR, STRETCH]
    frames = _play(queue, ticks_per_step=10)
    final = frames[-1]
    assert final.is_finished
    assert final.current == compose_queue(queue)
    assert final.accumulated == compose_queue(queue)
    assert len(frames) == 1 + 3 * 10


def test_each_step_starts_from_the_previous_product():
    queue = [ROTATE, STRETCH]
    frames = _play(queue, ticks_per_step=4)
    after_first = frames[4]
    assert after_first.step_index == 1
    assert after_first.tick == 0
    assert after_first.current == ROTATE


def test_intermediate_frames_are_eased():
    state = start_composition([STRETCH], ticks_per_step=4)
    state = advance_composition(state)
    # smoothstep(1/4) = 0.15625
    assert state.current.a == pytest.approx(1.15625)
    assert state.progress == pytest.approx(0.25)


def test_animate_matches_stepping():
    queue = [SHEAR, ROTATE, STRETCH]
    frames = _play(queue, ticks_per_step=6)
    for tick, frame in enumerate(frames):
        assert (frame.current.a, frame.current.b, frame.current.c, frame.current.d) == _coeffs(
            animate_composition(queue, tick, 6)
        )


def test_animate_bounds():
    queue = [ROTATE, STRETCH]
    assert animate_composition(queue, 0) == Matrix2.identity()
    assert animate_composition(queue, -5) == Matrix2.identity()
    assert animate_composition(queue, 10_000) == compose_queue(queue)
    assert animate_composition([], 25) == Matrix2.identity()


def test_non_running_state_is_unchanged():
    idle = CompositionAnimation()
    assert advance_composition(idle) is idle
