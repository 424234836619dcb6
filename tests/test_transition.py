import pytest

from vectorlab.config import TRANSITION_TOLERANCE
from vectorlab.core.linalg import Matrix2, Matrix3, matrix_distance
from vectorlab.core.simulation.transition import approach


def test_moves_a_fraction_of_the_way():
    nxt, done = approach(Matrix2.identity(), Matrix2(3.0, 0.0, 0.0, 1.0), rate=0.5)
    assert not done
    assert nxt == Matrix2(2.0, 0.0, 0.0, 1.0)


def test_converges_and_snaps_to_target():
    current, target = Matrix2.identity(), Matrix2(0.0, -1.0, 1.0, 0.0)
    for frames in range(1, 500):
        current, done = approach(current, target)
        if done:
            break
    assert done
    assert current == target
    assert frames < 500


def test_distance_shrinks_every_frame():
    current, target = Matrix3.identity(), Matrix3(1.5, 0, 0, 0, 1.5, 0, 0, 0, 1.5)
    last = matrix_distance(current, target)
    done = False
    while not done:
        current, done = approach(current, target)
        dist = matrix_distance(current, target)
        assert dist < last or dist == 0.0
        last = dist


def test_already_close_is_done():
    target = Matrix2(1.0, 0.0, 0.0, 1.0)
    almost = Matrix2(1.0 + TRANSITION_TOLERANCE / 10, 0.0, 0.0, 1.0)
    assert approach(almost, target) == (target, True)


def test_mixed_sizes_raise():
    with pytest.raises(TypeError):
        approach(Matrix2.identity(), Matrix3.identity())
