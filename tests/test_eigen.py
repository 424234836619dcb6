import pytest

from vectorlab.core.linalg import Matrix2, Vector, cross, eigen_2x2, mat_mul_vec
from vectorlab.core.simulation.base import SimulationStatus
from vectorlab.core.simulation.eigen import (
    EIGEN_PRESETS, EigenSweep, preset_by_key, test_eigen_alignment as is_aligned,
)


@pytest.mark.parametrize("preset", EIGEN_PRESETS, ids=lambda p: p.key)
def test_preset_lines_are_eigen_directions(preset):
    for line in preset.lines:
        image = mat_mul_vec(preset.matrix, line)
        assert cross(image, line).z == pytest.approx(0.0)


def test_probe_on_x_axis_is_aligned_for_stretch():
    lines = preset_by_key("scale_x").lines
    assert is_aligned(Vector(2.0, 0.0), lines)
    assert is_aligned(Vector(0.0, -3.0), lines)
    assert not is_aligned(Vector(1.0, 2.0), lines)


def test_alignment_uses_epsilon():
    lines = (Vector(1.0, 1.0),)
    assert is_aligned(Vector(1.0, 1.05), lines, epsilon=0.1)
    assert not is_aligned(Vector(1.0, 1.2), lines, epsilon=0.1)


def test_diagonal_preset_detects_both_diagonals():
    lines = preset_by_key("diagonal").lines
    assert is_aligned(Vector(2.0, 2.0), lines)
    assert is_aligned(Vector(-1.5, 1.5), lines)
    assert not is_aligned(Vector(1.0, 0.0), lines)


def test_shear_has_only_the_x_axis():
    assert preset_by_key("shear").lines == (Vector(1.0, 0.0),)
    pairs = eigen_2x2(Matrix2(1.0, 1.0, 0.0, 1.0))
    assert len(pairs) == 1
    assert abs(pairs[0][1].x) == pytest.approx(1.0)


@pytest.mark.parametrize("key", ["scale_x", "diagonal"])
def test_preset_lines_match_computed_eigenvectors(key):
    preset = preset_by_key(key)
    for _, direction in eigen_2x2(preset.matrix):
        assert is_aligned(direction, preset.lines, epsilon=1e-6)


def test_rotation_has_no_real_eigenvectors():
    assert eigen_2x2(Matrix2(0.0, -1.0, 1.0, 0.0)) == []


def test_unknown_preset_raises():
    with pytest.raises(KeyError):
        preset_by_key("nope")


def test_sweep_plays_to_the_target_and_stops():
    sweep = EigenSweep(step=0.25).play()
    assert sweep.status is SimulationStatus.RUNNING
    for _ in range(4):
        sweep = sweep.advance()
    assert sweep.t == 1.0
    sweep = sweep.advance()
    assert sweep.status is SimulationStatus.PAUSED
    target = Matrix2(2.0, 1.0, 1.0, 2.0)
    assert sweep.matrix(target) == target


def test_sweep_starts_at_identity_and_seek_clamps():
    target = Matrix2(2.0, 0.0, 0.0, 1.0)
    assert EigenSweep().matrix(target) == Matrix2.identity()
    half = EigenSweep().seek(0.5)
    assert half.matrix(target) == Matrix2(1.5, 0.0, 0.0, 1.0)
    assert EigenSweep().seek(3.0).t == 1.0
    assert EigenSweep().seek(-1.0).t == 0.0


def test_stop_returns_to_identity():
    sweep = EigenSweep().seek(0.7).stop()
    assert sweep.t == 0.0
    assert sweep.status is SimulationStatus.RESET
    assert sweep.advance() is sweep
