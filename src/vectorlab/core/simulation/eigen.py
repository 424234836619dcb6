"""
Eigen Alignment
===============
Tools for the eigenvector lesson: which probe directions survive a
transformation without turning.

A probe p lies on an eigen line with direction l when the 2D cross product
p.x * l.y - p.y * l.x is (nearly) zero. The test is done on the probe as the
user placed it, before the transformation is applied.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Sequence

from vectorlab.config import EIGEN_EPSILON, EIGEN_SWEEP_STEP
from vectorlab.core.linalg import Matrix2, Vector, lerp
from vectorlab.core.simulation.base import SimulationStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EigenPreset:
    key: str
    name: str
    matrix: Matrix2
    lines: tuple[Vector, ...]
    description: str


EIGEN_PRESETS: tuple[EigenPreset, ...] = (
    EigenPreset(
        key="scale_x",
        name="Stretch X",
        matrix=Matrix2(2.0, 0.0, 0.0, 1.0),
        lines=(Vector(1.0, 0.0), Vector(0.0, 1.0)),
        description="The X axis is stretched (λ=2). The Y axis does not change (λ=1).",
    ),
    EigenPreset(
        key="scale_uniform",
        name="Uniform scale",
        matrix=Matrix2(2.0, 0.0, 0.0, 2.0),
        lines=(Vector(1.0, 0.0), Vector(0.0, 1.0), Vector(1.0, 1.0)),
        description="Every vector is an eigenvector. Everything scales the same (λ=2).",
    ),
    EigenPreset(
        key="shear",
        name="Shear",
        matrix=Matrix2(1.0, 1.0, 0.0, 1.0),
        lines=(Vector(1.0, 0.0),),
        description="Only the X axis survives the deformation (λ=1). Everything else turns.",
    ),
    EigenPreset(
        key="diagonal",
        name="Diagonal stretch",
        matrix=Matrix2(2.0, 1.0, 1.0, 2.0),
        lines=(Vector(1.0, 1.0), Vector(-1.0, 1.0)),
        description="Stretch along y=x (λ=3) and y=-x (λ=1).",
    ),
)


def preset_by_key(key: str) -> EigenPreset:
    for preset in EIGEN_PRESETS:
        if preset.key == key:
            return preset
    raise KeyError(f"No eigen preset registered for key '{key}'")


def test_eigen_alignment(probe: Vector, lines: Sequence[Vector], epsilon: float = EIGEN_EPSILON) -> bool:
    """True when `probe` is parallel (within `epsilon`) to any of `lines`."""
    return any(abs(probe.x * line.y - probe.y * line.x) < epsilon for line in lines)


# Not a pytest test despite the name
test_eigen_alignment.__test__ = False  # type: ignore[attr-defined]


@dataclass(frozen=True)
class EigenSweep:
    """
    Progress of the identity -> preset morph.

    Attributes:
        t: Interpolation parameter in [0, 1].
        step: Increment of `t` per tick.
        status: RUNNING while playing.
    """
    t: float = 0.0
    step: float = EIGEN_SWEEP_STEP
    status: SimulationStatus = SimulationStatus.RESET

    def play(self) -> EigenSweep:
        return replace(self, t=0.0, status=SimulationStatus.RUNNING)

    def stop(self) -> EigenSweep:
        return replace(self, t=0.0, status=SimulationStatus.RESET)

    def seek(self, t: float) -> EigenSweep:
        return replace(self, t=max(0.0, min(1.0, t)), status=SimulationStatus.PAUSED)

    def advance(self) -> EigenSweep:
        if self.status is not SimulationStatus.RUNNING:
            return self
        if self.t >= 1.0:
            return replace(self, t=1.0, status=SimulationStatus.PAUSED)
        return replace(self, t=min(1.0, self.t + self.step))

    def matrix(self, target: Matrix2) -> Matrix2:
        return lerp(Matrix2.identity(), target, self.t)
