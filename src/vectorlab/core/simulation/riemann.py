"""
Riemann Volume
==============
Midpoint-rule estimate of the volume under a positive surface over a square.

The square [-r, r]^2 is split into n x n cells of side 2r/n. Each cell
contributes f(mid) * cell_area when f(mid) > 0; cells where the surface dips
to zero or below are dropped (volume above the plane only). The cells closest
to the origin are flagged as the "sample" prism the lesson annotates.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from vectorlab.core.fields import ScalarField

logger = logging.getLogger(__name__)

SAMPLE_RADIUS_FACTOR: float = 1.5


@dataclass(frozen=True)
class RiemannCell:
    """One prism: lower-left corner (x0, y0), side `size`, midpoint height."""
    x0: float
    y0: float
    size: float
    height: float
    is_sample: bool = False

    @property
    def volume(self) -> float:
        return self.height * self.size * self.size


@dataclass(frozen=True)
class RiemannEstimate:
    volume: float
    cells: tuple[RiemannCell, ...]
    dx: float
    dy: float
    cell_area: float

    @classmethod
    def empty(cls) -> RiemannEstimate:
        return cls(volume=0.0, cells=(), dx=0.0, dy=0.0, cell_area=0.0)


def estimate_riemann_volume(field: ScalarField, resolution: int, half_range: float) -> RiemannEstimate:
    """
    Args:
        field: Surface height z = f(x, y).
        resolution: Number of cells per side (n).
        half_range: Half side of the integration square (r).

    Returns:
        The estimate with every contributing cell. Degenerate input
        (n < 1, r <= 0 or non-finite r) gives an empty estimate.
    """
    n = int(resolution)
    if n < 1 or not np.isfinite(half_range) or half_range <= 0.0:
        return RiemannEstimate.empty()

    step = 2.0 * half_range / n
    corners = -half_range + step * np.arange(n, dtype=np.float64)
    mids = corners + step / 2.0
    mx, my = np.meshgrid(mids, mids, indexing="ij")

    with np.errstate(all="ignore"):
        heights = np.broadcast_to(np.asarray(field.f(mx, my), dtype=np.float64), mx.shape)
    positive = np.isfinite(heights) & (heights > 0.0)

    cell_area = step * step
    volume = float(np.sum(heights[positive]) * cell_area)

    threshold = step / SAMPLE_RADIUS_FACTOR
    sample = (np.abs(mx) < threshold) & (np.abs(my) < threshold)

    cells = tuple(
        RiemannCell(
            x0=float(corners[i]),
            y0=float(corners[j]),
            size=step,
            height=float(heights[i, j]),
            is_sample=bool(sample[i, j]),
        )
        for i, j in zip(*np.nonzero(positive))
    )
    logger.debug("Riemann estimate n=%d r=%.2f: V=%.4f over %d cells.", n, half_range, volume, len(cells))
    return RiemannEstimate(volume=volume, cells=cells, dx=step, dy=step, cell_area=cell_area)
