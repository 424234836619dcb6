"""
Field Catalogues
================
Scalar fields f(x, y) with analytic partial derivatives and planar vector
fields F(x, y) with constant curl, as used by the calculus lessons.

All callables accept plain floats as well as numpy arrays, so the same field
drives the point-wise simulations and the vectorised surface/Riemann grids.

Exports:
    ScalarField, VectorField2D: Field definitions.
    GRADIENT_FIELDS, DERIVATIVE_FIELDS, INTEGRAL_FIELDS, CURL_FIELDS: Catalogues.
    field_by_key: Look up a field in a catalogue.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence, TypeVar, Union

import numpy as np

from vectorlab.core.linalg import Vector

logger = logging.getLogger(__name__)

ArrayOrFloat = Union[float, np.ndarray]
FieldFn = Callable[[ArrayOrFloat, ArrayOrFloat], ArrayOrFloat]


def _zero(x: ArrayOrFloat, y: ArrayOrFloat) -> ArrayOrFloat:
    return np.zeros_like(np.asarray(x, dtype=np.float64)) * y


@dataclass(frozen=True)
class ScalarField:
    """
    A smooth scalar field over the plane.

    Attributes:
        key: Stable identifier.
        name: Display name.
        equation: Human-readable formula.
        f: The field itself.
        df_dx: Partial derivative along x.
        df_dy: Partial derivative along y.
        start: Default probe / descent start point (x, y).
        half_range: Square domain [-r, r]^2 shown and sampled by the lesson.
        dx_text: Human-readable formula of df/dx.
        dy_text: Human-readable formula of df/dy.
    """
    key: str
    name: str
    equation: str
    f: FieldFn
    df_dx: FieldFn = _zero
    df_dy: FieldFn = _zero
    start: tuple[float, float] = (0.0, 0.0)
    half_range: float = 4.0
    dx_text: str = ""
    dy_text: str = ""

    def value(self, x: float, y: float) -> float:
        return float(self.f(x, y))

    def gradient(self, x: float, y: float) -> Vector:
        """(df/dx, df/dy) as a planar vector."""
        return Vector(float(self.df_dx(x, y)), float(self.df_dy(x, y)))

    def surface_point(self, x: float, y: float) -> Vector:
        """
        World point on the surface.

        The surface is drawn with height on world Y, so the field's (x, y)
        domain maps to world (X, Z).
        """
        return Vector(x, self.value(x, y), y)

    def clamp(self, x: float, y: float) -> tuple[float, float]:
        r = self.half_range
        return max(-r, min(r, x)), max(-r, min(r, y))

    def sample_grid(self, steps: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Mesh grid (X, Y, Z) over the field's domain with `steps` points per side."""
        axis = np.linspace(-self.half_range, self.half_range, max(2, steps))
        xx, yy = np.meshgrid(axis, axis, indexing="xy")
        return xx, yy, np.asarray(self.f(xx, yy), dtype=np.float64)


@dataclass(frozen=True)
class VectorField2D:
    """
    A planar vector field F = (Fx, Fy).

    The scalar curl dFy/dx - dFx/dy is constant for every field in the
    catalogue and stored as `curl`.
    """
    key: str
    name: str
    equation: str
    description: str
    fx: FieldFn
    fy: FieldFn
    curl: float

    def at(self, x: float, y: float) -> Vector:
        return Vector(float(self.fx(x, y)), float(self.fy(x, y)))


# ------------------------------------------------------------------------------
# Catalogues
# ------------------------------------------------------------------------------

GRADIENT_FIELDS: tuple[ScalarField, ...] = (
    ScalarField(
        key="bowl",
        name="Convex bowl",
        equation="f(x,y) = (x² + y²) / 4",
        f=lambda x, y: (x * x + y * y) / 4,
        df_dx=lambda x, y: x / 2,
        df_dy=lambda x, y: y / 2,
        start=(3.0, 3.0),
        half_range=4.0,
        dx_text="x / 2",
        dy_text="y / 2",
    ),
    ScalarField(
        key="waves",
        name="Wavy valley (local minima)",
        equation="f(x,y) = cos(x) + cos(y) + (x² + y²) / 10",
        f=lambda x, y: np.cos(x) + np.cos(y) + (x * x + y * y) / 10,
        df_dx=lambda x, y: -np.sin(x) + x / 5,
        df_dy=lambda x, y: -np.sin(y) + y / 5,
        start=(2.5, 2.5),
        half_range=4.0,
        dx_text="-sin(x) + x / 5",
        dy_text="-sin(y) + y / 5",
    ),
    ScalarField(
        key="saddle",
        name="Saddle",
        equation="f(x,y) = (x² - y²) / 4",
        f=lambda x, y: (x * x - y * y) / 4,
        df_dx=lambda x, y: x / 2,
        df_dy=lambda x, y: -y / 2,
        start=(0.1, 3.0),
        half_range=4.0,
        dx_text="x / 2",
        dy_text="-y / 2",
    ),
)

DERIVATIVE_FIELDS: tuple[ScalarField, ...] = (
    ScalarField(
        key="waves",
        name="Waves (sin/cos)",
        equation="f(x,y) = sin(x) + cos(y)",
        f=lambda x, y: np.sin(x) + np.cos(y),
        df_dx=lambda x, y: np.cos(x) + 0 * y,
        df_dy=lambda x, y: -np.sin(y) + 0 * x,
        start=(1.0, 1.0),
        half_range=3.5,
        dx_text="cos(x)",
        dy_text="-sin(y)",
    ),
    ScalarField(
        key="bowl",
        name="Paraboloid",
        equation="f(x,y) = (x² + y²) / 4",
        f=lambda x, y: (x * x + y * y) / 4,
        df_dx=lambda x, y: x / 2,
        df_dy=lambda x, y: y / 2,
        start=(1.0, 1.0),
        half_range=3.5,
        dx_text="x / 2",
        dy_text="y / 2",
    ),
    ScalarField(
        key="saddle",
        name="Saddle",
        equation="f(x,y) = (x² - y²) / 4",
        f=lambda x, y: (x * x - y * y) / 4,
        df_dx=lambda x, y: x / 2,
        df_dy=lambda x, y: -y / 2,
        start=(1.0, 1.0),
        half_range=3.5,
        dx_text="x / 2",
        dy_text="-y / 2",
    ),
    ScalarField(
        key="mult",
        name="Cross slope",
        equation="f(x,y) = x · y / 4",
        f=lambda x, y: (x * y) / 4,
        df_dx=lambda x, y: y / 4,
        df_dy=lambda x, y: x / 4,
        start=(1.0, 1.0),
        half_range=3.5,
        dx_text="y / 4",
        dy_text="x / 4",
    ),
)

INTEGRAL_FIELDS: tuple[ScalarField, ...] = (
    ScalarField(
        key="paraboloid",
        name="Paraboloid",
        equation="z = 1 + (x² + y²) / 8",
        f=lambda x, y: 1 + (x * x + y * y) / 8,
        half_range=3.0,
    ),
    ScalarField(
        key="plane",
        name="Tilted plane",
        equation="z = 2 + 0.3x + 0.3y",
        f=lambda x, y: 2 + 0.3 * x + 0.3 * y,
        half_range=3.0,
    ),
    ScalarField(
        key="waves",
        name="Waves",
        equation="z = 2 + sin(x)·cos(y)",
        f=lambda x, y: 2 + np.sin(x) * np.cos(y),
        half_range=3.0,
    ),
)

CURL_FIELDS: tuple[VectorField2D, ...] = (
    VectorField2D(
        key="vortex",
        name="Vortex",
        equation="F = <-y, x>",
        description="Pure rotation: the flow circles the origin.",
        fx=lambda x, y: -y,
        fy=lambda x, y: x,
        curl=2.0,
    ),
    VectorField2D(
        key="shear",
        name="River (shear)",
        equation="F = <y, 0>",
        description="Straight streamlines, but the speed changes with y, so a floating paddle turns.",
        fx=lambda x, y: y,
        fy=lambda x, y: 0.0 * x,
        curl=-1.0,
    ),
    VectorField2D(
        key="expansion",
        name="Explosion (divergence)",
        equation="F = <x, y>",
        description="Everything moves away from the centre. Motion, but no rotation.",
        fx=lambda x, y: x,
        fy=lambda x, y: y,
        curl=0.0,
    ),
)

T = TypeVar("T", ScalarField, VectorField2D)


def field_by_key(catalogue: Sequence[T], key: str) -> T:
    """
    Raises:
        KeyError: If no field in `catalogue` has the given key.
    """
    for fld in catalogue:
        if fld.key == key:
            return fld
    raise KeyError(f"No field registered for key '{key}'")
