"""
Math Kernel
===========
Vector and matrix value types plus the pure functions every lesson builds on.

Why is this file needed?
------------------------
1. Single source of truth: vector arithmetic, matrix application and
   determinants are used by the camera, the simulations and all lessons.
2. Safety: every function is total over finite floats. Degenerate input
   (zero magnitude, singular matrix) yields a safe value instead of NaN, so
   the UI never displays NaN or Infinity.

Classes:
    Vector: 2D/3D vector (2D vectors have z == 0).
    Matrix2: Row-major 2x2 matrix [[a, b], [c, d]].
    Matrix3: Row-major 3x3 matrix [[a, b, c], [d, e, f], [g, h, i]].
"""
from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Union, overload

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def finite_or(value: float, fallback: float) -> float:
    """Return `value` if it is a finite number, otherwise `fallback`."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return fallback
    return value if math.isfinite(value) else fallback


@dataclass(frozen=True)
class Vector:
    """
    A vector in 3D space. 2D quantities simply keep z at 0.
    """
    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    @classmethod
    def zero(cls) -> Vector:
        return cls(0.0, 0.0, 0.0)

    @property
    def magnitude(self) -> float:
        return magnitude(self)

    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in (self.x, self.y, self.z))

    def finite_or(self, fallback: Vector) -> Vector:
        """Component-wise: keep finite components, replace the rest from `fallback`."""
        return Vector(
            finite_or(self.x, fallback.x),
            finite_or(self.y, fallback.y),
            finite_or(self.z, fallback.z),
        )

    def flattened(self) -> Vector:
        """Same vector with the Z component forced to 0 (2D mode)."""
        return Vector(self.x, self.y, 0.0)

    def with_component(self, axis: str, value: float) -> Vector:
        """Return a copy with one named component ('x', 'y' or 'z') replaced."""
        if axis not in ("x", "y", "z"):
            raise ValueError(f"Unknown vector component '{axis}'.")
        data = {"x": self.x, "y": self.y, "z": self.z}
        data[axis] = value
        return Vector(**data)


@dataclass(frozen=True)
class Matrix2:
    """Row-major 2x2 matrix [[a, b], [c, d]]."""
    a: float
    b: float
    c: float
    d: float

    @classmethod
    def identity(cls) -> Matrix2:
        return cls(1.0, 0.0, 0.0, 1.0)

    @classmethod
    def rotation(cls, angle_rad: float) -> Matrix2:
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        # Snap tiny float noise so that e.g. rotation(pi/2) reads as [[0, -1], [1, 0]]
        cos_a = 0.0 if abs(cos_a) < 1e-12 else cos_a
        sin_a = 0.0 if abs(sin_a) < 1e-12 else sin_a
        return cls(cos_a, -sin_a, sin_a, cos_a)

    @classmethod
    def scaling(cls, sx: float, sy: float) -> Matrix2:
        return cls(sx, 0.0, 0.0, sy)

    @classmethod
    def shear(cls, k: float) -> Matrix2:
        return cls(1.0, k, 0.0, 1.0)

    @property
    def i_hat(self) -> Vector:
        """Image of (1, 0): the first column."""
        return Vector(self.a, self.c)

    @property
    def j_hat(self) -> Vector:
        """Image of (0, 1): the second column."""
        return Vector(self.b, self.d)

    def as_array(self) -> npt.NDArray[np.float64]:
        return np.array([[self.a, self.b], [self.c, self.d]], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: npt.ArrayLike) -> Matrix2:
        m = np.asarray(arr, dtype=np.float64).reshape(2, 2)
        return cls(*(float(v) for v in m.ravel()))


@dataclass(frozen=True)
class Matrix3:
    """Row-major 3x3 matrix [[a, b, c], [d, e, f], [g, h, i]]."""
    a: float
    b: float
    c: float
    d: float
    e: float
    f: float
    g: float
    h: float
    i: float

    @classmethod
    def identity(cls) -> Matrix3:
        return cls(1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)

    @property
    def columns(self) -> tuple[Vector, Vector, Vector]:
        """Images of the canonical basis vectors."""
        return (
            Vector(self.a, self.d, self.g),
            Vector(self.b, self.e, self.h),
            Vector(self.c, self.f, self.i),
        )

    def as_array(self) -> npt.NDArray[np.float64]:
        return np.array(
            [[self.a, self.b, self.c], [self.d, self.e, self.f], [self.g, self.h, self.i]],
            dtype=np.float64,
        )

    @classmethod
    def from_array(cls, arr: npt.ArrayLike) -> Matrix3:
        m = np.asarray(arr, dtype=np.float64).reshape(3, 3)
        return cls(*(float(v) for v in m.ravel()))


Matrix = Union[Matrix2, Matrix3]


# ------------------------------------------------------------------------------
# Vector operations
# ------------------------------------------------------------------------------

def add(a: Vector, b: Vector) -> Vector:
    return a + b


def sub(a: Vector, b: Vector) -> Vector:
    return a - b


def scale(v: Vector, s: float) -> Vector:
    return v * s


def dot(a: Vector, b: Vector) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vector, b: Vector) -> Vector:
    """Right-hand-rule cross product. |a x b| is the parallelogram area."""
    return Vector(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def magnitude(v: Vector) -> float:
    return math.sqrt(dot(v, v))


def normalize(v: Vector) -> Vector:
    """Unit vector along `v`; the zero vector maps to the zero vector."""
    mag = magnitude(v)
    if mag == 0.0:
        return Vector.zero()
    return v * (1.0 / mag)


def angle_between(a: Vector, b: Vector) -> float:
    """Angle in radians in [0, pi]. Returns 0 when either vector is zero."""
    denom = magnitude(a) * magnitude(b)
    if denom == 0.0:
        return 0.0
    cos_theta = max(-1.0, min(1.0, dot(a, b) / denom))
    return math.acos(cos_theta)


def scalar_projection(a: Vector, b: Vector) -> float:
    """Coefficient k such that k * b is the projection of `a` onto `b` (0 for b == 0)."""
    denom = dot(b, b)
    if denom == 0.0:
        return 0.0
    return dot(a, b) / denom


def vector_projection(a: Vector, b: Vector) -> Vector:
    return b * scalar_projection(a, b)


def polar_to_vector(r: float, theta_deg: float, phi_deg: float = 90.0) -> Vector:
    """
    Spherical (physics convention) to Cartesian.

    Args:
        r: Radius.
        theta_deg: Azimuth in the XY plane, measured from +X.
        phi_deg: Inclination from +Z. The default 90 degrees keeps the vector in the XY plane.
    """
    theta = math.radians(theta_deg)
    phi = math.radians(phi_deg)
    return Vector(
        r * math.sin(phi) * math.cos(theta),
        r * math.sin(phi) * math.sin(theta),
        r * math.cos(phi),
    )


def vector_to_polar(v: Vector) -> tuple[float, float, float]:
    """
    Cartesian to spherical: (r, theta_deg in [0, 360), phi_deg in [0, 180]).

    The zero vector reports phi = 90 (on the XY plane).
    """
    r = magnitude(v)
    theta = math.degrees(math.atan2(v.y, v.x)) % 360.0
    if r == 0.0:
        return 0.0, theta, 90.0
    phi = math.degrees(math.acos(max(-1.0, min(1.0, v.z / r))))
    return r, theta, phi


# ------------------------------------------------------------------------------
# Matrix operations
# ------------------------------------------------------------------------------

def mat_mul_vec(m: Matrix, v: Vector) -> Vector:
    """Apply the linear map `m` to `v`. A 2x2 map leaves the z component untouched."""
    if isinstance(m, Matrix2):
        return Vector(m.a * v.x + m.b * v.y, m.c * v.x + m.d * v.y, v.z)
    return Vector(
        m.a * v.x + m.b * v.y + m.c * v.z,
        m.d * v.x + m.e * v.y + m.f * v.z,
        m.g * v.x + m.h * v.y + m.i * v.z,
    )


@overload
def mat_mul_mat(m1: Matrix2, m2: Matrix2) -> Matrix2: ...
@overload
def mat_mul_mat(m1: Matrix3, m2: Matrix3) -> Matrix3: ...


def mat_mul_mat(m1: Matrix, m2: Matrix) -> Matrix:
    """
    Composition m1 * m2: apply `m2` first, then `m1`.

    Raises:
        TypeError: If the matrices have different sizes.
    """
    if type(m1) is not type(m2):
        raise TypeError(f"Cannot compose {type(m1).__name__} with {type(m2).__name__}.")
    if isinstance(m1, Matrix2):
        return Matrix2(
            m1.a * m2.a + m1.b * m2.c,
            m1.a * m2.b + m1.b * m2.d,
            m1.c * m2.a + m1.d * m2.c,
            m1.c * m2.b + m1.d * m2.d,
        )
    return Matrix3.from_array(m1.as_array() @ m2.as_array())


def determinant(m: Matrix) -> float:
    """ad - bc for 2x2, cofactor expansion along the first row for 3x3."""
    if isinstance(m, Matrix2):
        return m.a * m.d - m.b * m.c
    return (
        m.a * (m.e * m.i - m.f * m.h)
        - m.b * (m.d * m.i - m.f * m.g)
        + m.c * (m.d * m.h - m.e * m.g)
    )


def transformed_square_area(m: Matrix2) -> float:
    """
    Signed area of the image of the unit square, from the cross product of the
    transformed basis vectors. Equals the determinant.
    """
    return cross(m.i_hat, m.j_hat).z


def is_singular(m: Matrix, tol: float = 1e-9) -> bool:
    return abs(determinant(m)) < tol


def eigen_2x2(m: Matrix2, tol: float = 1e-9) -> list[tuple[float, Vector]]:
    """
    Real eigenpairs of a 2x2 matrix as (eigenvalue, unit eigen-direction).

    Complex eigenvalues (e.g. rotations) have no real eigen-direction and
    yield an empty list. Repeated eigenvalues with a full eigenspace
    (uniform scaling) report both canonical axes.
    """
    values, vectors = np.linalg.eig(m.as_array())
    if np.any(np.abs(values.imag) > tol):
        return []

    pairs: list[tuple[float, Vector]] = []
    for k in range(len(values)):
        direction = normalize(Vector(float(vectors[0, k].real), float(vectors[1, k].real)))
        if direction == Vector.zero():
            continue
        # Skip duplicated directions (defective matrices such as shears)
        if any(abs(cross(direction, d).z) < tol for _, d in pairs):
            continue
        pairs.append((float(values[k].real), direction))
    return pairs


# ------------------------------------------------------------------------------
# Interpolation
# ------------------------------------------------------------------------------

@overload
def lerp(a: float, b: float, t: float) -> float: ...
@overload
def lerp(a: Vector, b: Vector, t: float) -> Vector: ...
@overload
def lerp(a: Matrix2, b: Matrix2, t: float) -> Matrix2: ...
@overload
def lerp(a: Matrix3, b: Matrix3, t: float) -> Matrix3: ...


def lerp(a, b, t: float):
    """
    Linear interpolation a + (b - a) * t for scalars, vectors and matrices.

    `t` is not clamped; callers clamp when a hard boundary is required.
    """
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a + (b - a) * t
    if type(a) is not type(b):
        raise TypeError(f"Cannot interpolate {type(a).__name__} with {type(b).__name__}.")
    values = {
        fld.name: getattr(a, fld.name) + (getattr(b, fld.name) - getattr(a, fld.name)) * t
        for fld in fields(a)
    }
    return type(a)(**values)


def matrix_distance(a: Matrix, b: Matrix) -> float:
    """L1 distance between the coefficients of two same-sized matrices."""
    return sum(abs(getattr(a, fld.name) - getattr(b, fld.name)) for fld in fields(a))
