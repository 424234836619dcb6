"""
Camera & Projection
===================
Maps world points to screen points for an orbiting orthographic camera.

Why is this file needed?
------------------------
Every lesson used to carry its own copy of the rotate/project helpers. The
rotation order (yaw about the vertical axis first, then pitch about the
horizontal axis) defines what "up" feels like while orbiting, so it must be
identical everywhere. This module is the only place it is written down.

The projection is orthographic: depth is kept only for painter's-algorithm
sorting and never used for foreshortening, so lengths and areas on screen stay
faithful to the mathematics.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace

from vectorlab.config import DEFAULT_PITCH, DEFAULT_SCALE, DEFAULT_YAW, MAX_SCALE, MIN_SCALE
from vectorlab.core.linalg import Vector

PITCH_LIMIT: float = math.pi / 2


@dataclass(frozen=True)
class Viewport:
    """Canvas size in pixels."""
    width: float
    height: float


@dataclass(frozen=True)
class ScreenPoint:
    """Projected point. `depth` is camera-space Z, larger = further away."""
    x: float
    y: float
    depth: float = 0.0

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y)


@dataclass(frozen=True)
class CameraState:
    """
    Orbit camera owned by one lesson scene.

    Attributes:
        pitch: Rotation about the horizontal axis (radians), clamped to [-pi/2, pi/2].
        yaw: Rotation about the vertical axis (radians), unbounded.
        scale: Zoom in pixels per world unit.
        pan_x: Screen-space offset in pixels.
        pan_y: Screen-space offset in pixels.
        is_3d: When False the view is a flat XY plane (no rotation, Z ignored).
    """
    pitch: float = DEFAULT_PITCH
    yaw: float = DEFAULT_YAW
    scale: float = DEFAULT_SCALE
    pan_x: float = 0.0
    pan_y: float = 0.0
    is_3d: bool = True

    @classmethod
    def flat(cls, scale: float = DEFAULT_SCALE) -> CameraState:
        """A 2D camera looking straight at the XY plane."""
        return cls(pitch=0.0, yaw=0.0, scale=scale, is_3d=False)

    def orbit(self, d_yaw: float, d_pitch: float) -> CameraState:
        return replace(self, yaw=self.yaw + d_yaw, pitch=clamp_pitch(self.pitch + d_pitch))

    def panned(self, dx: float, dy: float) -> CameraState:
        return replace(self, pan_x=self.pan_x + dx, pan_y=self.pan_y + dy)

    def zoomed(self, factor: float, min_scale: float = MIN_SCALE, max_scale: float = MAX_SCALE) -> CameraState:
        new_scale = max(min_scale, min(max_scale, self.scale * factor))
        return replace(self, scale=new_scale)

    def flattened(self) -> CameraState:
        """Switch to 2D mode: no rotation and no pan."""
        return replace(self, pitch=0.0, yaw=0.0, pan_x=0.0, pan_y=0.0, is_3d=False)

    def raised(self, pitch: float = DEFAULT_PITCH, yaw: float = DEFAULT_YAW) -> CameraState:
        """Switch to 3D mode with the default orbit angles."""
        return replace(self, pitch=clamp_pitch(pitch), yaw=yaw, is_3d=True)


def clamp_pitch(pitch: float) -> float:
    return max(-PITCH_LIMIT, min(PITCH_LIMIT, pitch))


def rotate_y(p: Vector, angle: float) -> Vector:
    """Rotate about the vertical (Y) axis."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return Vector(p.x * cos_a + p.z * sin_a, p.y, -p.x * sin_a + p.z * cos_a)


def rotate_x(p: Vector, angle: float) -> Vector:
    """Rotate about the horizontal (X) axis."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return Vector(p.x, p.y * cos_a - p.z * sin_a, p.y * sin_a + p.z * cos_a)


def to_camera_space(p: Vector, camera: CameraState) -> Vector:
    """Yaw first, then pitch. In 2D mode Z is dropped and no rotation happens."""
    if not camera.is_3d:
        return p.flattened()
    return rotate_x(rotate_y(p, camera.yaw), camera.pitch)


def project(p: Vector, camera: CameraState, viewport: Viewport) -> ScreenPoint:
    """Project a world point to the screen (screen Y grows downwards)."""
    r = to_camera_space(p, camera)
    return ScreenPoint(
        x=viewport.width / 2 + camera.pan_x + r.x * camera.scale,
        y=viewport.height / 2 + camera.pan_y - r.y * camera.scale,
        depth=r.z,
    )


def screen_delta_to_world(dx: float, dy: float, camera: CameraState) -> Vector:
    """
    Map a screen-space drag delta to a world-space delta for a dragged handle.

    Horizontal motion is rotated back through the camera yaw so that dragging
    follows the current view; vertical motion moves along world Y.
    Zero movement maps to the zero vector.
    """
    if camera.scale <= 0.0 or (dx == 0.0 and dy == 0.0):
        return Vector.zero()
    sensitivity = 1.0 / camera.scale
    if not camera.is_3d:
        return Vector(dx * sensitivity, -dy * sensitivity, 0.0)
    cos_y = math.cos(camera.yaw)
    sin_y = math.sin(camera.yaw)
    return Vector(dx * cos_y * sensitivity, -dy * sensitivity, dx * sin_y * sensitivity)


def floor_delta_to_world(dx: float, dy: float, camera: CameraState) -> Vector:
    """
    Map a screen drag to motion on the ground plane (world X / world Z).

    Used for probes that live on a surface y = f(x, z) and are moved in the
    domain, not in height.
    """
    if camera.scale <= 0.0 or (dx == 0.0 and dy == 0.0):
        return Vector.zero()
    sensitivity = 1.0 / camera.scale
    cos_y = math.cos(camera.yaw)
    sin_y = math.sin(camera.yaw)
    return Vector(
        (dx * cos_y + dy * sin_y) * sensitivity,
        0.0,
        (dy * cos_y - dx * sin_y) * sensitivity,
    )
