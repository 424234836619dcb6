"""
Scene Facade
============
The single object a lesson sees while drawing a frame.

Why is this file needed?
------------------------
1. Lessons must not know how points are rotated or in which order commands
   are painted. They call `scene.project(...)` and `scene.submit_draw(...)`.
2. The canvas owns one `SceneState` per lesson (camera + gesture) and builds a
   fresh `Scene3D` for every frame, so render commands never leak between frames.

Classes:
    SceneState: Camera, viewport and interaction state owned by the canvas.
    Scene3D: Per-frame projection + render queue + handle registry.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from vectorlab.config import DEFAULT_PITCH, DEFAULT_YAW, InteractionSettings
from vectorlab.core.camera import CameraState, ScreenPoint, Viewport, project
from vectorlab.core.interaction import HandleRegistry, InteractionState
from vectorlab.core.linalg import Vector
from vectorlab.core.render_queue import PaintFn, RenderQueue

logger = logging.getLogger(__name__)


@dataclass
class SceneState:
    """Mutable per-lesson view state. Only the canvas writes to it."""
    camera: CameraState = field(default_factory=CameraState)
    viewport: Viewport = field(default_factory=lambda: Viewport(800.0, 600.0))
    interaction: InteractionState = field(default_factory=InteractionState)
    settings: InteractionSettings = field(default_factory=InteractionSettings)

    def set_3d(self, enabled: bool, pitch: float = DEFAULT_PITCH, yaw: float = DEFAULT_YAW) -> None:
        """Toggle 2D/3D mode. Entering 2D discards rotation and pan; entering 3D uses `pitch`/`yaw`."""
        if enabled == self.camera.is_3d:
            return
        self.camera = self.camera.raised(pitch, yaw) if enabled else self.camera.flattened()
        logger.debug("Scene switched to %s mode.", "3D" if enabled else "2D")

    def reset_camera(self, camera: Optional[CameraState] = None) -> None:
        self.camera = camera if camera is not None else CameraState()
        self.interaction = InteractionState()

    def resized(self, width: float, height: float) -> None:
        self.viewport = replace(self.viewport, width=float(width), height=float(height))


class Scene3D:
    """
    Drawing surface handed to `LessonScene.draw`.

    Attributes:
        camera: Camera used for every projection in this frame.
        viewport: Canvas size in pixels.
        queue: Commands collected for this frame.
        handle_registry: Handles registered by the lesson for hit-testing.
    """

    def __init__(
        self,
        camera: CameraState,
        viewport: Viewport,
        queue: Optional[RenderQueue] = None,
        handle_registry: Optional[HandleRegistry] = None,
    ) -> None:
        self.camera = camera
        self.viewport = viewport
        self.queue = queue if queue is not None else RenderQueue()
        self.handle_registry = handle_registry if handle_registry is not None else HandleRegistry()

    @classmethod
    def from_state(cls, state: SceneState, handle_registry: Optional[HandleRegistry] = None) -> Scene3D:
        registry = handle_registry if handle_registry is not None else HandleRegistry(state.settings.handle_radius)
        return cls(state.camera, state.viewport, RenderQueue(), registry)

    @property
    def is_3d(self) -> bool:
        return self.camera.is_3d

    @property
    def scale(self) -> float:
        return self.camera.scale

    def project(self, point: Vector) -> ScreenPoint:
        return project(point, self.camera, self.viewport)

    def submit_draw(self, depth_key: float, paint: PaintFn, label: str = "") -> None:
        self.queue.submit_draw(depth_key, paint, label)

    def submit_overlay(self, depth_key: float, paint: PaintFn, label: str = "") -> None:
        self.queue.submit_overlay(depth_key, paint, label)

    def flush(self, painter: Any) -> int:
        return self.queue.flush(painter)
