"""
Lesson Scene Contract
=====================
Every lesson is a thin instantiation of the visualization core.

A lesson owns its model (vectors, matrices, simulation state) and its
`SceneState` (camera + gesture). The canvas drives it:

    press on a handle  -> on_drag_started(handle_id)
    drag               -> on_handle_dragged(handle_id, world_delta, screen_delta)
    every frame        -> tick(), then draw(scene)
    lesson switch      -> teardown()

Lessons never project or sort anything themselves; they go through the
`Scene3D` facade and the helpers in `vectorlab.app.ui.drawing`.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from vectorlab.app.state import LessonGroup
from vectorlab.config import DEFAULT_PITCH, DEFAULT_YAW, InteractionSettings
from vectorlab.core.camera import CameraState
from vectorlab.core.interaction import HandleRegistry
from vectorlab.core.linalg import Vector
from vectorlab.core.scene import Scene3D, SceneState

if TYPE_CHECKING:
    from PySide6.QtWidgets import QCheckBox, QWidget
    from vectorlab.app.ui.panels.base import LessonPanel

logger = logging.getLogger(__name__)


def apply_drag(vector: Vector, delta: Vector, is_3d: bool = True) -> Vector:
    """Add a drag delta to the last valid value; 2D scenes keep z at 0."""
    moved = (vector + delta).finite_or(vector)
    return moved if is_3d else moved.flattened()


class LessonScene:
    """Base class for lesson scenes."""
    KEY: str = "base"  # Override in subclass
    TITLE: str = "Lesson"
    GROUP: LessonGroup = LessonGroup.LINEAR_ALGEBRA
    ORDER: int = 0
    THEORY: str = ""
    SETTINGS: InteractionSettings = InteractionSettings()
    VIEW_3D: tuple[float, float] = (DEFAULT_PITCH, DEFAULT_YAW)  # pitch, yaw when switching to 3D

    def __init__(self) -> None:
        self.scene_state = SceneState(camera=self.initial_camera(), settings=self.SETTINGS)
        self.panel: Optional[LessonPanel] = None
        self.active_handle: Optional[str] = None
        self._mode_check: Optional[QCheckBox] = None

    # ---- camera ----

    def initial_camera(self) -> CameraState:
        return CameraState.flat()

    @property
    def camera(self) -> CameraState:
        return self.scene_state.camera

    @property
    def is_3d(self) -> bool:
        return self.scene_state.camera.is_3d

    def set_3d(self, enabled: bool) -> None:
        self.scene_state.set_3d(enabled, *self.VIEW_3D)
        self._on_mode_changed()
        self.refresh_panel()

    def _on_mode_changed(self) -> None:
        """Hook for lessons whose model differs between 2D and 3D."""

    # ---- panel ----

    def create_panel(self, parent: QWidget | None = None) -> LessonPanel:
        from vectorlab.app.ui.panels.base import LessonPanel

        self.panel = LessonPanel(self.TITLE, self.THEORY, parent)
        self._build_panel(self.panel)
        self.panel.finish()
        self.refresh_panel()
        return self.panel

    def _build_panel(self, panel: LessonPanel) -> None:
        """Create the lesson's controls (use the panel's `_add_*` helpers)."""

    def _add_3d_toggle(self, panel: LessonPanel) -> None:
        self._mode_check = panel._add_check("3D view", self.is_3d, on_change=self.set_3d)

    def _fmt(self, v: Vector) -> str:
        if self.is_3d:
            return f"({v.x:.2f}, {v.y:.2f}, {v.z:.2f})"
        return f"({v.x:.2f}, {v.y:.2f})"

    def refresh_panel(self) -> None:
        """Push derived quantities into the panel's readouts."""

    # ---- interaction ----

    def register_handles(self, registry: HandleRegistry) -> None:
        """Register draggable points for this frame, highest priority first."""

    def on_drag_started(self, handle_id: str) -> None:
        self.active_handle = handle_id

    def on_drag_finished(self) -> None:
        self.active_handle = None

    def on_handle_dragged(self, handle_id: str, world_delta: Vector, screen_delta: tuple[float, float]) -> None:
        """Apply a drag delta to the quantity bound to `handle_id`."""

    # ---- frame loop ----

    def draw(self, scene: Scene3D) -> None:
        raise NotImplementedError("`draw` must be implemented in subclass.")

    def tick(self) -> None:
        """Advance animations by one frame."""

    def reset(self) -> None:
        """Restore the lesson's initial model and camera."""
        self.scene_state.reset_camera(self.initial_camera())
        self._on_mode_changed()
        if self._mode_check is not None:
            self._mode_check.blockSignals(True)
            self._mode_check.setChecked(self.is_3d)
            self._mode_check.blockSignals(False)
        self.refresh_panel()

    def teardown(self) -> None:
        """Stop timers and release resources before the lesson is discarded."""
        logger.debug("Lesson '%s' torn down.", self.KEY)
