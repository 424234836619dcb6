"""
Scene Canvas
============
The QPainter surface every lesson draws into.

Why is this file needed?
------------------------
1. Owns the frame loop: a `QTimer` calls `lesson.tick()` and schedules a
   repaint roughly every 16 ms.
2. Translates Qt mouse/wheel events into the pure interaction functions of
   `vectorlab.core.interaction`, so camera changes and handle drags behave
   identically in every lesson.
3. Builds a fresh `Scene3D` (render queue + handle registry) per paint and
   flushes it back-to-front.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QTimer, Qt
from PySide6.QtGui import QColor, QMouseEvent, QPainter, QPaintEvent, QResizeEvent, QWheelEvent
from PySide6.QtWidgets import QSizePolicy, QWidget

from vectorlab.app.lessons.base import LessonScene
from vectorlab.app.ui.drawing import BACKGROUND
from vectorlab.config import FRAME_INTERVAL_MS
from vectorlab.core.interaction import (
    HandleRegistry, PointerEvent, apply_wheel, end_interaction, start_gesture, update_interaction,
)
from vectorlab.core.scene import Scene3D

logger = logging.getLogger(__name__)


class SceneCanvas(QWidget):
    """Interactive viewport for the active lesson."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMouseTracking(False)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(400, 300)

        self._lesson: Optional[LessonScene] = None
        self.last_painted = 0

        self._timer = QTimer(self)
        self._timer.setInterval(FRAME_INTERVAL_MS)
        self._timer.timeout.connect(self._on_frame)

    @property
    def lesson(self) -> Optional[LessonScene]:
        return self._lesson

    def set_lesson(self, lesson: Optional[LessonScene]) -> None:
        """Attach a lesson; the frame loop runs only while one is attached."""
        self._lesson = lesson
        if lesson is None:
            self._timer.stop()
        else:
            lesson.scene_state.resized(self.width(), self.height())
            self._timer.start()
        self.update()

    # ---- frame loop ----

    def _on_frame(self) -> None:
        if self._lesson is None:
            return
        self._lesson.tick()
        self.update()

    def paintEvent(self, event: QPaintEvent) -> None:
        del event
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.fillRect(self.rect(), QColor(BACKGROUND))
            if self._lesson is None:
                return
            scene = Scene3D.from_state(self._lesson.scene_state)
            self._lesson.draw(scene)
            self.last_painted = scene.flush(painter)
        finally:
            painter.end()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        if self._lesson is not None:
            self._lesson.scene_state.resized(self.width(), self.height())
        self.update()

    # ---- pointer ----

    @staticmethod
    def _pointer(event: QMouseEvent) -> PointerEvent:
        pos = event.position()
        return PointerEvent(pos.x(), pos.y())

    def mousePressEvent(self, event: QMouseEvent) -> None:
        lesson = self._lesson
        if lesson is None or event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        state = lesson.scene_state
        registry = HandleRegistry(state.settings.handle_radius)
        lesson.register_handles(registry)
        state.interaction = start_gesture(self._pointer(event), registry, state.camera, state.viewport)
        target = state.interaction.target
        if target.is_handle:
            lesson.on_drag_started(target.handle_id)
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
        else:
            self.setCursor(Qt.CursorShape.SizeAllCursor)
        self.update()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        lesson = self._lesson
        if lesson is None or not lesson.scene_state.interaction.is_dragging:
            super().mouseMoveEvent(event)
            return
        state = lesson.scene_state
        upd = update_interaction(self._pointer(event), state.interaction, state.camera, state.settings)
        state.camera = upd.camera
        state.interaction = upd.state
        target = upd.state.target
        if target.is_handle:
            lesson.on_handle_dragged(target.handle_id, upd.handle_delta, upd.screen_delta)
        self.update()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._finish_gesture()
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event) -> None:
        self._finish_gesture()
        super().leaveEvent(event)

    def _finish_gesture(self) -> None:
        lesson = self._lesson
        if lesson is None or not lesson.scene_state.interaction.is_dragging:
            return
        if lesson.scene_state.interaction.target.is_handle:
            lesson.on_drag_finished()
        lesson.scene_state.interaction = end_interaction()
        self.unsetCursor()
        self.update()

    def wheelEvent(self, event: QWheelEvent) -> None:
        lesson = self._lesson
        if lesson is None:
            return
        state = lesson.scene_state
        state.camera = apply_wheel(
            state.camera, -event.angleDelta().y(), state.settings.min_scale, state.settings.max_scale,
        )
        event.accept()
        self.update()
