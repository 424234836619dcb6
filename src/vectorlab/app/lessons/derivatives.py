from __future__ import annotations

import logging

import numpy as np

from vectorlab.app.lessons.base import LessonScene
from vectorlab.app.lessons.registry import register_lesson
from vectorlab.app.state import LessonGroup
from vectorlab.app.ui import drawing
from vectorlab.app.ui.panels.base import LessonPanel
from vectorlab.core.camera import CameraState
from vectorlab.core.fields import DERIVATIVE_FIELDS, ScalarField, field_by_key
from vectorlab.core.interaction import HandleRegistry
from vectorlab.core.linalg import Vector
from vectorlab.core.scene import Scene3D

logger = logging.getLogger(__name__)

COLOR_SURFACE = "#38bdf8"
COLOR_DX = "#f472b6"
COLOR_DY = "#22d3ee"
COLOR_PROBE = "#facc15"
SURFACE_STEPS = 25
SLICE_STEPS = 60
TANGENT_HALF_LENGTH = 1.0


@register_lesson
class DerivativesLesson(LessonScene):
    KEY = "derivatives"
    TITLE = "Partial Derivatives"
    GROUP = LessonGroup.CALCULUS
    ORDER = 1
    THEORY = (
        "A partial derivative is the slope of the surface when you walk in one "
        "direction only. <b>∂f/∂x</b> holds y fixed; <b>∂f/∂y</b> holds x fixed. "
        "Drag the probe to see both tangent lines change."
    )

    def __init__(self) -> None:
        super().__init__()
        self.field: ScalarField = DERIVATIVE_FIELDS[0]
        self.probe = Vector.zero()

    def initial_camera(self) -> CameraState:
        return CameraState(pitch=-0.4, yaw=0.5, scale=50.0)

    def set_field(self, key: str) -> None:
        self.field = field_by_key(DERIVATIVE_FIELDS, key)
        self.probe = Vector.zero()
        logger.debug("Derivative field set to '%s'.", key)
        self.refresh_panel()

    def _build_panel(self, panel: LessonPanel) -> None:
        panel.begin_group("Function")
        self.combo = panel._add_combo("f(x, y):", [(f.name, f.key) for f in DERIVATIVE_FIELDS],
                                      on_change=self.set_field)
        panel._add_readout("equation", "")
        panel._add_readout("dx_text", "∂f/∂x =")
        panel._add_readout("dy_text", "∂f/∂y =")

        panel.begin_group("At the probe")
        panel._add_readout("point", "(x, y):")
        panel._add_readout("value", "f(x, y):")
        panel._add_readout("dx", "∂f/∂x:")
        panel._add_readout("dy", "∂f/∂y:")

    def refresh_panel(self) -> None:
        if self.panel is None:
            return
        x, y = self.probe.x, self.probe.y
        grad = self.field.gradient(x, y)
        self.panel.set_readout("equation", self.field.equation)
        self.panel.set_readout("dx_text", self.field.dx_text)
        self.panel.set_readout("dy_text", self.field.dy_text)
        self.panel.set_readout("point", f"({x:.2f}, {y:.2f})")
        self.panel.set_readout("value", f"{self.field.value(x, y):.3f}")
        self.panel.set_readout("dx", f"{grad.x:.3f}")
        self.panel.set_readout("dy", f"{grad.y:.3f}")

    def register_handles(self, registry: HandleRegistry) -> None:
        registry.register("probe", self.field.surface_point(self.probe.x, self.probe.y))

    def on_handle_dragged(self, handle_id: str, world_delta: Vector, screen_delta: tuple[float, float]) -> None:
        if handle_id != "probe":
            return
        # Vertical screen motion walks along the field's y axis (world Z)
        moved = Vector(self.probe.x + world_delta.x, self.probe.y + world_delta.z + world_delta.y)
        moved = moved.finite_or(self.probe)
        x, y = self.field.clamp(moved.x, moved.y)
        self.probe = Vector(x, y)
        self.refresh_panel()

    def draw(self, scene: Scene3D) -> None:
        fld = self.field
        r = fld.half_range
        drawing.grid(scene, extent=int(np.ceil(r)) + 1)
        drawing.axes(scene, r + 1.0)
        xs, ys, zs = fld.sample_grid(SURFACE_STEPS)
        drawing.surface_wireframe(scene, xs, ys, zs, COLOR_SURFACE, alpha=70)

        px, py = self.probe.x, self.probe.y
        p = fld.surface_point(px, py)
        grad = fld.gradient(px, py)

        # Slices through the probe, one per direction
        ts = np.linspace(-r, r, SLICE_STEPS)
        slice_x = [Vector(float(t), fld.value(float(t), py), py) for t in ts]
        slice_y = [Vector(px, fld.value(px, float(t)), float(t)) for t in ts]
        drawing.polyline(scene, slice_x, drawing.with_alpha(COLOR_DX, 170), 2.0, label="x slice")
        drawing.polyline(scene, slice_y, drawing.with_alpha(COLOR_DY, 170), 2.0, label="y slice")

        h = TANGENT_HALF_LENGTH
        drawing.line(scene, Vector(px - h, p.y - grad.x * h, py), Vector(px + h, p.y + grad.x * h, py),
                     COLOR_DX, 3.0, overlay=True, label="tangent x")
        drawing.line(scene, Vector(px, p.y - grad.y * h, py - h), Vector(px, p.y + grad.y * h, py + h),
                     COLOR_DY, 3.0, overlay=True, label="tangent y")
        drawing.line(scene, Vector(px, 0.0, py), p, drawing.with_alpha(drawing.MUTED, 180), 1.0, dashed=True,
                     label="drop")
        drawing.handle(scene, p, COLOR_PROBE, active=self.active_handle == "probe")

    def reset(self) -> None:
        self.field = DERIVATIVE_FIELDS[0]
        self.probe = Vector.zero()
        if self.panel is not None:
            self.combo.blockSignals(True)
            self.combo.setCurrentIndex(0)
            self.combo.blockSignals(False)
        super().reset()
