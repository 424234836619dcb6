from __future__ import annotations

from vectorlab.app.lessons.base import LessonScene, apply_drag
from vectorlab.app.lessons.registry import register_lesson
from vectorlab.app.ui import drawing
from vectorlab.app.ui.panels.base import LessonPanel
from vectorlab.core.interaction import HandleRegistry
from vectorlab.core.linalg import Vector, add, scale
from vectorlab.core.scene import Scene3D

COLOR_P = "#22c55e"
COLOR_V = "#f59e0b"
COLOR_LINE = "#94a3b8"
COLOR_R = "#e879f9"

DEFAULT_P = Vector(-2.0, -1.0, 0.0)
DEFAULT_V = Vector(1.0, 1.0, 0.0)
T_RANGE = 5.0
LINE_EXTENT = 20.0


@register_lesson
class LineEquationLesson(LessonScene):
    KEY = "line_equation"
    TITLE = "Vector Equation of a Line"
    ORDER = 4
    THEORY = (
        "<b>r(t) = P + t·v</b>: start at the point P and walk t steps along the "
        "direction v. Every real t gives one point of the line."
    )

    def __init__(self) -> None:
        super().__init__()
        self.point = DEFAULT_P
        self.direction = DEFAULT_V
        self.t = 0.0

    def position(self, t: float) -> Vector:
        return add(self.point, scale(self.direction, t))

    def _build_panel(self, panel: LessonPanel) -> None:
        self._add_3d_toggle(panel)
        panel.begin_group("Parameter")
        self.slider_t = panel._add_slider("t:", min_value=-T_RANGE, max_value=T_RANGE, default=self.t,
                                          on_change=self._set_t)
        panel.begin_group("Equation")
        panel._add_readout("p", "P:")
        panel._add_readout("v", "v:")
        panel._add_readout("t", "t:")
        panel._add_readout("r", "r(t):")

    def _set_t(self, t: float) -> None:
        self.t = t
        self.refresh_panel()

    def refresh_panel(self) -> None:
        if self.panel is None:
            return
        self.panel.set_slider_value(self.slider_t, self.t)
        self.panel.set_readout("p", self._fmt(self.point))
        self.panel.set_readout("v", self._fmt(self.direction))
        self.panel.set_readout("t", f"{self.t:.2f}")
        self.panel.set_readout("r", self._fmt(self.position(self.t)))

    def _on_mode_changed(self) -> None:
        if not self.is_3d:
            self.point = self.point.flattened()
            self.direction = self.direction.flattened()

    def register_handles(self, registry: HandleRegistry) -> None:
        registry.register("p", self.point, radius=15.0)
        registry.register("v", add(self.point, self.direction), radius=15.0)

    def on_handle_dragged(self, handle_id: str, world_delta: Vector, screen_delta: tuple[float, float]) -> None:
        match handle_id:
            case "p":
                self.point = apply_drag(self.point, world_delta, self.is_3d)
            case "v":
                self.direction = apply_drag(self.direction, world_delta, self.is_3d)
            case _:
                return
        self.refresh_panel()

    def draw(self, scene: Scene3D) -> None:
        drawing.grid(scene)
        drawing.axes(scene)
        drawing.line(scene, self.position(-LINE_EXTENT), self.position(LINE_EXTENT), COLOR_LINE, 1.5, label="line")
        r = self.position(self.t)
        drawing.arrow(scene, Vector.zero(), self.point, COLOR_P, "P", width=2.0, dashed=True)
        drawing.arrow(scene, Vector.zero(), r, COLOR_R, "r(t)", width=2.0)
        drawing.arrow(scene, self.point, add(self.point, self.direction), COLOR_V, "v")
        drawing.dot(scene, r, COLOR_R, radius=5.0, overlay=True)
        drawing.handle(scene, self.point, COLOR_P, active=self.active_handle == "p")
        drawing.handle(scene, add(self.point, self.direction), COLOR_V, active=self.active_handle == "v")

    def reset(self) -> None:
        self.point, self.direction, self.t = DEFAULT_P, DEFAULT_V, 0.0
        super().reset()
