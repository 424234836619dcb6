from __future__ import annotations

import math

from vectorlab.app.lessons.base import LessonScene, apply_drag
from vectorlab.app.lessons.registry import register_lesson
from vectorlab.app.ui import drawing
from vectorlab.app.ui.panels.base import LessonPanel
from vectorlab.app.ui.panels.vector_editor import VectorEditor
from vectorlab.core.interaction import HandleRegistry
from vectorlab.core.linalg import Vector, add, magnitude
from vectorlab.core.scene import Scene3D

COLOR_A = "#3b82f6"
COLOR_B = "#ef4444"
COLOR_R = "#a855f7"

DEFAULT_A = Vector(4.0, 1.0, 0.0)
DEFAULT_B = Vector(1.0, 3.0, 0.0)


@register_lesson
class VectorAdditionLesson(LessonScene):
    KEY = "vector_addition"
    TITLE = "Vector Addition"
    ORDER = 2
    THEORY = (
        "Place B at the tip of A: the arrow from the origin to the end of B is "
        "<b>R = A + B</b>. Both orders give the same diagonal of the parallelogram."
    )

    def __init__(self) -> None:
        super().__init__()
        self.a = DEFAULT_A
        self.b = DEFAULT_B

    @property
    def resultant(self) -> Vector:
        return add(self.a, self.b)

    def _build_panel(self, panel: LessonPanel) -> None:
        self._add_3d_toggle(panel)
        panel.begin_group("Vectors")
        self.editor_a = VectorEditor(self.a, panel)
        self.editor_a.vector_changed.connect(lambda v: self._set("a", v))
        panel._add_widget(self.editor_a, "A:")
        self.editor_b = VectorEditor(self.b, panel)
        self.editor_b.vector_changed.connect(lambda v: self._set("b", v))
        panel._add_widget(self.editor_b, "B:")

        panel.begin_group("Resultant")
        panel._add_readout("r", "R = A + B:")
        panel._add_readout("mag_a", "|A|:")
        panel._add_readout("mag_b", "|B|:")
        panel._add_readout("mag_r", "|R|:")
        panel._add_readout("angle_r", "Angle of R:")

    def _set(self, which: str, v: Vector) -> None:
        v = v if self.is_3d else v.flattened()
        setattr(self, which, v)
        self.refresh_panel()

    def refresh_panel(self) -> None:
        if self.panel is None:
            return
        for editor, v in ((self.editor_a, self.a), (self.editor_b, self.b)):
            editor.set_vector(v)
            editor.set_z_visible(self.is_3d)
        r = self.resultant
        self.panel.set_readout("r", self._fmt(r))
        self.panel.set_readout("mag_a", f"{magnitude(self.a):.2f}")
        self.panel.set_readout("mag_b", f"{magnitude(self.b):.2f}")
        self.panel.set_readout("mag_r", f"{magnitude(r):.2f}")
        angle = "N/A" if self.is_3d else f"{math.degrees(math.atan2(r.y, r.x)) % 360:.1f}°"
        self.panel.set_readout("angle_r", angle)

    def _on_mode_changed(self) -> None:
        if not self.is_3d:
            self.a = self.a.flattened()
            self.b = self.b.flattened()

    def register_handles(self, registry: HandleRegistry) -> None:
        registry.register("a", self.a)
        registry.register("b", self.b)

    def on_handle_dragged(self, handle_id: str, world_delta: Vector, screen_delta: tuple[float, float]) -> None:
        match handle_id:
            case "a":
                self.a = apply_drag(self.a, world_delta, self.is_3d)
            case "b":
                self.b = apply_drag(self.b, world_delta, self.is_3d)
            case _:
                return
        self.refresh_panel()

    def draw(self, scene: Scene3D) -> None:
        drawing.grid(scene)
        drawing.axes(scene)
        r = self.resultant
        # parallelogram guides
        drawing.line(scene, self.a, r, drawing.with_alpha(COLOR_B, 120), 2.0, dashed=True)
        drawing.line(scene, self.b, r, drawing.with_alpha(COLOR_A, 120), 2.0, dashed=True)
        drawing.arrow(scene, Vector.zero(), r, COLOR_R, "R", width=4.0)
        drawing.arrow(scene, Vector.zero(), self.a, COLOR_A, "A")
        drawing.arrow(scene, Vector.zero(), self.b, COLOR_B, "B")
        drawing.handle(scene, self.a, COLOR_A, active=self.active_handle == "a")
        drawing.handle(scene, self.b, COLOR_B, active=self.active_handle == "b")

    def reset(self) -> None:
        self.a, self.b = DEFAULT_A, DEFAULT_B
        super().reset()
