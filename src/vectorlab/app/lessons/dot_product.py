from __future__ import annotations

import math

from vectorlab.app.lessons.base import LessonScene, apply_drag
from vectorlab.app.lessons.registry import register_lesson
from vectorlab.app.ui import drawing
from vectorlab.app.ui.panels.base import LessonPanel
from vectorlab.app.ui.panels.vector_editor import VectorEditor
from vectorlab.core.interaction import HandleRegistry
from vectorlab.core.linalg import (
    Vector, angle_between, dot, magnitude, scalar_projection, vector_projection,
)
from vectorlab.core.scene import Scene3D

COLOR_A = "#3b82f6"
COLOR_B = "#ef4444"
COLOR_PROJ = "#c084fc"

DEFAULT_A = Vector(3.0, 2.0, 0.0)
DEFAULT_B = Vector(4.0, 0.0, 0.0)


@register_lesson
class DotProductLesson(LessonScene):
    KEY = "dot_product"
    TITLE = "Dot Product"
    ORDER = 5
    THEORY = (
        "<b>A·B = |A||B| cos θ</b>. It measures how much A points along B: "
        "positive when they agree, zero when perpendicular, negative when opposed. "
        "The shadow of A on B is the projection."
    )

    def __init__(self) -> None:
        super().__init__()
        self.a = DEFAULT_A
        self.b = DEFAULT_B

    def _build_panel(self, panel: LessonPanel) -> None:
        self._add_3d_toggle(panel)
        panel.begin_group("Vectors")
        self.editor_a = VectorEditor(self.a, panel)
        self.editor_a.vector_changed.connect(lambda v: self._set("a", v))
        panel._add_widget(self.editor_a, "A:")
        self.editor_b = VectorEditor(self.b, panel)
        self.editor_b.vector_changed.connect(lambda v: self._set("b", v))
        panel._add_widget(self.editor_b, "B:")

        panel.begin_group("Results")
        panel._add_readout("dot", "A·B:")
        panel._add_readout("mag_a", "|A|:")
        panel._add_readout("mag_b", "|B|:")
        panel._add_readout("angle", "θ:")
        panel._add_readout("cos", "cos θ:")
        panel._add_readout("proj", "Projection of A on B:")
        panel._add_readout("relation", "Relation:")

    def _set(self, which: str, v: Vector) -> None:
        setattr(self, which, v if self.is_3d else v.flattened())
        self.refresh_panel()

    def refresh_panel(self) -> None:
        if self.panel is None:
            return
        for editor, v in ((self.editor_a, self.a), (self.editor_b, self.b)):
            editor.set_vector(v)
            editor.set_z_visible(self.is_3d)
        d = dot(self.a, self.b)
        theta = angle_between(self.a, self.b)
        self.panel.set_readout("dot", f"{d:.2f}")
        self.panel.set_readout("mag_a", f"{magnitude(self.a):.2f}")
        self.panel.set_readout("mag_b", f"{magnitude(self.b):.2f}")
        self.panel.set_readout("angle", f"{math.degrees(theta):.1f}°")
        self.panel.set_readout("cos", f"{math.cos(theta):.3f}")
        self.panel.set_readout("proj", f"{scalar_projection(self.a, self.b):.2f}·B")
        if abs(d) < 1e-9:
            relation = "perpendicular"
        elif d > 0:
            relation = "same side (acute)"
        else:
            relation = "opposed (obtuse)"
        self.panel.set_readout("relation", relation)

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
        proj = vector_projection(self.a, self.b)
        # line carrying B, so the projection is visible beyond its tip
        if magnitude(self.b) > 0:
            drawing.line(scene, self.b * -10.0, self.b * 10.0, drawing.with_alpha(COLOR_B, 60))
        drawing.line(scene, self.a, proj, drawing.with_alpha(COLOR_PROJ, 160), 1.0, dashed=True, label="drop")
        drawing.arrow(scene, Vector.zero(), proj, COLOR_PROJ, "proj", width=5.0)
        drawing.arrow(scene, Vector.zero(), self.a, COLOR_A, "A")
        drawing.arrow(scene, Vector.zero(), self.b, COLOR_B, "B")
        drawing.handle(scene, self.a, COLOR_A, active=self.active_handle == "a")
        drawing.handle(scene, self.b, COLOR_B, active=self.active_handle == "b")

    def reset(self) -> None:
        self.a, self.b = DEFAULT_A, DEFAULT_B
        super().reset()
