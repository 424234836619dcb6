from __future__ import annotations

from vectorlab.app.lessons.base import LessonScene, apply_drag
from vectorlab.app.lessons.registry import register_lesson
from vectorlab.app.ui import drawing
from vectorlab.app.ui.panels.base import LessonPanel
from vectorlab.app.ui.panels.vector_editor import VectorEditor
from vectorlab.config import InteractionSettings
from vectorlab.core.camera import CameraState
from vectorlab.core.interaction import HandleRegistry
from vectorlab.core.linalg import Vector, add, cross, dot, magnitude
from vectorlab.core.scene import Scene3D

COLOR_A = "#3b82f6"
COLOR_B = "#ef4444"
COLOR_C = "#22c55e"

DEFAULT_A = Vector(2.0, 0.0, 1.0)
DEFAULT_B = Vector(0.0, 2.0, 1.0)


@register_lesson
class CrossProductLesson(LessonScene):
    KEY = "cross_product"
    TITLE = "Cross Product"
    ORDER = 6
    THEORY = (
        "<b>A×B</b> is perpendicular to both A and B (right-hand rule). Its length "
        "is the area of the parallelogram they span; parallel vectors give zero."
    )
    SETTINGS = InteractionSettings(handle_radius=20.0)

    def __init__(self) -> None:
        super().__init__()
        self.a = DEFAULT_A
        self.b = DEFAULT_B

    def initial_camera(self) -> CameraState:
        return CameraState(pitch=-0.5, yaw=0.5, scale=50.0)

    @property
    def product(self) -> Vector:
        return cross(self.a, self.b)

    def _build_panel(self, panel: LessonPanel) -> None:
        panel.begin_group("Vectors")
        self.editor_a = VectorEditor(self.a, panel)
        self.editor_a.vector_changed.connect(lambda v: self._set("a", v))
        panel._add_widget(self.editor_a, "A:")
        self.editor_b = VectorEditor(self.b, panel)
        self.editor_b.vector_changed.connect(lambda v: self._set("b", v))
        panel._add_widget(self.editor_b, "B:")

        panel.begin_group("Results")
        panel._add_readout("cross", "A×B:")
        panel._add_readout("area", "Area |A×B|:")
        panel._add_readout("check", "(A×B)·A, (A×B)·B:")

    def _set(self, which: str, v: Vector) -> None:
        setattr(self, which, v)
        self.refresh_panel()

    def refresh_panel(self) -> None:
        if self.panel is None:
            return
        self.editor_a.set_vector(self.a)
        self.editor_b.set_vector(self.b)
        c = self.product
        self.panel.set_readout("cross", self._fmt(c))
        self.panel.set_readout("area", f"{magnitude(c):.2f}")
        self.panel.set_readout("check", f"{dot(c, self.a):.2f}, {dot(c, self.b):.2f}")

    def register_handles(self, registry: HandleRegistry) -> None:
        registry.register("a", self.a)
        registry.register("b", self.b)

    def on_handle_dragged(self, handle_id: str, world_delta: Vector, screen_delta: tuple[float, float]) -> None:
        match handle_id:
            case "a":
                self.a = apply_drag(self.a, world_delta)
            case "b":
                self.b = apply_drag(self.b, world_delta)
            case _:
                return
        self.refresh_panel()

    def draw(self, scene: Scene3D) -> None:
        drawing.grid(scene)
        drawing.axes(scene)
        corners = [Vector.zero(), self.a, add(self.a, self.b), self.b]
        drawing.polygon(scene, corners, drawing.with_alpha(COLOR_C, 60), drawing.with_alpha(COLOR_C, 160),
                        label="parallelogram")
        drawing.arrow(scene, Vector.zero(), self.product, COLOR_C, "A×B", width=4.0)
        drawing.arrow(scene, Vector.zero(), self.a, COLOR_A, "A")
        drawing.arrow(scene, Vector.zero(), self.b, COLOR_B, "B")
        drawing.handle(scene, self.a, COLOR_A, active=self.active_handle == "a")
        drawing.handle(scene, self.b, COLOR_B, active=self.active_handle == "b")

    def reset(self) -> None:
        self.a, self.b = DEFAULT_A, DEFAULT_B
        super().reset()
