from __future__ import annotations

import math

from vectorlab.app.lessons.base import LessonScene, apply_drag
from vectorlab.app.lessons.registry import register_lesson
from vectorlab.app.ui import drawing
from vectorlab.app.ui.panels.base import LessonPanel
from vectorlab.app.ui.panels.vector_editor import VectorEditor
from vectorlab.core.interaction import HandleRegistry
from vectorlab.core.linalg import Vector, magnitude, normalize, polar_to_vector, vector_to_polar
from vectorlab.core.scene import Scene3D

COLOR_V = "#38bdf8"


@register_lesson
class VectorsLesson(LessonScene):
    KEY = "vectors"
    TITLE = "Vectors"
    ORDER = 1
    THEORY = (
        "A vector has a <b>magnitude</b> and a <b>direction</b>. Drag its tip, type "
        "its components, or give it in polar form (length and angles)."
    )

    def __init__(self) -> None:
        super().__init__()
        self.vector = Vector(3.0, 4.0, 0.0)

    def _build_panel(self, panel: LessonPanel) -> None:
        self._add_3d_toggle(panel)
        panel.begin_group("Cartesian")
        self.editor = VectorEditor(self.vector, panel)
        self.editor.vector_changed.connect(self._set_vector)
        panel._add_widget(self.editor)

        panel.begin_group("Polar")
        r, theta, phi = vector_to_polar(self.vector)
        self.spin_r = panel._add_spin("r:", min_value=0.0, max_value=50.0, step=0.5, default=r,
                                      on_change=lambda _: self._from_polar())
        self.spin_theta = panel._add_spin("θ:", min_value=0.0, max_value=360.0, step=5.0, default=theta,
                                          suffix="°", on_change=lambda _: self._from_polar())
        self.spin_phi = panel._add_spin("φ:", min_value=0.0, max_value=180.0, step=5.0, default=phi,
                                        suffix="°", on_change=lambda _: self._from_polar())

        panel.begin_group("Analysis")
        panel._add_readout("magnitude", "|v|:")
        panel._add_readout("angle", "Angle with +X:")
        panel._add_readout("unit", "Unit vector:")

    def refresh_panel(self) -> None:
        if self.panel is None:
            return
        self.editor.set_vector(self.vector)
        self.editor.set_z_visible(self.is_3d)
        self.spin_phi.setEnabled(self.is_3d)

        r, theta, phi = vector_to_polar(self.vector)
        for spin, value in ((self.spin_r, r), (self.spin_theta, theta), (self.spin_phi, phi)):
            spin.blockSignals(True)
            spin.setValue(value)
            spin.blockSignals(False)

        self.panel.set_readout("magnitude", f"{magnitude(self.vector):.2f}")
        if self.is_3d:
            self.panel.set_readout("angle", "N/A")
        else:
            self.panel.set_readout("angle", f"{math.degrees(math.atan2(self.vector.y, self.vector.x)) % 360:.1f}°")
        self.panel.set_readout("unit", self._fmt(normalize(self.vector)))

    def _set_vector(self, v: Vector) -> None:
        self.vector = v if self.is_3d else v.flattened()
        self.refresh_panel()

    def _from_polar(self) -> None:
        phi = self.spin_phi.value() if self.is_3d else 90.0
        self._set_vector(polar_to_vector(self.spin_r.value(), self.spin_theta.value(), phi))

    def _on_mode_changed(self) -> None:
        if not self.is_3d:
            self.vector = self.vector.flattened()

    def register_handles(self, registry: HandleRegistry) -> None:
        registry.register("tip", self.vector)

    def on_handle_dragged(self, handle_id: str, world_delta: Vector, screen_delta: tuple[float, float]) -> None:
        if handle_id == "tip":
            self.vector = apply_drag(self.vector, world_delta, self.is_3d)
            self.refresh_panel()

    def draw(self, scene: Scene3D) -> None:
        drawing.grid(scene)
        drawing.axes(scene)
        v = self.vector
        # component guides
        if scene.is_3d:
            floor = Vector(v.x, 0.0, v.z)
            drawing.line(scene, Vector(v.x, 0, 0), floor, drawing.MUTED, dashed=True)
            drawing.line(scene, Vector(0, 0, v.z), floor, drawing.MUTED, dashed=True)
            drawing.line(scene, floor, v, drawing.MUTED, dashed=True)
        else:
            drawing.line(scene, Vector(v.x, 0), v, drawing.MUTED, dashed=True)
            drawing.line(scene, Vector(0, v.y), v, drawing.MUTED, dashed=True)
        drawing.arrow(scene, Vector.zero(), v, COLOR_V, "v")
        drawing.handle(scene, v, COLOR_V, active=self.active_handle == "tip")

    def reset(self) -> None:
        self.vector = Vector(3.0, 4.0, 0.0)
        super().reset()
