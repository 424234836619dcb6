from __future__ import annotations

from vectorlab.app.lessons.base import LessonScene, apply_drag
from vectorlab.app.lessons.registry import register_lesson
from vectorlab.app.ui import drawing
from vectorlab.app.ui.panels.base import LessonPanel
from vectorlab.app.ui.panels.vector_editor import VectorEditor
from vectorlab.core.interaction import HandleRegistry
from vectorlab.core.linalg import Vector, finite_or, magnitude, scale
from vectorlab.core.scene import Scene3D

COLOR_V = "#38bdf8"
COLOR_KV = "#f59e0b"

DEFAULT_V = Vector(2.0, 1.0, 0.0)
DEFAULT_K = 2.0


@register_lesson
class ScalarMultiplicationLesson(LessonScene):
    KEY = "scalar_multiplication"
    TITLE = "Scalar Multiplication"
    ORDER = 3
    THEORY = (
        "Multiplying by a scalar k stretches the vector by |k|. A negative k "
        "also flips its direction; k = 0 collapses it to the origin."
    )

    def __init__(self) -> None:
        super().__init__()
        self.vector = DEFAULT_V
        self.k = DEFAULT_K

    @property
    def scaled(self) -> Vector:
        return scale(self.vector, self.k)

    def _build_panel(self, panel: LessonPanel) -> None:
        self._add_3d_toggle(panel)
        panel.begin_group("Inputs")
        self.editor = VectorEditor(self.vector, panel)
        self.editor.vector_changed.connect(self._set_vector)
        panel._add_widget(self.editor, "v:")
        self.spin_k = panel._add_spin("k:", min_value=-5.0, max_value=5.0, step=0.1, default=self.k,
                                      on_change=self._set_k)

        panel.begin_group("Result")
        panel._add_readout("kv", "k·v:")
        panel._add_readout("mag_v", "|v|:")
        panel._add_readout("mag_kv", "|k·v| = |k|·|v|:")
        panel._add_readout("direction", "Direction:")

    def _set_vector(self, v: Vector) -> None:
        self.vector = v if self.is_3d else v.flattened()
        self.refresh_panel()

    def _set_k(self, k: float) -> None:
        self.k = finite_or(k, self.k)
        self.refresh_panel()

    def refresh_panel(self) -> None:
        if self.panel is None:
            return
        self.editor.set_vector(self.vector)
        self.editor.set_z_visible(self.is_3d)
        self.spin_k.blockSignals(True)
        self.spin_k.setValue(self.k)
        self.spin_k.blockSignals(False)
        kv = self.scaled
        self.panel.set_readout("kv", self._fmt(kv))
        self.panel.set_readout("mag_v", f"{magnitude(self.vector):.2f}")
        self.panel.set_readout("mag_kv", f"{magnitude(kv):.2f}")
        if self.k > 0:
            direction = "same"
        elif self.k < 0:
            direction = "reversed"
        else:
            direction = "collapsed (zero vector)"
        self.panel.set_readout("direction", direction)

    def _on_mode_changed(self) -> None:
        if not self.is_3d:
            self.vector = self.vector.flattened()

    def register_handles(self, registry: HandleRegistry) -> None:
        registry.register("v", self.vector)

    def on_handle_dragged(self, handle_id: str, world_delta: Vector, screen_delta: tuple[float, float]) -> None:
        if handle_id == "v":
            self.vector = apply_drag(self.vector, world_delta, self.is_3d)
            self.refresh_panel()

    def draw(self, scene: Scene3D) -> None:
        drawing.grid(scene)
        drawing.axes(scene)
        drawing.arrow(scene, Vector.zero(), self.scaled, COLOR_KV, f"{self.k:.1f}v", width=5.0)
        drawing.arrow(scene, Vector.zero(), self.vector, COLOR_V, "v")
        drawing.handle(scene, self.vector, COLOR_V, active=self.active_handle == "v")

    def reset(self) -> None:
        self.vector, self.k = DEFAULT_V, DEFAULT_K
        super().reset()
