from __future__ import annotations

import logging

from vectorlab.app.lessons.base import LessonScene, apply_drag
from vectorlab.app.lessons.registry import register_lesson
from vectorlab.app.ui import drawing
from vectorlab.app.ui.panels.base import LessonPanel
from vectorlab.core.camera import CameraState
from vectorlab.core.interaction import HandleRegistry
from vectorlab.core.linalg import Matrix2, Vector, eigen_2x2, mat_mul_vec
from vectorlab.core.scene import Scene3D
from vectorlab.core.simulation.base import SimulationStatus
from vectorlab.core.simulation.eigen import (
    EIGEN_PRESETS, EigenPreset, EigenSweep, preset_by_key, test_eigen_alignment,
)

logger = logging.getLogger(__name__)

COLOR_GRID = "#38bdf8"
COLOR_EIGEN = "#22c55e"
COLOR_ALIGNED = "#fbbf24"
COLOR_PROBE = "#f472b6"
GRID_EXTENT = 10
LINE_EXTENT = 20.0
DEFAULT_PROBE = Vector(1.0, 2.0)


@register_lesson
class EigenvectorsLesson(LessonScene):
    KEY = "eigenvectors"
    TITLE = "Eigenvectors"
    ORDER = 9
    THEORY = (
        "Most vectors are knocked off their line by a transformation. "
        "<b>Eigenvectors</b> stay on their own span and are only stretched by "
        "the eigenvalue λ: <b>Av = λv</b>."
    )

    def __init__(self) -> None:
        super().__init__()
        self.preset: EigenPreset = EIGEN_PRESETS[0]
        self.sweep = EigenSweep()
        self.probe = DEFAULT_PROBE

    def initial_camera(self) -> CameraState:
        return CameraState.flat(scale=40.0)

    @property
    def matrix(self) -> Matrix2:
        return self.sweep.matrix(self.preset.matrix)

    @property
    def transformed_probe(self) -> Vector:
        return mat_mul_vec(self.matrix, self.probe)

    @property
    def aligned(self) -> bool:
        return test_eigen_alignment(self.probe, self.preset.lines)

    # ---- controls ----

    def set_preset(self, key: str) -> None:
        self.preset = preset_by_key(key)
        self.sweep = EigenSweep()
        logger.debug("Eigen preset set to '%s'.", key)
        self.refresh_panel()

    def play(self) -> None:
        self.sweep = self.sweep.play()
        self.refresh_panel()

    def stop(self) -> None:
        self.sweep = self.sweep.stop()
        self.refresh_panel()

    def seek(self, t: float) -> None:
        self.sweep = self.sweep.seek(t)
        self.refresh_panel()

    def _build_panel(self, panel: LessonPanel) -> None:
        panel.begin_group("Transformation")
        self.combo = panel._add_combo("Preset:", [(p.name, p.key) for p in EIGEN_PRESETS],
                                      on_change=self.set_preset)
        panel._add_readout("description", "")
        self.slider_t = panel._add_slider("t:", min_value=0.0, max_value=1.0, default=self.sweep.t,
                                          on_change=self.seek)
        panel._add_buttons(("Play", self.play), ("Reset", self.stop))

        panel.begin_group("Probe")
        panel._add_readout("probe", "v:")
        panel._add_readout("image", "Av:")
        panel._add_readout("aligned", "On an eigen line:")

        panel.begin_group("Eigenvalues")
        panel._add_readout("lambdas", "λ:")

    def refresh_panel(self) -> None:
        if self.panel is None:
            return
        index = self.combo.findData(self.preset.key)
        self.combo.blockSignals(True)
        self.combo.setCurrentIndex(index)
        self.combo.blockSignals(False)
        self.panel.set_slider_value(self.slider_t, self.sweep.t)
        self.panel.set_readout("description", self.preset.description)
        self.panel.set_readout("probe", self._fmt(self.probe))
        self.panel.set_readout("image", self._fmt(self.transformed_probe))
        self.panel.set_readout("aligned", "yes" if self.aligned else "no")
        pairs = eigen_2x2(self.preset.matrix)
        if pairs:
            self.panel.set_readout("lambdas", ", ".join(f"{lam:.2f}" for lam, _ in pairs))
        else:
            self.panel.set_readout("lambdas", "no real eigenvalues")

    # ---- interaction ----

    def register_handles(self, registry: HandleRegistry) -> None:
        registry.register("probe", self.transformed_probe)

    def on_drag_started(self, handle_id: str) -> None:
        super().on_drag_started(handle_id)
        if handle_id == "probe":
            self.sweep = self.sweep.stop()
            self.refresh_panel()

    def on_handle_dragged(self, handle_id: str, world_delta: Vector, screen_delta: tuple[float, float]) -> None:
        if handle_id != "probe":
            return
        # The probe is edited before the transformation is applied
        self.sweep = self.sweep.stop()
        self.probe = apply_drag(self.probe, world_delta, is_3d=False)
        self.refresh_panel()

    # ---- frame loop ----

    def tick(self) -> None:
        if self.sweep.status is not SimulationStatus.RUNNING:
            return
        self.sweep = self.sweep.advance()
        self.refresh_panel()

    def draw(self, scene: Scene3D) -> None:
        m = self.matrix
        g = GRID_EXTENT
        for k in range(-g, g + 1):
            color = drawing.with_alpha(COLOR_GRID, 150 if k == 0 else 50)
            drawing.line(scene, mat_mul_vec(m, Vector(k, -g)), mat_mul_vec(m, Vector(k, g)), color, label="grid")
            drawing.line(scene, mat_mul_vec(m, Vector(-g, k)), mat_mul_vec(m, Vector(g, k)), color, label="grid")

        for direction in self.preset.lines:
            a = mat_mul_vec(m, direction * -LINE_EXTENT)
            b = mat_mul_vec(m, direction * LINE_EXTENT)
            drawing.line(scene, a, b, drawing.with_alpha(COLOR_EIGEN, 110), 2.0, dashed=True, label="eigen line")
            drawing.arrow(scene, Vector.zero(), mat_mul_vec(m, direction), COLOR_EIGEN, width=2.0)

        tip = self.transformed_probe
        if self.sweep.t > 0.0:
            drawing.line(scene, self.probe, tip, drawing.with_alpha(drawing.MUTED, 160), 1.0, dashed=True,
                         overlay=True, label="probe path")
        color = COLOR_ALIGNED if self.aligned else COLOR_PROBE
        drawing.arrow(scene, Vector.zero(), tip, color, "v", width=4.0 if self.aligned else 3.0)
        drawing.handle(scene, tip, color, active=self.active_handle == "probe")

    def reset(self) -> None:
        self.preset = EIGEN_PRESETS[0]
        self.sweep = EigenSweep()
        self.probe = DEFAULT_PROBE
        super().reset()
