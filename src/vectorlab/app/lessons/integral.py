from __future__ import annotations

import logging

from vectorlab.app.lessons.base import LessonScene
from vectorlab.app.lessons.registry import register_lesson
from vectorlab.app.state import LessonGroup
from vectorlab.app.ui import drawing
from vectorlab.app.ui.panels.base import LessonPanel
from vectorlab.core.camera import CameraState
from vectorlab.core.fields import INTEGRAL_FIELDS, ScalarField, field_by_key
from vectorlab.core.linalg import Vector
from vectorlab.core.scene import Scene3D
from vectorlab.core.simulation.riemann import RiemannEstimate, estimate_riemann_volume

logger = logging.getLogger(__name__)

MIN_RESOLUTION = 2
MAX_RESOLUTION = 50
DEFAULT_RESOLUTION = 6
REFERENCE_RESOLUTION = 400
VERTICALS_BELOW = 20
COLOR_SAMPLE_FILL = "#facc15"


@register_lesson
class IntegralLesson(LessonScene):
    KEY = "integral"
    TITLE = "Double Integrals"
    GROUP = LessonGroup.CALCULUS
    ORDER = 3
    THEORY = (
        "The volume under z = f(x, y) is approximated by prisms: split the "
        "square into n×n cells, take the height at each midpoint and add up "
        "<b>f(xᵢ, yⱼ)·ΔA</b>. More cells give a better estimate."
    )

    def __init__(self) -> None:
        super().__init__()
        self.field: ScalarField = INTEGRAL_FIELDS[0]
        self.resolution = DEFAULT_RESOLUTION
        self.show_sample = True
        self.estimate: RiemannEstimate = RiemannEstimate.empty()
        self.reference = 0.0
        self._recompute()

    def initial_camera(self) -> CameraState:
        return CameraState(pitch=-0.5, yaw=0.6, scale=45.0)

    def _recompute(self) -> None:
        r = self.field.half_range
        self.estimate = estimate_riemann_volume(self.field, self.resolution, r)
        self.reference = estimate_riemann_volume(self.field, REFERENCE_RESOLUTION, r).volume

    def set_field(self, key: str) -> None:
        self.field = field_by_key(INTEGRAL_FIELDS, key)
        logger.debug("Integral field set to '%s'.", key)
        self._recompute()
        self.refresh_panel()

    def set_resolution(self, n: float) -> None:
        self.resolution = max(MIN_RESOLUTION, min(MAX_RESOLUTION, round(n)))
        self._recompute()
        self.refresh_panel()

    def set_show_sample(self, enabled: bool) -> None:
        self.show_sample = enabled

    def _build_panel(self, panel: LessonPanel) -> None:
        panel.begin_group("Surface")
        self.combo = panel._add_combo("f(x, y):", [(f.name, f.key) for f in INTEGRAL_FIELDS],
                                      on_change=self.set_field)
        panel._add_readout("equation", "")

        panel.begin_group("Partition")
        self.slider_n = panel._add_slider(
            "Cells per side:", min_value=MIN_RESOLUTION, max_value=MAX_RESOLUTION,
            default=self.resolution, resolution=MAX_RESOLUTION - MIN_RESOLUTION, on_change=self.set_resolution,
        )
        self.check_sample = panel._add_check("Highlight sample prism (dV)", self.show_sample,
                                             on_change=self.set_show_sample)
        panel._add_readout("grid", "Grid:")
        panel._add_readout("cell", "ΔA = Δx·Δy:")

        panel.begin_group("Volume")
        panel._add_readout("volume", "Σ f·ΔA:")
        panel._add_readout("reference", f"n = {REFERENCE_RESOLUTION}:")
        panel._add_readout("error", "Difference:")

    def refresh_panel(self) -> None:
        if self.panel is None:
            return
        est = self.estimate
        self.panel.set_slider_value(self.slider_n, self.resolution)
        self.panel.set_readout("equation", self.field.equation)
        self.panel.set_readout("grid", f"{self.resolution} × {self.resolution}")
        self.panel.set_readout("cell", f"{est.dx:.3f} × {est.dy:.3f} = {est.cell_area:.4f}")
        self.panel.set_readout("volume", f"{est.volume:.4f}")
        self.panel.set_readout("reference", f"{self.reference:.4f}")
        self.panel.set_readout("error", f"{abs(est.volume - self.reference):.4f}")

    def draw(self, scene: Scene3D) -> None:
        r = self.field.half_range
        drawing.grid(scene, extent=int(r) + 1)
        verticals = self.resolution < VERTICALS_BELOW
        for cell in self.estimate.cells:
            if self.show_sample and cell.is_sample:
                drawing.prism(scene, cell.x0, cell.y0, cell.size, cell.height,
                              drawing.with_alpha(COLOR_SAMPLE_FILL, 230), drawing.with_alpha("#ffffff", 255),
                              width=2.0, verticals=True, caption="dV")
            else:
                fill = drawing.heat_color(cell.height, 0.7)
                stroke = drawing.heat_color(cell.height, 0.3)
                drawing.prism(scene, cell.x0, cell.y0, cell.size, cell.height, fill, stroke, verticals=verticals)
        length = r + 1.0
        drawing.line(scene, Vector.zero(), Vector(length, 0, 0), drawing.AXIS_X, 2.0, overlay=True, label="axis x")
        drawing.line(scene, Vector.zero(), Vector(0, length, 0), drawing.AXIS_Y, 2.0, overlay=True, label="axis z")
        drawing.line(scene, Vector.zero(), Vector(0, 0, length), drawing.AXIS_Z, 2.0, overlay=True, label="axis y")

    def reset(self) -> None:
        self.field = INTEGRAL_FIELDS[0]
        self.resolution = DEFAULT_RESOLUTION
        self.show_sample = True
        self._recompute()
        if self.panel is not None:
            self.combo.blockSignals(True)
            self.combo.setCurrentIndex(0)
            self.combo.blockSignals(False)
            self.check_sample.blockSignals(True)
            self.check_sample.setChecked(True)
            self.check_sample.blockSignals(False)
        super().reset()
