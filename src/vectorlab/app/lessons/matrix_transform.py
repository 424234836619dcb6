from __future__ import annotations

import logging

from vectorlab.app.lessons.base import LessonScene
from vectorlab.app.lessons.registry import register_lesson
from vectorlab.app.ui import drawing
from vectorlab.app.ui.panels.base import LessonPanel
from vectorlab.app.ui.panels.matrix_editor import MatrixEditor
from vectorlab.core.camera import CameraState
from vectorlab.core.linalg import Matrix, Matrix2, Matrix3, Vector, determinant, is_singular, mat_mul_vec
from vectorlab.core.scene import Scene3D
from vectorlab.core.simulation.transition import approach

logger = logging.getLogger(__name__)

COLOR_I = "#ef4444"
COLOR_J = "#22c55e"
COLOR_K = "#3b82f6"
COLOR_POSITIVE = "#22d3ee"
COLOR_NEGATIVE = "#fb7185"
GRID_EXTENT = 10

PRESETS_2D: dict[str, Matrix2] = {
    "Identity": Matrix2.identity(),
    "Shear": Matrix2(1.0, 1.0, 0.0, 1.0),
    "Rotate 90°": Matrix2(0.0, -1.0, 1.0, 0.0),
    "Scale": Matrix2(2.0, 0.0, 0.0, 2.0),
    "Reflect": Matrix2(-1.0, 0.0, 0.0, 1.0),
    "Collapse": Matrix2(1.0, 1.0, 1.0, 1.0),
}

PRESETS_3D: dict[str, Matrix3] = {
    "Identity": Matrix3.identity(),
    "Scale": Matrix3(1.5, 0, 0, 0, 1.5, 0, 0, 0, 1.5),
    "Shear": Matrix3(1, 0.5, 0, 0, 1, 0, 0, 0, 1),
    "Rotate X": Matrix3(1, 0, 0, 0, 0, -1, 0, 1, 0),
    "Rotate Y": Matrix3(0, 0, 1, 0, 1, 0, -1, 0, 0),
    "Rotate Z": Matrix3(0, -1, 0, 1, 0, 0, 0, 0, 1),
    "Flatten Z": Matrix3(1, 0, 0, 0, 1, 0, 0, 0, 0),
}

CUBE_CORNERS = [Vector(x, y, z) for z in (0.0, 1.0) for y in (0.0, 1.0) for x in (0.0, 1.0)]
CUBE_FACES = ((0, 1, 3, 2), (4, 5, 7, 6), (0, 1, 5, 4), (2, 3, 7, 6), (0, 2, 6, 4), (1, 3, 7, 5))


@register_lesson
class MatrixTransformLesson(LessonScene):
    KEY = "matrix_transform"
    TITLE = "Matrix Transformations"
    ORDER = 7
    THEORY = (
        "The columns of a matrix are where the basis vectors land. The whole grid "
        "follows them. The <b>determinant</b> is the factor by which areas "
        "(volumes in 3D) change; zero means space collapses to a lower dimension."
    )
    VIEW_3D = (-0.4, 0.6)

    def __init__(self) -> None:
        super().__init__()
        self.target: Matrix = Matrix2.identity()
        self.current: Matrix = Matrix2.identity()
        self.animating = False

    def initial_camera(self) -> CameraState:
        return CameraState.flat(scale=30.0)

    def _build_panel(self, panel: LessonPanel) -> None:
        self._add_3d_toggle(panel)
        panel.begin_group("Matrix")
        self.editor = MatrixEditor(self.target, panel)
        self.editor.matrix_changed.connect(self.set_target)
        panel._add_widget(self.editor)

        panel.begin_group("Presets (2D)")
        self._preset_buttons_2d = panel._add_buttons(
            *[(name, lambda m=m: self.set_target(m)) for name, m in PRESETS_2D.items()]
        )
        panel.begin_group("Presets (3D)")
        self._preset_buttons_3d = panel._add_buttons(
            *[(name, lambda m=m: self.set_target(m)) for name, m in PRESETS_3D.items()]
        )

        panel.begin_group("Analysis")
        panel._add_readout("det", "Determinant:")
        panel._add_readout("state", "Space:")

    def set_target(self, m: Matrix) -> None:
        if isinstance(m, Matrix3) != self.is_3d:
            logger.debug("Ignoring %s preset in %s mode.", type(m).__name__, "3D" if self.is_3d else "2D")
            return
        self.target = m
        self.animating = True
        self.refresh_panel()

    def _on_mode_changed(self) -> None:
        identity = Matrix3.identity() if self.is_3d else Matrix2.identity()
        self.target = identity
        self.current = identity
        self.animating = False

    def refresh_panel(self) -> None:
        if self.panel is None:
            return
        self.editor.set_matrix(self.target)
        for b in self._preset_buttons_2d:
            b.setEnabled(not self.is_3d)
        for b in self._preset_buttons_3d:
            b.setEnabled(self.is_3d)
        det = determinant(self.current)
        self.panel.set_readout("det", f"{det:.2f}")
        if is_singular(self.current):
            state = "collapsed"
        elif det < 0:
            state = "orientation flipped"
        else:
            state = "preserved orientation"
        self.panel.set_readout("state", state)

    def tick(self) -> None:
        if not self.animating:
            return
        self.current, done = approach(self.current, self.target)
        if done:
            self.animating = False
        self.refresh_panel()

    def draw(self, scene: Scene3D) -> None:
        m = self.current
        det = determinant(m)
        face = COLOR_POSITIVE if det >= 0 else COLOR_NEGATIVE
        if isinstance(m, Matrix2):
            self._draw_grid(scene, m)
            square = [mat_mul_vec(m, p) for p in (Vector(0, 0), Vector(1, 0), Vector(1, 1), Vector(0, 1))]
            drawing.polygon(scene, square, drawing.with_alpha(face, 70), face, label="unit square")
            centre = mat_mul_vec(m, Vector(0.5, 0.5))
            drawing.text(scene, centre, f"Area: {det:.2f}", face)
            drawing.arrow(scene, Vector.zero(), m.i_hat, COLOR_I, "î")
            drawing.arrow(scene, Vector.zero(), m.j_hat, COLOR_J, "ĵ")
        else:
            drawing.grid(scene, extent=6)
            drawing.axes(scene, 6.0)
            corners = [mat_mul_vec(m, p) for p in CUBE_CORNERS]
            for quad in CUBE_FACES:
                drawing.polygon(scene, [corners[k] for k in quad], drawing.with_alpha(face, 45),
                                drawing.with_alpha(face, 160), label="cube face")
            i_hat, j_hat, k_hat = m.columns
            drawing.arrow(scene, Vector.zero(), i_hat, COLOR_I, "î")
            drawing.arrow(scene, Vector.zero(), j_hat, COLOR_J, "ĵ")
            drawing.arrow(scene, Vector.zero(), k_hat, COLOR_K, "k̂")

    def _draw_grid(self, scene: Scene3D, m: Matrix2) -> None:
        g = GRID_EXTENT
        ghost = drawing.with_alpha(drawing.GRID_MAJOR, 90)
        for k in range(-g, g + 1):
            drawing.line(scene, Vector(k, -g), Vector(k, g), ghost, label="ghost grid")
            drawing.line(scene, Vector(-g, k), Vector(g, k), ghost, label="ghost grid")
        for k in range(-g, g + 1):
            color = drawing.with_alpha("#38bdf8", 160 if k == 0 else 70)
            drawing.line(scene, mat_mul_vec(m, Vector(k, -g)), mat_mul_vec(m, Vector(k, g)), color, label="grid")
            drawing.line(scene, mat_mul_vec(m, Vector(-g, k)), mat_mul_vec(m, Vector(g, k)), color, label="grid")

    def reset(self) -> None:
        # The base reset flattens the camera, and the mode hook restores identity matrices
        super().reset()
