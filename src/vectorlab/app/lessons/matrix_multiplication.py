from __future__ import annotations

import logging

from PySide6.QtWidgets import QListWidget

from vectorlab.app.lessons.base import LessonScene
from vectorlab.app.lessons.registry import register_lesson
from vectorlab.app.ui import drawing
from vectorlab.app.ui.panels.base import LessonPanel
from vectorlab.core.camera import CameraState
from vectorlab.core.linalg import Matrix2, Vector, determinant, mat_mul_vec
from vectorlab.core.scene import Scene3D
from vectorlab.core.simulation.base import SimulationStatus
from vectorlab.core.simulation.composition import (
    CompositionAnimation, advance_composition, compose_queue, reversed_queue, start_composition,
)

logger = logging.getLogger(__name__)

COLOR_I = "#ef4444"
COLOR_J = "#22c55e"
COLOR_GRID = "#38bdf8"
GHOST_EXTENT = 15

STEP_PRESETS: dict[str, Matrix2] = {
    "Rotate 90°": Matrix2(0.0, -1.0, 1.0, 0.0),
    "Scale 1.5": Matrix2(1.5, 0.0, 0.0, 1.5),
    "Shear X": Matrix2(1.0, 1.0, 0.0, 1.0),
    "Reflect X": Matrix2(-1.0, 0.0, 0.0, 1.0),
}


def _describe(m: Matrix2) -> str:
    for name, preset in STEP_PRESETS.items():
        if preset == m:
            return name
    return f"[{m.a:g}, {m.b:g}; {m.c:g}, {m.d:g}]"


def _format_matrix(m: Matrix2) -> str:
    return f"[{m.a:.2f}, {m.b:.2f}; {m.c:.2f}, {m.d:.2f}]"


@register_lesson
class MatrixMultiplicationLesson(LessonScene):
    KEY = "matrix_multiplication"
    TITLE = "Matrix Multiplication"
    ORDER = 8
    THEORY = (
        "Multiplying matrices chains transformations. The product "
        "<b>Mₖ·…·M₁</b> applies M₁ first. Order matters: rotating then "
        "shearing is not the same as shearing then rotating."
    )

    def __init__(self) -> None:
        super().__init__()
        self.queue: list[Matrix2] = []
        self.animation = CompositionAnimation()
        self.show_ghost = True

    def initial_camera(self) -> CameraState:
        return CameraState.flat(scale=30.0)

    @property
    def current(self) -> Matrix2:
        return self.animation.current

    @property
    def resultant(self) -> Matrix2:
        return compose_queue(self.queue)

    # ---- queue operations ----

    def add_step(self, m: Matrix2) -> None:
        self.queue.append(m)
        self.animation = CompositionAnimation()
        self.refresh_panel()

    def clear(self) -> None:
        self.queue.clear()
        self.animation = CompositionAnimation()
        self.refresh_panel()

    def reverse(self) -> None:
        self.queue = list(reversed_queue(self.queue))
        self.animation = CompositionAnimation()
        self.refresh_panel()

    def play(self) -> None:
        self.animation = start_composition(self.queue)
        logger.info("Playing composition of %d matrices.", len(self.queue))
        self.refresh_panel()

    def set_ghost(self, enabled: bool) -> None:
        self.show_ghost = enabled

    # ---- panel ----

    def _build_panel(self, panel: LessonPanel) -> None:
        panel.begin_group("Add step")
        panel._add_buttons(*[(name, lambda m=m: self.add_step(m)) for name, m in STEP_PRESETS.items()])

        panel.begin_group("Queue (applied top to bottom)")
        self.queue_list = QListWidget(panel)
        self.queue_list.setMaximumHeight(140)
        panel._add_widget(self.queue_list)
        panel._add_buttons(("Play", self.play), ("Reverse", self.reverse), ("Clear", self.clear))
        panel._add_check("Show original grid", self.show_ghost, on_change=self.set_ghost)

        panel.begin_group("Result")
        panel._add_readout("step", "Step:")
        panel._add_readout("current", "Current:")
        panel._add_readout("resultant", "Mₖ·…·M₁:")
        panel._add_readout("det", "det:")

    def refresh_panel(self) -> None:
        if self.panel is None:
            return
        self.queue_list.clear()
        for k, m in enumerate(self.queue, start=1):
            self.queue_list.addItem(f"{k}. {_describe(m)}")
        match self.animation.status:
            case SimulationStatus.RUNNING:
                step = f"{self.animation.step_index + 1} / {len(self.queue)}"
            case SimulationStatus.PAUSED:
                step = "done"
            case _:
                step = "-"
        self.panel.set_readout("step", step)
        self.panel.set_readout("current", _format_matrix(self.current))
        self.panel.set_readout("resultant", _format_matrix(self.resultant))
        self.panel.set_readout("det", f"{determinant(self.resultant):.2f}")

    # ---- frame loop ----

    def tick(self) -> None:
        if self.animation.status is not SimulationStatus.RUNNING:
            return
        self.animation = advance_composition(self.animation)
        self.refresh_panel()

    def draw(self, scene: Scene3D) -> None:
        m = self.current
        g = GHOST_EXTENT
        if self.show_ghost:
            ghost = drawing.with_alpha(drawing.GRID_MAJOR, 90)
            for k in range(-g, g + 1):
                drawing.line(scene, Vector(k, -g), Vector(k, g), ghost, label="ghost grid")
                drawing.line(scene, Vector(-g, k), Vector(g, k), ghost, label="ghost grid")
        for k in range(-g, g + 1):
            color = drawing.with_alpha(COLOR_GRID, 160 if k == 0 else 60)
            drawing.line(scene, mat_mul_vec(m, Vector(k, -g)), mat_mul_vec(m, Vector(k, g)), color, label="grid")
            drawing.line(scene, mat_mul_vec(m, Vector(-g, k)), mat_mul_vec(m, Vector(g, k)), color, label="grid")
        drawing.arrow(scene, Vector.zero(), m.i_hat, COLOR_I, "î")
        drawing.arrow(scene, Vector.zero(), m.j_hat, COLOR_J, "ĵ")

    def reset(self) -> None:
        self.queue = []
        self.animation = CompositionAnimation()
        self.show_ghost = True
        super().reset()
