"""
Gradient Descent Lesson
=======================
A ball rolls down a loss surface one discrete step at a time.

Why is this file needed?
------------------------
1. Binds the pure `core.simulation.gradient_descent` stepper to a 100 ms
   `QTimer` and the run/pause/reset controls.
2. Shows the loss curve of the current run in a pyqtgraph plot.
3. Lets the user drag the ball, which stops the run and clears the trail.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import QTimer

from vectorlab.app.lessons.base import LessonScene
from vectorlab.app.lessons.registry import register_lesson
from vectorlab.app.state import LessonGroup
from vectorlab.app.ui import drawing
from vectorlab.app.ui.panels.base import LessonPanel
from vectorlab.config import GRADIENT_STEP_INTERVAL_MS, InteractionSettings
from vectorlab.core.camera import CameraState, floor_delta_to_world
from vectorlab.core.fields import GRADIENT_FIELDS, ScalarField, field_by_key
from vectorlab.core.interaction import HandleRegistry
from vectorlab.core.linalg import Vector
from vectorlab.core.scene import Scene3D
from vectorlab.core.simulation.base import SimulationStatus
from vectorlab.core.simulation.gradient_descent import (
    DEFAULT_LEARNING_RATE, MAX_LEARNING_RATE, MIN_LEARNING_RATE, GradientDescentState, GradientOutcome,
    clamp_learning_rate, loss_history, move_probe, reset_gradient_descent, step_gradient_descent,
)
from vectorlab.core.simulation.gradient_descent import pause as pause_descent
from vectorlab.core.simulation.gradient_descent import start as start_descent

logger = logging.getLogger(__name__)

COLOR_SURFACE = "#38bdf8"
COLOR_BALL = "#facc15"
COLOR_TRAIL = "#f97316"
COLOR_GRADIENT = "#ef4444"
COLOR_DESCENT = "#22c55e"
SURFACE_STEPS = 25

OUTCOME_TEXT = {
    GradientOutcome.NONE: "ready",
    GradientOutcome.STEPPED: "descending",
    GradientOutcome.CONVERGED: "converged (minimum reached)",
    GradientOutcome.DIVERGED: "diverged (learning rate too high)",
}


@register_lesson
class GradientDescentLesson(LessonScene):
    KEY = "gradient_descent"
    TITLE = "Gradient Descent"
    GROUP = LessonGroup.CALCULUS
    ORDER = 2
    THEORY = (
        "The gradient points uphill. Stepping against it, "
        "<b>p ← p − α∇f(p)</b>, walks downhill towards a minimum. A small "
        "learning rate α is slow; a large one overshoots and can diverge."
    )
    SETTINGS = InteractionSettings(handle_radius=15.0, min_scale=20.0, max_scale=150.0)

    def __init__(self) -> None:
        super().__init__()
        self.field: ScalarField = GRADIENT_FIELDS[0]
        self.state: GradientDescentState = reset_gradient_descent(self.field)
        self._timer: Optional[QTimer] = None

    def initial_camera(self) -> CameraState:
        return CameraState(pitch=-0.5, yaw=0.5, scale=40.0)

    # ---- simulation ----

    def step(self) -> None:
        """One descent step; the timer stops once a terminal state is reached."""
        if self.state.status is not SimulationStatus.RUNNING:
            self._sync_timer()
            return
        self.state = step_gradient_descent(self.state, self.field)
        self._sync_timer()
        self.refresh_panel()

    def run(self) -> None:
        self.state = start_descent(self.state)
        self._sync_timer()
        self.refresh_panel()

    def pause(self) -> None:
        self.state = pause_descent(self.state)
        self._sync_timer()
        self.refresh_panel()

    def toggle_run(self) -> None:
        if self.state.status.is_running:
            self.pause()
        else:
            self.run()

    def restart(self) -> None:
        self.state = reset_gradient_descent(self.field, self.state.learning_rate)
        self._sync_timer()
        self.refresh_panel()

    def set_field(self, key: str) -> None:
        self.field = field_by_key(GRADIENT_FIELDS, key)
        logger.debug("Gradient descent field set to '%s'.", key)
        self.restart()

    def set_learning_rate(self, alpha: float) -> None:
        self.state = replace(self.state, learning_rate=clamp_learning_rate(alpha))
        self.refresh_panel()

    def _sync_timer(self) -> None:
        if self._timer is None:
            return
        if self.state.status is SimulationStatus.RUNNING:
            if not self._timer.isActive():
                self._timer.start()
        else:
            self._timer.stop()

    # ---- panel ----

    def _build_panel(self, panel: LessonPanel) -> None:
        self._timer = QTimer(panel)
        self._timer.setInterval(GRADIENT_STEP_INTERVAL_MS)
        self._timer.timeout.connect(self.step)

        panel.begin_group("Loss function")
        self.combo = panel._add_combo("f(x, y):", [(f.name, f.key) for f in GRADIENT_FIELDS],
                                      on_change=self.set_field)
        panel._add_readout("equation", "")

        panel.begin_group("Optimizer")
        self.spin_alpha = panel._add_spin(
            "Learning rate α:", min_value=MIN_LEARNING_RATE, max_value=MAX_LEARNING_RATE, step=0.01,
            default=self.state.learning_rate, on_change=self.set_learning_rate,
        )
        self.run_buttons = panel._add_buttons(("Run", self.toggle_run), ("Reset", self.restart))

        panel.begin_group("State")
        panel._add_readout("iteration", "Iteration:")
        panel._add_readout("position", "(x, y):")
        panel._add_readout("loss", "f(x, y):")
        panel._add_readout("gradient", "∇f:")
        panel._add_readout("status", "Status:")

        panel.begin_group("Loss history")
        self.plot_widget = pg.PlotWidget()
        self.plot_widget.setBackground("w")
        self.plot_widget.showGrid(x=True, y=True, alpha=0.3)
        self.plot_widget.setLabel("bottom", "Iteration", color="black")
        self.plot_widget.setLabel("left", "f(x, y)", color="black")
        self.plot_widget.getAxis("bottom").setPen("k")
        self.plot_widget.getAxis("left").setPen("k")
        self.plot_widget.getAxis("bottom").setTextPen("k")
        self.plot_widget.getAxis("left").setTextPen("k")
        self.plot_widget.setMinimumHeight(160)
        self.loss_curve = self.plot_widget.plot([], [], pen=pg.mkPen(color=(0, 120, 215), width=2),
                                                symbol="o", symbolSize=4, symbolBrush=(0, 120, 215),
                                                symbolPen=None)
        panel._add_widget(self.plot_widget)

    def refresh_panel(self) -> None:
        if self.panel is None:
            return
        s = self.state
        x, y = s.position.x, s.position.y
        grad = self.field.gradient(x, y)
        self.panel.set_readout("equation", self.field.equation)
        self.panel.set_readout("iteration", str(s.iteration))
        self.panel.set_readout("position", f"({x:.3f}, {y:.3f})")
        self.panel.set_readout("loss", f"{self.field.value(x, y):.4f}")
        self.panel.set_readout("gradient", f"({grad.x:.3f}, {grad.y:.3f})")
        self.panel.set_readout("status", OUTCOME_TEXT[s.outcome])
        self.run_buttons[0].setText(self.panel.tr("Pause") if s.status.is_running else self.panel.tr("Run"))
        self.spin_alpha.blockSignals(True)
        self.spin_alpha.setValue(s.learning_rate)
        self.spin_alpha.blockSignals(False)
        losses = loss_history(s, self.field)
        self.loss_curve.setData(np.arange(len(losses)), np.asarray(losses, dtype=np.float64))

    # ---- interaction ----

    def register_handles(self, registry: HandleRegistry) -> None:
        p = self.state.position
        registry.register("ball", self.field.surface_point(p.x, p.y))

    def on_drag_started(self, handle_id: str) -> None:
        super().on_drag_started(handle_id)
        if handle_id != "ball":
            return
        # Grabbing the ball stops the run and clears the trail before any move
        self.state = move_probe(self.state, Vector.zero(), self.field.half_range)
        self._sync_timer()
        self.refresh_panel()

    def on_handle_dragged(self, handle_id: str, world_delta: Vector, screen_delta: tuple[float, float]) -> None:
        if handle_id != "ball":
            return
        floor = floor_delta_to_world(screen_delta[0], screen_delta[1], self.camera)
        self.state = move_probe(self.state, Vector(floor.x, floor.z), self.field.half_range)
        self._sync_timer()
        self.refresh_panel()

    # ---- frame loop ----

    def draw(self, scene: Scene3D) -> None:
        fld = self.field
        r = fld.half_range
        drawing.grid(scene, extent=int(np.ceil(r)) + 1)
        xs, ys, zs = fld.sample_grid(SURFACE_STEPS)
        drawing.surface_wireframe(scene, xs, ys, zs, COLOR_SURFACE, alpha=70)

        p = self.state.position
        ball = fld.surface_point(p.x, p.y)
        trail = list(self.state.history) + [ball]
        if len(trail) > 1:
            drawing.polyline(scene, trail, COLOR_TRAIL, 2.5, overlay=True, label="trail")
            for q in self.state.history:
                drawing.dot(scene, q, COLOR_TRAIL, radius=3.0, overlay=True)

        grad = fld.gradient(p.x, p.y)
        if grad.magnitude > 0.0:
            base = Vector(ball.x, ball.y, ball.z)
            drawing.arrow(scene, base, base + Vector(grad.x, 0.0, grad.y), COLOR_GRADIENT, "∇f", width=2.0)
            drawing.arrow(scene, base, base + Vector(-grad.x, 0.0, -grad.y), COLOR_DESCENT, "−∇f", width=2.0)
        drawing.line(scene, Vector(p.x, 0.0, p.y), ball, drawing.with_alpha(drawing.MUTED, 160), 1.0,
                     dashed=True, label="drop")
        drawing.handle(scene, ball, COLOR_BALL, radius=8.0, active=self.active_handle == "ball")

    def reset(self) -> None:
        self.field = GRADIENT_FIELDS[0]
        self.state = reset_gradient_descent(self.field, DEFAULT_LEARNING_RATE)
        self._sync_timer()
        if self.panel is not None:
            self.combo.blockSignals(True)
            self.combo.setCurrentIndex(0)
            self.combo.blockSignals(False)
        super().reset()

    def teardown(self) -> None:
        if self._timer is not None:
            self._timer.stop()
        super().teardown()
