from __future__ import annotations

import logging
import math

from vectorlab.app.lessons.base import LessonScene
from vectorlab.app.lessons.registry import register_lesson
from vectorlab.app.state import LessonGroup
from vectorlab.app.ui import drawing
from vectorlab.app.ui.panels.base import LessonPanel
from vectorlab.config import CURL_SPIN_RATE, InteractionSettings
from vectorlab.core.camera import CameraState, floor_delta_to_world
from vectorlab.core.fields import CURL_FIELDS, VectorField2D, field_by_key
from vectorlab.core.interaction import HandleRegistry
from vectorlab.core.linalg import Vector
from vectorlab.core.scene import Scene3D

logger = logging.getLogger(__name__)

FIELD_RANGE = 3.5
FIELD_STEP = 0.5
ARROW_SCALE = 0.2
BLADES = 4
BLADE_LENGTH = 0.3
SPIN_THRESHOLD = 0.1
DEFAULT_PROBE = Vector(1.5, 1.5)

COLOR_FIELD = "#64748b"
COLOR_CCW = "#4ade80"
COLOR_CW = "#f472b6"
COLOR_STILL = "#94a3b8"
COLOR_FRAME = "#334155"


def paddle_color(curl: float) -> str:
    if curl > SPIN_THRESHOLD:
        return COLOR_CCW
    if curl < -SPIN_THRESHOLD:
        return COLOR_CW
    return COLOR_STILL


@register_lesson
class CurlLesson(LessonScene):
    KEY = "curl"
    TITLE = "Curl"
    GROUP = LessonGroup.CALCULUS
    ORDER = 4
    THEORY = (
        "Curl measures how much a flow makes things spin. Drop a paddle wheel "
        "into the field: <b>curl F = ∂Fy/∂x − ∂Fx/∂y</b>. Positive spins it "
        "counter-clockwise, negative clockwise, zero leaves it still."
    )
    SETTINGS = InteractionSettings(handle_radius=30.0)
    VIEW_3D = (-0.6, 0.5)

    def __init__(self) -> None:
        super().__init__()
        self.field: VectorField2D = CURL_FIELDS[0]
        self.probe = DEFAULT_PROBE
        self.paddle_angle = 0.0

    def initial_camera(self) -> CameraState:
        return CameraState.flat(scale=50.0)

    @property
    def curl(self) -> float:
        return self.field.curl

    def plane_point(self, x: float, y: float, height: float = 0.0) -> Vector:
        """Field coordinates to world: the XY plane in 2D, the floor in 3D."""
        if self.is_3d:
            return Vector(x, height, y)
        return Vector(x, y, 0.0)

    def set_field(self, key: str) -> None:
        self.field = field_by_key(CURL_FIELDS, key)
        logger.debug("Curl field set to '%s'.", key)
        self.refresh_panel()

    # ---- panel ----

    def _build_panel(self, panel: LessonPanel) -> None:
        self._add_3d_toggle(panel)
        panel.begin_group("Vector field")
        self.combo = panel._add_combo("F(x, y):", [(f.name, f.key) for f in CURL_FIELDS], on_change=self.set_field)
        panel._add_readout("equation", "")
        panel._add_readout("description", "")

        panel.begin_group("Paddle wheel")
        panel._add_readout("probe", "Position:")
        panel._add_readout("vector", "F at probe:")
        panel._add_readout("curl", "curl F:")
        panel._add_readout("spin", "Rotation:")

    def refresh_panel(self) -> None:
        if self.panel is None:
            return
        p = self.probe
        f = self.field.at(p.x, p.y)
        self.panel.set_readout("equation", self.field.equation)
        self.panel.set_readout("description", self.field.description)
        self.panel.set_readout("probe", f"({p.x:.2f}, {p.y:.2f})")
        self.panel.set_readout("vector", f"({f.x:.2f}, {f.y:.2f})")
        self.panel.set_readout("curl", f"{self.curl:.2f}")
        if self.curl > SPIN_THRESHOLD:
            spin = "counter-clockwise"
        elif self.curl < -SPIN_THRESHOLD:
            spin = "clockwise"
        else:
            spin = "none"
        self.panel.set_readout("spin", spin)

    # ---- interaction ----

    def register_handles(self, registry: HandleRegistry) -> None:
        registry.register("probe", self.plane_point(self.probe.x, self.probe.y))

    def on_handle_dragged(self, handle_id: str, world_delta: Vector, screen_delta: tuple[float, float]) -> None:
        if handle_id != "probe":
            return
        if self.is_3d:
            floor = floor_delta_to_world(screen_delta[0], screen_delta[1], self.camera)
            dx, dy = floor.x, floor.z
        else:
            dx, dy = world_delta.x, world_delta.y
        moved = Vector(self.probe.x + dx, self.probe.y + dy).finite_or(self.probe)
        x = max(-FIELD_RANGE, min(FIELD_RANGE, moved.x))
        y = max(-FIELD_RANGE, min(FIELD_RANGE, moved.y))
        self.probe = Vector(x, y)
        self.refresh_panel()

    # ---- frame loop ----

    def tick(self) -> None:
        self.paddle_angle = math.fmod(self.paddle_angle + self.curl * CURL_SPIN_RATE, 2.0 * math.pi)

    def draw(self, scene: Scene3D) -> None:
        r = FIELD_RANGE
        corners = [self.plane_point(-r, -r), self.plane_point(r, -r), self.plane_point(r, r), self.plane_point(-r, r)]
        for a, b in zip(corners, corners[1:] + corners[:1]):
            drawing.line(scene, a, b, COLOR_FRAME, label="frame")

        n = round(2 * r / FIELD_STEP)
        for i in range(n + 1):
            for j in range(n + 1):
                x = -r + i * FIELD_STEP
                y = -r + j * FIELD_STEP
                f = self.field.at(x, y)
                mag = f.magnitude
                if mag == 0.0:
                    continue
                color = drawing.with_alpha(COLOR_FIELD, round(255 * min(1.0, mag / 3.0)))
                start = self.plane_point(x, y)
                end = self.plane_point(x + f.x * ARROW_SCALE, y + f.y * ARROW_SCALE)
                drawing.arrow(scene, start, end, color, width=1.0, head_px=4.0, overlay=False)

        self._draw_paddle(scene)

    def _draw_paddle(self, scene: Scene3D) -> None:
        px, py = self.probe.x, self.probe.y
        centre = self.plane_point(px, py)
        color = paddle_color(self.curl)
        for k in range(BLADES):
            theta = self.paddle_angle + k * 2.0 * math.pi / BLADES
            tip = self.plane_point(px + math.cos(theta) * BLADE_LENGTH, py + math.sin(theta) * BLADE_LENGTH)
            drawing.line(scene, centre, tip, color, 3.0, overlay=True, label="blade")
            drawing.dot(scene, tip, "#ffffff", radius=2.0, overlay=True)
        drawing.handle(scene, centre, color, radius=5.0, active=self.active_handle == "probe")

        if self.is_3d and abs(self.curl) > SPIN_THRESHOLD:
            top = self.plane_point(px, py, self.curl * 0.5)
            drawing.arrow(scene, centre, top, color, "curl", width=4.0, head_px=8.0)

    def reset(self) -> None:
        self.field = CURL_FIELDS[0]
        self.probe = DEFAULT_PROBE
        self.paddle_angle = 0.0
        if self.panel is not None:
            self.combo.blockSignals(True)
            self.combo.setCurrentIndex(0)
            self.combo.blockSignals(False)
        super().reset()
