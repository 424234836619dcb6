"""
Drawing Primitives
==================
QPainter helpers that turn world-space geometry into render commands.

Every helper projects its points immediately (with the frame's camera) and
submits a closure to the scene's render queue; nothing is painted until the
queue is flushed back-to-front.

Why is this file needed?
------------------------
1. Lessons describe *what* to draw (an arrow from A to B, a polygon, a grid),
   never how the QPainter state is set up.
2. Depth keys are derived consistently: lines and polygons use the average
   depth of their vertices, arrows and handles go through the overlay bias.
"""
from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPen, QPolygonF

from vectorlab.core.camera import ScreenPoint
from vectorlab.core.linalg import Vector
from vectorlab.core.scene import Scene3D

# ---- palette ----
BACKGROUND = "#0f172a"
GRID = "#1e293b"
GRID_MAJOR = "#334155"
AXIS_X = "#ef4444"
AXIS_Y = "#22c55e"
AXIS_Z = "#3b82f6"
TEXT = "#e2e8f0"
MUTED = "#64748b"

ARROW_HEAD_PX = 12.0


def _pen(color: str | QColor, width: float = 1.0, dashed: bool = False) -> QPen:
    pen = QPen(QColor(color), width)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    if dashed:
        pen.setStyle(Qt.PenStyle.DashLine)
    return pen


def _point(sp: ScreenPoint) -> QPointF:
    return QPointF(sp.x, sp.y)


def with_alpha(color: str, alpha: int) -> QColor:
    c = QColor(color)
    c.setAlpha(max(0, min(255, alpha)))
    return c


# ------------------------------------------------------------------------------
# Primitives
# ------------------------------------------------------------------------------

def line(
    scene: Scene3D,
    a: Vector,
    b: Vector,
    color: str | QColor,
    width: float = 1.0,
    dashed: bool = False,
    overlay: bool = False,
    label: str = "line",
) -> None:
    pa, pb = scene.project(a), scene.project(b)
    depth = (pa.depth + pb.depth) / 2
    pen = _pen(color, width, dashed)

    def paint(painter: QPainter) -> None:
        painter.setPen(pen)
        painter.drawLine(_point(pa), _point(pb))

    (scene.submit_overlay if overlay else scene.submit_draw)(depth, paint, label)


def polyline(scene: Scene3D, points: Sequence[Vector], color: str | QColor, width: float = 1.0,
             overlay: bool = False, label: str = "polyline") -> None:
    if len(points) < 2:
        return
    projected = [scene.project(p) for p in points]
    depth = sum(p.depth for p in projected) / len(projected)
    poly = QPolygonF([_point(p) for p in projected])
    pen = _pen(color, width)

    def paint(painter: QPainter) -> None:
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPolyline(poly)

    (scene.submit_overlay if overlay else scene.submit_draw)(depth, paint, label)


def polygon(
    scene: Scene3D,
    points: Sequence[Vector],
    fill: str | QColor,
    stroke: Optional[str | QColor] = None,
    width: float = 1.0,
    depth_offset: float = 0.0,
    label: str = "polygon",
) -> None:
    """Filled polygon sorted by the average depth of its vertices."""
    if len(points) < 3:
        return
    projected = [scene.project(p) for p in points]
    depth = sum(p.depth for p in projected) / len(projected) + depth_offset
    poly = QPolygonF([_point(p) for p in projected])
    brush = QBrush(QColor(fill) if isinstance(fill, str) else fill)
    pen = _pen(stroke, width) if stroke is not None else QPen(Qt.PenStyle.NoPen)

    def paint(painter: QPainter) -> None:
        painter.setPen(pen)
        painter.setBrush(brush)
        painter.drawPolygon(poly)

    scene.submit_draw(depth, paint, label)


def arrow(
    scene: Scene3D,
    origin: Vector,
    tip: Vector,
    color: str | QColor,
    text: str = "",
    width: float = 3.0,
    dashed: bool = False,
    head_px: float = ARROW_HEAD_PX,
    overlay: bool = True,
) -> ScreenPoint:
    """Vector arrow, drawn on top of the grid unless `overlay` is False. Returns the projected tip."""
    po, pt = scene.project(origin), scene.project(tip)
    depth = (po.depth + pt.depth) / 2
    pen = _pen(color, width, dashed)
    head_pen = _pen(color, width)
    angle = math.atan2(pt.y - po.y, pt.x - po.x)
    length = math.hypot(pt.x - po.x, pt.y - po.y)
    head = min(head_px, length * 0.5)
    left = QPointF(pt.x - head * math.cos(angle - math.pi / 6), pt.y - head * math.sin(angle - math.pi / 6))
    right = QPointF(pt.x - head * math.cos(angle + math.pi / 6), pt.y - head * math.sin(angle + math.pi / 6))

    def paint(painter: QPainter) -> None:
        painter.setPen(pen)
        painter.drawLine(_point(po), _point(pt))
        if head > 0.5:
            painter.setPen(head_pen)
            painter.setBrush(QColor(color))
            painter.drawPolygon(QPolygonF([_point(pt), left, right]))
        if text:
            painter.setPen(QColor(color))
            painter.setFont(QFont("Sans", 10, QFont.Weight.Bold))
            painter.drawText(QPointF(pt.x + 8, pt.y - 8), text)

    (scene.submit_overlay if overlay else scene.submit_draw)(depth, paint, f"arrow {text}".strip())
    return pt


def handle(scene: Scene3D, point: Vector, color: str, radius: float = 7.0, active: bool = False) -> None:
    """Circle marking a draggable point."""
    sp = scene.project(point)
    r = radius * (1.4 if active else 1.0)
    fill = with_alpha(color, 220 if active else 140)
    pen = _pen("#ffffff" if active else color, 2.0)

    def paint(painter: QPainter) -> None:
        painter.setPen(pen)
        painter.setBrush(fill)
        painter.drawEllipse(QRectF(sp.x - r, sp.y - r, 2 * r, 2 * r))

    scene.submit_overlay(sp.depth - 1.0, paint, "handle")


def dot(scene: Scene3D, point: Vector, color: str | QColor, radius: float = 4.0, overlay: bool = False) -> None:
    sp = scene.project(point)
    brush = QColor(color) if isinstance(color, str) else color

    def paint(painter: QPainter) -> None:
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(brush)
        painter.drawEllipse(QRectF(sp.x - radius, sp.y - radius, 2 * radius, 2 * radius))

    (scene.submit_overlay if overlay else scene.submit_draw)(sp.depth, paint, "dot")


def text(scene: Scene3D, point: Vector, content: str, color: str = TEXT, size: int = 10,
         offset: tuple[float, float] = (6.0, -6.0)) -> None:
    sp = scene.project(point)

    def paint(painter: QPainter) -> None:
        painter.setPen(QColor(color))
        painter.setFont(QFont("Sans", size))
        painter.drawText(QPointF(sp.x + offset[0], sp.y + offset[1]), content)

    scene.submit_overlay(sp.depth - 2.0, paint, "text")


# ------------------------------------------------------------------------------
# Composite helpers
# ------------------------------------------------------------------------------

def grid(scene: Scene3D, extent: int = 10, step: float = 1.0, plane: Optional[str] = None) -> None:
    """
    Reference grid through the origin.

    `plane` is "xy" or "xz"; by default 3D scenes get a floor (xz) and 2D
    scenes the xy plane.
    """
    plane = plane or ("xz" if scene.is_3d else "xy")
    n = int(extent / step)
    for k in range(-n, n + 1):
        v = k * step
        color = GRID_MAJOR if k % 5 == 0 else GRID
        if plane == "xz":
            line(scene, Vector(v, 0, -extent), Vector(v, 0, extent), color, label="grid")
            line(scene, Vector(-extent, 0, v), Vector(extent, 0, v), color, label="grid")
        else:
            line(scene, Vector(v, -extent, 0), Vector(v, extent, 0), color, label="grid")
            line(scene, Vector(-extent, v, 0), Vector(extent, v, 0), color, label="grid")


def axes(scene: Scene3D, length: float = 10.0) -> None:
    line(scene, Vector(-length, 0, 0), Vector(length, 0, 0), AXIS_X, 1.5, label="axis x")
    line(scene, Vector(0, -length, 0), Vector(0, length, 0), AXIS_Y, 1.5, label="axis y")
    if scene.is_3d:
        line(scene, Vector(0, 0, -length), Vector(0, 0, length), AXIS_Z, 1.5, label="axis z")


def surface_wireframe(scene: Scene3D, xs: Iterable[Iterable[float]], ys: Iterable[Iterable[float]],
                      zs: Iterable[Iterable[float]], color: str = "#38bdf8", alpha: int = 90) -> None:
    """
    Wireframe of a height field sampled on a grid.

    Arrays are indexed [row][col]; the surface height goes on world Y and the
    field's (x, y) domain on world (X, Z).
    """
    rows = [
        [Vector(float(x), float(z), float(y)) for x, y, z in zip(rx, ry, rz)]
        for rx, ry, rz in zip(xs, ys, zs)
    ]
    stroke = with_alpha(color, alpha)
    for row in rows:
        polyline(scene, row, stroke, label="surface")
    for col in zip(*rows):
        polyline(scene, list(col), stroke, label="surface")


def heat_color(height: float, alpha: float = 0.7) -> QColor:
    """Blue for low values through red for high ones."""
    hue = max(0.0, min(240.0, 240.0 - height * 60.0))
    return QColor.fromHslF(hue / 360.0, 0.7, 0.5, alpha)


def prism(
    scene: Scene3D,
    x0: float,
    y0: float,
    size: float,
    height: float,
    fill: QColor,
    stroke: QColor,
    width: float = 1.0,
    verticals: bool = True,
    caption: str = "",
) -> None:
    """
    Box standing on the floor over the domain cell [x0, x0+size] x [y0, y0+size].

    The field's (x, y) goes to world (X, Z) and `height` to world Y. Only the
    top face is filled; `verticals` adds the four pillars.
    """
    base = [Vector(x0, 0.0, y0), Vector(x0 + size, 0.0, y0),
            Vector(x0 + size, 0.0, y0 + size), Vector(x0, 0.0, y0 + size)]
    top = [Vector(p.x, height, p.z) for p in base]
    pb = [scene.project(p) for p in base]
    pt = [scene.project(p) for p in top]
    depth = sum(p.depth for p in pb + pt) / 8
    face = QPolygonF([_point(p) for p in pt])
    pen = _pen(stroke, width)
    brush = QBrush(fill)

    def paint(painter: QPainter) -> None:
        painter.setPen(pen)
        painter.setBrush(brush)
        painter.drawPolygon(face)
        if verticals:
            for a, b in zip(pb, pt):
                painter.drawLine(_point(a), _point(b))
        if caption:
            painter.setPen(QColor("#ffffff"))
            painter.setFont(QFont("Monospace", 10, QFont.Weight.Bold))
            painter.drawText(QPointF(pt[2].x + 5, pt[2].y), caption)

    scene.submit_draw(depth, paint, "prism")
