from PySide6.QtCore import QEvent, QPointF, Qt
from PySide6.QtGui import QMouseEvent

import vectorlab.app.lessons  # noqa: F401
from vectorlab.app.lessons.registry import create_lesson
from vectorlab.app.ui.canvas import SceneCanvas
from vectorlab.core.camera import project
from vectorlab.core.linalg import Vector
from vectorlab.core.simulation.base import SimulationStatus


def _mouse(kind, x, y, button=Qt.MouseButton.LeftButton):
    buttons = Qt.MouseButton.NoButton if kind is QEvent.Type.MouseButtonRelease else button
    pos = QPointF(x, y)
    return QMouseEvent(kind, pos, pos, button, buttons, Qt.KeyboardModifier.NoModifier)


def _canvas_with(qapp, key):
    canvas = SceneCanvas()
    canvas.resize(800, 600)
    lesson = create_lesson(key)
    canvas.set_lesson(lesson)
    return canvas, lesson


def test_dragging_a_handle_moves_the_vector(qapp):
    canvas, lesson = _canvas_with(qapp, "vectors")
    camera_before = lesson.scene_state.camera
    sp = lesson.scene_state
    assert (sp.viewport.width, sp.viewport.height) == (800.0, 600.0)
    # (3, 4) at 40 px per unit around the centre (400, 300)
    canvas.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, 520.0, 140.0))
    assert lesson.active_handle == "tip"
    canvas.mouseMoveEvent(_mouse(QEvent.Type.MouseMove, 560.0, 140.0))
    canvas.mouseReleaseEvent(_mouse(QEvent.Type.MouseButtonRelease, 560.0, 140.0))

    assert lesson.vector == Vector(4.0, 4.0, 0.0)
    assert lesson.active_handle is None
    assert not sp.interaction.is_dragging
    assert sp.camera == camera_before
    canvas.set_lesson(None)


def test_dragging_empty_space_pans_a_2d_scene(qapp):
    canvas, lesson = _canvas_with(qapp, "vectors")
    canvas.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, 50.0, 50.0))
    canvas.mouseMoveEvent(_mouse(QEvent.Type.MouseMove, 80.0, 40.0))
    canvas.mouseReleaseEvent(_mouse(QEvent.Type.MouseButtonRelease, 80.0, 40.0))
    assert (lesson.camera.pan_x, lesson.camera.pan_y) == (30.0, -10.0)
    assert lesson.vector == Vector(3.0, 4.0, 0.0)
    canvas.set_lesson(None)


def test_dragging_empty_space_orbits_a_3d_scene(qapp):
    canvas, lesson = _canvas_with(qapp, "cross_product")
    yaw = lesson.camera.yaw
    canvas.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, 5.0, 5.0))
    canvas.mouseMoveEvent(_mouse(QEvent.Type.MouseMove, 55.0, 5.0))
    canvas.leaveEvent(QEvent(QEvent.Type.Leave))
    assert lesson.camera.yaw == yaw + 50.0 * lesson.SETTINGS.orbit_sensitivity
    assert not lesson.scene_state.interaction.is_dragging
    canvas.set_lesson(None)


def test_frame_tick_advances_the_lesson(qapp):
    canvas, lesson = _canvas_with(qapp, "curl")
    canvas._on_frame()
    assert lesson.paddle_angle > 0.0
    canvas.set_lesson(None)
    assert canvas.lesson is None


def test_paint_flushes_the_lesson(qapp):
    canvas, lesson = _canvas_with(qapp, "dot_product")
    image = canvas.grab()
    assert not image.isNull()
    assert canvas.last_painted > 0
    canvas.set_lesson(None)


def test_pressing_the_ball_pauses_a_running_descent(qapp):
    canvas, lesson = _canvas_with(qapp, "gradient_descent")
    lesson.create_panel()
    lesson.run()
    lesson.step()
    lesson.step()
    assert lesson._timer.isActive()

    p = lesson.state.position
    sp = project(lesson.field.surface_point(p.x, p.y), lesson.camera, lesson.scene_state.viewport)
    canvas.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, sp.x, sp.y))

    assert lesson.active_handle == "ball"
    assert lesson.state.status is not SimulationStatus.RUNNING
    assert lesson.state.history == ()
    assert not lesson._timer.isActive()
    canvas.mouseReleaseEvent(_mouse(QEvent.Type.MouseButtonRelease, sp.x, sp.y))
    lesson.teardown()
    canvas.set_lesson(None)


def test_pressing_the_eigen_probe_stops_the_sweep(qapp):
    canvas, lesson = _canvas_with(qapp, "eigenvectors")
    lesson.play()
    lesson.tick()
    assert lesson.sweep.t > 0.0

    sp = project(lesson.transformed_probe, lesson.camera, lesson.scene_state.viewport)
    canvas.mousePressEvent(_mouse(QEvent.Type.MouseButtonPress, sp.x, sp.y))
    canvas._on_frame()

    assert lesson.active_handle == "probe"
    assert lesson.sweep.status is SimulationStatus.RESET
    assert lesson.sweep.t == 0.0
    canvas.mouseReleaseEvent(_mouse(QEvent.Type.MouseButtonRelease, sp.x, sp.y))
    canvas.set_lesson(None)
