import pytest

import vectorlab.app.lessons  # noqa: F401
from vectorlab.app.lessons.registry import create_lesson, list_keys
from vectorlab.app.ui.panels.base import LessonPanel
from vectorlab.app.ui.panels.matrix_editor import MatrixEditor
from vectorlab.app.ui.panels.vector_editor import NumberField, VectorEditor
from vectorlab.core.linalg import Matrix2, Matrix3, Vector


@pytest.mark.parametrize("key", sorted(list_keys()))
def test_every_lesson_builds_its_panel(qapp, key):
    lesson = create_lesson(key)
    panel = lesson.create_panel()
    assert isinstance(panel, LessonPanel)
    assert lesson.panel is panel
    lesson.refresh_panel()
    lesson.reset()
    lesson.teardown()
    panel.deleteLater()


def test_vector_addition_readouts(qapp):
    lesson = create_lesson("vector_addition")
    lesson.create_panel()
    lesson._set("a", Vector(3.0, 0.0))
    lesson._set("b", Vector(0.0, 4.0))
    assert lesson.panel.readout("r") == "(3.00, 4.00)"
    assert lesson.panel.readout("mag_r") == "5.00"


def test_dot_product_relation_readout(qapp):
    lesson = create_lesson("dot_product")
    lesson.create_panel()
    lesson._set("a", Vector(0.0, 3.0))
    assert lesson.panel.readout("relation") == "perpendicular"
    lesson._set("a", Vector(-1.0, 0.0))
    assert lesson.panel.readout("relation") == "opposed (obtuse)"


def test_3d_toggle_checkbox_switches_camera(qapp):
    lesson = create_lesson("vectors")
    lesson.create_panel()
    lesson._mode_check.setChecked(True)
    assert lesson.is_3d
    assert (lesson.camera.pitch, lesson.camera.yaw) == lesson.VIEW_3D
    lesson.reset()
    assert not lesson._mode_check.isChecked()


def test_combo_passes_the_item_key(qapp):
    lesson = create_lesson("integral")
    lesson.create_panel()
    lesson.combo.setCurrentIndex(lesson.combo.findData("waves"))
    assert lesson.field.key == "waves"
    lesson.reset()
    assert lesson.field.key == "paraboloid"
    assert lesson.combo.currentIndex() == 0


def test_slider_drives_the_resolution(qapp):
    lesson = create_lesson("integral")
    lesson.create_panel()
    lesson.slider_n.setValue(10)
    assert lesson.resolution == 12
    assert lesson.panel.readout("grid") == "12 × 12"


def test_matrix_presets_follow_the_mode(qapp):
    lesson = create_lesson("matrix_transform")
    lesson.create_panel()
    assert all(b.isEnabled() for b in lesson._preset_buttons_2d)
    assert not any(b.isEnabled() for b in lesson._preset_buttons_3d)
    lesson._preset_buttons_2d[-1].click()
    assert lesson.target == Matrix2(1.0, 1.0, 1.0, 1.0)
    lesson.set_3d(True)
    assert not any(b.isEnabled() for b in lesson._preset_buttons_2d)
    assert isinstance(lesson.editor.matrix(), Matrix3)


def test_gradient_timer_runs_and_stops(qapp):
    lesson = create_lesson("gradient_descent")
    lesson.create_panel()
    lesson.toggle_run()
    assert lesson._timer.isActive()
    assert lesson.run_buttons[0].text() == "Pause"
    lesson.step()
    assert lesson.panel.readout("iteration") == "1"
    lesson.teardown()
    assert not lesson._timer.isActive()


def test_gradient_loss_curve_tracks_history(qapp):
    lesson = create_lesson("gradient_descent")
    lesson.create_panel()
    lesson.run()
    lesson.step()
    lesson.step()
    xs, ys = lesson.loss_curve.getData()
    assert len(xs) == len(ys) == 3
    assert ys[0] > ys[-1]
    lesson.teardown()


def test_matrix_multiplication_queue_list(qapp):
    lesson = create_lesson("matrix_multiplication")
    lesson.create_panel()
    lesson.add_step(Matrix2(0.0, -1.0, 1.0, 0.0))
    lesson.add_step(Matrix2(3.0, 0.0, 0.0, 3.0))
    assert lesson.queue_list.count() == 2
    assert lesson.queue_list.item(0).text() == "1. Rotate 90°"
    assert lesson.queue_list.item(1).text() == "2. [3, 0; 0, 3]"


def test_number_field_keeps_last_good_value(qapp):
    field = NumberField(2.0)
    seen = []
    field.value_changed.connect(seen.append)
    field._on_text_edited("-")
    field._on_text_edited("1e")
    assert field.value() == 2.0
    assert seen == []
    field._on_text_edited("4,5")
    assert field.value() == 4.5
    assert seen == [4.5]


def test_vector_editor_emits_edited_vector(qapp):
    editor = VectorEditor(Vector(1.0, 2.0, 3.0))
    seen = []
    editor.vector_changed.connect(seen.append)
    editor._fields["y"]._on_text_edited("7")
    assert seen == [Vector(1.0, 7.0, 3.0)]
    editor.set_vector(Vector(0.0, 0.0, 0.0))
    assert seen == [Vector(1.0, 7.0, 3.0)]
    assert editor.vector() == Vector.zero()


def test_matrix_editor_rebuilds_for_new_size(qapp):
    editor = MatrixEditor(Matrix2.identity())
    assert len(editor._spins) == 4
    editor.set_matrix(Matrix3.identity())
    assert len(editor._spins) == 9
    seen = []
    editor.matrix_changed.connect(seen.append)
    editor._spins["e"].setValue(2.0)
    assert seen[-1] == Matrix3(1.0, 0.0, 0.0, 0.0, 2.0, 0.0, 0.0, 0.0, 1.0)
