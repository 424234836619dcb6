import logging

import pytest

from vectorlab.app.state import LessonGroup, Store
from vectorlab.app.ui.main_window import MainWindow
from vectorlab.main import _parse_args


@pytest.fixture
def window(qapp):
    win = MainWindow()
    yield win
    win.close()
    win.deleteLater()


def test_opens_first_linear_algebra_lesson(window):
    assert window.lesson is not None
    assert window.lesson.KEY == "vectors"
    assert window.store.lesson_key == "vectors"
    assert window.work_area.lesson_list.count() == 9
    assert window.canvas.lesson is window.lesson


def test_switching_tabs_lists_calculus_lessons(window):
    window.tabs.setCurrentIndex(int(LessonGroup.CALCULUS))
    assert window.store.group is LessonGroup.CALCULUS
    assert window.work_area.lesson_list.count() == 4
    assert window.lesson.KEY == "derivatives"


def test_select_lesson_moves_tab_and_list(window):
    window.select_lesson("curl")
    assert window.tabs.currentIndex() == int(LessonGroup.CALCULUS)
    assert window.lesson.KEY == "curl"
    assert window.work_area.panel_host.widget() is window.lesson.panel


def test_switching_lessons_tears_down_the_old_one(window):
    window.select_lesson("gradient_descent")
    old = window.lesson
    old.toggle_run()
    assert old._timer.isActive()
    window.select_lesson("integral")
    assert not old._timer.isActive()
    assert window.lesson is not old


def test_select_unknown_lesson_raises(window):
    with pytest.raises(KeyError):
        window.select_lesson("nope")


def test_reset_action_resets_the_lesson(window):
    window.lesson.vector = window.lesson.vector * 2.0
    window.actReset.trigger()
    assert window.lesson.vector == window.lesson.__class__().vector


def test_store_emits_only_on_change(qapp):
    store = Store()
    groups, lessons = [], []
    store.group_changed.connect(groups.append)
    store.lesson_changed.connect(lessons.append)
    store.set_group(LessonGroup.LINEAR_ALGEBRA)
    store.set_group(LessonGroup.CALCULUS)
    store.set_lesson("curl")
    store.set_lesson("curl")
    assert groups == [1]
    assert lessons == ["curl"]


def test_command_line_arguments():
    args = _parse_args(["--lesson", "dot_product", "--debug", "-platform", "offscreen"])
    assert args.lesson == "dot_product"
    assert args.debug
    assert args.log_file is None


def test_store_logs_lesson_switch(qapp, caplog):
    store = Store()
    with caplog.at_level(logging.INFO, logger="vectorlab.app.state"):
        store.set_lesson("integral")
    assert "integral" in caplog.text
