"""
Main window: group tabs on top, lesson list and controls on the left, the
scene canvas on the right.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, QT_TRANSLATE_NOOP, QCoreApplication
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QListWidgetItem, QMainWindow, QStatusBar, QTabBar, QToolBar, QVBoxLayout, QWidget

from vectorlab.app.application import VISIBLE_APP_NAME
from vectorlab.app.lessons.registry import create_lesson, lesson_class, lessons_in_group
from vectorlab.app.lessons.base import LessonScene
from vectorlab.app.state import LessonGroup, Store
from vectorlab.app.ui.canvas import SceneCanvas
from vectorlab.app.ui.workarea import WorkArea
from vectorlab.config import WINDOW_HEIGHT, WINDOW_WIDTH

logger = logging.getLogger(__name__)

# Display text is translated when the tabs are built.
GROUP_TAB_LABELS = {
    LessonGroup.LINEAR_ALGEBRA: QT_TRANSLATE_NOOP("Groups", "Linear Algebra"),
    LessonGroup.CALCULUS: QT_TRANSLATE_NOOP("Groups", "Calculus"),
}


class MainWindow(QMainWindow):
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(WINDOW_WIDTH, WINDOW_HEIGHT)

        # Global store
        self.store = Store()
        self.lesson: Optional[LessonScene] = None

        # ---- Central: TabBar on top + WorkArea below ----
        central = QWidget(self)
        v = QVBoxLayout(central)
        v.setContentsMargins(0, 0, 0, 0)
        v.setSpacing(0)

        self.tabs = QTabBar(central)
        self.tabs.setExpanding(True)
        self.tabs.setMovable(False)
        self.tabs.setTabsClosable(False)
        self.tabs.setDrawBase(True)
        self.tabs.setShape(QTabBar.Shape.RoundedNorth)
        v.addWidget(self.tabs, 0)

        self.work_area = WorkArea(central)
        v.addWidget(self.work_area, 1)

        self.setCentralWidget(central)

        # ---- Toolbar / status bar ----
        toolbar = QToolBar(self.tr("Main"), self)
        toolbar.setMovable(False)
        self.addToolBar(Qt.ToolBarArea.TopToolBarArea, toolbar)
        self.actReset = QAction(self.tr("Reset lesson"), self)
        self.actReset.setShortcut(QKeySequence("Ctrl+R"))
        self.actReset.triggered.connect(self.reset_lesson)
        toolbar.addAction(self.actReset)

        self.setStatusBar(QStatusBar(self))
        self.store.status_message.connect(lambda msg: self.statusBar().showMessage(msg, 5000))

        # ---- Navigation ----
        for group in LessonGroup:
            self.tabs.addTab(QCoreApplication.translate("Groups", GROUP_TAB_LABELS[group]))
        self.tabs.currentChanged.connect(self._on_tab_changed)
        self.work_area.lesson_list.currentItemChanged.connect(self._on_lesson_item_changed)

        self.store.group_changed.connect(self._fill_lesson_list)
        self.store.lesson_changed.connect(self._load_lesson)

        self._fill_lesson_list(int(self.store.group))

    @property
    def canvas(self) -> SceneCanvas:
        return self.work_area.canvas

    # ---- navigation ----

    def _on_tab_changed(self, idx: int) -> None:
        self.store.set_group(LessonGroup(idx))

    def _fill_lesson_list(self, group: int) -> None:
        """Rebuild the lesson list for a group and open its first lesson."""
        lst = self.work_area.lesson_list
        lst.blockSignals(True)
        lst.clear()
        for key in lessons_in_group(LessonGroup(group)):
            cls = lesson_class(key)
            item = QListWidgetItem(self.tr(cls.TITLE))
            item.setData(Qt.ItemDataRole.UserRole, cls.KEY)
            lst.addItem(item)
        lst.blockSignals(False)
        if lst.count():
            lst.setCurrentRow(0)

    def _on_lesson_item_changed(self, current: Optional[QListWidgetItem], _previous) -> None:
        if current is None:
            return
        self.store.set_lesson(current.data(Qt.ItemDataRole.UserRole))

    def select_lesson(self, key: str) -> None:
        """Switch to `key`, moving the tab bar and list selection along."""
        self.tabs.setCurrentIndex(int(lesson_class(key).GROUP))
        lst = self.work_area.lesson_list
        for row in range(lst.count()):
            if lst.item(row).data(Qt.ItemDataRole.UserRole) == key:
                lst.setCurrentRow(row)
                break

    def _load_lesson(self, key: str) -> None:
        if self.lesson is not None:
            self.lesson.teardown()
        self.canvas.set_lesson(None)

        self.lesson = create_lesson(key)
        panel = self.lesson.create_panel()
        self.work_area.set_panel(panel)
        self.canvas.set_lesson(self.lesson)
        self.store.post_status(self.tr("Lesson: {title}").format(title=self.lesson.TITLE))

    def reset_lesson(self) -> None:
        if self.lesson is None:
            return
        self.lesson.reset()
        self.canvas.update()
        self.store.post_status(self.tr("Lesson reset."))

    def closeEvent(self, event) -> None:
        if self.lesson is not None:
            self.lesson.teardown()
        self.canvas.set_lesson(None)
        super().closeEvent(event)
