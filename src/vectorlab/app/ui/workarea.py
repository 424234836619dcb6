from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QListWidget, QScrollArea, QSplitter, QVBoxLayout, QWidget

from vectorlab.app.ui.canvas import SceneCanvas
from vectorlab.config import PANEL_WIDTH


class WorkArea(QWidget):
    """The main work area with a splitter between the lesson controls and the scene canvas."""
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        v = QVBoxLayout(self)
        v.setContentsMargins(0, 0, 0, 0)
        split = QSplitter(Qt.Orientation.Horizontal, self)
        split.setChildrenCollapsible(False)
        v.addWidget(split, 1)

        side = QWidget(split)
        side_layout = QVBoxLayout(side)
        side_layout.setContentsMargins(4, 4, 4, 4)

        self.lesson_list = QListWidget(side)
        self.lesson_list.setMaximumHeight(200)
        side_layout.addWidget(self.lesson_list, 0)

        self.panel_host = QScrollArea(side)
        self.panel_host.setWidgetResizable(True)
        self.panel_host.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        side_layout.addWidget(self.panel_host, 1)
        side.setMinimumWidth(PANEL_WIDTH)

        self.canvas = SceneCanvas(split)

        split.addWidget(side)
        split.addWidget(self.canvas)
        split.setStretchFactor(0, 0)
        split.setStretchFactor(1, 1)

    def set_panel(self, panel: QWidget | None) -> None:
        """Show `panel` in the control column; the previous panel is deleted."""
        old = self.panel_host.takeWidget()
        if old is not None:
            old.deleteLater()
        if panel is not None:
            self.panel_host.setWidget(panel)
