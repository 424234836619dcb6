from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QGroupBox, QLabel, QGridLayout, QSizePolicy, QDoubleSpinBox,
    QComboBox, QPushButton, QCheckBox, QSlider, QHBoxLayout,
)

from vectorlab.config import PANEL_WIDTH


class LessonPanel(QWidget):
    """
    Side panel of one lesson: a title, a short theory blurb and grouped
    controls. Lessons fill it through the `_add_*` helpers, which place a
    label in column 0 and the widget in column 1 of the current group.
    """

    def __init__(self, title: str, theory: str = "", parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumWidth(PANEL_WIDTH)

        self._root = QVBoxLayout(self)
        self._root.setContentsMargins(8, 8, 8, 8)

        heading = QLabel(f"<h2>{title}</h2>", self)
        self._root.addWidget(heading)
        if theory:
            blurb = QLabel(theory, self)
            blurb.setWordWrap(True)
            blurb.setTextFormat(Qt.TextFormat.RichText)
            self._root.addWidget(blurb)

        self.grid: QGridLayout | None = None
        self._row = 0
        self._readouts: dict[str, QLabel] = {}
        self.begin_group("Controls")

    # ---- layout ----

    def begin_group(self, title: str) -> QGroupBox:
        """Start a new group box; following `_add_*` calls land in it."""
        box = QGroupBox(self.tr(title), self)
        self.grid = QGridLayout(box)
        self.grid.setVerticalSpacing(8)
        self._row = 0
        self._root.addWidget(box)
        return box

    def finish(self) -> None:
        self._root.addStretch()

    def _next_row(self) -> int:
        r = self._row
        self._row += 1
        return r

    def _add_row(self, label: str, widget: QWidget) -> QWidget:
        row = self._next_row()
        if label:
            self.grid.addWidget(QLabel(self.tr(label), self), row, 0)
            self.grid.addWidget(widget, row, 1)
        else:
            self.grid.addWidget(widget, row, 0, 1, 2)
        return widget

    # ---- widgets ----

    def _add_spin(
        self,
        label: str,
        *,
        min_value: float = -1e9,
        max_value: float = 1e9,
        step: float = 0.1,
        default: float = 0.0,
        suffix: str = "",
        decimals: int = 2,
        on_change: Optional[Callable[[float], None]] = None,
    ) -> QDoubleSpinBox:
        w = QDoubleSpinBox(self)
        w.setRange(min_value, max_value)
        w.setSingleStep(step)
        w.setDecimals(decimals)
        w.setValue(default)
        w.setKeyboardTracking(False)
        w.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        if suffix:
            w.setSuffix(f" {suffix}")
        if on_change is not None:
            w.valueChanged.connect(on_change)
        self._add_row(label, w)
        return w

    def _add_slider(
        self,
        label: str,
        *,
        min_value: float,
        max_value: float,
        default: float,
        resolution: int = 100,
        on_change: Optional[Callable[[float], None]] = None,
    ) -> QSlider:
        """
        Horizontal slider over a float range. The slider works in integer
        ticks; `on_change` receives the float value.
        """
        s = QSlider(Qt.Orientation.Horizontal, self)
        s.setRange(0, resolution)
        span = max_value - min_value

        def to_tick(v: float) -> int:
            return round((v - min_value) / span * resolution) if span else 0

        s.setValue(to_tick(default))
        s.setProperty("min_value", min_value)
        s.setProperty("span", span)
        if on_change is not None:
            s.valueChanged.connect(lambda tick: on_change(min_value + span * tick / resolution))
        self._add_row(label, s)
        return s

    def _add_combo(self, label: str, items: list[tuple[str, object]],
                   on_change: Optional[Callable[[object], None]] = None) -> QComboBox:
        """Combo box of (text, data) items; `on_change` receives the selected data."""
        c = QComboBox(self)
        for text, data in items:
            c.addItem(self.tr(text), userData=data)
        if on_change is not None:
            c.currentIndexChanged.connect(lambda index: on_change(c.itemData(index)))
        self._add_row(label, c)
        return c

    def _add_check(self, text: str, checked: bool = False,
                   on_change: Optional[Callable[[bool], None]] = None) -> QCheckBox:
        cb = QCheckBox(self.tr(text), self)
        cb.setChecked(checked)
        if on_change is not None:
            cb.toggled.connect(on_change)
        self._add_row("", cb)
        return cb

    def _add_buttons(self, *buttons: tuple[str, Callable[[], None]]) -> list[QPushButton]:
        holder = QWidget(self)
        h = QHBoxLayout(holder)
        h.setContentsMargins(0, 0, 0, 0)
        created = []
        for text, slot in buttons:
            b = QPushButton(self.tr(text), holder)
            b.clicked.connect(lambda _=False, fn=slot: fn())
            h.addWidget(b)
            created.append(b)
        self._add_row("", holder)
        return created

    def _add_readout(self, key: str, label: str, initial: str = "-") -> QLabel:
        """Read-only value label that lessons update with `set_readout`."""
        value = QLabel(initial, self)
        value.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        value.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        self._readouts[key] = value
        self._add_row(label, value)
        return value

    def _add_widget(self, widget: QWidget, label: str = "") -> QWidget:
        return self._add_row(label, widget)

    @staticmethod
    def set_slider_value(slider: QSlider, value: float) -> None:
        """Move a `_add_slider` slider to a float value without emitting."""
        min_value = slider.property("min_value")
        span = slider.property("span")
        tick = round((value - min_value) / span * slider.maximum()) if span else 0
        slider.blockSignals(True)
        slider.setValue(tick)
        slider.blockSignals(False)

    def set_readout(self, key: str, text: str) -> None:
        self._readouts[key].setText(text)

    def readout(self, key: str) -> str:
        return self._readouts[key].text()
