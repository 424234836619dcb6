from __future__ import annotations

import logging

from PySide6.QtCore import Signal, Slot
from PySide6.QtGui import QWheelEvent
from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QLineEdit

from vectorlab.core.inputs import nudge, parse_number
from vectorlab.core.linalg import Vector

logger = logging.getLogger(__name__)

AXES = ("x", "y", "z")


class NumberField(QLineEdit):
    """
    Free-text number entry.

    Invalid text never replaces the value: `value()` keeps returning the last
    number that parsed. Scrolling over the field nudges it by 0.5.
    """
    value_changed = Signal(float)

    def __init__(self, value: float = 0.0, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._value = value
        self.setText(f"{value:.1f}")
        self.setMaximumWidth(70)
        self.textEdited.connect(self._on_text_edited)
        self.editingFinished.connect(self._on_editing_finished)

    def value(self) -> float:
        return self._value

    def set_value(self, value: float) -> None:
        """Programmatic update; does not emit `value_changed`."""
        self._value = value
        if not self.hasFocus():
            self.setText(f"{value:.1f}")

    @Slot(str)
    def _on_text_edited(self, text: str) -> None:
        new = parse_number(text, self._value)
        if new != self._value:
            self._value = new
            self.value_changed.emit(new)

    @Slot()
    def _on_editing_finished(self) -> None:
        # Show the last good value once the user leaves the field
        self.setText(f"{self._value:.1f}")

    def wheelEvent(self, event: QWheelEvent) -> None:
        # Qt: positive angleDelta means scrolling up
        self._value = nudge(self._value, -event.angleDelta().y())
        self.setText(f"{self._value:.1f}")
        self.value_changed.emit(self._value)
        event.accept()


class VectorEditor(QWidget):
    """Three `NumberField`s editing one vector. Z can be hidden for 2D lessons."""
    vector_changed = Signal(object)

    def __init__(self, vector: Vector, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        h = QHBoxLayout(self)
        h.setContentsMargins(0, 0, 0, 0)
        self._vector = vector
        self._fields: dict[str, NumberField] = {}
        self._labels: dict[str, QLabel] = {}
        for axis in AXES:
            lab = QLabel(axis, self)
            fld = NumberField(getattr(vector, axis), self)
            fld.value_changed.connect(lambda v, a=axis: self._on_component(a, v))
            h.addWidget(lab)
            h.addWidget(fld)
            self._fields[axis] = fld
            self._labels[axis] = lab

    def vector(self) -> Vector:
        return self._vector

    def set_vector(self, vector: Vector) -> None:
        self._vector = vector
        for axis, fld in self._fields.items():
            fld.set_value(getattr(vector, axis))

    def set_z_visible(self, visible: bool) -> None:
        self._fields["z"].setVisible(visible)
        self._labels["z"].setVisible(visible)

    def _on_component(self, axis: str, value: float) -> None:
        self._vector = self._vector.with_component(axis, value)
        logger.debug("Vector edited: %s", self._vector)
        self.vector_changed.emit(self._vector)
