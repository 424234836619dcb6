from __future__ import annotations

from dataclasses import fields

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QWidget, QGridLayout, QDoubleSpinBox, QSizePolicy

from vectorlab.core.linalg import Matrix, Matrix2, Matrix3


class MatrixEditor(QWidget):
    """Grid of spin boxes laid out like the matrix (2x2 or 3x3)."""
    matrix_changed = Signal(object)

    def __init__(self, matrix: Matrix, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._grid = QGridLayout(self)
        self._grid.setContentsMargins(0, 0, 0, 0)
        self._spins: dict[str, QDoubleSpinBox] = {}
        self._matrix = matrix
        self._rebuild()

    def matrix(self) -> Matrix:
        return self._matrix

    def set_matrix(self, matrix: Matrix) -> None:
        """Programmatic update; does not emit `matrix_changed`."""
        if type(matrix) is not type(self._matrix):
            self._matrix = matrix
            self._rebuild()
            return
        self._matrix = matrix
        for name, spin in self._spins.items():
            spin.blockSignals(True)
            spin.setValue(getattr(matrix, name))
            spin.blockSignals(False)

    def _rebuild(self) -> None:
        for spin in self._spins.values():
            self._grid.removeWidget(spin)
            spin.deleteLater()
        self._spins.clear()

        n = 2 if isinstance(self._matrix, Matrix2) else 3
        for k, fld in enumerate(fields(self._matrix)):
            spin = QDoubleSpinBox(self)
            spin.setRange(-10.0, 10.0)
            spin.setSingleStep(0.1)
            spin.setDecimals(2)
            spin.setKeyboardTracking(False)
            spin.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
            spin.setValue(getattr(self._matrix, fld.name))
            spin.valueChanged.connect(self._on_changed)
            self._grid.addWidget(spin, k // n, k % n)
            self._spins[fld.name] = spin

    def _on_changed(self) -> None:
        values = {name: spin.value() for name, spin in self._spins.items()}
        cls = Matrix2 if isinstance(self._matrix, Matrix2) else Matrix3
        self._matrix = cls(**values)
        self.matrix_changed.emit(self._matrix)
