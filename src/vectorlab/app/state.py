from __future__ import annotations

import logging
from enum import IntEnum
from typing import Optional

from PySide6.QtCore import QObject, Signal

logger = logging.getLogger(__name__)


class LessonGroup(IntEnum):
    """Top-level lesson groups, in tab order."""
    LINEAR_ALGEBRA = 0
    CALCULUS = 1

    @property
    def label(self) -> str:
        return GROUP_LABELS[self]


GROUP_LABELS = {
    LessonGroup.LINEAR_ALGEBRA: "Linear Algebra",
    LessonGroup.CALCULUS: "Calculus",
}


class Store(QObject):
    """Navigation state shared by the tab bar, the lesson list and the canvas."""
    group_changed = Signal(int)
    lesson_changed = Signal(str)
    status_message = Signal(str)

    def __init__(self) -> None:
        super().__init__()
        self._group = LessonGroup.LINEAR_ALGEBRA
        self._lesson_key: Optional[str] = None

    @property
    def group(self) -> LessonGroup:
        return self._group

    @property
    def lesson_key(self) -> Optional[str]:
        return self._lesson_key

    def set_group(self, group: LessonGroup) -> None:
        if group != self._group:
            self._group = group
            self.group_changed.emit(int(group))

    def set_lesson(self, key: str) -> None:
        if key != self._lesson_key:
            logger.info("Switching lesson: %s -> %s", self._lesson_key, key)
            self._lesson_key = key
            self.lesson_changed.emit(key)

    def post_status(self, message: str) -> None:
        self.status_message.emit(message)
