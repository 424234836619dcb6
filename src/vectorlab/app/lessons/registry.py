from __future__ import annotations

from vectorlab.app.lessons.base import LessonScene
from vectorlab.app.state import LessonGroup

_REGISTRY: dict[str, type[LessonScene]] = {}


def register_lesson(cls: type[LessonScene]) -> type[LessonScene]:
    """Class decorator to register a lesson by its KEY."""
    key = getattr(cls, "KEY", None)
    if not key or key == LessonScene.KEY:
        raise ValueError(f"{cls.__name__} must define KEY")
    if key in _REGISTRY and _REGISTRY[key] is not cls:
        raise ValueError(f"Lesson key '{key}' is already registered by {_REGISTRY[key].__name__}")
    _REGISTRY[key] = cls
    return cls


def create_lesson(key: str) -> LessonScene:
    cls = _REGISTRY.get(key)
    if not cls:
        raise KeyError(f"No lesson registered for key '{key}'")
    return cls()


def lesson_class(key: str) -> type[LessonScene]:
    cls = _REGISTRY.get(key)
    if not cls:
        raise KeyError(f"No lesson registered for key '{key}'")
    return cls


def list_keys() -> list[str]:
    return list(_REGISTRY.keys())


def lessons_in_group(group: LessonGroup) -> list[str]:
    """Keys of the lessons in `group`, in teaching order."""
    members = [cls for cls in _REGISTRY.values() if cls.GROUP == group]
    return [cls.KEY for cls in sorted(members, key=lambda c: c.ORDER)]
