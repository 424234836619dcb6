import pytest

import vectorlab.app.lessons  # noqa: F401  (registers every lesson)
from vectorlab.app.lessons.base import LessonScene
from vectorlab.app.lessons.registry import create_lesson, lesson_class, lessons_in_group, list_keys, register_lesson
from vectorlab.app.state import LessonGroup

LINEAR_ALGEBRA = [
    "vectors", "vector_addition", "scalar_multiplication", "line_equation", "dot_product", "cross_product",
    "matrix_transform", "matrix_multiplication", "eigenvectors",
]
CALCULUS = ["derivatives", "gradient_descent", "integral", "curl"]


def test_every_lesson_is_registered():
    assert set(list_keys()) == set(LINEAR_ALGEBRA + CALCULUS)


def test_groups_are_in_teaching_order():
    assert lessons_in_group(LessonGroup.LINEAR_ALGEBRA) == LINEAR_ALGEBRA
    assert lessons_in_group(LessonGroup.CALCULUS) == CALCULUS


@pytest.mark.parametrize("key", LINEAR_ALGEBRA + CALCULUS)
def test_create_lesson_builds_a_fresh_instance(key):
    a, b = create_lesson(key), create_lesson(key)
    assert isinstance(a, lesson_class(key))
    assert a is not b
    assert a.KEY == key
    assert a.panel is None


def test_unknown_key_raises():
    with pytest.raises(KeyError):
        create_lesson("does_not_exist")
    with pytest.raises(KeyError):
        lesson_class("does_not_exist")


def test_lesson_without_key_is_rejected():
    class Nameless(LessonScene):
        pass

    with pytest.raises(ValueError):
        register_lesson(Nameless)


def test_duplicate_key_is_rejected():
    class Impostor(LessonScene):
        KEY = "vectors"

    with pytest.raises(ValueError):
        register_lesson(Impostor)
