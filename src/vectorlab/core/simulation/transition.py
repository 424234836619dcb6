"""
Eased Matrix Transition
=======================
Exponential approach of a displayed matrix towards an edited target, one
frame at a time. Snaps to the target once the remaining L1 distance is below
the tolerance, so the animation always terminates.
"""
from __future__ import annotations

from typing import TypeVar

from vectorlab.config import TRANSITION_RATE, TRANSITION_TOLERANCE
from vectorlab.core.linalg import Matrix2, Matrix3, lerp, matrix_distance

M = TypeVar("M", Matrix2, Matrix3)


def approach(
    current: M,
    target: M,
    rate: float = TRANSITION_RATE,
    tolerance: float = TRANSITION_TOLERANCE,
) -> tuple[M, bool]:
    """
    Move `current` a fraction `rate` of the way to `target`.

    Returns:
        (next matrix, done). `done` is True when `next` equals `target`.

    Raises:
        TypeError: If the matrices have different sizes.
    """
    if type(current) is not type(target):
        raise TypeError(f"Cannot ease {type(current).__name__} towards {type(target).__name__}.")
    if matrix_distance(current, target) < tolerance:
        return target, True
    nxt = lerp(current, target, rate)
    if matrix_distance(nxt, target) < tolerance:
        return target, True
    return nxt, False
