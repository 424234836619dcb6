"""
Depth-Sorted Render Queue
=========================
Deferred drawing with the painter's algorithm.

Callers submit draw commands tagged with a depth key while they walk their
model; once the frame is known the queue sorts back-to-front (largest depth
first) and executes the commands. There is no depth buffer, so intersecting
geometry can mis-order at shape boundaries. That is acceptable for the thin
wireframes and arrows drawn here.

Interactive elements are submitted through `submit_overlay`, which subtracts
`HANDLE_DEPTH_BIAS` from their depth so they always paint after the grid.

A failing paint callback is logged and skipped; the rest of the frame renders.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from vectorlab.config import HANDLE_DEPTH_BIAS

logger = logging.getLogger(__name__)

PaintFn = Callable[[Any], None]


@dataclass(frozen=True)
class RenderCommand:
    depth_key: float
    paint: PaintFn
    label: str = ""


class RenderQueue:
    """Accumulates one frame of draw commands."""

    def __init__(self) -> None:
        self._commands: list[RenderCommand] = []
        self.failures: int = 0

    def __len__(self) -> int:
        return len(self._commands)

    def submit_draw(self, depth_key: float, paint: PaintFn, label: str = "") -> None:
        self._commands.append(RenderCommand(depth_key=depth_key, paint=paint, label=label))

    def submit_overlay(self, depth_key: float, paint: PaintFn, label: str = "") -> None:
        """Submit an interactive element (arrow, handle) that must stay on top."""
        self.submit_draw(depth_key - HANDLE_DEPTH_BIAS, paint, label)

    def sorted_commands(self) -> list[RenderCommand]:
        """Back-to-front order. Stable for equal depth keys (submission order)."""
        return sorted(self._commands, key=lambda cmd: cmd.depth_key, reverse=True)

    def clear(self) -> None:
        self._commands.clear()

    def flush(self, painter: Any) -> int:
        """
        Execute all commands furthest-first and empty the queue.

        Args:
            painter: Drawing context handed to every paint callback (a QPainter in the app).

        Returns:
            Number of commands that painted without raising.
        """
        commands = self.sorted_commands()
        self._commands = []

        painted = 0
        for cmd in commands:
            try:
                cmd.paint(painter)
            except Exception:
                self.failures += 1
                logger.exception("Draw command '%s' (depth %.3f) failed; skipped.", cmd.label, cmd.depth_key)
                continue
            painted += 1
        return painted
