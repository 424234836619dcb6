"""
Pointer Interaction State Machine
=================================
Turns raw pointer events into camera changes or handle drags.

States:
    IDLE                -- no gesture in progress.
    DRAGGING(target)    -- target is ORBIT, PAN or HANDLE(handle_id).

Transitions:
    IDLE --down-->          hit-test registered handles (registration order, first
                            match wins); otherwise ORBIT in 3D or PAN in 2D.
    DRAGGING --move-->      orbit/pan the camera, or report a world-space delta
                            for the dragged handle.
    DRAGGING --up/leave-->  IDLE.

Wheel events are independent of the state machine and always zoom.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Optional

from vectorlab.config import (
    HANDLE_RADIUS_PX, MAX_SCALE, MIN_SCALE, ZOOM_IN_FACTOR, ZOOM_OUT_FACTOR, InteractionSettings,
)
from vectorlab.core.camera import CameraState, ScreenPoint, Viewport, project, screen_delta_to_world
from vectorlab.core.linalg import Vector

logger = logging.getLogger(__name__)


class DragKind(Enum):
    NONE = "none"
    ORBIT = "orbit"
    PAN = "pan"
    HANDLE = "handle"


@dataclass(frozen=True)
class DragTarget:
    kind: DragKind = DragKind.NONE
    handle_id: Optional[str] = None

    @classmethod
    def none(cls) -> DragTarget:
        return cls(DragKind.NONE)

    @classmethod
    def orbit(cls) -> DragTarget:
        return cls(DragKind.ORBIT)

    @classmethod
    def pan(cls) -> DragTarget:
        return cls(DragKind.PAN)

    @classmethod
    def handle(cls, handle_id: str) -> DragTarget:
        return cls(DragKind.HANDLE, handle_id)

    @property
    def is_handle(self) -> bool:
        return self.kind is DragKind.HANDLE


@dataclass(frozen=True)
class PointerEvent:
    """Pointer position in canvas pixels."""
    x: float
    y: float


@dataclass(frozen=True)
class Handle:
    """A draggable hit-test target bound to a world position."""
    handle_id: str
    world: Vector
    radius: float = HANDLE_RADIUS_PX


class HandleRegistry:
    """
    Ordered collection of handles for one frame.

    Registration order is the hit-test priority: when two handles overlap the
    one registered first wins.
    """

    def __init__(self, default_radius: float = HANDLE_RADIUS_PX) -> None:
        self.default_radius = default_radius
        self._handles: dict[str, Handle] = {}

    def __iter__(self) -> Iterator[Handle]:
        return iter(self._handles.values())

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, handle_id: object) -> bool:
        return handle_id in self._handles

    def register(self, handle_id: str, world: Vector, radius: Optional[float] = None) -> Handle:
        """Register (or move) a handle. Re-registering keeps its original priority."""
        handle = Handle(handle_id, world, self.default_radius if radius is None else radius)
        self._handles[handle_id] = handle
        return handle

    def get(self, handle_id: str) -> Optional[Handle]:
        return self._handles.get(handle_id)

    def clear(self) -> None:
        self._handles.clear()

    def screen_positions(self, camera: CameraState, viewport: Viewport) -> list[tuple[Handle, ScreenPoint]]:
        return [(h, project(h.world, camera, viewport)) for h in self._handles.values()]

    def hit_test(self, x: float, y: float, camera: CameraState, viewport: Viewport) -> Optional[Handle]:
        for handle, screen in self.screen_positions(camera, viewport):
            if screen.distance_to(x, y) < handle.radius:
                return handle
        return None


@dataclass(frozen=True)
class InteractionState:
    """Current gesture and the last pointer position seen during it."""
    target: DragTarget = field(default_factory=DragTarget.none)
    last_x: float = 0.0
    last_y: float = 0.0

    @property
    def is_dragging(self) -> bool:
        return self.target.kind is not DragKind.NONE


@dataclass(frozen=True)
class InteractionUpdate:
    """
    Result of one pointer move.

    Attributes:
        camera: Camera after the move (unchanged for handle drags).
        handle_delta: World-space delta for the dragged handle, zero otherwise.
        screen_delta: Raw pixel delta (dx, dy) of this move.
        state: Interaction state with the updated last pointer position.
    """
    camera: CameraState
    handle_delta: Vector
    screen_delta: tuple[float, float]
    state: InteractionState


def begin_interaction(
    event: PointerEvent,
    registry: HandleRegistry,
    camera: CameraState,
    viewport: Viewport,
) -> DragTarget:
    """Pick the drag target for a pointer-down event."""
    handle = registry.hit_test(event.x, event.y, camera, viewport)
    if handle is not None:
        logger.debug("Pointer down on handle '%s'.", handle.handle_id)
        return DragTarget.handle(handle.handle_id)
    return DragTarget.orbit() if camera.is_3d else DragTarget.pan()


def start_gesture(
    event: PointerEvent,
    registry: HandleRegistry,
    camera: CameraState,
    viewport: Viewport,
) -> InteractionState:
    """IDLE -> DRAGGING(target), remembering where the gesture started."""
    target = begin_interaction(event, registry, camera, viewport)
    return InteractionState(target=target, last_x=event.x, last_y=event.y)


def update_interaction(
    event: PointerEvent,
    state: InteractionState,
    camera: CameraState,
    settings: InteractionSettings = InteractionSettings(),
) -> InteractionUpdate:
    """Apply one pointer move to the active gesture."""
    dx = event.x - state.last_x
    dy = event.y - state.last_y
    new_state = replace(state, last_x=event.x, last_y=event.y)

    match state.target.kind:
        case DragKind.ORBIT:
            camera = camera.orbit(dx * settings.orbit_sensitivity, dy * settings.orbit_sensitivity)
            delta = Vector.zero()
        case DragKind.PAN:
            camera = camera.panned(dx, dy)
            delta = Vector.zero()
        case DragKind.HANDLE:
            delta = screen_delta_to_world(dx, dy, camera)
        case _:
            delta = Vector.zero()

    return InteractionUpdate(camera=camera, handle_delta=delta, screen_delta=(dx, dy), state=new_state)


def end_interaction() -> InteractionState:
    """Pointer up or leave: back to IDLE."""
    return InteractionState()


def apply_wheel(
    camera: CameraState,
    wheel_delta: float,
    min_scale: float = MIN_SCALE,
    max_scale: float = MAX_SCALE,
) -> CameraState:
    """
    Zoom by a fixed factor per wheel notch.

    Negative `wheel_delta` (scrolling up, DOM convention) zooms in. Qt reports
    the opposite sign, so the canvas negates `angleDelta().y()` before calling.
    """
    if wheel_delta == 0:
        return camera
    factor = ZOOM_IN_FACTOR if wheel_delta < 0 else ZOOM_OUT_FACTOR
    return camera.zoomed(factor, min_scale, max_scale)
