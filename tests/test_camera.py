import math

import pytest

from vectorlab.core.camera import (
    PITCH_LIMIT, CameraState, Viewport, floor_delta_to_world, project, screen_delta_to_world, to_camera_space,
)
from vectorlab.core.linalg import Vector, magnitude


def test_origin_projects_to_viewport_centre(orbit_camera, viewport):
    sp = project(Vector.zero(), orbit_camera, viewport)
    assert (sp.x, sp.y) == pytest.approx((400.0, 300.0))
    assert sp.depth == pytest.approx(0.0)


def test_flat_projection_ignores_z_and_flips_y(flat_camera, viewport):
    a = project(Vector(1.0, 2.0, 0.0), flat_camera, viewport)
    b = project(Vector(1.0, 2.0, 9.0), flat_camera, viewport)
    assert (a.x, a.y) == (440.0, 220.0)
    assert (a.x, a.y, a.depth) == (b.x, b.y, b.depth)


def test_flat_projection_honours_pan(viewport):
    cam = CameraState.flat(scale=10.0).panned(15.0, -5.0)
    sp = project(Vector(2.0, 0.0), cam, viewport)
    assert (sp.x, sp.y) == (435.0, 295.0)


def test_rotation_preserves_length(orbit_camera):
    p = Vector(1.0, -2.0, 3.0)
    assert magnitude(to_camera_space(p, orbit_camera)) == pytest.approx(magnitude(p))


def test_yaw_is_applied_before_pitch():
    cam = CameraState(pitch=math.pi / 2, yaw=math.pi / 2, scale=1.0)
    # Yaw turns +X into -Z, then pitch turns -Z into +Y
    r = to_camera_space(Vector(1.0, 0.0, 0.0), cam)
    assert (r.x, r.y, r.z) == pytest.approx((0.0, 1.0, 0.0), abs=1e-12)


def test_further_points_have_larger_depth():
    cam = CameraState(pitch=0.0, yaw=0.0, scale=40.0)
    vp = Viewport(100, 100)
    assert project(Vector(0, 0, 5), cam, vp).depth > project(Vector(0, 0, -5), cam, vp).depth


def test_pitch_is_clamped():
    cam = CameraState(pitch=0.0).orbit(0.0, 10.0)
    assert cam.pitch == PITCH_LIMIT
    cam = cam.orbit(0.0, -20.0)
    assert cam.pitch == -PITCH_LIMIT


def test_yaw_is_unbounded():
    assert CameraState(yaw=0.0).orbit(100.0, 0.0).yaw == 100.0


def test_zoom_is_clamped():
    cam = CameraState(scale=40.0)
    assert cam.zoomed(100.0, 10.0, 200.0).scale == 200.0
    assert cam.zoomed(0.001, 10.0, 200.0).scale == 10.0


def test_flatten_and_raise_switch_modes():
    cam = CameraState(pitch=-0.4, yaw=1.0, pan_x=5.0)
    flat = cam.flattened()
    assert not flat.is_3d
    assert (flat.pitch, flat.yaw, flat.pan_x, flat.pan_y) == (0.0, 0.0, 0.0, 0.0)
    raised = flat.raised(-0.6, 0.5)
    assert raised.is_3d
    assert (raised.pitch, raised.yaw) == (-0.6, 0.5)


@pytest.mark.parametrize("camera", [CameraState.flat(), CameraState(pitch=-0.3, yaw=0.5)])
def test_zero_drag_maps_to_zero_world_delta(camera):
    assert screen_delta_to_world(0.0, 0.0, camera) == Vector.zero()
    assert floor_delta_to_world(0.0, 0.0, camera) == Vector.zero()


@pytest.mark.parametrize("camera", [CameraState.flat(), CameraState(pitch=-0.3, yaw=0.5)])
def test_project_then_zero_drag_does_not_drift(camera, viewport):
    world = Vector(1.5, -2.0, 0.75 if camera.is_3d else 0.0)
    before = project(world, camera, viewport)
    moved = world + screen_delta_to_world(0.0, 0.0, camera)
    after = project(moved, camera, viewport)
    assert moved == world
    assert (after.x, after.y, after.depth) == (before.x, before.y, before.depth)


def test_flat_drag_follows_the_pointer(viewport):
    cam = CameraState.flat(scale=40.0)
    world = Vector(1.0, 1.0)
    start = project(world, cam, viewport)
    moved = world + screen_delta_to_world(20.0, -40.0, cam)
    end = project(moved, cam, viewport)
    assert (end.x - start.x, end.y - start.y) == pytest.approx((20.0, -40.0))


def test_3d_drag_vertical_motion_moves_world_y():
    cam = CameraState(pitch=-0.3, yaw=0.8, scale=50.0)
    delta = screen_delta_to_world(0.0, -50.0, cam)
    assert (delta.x, delta.y, delta.z) == pytest.approx((0.0, 1.0, 0.0))


def test_3d_drag_horizontal_motion_follows_yaw():
    cam = CameraState(pitch=0.0, yaw=0.0, scale=10.0)
    delta = screen_delta_to_world(10.0, 0.0, cam)
    assert (delta.x, delta.y, delta.z) == pytest.approx((1.0, 0.0, 0.0))


def test_floor_drag_stays_on_the_ground():
    cam = CameraState(pitch=-0.5, yaw=0.3, scale=40.0)
    delta = floor_delta_to_world(12.0, -7.0, cam)
    assert delta.y == 0.0
    assert math.hypot(delta.x, delta.z) == pytest.approx(math.hypot(12.0, -7.0) / 40.0)
