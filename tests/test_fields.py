import numpy as np
import pytest

from vectorlab.core.fields import (
    CURL_FIELDS, DERIVATIVE_FIELDS, GRADIENT_FIELDS, INTEGRAL_FIELDS, field_by_key,
)
from vectorlab.core.linalg import Vector

POINTS = [(0.3, -1.2), (1.0, 1.0), (-2.5, 0.7)]
H = 1e-5


@pytest.mark.parametrize("fld", GRADIENT_FIELDS + DERIVATIVE_FIELDS, ids=lambda f: f.key)
@pytest.mark.parametrize("x,y", POINTS)
def test_partials_match_finite_differences(fld, x, y):
    grad = fld.gradient(x, y)
    num_dx = (fld.value(x + H, y) - fld.value(x - H, y)) / (2 * H)
    num_dy = (fld.value(x, y + H) - fld.value(x, y - H)) / (2 * H)
    assert grad.x == pytest.approx(num_dx, abs=1e-6)
    assert grad.y == pytest.approx(num_dy, abs=1e-6)


@pytest.mark.parametrize("fld", CURL_FIELDS, ids=lambda f: f.key)
@pytest.mark.parametrize("x,y", POINTS)
def test_stored_curl_matches_field(fld, x, y):
    dfy_dx = (fld.at(x + H, y).y - fld.at(x - H, y).y) / (2 * H)
    dfx_dy = (fld.at(x, y + H).x - fld.at(x, y - H).x) / (2 * H)
    assert dfy_dx - dfx_dy == pytest.approx(fld.curl, abs=1e-6)


def test_vortex_circles_the_origin():
    vortex = field_by_key(CURL_FIELDS, "vortex")
    assert vortex.at(1.0, 0.0) == Vector(0.0, 1.0)
    assert vortex.at(0.0, 2.0) == Vector(-2.0, 0.0)


def test_surface_point_puts_height_on_world_y(bowl):
    assert bowl.surface_point(2.0, -2.0) == Vector(2.0, 2.0, -2.0)


def test_clamp_keeps_points_in_domain(bowl):
    assert bowl.clamp(10.0, -10.0) == (4.0, -4.0)
    assert bowl.clamp(1.0, 2.0) == (1.0, 2.0)


@pytest.mark.parametrize("fld", INTEGRAL_FIELDS + DERIVATIVE_FIELDS, ids=lambda f: f.key)
def test_sample_grid_is_vectorised(fld):
    xs, ys, zs = fld.sample_grid(7)
    assert xs.shape == ys.shape == zs.shape == (7, 7)
    assert zs[3, 3] == pytest.approx(fld.value(0.0, 0.0))
    assert xs.min() == -fld.half_range
    assert ys.max() == fld.half_range


@pytest.mark.parametrize("fld", INTEGRAL_FIELDS, ids=lambda f: f.key)
def test_integral_surfaces_stay_above_the_floor(fld):
    _, _, zs = fld.sample_grid(41)
    assert np.all(zs > 0.0)


def test_field_by_key_raises_for_unknown_key():
    with pytest.raises(KeyError):
        field_by_key(GRADIENT_FIELDS, "missing")


def test_catalogue_keys_are_unique():
    for catalogue in (GRADIENT_FIELDS, DERIVATIVE_FIELDS, INTEGRAL_FIELDS, CURL_FIELDS):
        keys = [f.key for f in catalogue]
        assert len(keys) == len(set(keys))


def test_gradient_start_points_match_lessons():
    assert field_by_key(GRADIENT_FIELDS, "bowl").start == (3.0, 3.0)
