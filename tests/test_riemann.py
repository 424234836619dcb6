import numpy as np
import pytest

from vectorlab.core.fields import INTEGRAL_FIELDS, ScalarField, field_by_key
from vectorlab.core.simulation.riemann import RiemannEstimate, estimate_riemann_volume


def _constant(value):
    return ScalarField(key="const", name="Constant", equation="", f=lambda x, y: value + 0 * x * y)


def test_constant_surface_gives_box_volume():
    est = estimate_riemann_volume(_constant(2.0), 4, 3.0)
    assert est.volume == pytest.approx(2.0 * 6.0 * 6.0)
    assert len(est.cells) == 16
    assert est.dx == est.dy == pytest.approx(1.5)
    assert est.cell_area == pytest.approx(2.25)


def test_cells_use_midpoint_heights(paraboloid):
    est = estimate_riemann_volume(paraboloid, 2, 3.0)
    # midpoints are (±1.5, ±1.5)
    assert [c.height for c in est.cells] == pytest.approx([paraboloid.value(1.5, 1.5)] * 4)
    assert sorted((c.x0, c.y0) for c in est.cells) == [(-3.0, -3.0), (-3.0, 0.0), (0.0, -3.0), (0.0, 0.0)]
    assert sum(c.volume for c in est.cells) == pytest.approx(est.volume)


def test_paraboloid_converges_to_exact_volume(paraboloid):
    # integral of 1 + (x² + y²) / 8 over [-3, 3]² is 36 + 27
    exact = 63.0
    errors = [abs(estimate_riemann_volume(paraboloid, n, 3.0).volume - exact) for n in (4, 8, 16, 32, 64)]
    assert errors[-1] < 0.01
    assert all(later < earlier for earlier, later in zip(errors, errors[1:]))


@pytest.mark.parametrize("key", [f.key for f in INTEGRAL_FIELDS])
def test_refinement_shrinks_variation_between_doublings(key):
    fld = field_by_key(INTEGRAL_FIELDS, key)
    volumes = [estimate_riemann_volume(fld, n, fld.half_range).volume for n in (5, 10, 20, 40, 80)]
    diffs = [abs(b - a) for a, b in zip(volumes, volumes[1:])]
    assert diffs[-1] < diffs[0] or diffs[0] == pytest.approx(0.0, abs=1e-12)
    assert diffs[-1] < 0.05


def test_negative_contributions_are_dropped():
    tilted = ScalarField(key="tilt", name="Tilt", equation="", f=lambda x, y: x + 0 * y)
    est = estimate_riemann_volume(tilted, 2, 1.0)
    # only the cells with x > 0 count: two cells of height 0.5 and area 1
    assert est.volume == pytest.approx(1.0)
    assert all(c.height > 0 for c in est.cells)
    assert len(est.cells) == 2


def test_sample_cell_sits_at_the_origin(paraboloid):
    est = estimate_riemann_volume(paraboloid, 5, 3.0)
    samples = [c for c in est.cells if c.is_sample]
    assert len(samples) == 1
    cell = samples[0]
    assert cell.x0 < 0.0 < cell.x0 + cell.size
    assert cell.y0 < 0.0 < cell.y0 + cell.size


def test_even_resolution_flags_the_four_central_cells(paraboloid):
    est = estimate_riemann_volume(paraboloid, 6, 3.0)
    assert sum(c.is_sample for c in est.cells) == 4


@pytest.mark.parametrize("n,r", [(0, 3.0), (-2, 3.0), (4, 0.0), (4, -1.0), (4, float("nan"))])
def test_degenerate_input_gives_empty_estimate(n, r, paraboloid):
    assert estimate_riemann_volume(paraboloid, n, r) == RiemannEstimate.empty()


def test_non_finite_heights_are_ignored():
    spiky = ScalarField(key="spiky", name="Spiky", equation="", f=lambda x, y: 1.0 / (x * x + y * y) - 0 * x)
    est = estimate_riemann_volume(spiky, 3, 1.5)
    assert np.isfinite(est.volume)
