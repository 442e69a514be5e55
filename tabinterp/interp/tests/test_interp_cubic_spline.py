import copy
from types import SimpleNamespace

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal
from scipy.interpolate import CubicSpline

from tabinterp.exceptions import AllocationFailureError, InvalidConfigurationError
from tabinterp.interp import CubicSplineInterpolator
from tabinterp.utils import tridiagonal


def test_cubic_samples_natural(cubic_samples):
    f = CubicSplineInterpolator().configure(cubic_samples)
    assert f.natural_spline
    assert abs(f.evaluate(1.5) - 3.375) < 0.25
    assert_allclose(f.second_derivatives, [0.0, 4.8, 16.8, 0.0], atol=1e-12)
    # natural end: extrapolation follows the first-difference slope exactly
    assert f.evaluate(-1.0) == f.lowest_dependent_value() - 1.0 * f.dydx_low
    assert f.evaluate(-1.0) == -1.0


def test_natural_matches_scipy(nonuniform_table):
    x, y = nonuniform_table
    f = CubicSplineInterpolator().configure_from_arrays(x, y)
    reference = CubicSpline(x, y, bc_type="natural")
    queries = np.linspace(x[0], x[-1], 501)
    assert_allclose(f.predict(queries), reference(queries), rtol=1e-10, atol=1e-10)


def test_clamped_matches_scipy(nonuniform_table):
    x, y = nonuniform_table
    f = CubicSplineInterpolator(natural_spline=False).configure_from_arrays(x, y)
    reference = CubicSpline(x, y, bc_type=((1, f.dydx_low), (1, f.dydx_high)))
    queries = np.linspace(x[0], x[-1], 501)
    assert_allclose(f.predict(queries), reference(queries), rtol=1e-10, atol=1e-10)
    assert_allclose(f.second_derivatives, reference(x, 2), rtol=1e-10, atol=1e-10)


@pytest.mark.parametrize("natural_spline", [True, False])
def test_reproduces_sample_points(nonuniform_table, natural_spline):
    x, y = nonuniform_table
    f = CubicSplineInterpolator(natural_spline=natural_spline).configure_from_arrays(x, y)
    for xi, yi in zip(x, y):
        assert f.evaluate(xi) == yi


@pytest.mark.parametrize("natural_spline", [True, False])
def test_continuity_across_knots(nonuniform_table, natural_spline):
    x, y = nonuniform_table
    f = CubicSplineInterpolator(natural_spline=natural_spline).configure_from_arrays(x, y)
    eps = 1e-7
    h = 1e-4
    for xi in x[1:-1]:
        below, above = f.evaluate(xi - eps), f.evaluate(xi + eps)
        assert_allclose(below, above, atol=1e-5)
        slope_below = (f.evaluate(xi) - f.evaluate(xi - h)) / h
        slope_above = (f.evaluate(xi + h) - f.evaluate(xi)) / h
        assert_allclose(slope_below, slope_above, atol=1e-2)


def test_natural_extrapolation_is_affine(nonuniform_table):
    x, y = nonuniform_table
    f = CubicSplineInterpolator().configure_from_arrays(x, y)
    for side, slope in ((x[0] - np.arange(1.0, 6.0), f.dydx_low), (x[-1] + np.arange(1.0, 6.0), f.dydx_high)):
        values = f.predict(side)
        assert_allclose(np.diff(values) / np.diff(side), slope, rtol=1e-9, atol=1e-12)


def test_clamped_extrapolation_uses_end_curvature(cubic_samples):
    f = CubicSplineInterpolator(natural_spline=False).configure(cubic_samples)
    d2y = f.second_derivatives
    assert f.evaluate(-2.0) == 0.0 - 2.0 * f.dydx_low - 0.5 * 4.0 * d2y[0]
    assert f.evaluate(4.0) == 27.0 + 1.0 * f.dydx_high + 0.5 * 1.0 * d2y[-1]


def test_minimum_size_is_three():
    f = CubicSplineInterpolator()
    assert f.min_table_size == 3
    with pytest.raises(InvalidConfigurationError):
        f.configure([(0.0, 0.0), (1.0, 1.0)])
    with pytest.raises(InvalidConfigurationError):
        f.configure([(0.0, 0.0), (1.0, 1.0), (1.0, 2.0)])
    assert not f.is_configured
    assert f.second_derivatives.size == 0


def test_toggle_boundary_rederives(nonuniform_table):
    x, y = nonuniform_table
    natural = CubicSplineInterpolator().configure_from_arrays(x, y)
    clamped = CubicSplineInterpolator(natural_spline=False).configure_from_arrays(x, y)
    queries = np.linspace(x[0] - 1.0, x[-1] + 1.0, 203)

    f = CubicSplineInterpolator().configure_from_arrays(x, y)
    f.set_natural_boundary(False)
    assert not f.natural_spline
    assert_array_equal(f.predict(queries), clamped.predict(queries))

    f.set_params(natural_spline=True)
    assert f.get_params() == {"natural_spline": True}
    assert_array_equal(f.predict(queries), natural.predict(queries))
    assert f.table_size() == x.size


def test_boundary_on_unconfigured_spline():
    f = CubicSplineInterpolator()
    f.natural_spline = False
    assert not f.natural_spline
    assert f.evaluate(2.0) == 2.0


def test_copy_keeps_boundary_condition(cubic_samples):
    f = CubicSplineInterpolator(natural_spline=False).configure(cubic_samples)
    g = CubicSplineInterpolator().configure_from(f)
    h = copy.deepcopy(f)
    for other in (g, h):
        assert not other.natural_spline
        assert_array_equal(other.second_derivatives, f.second_derivatives)
        assert other.evaluate(-0.5) == f.evaluate(-0.5)

    f.configure([(0.0, 1.0), (1.0, 2.0), (2.0, 0.0)])
    f.set_natural_boundary(True)
    assert g.table_size() == 4
    assert not g.natural_spline
    assert h.evaluate(1.5) == g.evaluate(1.5)


def test_buffer_tracks_table_capacity(nonuniform_table):
    x, y = nonuniform_table
    f = CubicSplineInterpolator().configure_from_arrays(x, y)
    assert f._strategy.capacity == f._table.capacity == x.size
    f.configure_from_arrays(x[:5], y[:5])
    assert f._strategy.capacity == x.size
    assert f.second_derivatives.shape == (5,)
    f.configure([])
    assert f._strategy.capacity == 0


def test_uniform_and_search_paths_agree():
    x = np.linspace(0.0, 2.0 * np.pi, 33)
    y = np.sin(x)
    f = CubicSplineInterpolator().configure_from_range(0.0, 2.0 * np.pi, y)
    assert_allclose(f.uniform_step, x[1] - x[0])
    queries = np.random.default_rng(5).uniform(-1.0, 7.5, 500)
    assert_array_equal(np.array([f.evaluate(q) for q in queries]), f.predict(queries))


def _fail_allocation(*args, **kwargs):
    raise MemoryError


def test_scratch_allocation_failure_unconfigures(monkeypatch, cubic_samples):
    f = CubicSplineInterpolator().configure([(0.0, 1.0), (1.0, 2.0), (2.0, 0.0)])
    monkeypatch.setattr(tridiagonal, "np", SimpleNamespace(empty=_fail_allocation, float64=np.float64))
    with pytest.raises(AllocationFailureError):
        f.configure(cubic_samples)
    monkeypatch.undo()

    assert not f.is_configured
    assert f._table.capacity == 0
    assert f._strategy.capacity == 0
    assert f.evaluate(1.5) == 1.5


def test_boundary_switch_allocation_failure_unconfigures(monkeypatch, cubic_samples):
    f = CubicSplineInterpolator().configure(cubic_samples)
    monkeypatch.setattr(tridiagonal, "np", SimpleNamespace(empty=_fail_allocation, float64=np.float64))
    with pytest.raises(AllocationFailureError):
        f.set_natural_boundary(False)
    monkeypatch.undo()

    assert not f.is_configured
    assert f.evaluate(1.5) == 1.5
    f.configure(cubic_samples)
    assert not f.natural_spline
    assert f.second_derivatives[0] != 0.0
