import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy.interpolate import CubicSpline

from tabinterp.utils import spline_second_derivatives


def tri_to_full(dl, d, du):
    """Build full tridiagonal matrix A from bands dl, d, du."""
    n = d.size
    A = np.zeros((n, n), dtype=d.dtype)
    A[np.arange(n), np.arange(n)] = d
    A[np.arange(1, n), np.arange(n - 1)] = dl  # sub-diagonal
    A[np.arange(n - 1), np.arange(1, n)] = du  # super-diagonal
    return A


@pytest.fixture
def knots():
    rng = np.random.default_rng(0)
    x = np.cumsum(0.2 + rng.random(9))
    y = np.sin(x) + 0.1 * x**2
    return x, y


def test_natural_matches_scipy(knots):
    x, y = knots
    d2y = spline_second_derivatives(x, y, 0.0, 0.0, natural=True)
    reference = CubicSpline(x, y, bc_type="natural")
    assert_allclose(d2y, reference(x, 2), rtol=1e-10, atol=1e-12)
    assert d2y[0] == 0.0
    assert d2y[-1] == 0.0


def test_clamped_matches_scipy(knots):
    x, y = knots
    s0 = (y[1] - y[0]) / (x[1] - x[0])
    sn = (y[-1] - y[-2]) / (x[-1] - x[-2])
    d2y = spline_second_derivatives(x, y, s0, sn, natural=False)
    reference = CubicSpline(x, y, bc_type=((1, s0), (1, sn)))
    assert_allclose(d2y, reference(x, 2), rtol=1e-10, atol=1e-12)


def test_natural_solves_tridiagonal_system(knots):
    x, y = knots
    n = x.size
    h = np.diff(x)
    d2y = spline_second_derivatives(x, y, 0.0, 0.0, natural=True)

    # interior rows of the continuity system: h[i-1]/6, (h[i-1]+h[i])/3, h[i]/6
    d = np.ones(n)
    dl = np.zeros(n - 1)
    du = np.zeros(n - 1)
    b = np.zeros(n)
    d[1:-1] = (h[:-1] + h[1:]) / 3.0
    dl[:-1] = h[:-1] / 6.0
    du[1:] = h[1:] / 6.0
    b[1:-1] = np.diff(y)[1:] / h[1:] - np.diff(y)[:-1] / h[:-1]
    A = tri_to_full(dl, d, du)
    assert_allclose(A @ d2y, b, rtol=1e-10, atol=1e-12)


def test_writes_into_out_buffer(knots):
    x, y = knots
    out = np.full(x.size + 4, np.nan)
    d2y = spline_second_derivatives(x, y, 0.0, 0.0, out=out)
    assert np.shares_memory(d2y, out)
    assert np.isfinite(out[: x.size]).all()
    assert np.isnan(out[x.size:]).all()


def test_straight_line_has_no_curvature():
    x = np.array([0.0, 0.5, 2.0, 3.0])
    y = 2.0 * x + 1.0
    assert_allclose(spline_second_derivatives(x, y, 2.0, 2.0, natural=False), 0.0, atol=1e-12)
    assert_allclose(spline_second_derivatives(x, y, 0.0, 0.0, natural=True), 0.0, atol=1e-12)


@pytest.mark.parametrize("n", [0, 1, 2])
def test_too_few_knots(n):
    x = np.arange(float(n))
    with pytest.raises(ValueError, match="At least 3 knots"):
        spline_second_derivatives(x, x, 0.0, 0.0)


def test_size_mismatch():
    with pytest.raises(ValueError, match="same size"):
        spline_second_derivatives(np.arange(4.0), np.arange(3.0), 0.0, 0.0)
