"""Tridiagonal solve for cubic-spline second derivatives."""

# Authors: Ching-Chuan Chen
# SPDX-License-Identifier: MIT
from typing import Optional

import numpy as np

from tabinterp.exceptions import AllocationFailureError


def spline_second_derivatives(
    x: np.ndarray,
    y: np.ndarray,
    dydx_low: float,
    dydx_high: float,
    natural: bool = True,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    r"""Solve the cubic-spline system for the second derivative at every knot.

    The system is tridiagonal and is solved by forward decomposition followed
    by back-substitution, in the form given in Numerical Recipes in C (2nd ed.,
    routine ``spline``).

    Parameters
    ----------
    x : np.ndarray of shape (n,)
        Strictly increasing knots, ``n >= 3``.
    y : np.ndarray of shape (n,)
        Values at the knots.
    dydx_low : float
        First derivative at ``x[0]``. Ignored when `natural` is True.
    dydx_high : float
        First derivative at ``x[-1]``. Ignored when `natural` is True.
    natural : bool, default=True
        If True, the second derivative is fixed to zero at both ends.
        Otherwise the end conditions are derived from `dydx_low` and
        `dydx_high` (clamped first derivatives).
    out : np.ndarray of shape (>= n,), optional
        Buffer receiving the result in its first ``n`` elements.

    Returns
    -------
    np.ndarray of shape (n,)
        Second derivatives; a view of `out` when it is given.

    Raises
    ------
    ValueError
        If fewer than 3 knots are given or `x` and `y` differ in size.
    AllocationFailureError
        If the output or scratch buffer cannot be allocated.

    Mathematical definition
    -----------------------
    For each interior knot ``i`` with ``sig = (x[i]-x[i-1]) / (x[i+1]-x[i-1])``:

    .. math::
        p = sig\,d_{i-1} + 2,\quad d_i = (sig - 1) / p,

    .. math::
        u_i = \Big(\frac{6}{x_{i+1}-x_{i-1}}\Big(\frac{y_{i+1}-y_i}{x_{i+1}-x_i}
        - \frac{y_i-y_{i-1}}{x_i-x_{i-1}}\Big) - sig\,u_{i-1}\Big) / p,

    followed by ``d[i] = d[i] * d[i+1] + u[i]`` from the top index down.
    """
    n = x.shape[0]
    if y.shape[0] != n:
        raise ValueError("x must have the same size as y.")
    if n < 3:
        raise ValueError("At least 3 knots are needed to build a cubic spline.")

    try:
        if out is None:
            out = np.empty(n, dtype=np.float64)
        u = np.empty(n, dtype=np.float64)
    except MemoryError as e:
        raise AllocationFailureError(f"Unable to allocate spline buffers of {n} entries.") from e
    d2y = out[:n]

    # python floats keep the recurrence in plain double arithmetic
    xs = x.tolist()
    ys = y.tolist()
    hi = n - 1

    if natural:
        d2y[0] = 0.0
        u[0] = 0.0
    else:
        d2y[0] = -0.5
        u[0] = (3.0 / (xs[1] - xs[0])) * ((ys[1] - ys[0]) / (xs[1] - xs[0]) - dydx_low)

    for i in range(1, hi):
        sig = (xs[i] - xs[i - 1]) / (xs[i + 1] - xs[i - 1])
        p = sig * d2y[i - 1] + 2.0
        d2y[i] = (sig - 1.0) / p
        u[i] = (ys[i + 1] - ys[i]) / (xs[i + 1] - xs[i]) - (ys[i] - ys[i - 1]) / (xs[i] - xs[i - 1])
        u[i] = (6.0 * u[i] / (xs[i + 1] - xs[i - 1]) - sig * u[i - 1]) / p

    if natural:
        qn = 0.0
        un = 0.0
    else:
        qn = 0.5
        un = (3.0 / (xs[hi] - xs[hi - 1])) * (dydx_high - (ys[hi] - ys[hi - 1]) / (xs[hi] - xs[hi - 1]))

    d2y[hi] = (un - qn * u[hi - 1]) / (qn * d2y[hi - 1] + 1.0)
    for i in range(hi - 1, -1, -1):
        d2y[i] = d2y[i] * d2y[i + 1] + u[i]

    return d2y
