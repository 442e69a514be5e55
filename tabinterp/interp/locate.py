"""Locate the table interval that brackets a query value."""

# Authors: Ching-Chuan Chen
# SPDX-License-Identifier: MIT

import math

import numpy as np


def locate_interval(x: np.ndarray, value: float, cursor: int, step: float = 0.0) -> int:
    """Find ``L`` such that ``x[L] <= value < x[L + 1]``.

    `value` must lie strictly between ``x[0]`` and ``x[-1]``; callers handle
    the ends of the table by extrapolation. The result therefore always has
    a right neighbor.

    Parameters
    ----------
    x : np.ndarray of shape (n,)
        Strictly increasing table of independent values, ``n >= 2``.
    value : float
        Query value inside the table bounds.
    cursor : int
        Interval returned by the previous query, used as the starting guess.
        Any index in ``[0, n - 1]`` is accepted.
    step : float, default=0.0
        Nominal spacing when the table is evenly spaced; 0.0 selects the
        locality search.

    Returns
    -------
    int
        Left index of the bracketing interval.

    Notes
    -----
    With a non-zero `step` the index is computed directly and then moved by
    as far as needed to absorb rounding, so both strategies return the same
    interval. The locality search checks the cursor interval, then the
    adjacent interval in the direction of travel, and finally falls back to
    a binary search over the part of the table not yet ruled out. Sweeps and
    slowly varying inputs resolve in O(1); arbitrary input costs O(log n).
    """
    last = x.shape[0] - 1
    if step > 0.0:
        lo = int(math.floor((value - x[0]) / step))
        if lo >= last:
            lo = last - 1
        elif lo < 0:
            lo = 0
        while value < x[lo]:
            lo -= 1
        while value >= x[lo + 1]:
            lo += 1
        return lo

    lo = cursor
    if lo >= last:
        lo = last - 1
    if x[lo] <= value < x[lo + 1]:
        return lo

    if value > x[lo]:
        lo += 1
        if value < x[lo + 1]:
            return lo
        hi = last
    else:
        lo -= 1
        if x[lo] <= value:
            return lo
        hi = lo
        lo = 0

    # rightmost i in [lo, hi] with x[i] <= value
    return lo + int(np.searchsorted(x[lo : hi + 1], value, side="right")) - 1


def find_le_indices(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Find, for every element of `b`, the interval of `a` that contains it.

    Parameters
    ----------
    a : np.ndarray of shape (n,)
        Strictly increasing breakpoints, ``n >= 2``.
    b : np.ndarray of shape (m,)
        Query values in any order.

    Returns
    -------
    np.ndarray of shape (m,), dtype int64
        Largest ``i`` with ``a[i] <= b[j]``. A query equal to ``a[-1]`` maps
        to ``n - 2`` so the interval always has a right neighbor; queries
        outside ``[a[0], a[-1]]`` map to -1.
    """
    idx = np.searchsorted(a, b, side="right").astype(np.int64) - 1
    idx[idx == a.shape[0] - 1] = a.shape[0] - 2
    idx[(b < a[0]) | (b > a[-1])] = -1
    return idx
