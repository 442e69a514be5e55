"""One-shot interpolation helpers built on the tabulated-function evaluators."""

# Authors: Ching-Chuan Chen
# SPDX-License-Identifier: MIT

import warnings

import numpy as np

from tabinterp.interp.cubic_spline import CubicSplineInterpolator
from tabinterp.interp.evaluator import LinearInterpolator, TabulatedFunction

_METHODS = {
    "linear": LinearInterpolator,
    "spline": CubicSplineInterpolator,
    "cubic": CubicSplineInterpolator,
    "cubic_spline": CubicSplineInterpolator,
}


def create_interpolator(method: str = "linear", **params) -> TabulatedFunction:
    """Create an unconfigured evaluator by method name.

    Parameters
    ----------
    method : {"linear", "spline", "cubic", "cubic_spline"}, default="linear"
        Interpolation method, case-insensitive.
    **params
        Estimator parameters, e.g. ``natural_spline=False`` for splines.

    Returns
    -------
    TabulatedFunction
        Evaluator ready to be configured.
    """
    if not isinstance(method, str):
        raise TypeError("Interpolation method, method, should be a string.")
    try:
        cls = _METHODS[method.lower()]
    except KeyError:
        raise ValueError(f"Unknown interpolation method: {method}. Available: {', '.join(_METHODS)}") from None
    return cls(**params)


def interp1d(x: np.ndarray, y: np.ndarray, x_new: np.ndarray, method: str = "linear") -> np.ndarray:
    """Interpolate 1D data using linear or spline interpolation.

    Parameters
    ----------
    x : np.ndarray of shape (n,)
        Sample coordinates. Duplicates are allowed but will be reduced to the
        first occurrence internally.
    y : np.ndarray of shape (n,)
        Values at `x`. Must match `x` in length.
    x_new : np.ndarray of shape (m,)
        Query points. Points outside ``[min(x), max(x)]`` are extrapolated.
    method : {"linear", "spline"}, default="linear"
        Interpolation method; "spline" is a natural cubic spline.

    Returns
    -------
    y_new : np.ndarray of shape (m,)
        Interpolated values at `x_new`, as float64.

    Raises
    ------
    ValueError
        If any input is not 1D, is empty, sizes mismatch, contains NaN, or
        `method` is invalid.

    See Also
    --------
    LinearInterpolator, CubicSplineInterpolator : Reusable evaluators.
    """
    if x.ndim != 1 or y.ndim != 1 or x_new.ndim != 1:
        raise ValueError("x, y, and x_new must be 1-dimensional arrays.")
    if x.size == 0 or y.size == 0 or x_new.size == 0:
        raise ValueError("x, y, and x_new must not be empty.")
    if x.size != y.size:
        raise ValueError("x must have the same size as y.")
    # NaN check
    if np.isnan(x).any():
        raise ValueError("Input array x contains NaN values.")
    if np.isnan(y).any():
        raise ValueError("Input array y contains NaN values.")
    if np.isnan(x_new).any():
        raise ValueError("Input array x_new contains NaN values.")
    if method not in ["linear", "spline"]:
        raise ValueError("Invalid method. Use 'linear' or 'spline'.")
    if np.float32 in (x.dtype, y.dtype, x_new.dtype):
        warnings.warn("float32 input is evaluated in float64; the result is float64.")
    return create_interpolator(method).configure_from_arrays(x, y).predict(x_new)
