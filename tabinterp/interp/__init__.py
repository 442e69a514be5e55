"""Interpolation and extrapolation of tabulated functions."""

# Authors: Ching-Chuan Chen
# SPDX-License-Identifier: MIT

from tabinterp.interp.cubic_spline import CubicSplineInterpolator
from tabinterp.interp.evaluator import LinearInterpolator, TabulatedFunction
from tabinterp.interp.interp_model import create_interpolator, interp1d
from tabinterp.interp.locate import find_le_indices, locate_interval
from tabinterp.interp.strategy import CubicSplineStrategy, EvaluationStrategy, LinearStrategy

__all__ = [
    "CubicSplineInterpolator",
    "CubicSplineStrategy",
    "EvaluationStrategy",
    "LinearInterpolator",
    "LinearStrategy",
    "TabulatedFunction",
    "create_interpolator",
    "find_le_indices",
    "interp1d",
    "locate_interval",
]
