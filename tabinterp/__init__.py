"""Interpolation and extrapolation of tabulated functions with linear and cubic-spline evaluators."""

# Authors: Ching-Chuan Chen
# SPDX-License-Identifier: MIT

# Tabulated-function interpolation (tabinterp) for Python
# =======================================================
#
# tabinterp fits a curve through an ordered table of (independent, dependent) samples and evaluates it,
# or its linear/cubic extension beyond the table, at arbitrary points.
#
# It provides piecewise-linear and cubic-spline evaluators built on a shared sample table with a locality-aware
# interval search, and follows scikit-learn's estimator interface so evaluators can be cloned, parametrized and scored.

import importlib as _importlib
import logging

logger = logging.getLogger(__name__)


# PEP0440 compatible formatted version, see:
# https://www.python.org/dev/peps/pep-0440/
#
# Generic release markers:
#   X.Y.0   # For first release after an increment in Y
#   X.Y.Z   # For bugfix releases
#
# Admissible pre-release markers:
#   X.Y.ZaN   # Alpha release
#   X.Y.ZbN   # Beta release
#   X.Y.ZrcN  # Release Candidate
#   X.Y.Z     # Final release
#
# Dev branch marker is: 'X.Y.dev' or 'X.Y.devN' where N is an integer.
# 'X.Y.dev0' is the canonical version of 'X.Y.dev'

__version__ = "0.1.0.dev0"

from tabinterp.interp import CubicSplineInterpolator, LinearInterpolator  # noqa: F401 E402

_submodules = [
    "curves",
    "exceptions",
    "interp",
    "table",
    "utils",
]

__all__ = _submodules + [
    "CubicSplineInterpolator",
    "LinearInterpolator",
]


def __dir__():
    return __all__


def __getattr__(name):
    if name in _submodules:
        return _importlib.import_module(f"tabinterp.{name}")
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(f"Module 'tabinterp' has no attribute '{name}'")
