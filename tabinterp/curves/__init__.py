"""Calibration curves composed from tabulated functions."""

# Authors: Ching-Chuan Chen
# SPDX-License-Identifier: MIT

from tabinterp.curves.calibration import CurveChain, spline_from_points

__all__ = ["CurveChain", "spline_from_points"]
