"""Numerical helpers for tabulated functions."""

# Authors: Ching-Chuan Chen
# SPDX-License-Identifier: MIT
from tabinterp.utils.tridiagonal import spline_second_derivatives

__all__ = ["spline_second_derivatives"]
