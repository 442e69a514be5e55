"""Evaluation strategies plugged into a tabulated function.

A strategy supplies what differs between interpolation algorithms: the
minimum table size, the extra state derived once the table is final, and the
interpolation/extrapolation formulas. Table management, interval search and
lifecycle live in :class:`tabinterp.interp.evaluator.TabulatedFunction`.

Formulas accept either scalars or numpy arrays for the query and the
interval index, so scalar and vectorized evaluation share one code path.
"""

# Authors: Ching-Chuan Chen
# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np

from tabinterp.exceptions import AllocationFailureError
from tabinterp.table import SampleTable
from tabinterp.utils import spline_second_derivatives


class EvaluationStrategy(ABC):
    """Interface for interpolation algorithms over a :class:`SampleTable`."""

    min_table_size: int = 2

    def allocate(self, capacity: int) -> None:
        """Size derived buffers to the table capacity; 0 releases them."""

    def derive(self, table: SampleTable, dydx_low: float, dydx_high: float) -> Tuple[float, float]:
        """Compute derived state from a finalized table.

        Returns the end-point derivative estimates, possibly refined.
        """
        return dydx_low, dydx_high

    def copy_from(self, other: "EvaluationStrategy") -> None:
        """Take over the settings (not the derived state) of `other`."""

    @abstractmethod
    def extrapolate_low(self, table: SampleTable, x, dydx_low: float):
        """Value at or below the first table entry."""

    @abstractmethod
    def extrapolate_high(self, table: SampleTable, x, dydx_high: float):
        """Value at or above the last table entry."""

    @abstractmethod
    def interpolate(self, table: SampleTable, x, idx):
        """Value inside the interval ``[x[idx], x[idx + 1])``."""


class LinearStrategy(EvaluationStrategy):
    """Piecewise-linear interpolation with linear extrapolation."""

    min_table_size = 2

    def extrapolate_low(self, table, x, dydx_low):
        return table.y[0] - (table.x[0] - x) * dydx_low

    def extrapolate_high(self, table, x, dydx_high):
        return table.y[-1] + (x - table.x[-1]) * dydx_high

    def interpolate(self, table, x, idx):
        tx, ty = table.x, table.y
        w_left = (tx[idx + 1] - x) / (tx[idx + 1] - tx[idx])
        w_right = 1.0 - w_left
        return w_left * ty[idx] + w_right * ty[idx + 1]


class CubicSplineStrategy(EvaluationStrategy):
    """
    Cubic spline with natural or derivative-estimated end conditions.

    Parameters
    ----------
    natural : bool, default=True
        If True, the second derivative is zero at both ends and extrapolation
        is linear. Otherwise the ends are clamped to the first-difference
        slopes, and extrapolation follows the end curvature.

    Attributes
    ----------
    natural : bool
        Active boundary condition.
    capacity : int
        Size of the second-derivative buffer; tracks the table capacity.
    """

    min_table_size = 3

    def __init__(self, natural: bool = True) -> None:
        self.natural = bool(natural)
        self.capacity = 0
        self._d2y: Optional[np.ndarray] = None

    @property
    def second_derivatives(self) -> np.ndarray:
        """Buffer of second derivatives at the table knots (capacity-sized)."""
        if self._d2y is None:
            return np.empty(0, dtype=np.float64)
        return self._d2y

    def allocate(self, capacity):
        if capacity == 0:
            self._d2y = None
            self.capacity = 0
            return
        if capacity > self.capacity:
            self._d2y = None
            self.capacity = 0
            try:
                self._d2y = np.zeros(capacity, dtype=np.float64)
            except MemoryError as e:
                raise AllocationFailureError(f"Unable to allocate {capacity} spline second derivatives.") from e
            self.capacity = capacity

    def derive(self, table, dydx_low, dydx_high):
        # the first differences at the ends are the best available slope estimates
        spline_second_derivatives(table.x, table.y, dydx_low, dydx_high, self.natural, out=self._d2y)
        return dydx_low, dydx_high

    def copy_from(self, other):
        self.natural = other.natural

    def extrapolate_low(self, table, x, dydx_low):
        h = table.x[0] - x
        return table.y[0] - h * dydx_low - 0.5 * h * h * self._d2y[0]

    def extrapolate_high(self, table, x, dydx_high):
        last = table.size - 1
        h = x - table.x[last]
        return table.y[last] + h * dydx_high + 0.5 * h * h * self._d2y[last]

    def interpolate(self, table, x, idx):
        tx, ty, d2y = table.x, table.y, self._d2y
        span = tx[idx + 1] - tx[idx]
        w_left = (tx[idx + 1] - x) / span
        w_right = 1.0 - w_left
        return (
            w_left * ty[idx]
            + w_right * ty[idx + 1]
            + ((w_left * w_left * w_left - w_left) * d2y[idx] + (w_right * w_right * w_right - w_right) * d2y[idx + 1])
            * (span * span)
            / 6.0
        )
