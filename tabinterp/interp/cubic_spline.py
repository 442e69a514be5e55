"""Cubic-spline tabulated function."""

# Authors: Ching-Chuan Chen
# SPDX-License-Identifier: MIT

import logging

import numpy as np

from tabinterp.interp.evaluator import TabulatedFunction
from tabinterp.interp.strategy import CubicSplineStrategy, EvaluationStrategy

logger = logging.getLogger(__name__)


class CubicSplineInterpolator(TabulatedFunction):
    """
    Cubic-spline interpolation with curvature-aware extrapolation.

    The second derivative at every table entry is solved once per
    configuration. Inside the table the spline is twice continuously
    differentiable; outside it, values follow the end slope plus half the
    end curvature times the squared distance.

    Parameters
    ----------
    natural_spline : bool, default=True
        Boundary condition for the second derivatives.
        True fixes them to zero at both ends (natural spline): extrapolation
        is exactly linear and the spline stays well behaved when composed
        with the spline of the inverse relation.
        False clamps the end slopes to the first differences of the end
        entries: extrapolation close to the table is usually more accurate,
        at the price of slightly lower accuracy near the ends inside it.

    Attributes
    ----------
    second_derivatives : np.ndarray of shape (table_size,)
        Second derivative of the spline at each table entry.

    See Also
    --------
    LinearInterpolator : Piecewise-linear interpolation.

    Examples
    --------
    >>> f = CubicSplineInterpolator().configure([(0, 0), (1, 1), (2, 8), (3, 27)])
    >>> round(f.evaluate(1.5), 6)
    3.15
    >>> f.evaluate(-1.0)
    -1.0
    """

    def __init__(self, natural_spline: bool = True) -> None:
        super().__init__()
        self.natural_spline = natural_spline

    def _make_strategy(self) -> EvaluationStrategy:
        return CubicSplineStrategy()

    @property
    def natural_spline(self) -> bool:
        """Whether the natural (zero end curvature) boundary is active."""
        return self._strategy.natural

    @natural_spline.setter
    def natural_spline(self, value: bool) -> None:
        self.set_natural_boundary(value)

    def set_natural_boundary(self, natural: bool) -> "CubicSplineInterpolator":
        """Select the boundary condition, re-deriving the held table if needed.

        Parameters
        ----------
        natural : bool
            True for a natural spline, False for end slopes clamped to the
            first differences.

        Returns
        -------
        self : CubicSplineInterpolator
        """
        natural = bool(natural)
        if natural == self._strategy.natural:
            return self
        self._strategy.natural = natural
        if self._table.size == 0:
            logger.debug("Boundary condition set on an unconfigured spline; nothing to re-derive.")
            return self
        try:
            self.dydx_low, self.dydx_high = (float(v) for v in self._strategy.derive(self._table, self.dydx_low, self.dydx_high))
        except MemoryError:
            self._release()
            raise
        logger.debug("Re-derived %d second derivatives with natural=%s.", self._table.size, natural)
        return self

    @property
    def second_derivatives(self) -> np.ndarray:
        """Copy of the second derivatives at the table entries."""
        return self._strategy.second_derivatives[: self._table.size].copy()
