"""Tabulated function evaluator with linear interpolation and extrapolation."""

# Authors: Ching-Chuan Chen
# SPDX-License-Identifier: MIT

import copy
import logging
import math
from typing import Any, Callable, Iterable, List, Tuple, Union

import numpy as np
from sklearn.base import BaseEstimator, RegressorMixin
from sklearn.utils.validation import check_array, check_is_fitted

from tabinterp.exceptions import AllocationFailureError, InvalidConfigurationError
from tabinterp.interp.locate import find_le_indices, locate_interval
from tabinterp.interp.strategy import EvaluationStrategy, LinearStrategy
from tabinterp.table import SampleEntry, SampleTable

logger = logging.getLogger(__name__)

UNIFORM_SPACING_RTOL = 1e-6


class TabulatedFunction(RegressorMixin, BaseEstimator):
    """
    Interpolate and extrapolate a function known at a set of sample points.

    The evaluator owns a :class:`SampleTable` and a pluggable
    :class:`EvaluationStrategy`. Configuration validates and normalizes the
    samples (sorted ascending, duplicate independent values removed),
    estimates the slope at both ends, and lets the strategy derive any
    additional state. Queries then interpolate inside the table and
    extrapolate beyond it.

    Construction never configures; call one of the ``configure*`` methods
    (or :meth:`fit`) on the fully built object.

    Attributes
    ----------
    dydx_low : float
        Slope estimate at the low end of the table.
    dydx_high : float
        Slope estimate at the high end of the table.
    uniform_step : float
        Table spacing when evenly spaced, else 0.0.

    Notes
    -----
    Queries remember the interval they resolved to speed up the next search.
    That makes :meth:`evaluate`, :meth:`predict` and :meth:`locate` mutating
    operations: share an instance between threads only with external
    locking, or give each thread its own copy.
    """

    def __init__(self) -> None:
        self._strategy = self._make_strategy()
        self._table = SampleTable()
        self.dydx_low: float = 0.0
        self.dydx_high: float = 0.0
        self.uniform_step: float = 0.0
        self._cursor: int = 0

    def _make_strategy(self) -> EvaluationStrategy:
        return LinearStrategy()

    def __deepcopy__(self, memo):
        other = self.__class__(**self.get_params(deep=False))
        other.configure_from(self)
        return other

    def __sklearn_is_fitted__(self) -> bool:
        return self._table.size != 0

    def __call__(self, x):
        if np.ndim(x) == 0:
            return self.evaluate(x)
        return self.predict(x)

    @property
    def min_table_size(self) -> int:
        """Smallest table the active algorithm accepts."""
        return self._strategy.min_table_size

    @property
    def is_configured(self) -> bool:
        """True once a table has been configured."""
        return self._table.size != 0

    def table_size(self) -> int:
        """Number of entries in the configured table (0 when unconfigured)."""
        return self._table.size

    # configuration

    def _check_count(self, n: int) -> None:
        if n < self.min_table_size:
            raise InvalidConfigurationError(f"At least {self.min_table_size} table entries are required, got {n}.")

    def _check_samples(self, values: Any, name: str) -> np.ndarray:
        if values is None:
            raise InvalidConfigurationError(f"No {name} given for a non-empty table.")
        try:
            values = check_array(values, ensure_2d=False, dtype=np.float64)
        except ValueError as e:
            raise InvalidConfigurationError(f"Invalid {name}: {e!s}") from e
        if values.ndim == 2:
            if values.shape[1] != 1:
                raise InvalidConfigurationError(f"{name} must be 1-dimensional, got shape {values.shape}.")
            values = values.ravel()
        return values

    @staticmethod
    def _check_range(x_min: float, x_max: float) -> Tuple[float, float]:
        x_min, x_max = float(x_min), float(x_max)
        if not (math.isfinite(x_min) and math.isfinite(x_max)):
            raise InvalidConfigurationError(f"Independent range must be finite, got [{x_min}, {x_max}].")
        if x_max < x_min:
            x_min, x_max = x_max, x_min
        if x_max == x_min:
            raise InvalidConfigurationError(f"Independent range has zero width at {x_min}.")
        return x_min, x_max

    @staticmethod
    def _even_grid(n: int, x_min: float, x_max: float) -> np.ndarray:
        try:
            grid = x_min + (x_max - x_min) * (np.arange(n, dtype=np.float64) / (n - 1))
        except MemoryError as e:
            raise AllocationFailureError(f"Unable to allocate an independent grid of {n} entries.") from e
        grid[-1] = x_max
        return grid

    def _release(self) -> None:
        self._table.release()
        self._strategy.allocate(0)
        self.dydx_low = 0.0
        self.dydx_high = 0.0
        self.uniform_step = 0.0
        self._cursor = 0

    def _load(self, x: np.ndarray, y: np.ndarray) -> "TabulatedFunction":
        """Install validated samples; any failure leaves the evaluator unconfigured."""
        requested = x.shape[0]
        try:
            self._table.resize(requested)
            self._strategy.allocate(self._table.capacity)
            n = self._table.load(x, y)
            self._check_count(n)

            tx, ty = self._table.x, self._table.y
            self.uniform_step = self._table.uniform_step(UNIFORM_SPACING_RTOL)
            dydx_low = (ty[1] - ty[0]) / (tx[1] - tx[0])
            dydx_high = (ty[-1] - ty[-2]) / (tx[-1] - tx[-2])
            self.dydx_low, self.dydx_high = (float(v) for v in self._strategy.derive(self._table, dydx_low, dydx_high))
        except (InvalidConfigurationError, MemoryError):
            self._release()
            raise

        self._cursor = (n - 1) // 2
        logger.debug(
            "Configured %s with %d entries (%d duplicates dropped), %s spacing.",
            type(self).__name__,
            n,
            requested - n,
            "uniform" if self.uniform_step else "non-uniform",
        )
        return self

    def configure(self, entries: Union[Iterable[Tuple[float, float]], np.ndarray, None]) -> "TabulatedFunction":
        """Configure from a sequence of (x, y) entries.

        Parameters
        ----------
        entries : iterable of (float, float) or np.ndarray of shape (n, 2)
            Samples in any order; duplicates in x are allowed and reduced to
            the first occurrence. An empty sequence unconfigures the
            evaluator.

        Returns
        -------
        self : TabulatedFunction

        Raises
        ------
        InvalidConfigurationError
            If `entries` is None, malformed, non-finite, or too short
            (before or after duplicate removal).
        AllocationFailureError
            If storage cannot be allocated.
        """
        if entries is None:
            raise InvalidConfigurationError("No table entries given.")
        if not isinstance(entries, np.ndarray):
            entries = list(entries)
        if len(entries) == 0:
            self._release()
            return self
        try:
            table = check_array(entries, ensure_2d=True, dtype=np.float64)
        except ValueError as e:
            raise InvalidConfigurationError(f"Invalid table entries: {e!s}") from e
        if table.shape[1] != 2:
            raise InvalidConfigurationError(f"Table entries must be (x, y) pairs, got {table.shape[1]} columns.")
        self._check_count(table.shape[0])
        return self._load(table[:, 0], table[:, 1])

    def configure_from_arrays(self, x: Any, y: Any) -> "TabulatedFunction":
        """Configure from parallel arrays of independent and dependent values.

        Parameters
        ----------
        x : array-like of shape (n,)
            Independent values.
        y : array-like of shape (n,)
            Dependent values; must match `x` in length.

        Returns
        -------
        self : TabulatedFunction
        """
        if x is not None and y is not None and len(x) == 0 and len(y) == 0:
            self._release()
            return self
        x = self._check_samples(x, "independent values")
        y = self._check_samples(y, "dependent values")
        if x.shape[0] != y.shape[0]:
            raise InvalidConfigurationError(f"x must have the same size as y, got {x.shape[0]} vs {y.shape[0]}.")
        self._check_count(x.shape[0])
        return self._load(x, y)

    def configure_from_range(self, x_min: float, x_max: float, y: Any) -> "TabulatedFunction":
        """Configure from dependent values sampled evenly over ``[x_min, x_max]``.

        Parameters
        ----------
        x_min, x_max : float
            Bounds of the independent range; they are swapped if reversed.
        y : array-like of shape (n,)
            Dependent values at ``n`` evenly spaced points, both bounds
            included.

        Returns
        -------
        self : TabulatedFunction
        """
        if y is not None and len(y) == 0:
            self._release()
            return self
        y = self._check_samples(y, "dependent values")
        self._check_count(y.shape[0])
        x_min, x_max = self._check_range(x_min, x_max)
        return self._load(self._even_grid(y.shape[0], x_min, x_max), y)

    def configure_from_function(
        self,
        n: int,
        x_min: float,
        x_max: float,
        func: Callable[..., float],
        args: tuple = (),
    ) -> "TabulatedFunction":
        """Configure by sampling ``func(x, *args)`` on an even grid.

        Parameters
        ----------
        n : int
            Number of samples; 0 unconfigures the evaluator.
        x_min, x_max : float
            Bounds of the independent range; they are swapped if reversed.
        func : callable
            Mapping from an independent value to a dependent value.
        args : tuple, default=()
            Extra arguments passed through to `func` unchanged.

        Returns
        -------
        self : TabulatedFunction
        """
        if not isinstance(n, (int, np.integer)):
            raise TypeError("Number of table entries, n, should be an integer.")
        if n == 0:
            self._release()
            return self
        if func is None or not callable(func):
            raise InvalidConfigurationError("No mapping function given for a non-empty table.")
        self._check_count(n)
        x_min, x_max = self._check_range(x_min, x_max)
        x = self._even_grid(int(n), x_min, x_max)
        y = self._check_samples([func(xi, *args) for xi in x.tolist()], "mapped values")
        return self._load(x, y)

    def configure_from(self, other: "TabulatedFunction") -> "TabulatedFunction":
        """Configure as an independent deep copy of `other`.

        Parameters
        ----------
        other : TabulatedFunction
            Evaluator of the same class to copy.

        Returns
        -------
        self : TabulatedFunction
        """
        if not isinstance(other, type(self)):
            raise TypeError(f"Cannot configure {type(self).__name__} from {type(other).__name__}.")
        if other is self:
            return self
        self._strategy.copy_from(other._strategy)
        if other._table.size == 0:
            self._release()
            return self
        return self._load(np.array(other._table.x), np.array(other._table.y))

    def fit(self, X: Any, y: Any) -> "TabulatedFunction":
        """Configure from training data (scikit-learn spelling of
        :meth:`configure_from_arrays`).

        Parameters
        ----------
        X : array-like of shape (n,) or (n, 1)
            Independent values.
        y : array-like of shape (n,)
            Dependent values.

        Returns
        -------
        self : TabulatedFunction
        """
        return self.configure_from_arrays(X, y)

    def copy(self) -> "TabulatedFunction":
        """Return an independent copy of this evaluator."""
        return copy.deepcopy(self)

    # queries

    def evaluate(self, x: float) -> float:
        """Evaluate the tabulated function at `x`.

        Parameters
        ----------
        x : float
            Query point; values outside the table are extrapolated.

        Returns
        -------
        float
            Interpolated or extrapolated value. When no table is configured
            the query is returned unchanged, and NaN is always returned as is.
        """
        table = self._table
        if table.size == 0 or math.isnan(x):
            return x
        tx = table.x
        if x <= tx[0]:
            self._cursor = 0
            return float(self._strategy.extrapolate_low(table, x, self.dydx_low))
        if x >= tx[-1]:
            self._cursor = table.size - 1
            return float(self._strategy.extrapolate_high(table, x, self.dydx_high))
        idx = locate_interval(tx, x, self._cursor, self.uniform_step)
        self._cursor = idx
        return float(self._strategy.interpolate(table, x, idx))

    def locate(self, x: float) -> int:
        """Return the left index of the table interval containing `x`.

        `x` must lie strictly between the lowest and highest independent
        values. Like :meth:`evaluate`, this updates the search cursor.
        """
        check_is_fitted(self)
        tx = self._table.x
        if not tx[0] < x < tx[-1]:
            raise ValueError(f"x must lie strictly inside [{tx[0]}, {tx[-1]}], got {x}.")
        self._cursor = locate_interval(tx, x, self._cursor, self.uniform_step)
        return self._cursor

    def predict(self, X: Any) -> np.ndarray:
        """Evaluate the tabulated function at many points.

        Parameters
        ----------
        X : array-like of shape (m,) or (m, 1)
            Query points.

        Returns
        -------
        np.ndarray of shape (m,)
            Same values :meth:`evaluate` returns for each point, NaN and
            infinite queries included. When no table is configured a copy of
            `X` is returned.
        """
        X = check_array(X, ensure_2d=False, dtype=np.float64, ensure_all_finite=False, ensure_min_samples=0)
        if X.ndim == 2:
            if X.shape[1] != 1:
                raise ValueError(f"X must have exactly 1 feature, got {X.shape[1]}")
            X = X.ravel()
        table = self._table
        if table.size == 0:
            return X.copy()

        tx = table.x
        low = X <= tx[0]
        high = X >= tx[-1]
        mid = ~(low | high)
        y_pred = np.empty_like(X)
        if low.any():
            y_pred[low] = self._strategy.extrapolate_low(table, X[low], self.dydx_low)
        if high.any():
            y_pred[high] = self._strategy.extrapolate_high(table, X[high], self.dydx_high)
        idx = find_le_indices(tx, X[mid])
        if idx.size:
            y_pred[mid] = self._strategy.interpolate(table, X[mid], idx)

        if X.size:
            if low[-1]:
                self._cursor = 0
            elif high[-1]:
                self._cursor = table.size - 1
            else:
                self._cursor = int(idx[-1])
        return y_pred

    # introspection

    def extract_table(self, max_entries: Union[int, None] = None) -> List[SampleEntry]:
        """Return up to `max_entries` entries of the normalized table."""
        return self._table.entries(max_entries)

    def lowest_independent_value(self) -> float:
        """Independent value of the first table entry (the minimum)."""
        check_is_fitted(self)
        return float(self._table.x[0])

    def highest_independent_value(self) -> float:
        """Independent value of the last table entry (the maximum)."""
        check_is_fitted(self)
        return float(self._table.x[-1])

    def lowest_dependent_value(self) -> float:
        """Dependent value of the first table entry.

        This is the value at the lowest index, not necessarily the minimum
        dependent value.
        """
        check_is_fitted(self)
        return float(self._table.y[0])

    def highest_dependent_value(self) -> float:
        """Dependent value of the last table entry.

        This is the value at the highest index, not necessarily the maximum
        dependent value.
        """
        check_is_fitted(self)
        return float(self._table.y[-1])


class LinearInterpolator(TabulatedFunction):
    """
    Piecewise-linear interpolation with linear extrapolation.

    Extrapolation continues the first-difference slope of the two entries at
    each end of the table.

    Examples
    --------
    >>> f = LinearInterpolator().configure([(0.0, 0.0), (1.0, 2.0), (3.0, 4.0)])
    >>> f.evaluate(0.5)
    1.0
    >>> f.evaluate(5.0)
    6.0
    """
