"""Sample table holding the (x, y) pairs of a tabulated function."""

# Authors: Ching-Chuan Chen
# SPDX-License-Identifier: MIT

from typing import List, NamedTuple, Optional

import numpy as np

from tabinterp.exceptions import AllocationFailureError


class SampleEntry(NamedTuple):
    """One tabulated point: independent value `x` and dependent value `y`."""

    x: float
    y: float


class SampleTable(object):
    """
    Ordered, de-duplicated (x, y) samples backed by growable buffers.

    The buffers keep an explicit capacity separate from the number of valid
    entries, so reloading a table of the same or smaller size reuses the
    storage already held. Sizing the table to zero releases the storage.

    Attributes
    ----------
    size : int
        Number of valid entries.
    capacity : int
        Number of entries the buffers can hold without reallocation.

    Notes
    -----
    The table never validates the minimum-size policy itself; that belongs
    to the evaluator that owns the table.
    """

    def __init__(self) -> None:
        self._x: Optional[np.ndarray] = None
        self._y: Optional[np.ndarray] = None
        self.size: int = 0
        self.capacity: int = 0

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"SampleTable(size={self.size}, capacity={self.capacity})"

    @property
    def x(self) -> np.ndarray:
        """Independent values of the valid entries (read-only view)."""
        if self._x is None:
            return np.empty(0, dtype=np.float64)
        view = self._x[: self.size]
        view.flags.writeable = False
        return view

    @property
    def y(self) -> np.ndarray:
        """Dependent values of the valid entries (read-only view)."""
        if self._y is None:
            return np.empty(0, dtype=np.float64)
        view = self._y[: self.size]
        view.flags.writeable = False
        return view

    def release(self) -> None:
        """Drop the buffers and mark the table empty."""
        self._x = None
        self._y = None
        self.size = 0
        self.capacity = 0

    def resize(self, n: int) -> bool:
        """Make room for `n` entries.

        Parameters
        ----------
        n : int
            Requested number of entries. Zero releases the table.

        Returns
        -------
        bool
            True if the table now holds buffers for `n` entries, False if it
            was released.

        Raises
        ------
        AllocationFailureError
            If the buffers cannot be allocated. The table is left released.
        """
        if n == 0:
            self.release()
            return False
        if n > self.capacity:
            self.release()
            try:
                self._x = np.empty(n, dtype=np.float64)
                self._y = np.empty(n, dtype=np.float64)
            except MemoryError as e:
                self.release()
                raise AllocationFailureError(f"Unable to allocate a sample table of {n} entries.") from e
            self.capacity = n
        self.size = n
        return True

    def load(self, x: np.ndarray, y: np.ndarray) -> int:
        """Copy samples into the table, sort them and drop duplicate x values.

        Entries are sorted ascending by `x` with a stable sort; when several
        entries share an `x` value the first one in input order is kept.

        Parameters
        ----------
        x : np.ndarray of shape (n,)
            Independent values.
        y : np.ndarray of shape (n,)
            Dependent values aligned with `x`.

        Returns
        -------
        int
            Number of entries left after duplicate removal.
        """
        n = x.shape[0]
        if not self.resize(n):
            return 0
        order = np.argsort(x, kind="stable")
        sorted_x = x[order]
        keep = np.ones(n, dtype=bool)
        keep[1:] = sorted_x[1:] != sorted_x[:-1]
        order = order[keep]
        self.size = order.shape[0]
        self._x[: self.size] = x[order]
        self._y[: self.size] = y[order]
        return self.size

    def uniform_step(self, rtol: float = 1e-6) -> float:
        """Return the nominal step if the x values are evenly spaced, else 0.0.

        Every interval must match ``(x[-1] - x[0]) / (size - 1)`` within
        ``rtol`` times that step.
        """
        if self.size < 2:
            return 0.0
        x = self._x[: self.size]
        step = (x[-1] - x[0]) / (self.size - 1)
        if not step > 0.0:
            return 0.0
        if np.any(np.abs(np.diff(x) - step) > rtol * step):
            return 0.0
        return float(step)

    def entries(self, max_entries: Optional[int] = None) -> List[SampleEntry]:
        """Return up to `max_entries` entries from the low end of the table."""
        count = self.size if max_entries is None else max(0, min(int(max_entries), self.size))
        return [SampleEntry(float(xi), float(yi)) for xi, yi in zip(self._x[:count], self._y[:count])] if count else []
