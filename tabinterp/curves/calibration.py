"""Calibration curves for sensor and effecter transfer functions."""

# Authors: Ching-Chuan Chen
# SPDX-License-Identifier: MIT
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Sequence, Tuple, Union

import numpy as np

from tabinterp.exceptions import InvalidConfigurationError
from tabinterp.interp import CubicSplineInterpolator, TabulatedFunction

CalibrationPoint = Union[Mapping[str, float], Sequence[float]]


def _point_values(point: CalibrationPoint) -> Tuple[float, float]:
    if isinstance(point, Mapping):
        try:
            return float(point["in"]), float(point["out"])
        except KeyError as e:
            raise InvalidConfigurationError(f"Calibration point is missing the {e.args[0]!r} value.") from e
    if len(point) != 2:
        raise InvalidConfigurationError(f"Calibration point must be an (in, out) pair, got {point!r}.")
    return float(point[0]), float(point[1])


def spline_from_points(
    points: Iterable[CalibrationPoint],
    reverse: bool = False,
    natural_spline: bool = True,
) -> CubicSplineInterpolator:
    """Build a cubic spline through calibration points.

    Parameters
    ----------
    points : iterable of mapping or (float, float)
        Calibration points, either mappings with ``"in"`` and ``"out"`` keys
        or ``(in, out)`` pairs, in any order.
    reverse : bool, default=False
        If False the spline maps ``in`` to ``out``. If True it maps ``out``
        to ``in``, i.e. it is the inverse transfer function.
    natural_spline : bool, default=True
        Boundary condition of the spline.

    Returns
    -------
    CubicSplineInterpolator
        Configured spline.

    Raises
    ------
    InvalidConfigurationError
        If a point is malformed or fewer than 3 distinct independent values
        remain.
    """
    if points is None:
        raise InvalidConfigurationError("No calibration points given.")
    pairs = [_point_values(p) for p in points]
    if reverse:
        pairs = [(p_out, p_in) for p_in, p_out in pairs]
    spline = CubicSplineInterpolator(natural_spline=natural_spline)
    return spline.configure(pairs)


@dataclass
class CurveChain:
    """Transfer function composed of tabulated functions applied in order.

    Attributes
    ----------
    stages : list of TabulatedFunction
        Evaluators applied first to last; the output of one is the input of
        the next.
    gain : float, default=1.0
        Factor applied to the output of the last stage.
    """

    stages: List[TabulatedFunction] = field(default_factory=list)
    gain: float = 1.0

    def evaluate(self, x: float) -> float:
        """Run `x` through every stage and scale the result by `gain`."""
        for stage in self.stages:
            x = stage.evaluate(x)
        return self.gain * x

    def __call__(self, x):
        if np.ndim(x) == 0:
            return self.evaluate(x)
        x = np.asarray(x, dtype=np.float64)
        for stage in self.stages:
            x = stage.predict(x)
        return self.gain * x

    def limits(self, low: float, high: float) -> Tuple[float, float]:
        """Chained values at two operating points, as ``(minimum, maximum)``.

        A decreasing transfer function or a negative gain swaps which input
        produces the maximum, so the pair is ordered on output.
        """
        a, b = self.evaluate(low), self.evaluate(high)
        return (a, b) if a <= b else (b, a)
