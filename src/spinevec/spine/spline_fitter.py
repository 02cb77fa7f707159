"""Natural cubic spline through the spinal landmarks.

The spine runs top to bottom of the image, so y is the independent axis and
the curve is x = S(y). The fit interpolates every landmark with zero second
derivative at both ends (scipy ``bc_type='natural'``).
"""

import logging
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np
import xarray as xr
from scipy.interpolate import CubicSpline

from spinevec.spine.errors import DegenerateSplineError, InsufficientPointsError
from spinevec.spine.models import SpinalPoint

if TYPE_CHECKING:
    from spinevec.schemas import InternalConfig

__all__ = ['SpineSplineFitter', 'FittedSpline']

logger = logging.getLogger(__name__)


class FittedSpline:
    """A fitted curve ``x = S(y)`` and its first derivative.

    Parameters
    ----------
    spline : scipy.interpolate.CubicSpline
        The fitted spline.
    resample_points : int
        Default number of samples for :meth:`resample`.
    """

    def __init__(self, spline: CubicSpline, resample_points: int):
        self._spline = spline
        self._derivative = spline.derivative(1)
        self.resample_points = resample_points

    @property
    def knots_y(self) -> np.ndarray:
        return self._spline.x

    def evaluate(self, y) -> np.ndarray:
        """Curve x at the given y values."""
        return self._spline(np.asarray(y, dtype=float))

    def derivative(self, y) -> np.ndarray:
        """First derivative dx/dy at the given y values."""
        return self._derivative(np.asarray(y, dtype=float))

    def resample(self, n: Optional[int] = None) -> xr.DataArray:
        """Dense uniform sampling between the first and last landmark.

        Parameters
        ----------
        n : int, optional
            Number of samples. Defaults to ``spline.resample_points``.

        Returns
        -------
        xr.DataArray
            Curve x values named ``"x"`` on dimension ``"y"``.
        """
        n = self.resample_points if n is None else int(n)
        if n < 2:
            raise ValueError(f"Resampling needs at least 2 samples, got {n}")

        y_knots = self.knots_y
        y_new = np.linspace(np.min(y_knots), np.max(y_knots), n)
        x_new = self._spline(y_new)

        return xr.DataArray(
            x_new,
            dims=("y",),
            coords={"y": y_new},
            name="x",
            attrs={
                "long_name": "Spine curve x position",
                "bc_type": "natural",
                "n_knots": int(len(y_knots)),
            },
        )


class SpineSplineFitter:
    """Config-driven natural cubic spline fitting."""

    def __init__(self, config: "InternalConfig"):
        """Store spline settings.

        Parameters
        ----------
        config : InternalConfig
            Fully validated runtime configuration.
        """
        self.bc_type = config.spline.bc_type
        self.resample_points = config.spline.resample_points

        logger.info("SpineSplineFitter initialized: bc_type=%s, resample_points=%d",
                    self.bc_type, self.resample_points)

    def fit(self, points: Sequence[SpinalPoint]) -> FittedSpline:
        """Fit a spline through points already sorted by ascending y.

        Raises
        ------
        InsufficientPointsError
            If fewer than two points are given.
        DegenerateSplineError
            If y values repeat, decrease, or are not finite.
        """
        y = np.array([p.y for p in points], dtype=float)
        x = np.array([p.x for p in points], dtype=float)
        return self.fit_arrays(y, x)

    def fit_arrays(self, y: np.ndarray, x: np.ndarray) -> FittedSpline:
        """Fit ``x = S(y)`` from raw arrays (y ascending)."""
        y = np.asarray(y, dtype=float)
        x = np.asarray(x, dtype=float)

        if y.shape != x.shape or y.ndim != 1:
            raise ValueError(f"x and y must be 1D arrays of equal length, got {x.shape} and {y.shape}")
        if y.size < 2:
            raise InsufficientPointsError(int(y.size))
        if not (np.all(np.isfinite(y)) and np.all(np.isfinite(x))):
            raise DegenerateSplineError("Landmark coordinates must be finite")

        steps = np.diff(y)
        if np.any(steps == 0):
            dupes = np.unique(y[1:][steps == 0])
            raise DegenerateSplineError(f"Duplicate y values prevent a spline fit: {dupes.tolist()}")
        if np.any(steps < 0):
            raise DegenerateSplineError("y values must be sorted in ascending order before fitting")

        spline = CubicSpline(y, x, bc_type=self.bc_type)
        logger.debug("Spline fitted through %d knots, y=[%.1f, %.1f]", y.size, y[0], y[-1])

        return FittedSpline(spline, self.resample_points)
