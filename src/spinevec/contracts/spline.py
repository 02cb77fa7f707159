"""Spline and tangent angle contracts.

Enforces the guarantee that the fitted curve passes through every landmark
and that one bounded, finite angle exists per landmark.
"""

from typing import Sequence

import numpy as np

from spinevec.contracts.base import require
from spinevec.spine.models import SpinalPoint


def assert_spline_fit(spline, points: Sequence[SpinalPoint], atol: float = 1e-6) -> None:
    """Enforce spline stage contract.

    Parameters
    ----------
    spline : FittedSpline
        Output of SpineSplineFitter.fit()
    points : sequence of SpinalPoint
        Sorted landmarks the spline was fitted through.
    atol : float
        Interpolation tolerance in coordinate units.

    Raises
    ------
    ContractViolation
        If the spline misses a landmark.
    """
    y = np.array([p.y for p in points], dtype=float)
    x = np.array([p.x for p in points], dtype=float)
    require(
        len(spline.knots_y) == len(points),
        f"Spline contract violated: {len(spline.knots_y)} knots for {len(points)} points"
    )
    require(
        bool(np.allclose(spline.evaluate(y), x, atol=atol)),
        "Spline contract violated: curve does not interpolate the landmarks"
    )


def assert_angles(angles, n_points: int) -> None:
    """Enforce tangent angle contract.

    Parameters
    ----------
    angles : array-like
        Output of TangentAngleCalculator.angles()
    n_points : int
        Number of sorted points the angles belong to.

    Raises
    ------
    ContractViolation
        If the count, finiteness, or range is wrong.
    """
    angles = np.asarray(angles, dtype=float)
    require(
        angles.ndim == 1 and angles.size == n_points,
        f"Angle contract violated: got {angles.size} angles for {n_points} points"
    )
    require(
        bool(np.all(np.isfinite(angles))),
        "Angle contract violated: non-finite tangent angle"
    )
    require(
        bool(np.all((angles > -180.0) & (angles <= 180.0))),
        "Angle contract violated: angle outside (-180, 180] degrees"
    )
