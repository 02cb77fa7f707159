"""Tangent angle of the fitted spine curve at each landmark."""

import logging

import numpy as np

from spinevec.spine.spline_fitter import FittedSpline

__all__ = ['TangentAngleCalculator']

logger = logging.getLogger(__name__)


class TangentAngleCalculator:
    """Signed deviation of the curve from vertical, in degrees.

    At each sample the tangent of ``x = S(y)`` is ``(S'(y), 1)``. After
    normalization the angle is ``atan2(tx, ty)``: zero for a vertical
    segment, positive when x grows with y (the curve leans toward +x going
    down the image), negative otherwise.
    """

    def angles(self, spline: FittedSpline, y) -> np.ndarray:
        """Tangent angles in degrees at the given y values."""
        dx = np.atleast_1d(spline.derivative(y))
        dy = np.ones_like(dx)

        tangents = np.stack((dx, dy), axis=-1)
        tangents = tangents / np.linalg.norm(tangents, axis=-1, keepdims=True)
        angles = np.degrees(np.arctan2(tangents[:, 0], tangents[:, 1]))

        logger.debug("Tangent angles: %s", np.round(angles, 2).tolist())
        return angles
