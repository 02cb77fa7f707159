"""Per-level gravitational force decomposition.

For a landmark at tangent angle ``a`` with level proportion ``p`` the load
of body weight ``w`` is split into a shear part ``g*w*sin(a)*p/T`` and a
normal part ``g*w*cos(a)*p/T``, with ``T`` the total segment weight of the
level table.

Two proportions are used:

- magnitudes of the drawn vectors use the single-level proportion and are
  absolute
- table values (signed) use the cumulative proportion, i.e. the load of
  everything above and including the level

Shear vectors are mirrored on the sign of the angle so the arrow points
toward the physiological load direction in screen coordinates (y down).
"""

import logging
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from spinevec.spine.errors import UnrecognizedLevelError
from spinevec.spine.levels import LEVEL_TABLE, SpinalLevelTable
from spinevec.spine.models import LevelVector, SpinalPoint, Vector2D

if TYPE_CHECKING:
    from spinevec.schemas import InternalConfig

__all__ = ['ForceVectorCalculator']

logger = logging.getLogger(__name__)


def _shear_components(magnitude: np.ndarray, rad: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Screen-space shear vector, mirrored for non-negative angles."""
    x = np.where(rad < 0, magnitude * np.cos(rad), -magnitude * np.cos(rad))
    y = np.where(rad < 0, -magnitude * np.sin(rad), magnitude * np.sin(rad))
    return x, y


def _normal_components(magnitude: np.ndarray, rad: np.ndarray,
                       sign_flip: bool) -> tuple[np.ndarray, np.ndarray]:
    """Screen-space normal vector.

    Without ``sign_flip`` both angle signs use the same formula. With it,
    x is mirrored for non-negative angles the same way as the shear vector.
    """
    x = magnitude * np.sin(rad)
    if sign_flip:
        x = np.where(rad < 0, x, -x)
    y = magnitude * np.cos(rad)
    return x, y


class ForceVectorCalculator:
    """Convert tangent angles and body weight into per-level force vectors.

    Parameters
    ----------
    config : InternalConfig
        Fully validated runtime configuration.
    table : SpinalLevelTable, optional
        Level table to look up proportions in. Defaults to the reference
        table.

    Examples
    --------
    >>> calc = ForceVectorCalculator(config)
    >>> vectors, excluded = calc.compute(sorted_points, angles, weight_kg=60.0)
    >>> [v.label for v in vectors]
    ['C5', 'C6', 'T6', 'T7', 'L2', 'L3']
    """

    def __init__(self, config: "InternalConfig", table: Optional[SpinalLevelTable] = None):
        self.gravity = config.physics.gravity
        self.normal_sign_flip = config.vectors.normal_sign_flip
        self.table = LEVEL_TABLE if table is None else table

        logger.info("ForceVectorCalculator initialized: g=%.5f, total_weight=%.1f, normal_sign_flip=%s",
                    self.gravity, self.table.total, self.normal_sign_flip)

    def compute(self, points: Sequence[SpinalPoint], angles_deg,
                weight_kg: float) -> tuple[tuple[LevelVector, ...], tuple[str, ...]]:
        """Force vectors for every point with a recognized label.

        Parameters
        ----------
        points : sequence of SpinalPoint
            Landmarks sorted by ascending y.
        angles_deg : array-like
            Tangent angle at each point, same order.
        weight_kg : float
            Body weight.

        Returns
        -------
        vectors : tuple of LevelVector
            One per recognized point, in input order.
        excluded : tuple of str
            Labels that were not found in the level table.
        """
        angles_deg = np.asarray(angles_deg, dtype=float)
        if len(points) != angles_deg.size:
            raise ValueError(f"Got {len(points)} points but {angles_deg.size} angles")
        if not np.isfinite(weight_kg) or weight_kg <= 0:
            raise ValueError(f"Weight must be a positive number, got {weight_kg}")

        kept = []
        regions = []
        p_cum = []
        p_single = []
        excluded = []
        for i, point in enumerate(points):
            try:
                region = self.table.region_of(point.label)
                cumulative = self.table.cumulative_proportion(point.label)
                single = self.table.single_level_proportion(point.label)
            except UnrecognizedLevelError as e:
                logger.warning("Excluding point (%.1f, %.1f): %s", point.x, point.y, e)
                excluded.append(point.label)
                continue
            kept.append(i)
            regions.append(region)
            p_cum.append(cumulative)
            p_single.append(single)

        if not kept:
            return (), tuple(excluded)

        rad = np.radians(angles_deg[kept])
        p_cum = np.asarray(p_cum)
        p_single = np.asarray(p_single)
        load = self.gravity * weight_kg / self.table.total

        shear_signed = load * np.sin(rad) * p_cum
        normal_signed = load * np.cos(rad) * p_cum
        shear_mag = np.abs(load * np.sin(rad) * p_single)
        normal_mag = np.abs(load * np.cos(rad) * p_single)
        ratio = np.tan(rad)

        shear_x, shear_y = _shear_components(shear_mag, rad)
        normal_x, normal_y = _normal_components(normal_mag, rad, self.normal_sign_flip)

        vectors = []
        for j, i in enumerate(kept):
            point = points[i]
            vectors.append(LevelVector(
                label=point.label,
                region=regions[j],
                x=point.x,
                y=point.y,
                angle_deg=float(angles_deg[i]),
                ratio=float(ratio[j]),
                shear_signed=float(shear_signed[j]),
                normal_signed=float(normal_signed[j]),
                shear_magnitude=float(shear_mag[j]),
                normal_magnitude=float(normal_mag[j]),
                shear=Vector2D(x=float(shear_x[j]), y=float(shear_y[j])),
                normal=Vector2D(x=float(normal_x[j]), y=float(normal_y[j])),
            ))

        logger.debug("Computed %d level vectors (%d excluded) for weight=%.1f kg",
                     len(vectors), len(excluded), weight_kg)
        return tuple(vectors), tuple(excluded)
