"""Regional and global resultant spine vectors.

Level vectors are grouped by the region their label belongs to and summed
component-wise into a regional resultant spine vector (RSV). The global
spine vector (GSV) is summed in a separate pass over all level vectors,
not from the regional resultants, so the two can be checked against each
other.
"""

import logging
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from spinevec.spine.levels import LEVEL_TABLE, SpinalLevelTable
from spinevec.spine.models import (
    GLOBAL_LABEL,
    SUMMARY_LABELS,
    GlobalResult,
    LevelVector,
    Region,
    RegionResult,
    Vector2D,
)

if TYPE_CHECKING:
    from spinevec.schemas import InternalConfig

__all__ = ['VectorAggregator']

logger = logging.getLogger(__name__)


class VectorAggregator:
    """Sum level vectors into regional and global resultants.

    For each group:

    - ``resultant = sum(shear vectors)``, ``normal_resultant = sum(normal vectors)``
    - ``magnitude = round(|resultant|)``, ``normal_magnitude = round(|normal_resultant|)``
    - ``angle_deg = round(degrees(atan2(resultant.y, resultant.x)))``
    - ``display_angle_deg = 180 - angle_deg``
    - ``ratio = round(tan(atan2(...)), 1)``

    An empty group yields a zero vector with angle 0.
    """

    def __init__(self, config: "InternalConfig", table: Optional[SpinalLevelTable] = None):
        self.summary_decimals = config.output.summary_decimals
        self.ratio_decimals = config.output.row_decimals
        self.table = LEVEL_TABLE if table is None else table

    def aggregate(self, vectors: Sequence[LevelVector]) -> tuple[dict[Region, RegionResult], GlobalResult]:
        """Regional results keyed by Region, and the global result."""
        regional = {}
        for region in Region:
            members = self.table.levels_for(region)
            group = [v for v in vectors if v.label in members]
            regional[region] = self._resultant(group, SUMMARY_LABELS[region], region, RegionResult)

        global_result = self._resultant(list(vectors), GLOBAL_LABEL, None, GlobalResult)

        logger.debug(
            "Aggregated %d vectors: %s, GSV=%.0f N @ %.0f deg",
            len(vectors),
            ", ".join(f"{r.label}={r.magnitude:.0f} N" for r in regional.values()),
            global_result.magnitude, global_result.display_angle_deg,
        )
        return regional, global_result

    def _resultant(self, group: list[LevelVector], label: str,
                   region: Optional[Region], result_cls: type) -> RegionResult:
        if group:
            shear = np.sum([v.shear.as_array() for v in group], axis=0)
            normal = np.sum([v.normal.as_array() for v in group], axis=0)
        else:
            shear = np.zeros(2)
            normal = np.zeros(2)

        angle_raw = np.arctan2(shear[1], shear[0])
        angle_deg = round(float(np.degrees(angle_raw)), self.summary_decimals)

        return result_cls(
            label=label,
            region=region,
            resultant_vector=Vector2D.from_array(shear),
            normal_resultant_vector=Vector2D.from_array(normal),
            magnitude=round(float(np.linalg.norm(shear)), self.summary_decimals),
            normal_magnitude=round(float(np.linalg.norm(normal)), self.summary_decimals),
            angle_deg=angle_deg,
            display_angle_deg=180 - angle_deg,
            ratio=round(float(np.tan(angle_raw)), self.ratio_decimals),
            n_levels=len(group),
        )
