"""Assemble the result table consumed by the presentation layer."""

import logging
from typing import TYPE_CHECKING, Sequence

from spinevec.spine.models import (
    GlobalResult,
    LevelRow,
    LevelVector,
    Region,
    RegionResult,
    SpineVectorResult,
)

if TYPE_CHECKING:
    from spinevec.schemas import InternalConfig

__all__ = ['ResultPacker']

logger = logging.getLogger(__name__)


class ResultPacker:
    """Build LevelRows and the final SpineVectorResult.

    Per-level rows hold ``[angle, shear, normal, ratio, label]`` rounded to
    ``output.row_decimals``; summary rows RSV-C, RSV-T, RSV-L and GSV follow
    with the display angle, rounded magnitudes and tangent ratio of each
    resultant.
    """

    def __init__(self, config: "InternalConfig"):
        self.row_decimals = config.output.row_decimals

    def level_row(self, vector: LevelVector) -> LevelRow:
        d = self.row_decimals
        return LevelRow(
            angle_deg=round(vector.angle_deg, d),
            shear_force=round(vector.shear_signed, d),
            normal_force=round(vector.normal_signed, d),
            ratio=round(vector.ratio, d),
            label=vector.label,
        )

    @staticmethod
    def summary_row(result: RegionResult) -> LevelRow:
        return LevelRow(
            angle_deg=result.display_angle_deg,
            shear_force=result.magnitude,
            normal_force=result.normal_magnitude,
            ratio=result.ratio,
            label=result.label,
        )

    def pack(self, vectors: Sequence[LevelVector], regional: dict[Region, RegionResult],
             global_result: GlobalResult, weight_kg: float,
             excluded_labels: Sequence[str] = ()) -> SpineVectorResult:
        rows = [self.level_row(v) for v in vectors]
        rows.extend(self.summary_row(regional[region]) for region in Region)
        rows.append(self.summary_row(global_result))

        logger.debug("Packed %d rows (%d levels + %d summaries)", len(rows), len(vectors), len(Region) + 1)

        return SpineVectorResult(
            rows=tuple(rows),
            level_vectors=tuple(vectors),
            cervical=regional[Region.CERVICAL],
            thoracic=regional[Region.THORACIC],
            lumbar=regional[Region.LUMBAR],
            global_=global_result,
            excluded_labels=tuple(excluded_labels),
            weight_kg=weight_kg,
        )
