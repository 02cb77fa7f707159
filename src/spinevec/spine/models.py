"""Immutable data model shared by the spine vector stages.

Every type is a frozen pydantic model, so instances are value types: they
can be compared, hashed (used as memo keys by the processor) and handed to
any number of callers without copying.
"""

from enum import Enum
from typing import Optional

import numpy as np
import pandas as pd
import xarray as xr
from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    'Region',
    'InvalidReason',
    'SpinalPoint',
    'Vector2D',
    'LevelEntry',
    'LevelVector',
    'LevelRow',
    'RegionResult',
    'GlobalResult',
    'SpineVectorResult',
    'InvalidResult',
    'SplineCurve',
    'ROW_COLUMNS',
    'SUMMARY_LABELS',
    'GLOBAL_LABEL',
]


class Region(str, Enum):
    """Anatomical spine regions, in cranio-caudal order."""
    CERVICAL = "cervical"
    THORACIC = "thoracic"
    LUMBAR = "lumbar"


class InvalidReason(str, Enum):
    """Why a point set could not produce a spine vector result."""
    INSUFFICIENT_POINTS = "insufficient_points"
    INSUFFICIENT_REGION_COVERAGE = "insufficient_region_coverage"
    DEGENERATE_SPLINE = "degenerate_spline"


# Labels of the synthetic summary rows appended after the per-level rows
SUMMARY_LABELS = {
    Region.CERVICAL: "RSV-C",
    Region.THORACIC: "RSV-T",
    Region.LUMBAR: "RSV-L",
}
GLOBAL_LABEL = "GSV"

ROW_COLUMNS = ["angle_deg", "shear_force", "normal_force", "ratio", "label"]


class SpineModel(BaseModel):
    """Frozen base for pipeline data types."""

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
        str_strip_whitespace=True,
    )


class SpinalPoint(SpineModel):
    """A landmark placed on the image, in pixel coordinates (y grows downward)."""
    x: float
    y: float
    label: str = ""


class Vector2D(SpineModel):
    """Plain 2D vector."""
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_array(cls, arr) -> "Vector2D":
        return cls(x=float(arr[0]), y=float(arr[1]))

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    def norm(self) -> float:
        return float(np.hypot(self.x, self.y))

    def __add__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(x=self.x + other.x, y=self.y + other.y)


class LevelEntry(SpineModel):
    """One row of the static level table."""
    label: str
    region: Region
    order: int = Field(ge=0)
    segment_weight: float = Field(gt=0)


class LevelVector(SpineModel):
    """Force decomposition at one recognized landmark.

    ``x`` and ``y`` are the landmark coordinates, i.e. where a renderer
    anchors the arrows. ``shear`` and ``normal`` are the decomposed vectors
    sized by the single-level proportion; the ``*_signed`` values use the
    cumulative proportion and feed the result table.
    """
    label: str
    region: Region
    x: float
    y: float
    angle_deg: float
    ratio: float
    shear_signed: float
    normal_signed: float
    shear_magnitude: float = Field(ge=0)
    normal_magnitude: float = Field(ge=0)
    shear: Vector2D
    normal: Vector2D


class LevelRow(SpineModel):
    """One line of the result table."""
    angle_deg: float
    shear_force: float
    normal_force: float
    ratio: float
    label: str

    def as_list(self) -> list:
        return [self.angle_deg, self.shear_force, self.normal_force, self.ratio, self.label]


class RegionResult(SpineModel):
    """Resultant of a group of level vectors.

    ``angle_deg`` is the rounded direction of the shear resultant in screen
    coordinates; ``display_angle_deg`` is ``180 - angle_deg``, the value shown
    to users.
    """
    label: str
    region: Optional[Region] = None
    resultant_vector: Vector2D
    normal_resultant_vector: Vector2D
    magnitude: float
    normal_magnitude: float
    angle_deg: float
    display_angle_deg: float
    ratio: float
    n_levels: int = Field(0, ge=0)


class GlobalResult(RegionResult):
    """Resultant over every recognized level."""


class SpineVectorResult(SpineModel):
    """Complete output of the spine vector pipeline."""
    rows: tuple[LevelRow, ...]
    level_vectors: tuple[LevelVector, ...]
    cervical: RegionResult
    thoracic: RegionResult
    lumbar: RegionResult
    global_: GlobalResult = Field(alias="global")
    excluded_labels: tuple[str, ...] = ()
    weight_kg: float

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
        populate_by_name=True,
    )

    @property
    def is_valid(self) -> bool:
        return True

    @property
    def regions(self) -> dict[Region, RegionResult]:
        return {
            Region.CERVICAL: self.cervical,
            Region.THORACIC: self.thoracic,
            Region.LUMBAR: self.lumbar,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Result table, one row per level plus the four summary rows."""
        return pd.DataFrame([row.model_dump() for row in self.rows], columns=ROW_COLUMNS)


class InvalidResult(SpineModel):
    """Sentinel returned when the point set cannot produce a result.

    The presentation layer picks its message from ``reason``; no partial
    output is ever attached.
    """
    reason: InvalidReason
    message: str
    region_counts: dict[str, int] = Field(default_factory=dict)
    total_points: int = Field(0, ge=0)

    @property
    def is_valid(self) -> bool:
        return False


class SplineCurve(SpineModel):
    """Dense curve through the landmarks plus the tangent angle at each one."""
    points: tuple[SpinalPoint, ...]
    angles_deg: tuple[float, ...]
    curve: xr.DataArray

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
        arbitrary_types_allowed=True,
    )
