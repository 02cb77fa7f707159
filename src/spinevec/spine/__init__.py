"""Spine geometry and force computation.

Modules:
- levels: static level table and length proportions
- spline_fitter: natural cubic spline through the landmarks
- tangent: tangent angle at each landmark
- force_vectors: per-level shear/normal decomposition
- aggregator: regional and global resultants
- result_packer: result table assembly
"""

from spinevec.spine.models import (
    Region,
    InvalidReason,
    SpinalPoint,
    Vector2D,
    LevelEntry,
    LevelVector,
    LevelRow,
    RegionResult,
    GlobalResult,
    SpineVectorResult,
    InvalidResult,
    SplineCurve,
)
from spinevec.spine.errors import (
    SpineVectorError,
    InsufficientPointsError,
    InsufficientRegionCoverageError,
    UnrecognizedLevelError,
    DegenerateSplineError,
    DegenerateInputError,
)
from spinevec.spine.levels import SpinalLevelTable, LEVEL_TABLE, TOTAL_SEGMENT_WEIGHT
from spinevec.spine.spline_fitter import SpineSplineFitter, FittedSpline
from spinevec.spine.tangent import TangentAngleCalculator
from spinevec.spine.force_vectors import ForceVectorCalculator
from spinevec.spine.aggregator import VectorAggregator
from spinevec.spine.result_packer import ResultPacker

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
    'SpineVectorError',
    'InsufficientPointsError',
    'InsufficientRegionCoverageError',
    'UnrecognizedLevelError',
    'DegenerateSplineError',
    'DegenerateInputError',
    'SpinalLevelTable',
    'LEVEL_TABLE',
    'TOTAL_SEGMENT_WEIGHT',
    'SpineSplineFitter',
    'FittedSpline',
    'TangentAngleCalculator',
    'ForceVectorCalculator',
    'VectorAggregator',
    'ResultPacker',
]
