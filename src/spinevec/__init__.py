"""spinevec: regional and global spine force vectors from image landmarks.

A natural cubic spline is fitted through labelled vertebral landmarks; the
tangent at each level splits the body-weight load above it into shear and
normal components, which are summed per region (RSV) and over the whole
spine (GSV).

Examples
--------
>>> from spinevec import compute_spine_vectors
>>> result = compute_spine_vectors(points, weight_kg=60.0)
>>> result.to_dataframe()
"""

from typing import Iterable, Optional, Union, TYPE_CHECKING

from spinevec.pipeline.processor import SpineVectorProcessor, PointLike
from spinevec.spine.models import (
    Region,
    InvalidReason,
    SpinalPoint,
    SpineVectorResult,
    InvalidResult,
    SplineCurve,
)
from spinevec.spine.errors import SpineVectorError

if TYPE_CHECKING:
    from spinevec.schemas import InternalConfig

__version__ = "0.1.0"

__all__ = [
    'compute_spine_vectors',
    'SpineVectorProcessor',
    'Region',
    'InvalidReason',
    'SpinalPoint',
    'SpineVectorResult',
    'InvalidResult',
    'SplineCurve',
    'SpineVectorError',
    '__version__',
]


def compute_spine_vectors(points: Iterable[PointLike], weight_kg: Optional[float] = None,
                          config: Optional["InternalConfig"] = None
                          ) -> Union[SpineVectorResult, InvalidResult]:
    """One-shot spine vector computation with a throwaway processor.

    Parameters
    ----------
    points : iterable
        Labelled landmarks in any order.
    weight_kg : float, optional
        Body weight. Defaults to the configured ``physics.default_weight_kg``.
    config : InternalConfig, optional
        Runtime configuration. Defaults to ``resolve_config()``.
    """
    return SpineVectorProcessor(config).process(points, weight_kg)
