"""Spine vector processing pipeline.

Runs a set of labelled landmarks through point preparation, spline fitting,
tangent angles, force decomposition, aggregation and packing. Each stage
boundary is checked by a contract from :mod:`spinevec.contracts`.
"""

import logging
from collections import OrderedDict
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Union

import numpy as np

from spinevec.spine.aggregator import VectorAggregator
from spinevec.spine.errors import (
    DegenerateSplineError,
    InsufficientPointsError,
    InsufficientRegionCoverageError,
    SpineVectorError,
)
from spinevec.spine.force_vectors import ForceVectorCalculator
from spinevec.spine.levels import LEVEL_TABLE
from spinevec.spine.models import (
    InvalidReason,
    InvalidResult,
    SpinalPoint,
    SpineVectorResult,
    SplineCurve,
)
from spinevec.spine.result_packer import ResultPacker
from spinevec.spine.spline_fitter import SpineSplineFitter
from spinevec.spine.tangent import TangentAngleCalculator
from spinevec.schemas import resolve_config
from spinevec.contracts import (
    assert_sorted_points,
    assert_spline_fit,
    assert_angles,
    assert_level_vectors,
    assert_aggregates,
    assert_packed_result,
)

if TYPE_CHECKING:
    from spinevec.schemas import InternalConfig

__all__ = ['SpineVectorProcessor']

logger = logging.getLogger(__name__)

PointLike = Union[SpinalPoint, Mapping[str, Any], tuple]


class SpineVectorProcessor:
    """Compute spine force vectors from labelled landmarks.

    **Processing Pipeline:**

    1. **Prepare**: coerce inputs to SpinalPoint, normalize labels, sort by
       ascending y.

    2. **Gate**: at least two points overall, then at least
       ``levels.min_points_per_region`` recognized points in each of the
       cervical, thoracic and lumbar regions.

    3. **Spline**: natural cubic spline ``x = S(y)`` through all points,
       including ones whose label is not in the level table.

    4. **Angles**: tangent angle at every point.

    5. **Vectors**: shear and normal decomposition for recognized levels;
       unrecognized labels are excluded and reported.

    6. **Aggregate & Pack**: regional (RSV) and global (GSV) resultants and
       the result table.

    Input problems (too few points, missing regions, degenerate y values)
    become an :class:`InvalidResult` from :meth:`process` and an exception
    from :meth:`process_strict`. A ``ContractViolation`` always propagates.

    Results are memoized per ``(sorted points, weight)`` in an LRU of
    ``processor.cache_size`` entries.

    Parameters
    ----------
    config : InternalConfig, optional
        Fully validated runtime configuration. Defaults to
        ``resolve_config()``.

    Examples
    --------
    >>> processor = SpineVectorProcessor()
    >>> result = processor.process(points, weight_kg=60.0)
    >>> if result.is_valid:
    ...     print(result.to_dataframe())
    """

    def __init__(self, config: Optional["InternalConfig"] = None):
        if config is None:
            config = resolve_config()

        self.config = config
        self.default_weight_kg = config.physics.default_weight_kg
        self.min_points_per_region = config.levels.min_points_per_region
        self.normalize_labels = config.levels.normalize_labels
        self.cache_size = config.processor.cache_size

        self.fitter = SpineSplineFitter(config)
        self.tangent = TangentAngleCalculator()
        self.force = ForceVectorCalculator(config)
        self.aggregator = VectorAggregator(config)
        self.packer = ResultPacker(config)

        self._cache: "OrderedDict[tuple, SpineVectorResult]" = OrderedDict()
        self._hits = 0
        self._misses = 0

        logger.info("SpineVectorProcessor initialized: default_weight=%.1f kg, "
                    "min_points_per_region=%d, cache_size=%d",
                    self.default_weight_kg, self.min_points_per_region, self.cache_size)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def process(self, points: Iterable[PointLike],
                weight_kg: Optional[float] = None) -> Union[SpineVectorResult, InvalidResult]:
        """Run the full pipeline.

        Parameters
        ----------
        points : iterable
            SpinalPoint instances, ``{"x", "y", "label"}`` mappings or
            ``(x, y[, label])`` tuples, in any order.
        weight_kg : float, optional
            Body weight. Defaults to ``physics.default_weight_kg``.

        Returns
        -------
        SpineVectorResult or InvalidResult
            The result, or the sentinel describing why none exists.

        Raises
        ------
        ValueError
            If the weight is not a positive finite number.
        ContractViolation
            If a stage broke its output guarantees.
        """
        weight = self._resolve_weight(weight_kg)
        prepared = self._prepare(points)

        try:
            return self._run(prepared, weight)
        except SpineVectorError as e:
            reason = e.reason or InvalidReason.DEGENERATE_SPLINE
            logger.warning("No spine vectors for %d points (%s): %s", len(prepared), reason.value, e)
            return InvalidResult(
                reason=reason,
                message=str(e),
                region_counts=LEVEL_TABLE.count_by_region(prepared),
                total_points=len(prepared),
            )

    def process_strict(self, points: Iterable[PointLike],
                       weight_kg: Optional[float] = None) -> SpineVectorResult:
        """Like :meth:`process` but raise the SpineVectorError instead of
        returning an InvalidResult."""
        weight = self._resolve_weight(weight_kg)
        return self._run(self._prepare(points), weight)

    def fit_curve(self, points: Iterable[PointLike]) -> SplineCurve:
        """Fit and sample the spine curve without force computation.

        Only two points with any labels are needed.

        Raises
        ------
        InsufficientPointsError
            If fewer than two points are given.
        DegenerateSplineError
            If y values repeat or are not finite.
        """
        prepared = self._prepare(points)
        if len(prepared) < 2:
            raise InsufficientPointsError(len(prepared))

        spline = self.fitter.fit(prepared)
        y = np.array([p.y for p in prepared], dtype=float)
        angles = self.tangent.angles(spline, y)
        assert_angles(angles, len(prepared))

        return SplineCurve(
            points=tuple(prepared),
            angles_deg=tuple(float(a) for a in angles),
            curve=spline.resample(),
        )

    def cache_info(self) -> dict:
        return {
            "hits": self._hits,
            "misses": self._misses,
            "size": len(self._cache),
            "maxsize": self.cache_size,
        }

    def clear_cache(self):
        self._cache.clear()
        self._hits = 0
        self._misses = 0

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _run(self, prepared: tuple[SpinalPoint, ...], weight: float) -> SpineVectorResult:
        key = (prepared, weight)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            self._hits += 1
            logger.debug("Cache hit for %d points at %.1f kg", len(prepared), weight)
            return cached
        self._misses += 1

        result = self._compute(prepared, weight)

        if self.cache_size > 0:
            self._cache[key] = result
            while len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)
        return result

    def _compute(self, prepared: tuple[SpinalPoint, ...], weight: float) -> SpineVectorResult:
        if len(prepared) < 2:
            raise InsufficientPointsError(len(prepared))

        counts = LEVEL_TABLE.count_by_region(prepared)
        if any(n < self.min_points_per_region for n in counts.values()):
            raise InsufficientRegionCoverageError(counts, self.min_points_per_region)

        coords = np.array([(p.x, p.y) for p in prepared], dtype=float)
        if not np.all(np.isfinite(coords)):
            raise DegenerateSplineError("Landmark coordinates must be finite")
        assert_sorted_points(prepared)

        spline = self.fitter.fit(prepared)
        assert_spline_fit(spline, prepared)

        y = np.array([p.y for p in prepared], dtype=float)
        angles = self.tangent.angles(spline, y)
        assert_angles(angles, len(prepared))

        vectors, excluded = self.force.compute(prepared, angles, weight)
        assert_level_vectors(vectors, sum(counts.values()))

        regional, global_result = self.aggregator.aggregate(vectors)
        assert_aggregates(regional, global_result)

        result = self.packer.pack(vectors, regional, global_result, weight, excluded)
        assert_packed_result(result)

        logger.info("Spine vectors computed: %d levels, GSV=%.0f N @ %.0f deg%s",
                    len(vectors), global_result.magnitude, global_result.display_angle_deg,
                    f", excluded {list(excluded)}" if excluded else "")
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_weight(self, weight_kg: Optional[float]) -> float:
        weight = self.default_weight_kg if weight_kg is None else float(weight_kg)
        if not np.isfinite(weight) or weight <= 0:
            raise ValueError(f"Weight must be a positive number, got {weight_kg}")
        return weight

    def _prepare(self, points: Iterable[PointLike]) -> tuple[SpinalPoint, ...]:
        prepared = [self._coerce_point(p) for p in points]
        if self.normalize_labels:
            prepared = [SpinalPoint(x=p.x, y=p.y, label=p.label.upper()) for p in prepared]
        # Full key so equal-y inputs still sort the same for any permutation
        prepared.sort(key=lambda p: (p.y, p.x, p.label))
        return tuple(prepared)

    @staticmethod
    def _coerce_point(item: PointLike) -> SpinalPoint:
        if isinstance(item, SpinalPoint):
            return item
        if isinstance(item, Mapping):
            return SpinalPoint(**item)
        x, y, *rest = item
        return SpinalPoint(x=x, y=y, label=rest[0] if rest else "")
