"""Static spinal level table and cumulative length proportions.

The reference table lists every level from C1 to L5 in cranio-caudal order
with a relative segment weight (its share of total spine length). From it
two lookups are derived once, at import:

- cumulative level proportion: summed weight from C1 through the level
- single level proportion: the level's own weight

Both are read-only. The normalization constant used by the force stage is
the sum of all weights, so table and constant cannot drift apart.
"""

import logging
from types import MappingProxyType
from typing import Iterable, Mapping

import numpy as np

from spinevec.spine.errors import UnrecognizedLevelError
from spinevec.spine.models import LevelEntry, Region, SpinalPoint

__all__ = [
    'SpinalLevelTable',
    'LEVEL_TABLE',
    'REFERENCE_SEGMENT_WEIGHTS',
    'TOTAL_SEGMENT_WEIGHT',
    'CERVICAL_LEVELS',
    'THORACIC_LEVELS',
    'LUMBAR_LEVELS',
]

logger = logging.getLogger(__name__)


# =============================================================================
# Reference segment weights
# =============================================================================

REFERENCE_SEGMENT_WEIGHTS: dict[Region, tuple[tuple[str, float], ...]] = {
    Region.CERVICAL: (
        ("C1", 1.0),
        ("C2", 2.0),
        ("C3", 2.0),
        ("C4", 2.0),
        ("C5", 2.0),
        ("C6", 2.0),
        ("C7", 2.0),
    ),
    Region.THORACIC: tuple((f"T{i}", 2.0) for i in range(1, 13)),
    Region.LUMBAR: (
        ("L1", 4.0),
        ("L2", 4.0),
        ("L3", 4.0),
        ("L4", 4.0),
        ("L5", 5.0),
    ),
}


class SpinalLevelTable:
    """Ordered level table with precomputed length proportions.

    Instances never change after construction; all mappings are exposed
    through ``MappingProxyType``.

    Parameters
    ----------
    entries : iterable of LevelEntry
        Levels in cranio-caudal order. Labels must be unique.

    Examples
    --------
    >>> LEVEL_TABLE.cumulative_proportion("C5")
    9.0
    >>> LEVEL_TABLE.single_level_proportion("L5")
    5.0
    >>> LEVEL_TABLE.total
    58.0
    """

    def __init__(self, entries: Iterable[LevelEntry]):
        entries = tuple(sorted(entries, key=lambda e: e.order))
        labels = [e.label for e in entries]
        if len(set(labels)) != len(labels):
            raise ValueError("Level table labels must be unique")
        if not entries:
            raise ValueError("Level table must contain at least one level")

        weights = np.array([e.segment_weight for e in entries], dtype=float)
        cumulative = np.cumsum(weights)

        self._entries = entries
        self._by_label = MappingProxyType({e.label: e for e in entries})
        self.cumulative_level_proportion: Mapping[str, float] = MappingProxyType(
            {label: float(c) for label, c in zip(labels, cumulative)}
        )
        self.cumulative_single_level_proportion: Mapping[str, float] = MappingProxyType(
            {label: float(w) for label, w in zip(labels, weights)}
        )
        self.total = float(weights.sum())
        self._levels_by_region = MappingProxyType({
            region: tuple(e.label for e in entries if e.region == region)
            for region in Region
        })
        logger.debug("Level table built: %d levels, total weight %.1f", len(entries), self.total)

    @classmethod
    def from_weights(cls, weights: Mapping[Region, Iterable[tuple[str, float]]]) -> "SpinalLevelTable":
        """Build a table from per-region ``(label, weight)`` sequences."""
        entries = []
        order = 0
        for region in Region:
            for label, weight in weights.get(region, ()):
                entries.append(LevelEntry(label=label, region=region, order=order, segment_weight=weight))
                order += 1
        return cls(entries)

    @property
    def entries(self) -> tuple[LevelEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, label: str) -> bool:
        return label in self._by_label

    def is_known(self, label: str) -> bool:
        return label in self._by_label

    def levels_for(self, region: Region) -> tuple[str, ...]:
        return self._levels_by_region[Region(region)]

    def region_of(self, label: str) -> Region:
        """Region a label belongs to.

        Raises
        ------
        UnrecognizedLevelError
            If the label is not in the table.
        """
        try:
            return self._by_label[label].region
        except KeyError:
            raise UnrecognizedLevelError(label) from None

    def cumulative_proportion(self, label: str) -> float:
        """Summed segment weight from the first level through ``label``."""
        try:
            return self.cumulative_level_proportion[label]
        except KeyError:
            raise UnrecognizedLevelError(label) from None

    def single_level_proportion(self, label: str) -> float:
        """Segment weight of ``label`` alone."""
        try:
            return self.cumulative_single_level_proportion[label]
        except KeyError:
            raise UnrecognizedLevelError(label) from None

    def count_by_region(self, points: Iterable[SpinalPoint]) -> dict[str, int]:
        """Number of points with a recognized label in each region.

        Returns
        -------
        dict
            ``{"cervical": n, "thoracic": n, "lumbar": n}``; unrecognized
            labels are not counted anywhere.
        """
        counts = {region.value: 0 for region in Region}
        for point in points:
            entry = self._by_label.get(point.label)
            if entry is not None:
                counts[entry.region.value] += 1
        return counts


LEVEL_TABLE = SpinalLevelTable.from_weights(REFERENCE_SEGMENT_WEIGHTS)
TOTAL_SEGMENT_WEIGHT = LEVEL_TABLE.total

CERVICAL_LEVELS = LEVEL_TABLE.levels_for(Region.CERVICAL)
THORACIC_LEVELS = LEVEL_TABLE.levels_for(Region.THORACIC)
LUMBAR_LEVELS = LEVEL_TABLE.levels_for(Region.LUMBAR)
