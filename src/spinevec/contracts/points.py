"""Point preparation contract.

Enforces the guarantee that landmarks reaching the spline stage are sorted
by ascending y and have finite coordinates.
"""

from typing import Sequence

import numpy as np

from spinevec.contracts.base import require
from spinevec.spine.models import SpinalPoint


def assert_sorted_points(points: Sequence[SpinalPoint]) -> None:
    """Enforce point preparation contract.

    Called after the processor sorts and normalizes the input points.

    Parameters
    ----------
    points : sequence of SpinalPoint
        Prepared points.

    Raises
    ------
    ContractViolation
        If points are unsorted or not all SpinalPoint instances.
    """
    require(
        all(isinstance(p, SpinalPoint) for p in points),
        "Points contract violated: all items must be SpinalPoint"
    )

    y = np.array([p.y for p in points], dtype=float)
    require(
        bool(np.all(np.diff(y) >= 0)),
        "Points contract violated: points are not sorted by ascending y"
    )
