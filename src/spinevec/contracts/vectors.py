"""Force vector and aggregation contracts.

Enforces the guarantee that level vectors are well formed and that the
independently summed global resultant agrees with the regional ones.
"""

from typing import Sequence

import numpy as np

from spinevec.contracts.base import require
from spinevec.spine.models import GlobalResult, LevelVector, Region, RegionResult


def assert_level_vectors(vectors: Sequence[LevelVector], n_expected: int) -> None:
    """Enforce force vector stage contract.

    Parameters
    ----------
    vectors : sequence of LevelVector
        Output of ForceVectorCalculator.compute()
    n_expected : int
        Number of points with a recognized label.

    Raises
    ------
    ContractViolation
        If vectors are missing or carry non-finite values.
    """
    require(
        len(vectors) == n_expected,
        f"Vector contract violated: got {len(vectors)} level vectors, expected {n_expected}"
    )
    for v in vectors:
        values = [
            v.angle_deg, v.shear_signed, v.normal_signed,
            v.shear_magnitude, v.normal_magnitude,
            v.shear.x, v.shear.y, v.normal.x, v.normal.y,
        ]
        require(
            bool(np.all(np.isfinite(values))),
            f"Vector contract violated: non-finite value at level '{v.label}'"
        )


def assert_aggregates(regional: dict[Region, RegionResult], global_result: GlobalResult,
                      atol: float = 1e-6) -> None:
    """Enforce aggregation stage contract.

    Parameters
    ----------
    regional : dict
        Regional results keyed by Region.
    global_result : GlobalResult
        Global result, summed independently.
    atol : float
        Absolute tolerance on each vector component.

    Raises
    ------
    ContractViolation
        If a region is missing or the global resultant disagrees with the
        regional sum.
    """
    require(
        set(regional) == set(Region),
        f"Aggregation contract violated: regions {sorted(r.value for r in regional)}"
    )

    shear_sum = np.sum([r.resultant_vector.as_array() for r in regional.values()], axis=0)
    normal_sum = np.sum([r.normal_resultant_vector.as_array() for r in regional.values()], axis=0)
    require(
        bool(np.allclose(shear_sum, global_result.resultant_vector.as_array(), rtol=0, atol=atol)),
        "Aggregation contract violated: global shear resultant != sum of regional resultants"
    )
    require(
        bool(np.allclose(normal_sum, global_result.normal_resultant_vector.as_array(), rtol=0, atol=atol)),
        "Aggregation contract violated: global normal resultant != sum of regional resultants"
    )
