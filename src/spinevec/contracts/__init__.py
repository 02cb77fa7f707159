"""Pipeline contracts: fail-fast enforcement of stage invariants.

This package enforces semantic guarantees between pipeline stages.
Contracts fail immediately and loudly when pipeline stages don't produce
their promised invariants.

Key principle:
- Pydantic validates config correctness
- Typed SpineVectorErrors report inputs that cannot produce a result
- Contracts validate pipeline correctness
"""

from spinevec.contracts.failure import ContractViolation, FailurePolicy
from spinevec.contracts.base import require
from spinevec.contracts.points import assert_sorted_points
from spinevec.contracts.spline import assert_spline_fit, assert_angles
from spinevec.contracts.vectors import assert_level_vectors, assert_aggregates
from spinevec.contracts.result import assert_packed_result

__all__ = [
    "ContractViolation",
    "FailurePolicy",
    "require",
    "assert_sorted_points",
    "assert_spline_fit",
    "assert_angles",
    "assert_level_vectors",
    "assert_aggregates",
    "assert_packed_result",
]
