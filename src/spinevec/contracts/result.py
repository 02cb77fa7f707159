"""Result packing contract.

Enforces the guarantee that the packed table holds one row per level
vector followed by the four summary rows, in order.
"""

from spinevec.contracts.base import require
from spinevec.spine.models import GLOBAL_LABEL, SUMMARY_LABELS, Region, SpineVectorResult


def assert_packed_result(result: SpineVectorResult) -> None:
    """Enforce result stage contract.

    Parameters
    ----------
    result : SpineVectorResult
        Output of ResultPacker.pack()

    Raises
    ------
    ContractViolation
        If rows and level vectors are out of step.
    """
    require(
        isinstance(result, SpineVectorResult),
        f"Result contract violated: output is {type(result)}, expected SpineVectorResult"
    )

    n_levels = len(result.level_vectors)
    require(
        len(result.rows) == n_levels + len(Region) + 1,
        f"Result contract violated: {len(result.rows)} rows for {n_levels} levels"
    )

    level_labels = [row.label for row in result.rows[:n_levels]]
    require(
        level_labels == [v.label for v in result.level_vectors],
        "Result contract violated: row labels do not match level vectors"
    )

    summary_labels = [row.label for row in result.rows[n_levels:]]
    expected = [SUMMARY_LABELS[region] for region in Region] + [GLOBAL_LABEL]
    require(
        summary_labels == expected,
        f"Result contract violated: summary rows {summary_labels}, expected {expected}"
    )
