"""The single contract check used by every stage boundary."""

from spinevec.contracts.failure import ContractViolation


def require(condition: bool, message: str) -> None:
    """Raise ContractViolation with ``message`` unless ``condition`` holds.

    Parameters
    ----------
    condition : bool
        Invariant the preceding stage promised.
    message : str
        What was violated, for the traceback.

    Raises
    ------
    ContractViolation
        If ``condition`` is false.

    Examples
    --------
    >>> require(len(angles) == len(points), "Angle contract: one angle per point")
    """
    if not condition:
        raise ContractViolation(message)
