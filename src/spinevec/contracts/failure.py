"""Contract violation type and failure policy."""

from enum import Enum


class FailurePolicy(str, Enum):
    """How a broken stage invariant is handled.

    Only FAIL_FAST exists: the violation is raised at the boundary where it
    was detected.
    """
    FAIL_FAST = "fail_fast"


class ContractViolation(RuntimeError):
    """A pipeline stage broke the guarantee it makes to the next stage.

    Three failure families exist and are kept apart:

    - ``ValueError`` / ``pydantic.ValidationError``: bad argument or config
    - ``SpineVectorError``: the points cannot produce a result
    - ``ContractViolation``: a bug in the pipeline itself
    """
