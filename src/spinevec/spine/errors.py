"""Typed failures of the spine vector pipeline.

These are input problems, not bugs: the processor converts them into an
InvalidResult at its boundary. Pipeline bugs raise ContractViolation
instead (see spinevec.contracts).
"""

from typing import Optional

from spinevec.spine.models import InvalidReason

__all__ = [
    'SpineVectorError',
    'InsufficientPointsError',
    'InsufficientRegionCoverageError',
    'UnrecognizedLevelError',
    'DegenerateSplineError',
    'DegenerateInputError',
]


class SpineVectorError(Exception):
    """Base class for recoverable pipeline failures."""

    reason: Optional[InvalidReason] = None


class InsufficientPointsError(SpineVectorError):
    """Fewer than two points were supplied to curve fitting."""

    reason = InvalidReason.INSUFFICIENT_POINTS

    def __init__(self, n_points: int, required: int = 2):
        self.n_points = n_points
        self.required = required
        super().__init__(f"At least {required} points are required, got {n_points}")


class InsufficientRegionCoverageError(SpineVectorError):
    """Some region has fewer valid points than required."""

    reason = InvalidReason.INSUFFICIENT_REGION_COVERAGE

    def __init__(self, region_counts: dict[str, int], required: int):
        self.region_counts = dict(region_counts)
        self.required = required
        short = [f"{name}={count}" for name, count in self.region_counts.items() if count < required]
        super().__init__(
            f"Each region needs at least {required} labeled points; short regions: {', '.join(short)}"
        )


class UnrecognizedLevelError(SpineVectorError):
    """A label is not present in the level table."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Unrecognized spinal level: {label!r}")


class DegenerateSplineError(SpineVectorError):
    """The y values do not define a spline (duplicates, non-finite values)."""

    reason = InvalidReason.DEGENERATE_SPLINE


DegenerateInputError = DegenerateSplineError
