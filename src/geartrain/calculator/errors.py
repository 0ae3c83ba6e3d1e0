"""
Gear Train Calculator - Errors

All calculation failures derive from GearTrainError (a ValueError), so
callers that only care about bad input can catch ValueError.

Each error carries a stable ``code`` and, when raised from a chain, the
0-based ``stage_index`` of the stage that failed.
"""

from typing import Optional


class GearTrainError(ValueError):
    """Base class for gear train calculation errors."""

    code = "GEARTRAIN_ERROR"

    def __init__(self, message: str, stage_index: Optional[int] = None):
        self.detail = message
        self.stage_index = stage_index
        if stage_index is None:
            super().__init__(message)
        else:
            super().__init__(f"Stage {stage_index + 1}: {message}")

    def at_stage(self, stage_index: int) -> "GearTrainError":
        """Return a copy of this error attributed to the given stage."""
        return type(self)(self.detail, stage_index=stage_index)


class InvalidGeometry(GearTrainError):
    """Tooth count, planet count or inertia is non-positive or not a number."""
    code = "INVALID_GEOMETRY"


class InvalidTopology(GearTrainError):
    """Sun/carrier/ring roles are not a permutation of input/output/fixed."""
    code = "INVALID_TOPOLOGY"


class EmptyChain(GearTrainError):
    """No stages were supplied."""
    code = "EMPTY_CHAIN"


class LengthMismatch(GearTrainError):
    """Per-stage inputs do not line up with the stage list."""
    code = "LENGTH_MISMATCH"


class DegenerateRatio(GearTrainError):
    """A speed or gear ratio is not finite."""
    code = "DEGENERATE_RATIO"
