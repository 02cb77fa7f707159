"""InternalConfig: the configuration stage classes receive.

Produced only by resolve_config(). Every field is required and already
validated, so stage code reads attributes directly and never supplies its
own fallback values.
"""

from typing import Literal
from pydantic import Field, ConfigDict

from spinevec.schemas.base import SpinevecBaseModel


# =============================================================================
# Runtime sections
# =============================================================================

class InternalPhysicsConfig(SpinevecBaseModel):
    """Runtime gravitational load parameters."""
    gravity: float = Field(gt=0)
    default_weight_kg: float = Field(gt=0)


class InternalLevelsConfig(SpinevecBaseModel):
    """Runtime level labelling rules."""
    min_points_per_region: int = Field(ge=1)
    normalize_labels: bool


class InternalSplineConfig(SpinevecBaseModel):
    """Runtime curve fitting configuration."""
    bc_type: Literal["natural"]
    resample_points: int = Field(ge=2)


class InternalVectorsConfig(SpinevecBaseModel):
    """Runtime force vector configuration."""
    normal_sign_flip: bool


class InternalOutputConfig(SpinevecBaseModel):
    """Runtime rounding configuration."""
    row_decimals: int = Field(ge=0, le=6)
    summary_decimals: int = Field(ge=0, le=6)


class InternalProcessorConfig(SpinevecBaseModel):
    """Runtime memo cache size."""
    cache_size: int = Field(ge=0)


class InternalLoggingConfig(SpinevecBaseModel):
    """Runtime log level."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(SpinevecBaseModel):
    """Frozen runtime configuration.

    Stage classes take it in their constructor and copy out what they use:

        class SpineSplineFitter:
            def __init__(self, config: "InternalConfig"):
                self.bc_type = config.spline.bc_type
                self.resample_points = config.spline.resample_points

    No stage calls ``.get()`` on it or substitutes defaults.
    """

    physics: InternalPhysicsConfig
    levels: InternalLevelsConfig
    spline: InternalSplineConfig
    vectors: InternalVectorsConfig
    output: InternalOutputConfig
    processor: InternalProcessorConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,
    )
