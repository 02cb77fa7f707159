"""ParamConfig: expert defaults, the bottom layer of config resolution.

Every tunable has its default here and nowhere else.
"""

from typing import Literal
from pydantic import Field, field_validator
from scipy import constants

from spinevec.schemas.base import SpinevecBaseModel


# =============================================================================
# Sections
# =============================================================================

class PhysicsConfig(SpinevecBaseModel):
    """Gravitational load parameters."""
    gravity: float = Field(constants.g, gt=0, description="Gravitational acceleration in m/s^2")
    default_weight_kg: float = Field(60.0, gt=0, description="Body weight used when none is supplied")

    @field_validator("gravity", "default_weight_kg", mode="before")
    @classmethod
    def coerce_to_float(cls, v):
        """Allow int or float."""
        return float(v)


class LevelsConfig(SpinevecBaseModel):
    """Spinal level labelling rules."""
    min_points_per_region: int = Field(2, ge=1, description="Valid points required in each region")
    normalize_labels: bool = True


class SplineConfig(SpinevecBaseModel):
    """Curve fitting configuration."""
    bc_type: Literal["natural"] = "natural"
    resample_points: int = Field(1000, ge=2, description="Samples in the dense display curve")


class VectorsConfig(SpinevecBaseModel):
    """Force vector decomposition configuration."""
    # False keeps the normal vector identical for both tangent signs.
    normal_sign_flip: bool = False


class OutputConfig(SpinevecBaseModel):
    """Result table rounding."""
    row_decimals: int = Field(1, ge=0, le=6)
    summary_decimals: int = Field(0, ge=0, le=6)


class ProcessorConfig(SpinevecBaseModel):
    """Pipeline boundary settings."""
    cache_size: int = Field(32, ge=0, description="Memoized results kept per processor (0 disables)")


class LoggingConfig(SpinevecBaseModel):
    """Log level of the command-line runner."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(SpinevecBaseModel):
    """Defaults for every section.

    Stage code never sees this model; it is merged with the user and
    command-line layers by resolve_config() into an InternalConfig.
    """

    physics: PhysicsConfig = Field(default_factory=PhysicsConfig)
    levels: LevelsConfig = Field(default_factory=LevelsConfig)
    spline: SplineConfig = Field(default_factory=SplineConfig)
    vectors: VectorsConfig = Field(default_factory=VectorsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    processor: ProcessorConfig = Field(default_factory=ProcessorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
