"""UserConfig: the settings a user writes in their CONFIG file.

Common settings have flat uppercase aliases (WEIGHT_KG, GRAVITY, ...); any
section of ParamConfig can also be given as a nested dict. Unknown keys such
as POINTS are ignored so one CONFIG dict can hold both settings and data.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator

from spinevec.schemas.base import SpinevecBaseModel


class UserPhysicsConfig(SpinevecBaseModel):
    """User-facing physics config."""
    gravity: Optional[float] = None
    default_weight_kg: Optional[float] = None

    @field_validator("gravity", "default_weight_kg", mode="before")
    @classmethod
    def coerce_numeric(cls, v):
        """Accept int or float."""
        if v is not None:
            return float(v)
        return v


class UserLevelsConfig(SpinevecBaseModel):
    """User-facing level labelling config."""
    min_points_per_region: Optional[int] = None
    normalize_labels: Optional[bool] = None


class UserSplineConfig(SpinevecBaseModel):
    """User-facing spline config."""
    bc_type: Optional[str] = None
    resample_points: Optional[int] = None

    @field_validator("bc_type", mode="before")
    @classmethod
    def normalize_bc_type(cls, v):
        """Normalize boundary condition names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class UserVectorsConfig(SpinevecBaseModel):
    """User-facing vector config."""
    normal_sign_flip: Optional[bool] = None


class UserOutputConfig(SpinevecBaseModel):
    """User-facing output config."""
    row_decimals: Optional[int] = None
    summary_decimals: Optional[int] = None


class UserProcessorConfig(SpinevecBaseModel):
    """User-facing processor config."""
    cache_size: Optional[int] = None


class UserConfig(SpinevecBaseModel):
    """Sparse user overrides on top of ParamConfig.

    Only fields the user sets are carried into resolution; a nested section
    wins over the matching flat alias.

    Usage
    -----
        user_cfg = UserConfig.model_validate({"WEIGHT_KG": 72.5, "POINTS": [...]})
        config = resolve_config(None, user_cfg)
    """

    # Flat aliases
    weight_kg: Optional[float] = Field(None, alias="WEIGHT_KG")
    gravity: Optional[float] = Field(None, alias="GRAVITY")
    min_points_per_region: Optional[int] = Field(None, alias="MIN_POINTS_PER_REGION")
    resample_points: Optional[int] = Field(None, alias="RESAMPLE_POINTS")
    normal_sign_flip: Optional[bool] = Field(None, alias="NORMAL_SIGN_FLIP")
    cache_size: Optional[int] = Field(None, alias="CACHE_SIZE")
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(
        None, alias="LOG_LEVEL"
    )

    # Nested sections
    physics: Optional[UserPhysicsConfig] = None
    levels: Optional[UserLevelsConfig] = None
    spline: Optional[UserSplineConfig] = None
    vectors: Optional[UserVectorsConfig] = None
    output: Optional[UserOutputConfig] = None
    processor: Optional[UserProcessorConfig] = None

    model_config = SpinevecBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (POINTS and other unknown keys are ignored)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("weight_kg", "gravity", mode="before")
    @classmethod
    def coerce_numeric_fields(cls, v):
        """Ints are stored as floats."""
        if v is not None:
            return float(v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    def to_internal_overrides(self) -> dict:
        """Nested override dict containing only the values the user set."""
        overrides = {}

        # Physics section
        physics = {}
        if self.weight_kg is not None:
            physics["default_weight_kg"] = self.weight_kg
        if self.gravity is not None:
            physics["gravity"] = self.gravity
        if self.physics is not None:
            physics.update(self.physics.model_dump(exclude_none=True))
        if physics:
            overrides["physics"] = physics

        # Levels section
        levels = {}
        if self.min_points_per_region is not None:
            levels["min_points_per_region"] = self.min_points_per_region
        if self.levels is not None:
            levels.update(self.levels.model_dump(exclude_none=True))
        if levels:
            overrides["levels"] = levels

        # Spline section
        spline = {}
        if self.resample_points is not None:
            spline["resample_points"] = self.resample_points
        if self.spline is not None:
            spline.update(self.spline.model_dump(exclude_none=True))
        if spline:
            overrides["spline"] = spline

        # Vectors section
        vectors = {}
        if self.normal_sign_flip is not None:
            vectors["normal_sign_flip"] = self.normal_sign_flip
        if self.vectors is not None:
            vectors.update(self.vectors.model_dump(exclude_none=True))
        if vectors:
            overrides["vectors"] = vectors

        if self.output is not None:
            output = self.output.model_dump(exclude_none=True)
            if output:
                overrides["output"] = output

        # Processor section
        processor = {}
        if self.cache_size is not None:
            processor["cache_size"] = self.cache_size
        if self.processor is not None:
            processor.update(self.processor.model_dump(exclude_none=True))
        if processor:
            overrides["processor"] = processor

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
