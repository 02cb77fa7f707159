"""Shared pydantic base for all spinevec configuration layers."""

from pydantic import BaseModel, ConfigDict


class SpinevecBaseModel(BaseModel):
    """Strict base model: unknown keys are errors, assignments are validated,
    enums are stored as their values and strings are stripped."""

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
    )
