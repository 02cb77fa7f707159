"""CLIConfig: overrides taken from command-line flags.

Only the per-run knobs are exposed: body weight and log level.
"""

from typing import Literal, Optional
from pydantic import Field

from spinevec.schemas.base import SpinevecBaseModel


class CLIConfig(SpinevecBaseModel):
    """Top layer of config resolution.

    Usage
    -----
        cli_cfg = CLIConfig(weight_kg=82.0, log_level="DEBUG")
    """

    weight_kg: Optional[float] = Field(None, gt=0)
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None

    def to_internal_overrides(self) -> dict:
        """Nested override dict for the flags that were given."""
        overrides = {}

        if self.weight_kg is not None:
            overrides["physics"] = {"default_weight_kg": self.weight_kg}

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
