"""Pydantic configuration schemas for the spinevec pipeline.

This module provides strictly typed configuration models. All configuration
validation, coercion, and normalization happens at schema validation time
via Pydantic.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
CLIConfig : class
    Command-line operational overrides
"""

from spinevec.schemas.resolve import resolve_config
from spinevec.schemas.internal import InternalConfig
from spinevec.schemas.param import ParamConfig
from spinevec.schemas.user import UserConfig
from spinevec.schemas.cli import CLIConfig

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'CLIConfig',
]
