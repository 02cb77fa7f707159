"""Layered configuration resolution.

``resolve_config()`` is the only way runtime code obtains configuration.
Three layers are merged, later ones winning key by key:

    ParamConfig (expert defaults) < UserConfig (user file) < CLIConfig

and the merged tree is validated once into a frozen InternalConfig.
"""

from typing import Optional, Type, TypeVar, Union

from spinevec.schemas.base import SpinevecBaseModel
from spinevec.schemas.param import ParamConfig
from spinevec.schemas.user import UserConfig
from spinevec.schemas.cli import CLIConfig
from spinevec.schemas.internal import InternalConfig

ModelT = TypeVar("ModelT", bound=SpinevecBaseModel)


def deep_merge(base: dict, *overrides: dict) -> dict:
    """Recursively overlay ``overrides`` onto a copy of ``base``.

    Nested dicts are merged key by key; any other value replaces the one
    below it. None of the inputs is modified.

    Examples
    --------
    >>> deep_merge({"physics": {"gravity": 9.8, "default_weight_kg": 60}},
    ...            {"physics": {"default_weight_kg": 72}})
    {'physics': {'gravity': 9.8, 'default_weight_kg': 72}}
    """
    merged = dict(base)
    for layer in overrides:
        for key, value in layer.items():
            below = merged.get(key)
            if isinstance(below, dict) and isinstance(value, dict):
                merged[key] = deep_merge(below, value)
            else:
                merged[key] = value
    return merged


def _as_model(cfg: Union[dict, ModelT, None], model: Type[ModelT]) -> ModelT:
    """Validate a raw dict (or nothing) into ``model``; pass instances through."""
    if isinstance(cfg, model):
        return cfg
    return model.model_validate(cfg or {})


def resolve_config(
    param_cfg: Union[dict, ParamConfig, None] = None,
    user_cfg: Optional[Union[dict, UserConfig]] = None,
    cli_cfg: Optional[Union[dict, CLIConfig]] = None,
) -> InternalConfig:
    """Merge the three config layers into a validated InternalConfig.

    Parameters
    ----------
    param_cfg : dict or ParamConfig, optional
        Expert defaults. None means ``ParamConfig()``; a partial dict is
        completed from the defaults.
    user_cfg : dict or UserConfig, optional
        User file overrides (flat aliases or nested sections).
    cli_cfg : dict or CLIConfig, optional
        Command-line overrides.

    Returns
    -------
    InternalConfig
        Immutable runtime configuration.

    Raises
    ------
    pydantic.ValidationError
        If any layer, or the merged result, is invalid.

    Examples
    --------
    >>> from spinevec.schemas import resolve_config, UserConfig, CLIConfig
    >>> config = resolve_config(None, UserConfig(WEIGHT_KG=72), CLIConfig(log_level="DEBUG"))
    >>> config.physics.default_weight_kg, config.logging.level
    (72.0, 'DEBUG')
    """
    param = _as_model(param_cfg, ParamConfig)
    user = _as_model(user_cfg, UserConfig)
    cli = _as_model(cli_cfg, CLIConfig)

    merged = deep_merge(
        param.model_dump(),
        user.to_internal_overrides(),
        cli.to_internal_overrides(),
    )
    return InternalConfig.model_validate(merged)
