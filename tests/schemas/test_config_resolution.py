"""Test config resolution and validation with Pydantic."""

import pytest
from pydantic import ValidationError
from scipy import constants

from spinevec.schemas import ParamConfig, UserConfig, CLIConfig, InternalConfig
from spinevec.schemas.resolve import resolve_config, deep_merge

pytestmark = pytest.mark.unit


class TestConfigResolution:
    """Test resolve_config() precedence and merging."""

    def test_resolve_config_all_defaults(self):
        """Resolving with no user/CLI overrides uses all ParamConfig defaults."""
        config = resolve_config(ParamConfig(), None, None)

        assert isinstance(config, InternalConfig)
        assert config.physics.gravity == constants.g
        assert config.physics.default_weight_kg == 60.0
        assert config.levels.min_points_per_region == 2
        assert config.levels.normalize_labels is True
        assert config.spline.bc_type == "natural"
        assert config.spline.resample_points == 1000
        assert config.vectors.normal_sign_flip is False
        assert config.output.row_decimals == 1
        assert config.output.summary_decimals == 0
        assert config.processor.cache_size == 32
        assert config.logging.level == "INFO"

    def test_no_arguments_means_defaults(self):
        assert resolve_config() == resolve_config(ParamConfig(), None, None)

    def test_user_config_overrides_param_config(self):
        user = UserConfig(weight_kg=72)
        config = resolve_config(ParamConfig(), user, None)

        assert config.physics.default_weight_kg == 72.0
        # Untouched sibling keeps its default
        assert config.physics.gravity == constants.g

    def test_nested_user_overrides(self):
        user = UserConfig(output={"row_decimals": 2}, spline={"resample_points": 200})
        config = resolve_config(ParamConfig(), user, None)

        assert config.output.row_decimals == 2
        assert config.output.summary_decimals == 0
        assert config.spline.resample_points == 200

    def test_nested_section_beats_flat_alias(self):
        user = UserConfig(weight_kg=70, physics={"default_weight_kg": 75})
        config = resolve_config(ParamConfig(), user, None)

        assert config.physics.default_weight_kg == 75.0

    def test_dict_inputs(self):
        config = resolve_config({"processor": {"cache_size": 4}}, {"WEIGHT_KG": 90}, {"log_level": "DEBUG"})

        assert config.processor.cache_size == 4
        assert config.physics.default_weight_kg == 90.0
        assert config.logging.level == "DEBUG"

    def test_user_processor_section(self):
        config = resolve_config(None, {"processor": {"cache_size": 0}}, None)
        assert config.processor.cache_size == 0

    def test_user_cache_size_alias(self):
        config = resolve_config(None, {"CACHE_SIZE": 5, "POINTS": []}, None)
        assert config.processor.cache_size == 5

    def test_user_negative_cache_size_rejected(self):
        with pytest.raises(ValidationError):
            resolve_config(None, {"CACHE_SIZE": -1}, None)

    def test_empty_user_config_uses_all_param_defaults(self):
        assert resolve_config(ParamConfig(), UserConfig(), None) == resolve_config(ParamConfig(), None, None)


class TestValidation:
    """Invalid values fail at resolution time."""

    @pytest.mark.parametrize("weight", [0, -10])
    def test_non_positive_weight(self, weight):
        with pytest.raises(ValidationError):
            resolve_config(ParamConfig(), UserConfig(weight_kg=weight), None)

    def test_unsupported_boundary_condition(self):
        with pytest.raises(ValidationError):
            resolve_config(ParamConfig(), UserConfig(spline={"bc_type": "clamped"}), None)

    def test_too_few_resample_points(self):
        with pytest.raises(ValidationError):
            resolve_config(ParamConfig(), UserConfig(resample_points=1), None)

    def test_negative_cache_size(self):
        with pytest.raises(ValidationError):
            ParamConfig.model_validate({"processor": {"cache_size": -1}})

    def test_param_config_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            ParamConfig.model_validate({"physics": {"mass": 1.0}})

    def test_internal_config_is_frozen(self, internal_config):
        with pytest.raises(ValidationError):
            internal_config.physics = None


def test_deep_merge():
    base = {"a": 1, "b": {"c": 2, "d": 3}}
    merged = deep_merge(base, {"b": {"d": 4, "e": 5}}, {"f": 6})

    assert merged == {"a": 1, "b": {"c": 2, "d": 4, "e": 5}, "f": 6}
    # Inputs are not mutated
    assert base == {"a": 1, "b": {"c": 2, "d": 3}}
