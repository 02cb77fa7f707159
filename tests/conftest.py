"""Shared fixtures: resolved configs and the reference landmark set.

Stage tests build configs through these fixtures rather than raw dicts.
"""

import pytest
import numpy as np

from spinevec.schemas import ParamConfig, UserConfig, resolve_config
from spinevec.spine.models import SpinalPoint


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture
def param_config():
    """ParamConfig with nothing overridden."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """InternalConfig resolved from defaults only.

    Examples
    --------
    >>> def test_fitter_init(internal_config):
    ...     fitter = SpineSplineFitter(internal_config)
    ...     assert fitter.bc_type == "natural"
    """
    return resolve_config(param_config, None, None)


@pytest.fixture
def make_config(param_config):
    """Build an InternalConfig from UserConfig keyword overrides.

    Examples
    --------
    >>> def test_sign_flip(make_config):
    ...     config = make_config(normal_sign_flip=True)
    ...     assert config.vectors.normal_sign_flip is True
    """
    def _make(**user_overrides):
        if user_overrides:
            user = UserConfig(**user_overrides)
            return resolve_config(param_config, user, None)
        else:
            return resolve_config(param_config, None, None)

    return _make


# =============================================================================
# Reference Landmarks
# =============================================================================

@pytest.fixture
def golden_points():
    """Two landmarks per region, listed top to bottom."""
    return [
        SpinalPoint(x=100, y=50, label="C5"),
        SpinalPoint(x=95, y=80, label="C6"),
        SpinalPoint(x=90, y=150, label="T6"),
        SpinalPoint(x=92, y=180, label="T7"),
        SpinalPoint(x=88, y=260, label="L2"),
        SpinalPoint(x=85, y=290, label="L3"),
    ]


@pytest.fixture
def golden_angles():
    """Tangent angles (degrees) of the natural spline through golden_points."""
    return np.array([
        -9.8461759727,
        -8.6920692441,
        2.4747897738,
        2.8736738348,
        -5.7124573049,
        -5.7096610492,
    ])


@pytest.fixture
def golden_rows():
    """Expected result table for golden_points at 60 kg."""
    return [
        [-9.8, -15.6, 90.0, -0.2, "C5"],
        [-8.7, -16.9, 110.3, -0.2, "C6"],
        [2.5, 11.0, 253.4, 0.0, "T6"],
        [2.9, 13.7, 273.6, 0.1, "T7"],
        [-5.7, -45.4, 454.2, -0.1, "L2"],
        [-5.7, -49.5, 494.6, -0.1, "L3"],
        [171, 7, 40, 0.2, "RSV-C"],
        [3, 2, 41, -0.0, "RSV-T"],
        [174, 8, 81, 0.1, "RSV-L"],
        [171, 13, 161, 0.2, "GSV"],
    ]
