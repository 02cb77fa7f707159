"""Test CLIConfig validation."""

import pytest
from pydantic import ValidationError

from spinevec.schemas import CLIConfig

pytestmark = pytest.mark.unit


def test_empty_cli_config():
    cli = CLIConfig()
    assert cli.weight_kg is None
    assert cli.log_level is None
    assert cli.to_internal_overrides() == {}


def test_weight_override():
    cli = CLIConfig(weight_kg=75)
    assert cli.to_internal_overrides() == {"physics": {"default_weight_kg": 75.0}}


@pytest.mark.parametrize("weight", [0, -1.5])
def test_weight_must_be_positive(weight):
    with pytest.raises(ValidationError):
        CLIConfig(weight_kg=weight)


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        CLIConfig(log_level="VERBOSE")


def test_unknown_option_rejected():
    with pytest.raises(ValidationError):
        CLIConfig(gravity=9.8)
