import pytest

from retris.config import GameConfig
from retris.errors import ConfigurationError


def test_defaults_are_valid():
    config = GameConfig()
    assert config.validate() is config
    assert (config.width, config.height) == (10, 20)


@pytest.mark.parametrize(
    "overrides",
    [
        {"width": 3},
        {"height": 0},
        {"lines_per_level": 0},
        {"base_gravity_ms": 0},
        {"min_gravity_ms": -1},
        {"gravity_decay": 1.5},
        {"randomizer": "nes"},
    ],
)
def test_invalid_settings_raise(overrides):
    with pytest.raises(ConfigurationError):
        GameConfig(**overrides).validate()


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        GameConfig(width=1).validate()
