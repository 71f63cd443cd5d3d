import pytest

from spinwheel.engine.errors import InvalidConfiguration
from spinwheel.utils import config
from spinwheel.utils.config import (
    FRICTION_SLIDER_MAX, FRICTION_SLIDER_MIN, PhysicsConfig,
    friction_from_slider, slider_from_friction,
)


def test_defaults_are_valid():
    cfg = PhysicsConfig()
    assert cfg.validate() is cfg
    assert cfg.friction == 0.985
    assert cfg.min_speed == 0.002
    assert (cfg.v_min, cfg.v_range) == (0.5, 0.5)


def test_from_dict_overrides_and_ignores_unknown_keys():
    cfg = PhysicsConfig.from_dict({"friction": 0.96, "gravity": 9.8})
    assert cfg.friction == 0.96
    assert cfg.min_speed == 0.002
    assert not hasattr(cfg, "gravity")


def test_from_dict_tolerates_garbage():
    assert PhysicsConfig.from_dict(None) == PhysicsConfig()
    assert PhysicsConfig.from_dict([1, 2]) == PhysicsConfig()


def test_string_values_fail_validation():
    cfg = PhysicsConfig.from_dict({"friction": "0.9"})
    with pytest.raises(InvalidConfiguration):
        cfg.validate()


def test_bool_is_not_a_number():
    with pytest.raises(InvalidConfiguration):
        PhysicsConfig(min_speed=True).validate()


def test_invalid_configuration_is_a_value_error():
    with pytest.raises(ValueError):
        PhysicsConfig(friction=2).validate()


def test_slider_ends():
    assert friction_from_slider(0) == pytest.approx(FRICTION_SLIDER_MIN)
    assert friction_from_slider(100) == pytest.approx(FRICTION_SLIDER_MAX)


def test_slider_mapping_inverts():
    for value in (0, 17, 50, 73, 100):
        assert slider_from_friction(friction_from_slider(value)) == value


def test_slider_clamps_out_of_range_friction():
    assert slider_from_friction(0.5) == 0
    assert slider_from_friction(0.9999) == 100


def test_data_file_env_override(monkeypatch, tmp_path):
    target = str(tmp_path / "wheels.json")
    monkeypatch.setenv("SPINWHEEL_DATA_FILE", target)
    assert config.data_file_path() == target


def test_data_file_default_name(monkeypatch):
    monkeypatch.delenv("SPINWHEEL_DATA_FILE", raising=False)
    assert config.data_file_path().endswith("data.json")
