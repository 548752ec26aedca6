"""Tests for configuration loading."""
import logging
import pytest
from unittest.mock import patch
from weather_config import DEFAULT_HTTP_TIMEOUT, METADATA_ENV_VARS, ScalerConfig, load_scaler_config, setup_logging
from weather_scaler_base import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove scaler variables so the host environment does not leak in."""
    for env_var in list(METADATA_ENV_VARS.values()) + ["WEATHER_HTTP_TIMEOUT"]:
        # setenv first so teardown also drops values written by load_dotenv
        monkeypatch.setenv(env_var, "")
        monkeypatch.delenv(env_var)


@pytest.fixture
def empty_env_file(tmp_path):
    path = tmp_path / ".env"
    path.write_text("")
    return str(path)


def test_load_from_environment(monkeypatch, empty_env_file):
    """Test environment variables map onto trigger metadata keys."""
    monkeypatch.setenv("WEATHER_CITY_NAME", "Berlin")
    monkeypatch.setenv("WEATHER_API_KEY", "k1")
    monkeypatch.setenv("WEATHER_HOST", "http://x/%s/%s")
    monkeypatch.setenv("WEATHER_PREFERENCE", "Temp")
    monkeypatch.setenv("WEATHER_THRESHOLD_VALUE", "12")
    monkeypatch.setenv("WEATHER_HTTP_TIMEOUT", "1.5")

    config = load_scaler_config(empty_env_file)

    assert config.trigger_metadata == {
        "thresholdValue": "12",
        "cityName": "Berlin",
        "apiKey": "k1",
        "host": "http://x/%s/%s",
        "preference": "Temp",
    }
    assert config.global_http_timeout == 1.5


def test_load_from_env_file(tmp_path):
    """Test values are read from a .env file."""
    env_file = tmp_path / ".env"
    env_file.write_text("WEATHER_CITY_NAME=Oslo\nWEATHER_API_KEY=secret\n")

    config = load_scaler_config(str(env_file))

    assert config.trigger_metadata == {"cityName": "Oslo", "apiKey": "secret"}
    assert config.global_http_timeout == DEFAULT_HTTP_TIMEOUT


def test_unset_variables_omitted(empty_env_file):
    """Test unset variables do not appear as keys."""
    config = load_scaler_config(empty_env_file)

    assert config.trigger_metadata == {}


@pytest.mark.parametrize("value", ["fast", "0", "-2"])
def test_invalid_timeout(monkeypatch, empty_env_file, value):
    """Test a bad timeout is a configuration error."""
    monkeypatch.setenv("WEATHER_HTTP_TIMEOUT", value)

    with pytest.raises(ConfigurationError):
        load_scaler_config(empty_env_file)


def test_scaler_config_defaults():
    """Test default config values."""
    config = ScalerConfig()

    assert config.trigger_metadata == {}
    assert config.global_http_timeout == 3.0


def test_setup_logging_with_file(tmp_path):
    """Test logging setup adds a file handler when asked."""
    log_file = tmp_path / "scaler.log"

    with patch("weather_config.logging.basicConfig") as basic_config:
        setup_logging(verbose=True, log_file=str(log_file))

    kwargs = basic_config.call_args.kwargs
    assert kwargs["level"] == logging.DEBUG
    assert [type(h) for h in kwargs["handlers"]] == [logging.StreamHandler, logging.FileHandler]
    for handler in kwargs["handlers"]:
        handler.close()


def test_setup_logging_default_level():
    """Test INFO level and stdout only by default."""
    with patch("weather_config.logging.basicConfig") as basic_config:
        setup_logging()

    kwargs = basic_config.call_args.kwargs
    assert kwargs["level"] == logging.INFO
    assert len(kwargs["handlers"]) == 1
