"""Scaler configuration loading and logging setup."""
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Dict, Optional

from dotenv import load_dotenv

from weather_scaler_base import ConfigurationError

DEFAULT_HTTP_TIMEOUT = 3.0

# trigger metadata key -> environment variable
METADATA_ENV_VARS = {
    "thresholdValue": "WEATHER_THRESHOLD_VALUE",
    "cityName": "WEATHER_CITY_NAME",
    "apiKey": "WEATHER_API_KEY",
    "host": "WEATHER_HOST",
    "preference": "WEATHER_PREFERENCE",
}


@dataclass(frozen=True)
class ScalerConfig:
    """Raw trigger metadata plus the settings the host supplies to every scaler."""
    trigger_metadata: Dict[str, str] = field(default_factory=dict)
    global_http_timeout: float = DEFAULT_HTTP_TIMEOUT  # seconds


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def load_scaler_config(env_file: Optional[str] = None) -> ScalerConfig:
    """
    Build a ScalerConfig from the environment (and a .env file, if present).

    Only variables that are set end up in the trigger metadata; validating
    them is left to the metadata parser.

    Raises:
        ConfigurationError: If WEATHER_HTTP_TIMEOUT is not a positive number
    """
    load_dotenv(env_file)

    trigger_metadata = {}
    for key, env_var in METADATA_ENV_VARS.items():
        value = os.getenv(env_var)
        if value is not None:
            trigger_metadata[key] = value

    raw_timeout = os.getenv("WEATHER_HTTP_TIMEOUT")
    timeout = DEFAULT_HTTP_TIMEOUT
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid WEATHER_HTTP_TIMEOUT: {exc}") from exc
        if timeout <= 0:
            raise ConfigurationError(f"WEATHER_HTTP_TIMEOUT must be positive, got {timeout}")

    logging.info(f"Configuration loaded: keys={sorted(trigger_metadata)} timeout={timeout}s")
    return ScalerConfig(trigger_metadata=trigger_metadata, global_http_timeout=timeout)
