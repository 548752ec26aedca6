"""Trigger metadata parsing for the weather scaler."""
import logging
import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlsplit

import requests

from weather_config import ScalerConfig
from weather_scaler_base import (
    InvalidHostURL,
    InvalidPreference,
    InvalidThreshold,
    MissingAPIKey,
    MissingCityName,
    MissingHost,
    MissingPreference,
)
from weather_data import WeatherReading

logger = logging.getLogger(__name__)

THRESHOLD_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class Preference(Enum):
    """Which temperature of a reading drives the metric."""
    TEMP_MIN = "Temp_min"
    TEMP_MAX = "Temp_max"
    TEMP = "Temp"

    def select(self, reading: WeatherReading) -> float:
        if self is Preference.TEMP_MIN:
            return reading.temp_min
        if self is Preference.TEMP_MAX:
            return reading.temp_max
        return reading.temp


@dataclass(frozen=True)
class WeatherMetadata:
    """Validated trigger configuration. Built once per scaler, never mutated."""
    threshold_value: int
    city_name: str
    api_key: str
    host: str  # resolved URL, contains the API key
    preference: Preference


def resolve_host(template: str, city_name: str, api_key: str) -> str:
    """
    Fill the two %s slots of a host template and check the result is a usable URL.

    Raises:
        InvalidHostURL: If the template cannot be filled or the URL is not absolute http(s)
    """
    try:
        url = template % (city_name, api_key)
    except (TypeError, ValueError) as e:
        raise InvalidHostURL(f"Invalid URL template {template!r}: {e}") from e

    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise InvalidHostURL(f"Invalid URL: not an absolute http(s) URL: {template!r}")

    # requests rejects hosts it could never connect to (empty labels, bad IDNA)
    try:
        requests.PreparedRequest().prepare_url(url, None)
    except requests.exceptions.RequestException as e:
        raise InvalidHostURL(f"Invalid URL: {e}") from e
    return url


def parse_threshold(raw: str) -> int:
    """
    Parse a threshold as a plain ASCII decimal integer in the int64 range.

    Whitespace, underscores and non-ASCII digits are rejected even though
    int() would accept them.

    Raises:
        InvalidThreshold: If the value is not such an integer
    """
    if not THRESHOLD_PATTERN.fullmatch(raw):
        raise InvalidThreshold(f"Error parsing threshold value: invalid integer {raw!r}")
    try:
        value = int(raw)
    except ValueError as e:
        # more digits than int() will convert
        raise InvalidThreshold(f"Error parsing threshold value: {e}") from e
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidThreshold(f"Error parsing threshold value: {raw!r} out of range")
    return value


def parse_weather_metadata(config: ScalerConfig) -> WeatherMetadata:
    """
    Validate raw trigger metadata into a WeatherMetadata.

    Checks run in a fixed order and each failure has its own error class.

    Args:
        config: Trigger metadata plus host-provided settings

    Returns:
        WeatherMetadata: Immutable validated configuration

    Raises:
        ConfigurationError: One of its subclasses, naming the first bad field
    """
    meta = config.trigger_metadata

    threshold_value = 0
    raw_threshold = meta.get("thresholdValue")
    if raw_threshold:
        threshold_value = parse_threshold(raw_threshold)

    city_name = meta.get("cityName")
    if not city_name:
        raise MissingCityName("No city name given")

    api_key = meta.get("apiKey")
    if not api_key:
        raise MissingAPIKey("No API key given")

    if "host" not in meta:
        raise MissingHost("No host URI given")
    host = resolve_host(meta["host"], city_name, api_key)

    raw_preference = meta.get("preference")
    if not raw_preference:
        raise MissingPreference("No preference given")
    try:
        preference = Preference(raw_preference)
    except ValueError as e:
        choices = ", ".join(p.value for p in Preference)
        raise InvalidPreference(
            f"Unknown preference {raw_preference!r} (expected one of: {choices})"
        ) from e

    logger.debug(
        f"Weather metadata parsed: city={city_name} "
        f"threshold={threshold_value} preference={preference.value}"
    )
    return WeatherMetadata(
        threshold_value=threshold_value,
        city_name=city_name,
        api_key=api_key,
        host=host,
        preference=preference,
    )
