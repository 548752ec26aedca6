"""Weather domain model and decoder for the provider's JSON payload."""
import json
import logging
import math
from dataclasses import dataclass

from weather_scaler_base import DecodeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeatherReading:
    """The temperature fields of one provider response, in provider units."""
    temp_min: float = 0.0
    temp_max: float = 0.0
    temp: float = 0.0


def _field(main: dict, name: str, strict: bool) -> float:
    value = main.get(name)
    # bool is an int subclass but never a temperature
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            number = float(value)
        except OverflowError:
            number = math.inf
        # json accepts NaN, Infinity and 1e400; none of them is a temperature
        if math.isfinite(number):
            return number
    if strict:
        raise DecodeError(f"Field 'main.{name}' is missing or not a finite number: {value!r}")
    if value is not None:
        logger.warning(f"Ignoring non-numeric or non-finite 'main.{name}': {value!r}")
    return 0.0


def decode_weather(blob: bytes, strict: bool = False) -> WeatherReading:
    """
    Decode a response of the form {"main": {"temp_min": .., "temp_max": .., "temp": ..}}.

    Unknown fields are ignored. By default decoding is best effort: anything
    that cannot be read yields 0.0 for the affected fields and a warning is
    logged. With strict=True a DecodeError is raised instead.

    Args:
        blob: Raw response body
        strict: Raise instead of falling back to zero values

    Returns:
        WeatherReading: Decoded temperatures

    Raises:
        DecodeError: Only in strict mode, if the payload is malformed
    """
    try:
        data = json.loads(blob)
    except (ValueError, TypeError) as e:
        if strict:
            raise DecodeError(f"Failed to parse weather payload: {e}") from e
        logger.warning(f"Failed to parse weather payload, using zero temperatures: {e}")
        return WeatherReading()

    main = data.get("main") if isinstance(data, dict) else None
    if not isinstance(main, dict):
        if strict:
            raise DecodeError("Weather payload missing 'main' object")
        logger.warning("Weather payload missing 'main' object, using zero temperatures")
        return WeatherReading()

    return WeatherReading(
        temp_min=_field(main, "temp_min", strict),
        temp_max=_field(main, "temp_max", strict),
        temp=_field(main, "temp", strict),
    )
