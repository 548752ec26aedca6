"""Weather scaler - exposes a city's temperature as an external scaling metric."""
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

import requests

from weather_config import ScalerConfig
from weather_metric_types import (
    ExternalMetricSource,
    MetricIdentifier,
    MetricSample,
    MetricSpec,
    MetricTarget,
    MetricTargetType,
)
from weather_scaler_base import ConfigurationError, Scaler, ScalerError
from weather_data import decode_weather
from weather_fetcher import WeatherFetcher, default_http_client
from weather_metadata import WeatherMetadata, parse_weather_metadata

METRIC_NAME = "weather"


class WeatherScaler(Scaler):
    """
    Scaler that turns the provider's temperature into a metric value.

    Every poll fetches and decodes a fresh reading; nothing is cached between
    calls. The only state is the immutable metadata, the fetcher (wrapping a
    shared HTTP session) and the logger.
    """

    def __init__(
        self,
        metadata: WeatherMetadata,
        fetcher: WeatherFetcher,
        logger: Optional[logging.Logger] = None,
    ):
        self.metadata = metadata
        self.fetcher = fetcher
        self.logger = logger or logging.getLogger(__name__)

    def fetch_temperature(self, logger: Optional[logging.Logger] = None) -> int:
        """
        Fetch the current reading and return the preferred temperature.

        The value is truncated toward zero, so -3.7 becomes -3.

        Raises:
            TransportError: If the provider could not be reached or read
        """
        log = logger or self.logger
        reading = decode_weather(self.fetcher.fetch())
        temperature = self.metadata.preference.select(reading)
        log.debug(
            f"Weather for {self.metadata.city_name}: "
            f"{self.metadata.preference.value}={temperature}"
        )
        return int(temperature)

    def is_active(self, logger: Optional[logging.Logger] = None) -> bool:
        log = logger or self.logger
        try:
            temperature = self.fetch_temperature(log)
        except ScalerError as e:
            log.error(f"is_active failed for {self.metadata.city_name}: {e}")
            raise
        return temperature > self.metadata.threshold_value

    def build_metric_spec(self) -> MetricSpec:
        """Return the external metric spec; no I/O."""
        return MetricSpec(
            external=ExternalMetricSource(
                metric=MetricIdentifier(name=METRIC_NAME),
                target=MetricTarget(
                    type=MetricTargetType.AVERAGE_VALUE,
                    average_value=self.metadata.threshold_value,
                ),
            )
        )

    def get_metric_spec_for_scaling(self) -> List[MetricSpec]:
        return [self.build_metric_spec()]

    def get_metrics(
        self,
        metric_name: str,
        label_selector: Optional[Dict[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> List[MetricSample]:
        """
        Return a single sample holding the current temperature.

        Raises:
            TransportError: If the provider could not be reached or read;
                the host gets no samples for this poll
        """
        log = logger or self.logger
        try:
            temperature = self.fetch_temperature(log)
        except ScalerError as e:
            log.error(f"Unable to get weather for {self.metadata.city_name}: {e}")
            raise

        sample = MetricSample(
            metric_name=metric_name,
            value=temperature,
            timestamp=datetime.now(timezone.utc),
            metric_labels=dict(label_selector or {}),
        )
        return [sample]

    def close(self) -> None:
        # The HTTP session is shared between scalers, so it stays open.
        return None


def new_weather_scaler(
    config: ScalerConfig,
    http_client: Optional[requests.Session] = None,
    logger: Optional[logging.Logger] = None,
) -> WeatherScaler:
    """
    Validate the trigger metadata and build a WeatherScaler.

    Args:
        config: Trigger metadata and the global HTTP timeout
        http_client: Session to share; defaults to the process-wide one
        logger: Logger used by every operation of the scaler

    Raises:
        ConfigurationError: If the metadata is invalid; no scaler is created
    """
    log = logger or logging.getLogger(__name__)
    try:
        metadata = parse_weather_metadata(config)
    except ConfigurationError as e:
        log.error(f"Error parsing weather metadata: {e}")
        raise type(e)(f"Error parsing weather metadata: {e}") from e

    fetcher = WeatherFetcher(
        session=http_client or default_http_client(),
        url=metadata.host,
        timeout=config.global_http_timeout,
    )
    log.info(
        f"Weather scaler ready (city={metadata.city_name} "
        f"preference={metadata.preference.value} "
        f"threshold={metadata.threshold_value} timeout={config.global_http_timeout}s)"
    )
    return WeatherScaler(metadata, fetcher, log)
