"""Scaler abstraction - the contract a host autoscaling controller polls."""
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from weather_metric_types import MetricSample, MetricSpec


class ScalerError(Exception):
    """Base exception for scaler failures."""
    pass


class ConfigurationError(ScalerError):
    """Trigger metadata is missing a required field or holds an invalid one."""
    pass


class InvalidThreshold(ConfigurationError):
    pass


class MissingCityName(ConfigurationError):
    pass


class MissingAPIKey(ConfigurationError):
    pass


class MissingHost(ConfigurationError):
    pass


class InvalidHostURL(ConfigurationError):
    pass


class MissingPreference(ConfigurationError):
    pass


class InvalidPreference(ConfigurationError):
    pass


class TransportError(ScalerError):
    """Exception raised when the weather endpoint cannot be read."""
    pass


class FetchFailed(TransportError):
    """The HTTP request itself failed (connection, DNS, timeout)."""
    pass


class ReadFailed(TransportError):
    """The response arrived but its body could not be read."""
    pass


class DecodeError(ScalerError):
    """The weather payload is not the expected JSON shape."""
    pass


class Scaler(ABC):
    """Abstract base class for metric providers polled by the host."""

    @abstractmethod
    def is_active(self, logger: Optional[logging.Logger] = None) -> bool:
        """
        Decide whether the metric currently asks for scaling.

        Raises:
            ScalerError: If the metric could not be determined
        """
        pass

    @abstractmethod
    def get_metric_spec_for_scaling(self) -> List[MetricSpec]:
        """Return the metric specifications the host should scale on."""
        pass

    @abstractmethod
    def get_metrics(
        self,
        metric_name: str,
        label_selector: Optional[Dict[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> List[MetricSample]:
        """
        Fetch the current value of the metric.

        Raises:
            ScalerError: If the metric could not be determined
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release any resources held by the scaler."""
        pass
