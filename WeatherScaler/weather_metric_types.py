"""External metric data structures exchanged with the autoscaling host."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict


EXTERNAL_METRIC_TYPE = "External"


class MetricTargetType(Enum):
    """Target type the host averages the metric against (autoscaling/v2 name)."""
    AVERAGE_VALUE = "AverageValue"


@dataclass(frozen=True)
class MetricIdentifier:
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name}


@dataclass(frozen=True)
class MetricTarget:
    """Target the host compares the metric against."""
    type: MetricTargetType
    average_value: int

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "averageValue": str(self.average_value)}


@dataclass(frozen=True)
class ExternalMetricSource:
    metric: MetricIdentifier
    target: MetricTarget

    def to_dict(self) -> Dict[str, Any]:
        return {"metric": self.metric.to_dict(), "target": self.target.to_dict()}


@dataclass(frozen=True)
class MetricSpec:
    """One metric the host should scale on."""
    external: ExternalMetricSource
    type: str = EXTERNAL_METRIC_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "external": self.external.to_dict()}


@dataclass(frozen=True)
class MetricSample:
    """
    A single point-in-time metric value handed to the host.

    Attributes:
        metric_name: Name the host asked for
        value: Metric value (integer quantity)
        timestamp: When the value was taken (UTC)
        metric_labels: Label selector the host passed in, if any
    """
    metric_name: str
    value: int
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    metric_labels: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "metricName": self.metric_name,
            "value": str(self.value),
            "timestamp": self.timestamp.isoformat(),
        }
        if self.metric_labels:
            result["metricLabels"] = dict(self.metric_labels)
        return result
