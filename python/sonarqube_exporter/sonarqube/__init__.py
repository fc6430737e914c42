"""SonarQube Web API client module."""
from .client import SonarQubeClient
from .errors import DecodeError, SonarQubeError, UpstreamError
from .models import Component, Measure, Metric, MetricsResponse, MetricType

__all__ = [
    "SonarQubeClient",
    "SonarQubeError",
    "UpstreamError",
    "DecodeError",
    "Component",
    "Measure",
    "Metric",
    "MetricsResponse",
    "MetricType",
]
