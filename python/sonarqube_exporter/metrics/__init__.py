"""Metrics collection module."""
from .collector import (
    PROJECT_INFO,
    CollectionOrchestrator,
    Sample,
    SonarQubeCollector,
    numeric_metric_keys,
)
from .descriptors import DescriptorCache, MetricDescriptor
from .instrumentation import ExporterMetrics
from .values import ParseError, parse_metric_value, sanitize_metric_name

__all__ = [
    "PROJECT_INFO",
    "CollectionOrchestrator",
    "Sample",
    "SonarQubeCollector",
    "numeric_metric_keys",
    "DescriptorCache",
    "MetricDescriptor",
    "ExporterMetrics",
    "ParseError",
    "parse_metric_value",
    "sanitize_metric_name",
]
