"""
Process-wide cache of Prometheus descriptors for SonarQube metrics.

A descriptor is created the first time a metric key is exported and is
never replaced afterwards, even if the catalog later reports a different
description or domain for that key. The cache lock also serializes whole
collection cycles (see DescriptorCache.cycle).
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, Optional, Tuple

from ..config.logging import get_logger
from ..sonarqube.models import Metric
from .values import sanitize_metric_name

logger = get_logger("descriptors")

NAMESPACE = "sonarqube"
MEASURE_LABELS: Tuple[str, ...] = ("project_key", "project_name")


@dataclass(frozen=True, eq=False)
class MetricDescriptor:
    """Exposition schema of one SonarQube metric."""

    name: str
    documentation: str
    label_names: Tuple[str, ...] = MEASURE_LABELS
    const_labels: Mapping[str, str] = field(default_factory=dict)

    @property
    def all_label_names(self) -> Tuple[str, ...]:
        """Variable labels followed by constant labels."""
        return self.label_names + tuple(self.const_labels)

    @classmethod
    def for_metric(cls, metric: Metric) -> "MetricDescriptor":
        return cls(
            name=f"{NAMESPACE}_{sanitize_metric_name(metric.key)}",
            documentation=metric.description,
            const_labels={"domain": metric.domain},
        )


class DescriptorCache:
    """Write-once mapping of metric key to MetricDescriptor."""

    def __init__(self):
        self._descriptors: Dict[str, MetricDescriptor] = {}
        self._lock = threading.RLock()

    @contextmanager
    def cycle(self) -> Iterator["DescriptorCache"]:
        """Hold the cache exclusively for a whole collection cycle."""
        with self._lock:
            yield self

    def get_or_create(self, metric: Metric) -> MetricDescriptor:
        """
        Return the descriptor for a metric, creating it on first use.

        Args:
            metric: Catalog definition used only when the key is new

        Returns:
            The same descriptor object for every call with the same key.
        """
        with self._lock:
            descriptor = self._descriptors.get(metric.key)
            if descriptor is None:
                descriptor = MetricDescriptor.for_metric(metric)
                self._descriptors[metric.key] = descriptor
                logger.debug(f"Created descriptor {descriptor.name} for metric {metric.key}")
            return descriptor

    def get(self, key: str) -> Optional[MetricDescriptor]:
        with self._lock:
            return self._descriptors.get(key)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._descriptors

    def __len__(self) -> int:
        with self._lock:
            return len(self._descriptors)
