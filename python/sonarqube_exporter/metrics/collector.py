"""
SonarQube collector for Prometheus.

Each scrape runs one collection cycle:
- fetch the metric catalog and keep visible numeric metric keys
- fetch all projects
- emit one info sample per project, then fetch and emit its measures

Catalog or project list failures end the cycle with no samples. A failed
measures request only drops that project's measures, and an unparsable
value only drops that measure. A metric whose name collides with an
already exported family or with the exporter's own metrics is skipped.
"""

import time
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector

from ..config.logging import get_logger
from ..sonarqube.client import SonarQubeClient
from ..sonarqube.errors import SonarQubeError
from ..sonarqube.models import Component, Measure, Metric
from .descriptors import NAMESPACE, DescriptorCache, MetricDescriptor
from .instrumentation import (
    SELF_METRICS_PREFIX,
    STAGE_MEASURES,
    STAGE_METRICS,
    STAGE_PARSE,
    STAGE_PROJECTS,
    ExporterMetrics,
)
from .values import ParseError, parse_metric_value

logger = get_logger("collector")

PROJECT_INFO = MetricDescriptor(
    name=f"{NAMESPACE}_project_info",
    documentation="Information about SonarQube projects",
    label_names=("project_key", "project_name", "qualifier", "visibility"),
)


@dataclass(frozen=True)
class Sample:
    """One exported value."""

    descriptor: MetricDescriptor
    label_values: Tuple[str, ...]
    value: float

    @property
    def labels(self) -> Dict[str, str]:
        """All labels of the sample, constant labels included."""
        labels = dict(zip(self.descriptor.label_names, self.label_values))
        labels.update(self.descriptor.const_labels)
        return labels


def numeric_metric_keys(metrics: Iterable[Metric]) -> List[str]:
    """Return the keys of visible metrics with a numeric type."""
    return [m.key for m in metrics if m.type.is_numeric and not m.hidden]


class CollectionOrchestrator:
    """
    Runs collection cycles against a SonarQube server.

    Cycles are serialized on the descriptor cache lock, so at most one
    runs at a time per cache.
    """

    def __init__(
        self,
        client: SonarQubeClient,
        descriptors: Optional[DescriptorCache] = None,
        instrumentation: Optional[ExporterMetrics] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            client: SonarQube API client
            descriptors: Descriptor cache shared across cycles
            instrumentation: Optional exporter self-metrics
        """
        self.client = client
        self.descriptors = descriptors if descriptors is not None else DescriptorCache()
        self.instrumentation = instrumentation

    def collect_samples(self) -> List[Sample]:
        """
        Run one collection cycle.

        Returns:
            Samples in emission order. Empty if the catalog or project
            list could not be fetched.
        """
        with self.descriptors.cycle():
            start = time.monotonic()
            try:
                return self._run_cycle()
            finally:
                if self.instrumentation:
                    self.instrumentation.cycle_finished(time.monotonic() - start)

    def _run_cycle(self) -> List[Sample]:
        try:
            catalog = self.client.get_metrics()
        except SonarQubeError as e:
            logger.error(f"Error fetching metrics: {e}")
            self._record_error(STAGE_METRICS)
            return []

        metrics_by_key = {m.key: m for m in catalog.metrics}
        numeric_keys = numeric_metric_keys(catalog.metrics)

        try:
            projects = self.client.get_projects()
        except SonarQubeError as e:
            logger.error(f"Error fetching projects: {e}")
            self._record_error(STAGE_PROJECTS)
            return []

        if self.instrumentation:
            self.instrumentation.projects_seen(len(projects))

        samples: List[Sample] = []
        for project in projects:
            samples.append(Sample(
                PROJECT_INFO,
                (project.key, project.name, project.qualifier, project.visibility),
                1.0,
            ))

            try:
                measures = self.client.get_project_measures(project.key, numeric_keys)
            except SonarQubeError as e:
                logger.warning(f"Error fetching measures for project {project.key}: {e}")
                self._record_error(STAGE_MEASURES)
                continue

            for measure in measures:
                sample = self._measure_sample(project, measure, metrics_by_key)
                if sample is not None:
                    samples.append(sample)

        logger.debug(
            f"Collection cycle produced {len(samples)} samples "
            f"for {len(projects)} projects"
        )
        return samples

    def _measure_sample(
        self,
        project: Component,
        measure: Measure,
        metrics_by_key: Dict[str, Metric],
    ) -> Optional[Sample]:
        metric = metrics_by_key.get(measure.metric)
        if metric is None:
            return None

        try:
            value = parse_metric_value(measure.value, metric.type)
        except ParseError as e:
            logger.warning(
                f"Error parsing value for metric {measure.metric} "
                f"of project {project.key}: {e}"
            )
            self._record_error(STAGE_PARSE)
            return None

        descriptor = self.descriptors.get_or_create(metric)
        return Sample(descriptor, (project.key, project.name), value)

    def _record_error(self, stage: str) -> None:
        if self.instrumentation:
            self.instrumentation.error(stage)


class SonarQubeCollector(Collector):
    """Custom prometheus_client collector backed by a CollectionOrchestrator."""

    def __init__(
        self,
        client: SonarQubeClient,
        descriptors: Optional[DescriptorCache] = None,
        instrumentation: Optional[ExporterMetrics] = None,
    ):
        self.orchestrator = CollectionOrchestrator(client, descriptors, instrumentation)

    def describe(self) -> List[GaugeMetricFamily]:
        # Only the static family, so registering never triggers a cycle
        return [_new_family(PROJECT_INFO)]

    def collect(self) -> Iterable[GaugeMetricFamily]:
        families: Dict[str, GaugeMetricFamily] = {}
        # A family name belongs to the first descriptor that claims it
        owners: Dict[str, MetricDescriptor] = {PROJECT_INFO.name: PROJECT_INFO}
        skipped = set()

        for sample in self.orchestrator.collect_samples():
            descriptor = sample.descriptor
            if descriptor in skipped:
                continue
            owner = owners.setdefault(descriptor.name, descriptor)
            if owner is not descriptor or descriptor.name.startswith(SELF_METRICS_PREFIX):
                logger.warning(f"Skipping metric {descriptor.name}: name already in use")
                skipped.add(descriptor)
                continue

            family = families.get(descriptor.name)
            if family is None:
                try:
                    family = _new_family(descriptor)
                except ValueError as e:
                    logger.warning(f"Skipping invalid metric {descriptor.name}: {e}")
                    skipped.add(descriptor)
                    continue
                families[descriptor.name] = family

            family.add_metric(
                list(sample.label_values) + list(descriptor.const_labels.values()),
                sample.value,
            )

        return list(families.values())


def _new_family(descriptor: MetricDescriptor) -> GaugeMetricFamily:
    return GaugeMetricFamily(
        descriptor.name,
        descriptor.documentation,
        labels=list(descriptor.all_label_names),
    )
