"""
Prometheus self-metrics of the exporter.

Provides metrics for monitoring the exporter itself:
- Collection cycle duration
- Errors by pipeline stage
- Number of projects seen in the last cycle
"""

from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

# Family names starting with this prefix belong to the exporter itself
SELF_METRICS_PREFIX = "sonarqube_exporter_"

# Stages reported in sonarqube_exporter_scrape_errors_total
STAGE_METRICS = "metrics"
STAGE_PROJECTS = "projects"
STAGE_MEASURES = "measures"
STAGE_PARSE = "parse"


class ExporterMetrics:
    """
    Self-metrics of the exporter.

    Provides convenient methods for recording cycle outcomes. Metrics are
    created unregistered unless a registry is given; register them after
    the SonarQube collector so a scrape reports its own cycle.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.scrape_duration = Histogram(
            f"{SELF_METRICS_PREFIX}scrape_duration_seconds",
            "Duration of a SonarQube collection cycle in seconds",
            buckets=[0.5, 1, 2.5, 5, 10, 30, 60, 120, 300],
            registry=None,
        )
        self.scrape_errors = Counter(
            f"{SELF_METRICS_PREFIX}scrape_errors_total",
            "Errors encountered while collecting from SonarQube",
            ["stage"],  # 'metrics', 'projects', 'measures', 'parse'
            registry=None,
        )
        self.projects = Gauge(
            f"{SELF_METRICS_PREFIX}projects",
            "Number of projects seen in the last collection cycle",
            registry=None,
        )

        for stage in (STAGE_METRICS, STAGE_PROJECTS, STAGE_MEASURES, STAGE_PARSE):
            self.scrape_errors.labels(stage=stage)

        if registry is not None:
            self.register(registry)

    def register(self, registry: CollectorRegistry) -> None:
        """Register all self-metrics in a registry."""
        for metric in (self.scrape_duration, self.scrape_errors, self.projects):
            registry.register(metric)

    def cycle_finished(self, duration: float) -> None:
        """Record the duration of a collection cycle."""
        self.scrape_duration.observe(duration)

    def error(self, stage: str) -> None:
        """Record an error at a pipeline stage."""
        self.scrape_errors.labels(stage=stage).inc()

    def projects_seen(self, count: int) -> None:
        """Update the project count."""
        self.projects.set(count)
