"""Wiring of client, collector, registry and server."""

from typing import Optional

from prometheus_client import CollectorRegistry

from .config import ExporterConfig
from .metrics import DescriptorCache, ExporterMetrics, SonarQubeCollector
from .server import ExporterServer
from .sonarqube import SonarQubeClient


def build_registry(
    client: SonarQubeClient,
    descriptors: Optional[DescriptorCache] = None,
) -> CollectorRegistry:
    """Create a registry holding the SonarQube collector and self-metrics."""
    registry = CollectorRegistry()
    instrumentation = ExporterMetrics()
    registry.register(SonarQubeCollector(client, descriptors, instrumentation))
    instrumentation.register(registry)
    return registry


def create_server(config: ExporterConfig) -> ExporterServer:
    """Build a ready-to-start server from configuration."""
    client = SonarQubeClient(config.sonarqube_url, config.sonarqube_token)
    return ExporterServer(build_registry(client), port=config.port, host=config.host)
