"""
SonarQube Prometheus Exporter.

Translates SonarQube data into Prometheus metrics on every scrape:
- Metric catalog (numeric, visible metrics only)
- Project list (all pages)
- Per-project measures as gauges labeled by project

Usage:
    python -m sonarqube_exporter --sonarqube-url https://sonar.example.com

Environment Variables:
    SONARQUBE_URL - SonarQube server URL
    SONARQUBE_TOKEN - SonarQube authentication token
    EXPORTER_HOST - Host to bind (default: 0.0.0.0)
    EXPORTER_PORT - Port to bind (default: 9090)
"""

__version__ = "1.0.0"

from .config import ExporterConfig, get_config
from .exporter import build_registry, create_server

__all__ = [
    "ExporterConfig",
    "get_config",
    "build_registry",
    "create_server",
]
