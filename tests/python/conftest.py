"""Pytest configuration and fixtures."""

import os
import sys
import pytest
from unittest.mock import MagicMock

# Add python directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../python'))

from sonarqube_exporter.sonarqube.models import (
    Component,
    Measure,
    Metric,
    MetricsResponse,
    MetricType,
)


def pytest_configure(config):
    """Configure pytest."""
    os.environ['EXPORTER_LOG_LEVEL'] = 'WARNING'


@pytest.fixture
def make_response():
    """Build a fake requests.Response."""
    def _make(payload=None, status_code=200, text="", invalid_json=False):
        response = MagicMock()
        response.status_code = status_code
        response.text = text
        if invalid_json:
            response.json.side_effect = ValueError("Expecting value: line 1 column 1")
        else:
            response.json.return_value = payload
        return response
    return _make


@pytest.fixture
def sample_catalog():
    """Metric catalog with two numeric metrics."""
    return MetricsResponse(
        metrics=[
            Metric(key="bugs", type=MetricType.INT, description="Bugs", domain="Reliability"),
            Metric(key="coverage", type=MetricType.PERCENT, description="Coverage", domain="Coverage"),
        ],
        total=2,
        p=1,
        ps=500,
    )


@pytest.fixture
def sample_projects():
    """Two public projects."""
    return [
        Component(key="project1", name="Project 1", qualifier="TRK", visibility="public"),
        Component(key="project2", name="Project 2", qualifier="TRK", visibility="private"),
    ]


@pytest.fixture
def fake_client(sample_catalog, sample_projects):
    """SonarQube client double with per-project measures."""
    measures = {
        "project1": [Measure("bugs", "5"), Measure("coverage", "80.5")],
        "project2": [Measure("bugs", "10"), Measure("coverage", "65.0")],
    }

    client = MagicMock()
    client.get_metrics.return_value = sample_catalog
    client.get_projects.return_value = sample_projects
    client.get_project_measures.side_effect = lambda key, metric_keys: measures[key]
    return client
